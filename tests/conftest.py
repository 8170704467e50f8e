"""Test configuration and fixtures."""

import sys

import pytest

from tests.helpers import FakeLister, make_record, write_fake_docker


@pytest.fixture
def records():
    """Three images of one repository, created at increasing times."""
    return [
        make_record(tag="v1", digest="sha256:1111", created_at="2020-01-01 10:00:00 +0000 UTC"),
        make_record(tag="v2", digest="sha256:2222", created_at="2020-01-02 10:00:00 +0000 UTC"),
        make_record(tag="v1", digest="sha256:3333", created_at="2020-01-03 10:00:00 +0000 UTC"),
    ]


@pytest.fixture
def fake_lister(records):
    """Lister returning the `records` fixture."""
    return FakeLister(records)


@pytest.fixture
def fake_docker(tmp_path):
    """Factory for fake docker executables in a temporary directory."""
    if sys.platform == "win32":
        pytest.skip("fake docker scripts need a POSIX shebang")

    def factory(**kwargs):
        return write_fake_docker(tmp_path, **kwargs)

    return factory


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Keep SCRAPBOOK_* variables and stray .env files out of tests."""
    for name in ("SCRAPBOOK_DOCKER_BINARY", "SCRAPBOOK_TIMEOUT", "SCRAPBOOK_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


# Pytest configuration
def pytest_configure(config):
    """Configure pytest markers and settings."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test requiring docker"
    )
    config.addinivalue_line("markers", "unit: mark test as unit test (default)")


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless DOCKER_AVAILABLE=true."""
    from tests.helpers import docker_available

    skip_integration = pytest.mark.skip(reason="Docker not available")

    for item in items:
        if "integration" in item.keywords and not docker_available():
            item.add_marker(skip_integration)
