"""Test helper functions for building image records and fake docker CLIs."""

import os
import stat
import sys
from datetime import datetime
from pathlib import Path
from typing import Union

from image_scrapbook.docker import parse_created_at
from image_scrapbook.models import ImageRecord


def make_record(
    tag: str = "latest",
    digest: str = "sha256:abcd",
    created_at: str = "2020-03-12 10:14:07 -0700 PDT",
    repository: str = "docker.io/example",
    image_id: str = "0123456789ab",
) -> ImageRecord:
    """Create an image record with sensible defaults."""
    return ImageRecord(
        id=image_id,
        repository=repository,
        tag=tag,
        digest=digest,
        created_since="2 hours ago",
        created_at=parse_created_at(created_at),
        size="5.6MB",
    )


def csv_row(record: ImageRecord) -> str:
    """Render a record the way `docker images --format` would."""
    created_at = datetime.strftime(record.created_at, "%Y-%m-%d %H:%M:%S %z UTC")
    return ",".join(
        [
            record.id,
            record.repository,
            record.tag,
            record.digest,
            record.created_since,
            created_at,
            record.size,
        ]
    )


class FakeLister:
    """Async stand-in for list_images that records its calls."""

    def __init__(self, records: list[ImageRecord]):
        self.records = records
        self.calls: list[tuple[str, list[str]]] = []

    async def __call__(self, repository, filters):
        self.calls.append((repository, list(filters)))
        return list(self.records)


def write_fake_docker(
    directory: Path,
    stdout: Union[str, bytes] = "",
    exit_code: int = 0,
    stderr: str = "",
    sleep: float = 0,
) -> Path:
    """Write an executable that mimics `docker images`.

    The script records its arguments (one per line) in `args.txt` next to it.
    Bytes given as `stdout` are written unchanged.
    """
    out = "sys.stdout.buffer" if isinstance(stdout, bytes) else "sys.stdout"
    script = directory / "docker"
    args_file = directory / "args.txt"
    script.write_text(
        f"#!{sys.executable}\n"
        "import sys, time\n"
        f"open({str(args_file)!r}, 'w').write('\\n'.join(sys.argv[1:]))\n"
        f"time.sleep({sleep!r})\n"
        f"{out}.write({stdout!r})\n"
        f"sys.stderr.write({stderr!r})\n"
        f"sys.exit({exit_code!r})\n"
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


def read_fake_docker_args(script: Path) -> list[str]:
    """Arguments the fake docker was last called with."""
    return (script.parent / "args.txt").read_text().split("\n")


def docker_available() -> bool:
    """Check whether integration tests against a real docker may run."""
    return os.getenv("DOCKER_AVAILABLE", "false").lower() == "true"
