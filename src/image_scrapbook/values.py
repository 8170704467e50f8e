"""Parsing of `--value` and `--label` command line expressions."""

from .exceptions import MalformedSpecError
from .models import DEFAULT_HANDLER, Handler, ValueSpec
from .tree import split_key


def split_repository_tag(reference: str) -> tuple[str, str]:
    """Split an image reference into repository and tag components.

    Args:
        reference: Image reference
            - e.g., "nginx:alpine", "docker.io/example:12345"
            - registry with port: "localhost:5000/myapp:latest"

    Returns:
        tuple[str, str]: (repository, tag) tuple; tag is "" when absent

    Examples:
        split_repository_tag("docker.io/example:12345")
        # ("docker.io/example", "12345")

        split_repository_tag("localhost:5000/myapp")
        # ("localhost:5000/myapp", "")
    """
    repository, sep, tag = reference.rpartition(":")
    # Split only on the last ':' and never inside a registry host:port
    if not sep or "/" in tag:
        return reference, ""
    return repository, tag


def parse_value_spec(spec: str) -> ValueSpec:
    """Parse a `key=repository[:tag][=handler]` expression.

    Args:
        spec: Value expression (e.g., "image.tag=docker.io/example:12345",
            "image.full=myapp:v1=full")

    Returns:
        ValueSpec: Parsed request; handler defaults to digest

    Raises:
        MalformedSpecError: If key or repository is missing, or the key
            has empty dotted segments
        UnknownHandlerError: If the handler name is not recognised
    """
    if not spec:
        raise MalformedSpecError(f"Missing key in value {spec!r}")

    parts = spec.split("=")
    if len(parts) == 1:
        raise MalformedSpecError(f"Missing repository in value {spec!r}")
    if len(parts) > 3:
        raise MalformedSpecError(
            f"Too many '=' in value {spec!r} (expected key=repository[:tag][=handler])"
        )

    key = parts[0].strip()
    if not key:
        raise MalformedSpecError(f"Missing key in value {spec!r}")
    split_key(key)

    repository, tag = split_repository_tag(parts[1].strip())
    if not repository:
        raise MalformedSpecError(f"Missing repository in value {spec!r}")

    handler = Handler.parse(parts[2]) if len(parts) == 3 else DEFAULT_HANDLER

    return ValueSpec(key=key, repository=repository, tag=tag, handler=handler)


def label_filter(label: str) -> str:
    """Turn a `key=value` label into a docker `--filter` expression.

    Args:
        label: Label selector (e.g., "build=12345" or just "build")

    Returns:
        str: Filter expression (e.g., "label=build=12345")

    Raises:
        MalformedSpecError: If the label has no key
    """
    name = label.split("=", 1)[0]
    if not name.strip():
        raise MalformedSpecError(f"Missing key in label {label!r}")
    return f"label={label}"
