"""Local image listing through the docker CLI."""

import asyncio
import csv
import io
import logging
import re
from datetime import datetime
from typing import Iterable, Optional

from .exceptions import ExecutionError, ParseError
from .models import ImageRecord

logger = logging.getLogger(__name__)

FIELDS = (
    "ID",
    "Repository",
    "Tag",
    "Digest",
    "CreatedSince",
    "CreatedAt",
    "Size",
)
FORMAT_TEMPLATE = ",".join(f"{{{{ .{field} }}}}" for field in FIELDS)

# e.g. "2020-03-12 10:14:07 -0700 PDT"
CREATED_AT_PATTERN = re.compile(
    r"^(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}) ([+-]\d{4}) (\S+)$"
)


def parse_created_at(value: str) -> datetime:
    """Parse the CreatedAt column of `docker images`.

    Args:
        value: Timestamp in "YYYY-MM-DD HH:MM:SS ±ZZZZ ZONE" form

    Returns:
        Timezone-aware datetime

    Raises:
        ParseError: If the value does not have the expected shape
    """
    match = CREATED_AT_PATTERN.match(value.strip())
    if not match:
        raise ParseError(f"Invalid CreatedAt timestamp: {value!r}")

    timestamp, offset, _zone = match.groups()
    try:
        return datetime.strptime(f"{timestamp} {offset}", "%Y-%m-%d %H:%M:%S %z")
    except ValueError as e:
        raise ParseError(f"Invalid CreatedAt timestamp: {value!r}: {e}") from e


def parse_images_output(output: str) -> list[ImageRecord]:
    """Parse CSV rows produced with FORMAT_TEMPLATE into image records.

    Args:
        output: Raw stdout of `docker images --format ...`

    Returns:
        Image records in output order (may be empty)

    Raises:
        ParseError: If a row has the wrong number of fields or a bad timestamp
    """
    try:
        rows = list(csv.reader(io.StringIO(output)))
    except csv.Error as e:
        raise ParseError(f"Cannot read docker images output: {e}") from e

    records = []
    for line_no, row in enumerate(rows, start=1):
        if not row:
            continue

        if len(row) != len(FIELDS):
            raise ParseError(
                f"Expected {len(FIELDS)} fields on line {line_no}, got {len(row)}: {row!r}"
            )

        records.append(
            ImageRecord(
                id=row[0],
                repository=row[1],
                tag=row[2],
                digest=row[3],
                created_since=row[4],
                created_at=parse_created_at(row[5]),
                size=row[6],
            )
        )

    return records


def build_images_command(
    repository: str, filters: Iterable[str] = (), docker: str = "docker"
) -> list[str]:
    """Build the argv for listing images of one repository.

    The tag is deliberately not part of the command: combining a tag
    reference with --digests makes docker report "<none>" digests
    (moby/moby#29901), so tags are filtered after listing.
    """
    command = [docker, "images", repository, "--format", FORMAT_TEMPLATE, "--digests"]
    for image_filter in filters:
        command.extend(["--filter", image_filter])
    return command


async def _kill(process: asyncio.subprocess.Process) -> None:
    if process.returncode is None:
        process.kill()
        await process.wait()


async def _run(command: list[str], timeout: Optional[float] = None) -> str:
    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise ExecutionError(f"Cannot run {command[0]!r}: {e}") from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError as e:
        await _kill(process)
        raise ExecutionError(
            f"{' '.join(command[:3])} timed out after {timeout}s"
        ) from e
    except asyncio.CancelledError as e:
        await _kill(process)
        raise ExecutionError(f"{' '.join(command[:3])} was cancelled") from e

    if process.returncode != 0:
        message = stderr.decode("utf-8", errors="replace").strip()
        raise ExecutionError(
            f"{' '.join(command[:3])} exited with status {process.returncode}: {message}"
        )

    try:
        return stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(f"Cannot decode docker images output: {e}") from e


async def list_images(
    repository: str,
    filters: Iterable[str] = (),
    *,
    docker: str = "docker",
    timeout: Optional[float] = None,
) -> list[ImageRecord]:
    """List local images of a repository with their digests.

    Args:
        repository: Repository name (e.g., "docker.io/example")
        filters: Native docker filters (e.g., ["label=build=12345"])
        docker: docker executable name or path
        timeout: Seconds to wait for docker before giving up (None: no limit)

    Returns:
        All matching image records, unfiltered by tag

    Raises:
        ExecutionError: If docker cannot start, fails, times out or is cancelled
        ParseError: If docker output is malformed
    """
    command = build_images_command(repository, filters, docker)
    logger.debug("Executing command: %s", command)

    output = await _run(command, timeout)

    records = parse_images_output(output)
    logger.debug("Found %d image(s) for %s", len(records), repository)
    return records
