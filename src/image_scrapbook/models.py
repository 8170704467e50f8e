"""Data models for local image metadata and value specs."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .exceptions import UnknownHandlerError


class Handler(str, Enum):
    """Image field selected as the value written to the scrapbook."""

    ID = "id"
    REPOSITORY = "repository"
    TAG = "tag"
    DIGEST = "digest"
    CREATED_SINCE = "createdsince"
    CREATED_AT = "createdat"
    SIZE = "size"
    FULL = "full"

    @classmethod
    def parse(cls, name: str) -> "Handler":
        """Look up a handler by name, ignoring case.

        Args:
            name: Handler name (e.g., "digest", "Tag", "FULL")

        Returns:
            Matching handler

        Raises:
            UnknownHandlerError: If no handler has that name
        """
        try:
            return cls(name.strip().casefold())
        except ValueError as e:
            choices = ", ".join(h.value for h in cls)
            raise UnknownHandlerError(
                f"Unknown handler {name!r} (expected one of: {choices})"
            ) from e


DEFAULT_HANDLER = Handler.DIGEST


@dataclass(frozen=True)
class ImageRecord:
    """One row of `docker images` output."""

    id: str
    repository: str
    tag: str
    digest: str
    created_since: str  # Human readable, e.g. "2 hours ago"
    created_at: datetime
    size: str  # Human readable, e.g. "5.6MB"


@dataclass(frozen=True)
class ValueSpec:
    """A request to place one image field at a dotted key."""

    key: str
    repository: str
    tag: str = ""
    handler: Handler = DEFAULT_HANDLER

    @property
    def reference(self) -> str:
        """Image reference as it would be written on the command line."""
        if self.tag:
            return f"{self.repository}:{self.tag}"
        return self.repository
