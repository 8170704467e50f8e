"""Image Scrapbook - YAML values generated from local docker image metadata."""

__version__ = "0.1.0"

from .docker import list_images, parse_created_at, parse_images_output
from .exceptions import (
    ExecutionError,
    ImageNotFoundError,
    KeyConflictError,
    MalformedSpecError,
    OutputError,
    ParseError,
    ScrapbookError,
    UnknownHandlerError,
)
from .handlers import extract_field
from .models import Handler, ImageRecord, ValueSpec
from .scrapbook import build_scrapbook, dump_yaml, resolve_value, write_scrapbook
from .selection import filter_by_tag, select_latest
from .tree import ValueTree
from .values import label_filter, parse_value_spec, split_repository_tag

__all__ = [
    "build_scrapbook",
    "resolve_value",
    "dump_yaml",
    "write_scrapbook",
    "list_images",
    "parse_images_output",
    "parse_created_at",
    "filter_by_tag",
    "select_latest",
    "extract_field",
    "parse_value_spec",
    "split_repository_tag",
    "label_filter",
    "ValueTree",
    "Handler",
    "ImageRecord",
    "ValueSpec",
    "ScrapbookError",
    "MalformedSpecError",
    "ExecutionError",
    "ParseError",
    "ImageNotFoundError",
    "UnknownHandlerError",
    "KeyConflictError",
    "OutputError",
]
