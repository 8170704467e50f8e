"""Mapping of handler names to image record fields."""

from datetime import datetime
from typing import Callable, Union

from .models import Handler, ImageRecord

FieldValue = Union[str, datetime]

FIELD_GETTERS: dict[Handler, Callable[[ImageRecord], FieldValue]] = {
    Handler.ID: lambda record: record.id,
    Handler.REPOSITORY: lambda record: record.repository,
    Handler.TAG: lambda record: record.tag,
    Handler.DIGEST: lambda record: record.digest,
    Handler.CREATED_SINCE: lambda record: record.created_since,
    Handler.CREATED_AT: lambda record: record.created_at,
    Handler.SIZE: lambda record: record.size,
    Handler.FULL: lambda record: f"{record.repository}@{record.digest}",
}


def extract_field(record: ImageRecord, handler: Union[Handler, str]) -> FieldValue:
    """Return the field of `record` selected by `handler`.

    Args:
        record: Selected image record
        handler: Handler or handler name (case-insensitive)

    Returns:
        The field value; a datetime for createdat, "repository@digest" for full

    Raises:
        UnknownHandlerError: If the handler name is not recognised
    """
    if not isinstance(handler, Handler):
        handler = Handler.parse(handler)
    return FIELD_GETTERS[handler](record)
