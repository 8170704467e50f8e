"""Narrowing image candidates down to a single record."""

import logging
from typing import Sequence

from .exceptions import ImageNotFoundError
from .models import ImageRecord

logger = logging.getLogger(__name__)


def filter_by_tag(tag: str, records: list[ImageRecord]) -> list[ImageRecord]:
    """Keep only records whose tag equals `tag` exactly.

    An empty tag means no filtering and returns `records` itself.
    """
    if not tag:
        return records

    result = [record for record in records if record.tag == tag]
    logger.debug("%d of %d image(s) tagged %r", len(result), len(records), tag)
    return result


def select_latest(records: Sequence[ImageRecord]) -> ImageRecord:
    """Pick the most recently created record.

    Args:
        records: Candidate records

    Returns:
        The only record, or the one with the latest created_at; the first
        of several records sharing that timestamp wins

    Raises:
        ImageNotFoundError: If there are no candidates
    """
    if not records:
        raise ImageNotFoundError("Image not found")

    if len(records) == 1:
        return records[0]

    result = records[0]
    for record in records[1:]:
        if result.created_at < record.created_at:
            result = record
    return result
