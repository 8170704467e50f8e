"""Simple demonstration of scrapbook generation without a docker daemon."""

import asyncio
import logging
import sys
from datetime import datetime, timezone

# Add parent directory to path
sys.path.insert(0, "src")

from image_scrapbook import ImageRecord, ScrapbookError, build_scrapbook, dump_yaml

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def demo_images():
    """Two builds of the same repository, the second one newer."""
    return [
        ImageRecord(
            id="1a2b3c4d5e6f",
            repository="docker.io/example",
            tag="12345",
            digest="sha256:" + "a" * 64,
            created_since="2 days ago",
            created_at=datetime(2020, 3, 10, 8, 0, tzinfo=timezone.utc),
            size="5.4MB",
        ),
        ImageRecord(
            id="6f5e4d3c2b1a",
            repository="docker.io/example",
            tag="12346",
            digest="sha256:" + "b" * 64,
            created_since="2 hours ago",
            created_at=datetime(2020, 3, 12, 6, 0, tzinfo=timezone.utc),
            size="5.6MB",
        ),
    ]


async def demo_lister(repository, filters):
    logger.info(f"Listing {repository} with filters {filters}")
    return [image for image in demo_images() if image.repository == repository]


async def main():
    """Demonstrate building a values.yaml from image metadata."""
    try:
        tree = await build_scrapbook(
            [
                "image.digest=docker.io/example:12345",
                "image.latest=docker.io/example=tag",
                "image.ref=docker.io/example=full",
            ],
            ["build=12346"],
            lister=demo_lister,
        )
        print(dump_yaml(tree))

    except ScrapbookError as e:
        logger.error(f"Demo failed: {e}")


if __name__ == "__main__":
    asyncio.run(main())
