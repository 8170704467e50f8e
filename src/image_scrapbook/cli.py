"""Command line interface for generating scrapbooks."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from .config import ScrapbookSettings
from .exceptions import ScrapbookError
from .scrapbook import build_scrapbook, dump_yaml, write_scrapbook

logger = logging.getLogger(__name__)

SCRAPBOOK_HELP = """Generate values.yaml files from local docker images.

The following example generates a values.yaml file that maps
image.tag to the digest value of the most recently built image
named docker.io/example-image:12345

    image-scrapbook scrapbook --value image.tag=docker.io/example-image:12345
"""

app = typer.Typer(
    no_args_is_help=True,
    help="Build tools for CI pipelines working with local docker images.",
)


@app.callback()
def main() -> None:
    """Build tools for CI pipelines working with local docker images."""


@app.command(help=SCRAPBOOK_HELP)
def scrapbook(
    value: List[str] = typer.Option(
        ...,
        "--value",
        "-v",
        help="A value to include in the scrapbook. Example: yaml.key=docker/repository:tag",
    ),
    label: List[str] = typer.Option(
        [],
        "--label",
        "-l",
        help="Label used to filter images by. Example: build=12345",
    ),
    out: Optional[Path] = typer.Option(
        None, "--out", "-o", help="Output file (default STDOUT)."
    ),
    docker: Optional[str] = typer.Option(
        None, "--docker", help="docker executable [env: SCRAPBOOK_DOCKER_BINARY]"
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Seconds allowed per image listing (must be > 0)."
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Diagnostics level written to stderr (debug, info, warning, error, critical).",
    ),
) -> None:
    overrides = {
        "docker_binary": docker,
        "timeout": timeout,
        "log_level": log_level,
    }
    try:
        settings = ScrapbookSettings(
            **{name: option for name, option in overrides.items() if option is not None}
        )
    except ValidationError as e:
        typer.echo(f"Error: invalid settings: {e}", err=True)
        raise typer.Exit(code=1) from e

    logging.basicConfig(
        level=settings.log_level.value,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        asyncio.run(_generate(value, label, out, settings))
    except ScrapbookError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e


async def _generate(
    values: List[str],
    labels: List[str],
    out: Optional[Path],
    settings: ScrapbookSettings,
) -> None:
    tree = await build_scrapbook(values, labels, settings=settings)

    if out is None:
        dump_yaml(tree, sys.stdout)
    else:
        logger.info("Output is being directed to %s", out)
        await write_scrapbook(tree, out)


def run() -> None:
    app()
