"""Async scrapbook generation: resolve image values and render YAML."""

import logging
from functools import partial
from pathlib import Path
from typing import Awaitable, Callable, Iterable, Optional, Sequence, TextIO

import aiofiles
import yaml

from .config import ScrapbookSettings
from .docker import list_images
from .exceptions import MalformedSpecError, OutputError, ScrapbookError
from .handlers import FieldValue, extract_field
from .models import ImageRecord, ValueSpec
from .selection import filter_by_tag, select_latest
from .tree import ValueTree
from .values import label_filter, parse_value_spec

logger = logging.getLogger(__name__)

Lister = Callable[[str, Sequence[str]], Awaitable[list[ImageRecord]]]


async def resolve_value(
    spec: ValueSpec, filters: Sequence[str], lister: Lister
) -> FieldValue:
    """Resolve one value spec to the selected image field.

    Args:
        spec: Parsed value spec
        filters: Native label filters passed to the lister
        lister: Coroutine function returning the images of a repository

    Returns:
        Field of the most recent image matching the spec

    Raises:
        ExecutionError: If listing images fails
        ParseError: If lister output is malformed
        ImageNotFoundError: If no image matches
    """
    records = await lister(spec.repository, filters)
    candidates = filter_by_tag(spec.tag, records)

    try:
        record = select_latest(candidates)
    except ScrapbookError as e:
        raise type(e)(f"{e}: {spec.reference}") from e

    return extract_field(record, spec.handler)


async def build_scrapbook(
    values: Iterable[str],
    labels: Iterable[str] = (),
    *,
    lister: Optional[Lister] = None,
    settings: Optional[ScrapbookSettings] = None,
) -> ValueTree:
    """로컬 이미지 정보로 scrapbook 트리를 생성합니다.

    모든 값을 먼저 파싱한 뒤 입력 순서대로 하나씩 해석합니다.
    첫 번째 오류에서 즉시 중단되며 부분 결과는 반환하지 않습니다.

    Args:
        values: `key=repository[:tag][=handler]` 표현식 목록
            - 예: ["image.tag=docker.io/example:12345"]
            - 핸들러 지정: ["image.ref=docker.io/example:12345=full"]
        labels: 이미지 라벨 필터 (예: ["build=12345"])
        lister: 이미지 목록 조회 함수 (기본값: docker CLI)
        settings: docker 실행 파일 및 타임아웃 설정

    Returns:
        ValueTree: 모든 값이 삽입된 트리

    Raises:
        ScrapbookError: 파싱, 실행, 해석 실패 시

    Examples:
        tree = await build_scrapbook(["image.tag=docker.io/example:12345"])
        print(dump_yaml(tree))
        # image:
        #   tag: sha256:...
    """
    specs = [parse_value_spec(value) for value in values]
    if not specs:
        raise MalformedSpecError("No values to resolve")
    filters = [label_filter(label) for label in labels]

    if lister is None:
        settings = settings or ScrapbookSettings()
        lister = partial(
            list_images, docker=settings.docker_binary, timeout=settings.timeout
        )

    tree = ValueTree()
    for index, spec in enumerate(specs):
        try:
            value = await resolve_value(spec, filters, lister)
        except ScrapbookError as e:
            raise type(e)(f"Error while building value {index} ({spec.key}): {e}") from e

        logger.info("%s = %s", spec.key, value)
        tree.insert(spec.key, value)

    return tree


def dump_yaml(tree: ValueTree, stream: Optional[TextIO] = None) -> Optional[str]:
    """Serialize the tree as a YAML document.

    Writes to `stream` when given, otherwise returns the document.
    """
    return yaml.safe_dump(
        tree.to_dict(), stream, default_flow_style=False, sort_keys=False
    )


async def write_scrapbook(tree: ValueTree, path: Path) -> None:
    """Write the tree as YAML to `path`, creating missing parent directories.

    Raises:
        OutputError: If the parent is not a directory or the file cannot be written
    """
    path = Path(path)
    directory = path.parent

    if directory.exists() and not directory.is_dir():
        raise OutputError(f"{directory} exists but is not a directory")

    try:
        if not directory.exists():
            logger.info("Directory %s does not exist. It will be created", directory)
            directory.mkdir(parents=True, exist_ok=True)

        async with aiofiles.open(path, "w", encoding="utf-8") as f:
            await f.write(dump_yaml(tree))
    except OSError as e:
        raise OutputError(f"Error writing scrapbook to {path}: {e}") from e

    logger.info("Scrapbook written to %s", path)
