from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from img_header.errors import FilesystemEnumerationError

LOGGER = logging.getLogger(__name__)

OUTPUT_PREFIX = "output_"

FileCallback = Callable[[str, Path], None]


def _list_dir(directory: Path) -> list[Path]:
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise FilesystemEnumerationError(f"cannot list directory {directory}: {e}") from e
    entries.sort(key=lambda p: p.name)
    return entries


def walk(root: Path, on_file: FileCallback, *, prefix: str = "") -> None:
    """
    Depth-first walk of `root`, calling `on_file(relative_path, path)` for every non-directory.

    `relative_path` is `/`-joined and starts with `/` for entries directly under the root.
    Each directory is listed before its entries are handed out, so files the callback writes
    into that directory are not seen in the same pass. Symlinked directories are followed and
    cycles are not detected.
    """
    if not root.is_dir():
        raise FilesystemEnumerationError(f"not a directory: {root}")

    for entry in _list_dir(root):
        next_path = f"{prefix}/{entry.name}"
        if entry.is_dir():
            walk(entry, on_file, prefix=next_path)
        else:
            LOGGER.debug("Visiting %s", next_path)
            on_file(next_path, entry)


def output_path_for(image_path: Path) -> Path:
    return image_path.with_name(OUTPUT_PREFIX + image_path.name)
