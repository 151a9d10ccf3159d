from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path

from img_header.compositor import load_header, output_format, transform_file
from img_header.config import RunConfig
from img_header.errors import PerFileTransformError
from img_header.matcher import PathMatcher
from img_header.paths import output_path_for, walk

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class RunStatistics:
    transformed: int = 0
    failed: int = 0
    unsupported: int = 0
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None

    def stop(self) -> None:
        self.finished = time.perf_counter()

    @property
    def elapsed(self) -> float:
        end = self.finished if self.finished is not None else time.perf_counter()
        return end - self.started

    def summary(self) -> str:
        return f"Transformed {self.transformed} images in {self.elapsed:.2f}s"


def _display_name(path: Path) -> str:
    # Undecodable bytes in file names come back from pathlib as lone surrogates.
    return os.fsencode(path.name).decode("utf-8", "backslashreplace")


def run_pipeline(*, config: RunConfig) -> RunStatistics:
    """
    Loads the header once, then walks `config.root` and writes a composited copy of every
    file whose root-relative path matches the pattern.

    Header and directory errors propagate; errors on a single image are logged and counted.
    """
    header = load_header(config.header_path)
    matcher = PathMatcher(config.pattern)
    stats = RunStatistics()

    def on_file(relative_path: str, image_path: Path) -> None:
        if not matcher.matches(relative_path):
            LOGGER.debug("Skipping %s", relative_path)
            return

        name = _display_name(image_path)
        print(f"Transforming {name}", flush=True)
        destination = output_path_for(image_path)
        try:
            written = transform_file(header=header, source=image_path, destination=destination)
        except (PerFileTransformError, OSError, ValueError) as e:
            stats.failed += 1
            LOGGER.error('Error transforming image "%s": %s', name, e)
            return

        if not written:
            stats.unsupported += 1
            LOGGER.warning(
                'Unsupported output format "%s" for "%s"; nothing written',
                output_format(destination),
                _display_name(destination),
            )
            return

        stats.transformed += 1

    try:
        walk(config.root, on_file)
    finally:
        header.close()
        stats.stop()

    LOGGER.debug(
        "Run finished: transformed=%d failed=%d unsupported=%d",
        stats.transformed,
        stats.failed,
        stats.unsupported,
    )
    return stats
