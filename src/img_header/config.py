from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from img_header.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class RunConfig:
    pattern: re.Pattern[str]
    header_path: Path
    root: Path = Path(".")


def compile_pattern(text: str) -> re.Pattern[str]:
    try:
        return re.compile(text)
    except re.error as e:
        raise ConfigurationError(f'Invalid regex pattern "{text}": {e}') from e


def _require_path(value: str, name: str) -> Path:
    if not value.strip():
        raise ConfigurationError(f"{name} must be a non-empty path")
    return Path(value)


def build_config(*, pattern: str, header: str, root: Path = Path(".")) -> RunConfig:
    """
    Builds the run configuration from the two command-line values.

    The pattern is compiled here so a malformed regex fails before any file is touched.
    """
    return RunConfig(
        pattern=compile_pattern(pattern),
        header_path=_require_path(header, "header image path"),
        root=root,
    )
