from __future__ import annotations

import re
from dataclasses import dataclass

from img_header.config import compile_pattern


@dataclass(frozen=True, slots=True)
class PathMatcher:
    pattern: re.Pattern[str]

    @classmethod
    def from_string(cls, text: str) -> PathMatcher:
        return cls(compile_pattern(text))

    def matches(self, candidate: str) -> bool:
        # Whole-string match against the root-relative path, e.g. "/sub/b.png".
        return self.pattern.fullmatch(candidate) is not None
