# Shell-glob name matching for fileenum.
# Patterns are applied to a single path component, so only `*` and `?`
# are special. Brackets and separators always match literally.
#
# This module is pure logic and must remain side-effect free.

from __future__ import annotations

import os
import re
from typing import Optional


def translate(pattern: str) -> str:
    # Convert a glob into an anchored-by-fullmatch regular expression.
    parts = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "*":
            # A run of stars is the same as one star.
            while i + 1 < len(pattern) and pattern[i + 1] == "*":
                i += 1
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
        i += 1
    return "".join(parts)


def default_case_sensitive() -> bool:
    # Windows name matching is case-insensitive; everything else is not.
    return os.name != "nt"


def compile_pattern(
    pattern: Optional[str], case_sensitive: Optional[bool] = None
) -> Optional[re.Pattern[str]]:
    # None stands for the match-all pattern.
    if not pattern:
        return None
    if case_sensitive is None:
        case_sensitive = default_case_sensitive()
    flags = re.DOTALL
    if not case_sensitive:
        flags |= re.IGNORECASE
    return re.compile(translate(pattern), flags)


def matches(name: str, pattern: Optional[str], case_sensitive: Optional[bool] = None) -> bool:
    # An empty or missing pattern matches every name.
    compiled = compile_pattern(pattern, case_sensitive)
    return compiled is None or compiled.fullmatch(name) is not None
