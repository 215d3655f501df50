# SPDX-License-Identifier: MIT
"""Flag string utilities for gtbuild.

A flag string is an ordered, space separated sequence of compiler or
linker tokens. Order matters: for several compilers a later flag
overrides an earlier one, so these helpers never reorder tokens.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


def split_flags(flags: str | None) -> list[str]:
    """Split a flag string into tokens.

    Examples:
        >>> split_flags("-Wall  -Werror")
        ['-Wall', '-Werror']
        >>> split_flags(None)
        []
    """
    if not flags:
        return []
    return flags.split()


def join_flags(*parts: str | Iterable[str] | None) -> str:
    """Join flag strings (or token lists) into one flag string.

    Empty parts are skipped, so joining never produces doubled or
    trailing spaces.

    Examples:
        >>> join_flags("-Wall", "", None, ["-fexceptions"])
        '-Wall -fexceptions'
    """
    tokens: list[str] = []
    for part in parts:
        if not part:
            continue
        if isinstance(part, str):
            tokens.extend(split_flags(part))
        else:
            for item in part:
                tokens.extend(split_flags(item))
    return " ".join(tokens)


def append_flags(flags: str, *extra: str | None) -> str:
    """Return ``flags`` with ``extra`` appended at the end."""
    return join_flags(flags, *extra)


def replace_token(flags: str, old: str, new: str) -> str:
    """Replace every occurrence of ``old`` with ``new`` in a flag string.

    This is a plain substring replacement, the way build tools rewrite
    their default flag variables (``/MD`` also matches ``/MDd``).

    Examples:
        >>> replace_token("/MDd /W3", "/MD", "-MT")
        '-MTd /W3'
    """
    if not flags or old not in flags:
        return flags
    return flags.replace(old, new)

