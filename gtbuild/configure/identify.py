# SPDX-License-Identifier: MIT
"""Compiler identification from version banners.

Each compiler prints a recognizable banner when asked for its version
(``g++ --version``, ``cl`` with no arguments, ``CC -V``, ``xlC -qversion``,
``aCC -V``). The patterns below map such a banner to a ToolchainIdentity.
"""

from __future__ import annotations

import re

from gtbuild.tools.toolchain import ToolchainIdentity, ToolchainKind, parse_version

# Order matters: clang pretends to be GCC in some banners.
_BANNER_PATTERNS: list[tuple[ToolchainKind | None, re.Pattern[str]]] = [
    (None, re.compile(r"clang version (\d+(?:\.\d+)*)", re.IGNORECASE)),
    (
        ToolchainKind.MSVC,
        re.compile(
            r"Microsoft \(R\) C/C\+\+ Optimizing Compiler Version (\d+(?:\.\d+)*)"
        ),
    ),
    (ToolchainKind.SUNPRO, re.compile(r"Sun C\+\+ (\d+(?:\.\d+)*)")),
    (
        ToolchainKind.XL,
        re.compile(r"IBM XL C/C\+\+.*?Version:?\s*V?(\d+(?:\.\d+)*)", re.DOTALL),
    ),
    (
        ToolchainKind.XL,
        re.compile(r"VisualAge C\+\+.*?Version:?\s*V?(\d+(?:\.\d+)*)", re.DOTALL),
    ),
    (ToolchainKind.HP, re.compile(r"HP (?:ANSI )?C(?:/aC)?\+\+.*?A\.(\d+(?:\.\d+)*)")),
    (
        ToolchainKind.GCC,
        re.compile(
            r"^\S*(?:g\+\+|c\+\+|gcc)\S* \(.*?\) (\d+(?:\.\d+)*)", re.MULTILINE
        ),
    ),
    (ToolchainKind.GCC, re.compile(r"Free Software Foundation")),
]


def identify_compiler(banner: str | None) -> ToolchainIdentity:
    """Identify a compiler from its version banner.

    Examples:
        >>> identify_compiler("g++ (Ubuntu 9.4.0-1ubuntu1) 9.4.0")
        ToolchainIdentity(kind=<ToolchainKind.GCC: 'gcc'>, version=(9, 4, 0))
        >>> identify_compiler("something else").kind
        <ToolchainKind.OTHER: 'other'>

    Returns:
        The identity; OTHER when nothing matched.
    """
    if not banner:
        return ToolchainIdentity(ToolchainKind.OTHER)
    for kind, pattern in _BANNER_PATTERNS:
        match = pattern.search(banner)
        if match is None:
            continue
        if kind is None:
            return ToolchainIdentity(ToolchainKind.OTHER, parse_version(match.group(1)))
        version = parse_version(match.group(1)) if match.groups() else None
        return ToolchainIdentity(kind, version)
    return ToolchainIdentity(ToolchainKind.OTHER)
