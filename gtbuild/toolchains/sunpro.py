# SPDX-License-Identifier: MIT
"""Oracle Developer Studio (Sun Pro) flag table."""

from __future__ import annotations

from gtbuild.tools.toolchain import BaseToolchain, ToolchainKind, register_toolchain


@register_toolchain
class SunProToolchain(BaseToolchain):
    """Sun Pro C++.

    The compiler has no macros telling whether exceptions and RTTI are
    enabled, so the GTEST_HAS_* macros are defined explicitly.
    """

    kind = ToolchainKind.SUNPRO

    EXCEPTION_FLAGS = "-features=except"
    NO_EXCEPTION_FLAGS = "-features=no%except -DGTEST_HAS_EXCEPTIONS=0"
    NO_RTTI_FLAGS = "-features=no%rtti -DGTEST_HAS_RTTI=0"
