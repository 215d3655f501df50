# SPDX-License-Identifier: MIT
"""IBM XL / VisualAge flag table."""

from __future__ import annotations

from gtbuild.tools.toolchain import BaseToolchain, ToolchainKind, register_toolchain


@register_toolchain
class XlToolchain(BaseToolchain):
    """IBM XL C++, formerly VisualAge.

    Before 9.0 the compiler defines no RTTI macro.
    """

    kind = ToolchainKind.XL

    EXCEPTION_FLAGS = "-qeh"
    NO_EXCEPTION_FLAGS = "-qnoeh"
    NO_RTTI_FLAGS = "-qnortti -DGTEST_HAS_RTTI=0"
