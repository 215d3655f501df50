# SPDX-License-Identifier: MIT
"""HP aCC flag table."""

from __future__ import annotations

from gtbuild.tools.toolchain import BaseToolchain, ToolchainKind, register_toolchain


@register_toolchain
class HpAccToolchain(BaseToolchain):
    """HP aC++. RTTI cannot be disabled with this compiler."""

    kind = ToolchainKind.HP

    BASE_FLAGS = "-AA -mt"
    EXCEPTION_FLAGS = "-DGTEST_HAS_EXCEPTIONS=1"
    NO_EXCEPTION_FLAGS = "+noeh -DGTEST_HAS_EXCEPTIONS=0"
    NO_RTTI_FLAGS = ""
