# SPDX-License-Identifier: MIT
"""GCC flag table."""

from __future__ import annotations

from gtbuild.core.flags import join_flags
from gtbuild.tools.toolchain import (
    BaseToolchain,
    ToolchainKind,
    register_toolchain,
    version_less,
)


@register_toolchain
class GccToolchain(BaseToolchain):
    """GNU g++.

    Until 4.3.2 GCC defines no macro telling whether RTTI is enabled, so
    the no-RTTI variant defines GTEST_HAS_RTTI explicitly.
    """

    kind = ToolchainKind.GCC

    BASE_FLAGS = "-Wall -Wshadow -Werror"
    EXCEPTION_FLAGS = "-fexceptions"
    NO_EXCEPTION_FLAGS = "-fno-exceptions"
    NO_RTTI_FLAGS = "-fno-rtti -DGTEST_HAS_RTTI=0"
    STRICT_FLAGS = "-Wextra -Wno-unused-parameter -Wno-missing-field-initializers"

    def base_flags(self) -> str:
        version = self.identity.version
        if version is not None and not version_less(version, (7, 0, 0)):
            return join_flags(self.BASE_FLAGS, "-Wno-error=dangling-else")
        return self.BASE_FLAGS
