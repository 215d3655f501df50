# SPDX-License-Identifier: MIT
"""MSVC flag table."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gtbuild.core.flags import join_flags, replace_token
from gtbuild.tools.toolchain import BaseToolchain, ToolchainKind, register_toolchain

if TYPE_CHECKING:
    from gtbuild.configure.options import BuildOptions

logger = logging.getLogger(__name__)

# _MSC_VER of the Visual Studio releases the table is keyed on.
VS2005 = 1400
VS2008 = 1500
VS2012 = 1700


@register_toolchain
class MsvcToolchain(BaseToolchain):
    """Microsoft Visual C++.

    Warnings are raised to level 4 and treated as errors; a handful of
    warnings that are known to be spurious for the framework are disabled,
    depending on the compiler release.
    """

    kind = ToolchainKind.MSVC

    # Newlines inside flag variables break some generators, keep one line.
    BASE_FLAGS = "-GS -W4 -WX -wd4251 -wd4275 -nologo -J -Zi"
    DEFINES = "-D_UNICODE -DUNICODE -DWIN32 -D_WIN32 -DSTRICT -DWIN32_LEAN_AND_MEAN"
    EXCEPTION_FLAGS = "-EHsc -D_HAS_EXCEPTIONS=1"
    NO_EXCEPTION_FLAGS = "-EHs-c- -D_HAS_EXCEPTIONS=0"
    NO_RTTI_FLAGS = "-GR-"

    def base_flags(self) -> str:
        version = self.identity.msvc_version
        flags = [self.BASE_FLAGS]
        if version is not None and version < VS2005:
            # Forcing value to bool.
            flags.append("-wd4800")
            # Copy constructor and assignment operator could not be generated.
            flags.append("-wd4511 -wd4512")
            # Resolved overload was found by argument-dependent lookup.
            flags.append("-wd4675")
        if version is not None and version < VS2008:
            # Conditional expression is constant; fires on std::list.
            flags.append("-wd4127")
        if version is None or version >= VS2012:
            # Unreachable code.
            flags.append("-wd4702")
        flags.append(self.DEFINES)
        return join_flags(*flags)

    def adjust_default_flags(
        self, default_flags: dict[str, str], options: BuildOptions
    ) -> dict[str, str]:
        """Use the static CRT for static builds and /W4 instead of /W3.

        A shared library build must also use the shared runtime, otherwise
        runtime data ends up duplicated across modules.
        """
        static_crt = not options.build_shared_libs and not options.force_shared_crt
        adjusted: dict[str, str] = {}
        for name, flags in default_flags.items():
            if static_crt:
                flags = replace_token(flags, "/MD", "-MT")
            adjusted[name] = replace_token(flags, "/W3", "/W4")
        if static_crt:
            logger.debug("Using the static C runtime")
        return adjusted

    def executable_flags(self) -> str:
        version = self.identity.msvc_version
        if version is None or version >= VS2012:
            # Test binaries exceed the default object section limit.
            return "-bigobj"
        return ""
