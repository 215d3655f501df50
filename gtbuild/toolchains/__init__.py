# SPDX-License-Identifier: MIT
"""Per-vendor flag tables (MSVC, GCC, SunPro, XL/VisualAge, HP aCC).

Importing this package registers every vendor with the toolchain registry.
"""

from gtbuild.toolchains.gcc import GccToolchain
from gtbuild.toolchains.hp import HpAccToolchain
from gtbuild.toolchains.msvc import MsvcToolchain
from gtbuild.toolchains.sunpro import SunProToolchain
from gtbuild.toolchains.xl import XlToolchain

__all__ = [
    "GccToolchain",
    "HpAccToolchain",
    "MsvcToolchain",
    "SunProToolchain",
    "XlToolchain",
]
