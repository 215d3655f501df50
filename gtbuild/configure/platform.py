# SPDX-License-Identifier: MIT
"""Host platform detection."""

from __future__ import annotations

import os
import platform as _platform
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


@dataclass(frozen=True)
class Platform:
    """Facts about the host the configure phase runs on.

    Attributes:
        os: Normalized OS name ('linux', 'darwin', 'windows', ...).
        arch: Machine architecture.
        is_mingw: True for MinGW/MSYS hosts.
    """

    os: str
    arch: str
    is_mingw: bool = False

    @property
    def is_windows(self) -> bool:
        return self.os == "windows"

    @property
    def is_macos(self) -> bool:
        return self.os == "darwin"

    @property
    def static_lib_suffix(self) -> str:
        return ".lib" if self.is_windows and not self.is_mingw else ".a"

    @property
    def shared_lib_suffix(self) -> str:
        if self.is_windows:
            return ".dll"
        if self.is_macos:
            return ".dylib"
        return ".so"

    def include_dirs(self) -> list[Path]:
        """Standard system header directories."""
        if self.is_windows:
            return []
        return [Path("/usr/include"), Path("/usr/local/include")]

    def library_dirs(self) -> list[Path]:
        """Standard system library directories."""
        if self.is_windows:
            return []
        dirs = [
            Path("/lib"),
            Path("/usr/lib"),
            Path("/usr/local/lib"),
            Path("/lib64"),
            Path("/usr/lib64"),
        ]
        multiarch = f"{self.arch}-linux-gnu"
        dirs.append(Path("/usr/lib") / multiarch)
        dirs.append(Path("/lib") / multiarch)
        return dirs


def _detect_mingw() -> bool:
    if sys.platform != "win32" and not sys.platform.startswith("cygwin"):
        return False
    msystem = os.environ.get("MSYSTEM", "")
    return msystem.upper().startswith("MINGW") or "mingw" in sys.version.lower()


@lru_cache(maxsize=1)
def get_platform() -> Platform:
    """Return the (cached) host platform."""
    system = _platform.system().lower()
    if system.startswith(("cygwin", "msys", "mingw")) or system == "windows":
        system = "windows"
    return Platform(
        os=system,
        arch=_platform.machine().lower() or "unknown",
        is_mingw=_detect_mingw(),
    )
