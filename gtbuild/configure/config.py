# SPDX-License-Identifier: MIT
"""Configure context for gtbuild.

The Configure class provides the context for the configure phase:
program, header and library discovery, thread library detection,
compiler identification, and caching of the results.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from gtbuild.configure.identify import identify_compiler
from gtbuild.configure.platform import get_platform
from gtbuild.core.errors import ToolNotFoundError
from gtbuild.tools.toolchain import ToolchainIdentity, ToolchainKind

logger = logging.getLogger(__name__)

# Flags that make the supported compilers print their banner.
BANNER_FLAGS: tuple[str, ...] = ("--version", "-V", "-qversion")


@dataclass
class ProgramInfo:
    """Information about a found program.

    Attributes:
        path: Path to the program executable.
        version: Version string if detected.
    """

    path: Path
    version: str | None = None


@dataclass(frozen=True)
class HostProbe:
    """Results of probing the host for optional libraries and tools.

    Attributes:
        threads_found: A POSIX thread library is available.
        thread_libs: Link item for the thread library ('-pthread', '-lpthread'
            or '' when threads are part of the C library).
        is_mingw: The host is MinGW, where pthreads are not used.
        librt_include: Directory containing time.h, if found.
        librt_library: Path to the rt library, if found.
        python: Path to a Python interpreter for script tests, if found.
    """

    threads_found: bool = False
    thread_libs: str | None = None
    is_mingw: bool = False
    librt_include: Path | None = None
    librt_library: Path | None = None
    python: Path | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "threads_found": self.threads_found,
            "thread_libs": self.thread_libs,
            "is_mingw": self.is_mingw,
            "librt_include": _path_str(self.librt_include),
            "librt_library": _path_str(self.librt_library),
            "python": _path_str(self.python),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HostProbe:
        return cls(
            threads_found=bool(data.get("threads_found", False)),
            thread_libs=data.get("thread_libs"),
            is_mingw=bool(data.get("is_mingw", False)),
            librt_include=_path_or_none(data.get("librt_include")),
            librt_library=_path_or_none(data.get("librt_library")),
            python=_path_or_none(data.get("python")),
        )


def _path_str(path: Path | None) -> str | None:
    return str(path) if path is not None else None


def _path_or_none(value: str | None) -> Path | None:
    return Path(value) if value else None


class Configure:
    """Context for the configure phase.

    Probe results are cached in a JSON file inside the build directory, so
    a second configure run reuses them instead of probing again.

    Example:
        config = Configure(build_dir=Path("build"))

        probe = config.probe_host()
        identity = config.detect_toolchain("c++")
        flags, caps = resolve_flags(identity, probe, options)

        config.save()

    Attributes:
        platform: The detected platform.
        build_dir: Directory for build outputs and cache.
    """

    def __init__(
        self,
        *,
        build_dir: Path | str = "build",
        cache_file: str = "gtbuild_config.json",
    ) -> None:
        """Create a configure context.

        Args:
            build_dir: Directory for build outputs.
            cache_file: Name of the cache file within build_dir.
        """
        self.platform = get_platform()
        self.build_dir = Path(build_dir)
        self._cache_file = cache_file
        self._cache: dict[str, Any] = {}
        self._probe: HostProbe | None = None

        self._load_cache()

    def _cache_path(self) -> Path:
        return self.build_dir / self._cache_file

    def _load_cache(self) -> None:
        """Load configuration from cache file if it exists."""
        cache_path = self._cache_path()
        if cache_path.exists():
            try:
                with open(cache_path) as f:
                    self._cache = json.load(f)
            except (json.JSONDecodeError, OSError):
                logger.warning("Ignoring unreadable cache file %s", cache_path)
                self._cache = {}

    def save(self, path: Path | None = None) -> Path:
        """Save configuration to the cache file.

        Args:
            path: Optional path override for cache file.

        Returns:
            The path written to.
        """
        cache_path = path or self._cache_path()
        cache_path.parent.mkdir(parents=True, exist_ok=True)

        with open(cache_path, "w") as f:
            json.dump(self._cache, f, indent=2, default=str)
            f.write("\n")
        return cache_path

    def reset(self) -> None:
        """Forget all cached results so the next calls probe again."""
        self._cache = {}
        self._probe = None

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value."""
        self._cache[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        return self._cache.get(key, default)

    def find_program(
        self,
        name: str,
        *,
        hints: list[Path | str] | None = None,
        version_flag: str = "--version",
        required: bool = False,
    ) -> ProgramInfo | None:
        """Find a program on the system.

        Searches for the program in:
        1. Hint paths (if provided)
        2. PATH environment variable

        Args:
            name: Program name (e.g., 'g++', 'python3').
            hints: Additional paths to search.
            version_flag: Flag to get version (for version detection).
            required: If True, raise error if not found.

        Returns:
            ProgramInfo if found, None otherwise.

        Raises:
            ToolNotFoundError: If required and not found.
        """
        cache_key = f"program:{name}"
        if cache_key in self._cache:
            cached = self._cache[cache_key]
            path = Path(cached["path"])
            if path.exists():
                return ProgramInfo(path=path, version=cached.get("version"))

        found_path: Path | None = None

        if hints:
            for hint in hints:
                hint_path = Path(hint)
                if hint_path.is_file() and os.access(hint_path, os.X_OK):
                    found_path = hint_path
                    break
                candidate = hint_path / name
                if self.platform.is_windows and not candidate.suffix:
                    candidate = candidate.with_suffix(".exe")
                if candidate.is_file() and os.access(candidate, os.X_OK):
                    found_path = candidate
                    break

        if found_path is None:
            found_path = self._which(name)

        if found_path is None:
            if required:
                raise ToolNotFoundError(name)
            logger.debug("Program %s not found", name)
            return None

        version = self._get_program_version(found_path, version_flag)

        self._cache[cache_key] = {
            "path": str(found_path),
            "version": version,
        }

        logger.debug("Found %s at %s", name, found_path)
        return ProgramInfo(path=found_path, version=version)

    def _which(self, name: str) -> Path | None:
        """Find a program in PATH using shutil.which."""
        result = shutil.which(name)
        if result:
            return Path(result)
        return None

    def _run(self, args: list[str]) -> str | None:
        """Run a command, returning combined stdout and stderr."""
        try:
            result = subprocess.run(
                args,
                capture_output=True,
                text=True,
                timeout=5,
            )
        except (subprocess.TimeoutExpired, OSError):
            return None
        return (result.stdout or "") + (result.stderr or "")

    def _get_program_version(self, path: Path, version_flag: str) -> str | None:
        """Try to get the version of a program."""
        output = self._run([str(path), version_flag])
        if not output:
            return None
        for line in output.split("\n"):
            line = line.strip()
            if line:
                return line
        return None

    def find_header(
        self, name: str, paths: list[Path | str] | None = None
    ) -> Path | None:
        """Find the directory containing a header.

        Args:
            name: Header name (e.g., 'time.h').
            paths: Directories to search before the system include dirs.

        Returns:
            The directory containing the header, or None.
        """
        cache_key = f"header:{name}"
        if cache_key in self._cache:
            cached = self._cache[cache_key]
            return Path(cached) if cached else None

        search = [Path(p) for p in paths or []] + self.platform.include_dirs()
        found: Path | None = None
        for directory in search:
            if (directory / name).is_file():
                found = directory
                break

        self._cache[cache_key] = str(found) if found else None
        logger.debug("Header %s: %s", name, found or "not found")
        return found

    def _library_filenames(self, name: str) -> list[str]:
        if self.platform.is_windows and not self.platform.is_mingw:
            return [f"{name}{self.platform.static_lib_suffix}"]
        return [
            f"lib{name}{self.platform.shared_lib_suffix}",
            f"lib{name}{self.platform.static_lib_suffix}",
        ]

    def find_library(
        self, name: str, paths: list[Path | str] | None = None
    ) -> Path | None:
        """Find a library file.

        Args:
            name: Library name without prefix or suffix (e.g., 'rt').
            paths: Directories to search before the system library dirs.

        Returns:
            Path to the library, or None.
        """
        cache_key = f"library:{name}"
        if cache_key in self._cache:
            cached = self._cache[cache_key]
            return Path(cached) if cached else None

        search = [Path(p) for p in paths or []] + self.platform.library_dirs()
        found: Path | None = None
        for directory in search:
            for filename in self._library_filenames(name):
                candidate = directory / filename
                if candidate.exists():
                    found = candidate
                    break
            if found is not None:
                break

        self._cache[cache_key] = str(found) if found else None
        logger.debug("Library %s: %s", name, found or "not found")
        return found

    def find_threads(self) -> tuple[bool, str | None]:
        """Detect the POSIX thread library.

        The ``-pthread`` compiler flag is preferred over linking
        ``-lpthread`` directly; when there is no separate pthread library
        the threads live in the C library and the link item is empty.

        Returns:
            Tuple of (found, link item).
        """
        if self.platform.is_windows and not self.platform.is_mingw:
            return False, None
        # macOS: pthreads live in libSystem and the headers in the SDK.
        if self.platform.is_macos:
            return True, ""
        if self.find_header("pthread.h") is None:
            return False, None
        return True, "-pthread"

    def find_python(self) -> Path | None:
        """Find a Python interpreter for script tests."""
        for name in ("python3", "python"):
            info = self.find_program(name)
            if info is not None:
                return info.path
        return None

    def probe_host(self) -> HostProbe:
        """Probe the host once and remember the result.

        Later calls, and later runs using the same cache file, return the
        same HostProbe without probing again.
        """
        if self._probe is not None:
            return self._probe

        cached = self._cache.get("host_probe")
        if isinstance(cached, dict):
            self._probe = HostProbe.from_dict(cached)
            logger.debug("Using cached host probe")
            return self._probe

        threads_found, thread_libs = self.find_threads()
        probe = HostProbe(
            threads_found=threads_found,
            thread_libs=thread_libs,
            is_mingw=self.platform.is_mingw,
            librt_include=self.find_header("time.h"),
            librt_library=self.find_library("rt"),
            python=self.find_python(),
        )
        self._cache["host_probe"] = probe.to_dict()
        self._probe = probe
        logger.info(
            "Host probe: pthreads=%s librt=%s python=%s",
            probe.threads_found,
            probe.librt_library is not None,
            probe.python,
        )
        return probe

    def detect_toolchain(self, compiler: str = "c++") -> ToolchainIdentity:
        """Identify the C++ compiler's vendor and version.

        Args:
            compiler: Compiler program name or path.

        Returns:
            The identity; OTHER when the compiler is missing or unknown.
        """
        cached = self._cache.get(f"toolchain:{compiler}")
        if isinstance(cached, dict):
            return ToolchainIdentity.parse(cached["kind"], cached.get("version"))

        info = self.find_program(compiler)
        if info is None:
            logger.warning("C++ compiler %s not found", compiler)
            return ToolchainIdentity(ToolchainKind.OTHER)

        identity = ToolchainIdentity(ToolchainKind.OTHER)
        # cl prints its banner when run without arguments.
        for flags in [[flag] for flag in BANNER_FLAGS] + [[]]:
            banner = self._run([str(info.path), *flags])
            identity = identify_compiler(banner)
            if identity.is_supported:
                break

        self._cache[f"toolchain:{compiler}"] = {
            "kind": identity.kind.value,
            "version": identity.version_string() or None,
        }
        logger.info("C++ compiler: %s (%s)", identity, info.path)
        return identity

    def __repr__(self) -> str:
        return (
            f"Configure(platform={self.platform.os}/{self.platform.arch}, "
            f"build_dir={self.build_dir})"
        )


def load_config(path: Path | str = "build/gtbuild_config.json") -> dict[str, Any]:
    """Load a saved configuration.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        data: dict[str, Any] = json.load(f)
        return data
