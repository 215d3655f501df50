# SPDX-License-Identifier: MIT
"""Compiler and linker flag resolution.

The resolver turns the detected toolchain, the host probe results and the
build options into the flag variants the framework's libraries, samples
and tests are compiled with. It runs once per configuration pass and is
a pure function of its inputs.

Example:
    identity = ToolchainIdentity.parse("gcc", "9.3.0")
    flags, caps = resolve_flags(identity, config.probe_host(), options)
    model = BuildModel("gtest", flags=flags, capabilities=caps, options=options)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gtbuild.configure.options import BuildOptions
from gtbuild.core.flags import join_flags
from gtbuild.tools.toolchain import toolchain_for

if TYPE_CHECKING:
    from pathlib import Path

    from gtbuild.configure.config import HostProbe
    from gtbuild.tools.toolchain import ToolchainIdentity

logger = logging.getLogger(__name__)

OWN_TUPLE_FLAGS = "-DGTEST_USE_OWN_TR1_TUPLE=1"


@dataclass(frozen=True)
class FlagSet:
    """Resolved flag strings, keyed by purpose.

    The first five fields are the toolchain's raw flags (``base`` already
    carries the pthread macro); the ``cxx_*`` fields are the complete
    variants targets are built with.

    Attributes:
        base: Flags common to every variant.
        exception: Flags enabling C++ exceptions.
        no_exception: Flags disabling C++ exceptions.
        no_rtti: Flags disabling RTTI.
        strict: Additional warnings used for the framework's own libraries.
        cxx_exception: Complete variant with exceptions on.
        cxx_no_exception: Complete variant with exceptions off.
        cxx_default: The variant used when nothing else is requested.
        cxx_no_rtti: Default variant with RTTI off.
        cxx_use_own_tuple: Default variant using the bundled tuple.
        cxx_strict: Default variant with strict warnings.
        default_flags: The build tool's per-configuration default flag
            variables after toolchain adjustment.
    """

    base: str = ""
    exception: str = ""
    no_exception: str = ""
    no_rtti: str = ""
    strict: str = ""
    cxx_exception: str = ""
    cxx_no_exception: str = ""
    cxx_default: str = ""
    cxx_no_rtti: str = ""
    cxx_use_own_tuple: str = ""
    cxx_strict: str = ""
    default_flags: dict[str, str] = field(default_factory=dict)

    def as_dict(self) -> dict[str, object]:
        """Return the flag set as a plain dict (for JSON output)."""
        return {
            "base": self.base,
            "exception": self.exception,
            "no_exception": self.no_exception,
            "no_rtti": self.no_rtti,
            "strict": self.strict,
            "cxx_exception": self.cxx_exception,
            "cxx_no_exception": self.cxx_no_exception,
            "cxx_default": self.cxx_default,
            "cxx_no_rtti": self.cxx_no_rtti,
            "cxx_use_own_tuple": self.cxx_use_own_tuple,
            "cxx_strict": self.cxx_strict,
            "default_flags": dict(self.default_flags),
        }


@dataclass(frozen=True)
class CapabilityFlags:
    """Optional system libraries the framework can use.

    A capability is present when its field is set. Missing libraries are
    simply None; consumers skip the related link dependency.

    Attributes:
        thread_libs: Link item for the POSIX thread library.
        librt_library: Path to the realtime extensions library.
    """

    thread_libs: str | None = None
    librt_library: Path | None = None

    @property
    def has_pthreads(self) -> bool:
        return self.thread_libs is not None

    @property
    def has_librt(self) -> bool:
        return self.librt_library is not None

    @property
    def pthread_macro(self) -> str:
        """The GTEST_HAS_PTHREAD define matching this capability."""
        return f"-DGTEST_HAS_PTHREAD={1 if self.has_pthreads else 0}"


def resolve_capabilities(
    probe: HostProbe, options: BuildOptions | None = None
) -> CapabilityFlags:
    """Derive capability flags from host probe results.

    pthreads are not used on MinGW even when available; Windows threading
    primitives are used there instead.
    """
    options = options or BuildOptions()

    thread_libs: str | None = None
    if options.disable_pthreads:
        logger.debug("pthreads disabled by option")
    elif probe.is_mingw:
        logger.debug("pthreads not used on MinGW")
    elif probe.threads_found:
        # An empty link item means threads live in the C library.
        thread_libs = probe.thread_libs or ""

    librt: Path | None = None
    if probe.librt_include is not None and probe.librt_library is not None:
        librt = probe.librt_library
    else:
        logger.debug("librt not available")

    return CapabilityFlags(thread_libs=thread_libs, librt_library=librt)


def resolve_flags(
    identity: ToolchainIdentity,
    probe: HostProbe,
    options: BuildOptions | None = None,
) -> tuple[FlagSet, CapabilityFlags]:
    """Resolve flag variants and capabilities for one configuration pass.

    Exactly one toolchain's table is used. Unsupported toolchains get an
    empty FlagSet; this is not an error.

    Args:
        identity: Detected compiler vendor and version.
        probe: Host probe results (thread library, librt).
        options: Build options; defaults are used when omitted.

    Returns:
        Tuple of (FlagSet, CapabilityFlags).
    """
    options = options or BuildOptions()
    capabilities = resolve_capabilities(probe, options)

    toolchain = toolchain_for(identity)
    if toolchain is None:
        logger.debug("Toolchain %s is not supported, using empty flags", identity)
        return FlagSet(default_flags=dict(options.default_flags)), capabilities

    table = toolchain.flag_table()
    default_flags = toolchain.adjust_default_flags(options.default_flags, options)
    cxx_flags = default_flags.get("CMAKE_CXX_FLAGS", "")

    base = join_flags(table.base, capabilities.pthread_macro)
    cxx_exception = join_flags(cxx_flags, base, table.exception)
    cxx_no_exception = join_flags(cxx_flags, base, table.no_exception)
    cxx_default = cxx_exception

    flags = FlagSet(
        base=base,
        exception=table.exception,
        no_exception=table.no_exception,
        no_rtti=table.no_rtti,
        strict=table.strict,
        cxx_exception=cxx_exception,
        cxx_no_exception=cxx_no_exception,
        cxx_default=cxx_default,
        cxx_no_rtti=join_flags(cxx_default, table.no_rtti),
        cxx_use_own_tuple=join_flags(cxx_default, OWN_TUPLE_FLAGS),
        cxx_strict=join_flags(cxx_default, table.strict),
        default_flags=default_flags,
    )
    logger.info("Resolved flags for %s", identity)
    logger.debug("  cxx_default=%s", flags.cxx_default)
    return flags, capabilities
