# SPDX-License-Identifier: MIT
"""Helper functions for declaring the framework's build targets.

Each helper issues one declaration against a BuildModel, sets a few
properties from the model's resolved flags and capabilities, and returns
the created handle.

Example:
    gtest = declare_library(model, "gtest", model.flags.cxx_strict,
                            ["src/gtest-all.cc"])
    gtest_main = declare_library(model, "gtest_main", model.flags.cxx_strict,
                                 ["src/gtest_main.cc"], libs=["gtest"])
    declare_unit_test(model, "gtest_unittest", ["gtest_main"])
    declare_script_test(model, "gtest_env_var_test")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from gtbuild.core.flags import append_flags
from gtbuild.core.target import CONFIG_PLACEHOLDER, TargetKind

if TYPE_CHECKING:
    from gtbuild.core.project import BuildModel
    from gtbuild.core.target import Target, TestEntry

logger = logging.getLogger(__name__)

CREATE_SHARED_DEFINE = "GTEST_CREATE_SHARED_LIBRARY=1"
LINKED_AS_SHARED_DEFINE = "GTEST_LINKED_AS_SHARED_LIBRARY=1"
DEBUG_POSTFIX = "d"


def declare_library(
    model: BuildModel,
    name: str,
    flags: str,
    sources: list[Path | str],
    *,
    kind: TargetKind | None = None,
    libs: list[str] | None = None,
) -> Target:
    """Declare a library built with the given flags.

    Args:
        model: Build model to declare into.
        name: Library name.
        flags: Compile flag string.
        sources: Source files.
        kind: Static or shared; None follows the build_shared_libs option.
        libs: Libraries to link the library against.

    Returns:
        The library target.
    """
    if kind is None:
        kind = model.library_kind()
    target = model.add_library(name, kind, sources)
    target.compile_flags = flags
    target.debug_postfix = DEBUG_POSTFIX
    if model.options.build_shared_libs or kind is TargetKind.SHARED_LIBRARY:
        target.define(CREATE_SHARED_DEFINE)
    if libs:
        target.link(*libs)

    caps = model.capabilities
    if caps.has_pthreads and caps.thread_libs:
        target.link_interface(caps.thread_libs)
    if caps.has_librt and caps.librt_library is not None:
        target.link_interface(caps.librt_library)
    return target


def declare_shared_library(
    model: BuildModel,
    name: str,
    flags: str,
    sources: list[Path | str],
) -> Target:
    """Declare a library that is always shared."""
    return declare_library(
        model, name, flags, sources, kind=TargetKind.SHARED_LIBRARY
    )


def declare_executable(
    model: BuildModel,
    name: str,
    flags: str,
    libs: list[str],
    sources: list[Path | str],
) -> Target:
    """Declare an executable built from explicit sources.

    Args:
        model: Build model to declare into.
        name: Executable name.
        flags: Compile flag string; empty flags leave the property unset.
        libs: Libraries to link, each linked separately.
        sources: Source files.

    Returns:
        The executable target.
    """
    target = model.add_executable(name, sources)
    toolchain = model.toolchain
    if toolchain is not None:
        flags = append_flags(flags, toolchain.executable_flags())
    if flags:
        target.compile_flags = flags
    if model.options.build_shared_libs:
        target.define(LINKED_AS_SHARED_DEFINE)
    target.link(*libs)
    return target


def declare_program(
    model: BuildModel,
    name: str,
    directory: Path | str,
    libs: list[str],
    *extra_sources: Path | str,
) -> Target:
    """Declare an executable built from ``directory/name.cc`` and extra sources.

    The default flag variant is used.
    """
    sources: list[Path | str] = [Path(directory) / f"{name}.cc", *extra_sources]
    return declare_executable(model, name, model.flags.cxx_default, libs, sources)


def declare_test(
    model: BuildModel,
    name: str,
    libs: list[str],
    sources: list[Path | str],
    flags: str | None = None,
) -> Target:
    """Declare a test executable and register it as a test.

    Args:
        model: Build model to declare into.
        name: Test (and executable) name.
        libs: Libraries to link.
        sources: Source files.
        flags: Compile flags; None uses the default flag variant.

    Returns:
        The test executable target.
    """
    if flags is None:
        flags = model.flags.cxx_default
    target = declare_executable(model, name, flags, libs, sources)
    model.add_test(name, target=target)
    return target


def declare_unit_test(
    model: BuildModel,
    name: str,
    libs: list[str],
    *extra_sources: Path | str,
) -> Target:
    """Declare a test built from ``test/name.cc`` and extra sources."""
    sources: list[Path | str] = [Path("test") / f"{name}.cc", *extra_sources]
    return declare_test(model, name, libs, sources)


def declare_script_test(model: BuildModel, name: str) -> TestEntry | None:
    """Register a test run by the Python interpreter from ``test/name.py``.

    The script receives the directory holding the built binaries as
    ``--build_dir``. Multi-configuration layouts put binaries in a
    per-configuration subdirectory, so the path ends in the configuration
    name there.

    Returns:
        The test entry, or None when no interpreter was found.
    """
    if model.python is None:
        logger.debug("No Python interpreter, skipping script test %s", name)
        return None

    script = model.source_dir / "test" / f"{name}.py"
    build_dir = model.binary_dir.as_posix()
    if model.options.multi_config:
        build_dir = f"{build_dir}/{CONFIG_PLACEHOLDER}"
    command = [str(model.python), script.as_posix(), f"--build_dir={build_dir}"]
    return model.add_test(name, command)
