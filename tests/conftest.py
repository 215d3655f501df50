# SPDX-License-Identifier: MIT
"""Shared fixtures for gtbuild tests."""

from __future__ import annotations

from pathlib import Path

import pytest

import gtbuild
from gtbuild.configure.config import HostProbe
from gtbuild.configure.options import BuildOptions
from gtbuild.core.project import BuildModel
from gtbuild.core.resolver import resolve_flags
from gtbuild.tools.toolchain import ToolchainIdentity


@pytest.fixture(autouse=True)
def reset_build_vars():
    """Each test starts without command line variables."""
    gtbuild._reset_vars()
    yield
    gtbuild._reset_vars()


@pytest.fixture
def bare_probe() -> HostProbe:
    """A host without pthreads, librt or Python."""
    return HostProbe()


@pytest.fixture
def full_probe() -> HostProbe:
    """A host with pthreads, librt and Python."""
    return HostProbe(
        threads_found=True,
        thread_libs="-pthread",
        librt_include=Path("/usr/include"),
        librt_library=Path("/usr/lib/librt.so"),
        python=Path("/usr/bin/python3"),
    )


@pytest.fixture
def make_model(tmp_path, bare_probe):
    """Factory for a BuildModel resolved for a given toolchain."""

    def _make(
        toolchain: str = "gcc",
        version: str | None = "9.3.0",
        probe: HostProbe | None = None,
        options: BuildOptions | None = None,
    ) -> BuildModel:
        probe = probe or bare_probe
        options = options or BuildOptions()
        identity = ToolchainIdentity.parse(toolchain, version)
        flags, caps = resolve_flags(identity, probe, options)
        return BuildModel(
            "test",
            source_dir=tmp_path / "src",
            binary_dir=tmp_path / "build",
            identity=identity,
            flags=flags,
            capabilities=caps,
            options=options,
            python=probe.python,
        )

    return _make
