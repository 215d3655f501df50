# SPDX-License-Identifier: MIT
"""Tests for gtbuild.toolchains.msvc."""

import pytest

from gtbuild.configure.options import BuildOptions
from gtbuild.tools.toolchain import ToolchainIdentity
from gtbuild.toolchains.msvc import MsvcToolchain


def msvc(version: str | None) -> MsvcToolchain:
    return MsvcToolchain(ToolchainIdentity.parse("msvc", version))


class TestMsvcBaseFlags:
    def test_current_compiler(self):
        flags = msvc("19.29").base_flags().split()
        assert flags[:8] == ["-GS", "-W4", "-WX", "-wd4251", "-wd4275", "-nologo", "-J", "-Zi"]
        assert "-wd4702" in flags
        assert "-wd4127" not in flags
        assert "-wd4800" not in flags
        assert flags[-6:] == [
            "-D_UNICODE",
            "-DUNICODE",
            "-DWIN32",
            "-D_WIN32",
            "-DSTRICT",
            "-DWIN32_LEAN_AND_MEAN",
        ]

    def test_vs2003(self):
        flags = msvc("13.10").base_flags().split()
        for warning in ["-wd4800", "-wd4511", "-wd4512", "-wd4675", "-wd4127"]:
            assert warning in flags
        assert "-wd4702" not in flags

    def test_vs2005(self):
        flags = msvc("14.00").base_flags().split()
        assert "-wd4127" in flags
        assert "-wd4800" not in flags
        assert "-wd4702" not in flags

    def test_vs2010(self):
        flags = msvc("16.00").base_flags().split()
        assert "-wd4127" not in flags
        assert "-wd4702" not in flags

    def test_vs2012_threshold(self):
        assert "-wd4702" in msvc("17.00").base_flags().split()
        assert "-wd4702" in msvc("1700").base_flags().split()
        assert "-wd4702" not in msvc("1699").base_flags().split()

    def test_unknown_version_is_current(self):
        assert msvc(None).base_flags() == msvc("19.29").base_flags()


class TestMsvcDefaultFlags:
    DEFAULTS = {
        "CMAKE_CXX_FLAGS": "/DWIN32 /D_WINDOWS /W3 /GR /EHsc",
        "CMAKE_CXX_FLAGS_DEBUG": "/MDd /Zi /Ob0 /Od /RTC1",
        "CMAKE_CXX_FLAGS_RELEASE": "/MD /O2 /Ob2 /DNDEBUG",
    }

    def test_static_build_uses_static_crt(self):
        adjusted = msvc("19.29").adjust_default_flags(self.DEFAULTS, BuildOptions())
        assert adjusted["CMAKE_CXX_FLAGS"] == "/DWIN32 /D_WINDOWS /W4 /GR /EHsc"
        assert adjusted["CMAKE_CXX_FLAGS_DEBUG"] == "-MTd /Zi /Ob0 /Od /RTC1"
        assert adjusted["CMAKE_CXX_FLAGS_RELEASE"] == "-MT /O2 /Ob2 /DNDEBUG"

    @pytest.mark.parametrize(
        "options",
        [BuildOptions(build_shared_libs=True), BuildOptions(force_shared_crt=True)],
    )
    def test_shared_crt_kept(self, options):
        adjusted = msvc("19.29").adjust_default_flags(self.DEFAULTS, options)
        assert adjusted["CMAKE_CXX_FLAGS_DEBUG"] == "/MDd /Zi /Ob0 /Od /RTC1"
        assert adjusted["CMAKE_CXX_FLAGS"] == "/DWIN32 /D_WINDOWS /W4 /GR /EHsc"

    def test_input_not_modified(self):
        defaults = dict(self.DEFAULTS)
        msvc("19.29").adjust_default_flags(defaults, BuildOptions())
        assert defaults == self.DEFAULTS


class TestMsvcExecutableFlags:
    def test_bigobj_from_vs2012(self):
        assert msvc("17.00").executable_flags() == "-bigobj"
        assert msvc("19.29").executable_flags() == "-bigobj"

    def test_no_bigobj_before_vs2012(self):
        assert msvc("16.00").executable_flags() == ""
