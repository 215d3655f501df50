# SPDX-License-Identifier: MIT
"""Tests for gtbuild.core.project."""

from pathlib import Path

import pytest

from gtbuild.configure.options import BuildOptions
from gtbuild.core.errors import DuplicateTargetError
from gtbuild.core.project import BuildModel
from gtbuild.core.resolver import CapabilityFlags, FlagSet
from gtbuild.core.target import TargetKind
from gtbuild.tools.toolchain import ToolchainKind


class TestBuildModel:
    def test_defaults(self, tmp_path):
        model = BuildModel("gtest", source_dir=tmp_path)
        assert model.source_dir == tmp_path
        assert model.binary_dir == Path("build")
        assert model.identity.kind is ToolchainKind.OTHER
        assert model.flags == FlagSet()
        assert model.capabilities == CapabilityFlags()
        assert model.python is None
        assert model.targets == []
        assert model.tests == []
        assert model.toolchain is None

    def test_add_library(self):
        model = BuildModel("gtest")
        lib = model.add_library("gtest", TargetKind.STATIC_LIBRARY, ["a.cc"])
        assert model.get_target("gtest") is lib
        assert model.targets == [lib]

    def test_add_library_rejects_executable_kind(self):
        model = BuildModel("gtest")
        with pytest.raises(ValueError):
            model.add_library("x", TargetKind.EXECUTABLE, [])

    def test_add_executable(self):
        model = BuildModel("gtest")
        exe = model.add_executable("app", ["main.cc"])
        assert exe.kind is TargetKind.EXECUTABLE

    def test_duplicate_target(self):
        model = BuildModel("gtest")
        model.add_executable("app", ["main.cc"])
        with pytest.raises(DuplicateTargetError) as excinfo:
            model.add_executable("app", ["other.cc"])
        assert excinfo.value.name == "app"
        assert "already exists" in str(excinfo.value)
        assert isinstance(excinfo.value, ValueError)

    def test_add_test_runs_target(self):
        model = BuildModel("gtest")
        exe = model.add_executable("foo", ["foo.cc"])
        entry = model.add_test("foo", target=exe)
        assert entry.command == ["foo"]
        assert entry.target is exe
        assert model.get_test("foo") is entry

    def test_add_test_needs_command_or_target(self):
        model = BuildModel("gtest")
        with pytest.raises(ValueError):
            model.add_test("foo")

    def test_duplicate_test(self):
        model = BuildModel("gtest")
        model.add_test("foo", ["foo"])
        with pytest.raises(DuplicateTargetError):
            model.add_test("foo", ["foo"])

    def test_library_kind_follows_option(self):
        static = BuildModel("a")
        shared = BuildModel("b", options=BuildOptions(build_shared_libs=True))
        assert static.library_kind() is TargetKind.STATIC_LIBRARY
        assert shared.library_kind() is TargetKind.SHARED_LIBRARY
        assert static.library_kind(shared=True) is TargetKind.SHARED_LIBRARY
        assert shared.library_kind(shared=False) is TargetKind.STATIC_LIBRARY

    def test_toolchain_for_supported_kind(self, make_model):
        model = make_model("msvc", "19.29")
        assert model.toolchain is not None
        assert model.toolchain.kind is ToolchainKind.MSVC

    def test_to_dict(self, make_model):
        model = make_model("gcc", "9.3.0")
        model.add_executable("foo", ["foo.cc"])
        model.add_test("foo", ["foo"])
        data = model.to_dict()
        assert data["toolchain"] == {"kind": "gcc", "version": "9.3.0"}
        assert [t["name"] for t in data["targets"]] == ["foo"]
        assert [t["name"] for t in data["tests"]] == ["foo"]
        assert data["capabilities"] == {"has_pthreads": False, "has_librt": False}
