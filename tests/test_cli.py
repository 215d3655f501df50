# SPDX-License-Identifier: MIT
"""Tests for gtbuild CLI."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest

from gtbuild.cli import main, parse_variables, setup_logging
from gtbuild.configure.config import Configure, HostProbe
from gtbuild.tools.toolchain import ToolchainIdentity


class TestParseVariables:
    def test_splits_variables_and_args(self) -> None:
        variables, remaining = parse_variables(
            ["BUILD_SHARED_LIBS=ON", "target", "--flag=x", "=bad"]
        )
        assert variables == {"BUILD_SHARED_LIBS": "ON"}
        assert remaining == ["target", "--flag=x", "=bad"]

    def test_empty_value(self) -> None:
        variables, _ = parse_variables(["CMAKE_CXX_FLAGS="])
        assert variables == {"CMAKE_CXX_FLAGS": ""}


class TestSetupLogging:
    def test_setup_logging_levels(self) -> None:
        # Just ensure it doesn't crash
        setup_logging(verbose=False, debug=False)
        setup_logging(verbose=True)
        setup_logging(debug=True)


class TestMain:
    def test_no_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 1

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])
        assert excinfo.value.code == 0
        assert "gtbuild" in capsys.readouterr().out


class TestFlagsCommand:
    def test_gcc_text(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["flags", "-t", "gcc", "--compiler-version", "9.3.0"]) == 0
        out = capsys.readouterr().out
        assert "base: -Wall -Wshadow -Werror -Wno-error=dangling-else" in out
        assert "no_rtti: -fno-rtti -DGTEST_HAS_RTTI=0" in out

    def test_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["flags", "-t", "hp", "--json", "--pthreads"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["base"] == "-AA -mt -DGTEST_HAS_PTHREAD=1"

    def test_other_toolchain_is_empty(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["flags", "-t", "other", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["base"] == ""
        assert data["cxx_default"] == ""

    def test_variables(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert (
            main(
                [
                    "flags",
                    "-t",
                    "msvc",
                    "--compiler-version",
                    "19.29",
                    "--json",
                    "CMAKE_CXX_FLAGS_DEBUG=/MDd /Zi",
                ]
            )
            == 0
        )
        data = json.loads(capsys.readouterr().out)
        assert data["default_flags"]["CMAKE_CXX_FLAGS_DEBUG"] == "-MTd /Zi"

    def test_shared_switch(self, capsys: pytest.CaptureFixture[str]) -> None:
        args = ["flags", "-t", "msvc", "--json", "--shared", "CMAKE_CXX_FLAGS=/MD"]
        assert main(args) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["default_flags"]["CMAKE_CXX_FLAGS"] == "/MD"


class TestProbeCommand:
    def test_probe(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        probe = HostProbe(threads_found=True, thread_libs="-pthread")
        with patch.object(Configure, "probe_host", return_value=probe):
            assert main(["probe", "-B", str(tmp_path), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["threads_found"] is True
        assert (tmp_path / "gtbuild_config.json").exists()


BUILD_SCRIPT_TEXT = """\
from gtbuild import declare_library, declare_script_test, declare_unit_test

gtest = declare_library(model, "gtest", model.flags.cxx_strict, ["src/gtest-all.cc"])
declare_unit_test(model, "gtest_unittest", ["gtest"])
declare_script_test(model, "gtest_env_var_test")
"""


@pytest.fixture
def patched_detection() -> Iterator[None]:
    identity = ToolchainIdentity.parse("gcc", "9.3.0")
    probe = HostProbe(python=Path("/usr/bin/python3"))
    with (
        patch.object(Configure, "detect_toolchain", return_value=identity),
        patch.object(Configure, "probe_host", return_value=probe),
    ):
        yield


@pytest.mark.usefixtures("patched_detection")
class TestConfigureCommand:
    def test_configure_without_script(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        build_dir = tmp_path / "build"
        source_dir = tmp_path / "src"
        source_dir.mkdir()

        assert main(["configure", "-B", str(build_dir), "-S", str(source_dir)]) == 0

        out = capsys.readouterr().out
        assert "Toolchain: gcc 9.3.0" in out
        assert "pthreads: no" in out

        cache = json.loads((build_dir / "gtbuild_config.json").read_text())
        assert cache["flags"]["base"].startswith("-Wall")
        assert cache["capabilities"] == {"has_pthreads": False, "has_librt": False}

        # Nothing was declared, so no model is handed to the build tool.
        assert not (build_dir / "gtbuild_model.json").exists()

    def test_configure_runs_build_script(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        build_dir = tmp_path / "build"
        source_dir = tmp_path / "src"
        source_dir.mkdir()
        (source_dir / "gtbuild-build.py").write_text(BUILD_SCRIPT_TEXT)

        assert main(["configure", "-B", str(build_dir), "-S", str(source_dir)]) == 0
        assert "(2 targets, 2 tests)" in capsys.readouterr().out

        model = json.loads((build_dir / "gtbuild_model.json").read_text())
        assert model["name"] == "gtest"
        assert model["toolchain"]["kind"] == "gcc"
        assert [t["name"] for t in model["targets"]] == ["gtest", "gtest_unittest"]
        assert model["targets"][0]["kind"] == "static_library"
        assert [t["name"] for t in model["tests"]] == [
            "gtest_unittest",
            "gtest_env_var_test",
        ]
        script_cmd = model["tests"][1]["command"]
        assert script_cmd[1].endswith("/src/test/gtest_env_var_test.py")

    def test_build_script_sees_variables(self, tmp_path: Path) -> None:
        build_dir = tmp_path / "build"
        script = tmp_path / "custom.py"
        script.write_text(BUILD_SCRIPT_TEXT)

        argv = ["configure", "-B", str(build_dir), "-f", str(script)]
        assert main([*argv, "BUILD_SHARED_LIBS=ON"]) == 0

        model = json.loads((build_dir / "gtbuild_model.json").read_text())
        gtest = model["targets"][0]
        assert gtest["kind"] == "shared_library"
        assert "GTEST_CREATE_SHARED_LIBRARY=1" in gtest["compile_definitions"]

    def test_missing_build_script(self, tmp_path: Path) -> None:
        argv = ["configure", "-B", str(tmp_path), "-f", str(tmp_path / "nope.py")]
        assert main(argv) == 1
        assert not (tmp_path / "gtbuild_config.json").exists()
