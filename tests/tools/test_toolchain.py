# SPDX-License-Identifier: MIT
"""Tests for gtbuild.tools.toolchain."""

import pytest

from gtbuild.tools.toolchain import (
    BaseToolchain,
    ToolchainIdentity,
    ToolchainKind,
    parse_version,
    register_toolchain,
    registered_kinds,
    toolchain_for,
    version_less,
)
from gtbuild.toolchains import (
    GccToolchain,
    HpAccToolchain,
    MsvcToolchain,
    SunProToolchain,
    XlToolchain,
)


class TestToolchainKind:
    @pytest.mark.parametrize(
        ("name", "kind"),
        [
            ("MSVC", ToolchainKind.MSVC),
            ("GNU", ToolchainKind.GCC),
            ("gcc", ToolchainKind.GCC),
            ("SunPro", ToolchainKind.SUNPRO),
            ("VisualAge", ToolchainKind.XL),
            ("XL", ToolchainKind.XL),
            ("HP", ToolchainKind.HP),
            ("Clang", ToolchainKind.OTHER),
            ("", ToolchainKind.OTHER),
        ],
    )
    def test_from_name(self, name, kind):
        assert ToolchainKind.from_name(name) is kind


class TestVersions:
    def test_parse_version(self):
        assert parse_version("7.0.0") == (7, 0, 0)
        assert parse_version("A.06.28") == (6, 28)
        assert parse_version("1700") == (1700,)
        assert parse_version("") is None
        assert parse_version(None) is None
        assert parse_version("none") is None

    def test_version_less_pads(self):
        assert version_less((6, 3), (7, 0, 0))
        assert not version_less((7,), (7, 0, 0))
        assert not version_less((7, 0, 0), (7,))
        assert not version_less((10, 1), (7, 0, 0))


class TestToolchainIdentity:
    def test_parse(self):
        identity = ToolchainIdentity.parse("GNU", "9.3.0")
        assert identity.kind is ToolchainKind.GCC
        assert identity.version == (9, 3, 0)
        assert identity.is_supported
        assert str(identity) == "gcc 9.3.0"

    def test_other_not_supported(self):
        identity = ToolchainIdentity.parse("clang")
        assert not identity.is_supported
        assert str(identity) == "other"

    @pytest.mark.parametrize(
        ("version", "expected"),
        [("19.29.30133", 1929), ("17.00", 1700), ("13.10", 1310), ("1500", 1500)],
    )
    def test_msvc_version(self, version, expected):
        assert ToolchainIdentity.parse("msvc", version).msvc_version == expected

    def test_msvc_version_only_for_msvc(self):
        assert ToolchainIdentity.parse("gcc", "19.29").msvc_version is None
        assert ToolchainIdentity.parse("msvc").msvc_version is None

    def test_hashable(self):
        a = ToolchainIdentity.parse("gcc", "9.3")
        b = ToolchainIdentity.parse("gcc", "9.3")
        assert {a, b} == {a}


class TestRegistry:
    @pytest.mark.parametrize(
        ("kind", "cls"),
        [
            (ToolchainKind.MSVC, MsvcToolchain),
            (ToolchainKind.GCC, GccToolchain),
            (ToolchainKind.SUNPRO, SunProToolchain),
            (ToolchainKind.XL, XlToolchain),
            (ToolchainKind.HP, HpAccToolchain),
        ],
    )
    def test_dispatch(self, kind, cls):
        toolchain = toolchain_for(ToolchainIdentity(kind))
        assert isinstance(toolchain, cls)

    def test_other_has_no_toolchain(self):
        assert toolchain_for(ToolchainIdentity(ToolchainKind.OTHER)) is None

    def test_registered_kinds(self):
        assert ToolchainKind.OTHER not in registered_kinds()
        assert len(registered_kinds()) == 5

    def test_register_twice_rejected(self):
        class AnotherGcc(BaseToolchain):
            kind = ToolchainKind.GCC

        with pytest.raises(ValueError):
            register_toolchain(AnotherGcc)

    def test_reregister_same_class_allowed(self):
        assert register_toolchain(GccToolchain) is GccToolchain
