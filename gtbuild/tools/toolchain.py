# SPDX-License-Identifier: MIT
"""Toolchain identity, flag tables and the toolchain registry.

A toolchain here is a compiler vendor plus its version. Each supported
vendor is a BaseToolchain subclass that carries its flag table as data;
the registry maps a ToolchainKind to exactly one such class so that
resolving flags is a single dispatch rather than a chain of conditionals.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from gtbuild.configure.options import BuildOptions

logger = logging.getLogger(__name__)

Version = tuple[int, ...]


class ToolchainKind(enum.Enum):
    """Closed set of compiler vendors gtbuild knows flags for."""

    MSVC = "msvc"
    GCC = "gcc"
    SUNPRO = "sunpro"
    XL = "xl"
    HP = "hp"
    OTHER = "other"

    @classmethod
    def from_name(cls, name: str) -> ToolchainKind:
        """Map a compiler id string to a kind.

        Accepts the enum values plus the compiler ids build tools commonly
        report ("GNU", "SunPro", "VisualAge", "XL", "HP", "MSVC").
        Anything unrecognized maps to OTHER.
        """
        key = name.strip().lower()
        return _KIND_ALIASES.get(key, cls.OTHER)


_KIND_ALIASES: dict[str, ToolchainKind] = {
    "msvc": ToolchainKind.MSVC,
    "gcc": ToolchainKind.GCC,
    "gnu": ToolchainKind.GCC,
    "gnucxx": ToolchainKind.GCC,
    "sunpro": ToolchainKind.SUNPRO,
    "sun": ToolchainKind.SUNPRO,
    # The VisualAge compiler id was renamed to XL.
    "xl": ToolchainKind.XL,
    "visualage": ToolchainKind.XL,
    "hp": ToolchainKind.HP,
    "acc": ToolchainKind.HP,
    "other": ToolchainKind.OTHER,
}


def parse_version(text: str | None) -> Version | None:
    """Parse a dotted version string into a tuple of ints.

    Examples:
        >>> parse_version("7.0.0")
        (7, 0, 0)
        >>> parse_version("19.29.30133")
        (19, 29, 30133)
        >>> parse_version("unknown") is None
        True
    """
    if not text:
        return None
    match = re.search(r"\d+(?:\.\d+)*", text)
    if not match:
        return None
    return tuple(int(part) for part in match.group(0).split("."))


def version_less(version: Version, other: Version) -> bool:
    """Compare versions component-wise, padding the shorter with zeros."""
    width = max(len(version), len(other))
    padded = version + (0,) * (width - len(version))
    other_padded = other + (0,) * (width - len(other))
    return padded < other_padded


@dataclass(frozen=True)
class ToolchainIdentity:
    """The detected compiler vendor and version.

    Attributes:
        kind: Compiler vendor.
        version: Compiler version, if it could be determined.
    """

    kind: ToolchainKind
    version: Version | None = None

    @classmethod
    def parse(cls, name: str, version: str | None = None) -> ToolchainIdentity:
        """Build an identity from a compiler id and a version string."""
        return cls(ToolchainKind.from_name(name), parse_version(version))

    @property
    def is_supported(self) -> bool:
        return self.kind is not ToolchainKind.OTHER

    @property
    def msvc_version(self) -> int | None:
        """The ``_MSC_VER`` style number (e.g. 19.29 -> 1929).

        Versions already given in that form (e.g. ``1700``) are returned
        unchanged. None for non-MSVC toolchains or unknown versions.
        """
        if self.kind is not ToolchainKind.MSVC or not self.version:
            return None
        major = self.version[0]
        if major >= 100:
            return major
        minor = self.version[1] if len(self.version) > 1 else 0
        return major * 100 + minor

    def version_string(self) -> str:
        if not self.version:
            return ""
        return ".".join(str(part) for part in self.version)

    def __str__(self) -> str:
        version = self.version_string()
        return f"{self.kind.value} {version}" if version else self.kind.value


@dataclass(frozen=True)
class FlagTable:
    """The raw per-vendor flag strings, before derived variants are built."""

    base: str = ""
    exception: str = ""
    no_exception: str = ""
    no_rtti: str = ""
    strict: str = ""


class BaseToolchain:
    """Base class for a compiler vendor's flag table.

    Subclasses set the class attributes; vendors whose base flags depend
    on the compiler version override base_flags().
    """

    kind: ClassVar[ToolchainKind] = ToolchainKind.OTHER

    BASE_FLAGS: ClassVar[str] = ""
    EXCEPTION_FLAGS: ClassVar[str] = ""
    NO_EXCEPTION_FLAGS: ClassVar[str] = ""
    NO_RTTI_FLAGS: ClassVar[str] = ""
    STRICT_FLAGS: ClassVar[str] = ""

    def __init__(self, identity: ToolchainIdentity) -> None:
        self.identity = identity

    def base_flags(self) -> str:
        return self.BASE_FLAGS

    def flag_table(self) -> FlagTable:
        """Return this toolchain's flag table for its version."""
        return FlagTable(
            base=self.base_flags(),
            exception=self.EXCEPTION_FLAGS,
            no_exception=self.NO_EXCEPTION_FLAGS,
            no_rtti=self.NO_RTTI_FLAGS,
            strict=self.STRICT_FLAGS,
        )

    def adjust_default_flags(
        self, default_flags: dict[str, str], options: BuildOptions
    ) -> dict[str, str]:
        """Rewrite the build tool's default flag variables.

        Args:
            default_flags: Mapping of flag variable name to flag string.
            options: Build options (shared build, CRT choice).

        Returns:
            A new mapping; the input is left unchanged.
        """
        return dict(default_flags)

    def executable_flags(self) -> str:
        """Extra compile flags every executable needs with this toolchain."""
        return ""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.identity})"


_registry: dict[ToolchainKind, type[BaseToolchain]] = {}


def register_toolchain(cls: type[BaseToolchain]) -> type[BaseToolchain]:
    """Class decorator adding a toolchain class to the registry."""
    if cls.kind in _registry and _registry[cls.kind] is not cls:
        raise ValueError(f"toolchain already registered for {cls.kind.value}")
    _registry[cls.kind] = cls
    return cls


def toolchain_for(identity: ToolchainIdentity) -> BaseToolchain | None:
    """Return the flag table provider for an identity.

    Returns:
        A toolchain instance, or None when the vendor is not supported.
    """
    # Importing the package registers every vendor module.
    import gtbuild.toolchains  # noqa: F401

    cls = _registry.get(identity.kind)
    if cls is None:
        logger.debug("No flag table for toolchain %s", identity)
        return None
    return cls(identity)


def registered_kinds() -> list[ToolchainKind]:
    """Kinds that have a registered flag table."""
    import gtbuild.toolchains  # noqa: F401

    return [kind for kind in ToolchainKind if kind in _registry]
