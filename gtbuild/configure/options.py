# SPDX-License-Identifier: MIT
"""Build options that steer flag resolution and target declaration.

Options are read from build variables (see gtbuild.get_var), using the
variable names the framework's build has always used, so that
``gtbuild configure BUILD_SHARED_LIBS=ON`` behaves as expected.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Per-configuration default flag variables the build tool seeds.
DEFAULT_FLAG_VARIABLES: tuple[str, ...] = (
    "CMAKE_CXX_FLAGS",
    "CMAKE_CXX_FLAGS_DEBUG",
    "CMAKE_CXX_FLAGS_RELEASE",
    "CMAKE_CXX_FLAGS_MINSIZEREL",
    "CMAKE_CXX_FLAGS_RELWITHDEBINFO",
)

_TRUE_VALUES = {"1", "on", "yes", "true", "y"}


def to_bool(value: str | bool | None) -> bool:
    """Interpret a build variable as a boolean.

    Examples:
        >>> to_bool("ON")
        True
        >>> to_bool("0")
        False
        >>> to_bool(None)
        False
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return value.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class BuildOptions:
    """User-facing build switches.

    Attributes:
        build_shared_libs: Build libraries as shared by default.
        force_shared_crt: Use the shared C runtime even for static builds (MSVC).
        disable_pthreads: Do not use pthreads even when available.
        default_flags: Per-configuration default flag variables, keyed by
            variable name (e.g. ``CMAKE_CXX_FLAGS_DEBUG``).
        configuration_types: Configuration names of a multi-configuration
            layout. Empty for single-configuration layouts.
    """

    build_shared_libs: bool = False
    force_shared_crt: bool = False
    disable_pthreads: bool = False
    default_flags: dict[str, str] = field(default_factory=dict)
    configuration_types: tuple[str, ...] = ()

    @property
    def cxx_flags(self) -> str:
        """The general C++ flags every derived variant starts with."""
        return self.default_flags.get("CMAKE_CXX_FLAGS", "")

    @property
    def multi_config(self) -> bool:
        """True when outputs go to per-configuration subdirectories."""
        return bool(self.configuration_types)

    @classmethod
    def from_vars(cls) -> BuildOptions:
        """Create options from build variables and the environment."""
        from gtbuild import get_var

        default_flags: dict[str, str] = {}
        for name in DEFAULT_FLAG_VARIABLES:
            value = get_var(name)
            if value is not None:
                default_flags[name] = value

        config_types = get_var("CMAKE_CONFIGURATION_TYPES") or ""
        return cls(
            build_shared_libs=to_bool(get_var("BUILD_SHARED_LIBS")),
            force_shared_crt=to_bool(get_var("gtest_force_shared_crt")),
            disable_pthreads=to_bool(get_var("gtest_disable_pthreads")),
            default_flags=default_flags,
            configuration_types=tuple(
                part for part in config_types.replace(";", " ").split() if part
            ),
        )
