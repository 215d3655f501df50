# SPDX-License-Identifier: MIT
"""
gtbuild: build configuration for a C++ unit-testing framework.

Resolves the compiler flag variants the framework is built with for each
supported compiler vendor, probes the host for optional libraries, and
declares the framework's libraries, executables and tests in a build model.
"""

from __future__ import annotations

import json
import os

from gtbuild.configure.config import Configure, HostProbe
from gtbuild.configure.options import BuildOptions
from gtbuild.core.project import BuildModel
from gtbuild.core.resolver import (
    CapabilityFlags,
    FlagSet,
    resolve_flags,
)
from gtbuild.helpers import (
    declare_executable,
    declare_library,
    declare_program,
    declare_script_test,
    declare_shared_library,
    declare_test,
    declare_unit_test,
)
from gtbuild.tools.toolchain import ToolchainIdentity, ToolchainKind

__version__ = "0.1.0"

# Internal storage for CLI variables
_cli_vars: dict[str, str] | None = None


def get_var(name: str, default: str | None = None) -> str | None:
    """Get a build variable set on the command line or from environment.

    Variables can be set when invoking gtbuild:
        gtbuild configure BUILD_SHARED_LIBS=ON

    Precedence (highest to lowest):
        1. Command line: gtbuild configure VAR=value
        2. Environment variable: VAR=value gtbuild configure

    Args:
        name: Variable name.
        default: Default value if not set.

    Returns:
        The variable value, or default if not set.
    """
    global _cli_vars

    if _cli_vars is None:
        gtbuild_vars = os.environ.get("GTBUILD_VARS")
        if gtbuild_vars:
            try:
                _cli_vars = json.loads(gtbuild_vars)
            except json.JSONDecodeError:
                _cli_vars = {}
        else:
            _cli_vars = {}

    if name in _cli_vars:
        return _cli_vars[name]

    return os.environ.get(name, default)


def set_vars(variables: dict[str, str]) -> None:
    """Set command line variables (called by the CLI)."""
    global _cli_vars
    _cli_vars = dict(variables)


def _reset_vars() -> None:
    """Forget loaded variables so the next get_var() reloads them."""
    global _cli_vars
    _cli_vars = None


__all__ = [
    "__version__",
    # Variables
    "get_var",
    "set_vars",
    # Configuration
    "BuildOptions",
    "Configure",
    "HostProbe",
    "ToolchainIdentity",
    "ToolchainKind",
    # Flag resolution
    "CapabilityFlags",
    "FlagSet",
    "resolve_flags",
    # Build model and helpers
    "BuildModel",
    "declare_executable",
    "declare_library",
    "declare_program",
    "declare_script_test",
    "declare_shared_library",
    "declare_test",
    "declare_unit_test",
]
