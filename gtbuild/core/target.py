# SPDX-License-Identifier: MIT
"""Target and test entries of the build model.

A Target is something the external build tool will compile and link (a
library or an executable); a TestEntry is a command the test harness runs.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

from gtbuild.util.source_location import SourceLocation, get_caller_location

# Placeholder for the configuration name in multi-configuration layouts.
CONFIG_PLACEHOLDER = "$<CONFIG>"


class TargetKind(enum.Enum):
    """Kinds of targets the build model holds."""

    STATIC_LIBRARY = "static_library"
    SHARED_LIBRARY = "shared_library"
    EXECUTABLE = "executable"

    @property
    def is_library(self) -> bool:
        return self is not TargetKind.EXECUTABLE


class Target:
    """A named build target and its properties.

    Example:
        lib = model.add_library("gtest", TargetKind.STATIC_LIBRARY, ["src/gtest-all.cc"])
        lib.compile_flags = flags.cxx_strict
        lib.debug_postfix = "d"

    Attributes:
        name: Target name.
        kind: Library or executable.
        sources: Source files, in declaration order.
        compile_flags: Flag string passed to the compiler.
        compile_definitions: Preprocessor definitions (NAME or NAME=VALUE).
        debug_postfix: Suffix appended to the output name in debug builds.
        link_libraries: Libraries this target links against.
        interface_link_libraries: Libraries that consumers of this target
            must link as well.
        defined_at: Where this target was created in user code.
    """

    __slots__ = (
        "name",
        "kind",
        "sources",
        "compile_flags",
        "compile_definitions",
        "debug_postfix",
        "link_libraries",
        "interface_link_libraries",
        "defined_at",
    )

    def __init__(
        self,
        name: str,
        kind: TargetKind,
        sources: list[Path | str] | None = None,
        *,
        defined_at: SourceLocation | None = None,
    ) -> None:
        self.name = name
        self.kind = kind
        self.sources: list[Path] = [Path(src) for src in sources or []]
        self.compile_flags: str = ""
        self.compile_definitions: list[str] = []
        self.debug_postfix: str = ""
        self.link_libraries: list[str] = []
        self.interface_link_libraries: list[str] = []
        self.defined_at = defined_at or get_caller_location()

    def link(self, *libs: Target | str) -> Target:
        """Append libraries to link against (fluent API).

        Each library is appended on its own so static and shared
        libraries can be mixed.
        """
        for lib in libs:
            self.link_libraries.append(lib.name if isinstance(lib, Target) else lib)
        return self

    def link_interface(self, *libs: str | Path) -> Target:
        """Append libraries that consumers must also link."""
        for lib in libs:
            self.interface_link_libraries.append(str(lib))
        return self

    def define(self, *definitions: str) -> Target:
        """Add preprocessor definitions, skipping ones already present."""
        for definition in definitions:
            if definition not in self.compile_definitions:
                self.compile_definitions.append(definition)
        return self

    def output_name(self, config: str | None = None) -> str:
        """The output base name, with the debug postfix in debug builds."""
        if config is not None and config.lower() == "debug":
            return self.name + self.debug_postfix
        return self.name

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "sources": [src.as_posix() for src in self.sources],
            "compile_flags": self.compile_flags,
            "compile_definitions": list(self.compile_definitions),
            "debug_postfix": self.debug_postfix,
            "link_libraries": list(self.link_libraries),
            "interface_link_libraries": list(self.interface_link_libraries),
        }

    def __repr__(self) -> str:
        return f"Target({self.name!r}, {self.kind.value})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Target):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)


@dataclass
class TestEntry:
    """A test registered with the test harness.

    Attributes:
        name: Test name.
        command: Command tokens. May contain CONFIG_PLACEHOLDER.
        target: The executable target the test runs, if any.
    """

    # Keep pytest from collecting this class.
    __test__ = False

    name: str
    command: list[str]
    target: Target | None = None
    defined_at: SourceLocation | None = field(default=None, compare=False)

    @property
    def per_config(self) -> bool:
        """True when the command depends on the configuration name."""
        return any(CONFIG_PLACEHOLDER in token for token in self.command)

    def command_for(self, config: str | None = None) -> list[str]:
        """Return the command with the configuration name filled in.

        Args:
            config: Configuration name (e.g. 'Debug'). When omitted the
                placeholder is left in place.
        """
        if config is None:
            return list(self.command)
        return [token.replace(CONFIG_PLACEHOLDER, config) for token in self.command]

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "command": list(self.command),
            "target": self.target.name if self.target is not None else None,
        }
