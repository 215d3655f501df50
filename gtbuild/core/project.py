# SPDX-License-Identifier: MIT
"""Build model for gtbuild.

The BuildModel is the explicit stand-in for the external build tool's
project state: it holds the resolved flags and capabilities of one
configuration pass and collects the targets and tests declared against
it. It is passed to every declaration helper instead of living in
global state.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from gtbuild.configure.options import BuildOptions
from gtbuild.core.errors import DuplicateTargetError
from gtbuild.core.resolver import CapabilityFlags, FlagSet
from gtbuild.core.target import Target, TargetKind, TestEntry
from gtbuild.tools.toolchain import ToolchainIdentity, ToolchainKind
from gtbuild.util.source_location import SourceLocation, get_caller_location

if TYPE_CHECKING:
    from gtbuild.tools.toolchain import BaseToolchain

logger = logging.getLogger(__name__)


class BuildModel:
    """Top-level container for one configuration pass.

    Example:
        model = BuildModel(
            "gtest",
            source_dir=".",
            binary_dir="build",
            identity=identity,
            flags=flags,
            capabilities=caps,
            options=options,
            python=probe.python,
        )
        gtest = declare_library(model, "gtest", model.flags.cxx_strict,
                                ["src/gtest-all.cc"])
        declare_unit_test(model, "gtest_unittest", ["gtest_main"])

    Attributes:
        name: Project name.
        source_dir: Directory the sources (and test scripts) live in.
        binary_dir: Directory build outputs go to.
        identity: The toolchain the flags were resolved for.
        flags: Resolved flag variants.
        capabilities: Optional system libraries available.
        options: Build options.
        python: Interpreter used for script tests, if one was found.
    """

    __slots__ = (
        "name",
        "source_dir",
        "binary_dir",
        "identity",
        "flags",
        "capabilities",
        "options",
        "python",
        "_targets",
        "_tests",
        "defined_at",
    )

    def __init__(
        self,
        name: str,
        *,
        source_dir: Path | str | None = None,
        binary_dir: Path | str = "build",
        identity: ToolchainIdentity | None = None,
        flags: FlagSet | None = None,
        capabilities: CapabilityFlags | None = None,
        options: BuildOptions | None = None,
        python: Path | str | None = None,
        defined_at: SourceLocation | None = None,
    ) -> None:
        self.name = name
        self.source_dir = Path(source_dir) if source_dir else Path.cwd()
        self.binary_dir = Path(binary_dir)
        self.identity = identity or ToolchainIdentity(ToolchainKind.OTHER)
        self.flags = flags or FlagSet()
        self.capabilities = capabilities or CapabilityFlags()
        self.options = options or BuildOptions()
        self.python = Path(python) if python else None
        self._targets: dict[str, Target] = {}
        self._tests: dict[str, TestEntry] = {}
        self.defined_at = defined_at or get_caller_location()

    @property
    def toolchain(self) -> BaseToolchain | None:
        """The flag table provider for the model's toolchain."""
        from gtbuild.tools.toolchain import toolchain_for

        return toolchain_for(self.identity)

    def add_target(self, target: Target) -> Target:
        """Register a target with the model.

        Raises:
            DuplicateTargetError: If a target with the same name exists.
        """
        if target.name in self._targets:
            existing = self._targets[target.name]
            raise DuplicateTargetError(
                target.name, previous=existing.defined_at, location=target.defined_at
            )
        self._targets[target.name] = target
        logger.debug("Declared %s %s", target.kind.value, target.name)
        return target

    def add_library(
        self,
        name: str,
        kind: TargetKind,
        sources: list[Path | str],
    ) -> Target:
        """Declare a library target."""
        if not kind.is_library:
            raise ValueError(f"not a library kind: {kind.value}")
        target = Target(name, kind, sources, defined_at=get_caller_location())
        return self.add_target(target)

    def add_executable(self, name: str, sources: list[Path | str]) -> Target:
        """Declare an executable target."""
        target = Target(
            name, TargetKind.EXECUTABLE, sources, defined_at=get_caller_location()
        )
        return self.add_target(target)

    def add_test(
        self,
        name: str,
        command: list[str] | None = None,
        *,
        target: Target | None = None,
    ) -> TestEntry:
        """Register a test.

        Args:
            name: Test name.
            command: Command tokens. Defaults to running ``target``.
            target: Executable the test runs.

        Raises:
            DuplicateTargetError: If a test with the same name exists.
            ValueError: If neither command nor target is given.
        """
        if command is None:
            if target is None:
                raise ValueError(f"test '{name}' needs a command or a target")
            command = [target.name]
        location = get_caller_location()
        if name in self._tests:
            raise DuplicateTargetError(
                name, previous=self._tests[name].defined_at, location=location
            )
        entry = TestEntry(name, list(command), target=target, defined_at=location)
        self._tests[name] = entry
        logger.debug("Registered test %s: %s", name, " ".join(entry.command))
        return entry

    def get_target(self, name: str) -> Target | None:
        return self._targets.get(name)

    def get_test(self, name: str) -> TestEntry | None:
        return self._tests.get(name)

    @property
    def targets(self) -> list[Target]:
        """All declared targets, in declaration order."""
        return list(self._targets.values())

    @property
    def tests(self) -> list[TestEntry]:
        """All registered tests, in registration order."""
        return list(self._tests.values())

    def library_kind(self, shared: bool | None = None) -> TargetKind:
        """Pick the library kind; None follows the build_shared_libs option."""
        if shared is None:
            shared = self.options.build_shared_libs
        return TargetKind.SHARED_LIBRARY if shared else TargetKind.STATIC_LIBRARY

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "source_dir": str(self.source_dir),
            "binary_dir": str(self.binary_dir),
            "toolchain": {
                "kind": self.identity.kind.value,
                "version": self.identity.version_string() or None,
            },
            "flags": self.flags.as_dict(),
            "capabilities": {
                "has_pthreads": self.capabilities.has_pthreads,
                "has_librt": self.capabilities.has_librt,
            },
            "configuration_types": list(self.options.configuration_types),
            "targets": [target.to_dict() for target in self.targets],
            "tests": [test.to_dict() for test in self.tests],
        }

    def __repr__(self) -> str:
        return (
            f"BuildModel({self.name!r}, toolchain={self.identity}, "
            f"targets={len(self._targets)}, tests={len(self._tests)})"
        )
