# SPDX-License-Identifier: MIT
"""Generator protocol for build model output.

Generators take a populated BuildModel and write files the external
build tool consumes.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gtbuild.core.project import BuildModel


@runtime_checkable
class Generator(Protocol):
    """Protocol for build model generators."""

    @property
    def name(self) -> str:
        """Generator name (e.g., 'model_json')."""
        ...

    def generate(self, model: BuildModel, output_dir: Path | None = None) -> Path:
        """Write output for a model and return the written file."""
        ...


class BaseGenerator:
    """Base class for generators with common functionality."""

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def generate(self, model: BuildModel, output_dir: Path | None = None) -> Path:
        """Generate output.

        Args:
            model: The model to write.
            output_dir: Directory to write to (default: the model's binary_dir).

        Returns:
            Path of the written file.
        """
        if output_dir is None:
            output_dir = model.binary_dir
        return self._generate_impl(model, Path(output_dir))

    def _generate_impl(self, model: BuildModel, output_dir: Path) -> Path:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"
