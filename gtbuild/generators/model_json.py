# SPDX-License-Identifier: MIT
"""JSON dump of the build model.

Writes the resolved flags, the declared targets and the registered tests
to ``gtbuild_model.json`` so the external build tool can pick them up.

Format:
    {
        "name": "gtest",
        "toolchain": {"kind": "gcc", "version": "9.4.0"},
        "flags": {"cxx_default": "...", ...},
        "targets": [{"name": "gtest", "kind": "static_library", ...}],
        "tests": [{"name": "gtest_unittest", "command": ["gtest_unittest"]}]
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from gtbuild.generators.generator import BaseGenerator

if TYPE_CHECKING:
    from gtbuild.core.project import BuildModel

logger = logging.getLogger(__name__)


class ModelJsonGenerator(BaseGenerator):
    """Generator for gtbuild_model.json.

    Example:
        generator = ModelJsonGenerator()
        generator.generate(model)
        # Creates <binary_dir>/gtbuild_model.json
    """

    FILENAME = "gtbuild_model.json"

    def __init__(self) -> None:
        super().__init__("model_json")

    def _generate_impl(self, model: BuildModel, output_dir: Path) -> Path:
        output_dir.mkdir(parents=True, exist_ok=True)
        output_file = output_dir / self.FILENAME

        with open(output_file, "w") as f:
            json.dump(model.to_dict(), f, indent=2)
            f.write("\n")

        logger.info(
            "Wrote %d targets and %d tests to %s",
            len(model.targets),
            len(model.tests),
            output_file,
        )
        return output_file
