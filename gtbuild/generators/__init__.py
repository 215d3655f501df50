# SPDX-License-Identifier: MIT
"""Writers that hand the build model to the external build tool."""

from gtbuild.generators.generator import BaseGenerator, Generator
from gtbuild.generators.model_json import ModelJsonGenerator

__all__ = [
    "BaseGenerator",
    "Generator",
    "ModelJsonGenerator",
]
