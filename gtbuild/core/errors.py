# SPDX-License-Identifier: MIT
"""Custom exceptions for gtbuild.

All gtbuild exceptions inherit from GtbuildError, which includes
optional source location information for better error messages.

Missing optional capabilities (thread library, librt, a script
interpreter) are never errors; they are reported as unset fields on
the probe results instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gtbuild.util.source_location import SourceLocation


class GtbuildError(Exception):
    """Base class for all gtbuild exceptions.

    Attributes:
        message: The error message.
        location: Optional source location where the error occurred.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation | None = None,
    ) -> None:
        self.message = message
        self.location = location
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message


class ConfigureError(GtbuildError):
    """Error during the configure phase.

    Raised when a required tool is missing or the configuration
    is invalid.
    """


class ToolNotFoundError(ConfigureError):
    """Required tool was not found.

    Attributes:
        tool: The name of the tool that was not found.
    """

    def __init__(
        self,
        tool: str,
        location: SourceLocation | None = None,
    ) -> None:
        self.tool = tool
        super().__init__(f"tool not found: {tool}", location)


class DuplicateTargetError(GtbuildError, ValueError):
    """A target or test with the same name was already declared.

    Attributes:
        name: The duplicated name.
        previous: Where the first declaration happened, if known.
    """

    def __init__(
        self,
        name: str,
        previous: SourceLocation | None = None,
        location: SourceLocation | None = None,
    ) -> None:
        self.name = name
        self.previous = previous
        message = f"target '{name}' already exists"
        if previous is not None:
            message += f" (defined at {previous})"
        super().__init__(message, location)
