# SPDX-License-Identifier: MIT
"""Source location tracking for build descriptions.

Targets and errors remember where in the user's build description they
were created, so that problems like duplicate target names can point back
at the offending line.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

# Frames inside the gtbuild package are skipped when looking for the caller.
_PACKAGE_DIR = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class SourceLocation:
    """A file/line pair in user code.

    Attributes:
        filename: Path of the source file.
        lineno: 1-based line number.
    """

    filename: str
    lineno: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.lineno}"


def get_caller_location() -> SourceLocation | None:
    """Return the first stack frame outside of the gtbuild package.

    Returns:
        The caller's location, or None if the stack has no such frame.
    """
    frame = sys._getframe(1)
    while frame is not None:
        filename = frame.f_code.co_filename
        try:
            inside = Path(filename).resolve().is_relative_to(_PACKAGE_DIR)
        except (OSError, ValueError):
            inside = False
        if not inside:
            return SourceLocation(filename, frame.f_lineno)
        frame = frame.f_back
    return None
