"""String forms of assignments and effects."""

from __future__ import annotations

ASSIGNMENT_SEPARATOR: str = " ^ "
EMPTY_ASSIGNMENT: str = "~"
VOID_EFFECT: str = "Void"
