"""Core value containers: assignments and value ranges."""

from .assignment import Assignment
from .value_range import ValueRange

__all__ = ["Assignment", "ValueRange"]
