"""Processor architecture of a Python interpreter."""

from __future__ import annotations

from enum import Enum


class Architecture(Enum):
    """Architecture of an interpreter; ordered by member name."""

    X64 = "x64"
    X86 = "x86"

    def __str__(self) -> str:
        return self.value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Architecture):
            return NotImplemented
        return self.name < other.name

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Architecture):
            return NotImplemented
        return self.name <= other.name

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Architecture):
            return NotImplemented
        return self.name > other.name

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Architecture):
            return NotImplemented
        return self.name >= other.name