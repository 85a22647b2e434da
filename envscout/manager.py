"""Environment managers such as conda, poetry and pyenv."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from pathlib import Path
from typing import Any


class EnvManagerType(Enum):
    """Kind of tool that manages environments; ordered by member name."""

    Conda = "Conda"
    Poetry = "Poetry"
    Pyenv = "Pyenv"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, EnvManagerType):
            return NotImplemented
        return self.name < other.name

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, EnvManagerType):
            return NotImplemented
        return self.name > other.name

    def __le__(self, other: object) -> bool:
        return self == other or self < other

    def __ge__(self, other: object) -> bool:
        return self == other or self > other


@total_ordering
@dataclass
class EnvManager:
    """A manager executable, its tool kind and optional version."""

    executable: Path
    tool: EnvManagerType
    version: str | None = None

    def __post_init__(self) -> None:
        self.executable = Path(os.fspath(self.executable))

    def _sort_key(self) -> tuple:
        version_key = (0, "") if self.version is None else (1, self.version)
        return (self.executable.parts, version_key, self.tool.name)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, EnvManager):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form of the manager."""
        return {
            "executable": str(self.executable),
            "version": self.version,
            "tool": self.tool.value,
        }

    def __str__(self) -> str:
        lines = [
            f"Manager ({self.tool.name})",
            f"   Executable  : {self.executable}",
        ]
        if self.version is not None:
            lines.append(f"   Version     : {self.version}")
        return "\n".join(lines) + "\n"