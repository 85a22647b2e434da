"""Locator and reporter interfaces and the configuration handed to locators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from pathlib import Path

from envscout.env import PythonEnv
from envscout.manager import EnvManager
from envscout.python_environment import PythonEnvironment, PythonEnvironmentKind
from envscout.telemetry import TelemetryEvent


@dataclass
class LocatorResult:
    """Managers and environments found by a search."""

    managers: list[EnvManager] = field(default_factory=list)
    environments: list[PythonEnvironment] = field(default_factory=list)


@dataclass
class Configuration:
    """Settings that tell locators where to look.

    ``workspace_directories`` may hold environments or not;
    ``environment_directories`` are directories expected to hold them.
    """

    workspace_directories: list[Path] | None = None
    executables: list[Path] | None = None
    conda_executable: Path | None = None
    poetry_executable: Path | None = None
    environment_directories: list[Path] | None = None
    cache_directory: Path | None = None


@total_ordering
class LocatorKind(Enum):
    """The kinds of locator; ordered as declared."""

    Conda = "Conda"
    Homebrew = "Homebrew"
    LinuxGlobal = "LinuxGlobal"
    MacCommandLineTools = "MacCommandLineTools"
    MacPythonOrg = "MacPythonOrg"
    MacXCode = "MacXCode"
    PipEnv = "PipEnv"
    Poetry = "Poetry"
    PyEnv = "PyEnv"
    Venv = "Venv"
    VirtualEnv = "VirtualEnv"
    VirtualEnvWrapper = "VirtualEnvWrapper"
    WindowsRegistry = "WindowsRegistry"
    WindowsStore = "WindowsStore"

    def _position(self) -> int:
        return type(self)._member_names_.index(self.name)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LocatorKind):
            return NotImplemented
        return self._position() < other._position()


class Reporter(ABC):
    """Receives what locators find."""

    @abstractmethod
    def report_manager(self, manager: EnvManager) -> None:
        """Accept a discovered environment manager."""

    @abstractmethod
    def report_environment(self, env: PythonEnvironment) -> None:
        """Accept a discovered environment."""

    @abstractmethod
    def report_telemetry(self, event: TelemetryEvent) -> None:
        """Accept a telemetry event."""


class Locator(ABC):
    """Finds environments of particular kinds."""

    @abstractmethod
    def get_kind(self) -> LocatorKind:
        """Return the kind of this locator."""

    def configure(self, config: Configuration) -> None:
        """Take settings from the configuration; by default nothing is kept."""

    @abstractmethod
    def supported_categories(self) -> list[PythonEnvironmentKind]:
        """Return the environment kinds this locator can identify."""

    @abstractmethod
    def try_from(self, env: PythonEnv) -> PythonEnvironment | None:
        """Identify an interpreter as an environment of this locator's kind,
        without running it; None if it is not one."""

    @abstractmethod
    def find(self, reporter: Reporter) -> None:
        """Search for environments and hand each to the reporter."""