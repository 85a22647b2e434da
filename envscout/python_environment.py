"""Discovered Python environments, their kinds and a builder for them."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePath
from typing import Any, Iterable

from envscout.arch import Architecture
from envscout.manager import EnvManager
from envscout.paths import norm_case

logger = logging.getLogger(__name__)


class PythonEnvironmentKind(Enum):
    """The kind of a Python environment; ordered by member name."""

    Conda = "Conda"
    Homebrew = "Homebrew"
    Pyenv = "Pyenv"
    GlobalPaths = "GlobalPaths"
    PyenvVirtualEnv = "PyenvVirtualEnv"
    Pipenv = "Pipenv"
    Poetry = "Poetry"
    MacPythonOrg = "MacPythonOrg"
    MacCommandLineTools = "MacCommandLineTools"
    LinuxGlobal = "LinuxGlobal"
    MacXCode = "MacXCode"
    Venv = "Venv"
    VirtualEnv = "VirtualEnv"
    VirtualEnvWrapper = "VirtualEnvWrapper"
    WindowsStore = "WindowsStore"
    WindowsRegistry = "WindowsRegistry"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PythonEnvironmentKind):
            return NotImplemented
        return self.name < other.name

    def __le__(self, other: object) -> bool:
        if not isinstance(other, PythonEnvironmentKind):
            return NotImplemented
        return self.name <= other.name

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, PythonEnvironmentKind):
            return NotImplemented
        return self.name > other.name

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, PythonEnvironmentKind):
            return NotImplemented
        return self.name >= other.name


def _as_path(value: Any) -> PurePath | None:
    if value is None or isinstance(value, PurePath):
        return value
    return Path(os.fspath(value))


def _as_paths(values: Iterable[Any] | None) -> list[PurePath] | None:
    if values is None:
        return None
    return [_as_path(v) for v in values]


def _debug_path(path: PurePath | None) -> str:
    text = "" if path is None else str(path)
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _sorted_unique(paths: Iterable[PurePath]) -> list[PurePath]:
    unique = {p.parts: p for p in paths}
    return [unique[key] for key in sorted(unique)]


@dataclass
class PythonEnvironment:
    """A Python environment; any detail that is set is known to be accurate."""

    display_name: str | None = None
    name: str | None = None
    executable: PurePath | None = None
    kind: PythonEnvironmentKind | None = None
    version: str | None = None
    prefix: PurePath | None = None
    manager: EnvManager | None = None
    project: PurePath | None = None
    arch: Architecture | None = None
    symlinks: list[PurePath] | None = None

    def __post_init__(self) -> None:
        self.executable = _as_path(self.executable)
        self.prefix = _as_path(self.prefix)
        self.project = _as_path(self.project)
        self.symlinks = _as_paths(self.symlinks)

    def _sort_key(self) -> str:
        return f"{_debug_path(self.executable)}=>{_debug_path(self.prefix)}"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PythonEnvironment):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, PythonEnvironment):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, PythonEnvironment):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, PythonEnvironment):
            return NotImplemented
        return self._sort_key() >= other._sort_key()

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form, with camel-cased keys."""

        def text(path: PurePath | None) -> str | None:
            return None if path is None else str(path)

        return {
            "displayName": self.display_name,
            "name": self.name,
            "executable": text(self.executable),
            "kind": None if self.kind is None else self.kind.value,
            "version": self.version,
            "prefix": text(self.prefix),
            "manager": None if self.manager is None else self.manager.to_dict(),
            "project": text(self.project),
            "arch": None if self.arch is None else self.arch.value,
            "symlinks": None if self.symlinks is None else [str(p) for p in self.symlinks],
        }

    def to_builder(self) -> PythonEnvironmentBuilder:
        """Return a builder preloaded with every detail of this environment."""
        builder = PythonEnvironmentBuilder(self.kind)
        builder._display_name = self.display_name
        builder._name = self.name
        builder._executable = self.executable
        builder._version = self.version
        builder._prefix = self.prefix
        builder._manager = self.manager
        builder._project = self.project
        builder._arch = self.arch
        builder._symlinks = None if self.symlinks is None else list(self.symlinks)
        return builder

    def __str__(self) -> str:
        kind = "Unknown" if self.kind is None else self.kind.name
        lines = [f"Environment ({kind})"]
        if self.display_name is not None:
            lines.append(f"   Display-Name: {self.display_name}")
        if self.name is not None:
            lines.append(f"   Name        : {self.name}")
        if self.executable is not None:
            lines.append(f"   Executable  : {self.executable}")
        if self.version is not None:
            lines.append(f"   Version     : {self.version}")
        if self.prefix is not None:
            lines.append(f"   Prefix      : {self.prefix}")
        if self.project is not None:
            lines.append(f"   Project     : {self.project}")
        if self.arch is not None:
            lines.append(f"   Architecture: {self.arch}")
        if self.manager is not None:
            lines.append(
                f"   Manager     : {self.manager.tool.name}, {self.manager.executable}"
            )
        if self.symlinks:
            ordered = sorted(self.symlinks, key=lambda p: len(str(p)))
            first, *rest = ordered
            lines.append(f"   Symlinks    : {_debug_path(first)}")
            lines.extend(f"               : {_debug_path(p)}" for p in rest)
        return "\n".join(lines) + "\n"


class PythonEnvironmentBuilder:
    """Collects the details of an environment, keeping the executable and
    symlinks consistent, and builds a :class:`PythonEnvironment`."""

    def __init__(self, kind: PythonEnvironmentKind | None = None) -> None:
        self._kind = kind
        self._display_name: str | None = None
        self._name: str | None = None
        self._executable: PurePath | None = None
        self._version: str | None = None
        self._prefix: PurePath | None = None
        self._manager: EnvManager | None = None
        self._project: PurePath | None = None
        self._arch: Architecture | None = None
        self._symlinks: list[PurePath] | None = None

    def display_name(self, display_name: str | None) -> PythonEnvironmentBuilder:
        self._display_name = display_name
        return self

    def name(self, name: str | None) -> PythonEnvironmentBuilder:
        self._name = name
        return self

    def executable(self, executable: Any) -> PythonEnvironmentBuilder:
        exe = _as_path(executable)
        if (
            isinstance(exe, Path)
            and exe.name
            and not (len(exe.parts) == 1 and not exe.anchor)
        ):
            exe = norm_case(exe.parent) / exe.name
        self._executable = exe
        self._update_symlinks_and_exe(self._symlinks)
        return self

    def version(self, version: str | None) -> PythonEnvironmentBuilder:
        self._version = version
        return self

    def prefix(self, prefix: Any) -> PythonEnvironmentBuilder:
        path = _as_path(prefix)
        self._prefix = norm_case(path) if isinstance(path, Path) else path
        return self

    def manager(self, manager: EnvManager | None) -> PythonEnvironmentBuilder:
        self._manager = manager
        return self

    def project(self, project: Any) -> PythonEnvironmentBuilder:
        path = _as_path(project)
        self._project = norm_case(path) if isinstance(path, Path) else path
        return self

    def arch(self, arch: Architecture | None) -> PythonEnvironmentBuilder:
        self._arch = arch
        return self

    def symlinks(self, symlinks: Iterable[Any] | None) -> PythonEnvironmentBuilder:
        self._update_symlinks_and_exe(_as_paths(symlinks))
        return self

    def _update_symlinks_and_exe(self, symlinks: list[PurePath] | None) -> None:
        every = list(self._symlinks or [])
        if self._executable is not None:
            every.append(self._executable)
        every.extend(symlinks or [])
        every = _sorted_unique(every)
        self._symlinks = every or None
        if self._executable is not None:
            self._executable = (
                get_shortest_executable(self._kind, every) or self._executable
            )

    def build(self) -> PythonEnvironment:
        """Return the environment described so far."""
        every: list[PurePath] = []
        if self._executable is not None:
            every.append(self._executable)
        every.extend(self._symlinks or [])
        every = _sorted_unique(every)
        executable = None
        if self._executable is not None:
            executable = get_shortest_executable(self._kind, every) or self._executable
        return PythonEnvironment(
            display_name=self._display_name,
            name=self._name,
            executable=executable,
            kind=self._kind,
            version=self._version,
            prefix=self._prefix,
            manager=self._manager,
            project=self._project,
            arch=self._arch,
            symlinks=every or None,
        )


def _is_windows_store_exe(exe: PurePath) -> bool:
    text = str(exe)
    return (
        all(part in text for part in ("AppData", "Local", "Microsoft", "WindowsApps"))
        and exe.parent.name == "WindowsApps"
        and exe.name.lower().startswith("python3.")
    )


def get_shortest_executable(
    kind: PythonEnvironmentKind | None, exes: Iterable[Any] | None
) -> PurePath | None:
    """Pick the most user-friendly executable: the shortest path, except that
    Windows Store environments prefer ``WindowsApps/python3.x.exe``."""
    if exes is None:
        return None
    candidates = _as_paths(exes)
    if kind is PythonEnvironmentKind.WindowsStore:
        for exe in candidates:
            if _is_windows_store_exe(exe):
                return exe
    if not candidates:
        return None
    return min(candidates, key=lambda p: len(str(p)))


def get_environment_key(env: PythonEnvironment) -> PurePath | None:
    """Return the path that identifies an environment, or None if it has
    neither an executable nor a prefix."""
    if env.executable is not None:
        return env.executable
    if env.prefix is not None:
        if env.kind is PythonEnvironmentKind.Conda:
            return env.prefix / "bin" / ("python.exe" if os.name == "nt" else "python")
        return env.prefix
    logger.error("Failed to report environment due to lack of exe & prefix: %r", env)
    return None