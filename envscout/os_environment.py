"""Access to the user's home, environment variables and global search paths."""

from __future__ import annotations

import logging
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path

from envscout.paths import norm_case

logger = logging.getLogger(__name__)

KNOWN_UNIX_LOCATIONS = (
    "/bin",
    "/etc",
    "/lib",
    "/lib/x86_64-linux-gnu",
    "/lib64",
    "/sbin",
    "/snap/bin",
    "/usr/bin",
    "/usr/games",
    "/usr/include",
    "/usr/lib",
    "/usr/lib/x86_64-linux-gnu",
    "/usr/lib64",
    "/usr/libexec",
    "/usr/local",
    "/usr/local/bin",
    "/usr/local/etc",
    "/usr/local/games",
    "/usr/local/lib",
    "/usr/local/sbin",
    "/usr/sbin",
    "/usr/share",
    "/home/bin",
    "/home/sbin",
    "/opt",
    "/opt/bin",
    "/opt/sbin",
)


class Environment(ABC):
    """The view of the operating-system environment that locators rely on."""

    @abstractmethod
    def get_user_home(self) -> Path | None:
        """Return the user's home directory, if known."""

    @abstractmethod
    def get_root(self) -> Path | None:
        """Return a root directory to search under; None outside of tests."""

    @abstractmethod
    def get_env_var(self, key: str) -> str | None:
        """Return the value of an environment variable, if set."""

    @abstractmethod
    def get_know_global_search_locations(self) -> list[Path]:
        """Return the existing directories where global interpreters may live."""


def _split_paths(value: str) -> list[Path]:
    return [Path(part) for part in value.split(os.pathsep) if part]


def _user_home() -> Path | None:
    home = os.environ.get("HOME")
    if home is None:
        home = os.environ.get("USERPROFILE")
    return None if home is None else norm_case(Path(home))


class EnvironmentApi(Environment):
    """The real process environment; global search locations are computed
    once and then cached.

    A root directory may be given to search under; by default there is none.
    """

    def __init__(self, root: str | os.PathLike[str] | None = None) -> None:
        self._root = None if root is None else Path(root)
        self._lock = threading.Lock()
        self._global_search_locations: list[Path] = []

    def get_user_home(self) -> Path | None:
        return _user_home()

    def get_root(self) -> Path | None:
        return self._root

    def get_env_var(self, key: str) -> str | None:
        return os.environ.get(key)

    def get_know_global_search_locations(self) -> list[Path]:
        with self._lock:
            if not self._global_search_locations:
                self._global_search_locations.extend(self._discover())
            return list(self._global_search_locations)

    def _discover(self) -> list[Path]:
        paths = _split_paths(self.get_env_var("PATH") or "")
        logger.debug("Env PATH: %s", paths)
        if os.name == "nt":
            return [p for p in paths if p.exists()]

        for known in map(Path, KNOWN_UNIX_LOCATIONS):
            if known not in paths:
                paths.append(known)
        home = self.get_user_home()
        if home is not None:
            paths.append(home / ".local" / "bin")
        return [p for p in paths if p.exists()]