"""Where Homebrew installs live and the environment settings that point there."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from envscout.os_environment import Environment

# Apple Silicon, macOS Intel and Linux install prefixes. Several Homebrew
# installs can coexist (e.g. under Rosetta), so all of them are searched.
DEFAULT_HOMEBREW_BIN_DIRS = (
    "/home/linuxbrew/.linuxbrew/bin",
    "/opt/homebrew/bin",
    "/usr/local/bin",
)


@dataclass(frozen=True)
class HomebrewEnvVariables:
    """The environment settings the Homebrew search depends on.

    Every field must be given explicitly so that none is forgotten.
    """

    home: Path | None
    root: Path | None
    path: str | None
    homebrew_prefix: str | None
    known_global_search_locations: list[Path]


def read_homebrew_env_variables(environment: Environment) -> HomebrewEnvVariables:
    """Collect the Homebrew-related settings from ``environment``."""
    return HomebrewEnvVariables(
        home=environment.get_user_home(),
        root=environment.get_root(),
        path=environment.get_env_var("PATH"),
        homebrew_prefix=environment.get_env_var("HOMEBREW_PREFIX"),
        known_global_search_locations=list(
            environment.get_know_global_search_locations()
        ),
    )


def get_homebrew_prefix_bin(env_vars: HomebrewEnvVariables) -> list[Path]:
    """Return the existing Homebrew ``bin`` directories.

    The well-known locations come first, followed by ``$HOMEBREW_PREFIX/bin``
    when it exists and is not already listed.
    """
    bins = [p for p in map(Path, DEFAULT_HOMEBREW_BIN_DIRS) if p.exists()]
    if env_vars.homebrew_prefix is not None:
        prefix_bin = Path(env_vars.homebrew_prefix) / "bin"
        if prefix_bin.exists() and prefix_bin not in bins:
            bins.append(prefix_bin)
    return bins