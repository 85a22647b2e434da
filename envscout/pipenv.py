"""Recognising pipenv environments by their project link and Pipfile."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path

from envscout.env import PythonEnv
from envscout.os_environment import Environment
from envscout.paths import norm_case

_DEFAULT_MAX_DEPTH = 3
_DEFAULT_PIPFILE = "Pipfile"
_U16 = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class PipenvSettings:
    """Pipenv settings read from the environment."""

    max_depth: int = _DEFAULT_MAX_DEPTH
    pipfile: str = _DEFAULT_PIPFILE


def _parse_u16(text: str) -> int | None:
    if not _U16.fullmatch(text):
        return None
    value = int(text)
    return value if value <= 0xFFFF else None


def read_pipenv_settings(environment: Environment) -> PipenvSettings:
    """Read PIPENV_MAX_DEPTH and PIPENV_PIPFILE, falling back to the defaults."""
    depth_text = environment.get_env_var("PIPENV_MAX_DEPTH")
    depth = None if depth_text is None else _parse_u16(depth_text)
    pipfile = environment.get_env_var("PIPENV_PIPFILE")
    return PipenvSettings(
        max_depth=_DEFAULT_MAX_DEPTH if depth is None else depth,
        pipfile=_DEFAULT_PIPFILE if pipfile is None else pipfile,
    )


def get_pipenv_project_from_prefix(prefix: str | os.PathLike[str]) -> Path | None:
    """Return the existing project folder named in ``prefix/.project``."""
    try:
        contents = (Path(prefix) / ".project").read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    project = norm_case(Path(contents.strip()))
    return project if project.exists() else None


def get_pipenv_project(env: PythonEnv) -> Path | None:
    """Return the project folder an environment is linked to, if any."""
    if env.prefix is not None:
        return get_pipenv_project_from_prefix(env.prefix)
    bin_dir = Path(env.executable).parent
    if bin_dir.name in ("bin", "Scripts"):
        return get_pipenv_project_from_prefix(bin_dir.parent)
    return get_pipenv_project_from_prefix(bin_dir)


def is_pipenv(env: PythonEnv, settings: PipenvSettings) -> bool:
    """True when the linked project holds a Pipfile; otherwise the environment
    is more likely a virtualenvwrapper one or similar."""
    project = get_pipenv_project(env)
    return project is not None and (project / settings.pipfile).exists()