"""Path helpers: case normalisation, symlink resolution and user expansion."""

from __future__ import annotations

import os
import stat
from pathlib import Path

_UNC_PREFIX = "\\\\?\\"


def norm_case(path: str | os.PathLike[str]) -> Path:
    """Return the path with its on-disk casing on Windows; unchanged elsewhere.

    Symlinks are deliberately not resolved on Unix, as that produces odd
    results for Homebrew installs.
    """
    original = Path(path)
    if os.name != "nt":
        return original
    try:
        resolved = original.resolve(strict=True)
    except (OSError, RuntimeError):
        return original
    resolved_text = str(resolved)
    if resolved_text.startswith(_UNC_PREFIX) and not str(path).startswith(_UNC_PREFIX):
        return Path(resolved_text[len(_UNC_PREFIX):])
    return resolved


def resolve_symlink(exe: str | os.PathLike[str]) -> Path | None:
    """Return the real file a python/conda symlink points to, or None.

    None is returned for files that are not symlinks, for helper scripts
    such as ``python3-config`` and for names that are neither python nor conda.
    """
    path = Path(exe)
    name = path.name
    if not name:
        return None
    if name.endswith("-config") or name.endswith("-build"):
        return None
    if not name.startswith("python") and not name.startswith("conda"):
        return None
    try:
        info = os.lstat(path)
    except OSError:
        return None
    if not stat.S_ISLNK(info.st_mode):
        return None
    try:
        real = path.resolve(strict=True)
    except (OSError, RuntimeError):
        return None
    return None if real == path else real


def _user_home() -> Path | None:
    home = os.environ.get("HOME")
    if home is None:
        home = os.environ.get("USERPROFILE")
    return norm_case(Path(home)) if home is not None else None


def expand_path(path: str | os.PathLike[str]) -> Path:
    """Expand a leading ``~`` and the ``${USERNAME}``/``${HOME}`` placeholders."""
    path = Path(path)
    if path.parts and path.parts[0] == "~":
        home = _user_home()
        if home is not None:
            return home.joinpath(*path.parts[1:])

    text = str(path)
    if "${USERNAME}" in text or "${HOME}" in text:
        username = os.environ.get("USERNAME", os.environ.get("USER", ""))
        home_text = os.environ.get("HOME", os.environ.get("USERPROFILE", ""))
        return Path(text.replace("${USERNAME}", username).replace("${HOME}", home_text))
    return path