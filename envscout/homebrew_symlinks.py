"""Known symlinks and versions of Homebrew Python installs."""

from __future__ import annotations

import os
import re
from pathlib import Path

from envscout.paths import resolve_symlink

_FORMULA_VERSION = re.compile(r"/python@((\d+\.?)*)/")
_FULL_VERSION = re.compile(r"/(\d+\.\d+\.\d+)")

_HOMEBREW_ROOTS = ("/opt/homebrew", "/usr/local/Cellar", "/home/linuxbrew/.linuxbrew")


def _starts_with(path: Path, root: str) -> bool:
    return path.is_relative_to(root)


def is_homebrew_python(exe: str | os.PathLike[str]) -> bool:
    """True when ``exe`` lies under one of the Homebrew install roots."""
    path = Path(exe)
    return any(_starts_with(path, root) for root in _HOMEBREW_ROOTS)


def get_version(resolved_exe: str | os.PathLike[str]) -> str | None:
    """Return the first ``x.y.z`` directory version found in the path."""
    match = _FULL_VERSION.search(str(resolved_exe))
    return match.group(1) if match else None


def _canonical(path: Path) -> Path | None:
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError):
        return None


def _opt_homebrew_candidates(version: str, full: str) -> list[str]:
    return [
        f"/opt/homebrew/bin/python{version}",
        f"/opt/homebrew/opt/python@{version}/bin/python{version}",
        f"/opt/homebrew/Cellar/python@{version}/{full}/bin/python{version}",
        f"/opt/homebrew/Cellar/python@{version}/{full}/Frameworks/Python.framework/Versions/{version}/bin/python{version}",
        f"/opt/homebrew/Cellar/python@{version}/{full}/Frameworks/Python.framework/Versions/Current/bin/python{version}",
        f"/opt/homebrew/Frameworks/Python.framework/Versions/{version}/bin/python{version}",
        f"/opt/homebrew/Frameworks/Python.framework/Versions/Current/bin/python{version}",
        f"/usr/local/opt/python@{version}/bin/python3",
        f"/usr/local/opt/python@{version}/bin/python{version}",
        "/opt/homebrew/opt/python/bin/python3",
        f"/opt/homebrew/opt/python/bin/python{version}",
        "/opt/homebrew/opt/python@3/bin/python3",
        f"/opt/homebrew/opt/python@3/bin/python{version}",
        f"/opt/homebrew/opt/python@{version}/bin/python3",
        f"/opt/homebrew/opt/python@{version}/bin/python{version}",
        "/usr/local/opt/python@3/bin/python3",
        f"/usr/local/opt/python@3/bin/python{version}",
        f"/opt/homebrew/opt/python3/bin/python{version}",
        "/opt/homebrew/bin/python3",
        "/opt/homebrew/bin/python",
    ]


def _usr_local_cellar_candidates(version: str, full: str) -> list[str]:
    return [
        f"/usr/local/opt/python@{version}/bin/python3",
        f"/usr/local/opt/python@{version}/bin/python{version}",
        "/usr/local/opt/python@3/bin/python3",
        f"/usr/local/opt/python@3/bin/python{version}",
        f"/usr/local/Cellar/python@{version}/{full}/bin/python{version}",
        f"/usr/local/Cellar/python@{version}/{full}/Frameworks/Python.framework/Versions/{version}/bin/python{version}",
        # Other installers may overwrite these; they only count when they
        # point back to the same interpreter.
        f"/usr/local/bin/python{version}",
        "/usr/local/bin/python3",
        "/usr/local/bin/python",
    ]


def _linuxbrew_candidates(version: str, full: str) -> list[str]:
    return [
        "/home/linuxbrew/.linuxbrew/bin/python3",
        f"/home/linuxbrew/.linuxbrew/bin/python{version}",
        f"/home/linuxbrew/.linuxbrew/Cellar/python@{version}/{full}/bin/python{version}",
        f"/home/linuxbrew/.linuxbrew/Cellar/python@{version}/{full}/bin/python3",
        f"/home/linuxbrew/.linuxbrew/opt/python@{version}/bin/python{version}",
        f"/home/linuxbrew/.linuxbrew/opt/python@{version}/bin/python3",
        f"/home/linuxbrew/.linuxbrew/opt/python3/bin/python{version}",
        "/home/linuxbrew/.linuxbrew/opt/python3/bin/python3",
        f"/home/linuxbrew/.linuxbrew/opt/python@3/bin/python{version}",
        "/home/linuxbrew/.linuxbrew/opt/python@3/bin/python3",
        f"/usr/local/bin/python{version}",
        "/usr/local/bin/python3",
        "/usr/local/bin/python",
    ]


def get_known_symlinks_impl(
    symlink_resolved_python_exe: str | os.PathLike[str], full_version: str
) -> list[Path]:
    """Return the resolved executable followed by every well-known Homebrew
    path that points back to it.

    Nothing is returned for paths outside Homebrew or without a
    ``python@x.y`` formula directory.
    """
    exe = Path(symlink_resolved_python_exe)
    if _starts_with(exe, "/opt/homebrew"):
        candidates_for, use_canonical = _opt_homebrew_candidates, True
    elif _starts_with(exe, "/usr/local/Cellar"):
        candidates_for, use_canonical = _usr_local_cellar_candidates, False
    elif _starts_with(exe, "/home/linuxbrew/.linuxbrew"):
        candidates_for, use_canonical = _linuxbrew_candidates, True
    else:
        return []

    match = _FORMULA_VERSION.search(str(exe))
    if match is None:
        return []
    version = match.group(1)

    symlinks = [exe]
    for candidate in map(Path, candidates_for(version, full_version)):
        target = resolve_symlink(candidate)
        if target is None and use_canonical:
            target = _canonical(candidate)
        if target is not None and target in symlinks:
            symlinks.append(candidate)
    return symlinks