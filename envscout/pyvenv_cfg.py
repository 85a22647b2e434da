"""Reading the interpreter version from a virtual environment's pyvenv.cfg."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path

PYVENV_CONFIG_FILE = "pyvenv.cfg"

_VERSION = re.compile(r"version\s*=\s*(\d+\.\d+\.\d+)")
_VERSION_INFO = re.compile(r"version_info\s*=\s*(\d+\.\d+\.\d+.*)")


@dataclass(frozen=True)
class PyVenvCfg:
    """The parts of a pyvenv.cfg file that are of interest."""

    version: str

    @classmethod
    def find(cls, path: str | os.PathLike[str]) -> PyVenvCfg | None:
        """Locate and parse the pyvenv.cfg belonging to ``path``, if any."""
        cfg = find_pyvenv_cfg(path)
        return None if cfg is None else parse_pyvenv_cfg(cfg)


def find_pyvenv_cfg(path: str | os.PathLike[str]) -> Path | None:
    """Return the pyvenv.cfg in ``path``, or in its parent when ``path`` is
    the environment's bin (Scripts on Windows) directory."""
    path = Path(path)
    cfg = path / PYVENV_CONFIG_FILE
    if cfg.exists():
        return cfg

    bin_name = "Scripts" if os.name == "nt" else "bin"
    if path.name == bin_name:
        cfg = path.parent / PYVENV_CONFIG_FILE
        if cfg.exists():
            return cfg
    return None


def _lines(text: str):
    for line in text.split("\n"):
        yield line[:-1] if line.endswith("\r") else line


def parse_pyvenv_cfg(file: str | os.PathLike[str]) -> PyVenvCfg | None:
    """Return the version recorded in a pyvenv.cfg file, or None."""
    try:
        contents = Path(file).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    for line in _lines(contents):
        if "version" not in line:
            continue
        for pattern in (_VERSION, _VERSION_INFO):
            match = pattern.fullmatch(line)
            if match:
                return PyVenvCfg(match.group(1))
    return None