"""A Python executable together with whatever is already known about it."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from envscout.paths import norm_case
from envscout.pyvenv_cfg import PyVenvCfg


@dataclass
class PythonEnv:
    """An interpreter executable with its optional prefix, version and symlinks.

    When no prefix is given and the executable lives in a ``bin`` or
    ``Scripts`` directory next to a pyvenv.cfg, that directory's parent
    becomes the prefix.
    """

    executable: Path
    prefix: Path | None = None
    version: str | None = None
    symlinks: list[Path] | None = None

    def __post_init__(self) -> None:
        executable = Path(os.fspath(self.executable))
        prefix = None if self.prefix is None else norm_case(self.prefix)
        if prefix is None:
            bin_dir = executable.parent
            if bin_dir.name in ("Scripts", "bin"):
                candidate = bin_dir.parent
                if PyVenvCfg.find(candidate) is not None:
                    prefix = candidate
        self.executable = norm_case(executable)
        self.prefix = prefix
        if self.symlinks is not None:
            self.symlinks = [Path(os.fspath(p)) for p in self.symlinks]