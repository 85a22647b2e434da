"""Search paths taken from the PATH environment variable."""

from __future__ import annotations

from pathlib import Path

from envscout.os_environment import Environment


def get_search_paths_from_env_variables(environment: Environment) -> list[Path]:
    """Return the global search locations, leaving out the Windows Store
    ``WindowsApps`` directory, whose entries are only pointers found elsewhere.

    Without a known user home nothing is returned.
    """
    home = environment.get_user_home()
    if home is None:
        return []
    apps_path = Path(home) / "AppData" / "Local" / "Microsoft" / "WindowsApps"
    return [
        p
        for p in environment.get_know_global_search_locations()
        if not Path(p).is_relative_to(apps_path)
    ]