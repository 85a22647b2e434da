"""Telemetry events emitted while searching for environments."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import timedelta
from enum import Enum
from typing import Any, Union

_U16_MAX = 2**16 - 1
_U32_MAX = 2**32 - 1
_U128_MAX = 2**128 - 1


def _check_uint(name: str, value: int | None, maximum: int) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {value!r}")
    if not 0 <= value <= maximum:
        raise ValueError(f"{name} must be between 0 and {maximum}, got {value}")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _kind_label(kind: Any) -> str:
    return getattr(kind, "name", str(kind))


def _camel_dict(obj: Any) -> dict[str, Any]:
    return {_camel(f.name): getattr(obj, f.name) for f in fields(obj)}


@dataclass(frozen=True)
class InaccuratePythonEnvironmentInfo:
    """Which details of a discovered environment turned out to be wrong."""

    kind: Any = None
    invalid_executable: bool | None = None
    executable_not_in_symlinks: bool | None = None
    invalid_prefix: bool | None = None
    invalid_version: bool | None = None
    invalid_arch: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        data = _camel_dict(self)
        data["kind"] = None if self.kind is None else _kind_label(self.kind)
        return data

    def __str__(self) -> str:
        kind = "None" if self.kind is None else f"Some({_kind_label(self.kind)})"
        lines = [f"Environment {kind} incorrectly identified"]
        checks = [
            (self.invalid_executable, "Executable is incorrect"),
            (self.executable_not_in_symlinks, "Executable is not in the list of symlinks"),
            (self.invalid_prefix, "Prefix is incorrect"),
            (self.invalid_version, "Version is incorrect"),
            (self.invalid_arch, "Architecture is incorrect"),
        ]
        lines.extend(f"   {text}" for flag, text in checks if flag)
        return "\n".join(lines) + "\n"


@dataclass(frozen=True)
class MissingCondaEnvironments:
    """Conda environments found only by running conda, with likely causes."""

    missing: int
    env_dirs_not_found: int | None = None
    user_provided_conda_exe: bool | None = None
    root_prefix_not_found: bool | None = None
    conda_prefix_not_found: bool | None = None
    conda_manager_not_found: bool | None = None
    sys_rc_not_found: bool | None = None
    user_rc_not_found: bool | None = None
    other_rc_not_found: int | None = None
    missing_env_dirs_from_sys_rc: int | None = None
    missing_env_dirs_from_user_rc: int | None = None
    missing_env_dirs_from_other_rc: int | None = None
    missing_from_sys_rc_env_dirs: int | None = None
    missing_from_user_rc_env_dirs: int | None = None
    missing_from_other_rc_env_dirs: int | None = None

    def __post_init__(self) -> None:
        for f in fields(self):
            if f.type in ("int", "int | None"):
                _check_uint(f.name, getattr(self, f.name), _U16_MAX)

    def to_dict(self) -> dict[str, Any]:
        return _camel_dict(self)

    def __str__(self) -> str:
        lines = [f"Missing Conda Environments ({self.missing}): "]
        flags = [
            (self.user_provided_conda_exe, "User Provided Conda Exe"),
            (self.root_prefix_not_found, "Root Prefix not found"),
            (self.conda_prefix_not_found, "Conda Prefix not found"),
            (self.conda_manager_not_found, "Conda Manager not found"),
            (self.sys_rc_not_found, "Sys conda_rc not found"),
            (self.user_rc_not_found, "User conda_rc not found"),
        ]
        lines.extend(f"   {text}" for flag, text in flags if flag)
        # The user-rc env_dirs line reports the env_dirs-from-user-rc count.
        counts = [
            (self.other_rc_not_found, self.other_rc_not_found, "Other conda_rc not found"),
            (self.missing_env_dirs_from_sys_rc, self.missing_env_dirs_from_sys_rc,
             "Missing env_dirs from sys conda_rc"),
            (self.missing_env_dirs_from_user_rc, self.missing_env_dirs_from_user_rc,
             "Missing env_dirs from user conda_rc"),
            (self.missing_env_dirs_from_other_rc, self.missing_env_dirs_from_other_rc,
             "Missing env_dirs from other conda_rc"),
            (self.missing_from_sys_rc_env_dirs, self.missing_from_sys_rc_env_dirs,
             "Missing envs from env_dirs in sys conda_rc"),
            (self.missing_from_user_rc_env_dirs, self.missing_env_dirs_from_user_rc,
             "Missing envs from env_dirs in user conda_rc"),
            (self.missing_from_other_rc_env_dirs, self.missing_from_other_rc_env_dirs,
             "Missing envs from env_dirs in other conda_rc"),
        ]
        lines.extend(
            f"   {text} ({shown or 0})" for test, shown, text in counts if (test or 0) > 0
        )
        return "\n".join(lines) + "\n"


@dataclass(frozen=True)
class MissingPoetryEnvironments:
    """Poetry environments found only by running poetry, with likely causes."""

    missing: int
    missing_in_path: int
    user_provided_poetry_exe: bool | None = None
    poetry_exe_not_found: bool | None = None
    global_config_not_found: bool | None = None
    cache_dir_not_found: bool | None = None
    cache_dir_is_different: bool | None = None
    virtualenvs_path_not_found: bool | None = None
    virtualenvs_path_is_different: bool | None = None
    in_project_is_different: bool | None = None

    def __post_init__(self) -> None:
        _check_uint("missing", self.missing, _U16_MAX)
        _check_uint("missing_in_path", self.missing_in_path, _U16_MAX)

    def to_dict(self) -> dict[str, Any]:
        return _camel_dict(self)


@dataclass(frozen=True)
class RefreshPerformance:
    """Refresh timings in milliseconds, overall and broken down."""

    total: int
    breakdown: dict[str, int] = field(default_factory=dict)
    locators: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _check_uint("total", self.total, _U128_MAX)
        for mapping in (self.breakdown, self.locators):
            for key, value in mapping.items():
                _check_uint(key, value, _U128_MAX)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "breakdown": dict(sorted(self.breakdown.items())),
            "locators": dict(sorted(self.locators.items())),
        }


class TelemetryEventKind(Enum):
    """The kinds of telemetry event, valued by their event names."""

    GLOBAL_ENVIRONMENTS_SEARCH_COMPLETED = "GlobalEnvironmentsSearchCompleted"
    GLOBAL_VIRTUAL_ENVIRONMENTS_SEARCH_COMPLETED = "GlobalVirtualEnvironmentsSearchCompleted"
    GLOBAL_PATH_VARIABLE_ENVIRONMENTS_SEARCH_COMPLETED = (
        "GlobalPathVariableEnvironmentsSearchCompleted"
    )
    ALL_SEARCH_PATHS_ENVIRONMENTS_SEARCH_COMPLETED = "AllSearchPathsEnvironmentsSearchCompleted"
    SEARCH_COMPLETED = "SearchCompleted"
    INACCURATE_PYTHON_ENVIRONMENT_INFO = "InaccuratePythonEnvironmentInfo"
    MISSING_CONDA_ENVIRONMENTS = "MissingCondaEnvironments"
    MISSING_POETRY_ENVIRONMENTS = "MissingPoetryEnvironments"
    REFRESH_PERFORMANCE = "RefreshPerformance"


_DURATION_KINDS = frozenset(
    {
        TelemetryEventKind.GLOBAL_ENVIRONMENTS_SEARCH_COMPLETED,
        TelemetryEventKind.GLOBAL_VIRTUAL_ENVIRONMENTS_SEARCH_COMPLETED,
        TelemetryEventKind.GLOBAL_PATH_VARIABLE_ENVIRONMENTS_SEARCH_COMPLETED,
        TelemetryEventKind.ALL_SEARCH_PATHS_ENVIRONMENTS_SEARCH_COMPLETED,
        TelemetryEventKind.SEARCH_COMPLETED,
    }
)

_PAYLOAD_TYPES: dict[TelemetryEventKind, type] = {
    TelemetryEventKind.INACCURATE_PYTHON_ENVIRONMENT_INFO: InaccuratePythonEnvironmentInfo,
    TelemetryEventKind.MISSING_CONDA_ENVIRONMENTS: MissingCondaEnvironments,
    TelemetryEventKind.MISSING_POETRY_ENVIRONMENTS: MissingPoetryEnvironments,
    TelemetryEventKind.REFRESH_PERFORMANCE: RefreshPerformance,
}

TelemetryData = Union[
    timedelta,
    InaccuratePythonEnvironmentInfo,
    MissingCondaEnvironments,
    MissingPoetryEnvironments,
    RefreshPerformance,
]


def _duration_dict(duration: timedelta) -> dict[str, int]:
    return {
        "secs": duration.days * 86400 + duration.seconds,
        "nanos": duration.microseconds * 1000,
    }


@dataclass(frozen=True)
class TelemetryEvent:
    """A telemetry event: its kind, its data, and for the search-paths
    event the number of custom search paths."""

    kind: TelemetryEventKind
    data: TelemetryData
    search_path_count: int | None = None

    def __post_init__(self) -> None:
        if self.kind in _DURATION_KINDS:
            if not isinstance(self.data, timedelta):
                raise TypeError(f"{self.kind.value} needs a timedelta, got {self.data!r}")
            if self.data < timedelta(0):
                raise ValueError("durations cannot be negative")
        else:
            expected = _PAYLOAD_TYPES[self.kind]
            if not isinstance(self.data, expected):
                raise TypeError(f"{self.kind.value} needs {expected.__name__}, got {self.data!r}")
        if self.kind is TelemetryEventKind.ALL_SEARCH_PATHS_ENVIRONMENTS_SEARCH_COMPLETED:
            if self.search_path_count is None:
                raise ValueError(f"{self.kind.value} needs search_path_count")
            _check_uint("search_path_count", self.search_path_count, _U32_MAX)
        elif self.search_path_count is not None:
            raise ValueError(f"{self.kind.value} takes no search_path_count")

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form, keyed by the camel-cased event name."""
        name = self.kind.value
        key = name[0].lower() + name[1:]
        if self.kind is TelemetryEventKind.ALL_SEARCH_PATHS_ENVIRONMENTS_SEARCH_COMPLETED:
            value: Any = [_duration_dict(self.data), self.search_path_count]
        elif self.kind in _DURATION_KINDS:
            value = _duration_dict(self.data)
        else:
            value = self.data.to_dict()
        return {key: value}


def get_telemetry_event_name(event: TelemetryEvent) -> str:
    """Return the name under which the event is reported."""
    return event.kind.value