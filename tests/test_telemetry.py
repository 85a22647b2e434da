from datetime import timedelta

import pytest

from envscout.telemetry import (
    InaccuratePythonEnvironmentInfo,
    MissingCondaEnvironments,
    MissingPoetryEnvironments,
    RefreshPerformance,
    TelemetryEvent,
    TelemetryEventKind,
    get_telemetry_event_name,
)


def test_event_names():
    event = TelemetryEvent(TelemetryEventKind.SEARCH_COMPLETED, timedelta(seconds=1))
    assert get_telemetry_event_name(event) == "SearchCompleted"
    perf = TelemetryEvent(TelemetryEventKind.REFRESH_PERFORMANCE, RefreshPerformance(total=5))
    assert get_telemetry_event_name(perf) == "RefreshPerformance"


def test_all_kinds_have_distinct_names():
    events = [
        TelemetryEvent(TelemetryEventKind.SEARCH_COMPLETED, timedelta(0)),
        TelemetryEvent(TelemetryEventKind.REFRESH_PERFORMANCE, RefreshPerformance(total=1)),
        TelemetryEvent(
            TelemetryEventKind.ALL_SEARCH_PATHS_ENVIRONMENTS_SEARCH_COMPLETED,
            timedelta(0),
            search_path_count=1,
        ),
    ]
    names = {get_telemetry_event_name(event) for event in events}
    assert names == {
        "SearchCompleted",
        "RefreshPerformance",
        "AllSearchPathsEnvironmentsSearchCompleted",
    }
    assert len({kind.value for kind in TelemetryEventKind}) == 9


def test_duration_event_to_dict():
    event = TelemetryEvent(TelemetryEventKind.SEARCH_COMPLETED, timedelta(seconds=2))
    assert event.to_dict() == {"searchCompleted": {"secs": 2, "nanos": 0}}


def test_search_paths_event_carries_count():
    event = TelemetryEvent(
        TelemetryEventKind.ALL_SEARCH_PATHS_ENVIRONMENTS_SEARCH_COMPLETED,
        timedelta(seconds=3),
        search_path_count=4,
    )
    (value,) = event.to_dict().values()
    assert value[1] == 4
    assert value[0]["secs"] == 3


def test_payload_event_wraps_payload_dict():
    perf = RefreshPerformance(total=10, breakdown={"b": 2, "a": 1}, locators={"Conda": 7})
    event = TelemetryEvent(TelemetryEventKind.REFRESH_PERFORMANCE, perf)
    (value,) = event.to_dict().values()
    assert value == perf.to_dict()


def test_refresh_performance_sorted_breakdown():
    perf = RefreshPerformance(total=10, breakdown={"b": 2, "a": 1})
    data = perf.to_dict()
    assert list(data["breakdown"]) == ["a", "b"]
    assert data["total"] == 10
    assert data["locators"] == {}


def test_event_rejects_wrong_payload():
    with pytest.raises(TypeError):
        TelemetryEvent(TelemetryEventKind.SEARCH_COMPLETED, RefreshPerformance(total=1))
    with pytest.raises(TypeError):
        TelemetryEvent(TelemetryEventKind.REFRESH_PERFORMANCE, timedelta(seconds=1))


def test_event_requires_search_path_count():
    with pytest.raises(ValueError):
        TelemetryEvent(
            TelemetryEventKind.ALL_SEARCH_PATHS_ENVIRONMENTS_SEARCH_COMPLETED, timedelta(0)
        )
    with pytest.raises(ValueError):
        TelemetryEvent(TelemetryEventKind.SEARCH_COMPLETED, timedelta(0), search_path_count=1)


def test_negative_duration_rejected():
    with pytest.raises(ValueError):
        TelemetryEvent(TelemetryEventKind.SEARCH_COMPLETED, timedelta(seconds=-1))


def test_inaccurate_info_display():
    info = InaccuratePythonEnvironmentInfo(kind="Conda", invalid_prefix=True, invalid_arch=True)
    assert str(info) == (
        "Environment Some(Conda) incorrectly identified\n"
        "   Prefix is incorrect\n"
        "   Architecture is incorrect\n"
    )


def test_inaccurate_info_display_without_kind():
    info = InaccuratePythonEnvironmentInfo(invalid_executable=False)
    assert str(info) == "Environment None incorrectly identified\n"


def test_inaccurate_info_to_dict():
    data = InaccuratePythonEnvironmentInfo(kind="Venv", invalid_version=True).to_dict()
    assert data["kind"] == "Venv"
    assert data["invalidVersion"] is True
    assert len(data) == 6


def test_missing_conda_display():
    missing = MissingCondaEnvironments(
        missing=3, user_provided_conda_exe=True, sys_rc_not_found=True, other_rc_not_found=2
    )
    assert str(missing) == (
        "Missing Conda Environments (3): \n"
        "   User Provided Conda Exe\n"
        "   Sys conda_rc not found\n"
        "   Other conda_rc not found (2)\n"
    )


def test_missing_conda_user_rc_env_dirs_line_reports_env_dirs_count():
    missing = MissingCondaEnvironments(missing=1, missing_from_user_rc_env_dirs=2)
    assert str(missing).splitlines()[-1] == "   Missing envs from env_dirs in user conda_rc (0)"


def test_missing_conda_to_dict_keys_are_camel_case():
    data = MissingCondaEnvironments(missing=1, env_dirs_not_found=4).to_dict()
    assert data["missing"] == 1
    assert data["envDirsNotFound"] == 4
    assert all("_" not in key for key in data)


def test_missing_conda_rejects_out_of_range():
    with pytest.raises(ValueError):
        MissingCondaEnvironments(missing=-1)
    with pytest.raises(ValueError):
        MissingCondaEnvironments(missing=1, other_rc_not_found=70000)


def test_missing_poetry_to_dict():
    data = MissingPoetryEnvironments(missing=2, missing_in_path=1, cache_dir_is_different=True)
    result = data.to_dict()
    assert result["missingInPath"] == 1
    assert result["cacheDirIsDifferent"] is True
    assert result["poetryExeNotFound"] is None


def test_missing_poetry_rejects_non_integer():
    with pytest.raises(TypeError):
        MissingPoetryEnvironments(missing="2", missing_in_path=0)