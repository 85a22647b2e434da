from pathlib import Path

from envscout.env import PythonEnv
from envscout.os_environment import Environment
from envscout.pipenv import (
    PipenvSettings,
    get_pipenv_project,
    get_pipenv_project_from_prefix,
    is_pipenv,
    read_pipenv_settings,
)


class FakeEnvironment(Environment):
    def __init__(self, variables=None):
        self.variables = variables or {}

    def get_user_home(self):
        return None

    def get_root(self):
        return None

    def get_env_var(self, key):
        return self.variables.get(key)

    def get_know_global_search_locations(self):
        return []


def make_env(tmp_path, with_pipfile=True, pipfile="Pipfile"):
    project = tmp_path / "project"
    project.mkdir()
    if with_pipfile:
        (project / pipfile).write_text("[packages]\n")
    prefix = tmp_path / "venvs" / "project-abc"
    (prefix / "bin").mkdir(parents=True)
    (prefix / ".project").write_text(str(project) + "\n")
    return project, prefix


def test_default_settings():
    settings = read_pipenv_settings(FakeEnvironment())
    assert settings == PipenvSettings(max_depth=3, pipfile="Pipfile")


def test_settings_from_variables():
    env = FakeEnvironment({"PIPENV_MAX_DEPTH": "7", "PIPENV_PIPFILE": "Other.toml"})
    settings = read_pipenv_settings(env)
    assert settings.max_depth == 7
    assert settings.pipfile == "Other.toml"


def test_invalid_depth_falls_back():
    assert read_pipenv_settings(FakeEnvironment({"PIPENV_MAX_DEPTH": "abc"})).max_depth == 3
    assert read_pipenv_settings(FakeEnvironment({"PIPENV_MAX_DEPTH": "70000"})).max_depth == 3


def test_project_from_prefix(tmp_path):
    project, prefix = make_env(tmp_path)
    assert get_pipenv_project_from_prefix(prefix).resolve() == project.resolve()


def test_project_from_prefix_missing_file(tmp_path):
    assert get_pipenv_project_from_prefix(tmp_path) is None


def test_project_from_prefix_missing_folder(tmp_path):
    (tmp_path / ".project").write_text(str(tmp_path / "gone"))
    assert get_pipenv_project_from_prefix(tmp_path) is None


def test_project_from_executable_in_bin(tmp_path):
    project, prefix = make_env(tmp_path)
    env = PythonEnv(prefix / "bin" / "python")
    assert get_pipenv_project(env).resolve() == project.resolve()


def test_project_from_executable_outside_bin(tmp_path):
    project, prefix = make_env(tmp_path)
    env = PythonEnv(prefix / "python")
    assert get_pipenv_project(env).resolve() == project.resolve()


def test_project_uses_given_prefix(tmp_path):
    project, prefix = make_env(tmp_path)
    env = PythonEnv(Path(tmp_path / "elsewhere" / "python"), prefix=prefix)
    assert get_pipenv_project(env).resolve() == project.resolve()


def test_is_pipenv_with_pipfile(tmp_path):
    _, prefix = make_env(tmp_path)
    assert is_pipenv(PythonEnv(prefix / "bin" / "python"), PipenvSettings()) is True


def test_is_not_pipenv_without_pipfile(tmp_path):
    _, prefix = make_env(tmp_path, with_pipfile=False)
    assert is_pipenv(PythonEnv(prefix / "bin" / "python"), PipenvSettings()) is False


def test_is_pipenv_with_custom_pipfile(tmp_path):
    _, prefix = make_env(tmp_path, pipfile="Custom")
    env = PythonEnv(prefix / "bin" / "python")
    assert is_pipenv(env, PipenvSettings(pipfile="Custom")) is True
    assert is_pipenv(env, PipenvSettings()) is False