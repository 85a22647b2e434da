# envscout

envscout holds the building blocks for finding Python environments on a
machine and describing each one: its executable, prefix, version and
architecture, plus the other paths that point to the same interpreter.
Everything works from the file system alone; no interpreter is started.

## What it covers

- Path helpers (`envscout.paths`): `norm_case`, `resolve_symlink` and
  `expand_path`. `expand_path` handles a leading `~` and the `${HOME}` and
  `${USERNAME}` placeholders.
- Core models:
  - `PythonEnv` (`envscout.env`): an executable with optional prefix,
    version and symlinks; the prefix is filled in from a neighbouring
    `pyvenv.cfg` when the executable sits in `bin` or `Scripts`.
  - `PythonEnvironment`, `PythonEnvironmentBuilder` and
    `PythonEnvironmentKind` (`envscout.python_environment`), together with
    `get_shortest_executable` and `get_environment_key`.
  - `EnvManager` and `EnvManagerType` (`envscout.manager`).
  - `Architecture` (`envscout.arch`).
- `pyvenv.cfg` handling (`envscout.pyvenv_cfg`): `find_pyvenv_cfg`,
  `parse_pyvenv_cfg` and `PyVenvCfg.find`.
- OS environment access (`envscout.os_environment`): the abstract
  `Environment` and the real `EnvironmentApi`. They cover the user home,
  environment variables and the known global search locations, which are
  computed once and cached.
- Locator contracts (`envscout.locator`): the abstract `Locator` and
  `Reporter`, plus `LocatorKind`, `Configuration` and `LocatorResult`.
- Search paths from `PATH`, with the Windows Store `WindowsApps` folder
  left out (`envscout.env_var_path`): `get_search_paths_from_env_variables`.
- Pipenv detection (`envscout.pipenv`): `PipenvSettings`,
  `read_pipenv_settings`, `get_pipenv_project`,
  `get_pipenv_project_from_prefix` and `is_pipenv`.
- Homebrew support:
  - Install prefixes (`envscout.homebrew_locations`):
    `HomebrewEnvVariables`, `read_homebrew_env_variables` and
    `get_homebrew_prefix_bin`.
  - Symlinks and versions (`envscout.homebrew_symlinks`):
    `is_homebrew_python`, `get_known_symlinks_impl` and `get_version`.
- Telemetry events (`envscout.telemetry`):
  - `TelemetryEvent` and `TelemetryEventKind`
  - the payloads `InaccuratePythonEnvironmentInfo`,
    `MissingCondaEnvironments`, `MissingPoetryEnvironments` and
    `RefreshPerformance`
  - `get_telemetry_event_name`
- A JSON-RPC transport with Content-Length framing (`envscout.jsonrpc`):
  - `send_message`, `send_reply` and `send_error` write to standard
    output or to a given stream.
  - `HandlersKeyedByMethodName` dispatches requests and notifications by
    method name.
  - `start_server` reads framed messages until its input ends.
  - `get_content_length` parses a header line.

## What it does not do

envscout provides no concrete locators, so nothing here searches a
machine end to end. No class implements `Locator` to walk Homebrew, pipenv,
global or other installs and report what it finds. There is no
command-line program and no request handlers for a discovery service. The
JSON-RPC transport only frames and dispatches messages to handlers you
register.

## Installing

```
pip install .
```

## Example

The builder picks the shortest path among the executable and its
symlinks as the reported executable:

```python
from pathlib import Path
from envscout.python_environment import PythonEnvironmentBuilder, PythonEnvironmentKind

env = (
    PythonEnvironmentBuilder(PythonEnvironmentKind.Homebrew)
    .executable(Path("/opt/homebrew/bin/python3.12"))
    .version("3.12.3")
    .symlinks([Path("/opt/homebrew/opt/python@3.12/bin/python3.12")])
    .build()
)
print(env)
print(env.to_dict())
```

Serving JSON-RPC over standard input:

```python
import sys
from envscout.jsonrpc import HandlersKeyedByMethodName, send_reply, start_server

handlers = HandlersKeyedByMethodName(context={})
handlers.add_request_handler("ping", lambda ctx, id, params: send_reply(id, "pong"))
start_server(handlers, sys.stdin.buffer)
```

Requests to unknown methods get an error reply. Notifications for unknown
methods get one too.

## Running the tests

```
pip install .[test]
pytest
```