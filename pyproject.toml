[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "envscout"
version = "0.1.0"
description = "Building blocks for discovering Python environments: models, path helpers, pyvenv.cfg, pipenv and Homebrew checks, and a JSON-RPC transport."
requires-python = ">=3.10"
dependencies = []
keywords = ["python", "environment", "virtualenv", "pipenv", "homebrew", "discovery", "json-rpc"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["envscout"]

[tool.pytest.ini_options]
addopts = "-ra"
