"""Models, path helpers, pipenv and Homebrew checks, and a JSON-RPC transport
for discovering Python environments."""

__version__ = "0.1.0"