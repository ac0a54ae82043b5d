"""CLI package for running and interacting with the Ecowitt bridge service."""

from importlib import import_module
from types import ModuleType


def __getattr__(name: str) -> ModuleType:
    if name == "app":
        return import_module("cli.app")
    raise AttributeError(name)

# ``cli.app`` stays the module, not the Typer instance, so tests can patch
# attributes such as ``cli.app.ApiClient`` on it.

__all__ = []
