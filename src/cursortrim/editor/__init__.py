"""Editor package containing the buffer contract, locator and trim command."""

from importlib import import_module
from typing import Any

from . import buffer, trim, whitespace

__all__ = ["buffer", "trim", "whitespace"]


def __getattr__(name: str) -> Any:
	if name == "qt_buffer":
		module = import_module(f"{__name__}.{name}")
		globals()[name] = module
		return module
	raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
