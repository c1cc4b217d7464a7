"""Lazy utility exports to keep optional dependencies optional."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "get_session",
    "get_engine",
    "init_database",
    "session_scope",
    "configure_logging",
    "get_logger",
    "setup_tracing",
    "trace_operation",
]

_LAZY_EXPORTS = {
    "get_session": ("aiqa.utils.database", "get_session"),
    "get_engine": ("aiqa.utils.database", "get_engine"),
    "init_database": ("aiqa.utils.database", "init_database"),
    "session_scope": ("aiqa.utils.database", "session_scope"),
    "configure_logging": ("aiqa.utils.logging_config", "configure_logging"),
    "get_logger": ("aiqa.utils.logging_config", "get_logger"),
    "setup_tracing": ("aiqa.utils.tracing", "setup_tracing"),
    "trace_operation": ("aiqa.utils.tracing", "trace_operation"),
}


def __getattr__(name: str) -> Any:
    if name not in _LAZY_EXPORTS:
        raise AttributeError(f"module 'aiqa.utils' has no attribute '{name}'")
    module_name, attr = _LAZY_EXPORTS[name]
    module = import_module(module_name)
    value = getattr(module, attr)
    globals()[name] = value
    return value
