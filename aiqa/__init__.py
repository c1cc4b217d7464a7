"""AIQA (AI content quality assurance) public interface."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__version__ = "1.0.0"

_MODEL_EXPORTS = {
    "Base",
    "MetricsSnapshot",
    "Alert",
    "AlertType",
    "AlertSeverity",
    "FeedbackEntry",
    "ReviewItem",
    "ReviewPriority",
    "ReviewStatus",
    "QualityAssessment",
    "QualityFlag",
}

__all__ = ["__version__", *_MODEL_EXPORTS]


def __getattr__(name: str) -> Any:
    """Lazily import ORM models on demand.

    Importing :mod:`aiqa` stays lightweight; the ORM models are imported
    just-in-time and cached in ``globals()`` for subsequent lookups.
    """

    if name in _MODEL_EXPORTS:
        models = import_module("aiqa.models")
        value = getattr(models, name)
        globals()[name] = value
        return value
    raise AttributeError(f"module 'aiqa' has no attribute '{name}'")
