"""Result models."""

from .responses import DiffSummary, EditResult, Outcome, UnifiedDiff

__all__ = [
    "DiffSummary",
    "EditResult",
    "Outcome",
    "UnifiedDiff",
]
