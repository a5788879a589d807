"""Background workers driven by timers."""

from .periodic import IngestionWorker, PeriodicWorker, RetentionWorker

__all__ = [
    "IngestionWorker",
    "PeriodicWorker",
    "RetentionWorker",
]
