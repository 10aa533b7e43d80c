"""Retrieval orchestrator for recent Gmail messages.

Connects LabelResolver, MessageIdPaginator, and MessageFetcher into a
single sequential run with per-step metrics.
"""

from .models import RetrievalResult, StepResult
from .pipeline import RecentEmailOrchestrator, get_recent_email

__all__ = [
    "RecentEmailOrchestrator",
    "RetrievalResult",
    "StepResult",
    "get_recent_email",
]
