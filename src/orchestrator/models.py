"""Data models for retrieval run results."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class StepResult:
    """Result of a single retrieval stage."""

    name: str
    duration_seconds: float
    details: dict[str, Any]


@dataclass
class RetrievalResult:
    """Messages retrieved by a run, with per-stage metrics."""

    messages: list[dict[str, Any]] = field(default_factory=list)
    steps: list[StepResult] = field(default_factory=list)

    @property
    def duration_seconds(self) -> float:
        return round(sum(step.duration_seconds for step in self.steps), 2)
