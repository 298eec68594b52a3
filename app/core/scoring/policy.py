"""Tunable scoring policy values."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ScoringPolicy:
    """Policy parameters shared by the scoring modules and the aggregator.

    Engagement at or above ``engagement_target_rate`` counts as fully met.
    Priority-topic hits add ``topic_boost_step`` each to Topic Similarity, up
    to ``topic_boost_cap``. Priority directives add ``priority_boost_step``
    per hit to the total, up to ``priority_boost_cap``.
    """

    engagement_target_rate: float = 0.04
    topic_boost_step: float = 0.1
    topic_boost_cap: float = 0.2
    priority_boost_step: float = 0.025
    priority_boost_cap: float = 0.05
    reason_limit: int = 3

    def __post_init__(self) -> None:
        if self.engagement_target_rate <= 0:
            raise ValueError("engagement_target_rate must be positive")
        if not 0 <= self.priority_boost_cap <= 1 or not 0 <= self.topic_boost_cap <= 1:
            raise ValueError("boost caps must lie in [0, 1]")
        if self.reason_limit < 0:
            raise ValueError("reason_limit must not be negative")

    @classmethod
    def from_settings(cls, settings: Any) -> "ScoringPolicy":
        return cls(
            engagement_target_rate=settings.ENGAGEMENT_TARGET_RATE,
            topic_boost_step=settings.TOPIC_BOOST_STEP,
            topic_boost_cap=settings.TOPIC_BOOST_CAP,
            priority_boost_step=settings.PRIORITY_BOOST_STEP,
            priority_boost_cap=settings.PRIORITY_BOOST_CAP,
            reason_limit=settings.REASON_LIMIT,
        )


__all__ = ["ScoringPolicy"]
