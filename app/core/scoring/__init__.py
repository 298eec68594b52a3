"""Compatibility scoring modules and aggregation."""

from .aggregator import CompatibilityScorer, compute_compatibility_score
from .modules import (
    EngagementFit,
    NicheAffinity,
    PlatformAlignment,
    ScoringModule,
    TopicSimilarity,
    default_modules,
)
from .policy import ScoringPolicy

__all__ = [
    "CompatibilityScorer",
    "compute_compatibility_score",
    "EngagementFit",
    "NicheAffinity",
    "PlatformAlignment",
    "ScoringModule",
    "TopicSimilarity",
    "default_modules",
    "ScoringPolicy",
]
