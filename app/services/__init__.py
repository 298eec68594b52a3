"""Public service interfaces."""

from .matching import MatchOutcome, MatchService

__all__ = ["MatchOutcome", "MatchService"]
