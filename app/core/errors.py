"""Domain exceptions raised by the match engine.

Missing and malformed creator signals are recovered inside the coercers and
scoring modules and never surface here. What remains is fatal to a whole call
(SpecViolation, ComponentUnavailable) or recorded per item (PersistenceFailure).
"""


class MatchEngineError(Exception):
    """Base class for match engine errors."""


class SpecViolation(MatchEngineError):
    """The caller's request cannot be scored (bad brand id, limit, persist flag...)."""


class PersistenceFailure(MatchEngineError):
    """A single match record could not be written."""

    def __init__(self, creator_id: str, message: str) -> None:
        super().__init__(message)
        self.creator_id = creator_id


class ComponentUnavailable(MatchEngineError):
    """A backing store needed for the request is not configured or reachable."""


__all__ = ["MatchEngineError", "SpecViolation", "PersistenceFailure", "ComponentUnavailable"]
