"""
Progress Engine Errors

Failure tiers:
1. Configuration (missing credential) - raised at construction
2. Per-analysis failures - never raised, captured as AnalysisResult
3. Aggregate / session failures - ProgressTrackingError and subclasses
"""


class ProgressEngineError(Exception):
    """Base class for all progress engine errors."""


class ConfigurationError(ProgressEngineError):
    """Raised when the tracker is created without a usable API key."""


class ProgressTrackingError(ProgressEngineError):
    """Raised when a progress analysis or session cannot be completed."""


class MessageValidationError(ProgressTrackingError):
    """Raised for an empty or non-list message input."""


class ProgressSaveError(ProgressTrackingError):
    """Raised when a progress record cannot be persisted."""
