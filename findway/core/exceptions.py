"""
Custom Exceptions - FindWay Assessment Engine
findway/core/exceptions.py

Exception taxonomy for the assessment orchestrator and its collaborators.
"""
from typing import Optional


class AssessmentException(Exception):
    """Base exception for assessment operations."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AssessmentValidationError(AssessmentException):
    """Input rejected; the user stays in the current stage."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.details = details
        super().__init__(message)


class GenerationError(AssessmentException):
    """Question or report service failed or returned unusable output."""

    def __init__(self, message: str = "Failed to communicate with the AI model."):
        super().__init__(message)


class CacheCorruptionError(AssessmentException):
    """Stored session record could not be parsed."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Cached record {key} is corrupt")


class InvalidTransitionError(AssessmentException):
    """Operation not allowed in the orchestrator's current stage."""

    def __init__(self, stage: str, operation: str):
        self.stage = stage
        self.operation = operation
        super().__init__(f"Cannot {operation} while assessment is {stage}")
