"""
Core Package - FindWay Assessment Engine
findway/core/__init__.py

Core infrastructure: exceptions, logging, dependencies.
Dependencies are imported from findway.core.dependencies directly.
"""

from findway.core.exceptions import (
    AssessmentException,
    AssessmentValidationError,
    CacheCorruptionError,
    GenerationError,
    InvalidTransitionError,
)

__all__ = [
    "AssessmentException",
    "AssessmentValidationError",
    "CacheCorruptionError",
    "GenerationError",
    "InvalidTransitionError",
]
