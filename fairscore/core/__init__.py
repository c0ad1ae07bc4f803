"""
Core Package - Science Fair Evaluation Platform
fairscore/core/__init__.py

Core infrastructure: exceptions. Dependency getters live in
fairscore.core.dependencies and are imported from there directly.
"""

from fairscore.core.exceptions import (
    AuthError,
    DuplicateEntityException,
    EntityNotFoundException,
    EvaluationException,
    LifecycleError,
    PanelCompositionError,
    RemoteError,
    RepositoryException,
    ValidationError,
)

__all__ = [
    "AuthError",
    "DuplicateEntityException",
    "EntityNotFoundException",
    "EvaluationException",
    "LifecycleError",
    "PanelCompositionError",
    "RemoteError",
    "RepositoryException",
    "ValidationError",
]
