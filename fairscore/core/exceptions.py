"""
Custom Exceptions - Science Fair Evaluation Platform
fairscore/core/exceptions.py

Exception classes for the entity store and the evaluation lifecycle.
None of these are fatal: every failure leaves local state usable.
"""

from typing import Optional


class RepositoryException(Exception):
    """Base exception for entity store operations."""

    pass


class EntityNotFoundException(RepositoryException):
    """Entity not found in the store."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")


class DuplicateEntityException(RepositoryException):
    """Duplicate entity violation."""

    def __init__(self, message: str = "Entity already exists"):
        self.message = message
        super().__init__(message)


class EvaluationException(Exception):
    """Base exception for evaluation lifecycle and sync operations."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(EvaluationException):
    """Out-of-range or incomplete input. No state was changed."""

    def __init__(self, message: str, criterion: Optional[str] = None):
        self.criterion = criterion
        super().__init__(message)


class PanelCompositionError(ValidationError):
    """Panel does not have 3-4 evaluators or has no projects."""

    pass


class LifecycleError(EvaluationException):
    """Operation not allowed in the evaluator's current lifecycle state."""

    pass


class AuthError(EvaluationException):
    """Bad credential or missing admin session token."""

    pass


class RemoteError(EvaluationException):
    """Transport, status or parse failure talking to the remote store."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
