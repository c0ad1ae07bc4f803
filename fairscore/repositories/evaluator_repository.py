"""
Evaluator Repository - Science Fair Evaluation Platform
fairscore/repositories/evaluator_repository.py

Evaluators log in with email + numeric access code. Emails are unique,
compared without regard to case or surrounding whitespace.
"""

import logging
import secrets
from typing import Optional, Tuple

from fairscore.core.exceptions import DuplicateEntityException
from fairscore.models.enumerations import EntityKind
from fairscore.models.evaluator import (
    Evaluator,
    EvaluatorCreate,
    EvaluatorProfileUpdate,
    EvaluatorUpdate,
)
from fairscore.repositories.base import BaseRepository
from fairscore.repositories.entity_store import EntityStore

logger = logging.getLogger(__name__)

DEFAULT_CODE_RANGE = (100000, 999999)


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class EvaluatorRepository(BaseRepository[Evaluator]):
    kind = EntityKind.EVALUATOR
    entity_name = "Evaluator"

    def __init__(self, store: EntityStore, code_range: Tuple[int, int] = DEFAULT_CODE_RANGE):
        super().__init__(store)
        self.code_range = code_range

    def generate_code(self) -> str:
        """Random access code within the configured range, inclusive."""
        low, high = self.code_range
        return str(low + secrets.randbelow(high - low + 1))

    def get_by_email(self, email: str) -> Optional[Evaluator]:
        key = _normalize_email(email)
        if not key:
            return None
        for evaluator in self.items:
            if _normalize_email(evaluator.email) == key:
                return evaluator
        return None

    def _check_email_free(self, email: str, exclude_id: Optional[str] = None) -> None:
        existing = self.get_by_email(email)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateEntityException(f"Evaluator with email {email} already exists")

    def create(self, data: EvaluatorCreate) -> Evaluator:
        self._check_email_free(data.email)
        fields = data.model_dump()
        fields["code"] = fields.get("code") or self.generate_code()
        evaluator = Evaluator(id=self.ids.allocate(self.kind), **fields)
        self.items.append(evaluator)
        logger.info(f"Created evaluator {evaluator.id} ({evaluator.email})")
        return evaluator

    def add_imported(self, name: str, email: str, expertise: str = "") -> Evaluator:
        """Append an evaluator from a bulk import row. Caller checks email."""
        evaluator = Evaluator(
            id=self.ids.allocate(self.kind),
            name=name,
            email=email,
            expertise=expertise,
            code=self.generate_code(),
        )
        self.items.append(evaluator)
        return evaluator

    def update(self, evaluator_id: str, data: EvaluatorUpdate) -> Evaluator:
        evaluator = self.get_or_raise(evaluator_id)
        if data.email is not None:
            self._check_email_free(data.email, exclude_id=evaluator_id)
        return self._upsert(self._apply_update(evaluator, data))

    def update_profile(self, evaluator_id: str, data: EvaluatorProfileUpdate) -> Evaluator:
        """Self-service edit; email and code stay as the admin set them."""
        evaluator = self.get_or_raise(evaluator_id)
        return self._upsert(evaluator.model_copy(update=data.model_dump()))

    def find_by_credentials(self, email: str, code: str) -> Optional[Evaluator]:
        evaluator = self.get_by_email(email)
        if evaluator is None or not evaluator.code:
            return None
        if not secrets.compare_digest(str(evaluator.code).encode(), str(code).strip().encode()):
            return None
        return evaluator

    def delete(self, evaluator_id: str) -> Evaluator:
        """
        Delete an evaluator and drop them from every panel. Their results and
        finalization state stay in the store.
        """
        removed = self._remove(evaluator_id)
        for panel in self.store.panels:
            if evaluator_id in panel.evaluator_ids:
                panel.evaluator_ids = [e for e in panel.evaluator_ids if e != evaluator_id]
        logger.info(f"Deleted evaluator {evaluator_id}")
        return removed
