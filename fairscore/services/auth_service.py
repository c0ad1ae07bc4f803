"""
Access Checks - Science Fair Evaluation Platform
fairscore/services/auth_service.py

Simple credential comparison: the local admin passcode from event settings,
and evaluator email + access code. No sessions are issued here; the remote
admin session belongs to the synchronization coordinator.
"""

import hmac
import logging

from fairscore.core.exceptions import AuthError
from fairscore.models.evaluator import Evaluator
from fairscore.repositories.entity_store import EntityStore
from fairscore.repositories.evaluator_repository import EvaluatorRepository

logger = logging.getLogger(__name__)


class AccessService:
    def __init__(self, store: EntityStore):
        self.store = store
        self.evaluators = EvaluatorRepository(store)

    def check_admin(self, passcode: str) -> None:
        expected = self.store.settings.admin_pass or ""
        if not expected or not hmac.compare_digest(expected.encode(), (passcode or "").encode()):
            logger.warning("Rejected admin passcode")
            raise AuthError("Invalid admin passcode")

    def login_evaluator(self, email: str, code: str) -> Evaluator:
        evaluator = self.evaluators.find_by_credentials(email or "", code or "")
        if evaluator is None:
            logger.warning(f"Rejected evaluator login for {email}")
            raise AuthError("No evaluator found for that email & code")
        return evaluator
