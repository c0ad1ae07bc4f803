"""
Dependencies - Science Fair Evaluation Platform
fairscore/core/dependencies.py

FastAPI dependency injection. One entity store per process; every
repository and service is a cached wrapper around it.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header

from fairscore.config import get_settings
from fairscore.models.evaluator import Evaluator
from fairscore.repositories.entity_store import EntityStore
from fairscore.repositories.evaluator_repository import EvaluatorRepository
from fairscore.repositories.panel_repository import PanelRepository
from fairscore.repositories.project_repository import ProjectRepository
from fairscore.repositories.result_repository import ResultRepository
from fairscore.scoring.ranking import RankingEngine
from fairscore.services.assignment_service import AssignmentResolver
from fairscore.services.auth_service import AccessService
from fairscore.services.export_service import ExportService
from fairscore.services.identifiers import IdentifierAllocator
from fairscore.services.lifecycle_service import ResultLifecycleEngine
from fairscore.services.settings_service import EventSettingsService
from fairscore.services.sync_service import SynchronizationCoordinator


@lru_cache()
def get_entity_store() -> EntityStore:
    """Get the process-wide EntityStore."""
    return EntityStore.from_config(get_settings())


@lru_cache()
def get_sync_coordinator() -> SynchronizationCoordinator:
    """Get cached SynchronizationCoordinator instance."""
    return SynchronizationCoordinator(
        get_entity_store(),
        timeout=get_settings().REMOTE_TIMEOUT_SECONDS,
    )


@lru_cache()
def get_project_repository() -> ProjectRepository:
    """Get cached ProjectRepository instance."""
    return ProjectRepository(get_entity_store())


@lru_cache()
def get_evaluator_repository() -> EvaluatorRepository:
    """Get cached EvaluatorRepository instance."""
    config = get_settings()
    return EvaluatorRepository(
        get_entity_store(),
        code_range=(config.EVALUATOR_CODE_MIN, config.EVALUATOR_CODE_MAX),
    )


@lru_cache()
def get_panel_repository() -> PanelRepository:
    """Get cached PanelRepository instance."""
    return PanelRepository(get_entity_store())


@lru_cache()
def get_result_repository() -> ResultRepository:
    """Get cached ResultRepository instance."""
    return ResultRepository(get_entity_store())


@lru_cache()
def get_identifier_allocator() -> IdentifierAllocator:
    return IdentifierAllocator(get_entity_store())


@lru_cache()
def get_assignment_resolver() -> AssignmentResolver:
    return AssignmentResolver(get_entity_store())


@lru_cache()
def get_lifecycle_engine() -> ResultLifecycleEngine:
    return ResultLifecycleEngine(
        get_entity_store(),
        sync=get_sync_coordinator(),
        assignments=get_assignment_resolver(),
    )


@lru_cache()
def get_ranking_engine() -> RankingEngine:
    return RankingEngine(get_entity_store())


@lru_cache()
def get_export_service() -> ExportService:
    return ExportService(get_entity_store())


@lru_cache()
def get_settings_service() -> EventSettingsService:
    return EventSettingsService(get_entity_store())


@lru_cache()
def get_access_service() -> AccessService:
    return AccessService(get_entity_store())


def reset_dependencies() -> None:
    """Drop every cached instance; the next request starts from an empty store."""
    for getter in (
        get_entity_store,
        get_sync_coordinator,
        get_project_repository,
        get_evaluator_repository,
        get_panel_repository,
        get_result_repository,
        get_identifier_allocator,
        get_assignment_resolver,
        get_lifecycle_engine,
        get_ranking_engine,
        get_export_service,
        get_settings_service,
        get_access_service,
    ):
        getter.cache_clear()


# ---------------------------------------------------------------------------
# Request guards
# ---------------------------------------------------------------------------

def require_admin(
    x_admin_passcode: Optional[str] = Header(default=None),
    access: AccessService = Depends(get_access_service),
) -> None:
    """Reject the request unless X-Admin-Passcode matches the event passcode."""
    access.check_admin(x_admin_passcode or "")


def current_evaluator(
    x_evaluator_email: Optional[str] = Header(default=None),
    x_evaluator_code: Optional[str] = Header(default=None),
    access: AccessService = Depends(get_access_service),
) -> Evaluator:
    """The evaluator identified by X-Evaluator-Email / X-Evaluator-Code."""
    return access.login_evaluator(x_evaluator_email or "", x_evaluator_code or "")
