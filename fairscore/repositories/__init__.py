"""
Repositories Package - Science Fair Evaluation Platform
fairscore/repositories/__init__.py

In-memory data access layer over the entity store.
"""

from fairscore.repositories.entity_store import EntityStore
from fairscore.repositories.base import BaseRepository
from fairscore.repositories.evaluator_repository import EvaluatorRepository
from fairscore.repositories.panel_repository import PanelRepository
from fairscore.repositories.project_repository import ProjectRepository
from fairscore.repositories.result_repository import ResultRepository

__all__ = [
    "EntityStore",
    "BaseRepository",
    "EvaluatorRepository",
    "PanelRepository",
    "ProjectRepository",
    "ResultRepository",
]
