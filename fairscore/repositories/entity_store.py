"""
Entity Store - Science Fair Evaluation Platform
fairscore/repositories/entity_store.py

In-memory collections of projects, evaluators, panels and results plus
per-evaluator lifecycle state. One instance is the single source of truth
for the process; every mutation is synchronous and immediately visible.
Nothing here survives a restart unless a bulk sync has succeeded.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from fairscore.config import Settings
from fairscore.models.enumerations import EntityKind
from fairscore.models.evaluator import Evaluator, EvaluatorState
from fairscore.models.event_settings import EventSettings
from fairscore.models.panel import Panel
from fairscore.models.project import Project
from fairscore.models.result import Result
from fairscore.models.snapshot import DatasetSnapshot, RemoteDataset

logger = logging.getLogger(__name__)


class EntityStore:
    """Owned aggregate of every entity collection."""

    def __init__(self, settings: Optional[EventSettings] = None):
        self.settings: EventSettings = settings or EventSettings()
        self.projects: List[Project] = []
        self.evaluators: List[Evaluator] = []
        self.panels: List[Panel] = []
        self.results: List[Result] = []
        self.evaluator_state: Dict[str, EvaluatorState] = {}
        self.last_sync: Optional[datetime] = None

    @classmethod
    def from_config(cls, config: Settings) -> "EntityStore":
        """Empty store whose event settings are seeded from configuration."""
        return cls(
            EventSettings(
                event_title=config.EVENT_TITLE,
                admin_pass=config.ADMIN_PASSCODE.get_secret_value(),
                gas_url=config.REMOTE_URL or "",
            )
        )

    def collection(self, kind: EntityKind) -> list:
        if kind == EntityKind.PROJECT:
            return self.projects
        if kind == EntityKind.EVALUATOR:
            return self.evaluators
        if kind == EntityKind.PANEL:
            return self.panels
        if kind == EntityKind.RESULT:
            return self.results
        raise ValueError(f"Unknown entity kind: {kind}")

    def count(self, kind: EntityKind) -> int:
        return len(self.collection(kind))

    def is_finalized(self, evaluator_id: str) -> bool:
        state = self.evaluator_state.get(evaluator_id)
        return bool(state and state.finalized_all)

    def snapshot(self) -> DatasetSnapshot:
        """Deep copy of the dataset, in the shape pushed to the remote store."""
        return DatasetSnapshot(
            settings=self.settings.model_copy(deep=True),
            evaluators=[e.model_copy(deep=True) for e in self.evaluators],
            projects=[p.model_copy(deep=True) for p in self.projects],
            panels=[p.model_copy(deep=True) for p in self.panels],
            results=[r.model_copy(deep=True) for r in self.results],
            evaluator_state={k: v.model_copy() for k, v in self.evaluator_state.items()},
        )

    def replace_from_snapshot(self, data: RemoteDataset) -> None:
        """
        Treat a remote dataset as authoritative.

        Collections and evaluator state are replaced outright; settings are
        merged over the current ones so keys the remote does not carry keep
        their local value.
        """
        self.settings = EventSettings.model_validate({**self.settings.to_wire(), **data.settings})
        self.evaluators = list(data.evaluators)
        self.projects = list(data.projects)
        self.panels = list(data.panels)
        self.results = list(data.results)
        self.evaluator_state = dict(data.evaluator_state)
        logger.info(
            f"Dataset replaced: {len(self.projects)} projects, {len(self.evaluators)} evaluators, "
            f"{len(self.panels)} panels, {len(self.results)} results"
        )

    def clear_scores(self) -> int:
        """Delete every result and all finalization state. Returns results removed."""
        removed = len(self.results)
        self.results = []
        self.evaluator_state = {}
        logger.warning(f"Cleared {removed} results and all evaluator state")
        return removed

    def reset_all(self) -> None:
        """Delete all projects, evaluators, panels, results and state. Settings stay."""
        self.evaluators = []
        self.projects = []
        self.panels = []
        self.results = []
        self.evaluator_state = {}
        logger.warning("All event data reset")
