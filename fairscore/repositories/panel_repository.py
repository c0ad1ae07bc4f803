"""
Panel Repository - Science Fair Evaluation Platform
fairscore/repositories/panel_repository.py

Jury panels. Composition (3-4 evaluators, at least one project) is checked
whenever a panel is created or edited. Deleting a project or evaluator can
leave a panel below those limits; that is only caught on the next edit.
"""

import logging
from typing import List

from fairscore.core.exceptions import ValidationError
from fairscore.models.enumerations import EntityKind
from fairscore.models.panel import Panel, PanelCreate, PanelUpdate, validate_panel_composition
from fairscore.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class PanelRepository(BaseRepository[Panel]):
    kind = EntityKind.PANEL
    entity_name = "Panel"

    def _check_references(self, evaluator_ids: List[str], project_ids: List[str]) -> None:
        known_evaluators = {e.id for e in self.store.evaluators}
        known_projects = {p.id for p in self.store.projects}
        for evaluator_id in evaluator_ids:
            if evaluator_id not in known_evaluators:
                raise ValidationError(f"Unknown evaluator id {evaluator_id}")
        for project_id in project_ids:
            if project_id not in known_projects:
                raise ValidationError(f"Unknown project id {project_id}")

    def _default_name(self) -> str:
        return f"Panel {len(self.items) + 1}"

    def create(self, data: PanelCreate) -> Panel:
        validate_panel_composition(data.evaluator_ids, data.project_ids)
        self._check_references(data.evaluator_ids, data.project_ids)
        name = (data.name or "").strip() or self._default_name()
        panel = Panel(
            id=self.ids.allocate(self.kind),
            name=name,
            evaluator_ids=data.evaluator_ids,
            project_ids=data.project_ids,
        )
        self.items.append(panel)
        logger.info(
            f"Created panel {panel.id} '{panel.name}' with {len(panel.evaluator_ids)} evaluators "
            f"and {len(panel.project_ids)} projects"
        )
        return panel

    def update(self, panel_id: str, data: PanelUpdate) -> Panel:
        panel = self._apply_update(self.get_or_raise(panel_id), data)
        validate_panel_composition(panel.evaluator_ids, panel.project_ids)
        self._check_references(panel.evaluator_ids, panel.project_ids)
        if not panel.name.strip():
            panel = panel.model_copy(update={"name": self._default_name()})
        return self._upsert(panel)

    def delete(self, panel_id: str) -> Panel:
        """Results stamped with this panel keep the now-dangling panel id."""
        removed = self._remove(panel_id)
        logger.info(f"Deleted panel {panel_id}")
        return removed
