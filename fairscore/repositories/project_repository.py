"""
Project Repository - Science Fair Evaluation Platform
fairscore/repositories/project_repository.py
"""

import logging

from fairscore.models.enumerations import EntityKind
from fairscore.models.project import Project, ProjectCreate, ProjectUpdate
from fairscore.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ProjectRepository(BaseRepository[Project]):
    kind = EntityKind.PROJECT
    entity_name = "Project"

    def create(self, data: ProjectCreate) -> Project:
        project = Project(id=self.ids.allocate(self.kind), **data.model_dump())
        self.items.append(project)
        logger.info(f"Created project {project.id}: {project.title}")
        return project

    def update(self, project_id: str, data: ProjectUpdate) -> Project:
        project = self._apply_update(self.get_or_raise(project_id), data)
        return self._upsert(project)

    def delete(self, project_id: str) -> Project:
        """
        Delete a project and drop it from every panel.

        Results that reference the project are kept; they show up as
        scores for a missing project.
        """
        removed = self._remove(project_id)
        for panel in self.store.panels:
            if project_id in panel.project_ids:
                panel.project_ids = [p for p in panel.project_ids if p != project_id]
        logger.info(f"Deleted project {project_id}")
        return removed
