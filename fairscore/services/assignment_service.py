"""
Assignment Resolver - Science Fair Evaluation Platform
fairscore/services/assignment_service.py

An evaluator's assignment is the union of project ids over every panel that
lists them. Nothing is stored; each call reads the current panels, so edits
show up immediately.
"""

from typing import List, Optional

from fairscore.models.enumerations import ResultStatus
from fairscore.models.panel import Panel
from fairscore.models.project import Project
from fairscore.models.result import Result
from fairscore.models.scoring import AssignmentRow, Progress
from fairscore.repositories.entity_store import EntityStore
from fairscore.scoring.utils import progress_percent


def result_status(result: Optional[Result], evaluator_finalized: bool = False) -> ResultStatus:
    if result is None:
        return ResultStatus.UNSTARTED
    if evaluator_finalized or result.finalized_by_evaluator:
        return ResultStatus.FINALIZED
    if result.submitted:
        return ResultStatus.SUBMITTED
    return ResultStatus.DRAFT


class AssignmentResolver:
    def __init__(self, store: EntityStore):
        self.store = store

    def assigned_project_ids(self, evaluator_id: str) -> List[str]:
        """Project ids in order of first appearance across the evaluator's panels."""
        seen = set()
        ordered = []
        for panel in self.store.panels:
            if evaluator_id not in panel.evaluator_ids:
                continue
            for project_id in panel.project_ids:
                if project_id not in seen:
                    seen.add(project_id)
                    ordered.append(project_id)
        return ordered

    def assigned_projects(self, evaluator_id: str) -> List[Project]:
        """Assigned projects that still exist; dangling ids are skipped."""
        by_id = {p.id: p for p in reversed(self.store.projects)}
        return [by_id[i] for i in self.assigned_project_ids(evaluator_id) if i in by_id]

    def is_assigned(self, evaluator_id: str, project_id: str) -> bool:
        return project_id in self.assigned_project_ids(evaluator_id)

    def panel_for(self, evaluator_id: str, project_id: str) -> Optional[Panel]:
        for panel in self.store.panels:
            if evaluator_id in panel.evaluator_ids and project_id in panel.project_ids:
                return panel
        return None

    def progress(self, evaluator_id: str) -> Progress:
        """
        Completion over the current assignment.

        Results for projects no longer assigned stay in the store but do not
        count toward completion.
        """
        assigned = set(self.assigned_project_ids(evaluator_id))
        completed = sum(
            1
            for r in self.store.results
            if r.evaluator_id == evaluator_id and r.project_id in assigned
        )
        total = len(assigned)
        return Progress(completed=completed, total=total, percent=progress_percent(completed, total))

    def assignment_rows(self, evaluator_id: str) -> List[AssignmentRow]:
        """One row per assigned project id with the evaluator's result and status."""
        projects = {p.id: p for p in reversed(self.store.projects)}
        results = {}
        for r in self.store.results:
            if r.evaluator_id == evaluator_id:
                results.setdefault(r.project_id, r)
        finalized = self.store.is_finalized(evaluator_id)

        rows = []
        for project_id in self.assigned_project_ids(evaluator_id):
            project = projects.get(project_id)
            result = results.get(project_id)
            rows.append(
                AssignmentRow(
                    project_id=project_id,
                    title=project.title if project else "(missing project)",
                    project=project,
                    status=result_status(result, finalized),
                    result=result,
                )
            )
        return rows
