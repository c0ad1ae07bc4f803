"""
Result Repository - Science Fair Evaluation Platform
fairscore/repositories/result_repository.py

Results are keyed by (project_id, evaluator_id); at most one record exists
per pair and a later save overwrites it under the same id. Lifecycle rules
live in the lifecycle service, not here.
"""

from typing import List, Optional

from fairscore.models.enumerations import EntityKind
from fairscore.models.result import Result
from fairscore.repositories.base import BaseRepository


class ResultRepository(BaseRepository[Result]):
    kind = EntityKind.RESULT
    entity_name = "Result"

    def get_for(self, project_id: str, evaluator_id: str) -> Optional[Result]:
        for result in self.items:
            if result.project_id == project_id and result.evaluator_id == evaluator_id:
                return result
        return None

    def list_by_evaluator(self, evaluator_id: str) -> List[Result]:
        return [r for r in self.items if r.evaluator_id == evaluator_id]

    def list_by_project(self, project_id: str) -> List[Result]:
        return [r for r in self.items if r.project_id == project_id]

    def next_id(self) -> str:
        return self.ids.allocate(self.kind)

    def upsert(self, result: Result) -> Result:
        return self._upsert(result)
