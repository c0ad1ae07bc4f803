from typing import Any, Dict, List

from pydantic import Field

from fairscore.models.base import CamelModel
from fairscore.models.evaluator import Evaluator, EvaluatorState
from fairscore.models.event_settings import EventSettings
from fairscore.models.panel import Panel
from fairscore.models.project import Project
from fairscore.models.result import Result


class DatasetSnapshot(CamelModel):
    """Full entity store contents, as pushed by a bulk sync."""

    settings: EventSettings = Field(default_factory=EventSettings)
    evaluators: List[Evaluator] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    panels: List[Panel] = Field(default_factory=list)
    results: List[Result] = Field(default_factory=list)
    evaluator_state: Dict[str, EvaluatorState] = Field(default_factory=dict)


class RemoteDataset(DatasetSnapshot):
    """
    Payload of ``getData``. Settings arrive partial and are merged over the
    local ones rather than replacing them.
    """

    settings: Dict[str, Any] = Field(default_factory=dict)
