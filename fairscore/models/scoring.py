"""
Scoring Models - Science Fair Evaluation Platform
fairscore/models/scoring.py

Read-only views produced by the ranking engine and assignment resolver.
"""

from typing import Dict, List, Optional

from pydantic import Field

from fairscore.models.base import CamelModel
from fairscore.models.enumerations import ResultStatus
from fairscore.models.project import Project
from fairscore.models.result import Result


class EvaluatorScore(CamelModel):
    evaluator_id: str
    name: str
    score: int
    finalized: bool


class ProjectScore(CamelModel):
    """Leaderboard row for one project."""

    id: str
    title: str
    category: str
    team: str
    school: str
    evaluator_count: int
    total_score: int
    average_score: float
    max_possible: int
    percentage: float
    evaluators: List[EvaluatorScore] = Field(default_factory=list)


class CriterionAggregate(CamelModel):
    key: str
    label: str
    average: float
    sum: int
    count: int


class EvaluationBreakdown(CamelModel):
    result_id: str
    evaluator_id: str
    evaluator_name: str
    evaluator_email: Optional[str] = None
    scores: Dict[str, int]
    total: int
    remark: str
    finalized: bool
    ts: int


class ProjectDetail(CamelModel):
    """Per-criterion breakdown for one project."""

    id: str
    title: str
    category: str
    team: str
    school: str
    evaluator_count: int
    criteria: List[CriterionAggregate]
    total_avg: float
    average_score: float
    max_possible: int
    percentage: float
    evaluations: List[EvaluationBreakdown] = Field(default_factory=list)


class ScoreSummary(CamelModel):
    project_count: int
    evaluated_project_count: int
    result_count: int
    average_score: Optional[float] = None


class Progress(CamelModel):
    completed: int
    total: int
    percent: int


class AssignmentRow(CamelModel):
    project_id: str
    title: str
    project: Optional[Project] = None
    status: ResultStatus
    result: Optional[Result] = None
