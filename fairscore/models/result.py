from typing import Any, Dict, List, Optional

from pydantic import Field

from fairscore.models.base import CamelModel


class Result(CamelModel):
    """
    One evaluator's scoring of one project.

    At most one Result exists per (project_id, evaluator_id); saving again
    overwrites it by id. ``ts`` is epoch milliseconds, the remote format.
    """

    id: str
    panel_id: Optional[str] = None
    project_id: str
    evaluator_id: str
    scores: Dict[str, int] = Field(default_factory=dict)
    remark: str = ""
    total: int = 0
    ts: int = 0
    finalized_by_evaluator: bool = False
    submitted: bool = False


class ScoreInput(CamelModel):
    """
    Scores as sent by an evaluator. Values are checked by the lifecycle
    engine so errors name the offending criterion.
    """

    scores: Dict[str, Any] = Field(default_factory=dict)
    remark: str = ""


class ResultReview(CamelModel):
    """What the evaluator confirms before submitting."""

    project_id: str
    scores: Dict[str, int]
    total: int
    max_total: int
    complete: bool
    missing: List[str] = Field(default_factory=list)
    remark: str = ""
