from typing import List, Optional

from pydantic import Field, field_validator

from fairscore.core.exceptions import PanelCompositionError
from fairscore.models.base import CamelModel

MIN_PANEL_EVALUATORS = 3
MAX_PANEL_EVALUATORS = 4


def _dedupe(ids: List[str]) -> List[str]:
    seen = set()
    out = []
    for i in ids:
        if i not in seen:
            seen.add(i)
            out.append(i)
    return out


def validate_panel_composition(evaluator_ids: List[str], project_ids: List[str]) -> None:
    """
    Enforce the jury rules: 3-4 distinct evaluators and at least one project.

    Raises:
        PanelCompositionError: naming the rule that was broken
    """
    count = len(set(evaluator_ids))
    if count < MIN_PANEL_EVALUATORS or count > MAX_PANEL_EVALUATORS:
        raise PanelCompositionError(
            f"Select {MIN_PANEL_EVALUATORS}-{MAX_PANEL_EVALUATORS} evaluators for a jury panel (got {count})"
        )
    if not project_ids:
        raise PanelCompositionError("Assign at least one project")


class PanelBase(CamelModel):
    evaluator_ids: List[str] = Field(default_factory=list)
    project_ids: List[str] = Field(default_factory=list)

    @field_validator("evaluator_ids", "project_ids")
    @classmethod
    def unique_ids(cls, value: List[str]) -> List[str]:
        return _dedupe(value)


class PanelCreate(PanelBase):
    """Name defaults to 'Panel <n>' when omitted or blank."""

    name: Optional[str] = Field(default=None, max_length=255)


class PanelUpdate(CamelModel):
    name: Optional[str] = Field(default=None, max_length=255)
    evaluator_ids: Optional[List[str]] = None
    project_ids: Optional[List[str]] = None

    @field_validator("evaluator_ids", "project_ids")
    @classmethod
    def unique_ids(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return _dedupe(value) if value is not None else None


class Panel(PanelBase):
    id: str
    name: str = ""
