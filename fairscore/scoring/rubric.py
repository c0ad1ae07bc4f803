"""
Rubric Definition - Science Fair Evaluation Platform
fairscore/scoring/rubric.py

The fixed, ordered scoring rubric shared by every result. Each criterion is
scored 0-10; the maximum total is criteria count x 10.
"""

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class RubricCriterion:
    key: str
    label: str


RUBRIC_DEFINITION: Tuple[RubricCriterion, ...] = (
    RubricCriterion("problem", "Problem Statement Clarity"),
    RubricCriterion("originality", "Originality"),
    RubricCriterion("description", "Project Description Quality"),
    RubricCriterion("method", "Methodology & Design"),
    RubricCriterion("impact", "Practical Application / Impact"),
    RubricCriterion("presentation", "Presentation & Q&A"),
)

MIN_SCORE = 0
MAX_SCORE_PER_CRITERION = 10


def rubric_keys() -> List[str]:
    return [c.key for c in RUBRIC_DEFINITION]


def criterion_label(key: str) -> str:
    """Label for a criterion key; unknown keys are shown as-is."""
    for c in RUBRIC_DEFINITION:
        if c.key == key:
            return c.label
    return key


def max_total() -> int:
    return len(RUBRIC_DEFINITION) * MAX_SCORE_PER_CRITERION
