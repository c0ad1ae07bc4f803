from enum import Enum


class EntityKind(str, Enum):
    PROJECT = "project"
    EVALUATOR = "evaluator"
    PANEL = "panel"
    RESULT = "result"


class ResultStatus(str, Enum):
    UNSTARTED = "unstarted"   # No result record yet
    DRAFT = "draft"           # Saved, possibly incomplete
    SUBMITTED = "submitted"   # Complete and pushed (best effort)
    FINALIZED = "finalized"   # Locked by the evaluator's finalize-all
