"""
Result Lifecycle Engine - Science Fair Evaluation Platform
fairscore/services/lifecycle_service.py

Per (evaluator, project) a result moves Unstarted -> Draft -> Submitted.
Finalize-all is evaluator-wide: it locks every result of the evaluator and
nothing of theirs may be created or changed afterwards.

Writes hit the store first. Remote pushes are best effort and never undo a
local write.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from fairscore.core.exceptions import AuthError, LifecycleError, RemoteError, ValidationError
from fairscore.models.base import CamelModel
from fairscore.models.enumerations import ResultStatus
from fairscore.models.evaluator import EvaluatorState
from fairscore.models.result import Result, ResultReview
from fairscore.repositories.base import now_ms
from fairscore.repositories.entity_store import EntityStore
from fairscore.repositories.result_repository import ResultRepository
from fairscore.scoring.rubric import (
    MAX_SCORE_PER_CRITERION,
    MIN_SCORE,
    criterion_label,
    max_total,
    rubric_keys,
)
from fairscore.services.assignment_service import AssignmentResolver, result_status
from fairscore.services.sync_service import SynchronizationCoordinator

logger = logging.getLogger(__name__)


class FinalizeOutcome(CamelModel):
    evaluator_id: str
    already_finalized: bool = False
    results_finalized: int = 0
    synced: bool = False
    sync_error: Optional[str] = None


def validate_scores(scores: Mapping[str, Any], require_complete: bool = False) -> Dict[str, int]:
    """
    Check criterion keys and values; return the scores in rubric order.

    Values must be whole numbers 0-10. Booleans and floats are rejected even
    when they look integral.

    Raises:
        ValidationError: naming the first offending criterion
    """
    keys = rubric_keys()
    for key, value in scores.items():
        if key not in keys:
            raise ValidationError(f"Unknown criterion '{key}'", criterion=key)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(
                f"{criterion_label(key)} must be a whole number", criterion=key
            )
        if value < MIN_SCORE or value > MAX_SCORE_PER_CRITERION:
            raise ValidationError(
                f"{criterion_label(key)} must be between {MIN_SCORE} and {MAX_SCORE_PER_CRITERION}",
                criterion=key,
            )

    if require_complete:
        missing = missing_criteria(scores)
        if missing:
            labels = ", ".join(criterion_label(k) for k in missing)
            raise ValidationError(f"Please score all criteria. Missing: {labels}", criterion=missing[0])

    return {k: scores[k] for k in keys if k in scores}


def missing_criteria(scores: Mapping[str, Any]) -> List[str]:
    return [k for k in rubric_keys() if k not in scores]


def compute_total(scores: Mapping[str, int]) -> int:
    """Sum of the scores present; drafts get a partial total."""
    return sum(scores.values())


class ResultLifecycleEngine:
    def __init__(
        self,
        store: EntityStore,
        sync: Optional[SynchronizationCoordinator] = None,
        assignments: Optional[AssignmentResolver] = None,
    ):
        self.store = store
        self.sync = sync
        self.assignments = assignments or AssignmentResolver(store)
        self.results = ResultRepository(store)

    def _guard(self, evaluator_id: str, project_id: str) -> Optional[Result]:
        if self.store.is_finalized(evaluator_id):
            raise LifecycleError("evaluator already finalized")
        if not self.assignments.is_assigned(evaluator_id, project_id):
            raise LifecycleError(f"Project {project_id} is not assigned to evaluator {evaluator_id}")
        prior = self.results.get_for(project_id, evaluator_id)
        if prior is not None and prior.finalized_by_evaluator:
            raise LifecycleError("evaluator already finalized")
        return prior

    def _build(
        self,
        prior: Optional[Result],
        evaluator_id: str,
        project_id: str,
        scores: Dict[str, int],
        remark: Optional[str],
        submitted: bool,
    ) -> Result:
        panel = self.assignments.panel_for(evaluator_id, project_id)
        if remark is None:
            remark = prior.remark if prior else ""
        return Result(
            id=prior.id if prior else self.results.next_id(),
            panel_id=panel.id if panel else (prior.panel_id if prior else None),
            project_id=project_id,
            evaluator_id=evaluator_id,
            scores=scores,
            remark=remark.strip(),
            total=compute_total(scores),
            ts=now_ms(),
            finalized_by_evaluator=False,
            submitted=submitted,
        )

    def status_for(self, evaluator_id: str, project_id: str) -> ResultStatus:
        result = self.results.get_for(project_id, evaluator_id)
        return result_status(result, self.store.is_finalized(evaluator_id))

    def save_draft(
        self,
        evaluator_id: str,
        project_id: str,
        scores: Mapping[str, Any],
        remark: Optional[str] = None,
    ) -> Result:
        """
        Save partial scores without pushing anywhere.

        New scores are merged over the prior record's, so a draft can be
        filled in over several saves. Saving a draft over a submitted result
        moves it back to draft.
        """
        prior = self._guard(evaluator_id, project_id)
        clean = validate_scores(scores, require_complete=False)
        merged = dict(prior.scores) if prior else {}
        merged.update(clean)
        merged = {k: merged[k] for k in rubric_keys() if k in merged}

        result = self._build(prior, evaluator_id, project_id, merged, remark, submitted=False)
        self.results.upsert(result)
        logger.debug(f"Draft saved {result.id} ({evaluator_id} -> {project_id}, total {result.total})")
        return result

    def review(
        self,
        evaluator_id: str,
        project_id: str,
        scores: Mapping[str, Any],
        remark: str = "",
    ) -> ResultReview:
        """What submit would record, without touching the store."""
        self._guard(evaluator_id, project_id)
        clean = validate_scores(scores, require_complete=False)
        missing = missing_criteria(clean)
        return ResultReview(
            project_id=project_id,
            scores=clean,
            total=compute_total(clean),
            max_total=max_total(),
            complete=not missing,
            missing=missing,
            remark=(remark or "").strip(),
        )

    async def submit(
        self,
        evaluator_id: str,
        project_id: str,
        scores: Mapping[str, Any],
        remark: str = "",
    ) -> Result:
        """
        Record a complete evaluation and push it in the background.

        The local write stands whatever happens to the push.

        Raises:
            LifecycleError: evaluator finalized or project not assigned
            ValidationError: missing criterion or out-of-range score
        """
        prior = self._guard(evaluator_id, project_id)
        clean = validate_scores(scores, require_complete=True)

        result = self._build(prior, evaluator_id, project_id, clean, remark, submitted=True)
        self.results.upsert(result)
        logger.info(f"Result {result.id} submitted by {evaluator_id} for {project_id}: {result.total}/{max_total()}")

        if self.sync is not None:
            self.sync.schedule_push(result)
        return result

    async def finalize_all(self, evaluator_id: str, admin_password: Optional[str] = None) -> FinalizeOutcome:
        """
        Lock every result of the evaluator, then push the full dataset.

        Finalizing twice is a no-op and does not sync again. A failed sync
        leaves the local finalization in place and is reported in the
        outcome.

        Raises:
            LifecycleError: the evaluator has no results yet
        """
        if self.store.is_finalized(evaluator_id):
            return FinalizeOutcome(evaluator_id=evaluator_id, already_finalized=True)

        results = self.results.list_by_evaluator(evaluator_id)
        if not results:
            raise LifecycleError("Submit at least one evaluation before finalizing")

        for result in results:
            result.finalized_by_evaluator = True
        self.store.evaluator_state[evaluator_id] = EvaluatorState(finalized_all=True)
        logger.info(f"Evaluator {evaluator_id} finalized {len(results)} results")

        outcome = FinalizeOutcome(evaluator_id=evaluator_id, results_finalized=len(results))
        if self.sync is None:
            return outcome
        try:
            await self.sync.bulk_sync(admin_password)
            outcome.synced = True
        except (AuthError, RemoteError) as e:
            logger.warning(f"Sync after finalize failed for {evaluator_id}: {e.message}")
            outcome.sync_error = e.message
        return outcome
