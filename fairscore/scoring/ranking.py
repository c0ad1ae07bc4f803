# fairscore/scoring/ranking.py
"""
Ranking Engine
--------------
Aggregates results into the project leaderboard and per-project breakdowns.

Formulas (per project P, over every result R with R.project_id == P.id):
    evaluator_count = |R|
    average_score   = Σ R.total / |R|             (0 when |R| == 0)
    max_possible    = criteria × 10               (60 for the standard rubric)
    percentage      = average_score / max_possible × 100

    criterion average(k) = Σ R.scores.get(k, 0) / |R|
    total_avg            = Σ_k criterion average(k)   (== average_score)

Every result counts, including drafts and results whose evaluator has since
been deleted or unassigned.
"""
from typing import Dict, List

import structlog

from fairscore.core.exceptions import EntityNotFoundException
from fairscore.models.evaluator import Evaluator
from fairscore.models.project import Project
from fairscore.models.result import Result
from fairscore.models.scoring import (
    CriterionAggregate,
    EvaluationBreakdown,
    EvaluatorScore,
    ProjectDetail,
    ProjectScore,
    ScoreSummary,
)
from fairscore.repositories.entity_store import EntityStore
from fairscore.scoring.rubric import RUBRIC_DEFINITION, max_total
from fairscore.scoring.utils import mean_or_none, percentage, safe_mean

logger = structlog.get_logger(__name__)

UNKNOWN_EVALUATOR = "Unknown"


class RankingEngine:
    """Leaderboard and breakdowns computed fresh from the store on each call."""

    def __init__(self, store: EntityStore):
        self.store = store

    def _evaluators_by_id(self) -> Dict[str, Evaluator]:
        return {e.id: e for e in reversed(self.store.evaluators)}

    def _results_by_project(self) -> Dict[str, List[Result]]:
        grouped: Dict[str, List[Result]] = {}
        for r in self.store.results:
            grouped.setdefault(r.project_id, []).append(r)
        return grouped

    @staticmethod
    def _name(evaluators: Dict[str, Evaluator], evaluator_id: str) -> str:
        evaluator = evaluators.get(evaluator_id)
        if evaluator is None:
            return UNKNOWN_EVALUATOR
        return evaluator.display_name or UNKNOWN_EVALUATOR

    def _score_row(
        self,
        project: Project,
        results: List[Result],
        evaluators: Dict[str, Evaluator],
    ) -> ProjectScore:
        maximum = max_total()
        totals = [r.total for r in results]
        average = safe_mean(totals)
        return ProjectScore(
            id=project.id,
            title=project.title,
            category=project.category,
            team=project.team,
            school=project.school,
            evaluator_count=len(results),
            total_score=sum(totals),
            average_score=average,
            max_possible=maximum,
            percentage=percentage(average, maximum),
            evaluators=[
                EvaluatorScore(
                    evaluator_id=r.evaluator_id,
                    name=self._name(evaluators, r.evaluator_id),
                    score=r.total,
                    finalized=r.finalized_by_evaluator,
                )
                for r in results
            ],
        )

    def rank_projects(self) -> List[ProjectScore]:
        """
        All projects sorted by average score, best first.

        The sort is stable, so equal averages keep project insertion order.
        """
        evaluators = self._evaluators_by_id()
        grouped = self._results_by_project()
        rows = [
            self._score_row(p, grouped.get(p.id, []), evaluators)
            for p in self.store.projects
        ]
        rows.sort(key=lambda row: row.average_score, reverse=True)

        logger.debug(
            "projects_ranked",
            project_count=len(rows),
            result_count=len(self.store.results),
            leader=rows[0].id if rows else None,
        )
        return rows

    def project_detail(self, project_id: str) -> ProjectDetail:
        """Per-criterion averages and per-evaluator breakdown for one project."""
        project = next((p for p in self.store.projects if p.id == project_id), None)
        if project is None:
            raise EntityNotFoundException("Project", project_id)

        evaluators = self._evaluators_by_id()
        results = [r for r in self.store.results if r.project_id == project_id]
        count = len(results)

        criteria = []
        for criterion in RUBRIC_DEFINITION:
            # A criterion a result never scored counts as 0
            total = sum(r.scores.get(criterion.key, 0) for r in results)
            criteria.append(
                CriterionAggregate(
                    key=criterion.key,
                    label=criterion.label,
                    average=total / count if count else 0.0,
                    sum=total,
                    count=count,
                )
            )

        row = self._score_row(project, results, evaluators)
        total_avg = sum(c.average for c in criteria)

        logger.debug(
            "project_detail",
            project_id=project_id,
            evaluator_count=count,
            total_avg=total_avg,
            average_score=row.average_score,
        )

        return ProjectDetail(
            id=project.id,
            title=project.title,
            category=project.category,
            team=project.team,
            school=project.school,
            evaluator_count=count,
            criteria=criteria,
            total_avg=total_avg,
            average_score=row.average_score,
            max_possible=row.max_possible,
            percentage=row.percentage,
            evaluations=[
                EvaluationBreakdown(
                    result_id=r.id,
                    evaluator_id=r.evaluator_id,
                    evaluator_name=self._name(evaluators, r.evaluator_id),
                    evaluator_email=evaluators[r.evaluator_id].email if r.evaluator_id in evaluators else None,
                    scores=r.scores,
                    total=r.total,
                    remark=r.remark,
                    finalized=r.finalized_by_evaluator,
                    ts=r.ts,
                )
                for r in results
            ],
        )

    def summary(self) -> ScoreSummary:
        rows = self.rank_projects()
        evaluated = [row for row in rows if row.evaluator_count > 0]
        summary = ScoreSummary(
            project_count=len(rows),
            evaluated_project_count=len(evaluated),
            result_count=len(self.store.results),
            average_score=mean_or_none(row.average_score for row in evaluated),
        )
        logger.info(
            "score_summary",
            projects=summary.project_count,
            evaluated=summary.evaluated_project_count,
            results=summary.result_count,
            average_score=summary.average_score,
        )
        return summary
