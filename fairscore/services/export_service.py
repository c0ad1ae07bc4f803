"""
Export Service - Science Fair Evaluation Platform
fairscore/services/export_service.py

Tabular exports for the admin: the results table, the project score sheet,
and the raw dataset as JSON. CSV is built with pandas. Every value is
quoted, the header row is not, and a column missing from a row is empty.
"""

import csv
import logging
from typing import Any, Dict, List

import pandas as pd

from fairscore.repositories.entity_store import EntityStore
from fairscore.scoring.ranking import RankingEngine

logger = logging.getLogger(__name__)

MISSING = "—"
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_ts(ts: int) -> str:
    """Epoch milliseconds as a UTC timestamp string; blank when unset."""
    if not ts:
        return ""
    return pd.to_datetime(ts, unit="ms", utc=True).strftime(TIME_FORMAT)


def to_csv(rows: List[Dict[str, Any]]) -> str:
    """
    Render rows as CSV. Columns are the union of row keys in first-seen
    order.
    """
    columns = list(dict.fromkeys(key for row in rows for key in row))
    if not columns:
        return ""
    frame = pd.DataFrame(rows, columns=columns, dtype=object)
    body = frame.to_csv(
        index=False,
        header=False,
        quoting=csv.QUOTE_ALL,
        na_rep="",
        lineterminator="\n",
    )
    return "\n".join([",".join(columns), body.rstrip("\n")])


class ExportService:
    def __init__(self, store: EntityStore):
        self.store = store
        self.ranking = RankingEngine(store)

    def results_table(self) -> List[Dict[str, Any]]:
        """One row per result with names resolved; dangling references show as a dash."""
        panels = {p.id: p.name for p in reversed(self.store.panels)}
        projects = {p.id: p.title for p in reversed(self.store.projects)}
        evaluators = {e.id: e.name for e in reversed(self.store.evaluators)}

        rows = []
        for r in self.store.results:
            row = {
                "id": r.id,
                "panel": panels.get(r.panel_id) or MISSING,
                "project": projects.get(r.project_id) or MISSING,
                "evaluator": evaluators.get(r.evaluator_id) or MISSING,
                "total": r.total,
                "remark": r.remark,
                "finalized": "Yes" if r.finalized_by_evaluator else "No",
                "time": format_ts(r.ts),
            }
            row.update(r.scores)
            rows.append(row)
        return rows

    def project_scores_table(self) -> List[Dict[str, Any]]:
        """Project score sheet, best average first."""
        rows = []
        for score in self.ranking.rank_projects():
            if score.evaluator_count == 0:
                average, pct = 0, 0
            else:
                average = f"{score.average_score:.2f}"
                pct = f"{score.percentage:.1f}%"
            rows.append(
                {
                    "Project ID": score.id,
                    "Project Title": score.title,
                    "Category": score.category,
                    "Team": score.team,
                    "School": score.school,
                    "Number of Evaluators": score.evaluator_count,
                    "Average Score": average,
                    "Max Possible": score.max_possible,
                    "Percentage": pct,
                }
            )
        return rows

    def results_csv(self) -> str:
        rows = self.results_table()
        logger.info(f"Exporting {len(rows)} results to CSV")
        return to_csv(rows)

    def project_scores_csv(self) -> str:
        rows = self.project_scores_table()
        logger.info(f"Exporting scores for {len(rows)} projects to CSV")
        return to_csv(rows)

    def json_dump(self) -> Dict[str, Any]:
        """The full dataset in the shape a bulk sync pushes."""
        return self.store.snapshot().to_wire()
