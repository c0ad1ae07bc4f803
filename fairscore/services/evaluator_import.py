"""
Evaluator Bulk Import - Science Fair Evaluation Platform
fairscore/services/evaluator_import.py

Adds evaluators from pasted CSV text. The first line is a header naming the
columns (typically ``name,email,expertise``). Rows with fewer than two
columns, without an email, or whose email is already registered are
skipped. Each new evaluator gets an allocated id and a random access code.
"""

import csv
import io
import logging
from typing import List

from pydantic import Field

from fairscore.core.exceptions import ValidationError
from fairscore.models.base import CamelModel
from fairscore.models.evaluator import Evaluator
from fairscore.repositories.entity_store import EntityStore
from fairscore.repositories.evaluator_repository import DEFAULT_CODE_RANGE, EvaluatorRepository

logger = logging.getLogger(__name__)


class ImportReport(CamelModel):
    added: int
    skipped: int
    evaluators: List[Evaluator] = Field(default_factory=list)


def import_evaluators(store: EntityStore, text: str, code_range=DEFAULT_CODE_RANGE) -> ImportReport:
    lines = [line for line in (text or "").splitlines() if line.strip()]
    if len(lines) < 2:
        raise ValidationError("Need at least header + 1 data row")

    rows = list(csv.reader(io.StringIO("\n".join(lines))))
    header = [h.strip().lower() for h in rows[0]]
    repo = EvaluatorRepository(store, code_range=code_range)

    added: List[Evaluator] = []
    skipped = 0
    for cols in rows[1:]:
        if len(cols) < 2:
            skipped += 1
            continue
        record = {
            name: (cols[i].strip() if i < len(cols) else "")
            for i, name in enumerate(header)
        }
        email = record.get("email", "")
        if not email or repo.get_by_email(email) is not None:
            skipped += 1
            continue
        evaluator = repo.add_imported(
            name=record.get("name", ""),
            email=email,
            expertise=record.get("expertise", ""),
        )
        if record.get("notes"):
            evaluator.notes = record["notes"]
        added.append(evaluator)

    logger.info(f"Evaluator import: {len(added)} added, {skipped} skipped")
    return ImportReport(added=len(added), skipped=skipped, evaluators=added)
