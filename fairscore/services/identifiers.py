"""
Identifier Allocator - Science Fair Evaluation Platform
fairscore/services/identifiers.py

Human-readable ids of the form ``PRJ-0001``. The sequence is the current
count of entities of that kind plus one, so an id freed by a delete can be
handed out again while another entity still holds it. Exported data
depends on this numbering, so it is kept as is.

Legacy ids (``id_...``) from older exports are rewritten by ``migrate``.
"""

import logging
from typing import Dict

from pydantic import Field

from fairscore.models.base import CamelModel
from fairscore.models.enumerations import EntityKind

logger = logging.getLogger(__name__)

ID_PREFIXES: Dict[EntityKind, str] = {
    EntityKind.PROJECT: "PRJ",
    EntityKind.EVALUATOR: "EVAL",
    EntityKind.PANEL: "PNL",
    EntityKind.RESULT: "RES",
}
LEGACY_PREFIX = "id_"


def format_id(kind: EntityKind, sequence: int) -> str:
    return f"{ID_PREFIXES[kind]}-{sequence:04d}"


class MigrationReport(CamelModel):
    """Old -> new id maps per kind, plus how many ids actually changed."""

    id_maps: Dict[str, Dict[str, str]] = Field(default_factory=dict)
    changed: int = 0


class IdentifierAllocator:
    def __init__(self, store):
        self.store = store

    def allocate(self, kind: EntityKind) -> str:
        return format_id(kind, self.store.count(kind) + 1)

    def needs_migration(self) -> bool:
        """True when any entity of any kind still carries a legacy id."""
        for kind in ID_PREFIXES:
            for entity in self.store.collection(kind):
                if str(entity.id).startswith(LEGACY_PREFIX):
                    return True
        return False

    def migrate(self) -> MigrationReport:
        """
        Renumber every entity to canonical sequential ids in collection order
        and rewrite all cross references.

        References with no entry in the map (dangling ids) are left as they
        are. Once every id is canonical a second run changes nothing.

        Returns:
            MigrationReport with the per-kind maps
        """
        id_maps: Dict[EntityKind, Dict[str, str]] = {}
        changed = 0

        for kind in ID_PREFIXES:
            mapping: Dict[str, str] = {}
            for index, entity in enumerate(self.store.collection(kind), start=1):
                new_id = format_id(kind, index)
                # First holder of a duplicated id keeps the mapping
                mapping.setdefault(entity.id, new_id)
                if entity.id != new_id:
                    changed += 1
                entity.id = new_id
            id_maps[kind] = mapping

        evaluator_map = id_maps[EntityKind.EVALUATOR]
        project_map = id_maps[EntityKind.PROJECT]
        panel_map = id_maps[EntityKind.PANEL]

        for panel in self.store.panels:
            panel.evaluator_ids = [evaluator_map.get(i, i) for i in panel.evaluator_ids]
            panel.project_ids = [project_map.get(i, i) for i in panel.project_ids]

        for result in self.store.results:
            if result.panel_id is not None:
                result.panel_id = panel_map.get(result.panel_id, result.panel_id)
            result.project_id = project_map.get(result.project_id, result.project_id)
            result.evaluator_id = evaluator_map.get(result.evaluator_id, result.evaluator_id)

        self.store.evaluator_state = {
            evaluator_map.get(key, key): state
            for key, state in self.store.evaluator_state.items()
        }

        logger.info(f"Identifier migration complete: {changed} ids rewritten")
        return MigrationReport(
            id_maps={kind.value: mapping for kind, mapping in id_maps.items()},
            changed=changed,
        )
