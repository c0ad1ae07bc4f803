# tests/test_property_based.py
"""
Property-Based Tests

Hypothesis tests with max_examples=500, covering:
  - score validation and totals
  - leaderboard ordering and averages
  - identifier migration
  - progress percent
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from fairscore.core.exceptions import ValidationError
from fairscore.models.event_settings import EventSettings
from fairscore.models.evaluator import Evaluator
from fairscore.models.panel import Panel
from fairscore.models.project import Project
from fairscore.models.result import Result
from fairscore.repositories.entity_store import EntityStore
from fairscore.scoring.ranking import RankingEngine
from fairscore.scoring.rubric import rubric_keys
from fairscore.scoring.utils import progress_percent
from fairscore.services.identifiers import IdentifierAllocator
from fairscore.services.lifecycle_service import compute_total, validate_scores

# ---------------------------------------------------------------------------
# Shared strategies
# ---------------------------------------------------------------------------

CRITERIA = rubric_keys()

score_st = st.integers(min_value=0, max_value=10)


@st.composite
def full_scores(draw):
    """Every criterion scored 0-10."""
    return {k: draw(score_st) for k in CRITERIA}


@st.composite
def partial_scores(draw):
    """A subset of criteria scored 0-10."""
    keys = draw(st.lists(st.sampled_from(CRITERIA), unique=True))
    return {k: draw(score_st) for k in keys}


@st.composite
def scored_store(draw):
    """Store with 1-6 projects and 0-12 results spread over them."""
    store = EntityStore(EventSettings())
    project_count = draw(st.integers(min_value=1, max_value=6))
    store.projects = [Project(id=f"PRJ-{i:04d}", title=f"P{i}") for i in range(1, project_count + 1)]
    store.evaluators = [Evaluator(id=f"EVAL-{i:04d}", name=f"E{i}", email=f"e{i}@x.org") for i in range(1, 5)]
    results = draw(
        st.lists(
            st.tuples(st.sampled_from(store.projects), st.sampled_from(store.evaluators), partial_scores()),
            max_size=12,
        )
    )
    for n, (project, evaluator, scores) in enumerate(results, start=1):
        store.results.append(
            Result(
                id=f"RES-{n:04d}",
                project_id=project.id,
                evaluator_id=evaluator.id,
                scores=scores,
                total=compute_total(scores),
            )
        )
    return store


@st.composite
def legacy_store(draw):
    """Store whose ids are arbitrary legacy strings, referencing each other."""
    store = EntityStore(EventSettings())
    legacy_id = st.text(alphabet="abcdefghijklmnop0123456789", min_size=1, max_size=8).map(lambda s: "id_" + s)
    project_ids = draw(st.lists(legacy_id, min_size=1, max_size=5, unique=True))
    evaluator_ids = draw(st.lists(legacy_id, min_size=3, max_size=5, unique=True))
    store.projects = [Project(id=pid, title=pid) for pid in project_ids]
    store.evaluators = [Evaluator(id=eid, email=f"{eid}@x.org") for eid in evaluator_ids]
    store.panels = [
        Panel(
            id="id_panel",
            name="Panel 1",
            evaluator_ids=evaluator_ids[:3],
            project_ids=draw(st.lists(st.sampled_from(project_ids), min_size=1, unique=True)),
        )
    ]
    store.results = [
        Result(id=f"id_r{n}", panel_id="id_panel", project_id=pid, evaluator_id=evaluator_ids[0])
        for n, pid in enumerate(project_ids)
    ]
    return store


# ---------------------------------------------------------------------------
# Score Property Tests
# ---------------------------------------------------------------------------


class TestScorePropertyBased:

    @given(full_scores())
    @settings(max_examples=500)
    def test_total_is_sum_and_bounded(self, scores):
        """A complete result's total is the criterion sum, within [0, 60]."""
        clean = validate_scores(scores, require_complete=True)
        total = compute_total(clean)
        assert total == sum(scores.values())
        assert 0 <= total <= 60

    @given(st.sampled_from(CRITERIA), st.one_of(st.integers(max_value=-1), st.integers(min_value=11)))
    @settings(max_examples=500)
    def test_out_of_range_always_rejected(self, key, value):
        with pytest.raises(ValidationError) as exc:
            validate_scores({key: value})
        assert exc.value.criterion == key

    @given(partial_scores())
    @settings(max_examples=500)
    def test_validation_keeps_values(self, scores):
        clean = validate_scores(scores)
        assert clean == scores
        assert list(clean) == [k for k in CRITERIA if k in scores]


# ---------------------------------------------------------------------------
# Ranking Property Tests
# ---------------------------------------------------------------------------


class TestRankingPropertyBased:

    @given(scored_store())
    @settings(max_examples=500)
    def test_rankings_non_increasing(self, store):
        rows = RankingEngine(store).rank_projects()
        averages = [row.average_score for row in rows]
        assert averages == sorted(averages, reverse=True)
        assert len(rows) == len(store.projects)

    @given(scored_store())
    @settings(max_examples=500)
    def test_total_avg_equals_average(self, store):
        """Sum of criterion averages equals the mean result total."""
        engine = RankingEngine(store)
        for project in store.projects:
            detail = engine.project_detail(project.id)
            assert detail.total_avg == pytest.approx(detail.average_score)
            assert 0.0 <= detail.percentage <= 100.0

    @given(scored_store())
    @settings(max_examples=500)
    def test_every_result_counted_once(self, store):
        rows = RankingEngine(store).rank_projects()
        assert sum(row.evaluator_count for row in rows) == len(store.results)


# ---------------------------------------------------------------------------
# Migration Property Tests
# ---------------------------------------------------------------------------


class TestMigrationPropertyBased:

    @given(legacy_store())
    @settings(max_examples=500)
    def test_migration_idempotent(self, store):
        ids = IdentifierAllocator(store)
        ids.migrate()
        once = store.snapshot()

        report = ids.migrate()

        assert report.changed == 0
        assert store.snapshot() == once
        assert not ids.needs_migration()

    @given(legacy_store())
    @settings(max_examples=500)
    def test_references_follow_renumbering(self, store):
        before = [(r.project_id, r.evaluator_id) for r in store.results]
        report = IdentifierAllocator(store).migrate()

        projects = report.id_maps["project"]
        evaluators = report.id_maps["evaluator"]
        after = [(r.project_id, r.evaluator_id) for r in store.results]
        assert after == [(projects[p], evaluators[e]) for p, e in before]
        assert all(pid in projects.values() for pid in store.panels[0].project_ids)


# ---------------------------------------------------------------------------
# Progress Property Tests
# ---------------------------------------------------------------------------


class TestProgressPropertyBased:

    @given(st.integers(min_value=0, max_value=200), st.integers(min_value=0, max_value=200))
    @settings(max_examples=500)
    def test_percent_bounded(self, a, b):
        completed, total = min(a, b), max(a, b)
        percent = progress_percent(completed, total)
        assert 0 <= percent <= 100
        if total and completed == total:
            assert percent == 100
