"""견적 집계 엔진의 합계/소계/정렬/멱등성 규칙을 검증합니다."""

import pytest
from estimator.errors import NotFoundError
from estimator.models.task_type import TaskType
from tests.conftest import make_project, stored_totals


def test_demo_project_totals(estimator, db, seed_task_types):
    project = make_project(db, "Demo", [
        (seed_task_types["screen"], 5, None, None),
        (seed_task_types["api"], 12, None, None),
    ])

    estimate = estimator.calculate_estimate(project.id)

    assert estimate.project_id == project.id
    assert estimate.total_min_hours == 64
    assert estimate.total_max_hours == 128
    assert stored_totals(project.id) == (64, 128)


def test_breakdown_entries_carry_effective_hours_and_subtotals(estimator, db, seed_task_types):
    project = make_project(db, "Breakdown", [
        (seed_task_types["api"], 3, 1.5, None),
    ])

    estimate = estimator.calculate_estimate(project.id)

    assert len(estimate.task_breakdown) == 1
    entry = estimate.task_breakdown[0]
    assert entry.task_type_id == seed_task_types["api"].id
    assert entry.task_type_name == "API Endpoint"
    assert entry.quantity == 3
    assert entry.min_hours == 1.5
    assert entry.max_hours == 4
    assert entry.subtotal_min_hours == 4.5
    assert entry.subtotal_max_hours == 12
    assert estimate.total_min_hours == 4.5


def test_empty_project_has_zero_totals(estimator, db):
    project = make_project(db, "Empty")

    estimate = estimator.calculate_estimate(project.id)

    assert estimate.total_min_hours == 0
    assert estimate.total_max_hours == 0
    assert estimate.task_breakdown == []
    assert stored_totals(project.id) == (0, 0)


def test_missing_project_raises_not_found(estimator):
    with pytest.raises(NotFoundError):
        estimator.calculate_estimate("does-not-exist")
    with pytest.raises(NotFoundError):
        estimator.recalculate("does-not-exist")


def test_breakdown_is_ordered_by_category_then_name(estimator, db, seed_task_types):
    uncategorised = TaskType(name="Kickoff Meeting", default_min_hours=1, default_max_hours=2)
    db.add(uncategorised)
    db.commit()
    project = make_project(db, "Ordering", [
        (seed_task_types["screen"], 1, None, None),
        (seed_task_types["db"], 1, None, None),
        (uncategorised, 1, None, None),
        (seed_task_types["api"], 1, None, None),
    ])

    names = [entry.task_type_name for entry in estimator.calculate_estimate(project.id).task_breakdown]

    assert names == ["Kickoff Meeting", "API Endpoint", "Database Design", "Large Complex Web Screen"]


def test_recalculate_is_idempotent(estimator, db, seed_task_types):
    project = make_project(db, "Idempotent", [
        (seed_task_types["screen"], 2, None, 20),
        (seed_task_types["db"], 1, None, None),
        (seed_task_types["api"], 7, 2.5, None),
    ])

    estimator.recalculate(project.id)
    first_totals = stored_totals(project.id)
    first = estimator.calculate_estimate(project.id)
    estimator.recalculate(project.id)
    second = estimator.calculate_estimate(project.id)

    assert stored_totals(project.id) == first_totals
    assert first.task_breakdown == second.task_breakdown
    assert (first.total_min_hours, first.total_max_hours) == first_totals


def test_sum_invariant_matches_effective_hours(estimator, db, seed_task_types):
    rows = [
        (seed_task_types["screen"], 3, 9.5, None),
        (seed_task_types["api"], 4, None, 6),
        (seed_task_types["db"], 2, None, None),
    ]
    project = make_project(db, "Invariant", rows)

    estimator.recalculate(project.id)

    expected_min = sum(q * (cmin if cmin is not None else t.default_min_hours) for t, q, cmin, _ in rows)
    expected_max = sum(q * (cmax if cmax is not None else t.default_max_hours) for t, q, _, cmax in rows)
    assert stored_totals(project.id) == (expected_min, expected_max)
