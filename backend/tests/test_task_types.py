"""작업 유형 저장소 규칙(검증, 이름 중복, 참조 중 삭제 금지)을 검증합니다."""

import pytest
from estimator.errors import ConflictError, NotFoundError, ValidationError
from estimator.schemas.task_type import TaskTypeCreate, TaskTypeUpdate
from estimator.services import task_type_service
from tests.conftest import make_project


def _payload(**overrides):
    data = {"name": "Report", "default_min_hours": 2, "default_max_hours": 6, "category": "Backend"}
    data.update(overrides)
    return TaskTypeCreate(**data)


def test_create_task_type_trims_and_defaults(estimator):
    created = estimator.create_task_type(_payload(name="  Report  ", description="  "))

    assert created.name == "Report"
    assert created.description is None
    assert created.is_active is True
    assert created.default_min_hours == 2


@pytest.mark.parametrize("overrides", [
    {"default_min_hours": 5, "default_max_hours": 4},
    {"default_min_hours": 0},
    {"default_min_hours": -1},
    {"default_max_hours": 1000.5},
    {"name": "   "},
    {"name": "x" * 101},
    {"category": "c" * 51},
    {"description": "d" * 501},
])
def test_create_task_type_validation(estimator, overrides):
    with pytest.raises(ValidationError):
        estimator.create_task_type(_payload(**overrides))
    assert estimator.list_task_types() == []


def test_equal_min_and_max_hours_are_allowed(estimator):
    created = estimator.create_task_type(_payload(default_min_hours=1000, default_max_hours=1000))
    assert created.default_max_hours == 1000


def test_duplicate_name_conflicts(estimator):
    estimator.create_task_type(_payload())
    with pytest.raises(ConflictError):
        estimator.create_task_type(_payload())

    other = estimator.create_task_type(_payload(name="Other"))
    with pytest.raises(ConflictError):
        estimator.update_task_type(other.id, TaskTypeUpdate(name="Report"))
    # 자기 자신의 이름으로 다시 저장하는 것은 충돌이 아니다.
    assert estimator.update_task_type(other.id, TaskTypeUpdate(name="Other")).name == "Other"


def test_get_task_type_by_name(db, seed_task_types):
    found = task_type_service.get_task_type_by_name(db, "  API Endpoint ")

    assert found.id == seed_task_types["api"].id
    assert task_type_service.get_task_type_by_name(db, "Missing") is None


def test_update_validates_merged_hours(estimator):
    created = estimator.create_task_type(_payload())

    with pytest.raises(ValidationError):
        estimator.update_task_type(created.id, TaskTypeUpdate(default_max_hours=1))

    updated = estimator.update_task_type(created.id, TaskTypeUpdate(default_max_hours=8, is_active=False))
    assert updated.default_max_hours == 8
    assert updated.is_active is False


def test_update_and_delete_missing_task_type(estimator):
    with pytest.raises(NotFoundError):
        estimator.update_task_type("missing", TaskTypeUpdate(name="x"))
    with pytest.raises(NotFoundError):
        estimator.delete_task_type("missing")


def test_delete_referenced_task_type_conflicts(estimator, db, seed_task_types):
    make_project(db, "Uses API", [(seed_task_types["api"], 1, None, None)])

    with pytest.raises(ConflictError):
        estimator.delete_task_type(seed_task_types["api"].id)

    estimator.delete_task_type(seed_task_types["db"].id)
    names = [row.name for row in estimator.list_task_types()]
    assert "API Endpoint" in names
    assert "Database Design" not in names


def test_list_filters_and_categories(estimator):
    estimator.create_task_type(_payload(name="Login Screen", category="Frontend"))
    estimator.create_task_type(_payload(name="Legacy Screen", category="Legacy", is_active=False))
    estimator.create_task_type(_payload(name="Export API", category="Backend", description="CSV export"))

    assert [t.name for t in estimator.list_task_types()] == ["Export API", "Login Screen", "Legacy Screen"]
    assert [t.name for t in estimator.list_task_types(category="Frontend")] == ["Login Screen"]
    assert [t.name for t in estimator.list_task_types(active=False)] == ["Legacy Screen"]
    assert [t.name for t in estimator.list_task_types(search="csv")] == ["Export API"]
    assert estimator.list_categories() == ["Backend", "Frontend"]
