"""TaskType 도메인 서비스 레이어입니다. 기본 시간 변경 시 영향받는 프로젝트 합계를 재계산합니다."""

import logging
from typing import List, Optional, Set

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from estimator.errors import ConflictError, NotFoundError, ValidationError
from estimator.models.project import ProjectTask
from estimator.models.task_type import TaskType
from estimator.schemas.task_type import TaskTypeBulkUpdateItem, TaskTypeCreate, TaskTypeUpdate
from estimator.services import estimation_service
from estimator.utils.validators import (
    validate_hour_range,
    validate_hours,
    validate_name,
    validate_optional_text,
)

logger = logging.getLogger(__name__)


def _ensure_name_available(db: Session, name: str, exclude_id: Optional[str] = None):
    existing = get_task_type_by_name(db, name)
    if existing and existing.id != exclude_id:
        raise ConflictError(f"이미 존재하는 작업 유형 이름입니다: {name}")


def _flush(db: Session):
    try:
        db.flush()
    except IntegrityError as exc:
        raise ConflictError(f"작업 유형 저장 중 무결성 제약을 위반했습니다: {exc.orig}") from exc


def list_task_types(
    db: Session,
    category: Optional[str] = None,
    active: Optional[bool] = None,
    search: Optional[str] = None,
) -> List[TaskType]:
    query = db.query(TaskType)
    if category:
        query = query.filter(TaskType.category == category)
    if active is not None:
        query = query.filter(TaskType.is_active == active)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(or_(TaskType.name.ilike(pattern), TaskType.description.ilike(pattern)))
    return query.order_by(TaskType.category, TaskType.name).all()


def list_categories(db: Session) -> List[str]:
    rows = (
        db.query(TaskType.category)
        .filter(TaskType.category.isnot(None), TaskType.is_active == True)  # noqa: E712
        .distinct()
        .order_by(TaskType.category)
        .all()
    )
    return [row.category for row in rows if row.category]


def get_task_type(db: Session, task_type_id: str) -> TaskType:
    task_type = db.query(TaskType).filter(TaskType.id == task_type_id).first()
    if not task_type:
        raise NotFoundError("작업 유형", task_type_id)
    return task_type


def get_task_type_by_name(db: Session, name: str) -> Optional[TaskType]:
    return db.query(TaskType).filter(TaskType.name == name.strip()).first()


def create_task_type(db: Session, data: TaskTypeCreate) -> TaskType:
    name = validate_name(data.name, "작업 유형 이름")
    min_hours = validate_hours(data.default_min_hours, "기본 최소 시간")
    max_hours = validate_hours(data.default_max_hours, "기본 최대 시간")
    validate_hour_range(min_hours, max_hours, "기본 최대 시간")
    description = validate_optional_text(data.description, "설명", 500)
    category = validate_optional_text(data.category, "카테고리", 50)
    _ensure_name_available(db, name)

    task_type = TaskType(
        name=name,
        description=description,
        default_min_hours=min_hours,
        default_max_hours=max_hours,
        category=category,
        is_active=data.is_active,
    )
    db.add(task_type)
    _flush(db)
    logger.info("[task-type] created %s (%s)", task_type.name, task_type.id)
    return task_type


def _apply_update(db: Session, task_type: TaskType, data: TaskTypeUpdate) -> Set[str]:
    """변경 사항을 검증/적용하고 합계를 다시 계산해야 하는 프로젝트 id 집합을 돌려준다."""
    updates = data.model_dump(exclude_none=True, exclude={"id"})
    if "description" in data.model_fields_set:
        updates["description"] = data.description
    if "category" in data.model_fields_set:
        updates["category"] = data.category

    if "name" in updates:
        updates["name"] = validate_name(updates["name"], "작업 유형 이름")
        _ensure_name_available(db, updates["name"], exclude_id=task_type.id)
    if "description" in updates:
        updates["description"] = validate_optional_text(updates["description"], "설명", 500)
    if "category" in updates:
        updates["category"] = validate_optional_text(updates["category"], "카테고리", 50)

    new_min = validate_hours(updates.get("default_min_hours", task_type.default_min_hours), "기본 최소 시간")
    new_max = validate_hours(updates.get("default_max_hours", task_type.default_max_hours), "기본 최대 시간")
    validate_hour_range(new_min, new_max, "기본 최대 시간")

    min_changed = new_min != task_type.default_min_hours
    max_changed = new_max != task_type.default_max_hours
    affected = estimation_service.project_ids_using_task_type(
        db, task_type.id, min_changed=min_changed, max_changed=max_changed
    )

    for key, value in updates.items():
        setattr(task_type, key, value)
    _flush(db)

    if min_changed or max_changed:
        broken = estimation_service.find_inconsistent_tasks(db, task_type)
        if broken:
            raise ValidationError(
                f"기본 시간 변경으로 {len(broken)}개 프로젝트 작업의 유효 최대 시간이 최소 시간보다 작아집니다. "
                "해당 작업의 오버라이드를 먼저 수정하세요."
            )
    return affected


def update_task_type(db: Session, task_type_id: str, data: TaskTypeUpdate) -> TaskType:
    task_type = get_task_type(db, task_type_id)
    affected = _apply_update(db, task_type, data)
    estimation_service.recalculate_many(db, affected)
    return task_type


def bulk_update_task_types(db: Session, items: List[TaskTypeBulkUpdateItem]) -> List[TaskType]:
    """여러 작업 유형을 한 번에 수정하고 영향받는 프로젝트를 중복 없이 한 번씩 재계산한다."""
    results = []
    affected: Set[str] = set()
    for item in items:
        task_type = get_task_type(db, item.id)
        affected |= _apply_update(db, task_type, item)
        results.append(task_type)
    estimation_service.recalculate_many(db, affected)
    return results


def delete_task_type(db: Session, task_type_id: str) -> None:
    task_type = get_task_type(db, task_type_id)
    referenced = db.query(ProjectTask.id).filter(ProjectTask.task_type_id == task_type_id).first()
    if referenced:
        raise ConflictError("프로젝트 작업에서 참조 중인 작업 유형은 삭제할 수 없습니다.")
    db.delete(task_type)
    _flush(db)
    logger.info("[task-type] deleted %s", task_type_id)
