"""ProjectTask 도메인 서비스 레이어입니다. 모든 변경은 소속 프로젝트 합계 재계산과 함께 수행됩니다."""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from estimator.errors import ConflictError, NotFoundError, ValidationError
from estimator.models.project import Project, ProjectTask
from estimator.models.task_type import TaskType
from estimator.schemas.project_task import ProjectTaskCreate, ProjectTaskUpdate
from estimator.services import estimation_service
from estimator.utils.validators import validate_hour_range, validate_hours, validate_quantity

logger = logging.getLogger(__name__)


def _get_project(db: Session, project_id: str) -> Project:
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        raise NotFoundError("프로젝트", project_id)
    return project


def _get_task_type(db: Session, task_type_id: str) -> TaskType:
    task_type = db.query(TaskType).filter(TaskType.id == task_type_id).first()
    if not task_type:
        raise NotFoundError("작업 유형", task_type_id)
    return task_type


def _validate_overrides(
    task_type: TaskType,
    custom_min_hours: Optional[float],
    custom_max_hours: Optional[float],
):
    if custom_min_hours is not None:
        custom_min_hours = validate_hours(custom_min_hours, "사용자 지정 최소 시간")
    if custom_max_hours is not None:
        custom_max_hours = validate_hours(custom_max_hours, "사용자 지정 최대 시간")
    effective_min = custom_min_hours if custom_min_hours is not None else task_type.default_min_hours
    effective_max = custom_max_hours if custom_max_hours is not None else task_type.default_max_hours
    validate_hour_range(effective_min, effective_max, "유효 최대 시간")
    return custom_min_hours, custom_max_hours


def list_project_tasks(db: Session, project_id: str) -> List[ProjectTask]:
    _get_project(db, project_id)
    rows = (
        db.query(ProjectTask)
        .options(joinedload(ProjectTask.task_type))
        .filter(ProjectTask.project_id == project_id)
        .all()
    )
    return sorted(rows, key=estimation_service.breakdown_sort_key)


def get_project_task(db: Session, project_id: str, task_id: str) -> ProjectTask:
    task = (
        db.query(ProjectTask)
        .filter(ProjectTask.id == task_id, ProjectTask.project_id == project_id)
        .first()
    )
    if not task:
        raise NotFoundError("프로젝트 작업", task_id)
    return task


def insert_project_task(db: Session, project_id: str, data: ProjectTaskCreate) -> ProjectTask:
    """재계산 없이 행만 추가한다. 여러 작업을 묶어 처리하는 호출자가 마지막에 한 번 재계산한다."""
    _get_project(db, project_id)
    task_type = _get_task_type(db, data.task_type_id)
    quantity = validate_quantity(data.quantity)
    custom_min, custom_max = _validate_overrides(task_type, data.custom_min_hours, data.custom_max_hours)

    duplicate = (
        db.query(ProjectTask.id)
        .filter(ProjectTask.project_id == project_id, ProjectTask.task_type_id == task_type.id)
        .first()
    )
    if duplicate:
        raise ConflictError(f"이미 프로젝트에 추가된 작업 유형입니다: {task_type.name}")

    task = ProjectTask(
        project_id=project_id,
        task_type_id=task_type.id,
        quantity=quantity,
        custom_min_hours=custom_min,
        custom_max_hours=custom_max,
    )
    task.task_type = task_type
    db.add(task)
    try:
        db.flush()
    except IntegrityError as exc:
        raise ConflictError(f"이미 프로젝트에 추가된 작업 유형입니다: {task_type.name}") from exc
    return task


def apply_project_task_update(db: Session, task: ProjectTask, data: ProjectTaskUpdate) -> ProjectTask:
    updates = {}
    if data.quantity is not None:
        updates["quantity"] = validate_quantity(data.quantity)
    custom_min = task.custom_min_hours
    custom_max = task.custom_max_hours
    if "custom_min_hours" in data.model_fields_set:
        custom_min = data.custom_min_hours
    if "custom_max_hours" in data.model_fields_set:
        custom_max = data.custom_max_hours
    custom_min, custom_max = _validate_overrides(task.task_type, custom_min, custom_max)
    updates["custom_min_hours"] = custom_min
    updates["custom_max_hours"] = custom_max

    for k, v in updates.items():
        setattr(task, k, v)
    db.flush()
    return task


def ensure_same_task_type(task: ProjectTask, task_type_id: str) -> None:
    """기존 작업의 작업 유형은 바꿀 수 없다. 다른 유형이 필요하면 삭제 후 새로 추가한다."""
    if task_type_id != task.task_type_id:
        raise ValidationError(
            f"프로젝트 작업의 작업 유형은 변경할 수 없습니다: {task.id}. 기존 작업을 삭제하고 새로 추가하세요."
        )


def remove_project_task(db: Session, task: ProjectTask) -> None:
    db.delete(task)
    db.flush()


def create_project_task(db: Session, project_id: str, data: ProjectTaskCreate) -> ProjectTask:
    task = insert_project_task(db, project_id, data)
    estimation_service.recalculate(db, project_id)
    logger.info("[project-task] added %s x%s to project %s", task.task_type_id, task.quantity, project_id)
    return task


def update_project_task(db: Session, project_id: str, task_id: str, data: ProjectTaskUpdate) -> ProjectTask:
    task = get_project_task(db, project_id, task_id)
    apply_project_task_update(db, task, data)
    estimation_service.recalculate(db, project_id)
    return task


def delete_project_task(db: Session, project_id: str, task_id: str) -> None:
    task = get_project_task(db, project_id, task_id)
    remove_project_task(db, task)
    estimation_service.recalculate(db, project_id)
    logger.info("[project-task] removed %s from project %s", task_id, project_id)
