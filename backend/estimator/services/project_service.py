"""Project 도메인 서비스 레이어입니다. 비즈니스 규칙과 데이터 접근 흐름을 캡슐화합니다."""

import logging
import math
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from estimator.errors import NotFoundError, ValidationError
from estimator.models.project import Project, ProjectStatus, ProjectTask
from estimator.schemas.project import ProjectCreate, ProjectUpdate, ProjectWithTasksUpdate
from estimator.schemas.project_task import ProjectTaskUpdate
from estimator.services import estimation_service, project_task_service
from estimator.utils.validators import validate_name, validate_optional_text

logger = logging.getLogger(__name__)


def get_projects(
    db: Session,
    status: Optional[ProjectStatus] = None,
    search: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> Tuple[List[Project], int]:
    if page < 1:
        raise ValidationError("페이지는 1 이상이어야 합니다.")
    if limit < 1 or limit > 100:
        raise ValidationError("페이지 크기는 1~100 사이여야 합니다.")

    query = db.query(Project)
    if status:
        query = query.filter(Project.status == ProjectStatus(status).value)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(or_(Project.name.ilike(pattern), Project.description.ilike(pattern)))

    total = query.count()
    rows = (
        query.options(selectinload(Project.tasks))
        .order_by(Project.updated_at.desc(), Project.name)
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return rows, total


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def get_project(db: Session, project_id: str) -> Project:
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        raise NotFoundError("프로젝트", project_id)
    return project


def load_project_detail(db: Session, project_id: str) -> Project:
    """작업 목록과 작업 유형까지 한 번에 읽은 최신 프로젝트."""
    db.flush()
    project = get_project(db, project_id)
    db.expire(project, ["tasks"])
    return (
        db.query(Project)
        .options(selectinload(Project.tasks).selectinload(ProjectTask.task_type))
        .filter(Project.id == project_id)
        .populate_existing()
        .one()
    )


def create_project(db: Session, data: ProjectCreate) -> Project:
    """프로젝트를 만들고 함께 전달된 작업을 추가한 뒤 합계를 한 번 계산한다."""
    project = Project(
        name=validate_name(data.name, "프로젝트 이름"),
        description=validate_optional_text(data.description, "설명", 1000),
        status=ProjectStatus(data.status or ProjectStatus.DRAFT).value,
        total_min_hours=0.0,
        total_max_hours=0.0,
    )
    db.add(project)
    db.flush()

    for task_data in data.tasks:
        project_task_service.insert_project_task(db, project.id, task_data)
    if data.tasks:
        estimation_service.recalculate(db, project.id)
    logger.info("[project] created %s with %s task(s)", project.id, len(data.tasks))
    return project


def _apply_project_fields(project: Project, data: ProjectUpdate) -> None:
    updates = data.model_dump(exclude_none=True, include={"name", "description", "status"})
    if "description" in data.model_fields_set:
        updates["description"] = data.description

    if "name" in updates:
        updates["name"] = validate_name(updates["name"], "프로젝트 이름")
    if "description" in updates:
        updates["description"] = validate_optional_text(updates["description"], "설명", 1000)
    if "status" in updates:
        updates["status"] = ProjectStatus(updates["status"]).value

    for k, v in updates.items():
        setattr(project, k, v)


def update_project(db: Session, project_id: str, data: ProjectUpdate) -> Project:
    project = get_project(db, project_id)
    _apply_project_fields(project, data)
    db.flush()
    return project


def update_project_with_tasks(db: Session, project_id: str, data: ProjectWithTasksUpdate) -> Project:
    """프로젝트 정보와 작업 추가/수정/삭제를 한 트랜잭션에서 처리하고 합계를 한 번 재계산한다."""
    project = get_project(db, project_id)
    _apply_project_fields(project, data)
    db.flush()

    for task_id in data.task_ids_to_delete:
        task = project_task_service.get_project_task(db, project_id, task_id)
        project_task_service.remove_project_task(db, task)

    for item in data.task_updates:
        if item.id:
            task = project_task_service.get_project_task(db, project_id, item.id)
            project_task_service.ensure_same_task_type(task, item.task_type_id)
            fields = item.model_fields_set & {"quantity", "custom_min_hours", "custom_max_hours"}
            update = ProjectTaskUpdate(**item.model_dump(include=fields))
            project_task_service.apply_project_task_update(db, task, update)
        else:
            project_task_service.insert_project_task(db, project_id, item)

    estimation_service.recalculate(db, project_id)
    return project


def delete_project(db: Session, project_id: str) -> None:
    project = get_project(db, project_id)
    removed = (
        db.query(ProjectTask)
        .filter(ProjectTask.project_id == project_id)
        .delete(synchronize_session=False)
    )
    db.expire(project)
    db.delete(project)
    db.flush()
    logger.info("[project] deleted %s (%s task(s))", project_id, removed)
