"""프로젝트 견적 집계 엔진입니다.

프로젝트의 ProjectTask 목록에서 유효 시간(오버라이드 > 기본값)을 해석해
작업별 소계와 프로젝트 합계를 계산하고, 같은 트랜잭션 안에서 Project 행의
total_min_hours / total_max_hours를 갱신한다. 합계 컬럼은 이 모듈에서만 기록한다.
"""

import logging
from datetime import datetime
from typing import Iterable, List

from sqlalchemy import or_
from sqlalchemy.orm import Session, contains_eager

from estimator.errors import NotFoundError
from estimator.models.project import Project, ProjectTask
from estimator.models.task_type import TaskType
from estimator.schemas.estimate import EstimationBreakdown, ProjectEstimate

logger = logging.getLogger(__name__)


def breakdown_sort_key(row: ProjectTask):
    category = row.task_type.category
    # 카테고리가 없는 작업 유형이 먼저 온다.
    return (category is not None, category or "", row.task_type.name, row.id)


def _load_project_tasks(db: Session, project_id: str) -> List[ProjectTask]:
    rows = (
        db.query(ProjectTask)
        .join(ProjectTask.task_type)
        .options(contains_eager(ProjectTask.task_type))
        .filter(ProjectTask.project_id == project_id)
        .all()
    )
    return sorted(rows, key=breakdown_sort_key)


def _lock_project(db: Session, project_id: str) -> Project:
    project = (
        db.query(Project)
        .filter(Project.id == project_id)
        .with_for_update()
        .first()
    )
    if not project:
        raise NotFoundError("프로젝트", project_id)
    return project


def calculate_estimate(db: Session, project_id: str) -> ProjectEstimate:
    """프로젝트 견적을 계산하고 합계를 Project 행에 기록한다.

    호출자의 트랜잭션 안에서 실행되며 commit하지 않는다.
    """
    db.flush()
    project = _lock_project(db, project_id)

    breakdown = []
    total_min_hours = 0.0
    total_max_hours = 0.0
    for row in _load_project_tasks(db, project_id):
        min_hours = row.effective_min_hours
        max_hours = row.effective_max_hours
        subtotal_min_hours = row.quantity * min_hours
        subtotal_max_hours = row.quantity * max_hours
        breakdown.append(
            EstimationBreakdown(
                task_type_id=row.task_type_id,
                task_type_name=row.task_type.name,
                quantity=row.quantity,
                min_hours=min_hours,
                max_hours=max_hours,
                subtotal_min_hours=subtotal_min_hours,
                subtotal_max_hours=subtotal_max_hours,
            )
        )
        total_min_hours += subtotal_min_hours
        total_max_hours += subtotal_max_hours

    project.total_min_hours = total_min_hours
    project.total_max_hours = total_max_hours
    db.flush()

    logger.debug(
        "[estimation] project=%s tasks=%s total=%s~%s",
        project_id, len(breakdown), total_min_hours, total_max_hours,
    )
    return ProjectEstimate(
        project_id=project_id,
        total_min_hours=total_min_hours,
        total_max_hours=total_max_hours,
        task_breakdown=breakdown,
        calculated_at=datetime.utcnow(),
    )


def recalculate(db: Session, project_id: str) -> None:
    calculate_estimate(db, project_id)


def recalculate_many(db: Session, project_ids: Iterable[str]) -> List[str]:
    """중복을 제거한 프로젝트 집합을 한 번씩만 재계산한다."""
    unique_ids = sorted(set(project_ids))
    for project_id in unique_ids:
        recalculate(db, project_id)
    if unique_ids:
        logger.info("[estimation] recalculated %s project(s)", len(unique_ids))
    return unique_ids


def project_ids_using_task_type(
    db: Session,
    task_type_id: str,
    *,
    min_changed: bool = True,
    max_changed: bool = True,
) -> set:
    """기본 시간 변경의 영향을 받는 프로젝트 id 집합.

    오버라이드는 차원별로 독립이다. 기본 최소값이 바뀌면 custom_min_hours가 없는 행,
    기본 최대값이 바뀌면 custom_max_hours가 없는 행의 프로젝트만 대상이다.
    """
    conditions = []
    if min_changed:
        conditions.append(ProjectTask.custom_min_hours.is_(None))
    if max_changed:
        conditions.append(ProjectTask.custom_max_hours.is_(None))
    if not conditions:
        return set()

    rows = (
        db.query(ProjectTask.project_id)
        .filter(ProjectTask.task_type_id == task_type_id, or_(*conditions))
        .distinct()
        .all()
    )
    return {row.project_id for row in rows}


def find_inconsistent_tasks(db: Session, task_type: TaskType) -> List[ProjectTask]:
    """기본값 변경 후 유효 최대 < 유효 최소가 되는 ProjectTask 목록."""
    db.flush()
    rows = db.query(ProjectTask).filter(ProjectTask.task_type_id == task_type.id).all()
    return [row for row in rows if row.effective_max_hours < row.effective_min_hours]
