"""유지보수 작업(오래된 프로젝트 보관, 합계 일괄 재계산, 통계, 헬스체크)을 제공합니다."""

import logging
import time
from datetime import datetime, timedelta

from sqlalchemy import func, select, text
from sqlalchemy.orm import Session

from estimator.models.project import Project, ProjectStatus, ProjectTask
from estimator.models.task_type import TaskType
from estimator.schemas.maintenance import (
    ArchiveResult,
    ArchivedProject,
    DatabaseStats,
    HealthStatus,
    MaintenanceResult,
)
from estimator.services import estimation_service

logger = logging.getLogger(__name__)


def archive_old_projects(db: Session, days_old: int = 365) -> ArchiveResult:
    cutoff = datetime.utcnow() - timedelta(days=days_old)
    projects = (
        db.query(Project)
        .filter(Project.updated_at < cutoff, Project.status != ProjectStatus.ARCHIVED.value)
        .order_by(Project.updated_at)
        .all()
    )
    for project in projects:
        project.status = ProjectStatus.ARCHIVED.value
    db.flush()
    if projects:
        logger.info("[maintenance] archived %s project(s) older than %s day(s)", len(projects), days_old)
    return ArchiveResult(
        archived=len(projects),
        projects=[ArchivedProject(id=p.id, name=p.name) for p in projects],
    )


def perform_maintenance(db: Session) -> MaintenanceResult:
    """고아 프로젝트 작업을 지우고 모든 프로젝트 합계를 다시 계산한다."""
    orphaned = (
        db.query(ProjectTask)
        .filter(~ProjectTask.project_id.in_(select(Project.id)))
        .delete(synchronize_session=False)
    )
    project_ids = [row.id for row in db.query(Project.id).all()]
    estimation_service.recalculate_many(db, project_ids)
    logger.info("[maintenance] removed %s orphaned task(s), recalculated %s project(s)", orphaned, len(project_ids))
    return MaintenanceResult(
        orphaned_tasks_removed=orphaned,
        project_totals_recalculated=len(project_ids),
    )


def get_database_stats(db: Session) -> DatabaseStats:
    status_counts = dict(
        db.query(Project.status, func.count(Project.id)).group_by(Project.status).all()
    )
    projects = {"total": sum(status_counts.values())}
    for status in ProjectStatus:
        projects[status.value.lower()] = status_counts.get(status.value, 0)

    active_counts = dict(
        db.query(TaskType.is_active, func.count(TaskType.id)).group_by(TaskType.is_active).all()
    )
    task_types = {
        "total": sum(active_counts.values()),
        "active": active_counts.get(True, 0),
        "inactive": active_counts.get(False, 0),
    }
    return DatabaseStats(
        projects=projects,
        task_types=task_types,
        project_tasks={"total": db.query(func.count(ProjectTask.id)).scalar() or 0},
    )


def check_database_connection(db: Session) -> HealthStatus:
    started = time.perf_counter()
    try:
        db.execute(text("SELECT 1"))
    except Exception as exc:
        logger.warning("[health] database check failed: %s", exc)
        return HealthStatus(
            status="unhealthy",
            database="disconnected",
            timestamp=datetime.utcnow(),
            error=str(exc),
        )
    return HealthStatus(
        status="healthy",
        database="connected",
        timestamp=datetime.utcnow(),
        response_time_ms=round((time.perf_counter() - started) * 1000, 3),
    )
