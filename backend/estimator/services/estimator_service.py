"""견적 도메인의 프로세스 내부 진입점입니다.

모든 연산은 TransactionCoordinator의 작업 단위 하나로 실행되며, 세션이 닫히기 전에
Pydantic 스키마로 변환한 값을 돌려준다. 변경 연산은 같은 작업 단위 안에서 합계를
재계산하므로 commit 시점의 합계는 항상 작업 목록과 일치한다.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from estimator.database import SessionLocal
from estimator.models.project import ProjectStatus
from estimator.schemas.configuration import ConfigurationOut, ConfigurationSet
from estimator.schemas.estimate import ProjectEstimate
from estimator.schemas.maintenance import ArchiveResult, DatabaseStats, HealthStatus, MaintenanceResult
from estimator.schemas.project import (
    Pagination,
    ProjectCreate,
    ProjectDetailOut,
    ProjectOut,
    ProjectPage,
    ProjectUpdate,
    ProjectWithTasksUpdate,
)
from estimator.schemas.project_task import ProjectTaskCreate, ProjectTaskOut, ProjectTaskUpdate
from estimator.schemas.task_type import TaskTypeBulkUpdateItem, TaskTypeCreate, TaskTypeOut, TaskTypeUpdate
from estimator.services import (
    configuration_service,
    estimation_service,
    maintenance_service,
    project_service,
    project_task_service,
    task_type_service,
)
from estimator.services.transaction_service import RetryPolicy, TransactionCoordinator


class EstimatorService:
    def __init__(self, coordinator: TransactionCoordinator):
        self.coordinator = coordinator

    # Estimation

    def calculate_estimate(self, project_id: str) -> ProjectEstimate:
        return self.coordinator.run(lambda db: estimation_service.calculate_estimate(db, project_id))

    def recalculate(self, project_id: str) -> None:
        self.coordinator.run(lambda db: estimation_service.recalculate(db, project_id))

    # Task types

    def list_task_types(
        self,
        category: Optional[str] = None,
        active: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> List[TaskTypeOut]:
        def unit(db: Session):
            rows = task_type_service.list_task_types(db, category=category, active=active, search=search)
            return [TaskTypeOut.model_validate(row) for row in rows]

        return self.coordinator.run(unit)

    def list_categories(self) -> List[str]:
        return self.coordinator.run(task_type_service.list_categories)

    def get_task_type(self, task_type_id: str) -> TaskTypeOut:
        return self.coordinator.run(
            lambda db: TaskTypeOut.model_validate(task_type_service.get_task_type(db, task_type_id))
        )

    def create_task_type(self, data: TaskTypeCreate) -> TaskTypeOut:
        return self.coordinator.run(
            lambda db: TaskTypeOut.model_validate(task_type_service.create_task_type(db, data))
        )

    def update_task_type(self, task_type_id: str, data: TaskTypeUpdate) -> TaskTypeOut:
        return self.coordinator.run(
            lambda db: TaskTypeOut.model_validate(task_type_service.update_task_type(db, task_type_id, data))
        )

    def bulk_update_task_types(self, items: List[TaskTypeBulkUpdateItem]) -> List[TaskTypeOut]:
        def unit(db: Session):
            rows = task_type_service.bulk_update_task_types(db, items)
            return [TaskTypeOut.model_validate(row) for row in rows]

        return self.coordinator.run(unit)

    def delete_task_type(self, task_type_id: str) -> None:
        self.coordinator.run(lambda db: task_type_service.delete_task_type(db, task_type_id))

    # Projects

    def list_projects(
        self,
        status: Optional[ProjectStatus] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> ProjectPage:
        def unit(db: Session):
            rows, total = project_service.get_projects(db, status=status, search=search, page=page, limit=limit)
            return ProjectPage(
                data=[ProjectOut.model_validate(row) for row in rows],
                pagination=Pagination(
                    page=page,
                    limit=limit,
                    total=total,
                    total_pages=project_service.total_pages(total, limit),
                ),
            )

        return self.coordinator.run(unit)

    def get_project(self, project_id: str) -> ProjectDetailOut:
        return self.coordinator.run(lambda db: _project_detail(db, project_id))

    def create_project(self, data: ProjectCreate) -> ProjectDetailOut:
        def unit(db: Session):
            project = project_service.create_project(db, data)
            return _project_detail(db, project.id)

        return self.coordinator.run(unit)

    def update_project(self, project_id: str, data: ProjectUpdate) -> ProjectDetailOut:
        def unit(db: Session):
            project_service.update_project(db, project_id, data)
            return _project_detail(db, project_id)

        return self.coordinator.run(unit)

    def update_project_with_tasks(self, project_id: str, data: ProjectWithTasksUpdate) -> ProjectDetailOut:
        def unit(db: Session):
            project_service.update_project_with_tasks(db, project_id, data)
            return _project_detail(db, project_id)

        return self.coordinator.run(unit)

    def delete_project(self, project_id: str) -> None:
        self.coordinator.run(lambda db: project_service.delete_project(db, project_id))

    # Project tasks

    def list_project_tasks(self, project_id: str) -> List[ProjectTaskOut]:
        def unit(db: Session):
            rows = project_task_service.list_project_tasks(db, project_id)
            return [ProjectTaskOut.model_validate(row) for row in rows]

        return self.coordinator.run(unit)

    def get_project_task(self, project_id: str, task_id: str) -> ProjectTaskOut:
        return self.coordinator.run(
            lambda db: ProjectTaskOut.model_validate(project_task_service.get_project_task(db, project_id, task_id))
        )

    def add_project_task(self, project_id: str, data: ProjectTaskCreate) -> ProjectTaskOut:
        return self.coordinator.run(
            lambda db: ProjectTaskOut.model_validate(project_task_service.create_project_task(db, project_id, data))
        )

    def update_project_task(self, project_id: str, task_id: str, data: ProjectTaskUpdate) -> ProjectTaskOut:
        return self.coordinator.run(
            lambda db: ProjectTaskOut.model_validate(
                project_task_service.update_project_task(db, project_id, task_id, data)
            )
        )

    def delete_project_task(self, project_id: str, task_id: str) -> None:
        self.coordinator.run(lambda db: project_task_service.delete_project_task(db, project_id, task_id))

    # Configuration

    def list_configurations(self) -> List[ConfigurationOut]:
        return self.coordinator.run(
            lambda db: [ConfigurationOut.model_validate(row) for row in configuration_service.list_configurations(db)]
        )

    def get_configuration(self, key: str) -> ConfigurationOut:
        return self.coordinator.run(
            lambda db: ConfigurationOut.model_validate(configuration_service.get_configuration(db, key))
        )

    def set_configuration(self, key: str, data: ConfigurationSet) -> ConfigurationOut:
        return self.coordinator.run(
            lambda db: ConfigurationOut.model_validate(configuration_service.set_configuration(db, key, data))
        )

    def delete_configuration(self, key: str) -> None:
        self.coordinator.run(lambda db: configuration_service.delete_configuration(db, key))

    # Maintenance

    def archive_old_projects(self, days_old: int = 365) -> ArchiveResult:
        return self.coordinator.run(lambda db: maintenance_service.archive_old_projects(db, days_old))

    def perform_maintenance(self) -> MaintenanceResult:
        return self.coordinator.run(maintenance_service.perform_maintenance)

    def get_database_stats(self) -> DatabaseStats:
        return self.coordinator.run(maintenance_service.get_database_stats)

    def check_database_connection(self) -> HealthStatus:
        db = self.coordinator.session_factory()
        try:
            return maintenance_service.check_database_connection(db)
        finally:
            db.close()


def _project_detail(db: Session, project_id: str) -> ProjectDetailOut:
    project = project_service.load_project_detail(db, project_id)
    detail = ProjectDetailOut.model_validate(project)
    rows = sorted(project.tasks, key=estimation_service.breakdown_sort_key)
    detail.tasks = [ProjectTaskOut.model_validate(row) for row in rows]
    return detail


_estimator: Optional[EstimatorService] = None


def build_estimator(session_factory=SessionLocal, policy: Optional[RetryPolicy] = None) -> EstimatorService:
    return EstimatorService(TransactionCoordinator(session_factory, policy or RetryPolicy.from_settings()))


def get_estimator() -> EstimatorService:
    """FastAPI 의존성. 프로세스당 하나의 서비스 인스턴스를 사용한다."""
    global _estimator
    if _estimator is None:
        _estimator = build_estimator()
    return _estimator
