"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from estimator.models.task_type import TaskType
from estimator.models.project import Project, ProjectTask, ProjectStatus
from estimator.models.configuration import Configuration

__all__ = [
    "TaskType",
    "Project", "ProjectTask", "ProjectStatus",
    "Configuration",
]
