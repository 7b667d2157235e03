"""Project / ProjectTask 도메인의 SQLAlchemy 모델 정의입니다."""

import enum
import uuid

from sqlalchemy import Column, Integer, String, Text, Float, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from estimator.database import Base


class ProjectStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    description = Column(Text)
    status = Column(String(20), nullable=False, default=ProjectStatus.DRAFT.value)
    # Written only by the aggregation engine.
    total_min_hours = Column(Float, nullable=False, default=0.0)
    total_max_hours = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    tasks = relationship("ProjectTask", back_populates="project", passive_deletes=True)

    __table_args__ = (
        Index("idx_project_status", "status"),
    )

    @property
    def task_count(self):
        return len(self.tasks)


class ProjectTask(Base):
    __tablename__ = "project_tasks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    project_id = Column(String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    task_type_id = Column(String(36), ForeignKey("task_types.id", ondelete="RESTRICT"), nullable=False)
    quantity = Column(Integer, nullable=False)
    custom_min_hours = Column(Float)
    custom_max_hours = Column(Float)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    project = relationship("Project", back_populates="tasks")
    task_type = relationship("TaskType", back_populates="project_tasks")

    __table_args__ = (
        UniqueConstraint("project_id", "task_type_id", name="uq_project_task_type"),
        Index("idx_project_task_type", "task_type_id"),
    )

    @property
    def task_type_name(self):
        return self.task_type.name if self.task_type else None

    @property
    def effective_min_hours(self):
        if self.custom_min_hours is not None:
            return self.custom_min_hours
        return self.task_type.default_min_hours

    @property
    def effective_max_hours(self):
        if self.custom_max_hours is not None:
            return self.custom_max_hours
        return self.task_type.default_max_hours
