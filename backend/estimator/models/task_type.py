"""TaskType 도메인의 SQLAlchemy 모델 정의입니다."""

import uuid

from sqlalchemy import Column, String, Text, Float, DateTime, Boolean, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from estimator.database import Base


class TaskType(Base):
    __tablename__ = "task_types"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False, unique=True)
    description = Column(Text)
    default_min_hours = Column(Float, nullable=False)
    default_max_hours = Column(Float, nullable=False)
    category = Column(String(50))
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    project_tasks = relationship("ProjectTask", back_populates="task_type")

    __table_args__ = (
        Index("idx_task_type_category", "category", "name"),
    )
