"""전역 설정 키/값 저장소 모델입니다."""

import uuid

from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from estimator.database import Base


class Configuration(Base):
    __tablename__ = "configurations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    key = Column(String(100), nullable=False, unique=True)
    value = Column(Text, nullable=False)
    description = Column(Text)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
