"""TaskType 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class TaskTypeBase(BaseModel):
    name: str
    description: Optional[str] = None
    default_min_hours: float
    default_max_hours: float
    category: Optional[str] = None
    is_active: bool = True


class TaskTypeCreate(TaskTypeBase):
    pass


class TaskTypeUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    default_min_hours: Optional[float] = None
    default_max_hours: Optional[float] = None
    category: Optional[str] = None
    is_active: Optional[bool] = None


class TaskTypeBulkUpdateItem(TaskTypeUpdate):
    id: str


class TaskTypeOut(TaskTypeBase):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
