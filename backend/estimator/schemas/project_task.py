"""ProjectTask 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ProjectTaskCreate(BaseModel):
    task_type_id: str
    quantity: int
    custom_min_hours: Optional[float] = None
    custom_max_hours: Optional[float] = None


class ProjectTaskUpdate(BaseModel):
    # custom_*_hours를 명시적으로 null로 보내면 오버라이드를 해제한다.
    quantity: Optional[int] = None
    custom_min_hours: Optional[float] = None
    custom_max_hours: Optional[float] = None


class ProjectTaskUpsert(ProjectTaskCreate):
    id: Optional[str] = None


class ProjectTaskOut(BaseModel):
    id: str
    project_id: str
    task_type_id: str
    task_type_name: Optional[str] = None
    quantity: int
    custom_min_hours: Optional[float] = None
    custom_max_hours: Optional[float] = None
    effective_min_hours: float
    effective_max_hours: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
