"""Project 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from estimator.models.project import ProjectStatus
from estimator.schemas.project_task import ProjectTaskCreate, ProjectTaskUpsert, ProjectTaskOut


class ProjectBase(BaseModel):
    name: str
    description: Optional[str] = None


class ProjectCreate(ProjectBase):
    status: Optional[ProjectStatus] = None
    tasks: List[ProjectTaskCreate] = Field(default_factory=list)


class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None


class ProjectWithTasksUpdate(ProjectUpdate):
    task_updates: List[ProjectTaskUpsert] = Field(default_factory=list)
    task_ids_to_delete: List[str] = Field(default_factory=list)


class ProjectOut(ProjectBase):
    id: str
    status: ProjectStatus
    total_min_hours: float
    total_max_hours: float
    task_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ProjectDetailOut(ProjectOut):
    tasks: List[ProjectTaskOut] = Field(default_factory=list)


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class ProjectPage(BaseModel):
    data: List[ProjectOut]
    pagination: Pagination
