"""유지보수/통계/헬스체크 응답 스키마입니다."""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import datetime


class ArchivedProject(BaseModel):
    id: str
    name: str


class ArchiveResult(BaseModel):
    archived: int
    projects: List[ArchivedProject] = Field(default_factory=list)


class MaintenanceResult(BaseModel):
    orphaned_tasks_removed: int
    project_totals_recalculated: int


class DatabaseStats(BaseModel):
    projects: Dict[str, int]
    task_types: Dict[str, int]
    project_tasks: Dict[str, int]


class HealthStatus(BaseModel):
    status: str
    database: str
    timestamp: datetime
    response_time_ms: Optional[float] = None
    error: Optional[str] = None
