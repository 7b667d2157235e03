"""견적 계산 결과 스키마입니다."""

from pydantic import BaseModel, Field
from typing import List
from datetime import datetime


class EstimationBreakdown(BaseModel):
    task_type_id: str
    task_type_name: str
    quantity: int
    min_hours: float
    max_hours: float
    subtotal_min_hours: float
    subtotal_max_hours: float


class ProjectEstimate(BaseModel):
    project_id: str
    total_min_hours: float
    total_max_hours: float
    task_breakdown: List[EstimationBreakdown] = Field(default_factory=list)
    calculated_at: datetime
