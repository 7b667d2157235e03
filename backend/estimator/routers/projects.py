from fastapi import APIRouter, Depends
from typing import Optional
from estimator.models.project import ProjectStatus
from estimator.schemas.estimate import ProjectEstimate
from estimator.schemas.project import ProjectCreate, ProjectUpdate, ProjectWithTasksUpdate, ProjectDetailOut, ProjectPage
from estimator.services.estimator_service import EstimatorService, get_estimator

router = APIRouter(tags=["projects"])


@router.get("/api/projects", response_model=ProjectPage)
def list_projects(
    status: Optional[ProjectStatus] = None,
    search: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
    estimator: EstimatorService = Depends(get_estimator),
):
    return estimator.list_projects(status=status, search=search, page=page, limit=limit)


@router.post("/api/projects", response_model=ProjectDetailOut, status_code=201)
def create_project(data: ProjectCreate, estimator: EstimatorService = Depends(get_estimator)):
    return estimator.create_project(data)


@router.get("/api/projects/{project_id}", response_model=ProjectDetailOut)
def get_project(project_id: str, estimator: EstimatorService = Depends(get_estimator)):
    return estimator.get_project(project_id)


@router.put("/api/projects/{project_id}", response_model=ProjectDetailOut)
def update_project(project_id: str, data: ProjectWithTasksUpdate, estimator: EstimatorService = Depends(get_estimator)):
    # 작업 변경이 없으면 프로젝트 정보만 수정한다.
    if not data.task_updates and not data.task_ids_to_delete:
        return estimator.update_project(project_id, ProjectUpdate(**data.model_dump(include=data.model_fields_set)))
    return estimator.update_project_with_tasks(project_id, data)


@router.delete("/api/projects/{project_id}")
def delete_project(project_id: str, estimator: EstimatorService = Depends(get_estimator)):
    estimator.delete_project(project_id)
    return {"message": "삭제되었습니다."}


@router.get("/api/projects/{project_id}/estimate", response_model=ProjectEstimate)
def get_estimate(project_id: str, estimator: EstimatorService = Depends(get_estimator)):
    return estimator.calculate_estimate(project_id)


@router.post("/api/projects/{project_id}/estimate")
def recalculate_estimate(project_id: str, estimator: EstimatorService = Depends(get_estimator)):
    estimator.recalculate(project_id)
    return {"message": "재계산되었습니다."}
