from fastapi import APIRouter, Depends
from typing import List
from estimator.schemas.project_task import ProjectTaskCreate, ProjectTaskUpdate, ProjectTaskOut
from estimator.services.estimator_service import EstimatorService, get_estimator

router = APIRouter(tags=["project-tasks"])


@router.get("/api/projects/{project_id}/tasks", response_model=List[ProjectTaskOut])
def list_tasks(project_id: str, estimator: EstimatorService = Depends(get_estimator)):
    return estimator.list_project_tasks(project_id)


@router.post("/api/projects/{project_id}/tasks", response_model=ProjectTaskOut, status_code=201)
def create_task(project_id: str, data: ProjectTaskCreate, estimator: EstimatorService = Depends(get_estimator)):
    return estimator.add_project_task(project_id, data)


@router.get("/api/projects/{project_id}/tasks/{task_id}", response_model=ProjectTaskOut)
def get_task(project_id: str, task_id: str, estimator: EstimatorService = Depends(get_estimator)):
    return estimator.get_project_task(project_id, task_id)


@router.put("/api/projects/{project_id}/tasks/{task_id}", response_model=ProjectTaskOut)
def update_task(
    project_id: str,
    task_id: str,
    data: ProjectTaskUpdate,
    estimator: EstimatorService = Depends(get_estimator),
):
    return estimator.update_project_task(project_id, task_id, data)


@router.delete("/api/projects/{project_id}/tasks/{task_id}")
def delete_task(project_id: str, task_id: str, estimator: EstimatorService = Depends(get_estimator)):
    estimator.delete_project_task(project_id, task_id)
    return {"message": "삭제되었습니다."}
