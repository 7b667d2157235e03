from fastapi import APIRouter, Depends
from typing import List, Optional
from estimator.schemas.task_type import TaskTypeCreate, TaskTypeUpdate, TaskTypeBulkUpdateItem, TaskTypeOut
from estimator.services.estimator_service import EstimatorService, get_estimator

router = APIRouter(tags=["task-types"])


@router.get("/api/task-types", response_model=List[TaskTypeOut])
def list_task_types(
    category: Optional[str] = None,
    is_active: Optional[bool] = None,
    search: Optional[str] = None,
    estimator: EstimatorService = Depends(get_estimator),
):
    return estimator.list_task_types(category=category, active=is_active, search=search)


@router.get("/api/task-types/categories", response_model=List[str])
def list_categories(estimator: EstimatorService = Depends(get_estimator)):
    return estimator.list_categories()


@router.post("/api/task-types", response_model=TaskTypeOut, status_code=201)
def create_task_type(data: TaskTypeCreate, estimator: EstimatorService = Depends(get_estimator)):
    return estimator.create_task_type(data)


@router.put("/api/task-types", response_model=List[TaskTypeOut])
def bulk_update_task_types(items: List[TaskTypeBulkUpdateItem], estimator: EstimatorService = Depends(get_estimator)):
    return estimator.bulk_update_task_types(items)


@router.get("/api/task-types/{task_type_id}", response_model=TaskTypeOut)
def get_task_type(task_type_id: str, estimator: EstimatorService = Depends(get_estimator)):
    return estimator.get_task_type(task_type_id)


@router.put("/api/task-types/{task_type_id}", response_model=TaskTypeOut)
def update_task_type(task_type_id: str, data: TaskTypeUpdate, estimator: EstimatorService = Depends(get_estimator)):
    return estimator.update_task_type(task_type_id, data)


@router.delete("/api/task-types/{task_type_id}")
def delete_task_type(task_type_id: str, estimator: EstimatorService = Depends(get_estimator)):
    estimator.delete_task_type(task_type_id)
    return {"message": "삭제되었습니다."}
