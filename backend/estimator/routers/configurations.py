from fastapi import APIRouter, Depends
from typing import List
from estimator.schemas.configuration import ConfigurationSet, ConfigurationOut
from estimator.services.estimator_service import EstimatorService, get_estimator

router = APIRouter(tags=["configurations"])


@router.get("/api/configurations", response_model=List[ConfigurationOut])
def list_configurations(estimator: EstimatorService = Depends(get_estimator)):
    return estimator.list_configurations()


@router.get("/api/configurations/{key}", response_model=ConfigurationOut)
def get_configuration(key: str, estimator: EstimatorService = Depends(get_estimator)):
    return estimator.get_configuration(key)


@router.put("/api/configurations/{key}", response_model=ConfigurationOut)
def set_configuration(key: str, data: ConfigurationSet, estimator: EstimatorService = Depends(get_estimator)):
    return estimator.set_configuration(key, data)


@router.delete("/api/configurations/{key}")
def delete_configuration(key: str, estimator: EstimatorService = Depends(get_estimator)):
    estimator.delete_configuration(key)
    return {"message": "삭제되었습니다."}
