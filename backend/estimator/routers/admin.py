from fastapi import APIRouter, Depends
from estimator.schemas.maintenance import ArchiveResult, DatabaseStats, MaintenanceResult
from estimator.services.estimator_service import EstimatorService, get_estimator

router = APIRouter(tags=["admin"])


@router.post("/api/admin/maintenance", response_model=MaintenanceResult)
def run_maintenance(estimator: EstimatorService = Depends(get_estimator)):
    return estimator.perform_maintenance()


@router.post("/api/admin/archive", response_model=ArchiveResult)
def archive_old_projects(days_old: int = 365, estimator: EstimatorService = Depends(get_estimator)):
    return estimator.archive_old_projects(days_old)


@router.get("/api/admin/stats", response_model=DatabaseStats)
def get_stats(estimator: EstimatorService = Depends(get_estimator)):
    return estimator.get_database_stats()
