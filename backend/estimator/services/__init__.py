"""서비스 레이어 패키지 초기화 모듈입니다."""

from estimator.services import (
    transaction_service,
    estimation_service,
    task_type_service,
    project_task_service,
    project_service,
    configuration_service,
    maintenance_service,
    estimator_service,
)
