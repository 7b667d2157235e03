"""견적 엔진의 도메인 예외 계층입니다. HTTP 계층은 status_code로 응답을 매핑합니다."""


class EstimatorError(Exception):
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(EstimatorError):
    """입력값이 범위/제약을 위반한 경우. 재시도하지 않는다."""

    status_code = 400


class NotFoundError(EstimatorError):
    status_code = 404

    def __init__(self, resource: str, identifier=None):
        detail = f"{resource}을(를) 찾을 수 없습니다."
        if identifier is not None:
            detail = f"{resource}을(를) 찾을 수 없습니다: {identifier}"
        super().__init__(detail)
        self.resource = resource
        self.identifier = identifier


class ConflictError(EstimatorError):
    """유일성/참조 무결성 위반. 재시도하지 않는다."""

    status_code = 409


class TransientStoreError(EstimatorError):
    """잠금/직렬화 충돌 등 재시도로 해소될 수 있는 저장소 오류."""

    status_code = 503


class TransactionTimeoutError(TransientStoreError):
    pass
