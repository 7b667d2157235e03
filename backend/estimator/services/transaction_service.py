"""작업 단위(unit of work)를 원자적 트랜잭션으로 실행하고 일시적 충돌을 재시도합니다.

재시도는 잠금/직렬화 충돌, 타임아웃처럼 다시 실행하면 해소될 수 있는 오류에만
적용한다. 재시도 시에는 새 세션에서 작업 단위 전체를 처음부터 다시 실행한다.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, TypeVar

from sqlalchemy import event
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session, sessionmaker

from estimator.config import settings
from estimator.errors import TransactionTimeoutError, TransientStoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_MESSAGES = (
    "database is locked",
    "database table is locked",
    "could not serialize access",
    "serialization failure",
    "deadlock detected",
    "deadlock found",
    "lock wait timeout",
    "lock timeout",
)


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = 3
    base_delay: float = 0.1
    timeout: float = 30.0

    def __post_init__(self):
        if self.max_retries < 1:
            raise ValueError("max_retries must be >= 1")
        if self.base_delay < 0 or self.timeout <= 0:
            raise ValueError("base_delay must be >= 0 and timeout > 0")

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        return cls(
            max_retries=settings.TX_MAX_RETRIES,
            base_delay=settings.TX_BASE_DELAY_SECONDS,
            timeout=settings.TX_TIMEOUT_SECONDS,
        )

    def backoff(self, attempt: int) -> float:
        return self.base_delay * (2 ** (attempt - 1))


def is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, TransientStoreError):
        return True
    if isinstance(exc, DBAPIError):
        if exc.connection_invalidated:
            return True
        message = str(exc.orig if exc.orig is not None else exc).lower()
        if any(marker in message for marker in RETRYABLE_MESSAGES):
            return True
        # SQLSTATE 40001 (serialization_failure) / 40P01 (deadlock_detected)
        pgcode = getattr(exc.orig, "pgcode", None) or getattr(exc.orig, "sqlstate", None)
        return pgcode in ("40001", "40P01")
    return False


class _Deadline:
    def __init__(self, timeout: float, clock: Callable[[], float]):
        self.timeout = timeout
        self.clock = clock
        self.expires_at = clock() + timeout

    def check(self, *args, **kwargs):
        if self.clock() > self.expires_at:
            raise TransactionTimeoutError(f"트랜잭션이 제한 시간({self.timeout:g}s)을 초과했습니다.")


class TransactionCoordinator:
    """세션 팩토리를 주입받아 작업 단위를 트랜잭션으로 실행한다."""

    def __init__(
        self,
        session_factory: sessionmaker,
        policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.session_factory = session_factory
        self.policy = policy or RetryPolicy.from_settings()
        self._sleep = sleep
        self._clock = clock

    def run(self, unit_of_work: Callable[[Session], T], policy: Optional[RetryPolicy] = None) -> T:
        policy = policy or self.policy
        last_error = None
        for attempt in range(1, policy.max_retries + 1):
            try:
                return self._execute(unit_of_work, policy)
            except Exception as exc:
                if not is_retryable(exc):
                    raise
                last_error = exc
                if attempt < policy.max_retries:
                    delay = policy.backoff(attempt)
                    logger.warning(
                        "[transaction] retryable failure on attempt %s/%s, retrying in %.3fs: %s",
                        attempt, policy.max_retries, delay, exc,
                    )
                    self._sleep(delay)

        logger.error("[transaction] giving up after %s attempt(s): %s", policy.max_retries, last_error)
        if isinstance(last_error, TransientStoreError):
            raise last_error
        raise TransientStoreError(f"저장소 충돌로 트랜잭션에 실패했습니다: {last_error}") from last_error

    def batch(self, operations: List[Callable[[Session], T]], policy: Optional[RetryPolicy] = None) -> List[T]:
        """여러 작업을 하나의 트랜잭션에서 순서대로 실행한다."""
        return self.run(lambda db: [operation(db) for operation in operations], policy)

    def _execute(self, unit_of_work: Callable[[Session], T], policy: RetryPolicy) -> T:
        deadline = _Deadline(policy.timeout, self._clock)
        db = self.session_factory()
        # 세션 단위 리스너라 세션이 닫히면 함께 사라진다.
        event.listen(db, "do_orm_execute", deadline.check)
        event.listen(db, "before_flush", deadline.check)
        try:
            with db.begin():
                result = unit_of_work(db)
                deadline.check()
            return result
        finally:
            db.close()
