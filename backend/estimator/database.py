"""SQLAlchemy 엔진/세션 팩토리와 선언적 Base를 제공합니다."""

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from estimator.config import settings


def build_engine(url: str):
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args = {
            "check_same_thread": False,
            "timeout": settings.SQLITE_BUSY_TIMEOUT_SECONDS,
        }
    created = create_engine(url, connect_args=connect_args)
    if url.startswith("sqlite"):
        event.listen(created, "connect", _enable_sqlite_foreign_keys)
    return created


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_schema(bind=None) -> None:
    """모델 메타데이터 기준으로 테이블을 만들고 누락된 컬럼/인덱스를 보강한다."""
    from estimator.utils.schema_sync import sync_missing_schema_objects
    import estimator.models  # noqa: F401 - 모델 import로 metadata 등록

    target = bind or engine
    Base.metadata.create_all(bind=target)
    sync_missing_schema_objects(target, Base.metadata)
