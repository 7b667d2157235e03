"""FastAPI 애플리케이션 진입점. 미들웨어, API 라우터, 도메인 예외 매핑을 등록합니다."""

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from estimator.config import settings
from estimator.database import init_schema
from estimator.errors import EstimatorError, TransientStoreError
from estimator.routers import admin, configurations, project_tasks, projects, task_types
from estimator.services.estimator_service import EstimatorService, get_estimator

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Task Estimator",
    description="작업 유형별 시간 범위를 조합해 프로젝트 견적을 관리하는 시스템",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register all routers
app.include_router(task_types.router)
app.include_router(projects.router)
app.include_router(project_tasks.router)
app.include_router(configurations.router)
app.include_router(admin.router)


@app.exception_handler(EstimatorError)
def handle_estimator_error(request: Request, exc: EstimatorError):
    if isinstance(exc, TransientStoreError):
        logger.error("[api] %s %s failed after retries: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.on_event("startup")
def ensure_schema():
    # 누락된 테이블/컬럼을 자동 생성합니다.
    init_schema()


@app.get("/api/health")
def health_check(estimator: EstimatorService = Depends(get_estimator)):
    health = estimator.check_database_connection()
    status_code = 200 if health.status == "healthy" else 503
    return JSONResponse(status_code=status_code, content=health.model_dump(mode="json"))
