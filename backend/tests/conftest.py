import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from estimator.database import Base, build_engine
from estimator.main import app
from estimator.models.project import Project, ProjectTask
from estimator.models.task_type import TaskType
from estimator.services.estimator_service import EstimatorService, get_estimator
from estimator.services.transaction_service import RetryPolicy, TransactionCoordinator
import estimator.models  # noqa: F401

TEST_DB_URL = "sqlite:///./test_estimator.db"

engine = build_engine(TEST_DB_URL)
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

FAST_POLICY = RetryPolicy(max_retries=3, base_delay=0, timeout=30.0)


def override_get_estimator():
    return EstimatorService(TransactionCoordinator(TestingSession, FAST_POLICY))


app.dependency_overrides[get_estimator] = override_get_estimator


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def coordinator():
    return TransactionCoordinator(TestingSession, FAST_POLICY, sleep=lambda seconds: None)


@pytest.fixture
def estimator(coordinator):
    return EstimatorService(coordinator)


@pytest.fixture
def seed_task_types(db):
    task_types = {
        "screen": TaskType(name="Large Complex Web Screen", default_min_hours=8, default_max_hours=16, category="Frontend"),
        "api": TaskType(name="API Endpoint", default_min_hours=2, default_max_hours=4, category="Backend"),
        "db": TaskType(name="Database Design", default_min_hours=4, default_max_hours=8, category="Database"),
    }
    for t in task_types.values():
        db.add(t)
    db.commit()
    for t in task_types.values():
        db.refresh(t)
    return task_types


def make_project(db, name: str, tasks=()) -> Project:
    """합계 계산 없이 프로젝트와 작업 행을 직접 만든다. tasks: (task_type, quantity, custom_min, custom_max)"""
    project = Project(name=name)
    db.add(project)
    db.flush()
    for task_type, quantity, custom_min, custom_max in tasks:
        db.add(ProjectTask(
            project_id=project.id,
            task_type_id=task_type.id,
            quantity=quantity,
            custom_min_hours=custom_min,
            custom_max_hours=custom_max,
        ))
    db.commit()
    db.refresh(project)
    return project


def stored_totals(project_id: str):
    db = TestingSession()
    try:
        project = db.query(Project).filter(Project.id == project_id).one()
        return project.total_min_hours, project.total_max_hours
    finally:
        db.close()
