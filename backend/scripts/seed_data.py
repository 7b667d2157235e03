"""Seed the database with the default task types and configuration entries."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from estimator.database import SessionLocal, init_schema
from estimator.schemas.task_type import TaskTypeCreate
from estimator.services import configuration_service, task_type_service

DEFAULT_TASK_TYPES = [
    ("Large Complex Web Screen", "Complex UI with multiple interactions, forms, and data visualization", 8, 16, "Frontend"),
    ("Simple Web Screen", "Basic UI with standard components and minimal logic", 2, 4, "Frontend"),
    ("API Endpoint", "RESTful API endpoint with validation and error handling", 2, 4, "Backend"),
    ("Database Design", "Schema design, relationships, and migration scripts", 4, 8, "Database"),
    ("Authentication System", "User authentication and authorization implementation", 8, 16, "Backend"),
    ("Third-party Integration", "Integration with external APIs or services", 4, 12, "Backend"),
    ("Mobile Screen (Native)", "Native mobile screen with platform-specific features", 6, 12, "Mobile"),
    ("Data Migration", "Migrating data between systems or database versions", 4, 16, "Database"),
    ("Testing Suite", "Comprehensive test coverage including unit and integration tests", 4, 8, "Testing"),
    ("DevOps Setup", "CI/CD pipeline, deployment scripts, and infrastructure setup", 8, 20, "DevOps"),
]


def seed():
    init_schema()
    db = SessionLocal()
    try:
        for name, description, min_hours, max_hours, category in DEFAULT_TASK_TYPES:
            if task_type_service.get_task_type_by_name(db, name):
                print(f"Task type already exists: {name}")
                continue
            task_type = task_type_service.create_task_type(db, TaskTypeCreate(
                name=name,
                description=description,
                default_min_hours=min_hours,
                default_max_hours=max_hours,
                category=category,
            ))
            print(f"Created task type: {task_type.name}")

        created = configuration_service.seed_defaults(db)
        print(f"Created {created} configuration entries")
        db.commit()
        print("Seeding finished.")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed()
