"""전역 설정 키/값 서비스입니다. 같은 키에 대해서는 마지막 쓰기가 이깁니다."""

from typing import List

from sqlalchemy.orm import Session

from estimator.errors import NotFoundError
from estimator.models.configuration import Configuration
from estimator.schemas.configuration import ConfigurationSet
from estimator.utils.validators import validate_name

DEFAULT_CONFIGURATIONS = [
    {"key": "time_unit", "value": "hours", "description": "Default time unit for estimates (hours, days)"},
    {"key": "rounding_precision", "value": "1", "description": "Decimal places for hour calculations"},
    {"key": "default_project_status", "value": "DRAFT", "description": "Default status for new projects"},
]


def list_configurations(db: Session) -> List[Configuration]:
    return db.query(Configuration).order_by(Configuration.key).all()


def get_configuration(db: Session, key: str) -> Configuration:
    row = db.query(Configuration).filter(Configuration.key == key).first()
    if not row:
        raise NotFoundError("설정", key)
    return row


def set_configuration(db: Session, key: str, data: ConfigurationSet) -> Configuration:
    key = validate_name(key, "설정 키")
    value = validate_name(data.value, "설정 값", max_length=1000)
    row = db.query(Configuration).filter(Configuration.key == key).first()
    if row is None:
        row = Configuration(key=key, value=value, description=data.description)
        db.add(row)
    else:
        row.value = value
        if "description" in data.model_fields_set:
            row.description = data.description
    db.flush()
    return row


def delete_configuration(db: Session, key: str) -> None:
    row = get_configuration(db, key)
    db.delete(row)
    db.flush()


def seed_defaults(db: Session) -> int:
    created = 0
    for item in DEFAULT_CONFIGURATIONS:
        if db.query(Configuration.id).filter(Configuration.key == item["key"]).first():
            continue
        db.add(Configuration(**item))
        created += 1
    db.flush()
    return created
