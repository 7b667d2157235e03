"""전역 설정 키/값 저장소를 검증합니다."""

import pytest
from estimator.errors import NotFoundError, ValidationError
from estimator.schemas.configuration import ConfigurationSet
from estimator.services import configuration_service


def test_seed_defaults_is_idempotent(db):
    assert configuration_service.seed_defaults(db) == 3
    db.commit()
    assert configuration_service.seed_defaults(db) == 0
    db.commit()
    keys = [row.key for row in configuration_service.list_configurations(db)]
    assert keys == ["default_project_status", "rounding_precision", "time_unit"]


def test_last_write_wins(estimator):
    estimator.set_configuration("time_unit", ConfigurationSet(value="hours", description="unit"))
    updated = estimator.set_configuration("time_unit", ConfigurationSet(value="days"))

    assert updated.value == "days"
    assert updated.description == "unit"
    assert [row.value for row in estimator.list_configurations()] == ["days"]


def test_missing_and_invalid_configuration(estimator):
    with pytest.raises(NotFoundError):
        estimator.get_configuration("nope")
    with pytest.raises(NotFoundError):
        estimator.delete_configuration("nope")
    with pytest.raises(ValidationError):
        estimator.set_configuration("rounding_precision", ConfigurationSet(value=""))


def test_configuration_over_http(client):
    resp = client.put("/api/configurations/rounding_precision", json={"value": "2"})
    assert resp.status_code == 200
    assert client.get("/api/configurations/rounding_precision").json()["value"] == "2"
    assert client.delete("/api/configurations/rounding_precision").status_code == 200
    assert client.get("/api/configurations").json() == []
