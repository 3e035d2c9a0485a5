"""Shared fixtures: raw SINAICA payloads, station table and fake HTTP responses."""

import json
from typing import Any, Optional
from unittest.mock import MagicMock

import pandas as pd
import pytest
import requests


def _crude_record(
    record_id: str,
    station_id: str,
    hour: str,
    value: Any,
    valid: Any = "1",
    parameter: str = "O3",
) -> dict:
    return {
        "id": record_id,
        "estacionesId": station_id,
        "fecha": "2015-10-14",
        "hora": hour,
        "parametro": parameter,
        "valorOrig": value,
        "banderasOrig": "",
        "validoOrig": valid,
        "valorAct": value,
        "validoAct": valid,
        "fechaValidoAct": None,
        "nivelValidacion": "0",
    }


def _manual_record(
    record_id: str,
    station_id: str,
    value: Any,
    valid: Any = "1",
    parameter: str = "PM10",
) -> dict:
    return {
        "id": record_id,
        "estacionesId": station_id,
        "fecha": "2016-01-06",
        "parametro": parameter,
        "valorAct": value,
        "validoAct": valid,
        "nivelValidacion": "0",
        "archivosId": "9001",
        "hora": "0",
    }


@pytest.fixture
def crude_records() -> list:
    """Four hourly O3 readings from two stations."""
    return [
        _crude_record("271O315101400", "271", "0", "0.035"),
        _crude_record("271O315101401", "271", "1", "0.25"),
        _crude_record("271O315101402", "271", "2", "-0.01"),
        _crude_record("33O315101400", "33", "0", "0.041", valid="0"),
    ]


@pytest.fixture
def manual_records() -> list:
    """Three PM10 filter samples."""
    return [
        _manual_record("1", "271", "45.2"),
        _manual_record("2", "271", "700"),
        _manual_record("3", "999", "30.1", valid="0"),
    ]


@pytest.fixture
def make_crude_record():
    return _crude_record


@pytest.fixture
def stations() -> pd.DataFrame:
    """Minimal station table."""
    return pd.DataFrame(
        {
            "station_id": [271, 33],
            "station_name": ["Xalostoc", "Pedregal"],
            "station_code": ["XAL", "PED"],
            "network_name": ["Valle de México", "Valle de México"],
            "network_code": ["VMX", "VMX"],
            "network_id": [30, 30],
            "lat": [19.526, 19.325],
        }
    )


@pytest.fixture
def make_response():
    """Factory for fake requests.Response objects."""

    def _make(
        payload: Any = None,
        status_code: int = 200,
        content_type: str = "text/html; charset=UTF-8",
        text: Optional[str] = None,
    ) -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        response.headers = {"Content-Type": content_type}
        response.text = text if text is not None else json.dumps(payload)

        def _json():
            try:
                return json.loads(response.text)
            except json.JSONDecodeError as e:
                raise requests.exceptions.JSONDecodeError(e.msg, e.doc, e.pos) from e

        response.json.side_effect = _json
        return response

    return _make


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> None:
    """Never wait for the politeness pause in tests."""
    monkeypatch.setattr(
        "sinaica.recopilacion.cliente_sinaica.time.sleep", lambda _seconds: None
    )
