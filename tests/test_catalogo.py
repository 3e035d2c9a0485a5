"""Tests for the parameter catalog."""

import math

import pytest

from sinaica.catalogo import (
    COLUMNAS_CRUDOS,
    COLUMNAS_MANUALES,
    LIMITES_PERMITIDOS,
    PARAMETROS_VALIDOS,
    UNIDADES,
    limite_permitido,
    recode_sinaica_units,
)
from sinaica.errores import InvalidArgumentError


def test_every_parameter_has_a_unit() -> None:
    assert set(UNIDADES) == set(PARAMETROS_VALIDOS)


def test_units_of_criteria_pollutants() -> None:
    assert recode_sinaica_units("O3") == "ppm"
    assert recode_sinaica_units("PM2.5") == "µg/m³"
    assert recode_sinaica_units("TMP") == "°C"


def test_unknown_parameter_has_no_unit() -> None:
    with pytest.raises(InvalidArgumentError):
        recode_sinaica_units("PM1")


def test_ceilings() -> None:
    assert LIMITES_PERMITIDOS == {
        "O3": 0.2,
        "PM10": 600.0,
        "PM2.5": 175.0,
        "NO2": 0.21,
        "SO2": 0.2,
        "CO": 15.0,
    }
    assert limite_permitido("HR") == math.inf


def test_schemas_end_with_unit_and_value() -> None:
    assert COLUMNAS_CRUDOS[-2:] == ["unit", "value"]
    assert COLUMNAS_MANUALES[-2:] == ["unit", "value"]
    assert "value_original" not in COLUMNAS_MANUALES
