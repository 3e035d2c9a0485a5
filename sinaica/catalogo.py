# -*- coding: utf-8 -*-
"""
==============================================================================
SINAICA DATOS
Catálogo de parámetros, tipos de datos, límites y esquemas de salida
==============================================================================

Descripción:
    Constantes del dominio compartidas por la descarga y la normalización:

    - Parámetros que SINAICA publica (código → descripción)
    - Tipos de datos (Crude | Validated | Manual) y su traducción a la API
    - Límites máximos permitidos por contaminante (remove_extremes)
    - Unidad física de cada parámetro
    - Columnas (y su orden) de cada tabla de salida

Unidades:
    Los gases criterio (O3, NO2, SO2, CO, ...) se reportan en ppm y las
    partículas en µg/m³. Los límites de LIMITES_PERMITIDOS están en esas
    mismas unidades y reproducen los que aplica el portal de SINAICA.
"""

import math
from typing import Dict, Tuple

from sinaica.errores import InvalidArgumentError

# ==============================================================================
# PARÁMETROS
# ==============================================================================

PARAMETROS_VALIDOS: Dict[str, str] = {
    "BEN": "Benceno",
    "CH4": "Metano",
    "CN": "Carbono negro",
    "CO": "Monóxido de carbono",
    "CO2": "Dióxido de carbono",
    "DV": "Dirección del viento",
    "H2S": "Ácido sulfhídrico",
    "HCNM": "Hidrocarburos no metánicos",
    "HCT": "Hidrocarburos totales",
    "HR": "Humedad relativa",
    "HRI": "Humedad relativa interior",
    "IUV": "Índice de radiación ultravioleta",
    "NO": "Óxido nítrico",
    "NO2": "Dióxido de nitrógeno",
    "NOx": "Óxidos de nitrógeno",
    "O3": "Ozono",
    "PB": "Presión barométrica",
    "PM10": "Partículas menores a 10 micras",
    "PM2.5": "Partículas menores a 2.5 micras",
    "PP": "Precipitación pluvial",
    "PST": "Partículas suspendidas totales",
    "RS": "Radiación solar",
    "SO2": "Dióxido de azufre",
    "TMP": "Temperatura",
    "TMPI": "Temperatura interior",
    "UVA": "Radiación ultravioleta A",
    "UVB": "Radiación ultravioleta B",
    "VV": "Velocidad del viento",
    "XIL": "Xileno",
}

UNIDADES: Dict[str, str] = {
    "BEN": "ppb",
    "CH4": "ppm",
    "CN": "µg/m³",
    "CO": "ppm",
    "CO2": "ppm",
    "DV": "°",
    "H2S": "ppm",
    "HCNM": "ppm",
    "HCT": "ppm",
    "HR": "%",
    "HRI": "%",
    "IUV": "índice UV",
    "NO": "ppm",
    "NO2": "ppm",
    "NOx": "ppm",
    "O3": "ppm",
    "PB": "mmHg",
    "PM10": "µg/m³",
    "PM2.5": "µg/m³",
    "PP": "mm",
    "PST": "µg/m³",
    "RS": "W/m²",
    "SO2": "ppm",
    "TMP": "°C",
    "TMPI": "°C",
    "UVA": "W/m²",
    "UVB": "MED/h",
    "VV": "m/s",
    "XIL": "ppb",
}

# Valores por encima de estos límites se consideran inválidos
LIMITES_PERMITIDOS: Dict[str, float] = {
    "O3": 0.2,
    "PM10": 600.0,
    "PM2.5": 175.0,
    "NO2": 0.21,
    "SO2": 0.2,
    "CO": 15.0,
}

# ==============================================================================
# TIPOS DE DATOS
# ==============================================================================

TIPOS_DATOS: Tuple[str, ...] = ("Crude", "Validated", "Manual")
TIPOS_DESCARGA: Tuple[str, ...] = ("Crude", "Manual")

# Sufijo tipoDatos de cnxn.php
SUFIJOS_TIPO: Dict[str, str] = {
    "Crude": "",
    "Validated": "V",
    "Manual": "M",
}

# Tabla consultada en getData.php
TABLAS_TIPO: Dict[str, str] = {
    "Crude": "Datos",
    "Manual": "DatosManuales",
}

# ==============================================================================
# ESQUEMAS DE SALIDA
# ==============================================================================

COLUMNAS_ESTACIONES = [
    "station_id",
    "station_name",
    "station_code",
    "network_name",
    "network_code",
    "network_id",
]

COLUMNAS_CRUDOS = [
    "id",
    "station_id",
    "station_name",
    "station_code",
    "network_name",
    "network_code",
    "network_id",
    "date",
    "hour",
    "parameter",
    "value_original",
    "flag_original",
    "valid_original",
    "value_actual",
    "valid_actual",
    "date_validated",
    "validation_level",
    "unit",
    "value",
]

COLUMNAS_MANUALES = [
    "id",
    "station_id",
    "station_name",
    "station_code",
    "network_name",
    "network_code",
    "network_id",
    "date",
    "hour",
    "parameter",
    "value_actual",
    "valid_actual",
    "validation_level",
    "unit",
    "value",
]

COLUMNAS_PARAMETROS = ["param_code", "param_name"]

# Columnas enteras (nullable) del esquema
COLUMNAS_ENTERAS = ["station_id", "hour", "network_id"]


def limite_permitido(parameter: str) -> float:
    """Límite superior de un parámetro; infinito si no tiene."""
    return LIMITES_PERMITIDOS.get(parameter, math.inf)


def recode_sinaica_units(parameter: str) -> str:
    """
    Traduce un código de parámetro a su unidad física.

    Ejemplo: "O3" -> "ppm", "PM2.5" -> "µg/m³"
    """
    try:
        return UNIDADES[parameter]
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown parameter '{parameter}'. "
            f"Valid values are: {', '.join(PARAMETROS_VALIDOS)}"
        ) from None
