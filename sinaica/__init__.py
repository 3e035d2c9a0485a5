# -*- coding: utf-8 -*-
"""
Descarga y normalización de datos de calidad del aire de SINAICA
(Sistema Nacional de Información de la Calidad del Aire, México).

    >>> from sinaica import sinaica_param_data
    >>> df = sinaica_param_data("O3", "2015-10-14", "2015-10-14")
"""

from sinaica.catalogo import PARAMETROS_VALIDOS, recode_sinaica_units
from sinaica.errores import InvalidArgumentError, SinaicaError, TransportError
from sinaica.procesamiento.normalizar_sinaica import cargar_estaciones
from sinaica.recopilacion.descargar_parametro import (
    sinaica_param_data,
    sinaica_param_data_range,
)
from sinaica.recopilacion.estaciones_sinaica import (
    sinaica_station_dates,
    sinaica_station_params,
)

__version__ = "0.1.0"

__all__ = [
    "PARAMETROS_VALIDOS",
    "InvalidArgumentError",
    "SinaicaError",
    "TransportError",
    "cargar_estaciones",
    "recode_sinaica_units",
    "sinaica_param_data",
    "sinaica_param_data_range",
    "sinaica_station_dates",
    "sinaica_station_params",
]
