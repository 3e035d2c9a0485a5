# -*- coding: utf-8 -*-
"""
==============================================================================
SINAICA DATOS
Metadatos de estaciones: parámetros disponibles y fechas límite
==============================================================================

Descripción:
    Consulta en cnxn.php qué parámetros mide una estación y entre qué
    fechas tiene datos, para un tipo de datos concreto.

    Métodos de cnxn.php:
        getParamsPorEstAjax          → estId, tipoDatos
        getFechasLimiteEstacionAjax  → id, tipoDatos

    tipoDatos: "" (Crude), "V" (Validated), "M" (Manual)

Política de errores:
    Los argumentos inválidos se lanzan como InvalidArgumentError. Una vez
    validados, cualquier fallo de la consulta se registra como WARNING y
    se devuelve None: son consultas auxiliares y no deben romper un
    proceso de descarga.

Uso:
    sinaica-estacion 271 --type Manual     (271 = Xalostoc)
"""

import argparse
import logging
import numbers
import sys
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from sinaica import configuracion
from sinaica.catalogo import SUFIJOS_TIPO, TIPOS_DATOS
from sinaica.configuracion import get_logger, setup_logging
from sinaica.errores import InvalidArgumentError
from sinaica.procesamiento.normalizar_sinaica import (
    limpiar_fechas_estacion,
    limpiar_parametros_estacion,
)
from sinaica.recopilacion.cliente_sinaica import post_sinaica
from sinaica.recopilacion.descargar_parametro import comprobar_argumento

METODO_PARAMETROS = "getParamsPorEstAjax"
METODO_FECHAS = "getFechasLimiteEstacionAjax"

MENSAJE_CATALOGO = (
    " The station table contains a list of all station ids and names"
)


def validar_estacion(station_id: Any) -> int:
    """El ID de estación debe ser un número entero."""
    if station_id is None:
        raise InvalidArgumentError(
            "argument station_id is missing, please provide it." + MENSAJE_CATALOGO)
    if (
        isinstance(station_id, bool)
        or not isinstance(station_id, numbers.Real)
        or not float(station_id).is_integer()
    ):
        raise InvalidArgumentError(
            "argument station_id must be an integer." + MENSAJE_CATALOGO)
    return int(station_id)


def construir_consulta_estacion(
    station_id: int,
    metodo: str,
    data_type: str,
    campo_id: str
) -> Dict[str, Any]:
    """Formulario de cnxn.php para un método de estación."""
    return {
        campo_id: station_id,
        "metodo": metodo,
        "tipoDatos": SUFIJOS_TIPO[data_type],
    }


def sinaica_station_params(
    station_id: Any,
    data_type: str = "Crude",
    logger: Optional[logging.Logger] = None
) -> Optional[pd.DataFrame]:
    """
    Parámetros que mide una estación.

    Args:
        station_id: ID numérico de la estación
        data_type: "Crude", "Validated" o "Manual"
        logger: Logger

    Returns:
        DataFrame [param_code, param_name] (sin filas si no hay datos),
        o None si la consulta falló
    """
    logger = get_logger(logger)
    station_id = validar_estacion(station_id)
    comprobar_argumento(data_type, TIPOS_DATOS, "type")

    payload = construir_consulta_estacion(
        station_id, METODO_PARAMETROS, data_type, "estId")

    try:
        registros = post_sinaica(configuracion.SINAICA_CNXN_URL, payload, logger)
        return limpiar_parametros_estacion(registros, logger)
    except Exception as e:
        logger.warning(f"An error occurred downloading data from SINAICA: {e}")
        return None


def sinaica_station_dates(
    station_id: Any,
    data_type: str = "Crude",
    logger: Optional[logging.Logger] = None
) -> Optional[Tuple[Optional[str], Optional[str]]]:
    """
    Fecha en que la estación empezó a reportar y último dato disponible.

    Returns:
        (inicio, fin); (None, None) si la estación no tiene datos de
        ese tipo; None si la consulta falló
    """
    logger = get_logger(logger)
    station_id = validar_estacion(station_id)
    comprobar_argumento(data_type, TIPOS_DATOS, "type")

    payload = construir_consulta_estacion(
        station_id, METODO_FECHAS, data_type, "id")

    try:
        registros = post_sinaica(configuracion.SINAICA_CNXN_URL, payload, logger)
        return limpiar_fechas_estacion(registros)
    except Exception as e:
        logger.warning(f"An error occurred downloading data from SINAICA: {e}")
        return None


# ==============================================================================
# FUNCIÓN PRINCIPAL
# ==============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """Muestra los parámetros y el rango de fechas de una estación."""
    parser = argparse.ArgumentParser(
        prog="sinaica-estacion",
        description="Parámetros y fechas disponibles de una estación SINAICA",
    )
    parser.add_argument("station_id", type=int, help="ID numérico de la estación")
    parser.add_argument("--type", dest="data_type", default="Crude",
                        choices=TIPOS_DATOS)
    args = parser.parse_args(argv)

    logger = setup_logging("SINAICA_Estacion", "sinaica_estacion.log")
    logger.info("=" * 70)
    logger.info(f"ESTACIÓN {args.station_id} ({args.data_type})")
    logger.info("=" * 70)

    parametros = sinaica_station_params(args.station_id, args.data_type, logger)
    fechas = sinaica_station_dates(args.station_id, args.data_type, logger)

    if parametros is None and fechas is None:
        logger.error("No se pudo consultar la estación. Revisa los logs.")
        return 1

    if parametros is not None:
        logger.info(f"  Parámetros: {len(parametros)}")
        for _, fila in parametros.iterrows():
            logger.info(f"    {fila['param_code']:>6}: {fila['param_name']}")

    if fechas is not None:
        inicio, fin = fechas
        if inicio is None:
            logger.info("  Sin datos disponibles para este tipo")
        else:
            logger.info(f"  Rango de fechas: {inicio} → {fin}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
