# -*- coding: utf-8 -*-
"""
==============================================================================
SINAICA DATOS
Descarga de mediciones de todas las estaciones por parámetro
==============================================================================

Descripción:
    Descarga de SINAICA los datos de un parámetro (O3, PM10, ...) para
    todas las estaciones en un rango de fechas y los devuelve
    normalizados como DataFrame.

    SINAICA limita cada petición a 1 MES de datos. Para rangos más
    largos se usa sinaica_param_data_range(), que divide el rango en
    ventanas mensuales consecutivas.

Tipos de datos:
    - Crude  → datos crudos de las estaciones automáticas (sin validar)
    - Manual → muestras enviadas a laboratorio (p.ej. partículas por filtro)

Uso:
    sinaica-descargar O3 2015-10-14 2015-10-14
    sinaica-descargar PM10 2016-01-01 2016-03-31 --type Manual --parquet

Salida:
    datos/sinaica_[parámetro]_[tipo]_[inicio]_[fin].csv

Notas:
    Cada estación reporta la hora en su propia zona horaria (y algunas
    la reportan mal). Conviene revisar la zona de cada estación en el
    catálogo antes de trabajar con datos horarios.
"""

import argparse
import calendar
import logging
import re
import sys
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd

from sinaica import configuracion
from sinaica.catalogo import (
    COLUMNAS_CRUDOS,
    COLUMNAS_ESTACIONES,
    COLUMNAS_MANUALES,
    PARAMETROS_VALIDOS,
    TABLAS_TIPO,
    TIPOS_DESCARGA,
)
from sinaica.configuracion import get_logger, setup_logging
from sinaica.errores import InvalidArgumentError, SinaicaError
from sinaica.procesamiento.normalizar_sinaica import (
    cargar_estaciones,
    esquema_vacio,
    guardar_resultados,
    imprimir_resumen,
    limpiar_datos_crudos,
    limpiar_datos_manuales,
)
from sinaica.recopilacion.cliente_sinaica import pausa_cortesia, post_sinaica

PATRON_FECHA = re.compile(r"^\d{4}-\d{2}-\d{2}$")


# ==============================================================================
# VALIDACIÓN DE ARGUMENTOS
# ==============================================================================

def validar_fecha(valor: Any, nombre: str) -> date:
    """
    Convierte una fecha YYYY-MM-DD (str, date o datetime) a date.

    Raises:
        InvalidArgumentError: si falta o no tiene formato YYYY-MM-DD
    """
    if valor is None:
        raise InvalidArgumentError(
            f"You need to specify a {nombre} in YYYY-MM-DD format")
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor
    if isinstance(valor, str) and PATRON_FECHA.match(valor.strip()):
        try:
            return datetime.strptime(valor.strip(), "%Y-%m-%d").date()
        except ValueError:
            pass
    raise InvalidArgumentError(f"{nombre} should be in YYYY-MM-DD format")


def comprobar_argumento(valor: Any, validos: Iterable[str], nombre: str) -> str:
    """Comprueba que `valor` sea uno de los valores permitidos."""
    validos = list(validos)
    if not isinstance(valor, str) or valor not in validos:
        raise InvalidArgumentError(
            f"Invalid {nombre} '{valor}'. Valid values are: {', '.join(validos)}"
        )
    return valor


def incrementar_mes(fecha: date) -> date:
    """
    Suma un mes calendario a una fecha.

    Si el día no existe en el mes siguiente se usa el último día
    (2015-01-31 → 2015-02-28).
    """
    if fecha.month == 12:
        anio, mes = fecha.year + 1, 1
    else:
        anio, mes = fecha.year, fecha.month + 1
    dia = min(fecha.day, calendar.monthrange(anio, mes)[1])
    return date(anio, mes, dia)


def validar_descarga(
    parameter: Any,
    start_date: Any,
    end_date: Any,
    data_type: Any,
    limitar_mes: bool = True
) -> Tuple[str, date, date, str]:
    """
    Valida los argumentos de una descarga en el mismo orden que SINAICA.

    Returns:
        (parameter, inicio, fin, data_type) ya validados
    """
    inicio = validar_fecha(start_date, "start_date")
    fin = validar_fecha(end_date, "end_date")
    comprobar_argumento(parameter, PARAMETROS_VALIDOS, "parameter")

    if inicio > fin:
        raise InvalidArgumentError(
            "start_date should be less than or equal to end_date")

    comprobar_argumento(data_type, TIPOS_DESCARGA, "type")

    if limitar_mes and fin > incrementar_mes(inicio):
        raise InvalidArgumentError(
            "The maximum amount of data you can download is 1 month")

    return parameter, inicio, fin, data_type


def construir_consulta(
    parameter: str,
    inicio: date,
    fin: date,
    data_type: str
) -> Dict[str, str]:
    """
    Formulario de getData.php.

    La cláusula where se arma solo con el código del catálogo y con
    fechas ya convertidas a date, nunca con el texto del usuario.
    """
    if parameter not in PARAMETROS_VALIDOS:
        raise InvalidArgumentError(f"Invalid parameter '{parameter}'")

    return {
        "tabla": TABLAS_TIPO[data_type],
        "fields": "",
        "where": (
            f"parametro = '{parameter}' "
            f"and fecha >= '{inicio.isoformat()}' "
            f"and fecha <= '{fin.isoformat()}'"
        ),
    }


def generar_rangos_fechas(inicio: date, fin: date) -> List[Tuple[date, date]]:
    """
    Divide [inicio, fin] en ventanas consecutivas de como máximo 1 mes.

    Returns:
        Lista de tuplas (inicio_ventana, fin_ventana), sin solapes
    """
    rangos = []
    actual = inicio

    while actual <= fin:
        fin_rango = min(incrementar_mes(actual) - timedelta(days=1), fin)
        rangos.append((actual, fin_rango))
        actual = fin_rango + timedelta(days=1)

    return rangos


# ==============================================================================
# DESCARGA
# ==============================================================================

def _estaciones_por_defecto(
    estaciones: Optional[pd.DataFrame],
    logger: logging.Logger
) -> Optional[pd.DataFrame]:
    if estaciones is not None or configuracion.ESTACIONES_CSV is None:
        return estaciones
    return cargar_estaciones(configuracion.ESTACIONES_CSV, logger)


def sinaica_param_data(
    parameter: str,
    start_date: Any,
    end_date: Any,
    data_type: str = "Crude",
    remove_extremes: bool = False,
    estaciones: Optional[pd.DataFrame] = None,
    logger: Optional[logging.Logger] = None
) -> pd.DataFrame:
    """
    Descarga los datos de un parámetro para todas las estaciones.

    Args:
        parameter: Código del parámetro (ver PARAMETROS_VALIDOS)
        start_date: Inicio del rango (YYYY-MM-DD)
        end_date: Fin del rango (YYYY-MM-DD), como máximo 1 mes después
        data_type: "Crude" o "Manual"
        remove_extremes: Anular los valores por encima del límite del
            parámetro (O3 > 0.2, PM10 > 600, PM2.5 > 175, NO2 > 0.21,
            SO2 > 0.2, CO > 15). Reproduce los valores del portal de
            SINAICA; para análisis serios es mejor un método estadístico.
        estaciones: Catálogo de estaciones para añadir nombre y red.
            Si es None se usa SINAICA_ESTACIONES_CSV (si está definido).
        logger: Logger

    Returns:
        DataFrame con COLUMNAS_CRUDOS o COLUMNAS_MANUALES. La columna
        "value" contiene el valor limpio del parámetro.

    Raises:
        InvalidArgumentError: argumentos inválidos
        TransportError: fallo en la petición a SINAICA
    """
    logger = get_logger(logger)
    parameter, inicio, fin, data_type = validar_descarga(
        parameter, start_date, end_date, data_type)

    estaciones = _estaciones_por_defecto(estaciones, logger)
    payload = construir_consulta(parameter, inicio, fin, data_type)

    logger.info(f"Descargando {parameter} ({data_type}): {inicio} → {fin}")
    registros = post_sinaica(configuracion.SINAICA_DATA_URL, payload, logger)

    # Para no saturar el servidor, esperar antes de la siguiente llamada
    pausa_cortesia(logger)

    if data_type == "Crude":
        return limpiar_datos_crudos(
            registros, parameter, remove_extremes, estaciones, logger)
    return limpiar_datos_manuales(
        registros, parameter, remove_extremes, estaciones, logger)


def sinaica_param_data_range(
    parameter: str,
    start_date: Any,
    end_date: Any,
    data_type: str = "Crude",
    remove_extremes: bool = False,
    estaciones: Optional[pd.DataFrame] = None,
    logger: Optional[logging.Logger] = None
) -> pd.DataFrame:
    """
    Igual que sinaica_param_data pero sin el límite de 1 mes.

    Hace una petición por ventana mensual (ver generar_rangos_fechas)
    y concatena los resultados en una sola tabla.
    """
    logger = get_logger(logger)
    parameter, inicio, fin, data_type = validar_descarga(
        parameter, start_date, end_date, data_type, limitar_mes=False)

    estaciones = _estaciones_por_defecto(estaciones, logger)
    if estaciones is None:
        # Catálogo resuelto una sola vez para todas las ventanas
        estaciones = esquema_vacio(COLUMNAS_ESTACIONES)
    rangos = generar_rangos_fechas(inicio, fin)
    logger.info(f"Peticiones necesarias: {len(rangos)}")

    frames = []
    for i, (fecha_ini, fecha_fin) in enumerate(rangos):
        logger.info(f"  Rango {i + 1}/{len(rangos)}: {fecha_ini} - {fecha_fin}")
        df = sinaica_param_data(
            parameter, fecha_ini, fecha_fin, data_type,
            remove_extremes, estaciones, logger
        )
        if not df.empty:
            frames.append(df)

    columnas = COLUMNAS_CRUDOS if data_type == "Crude" else COLUMNAS_MANUALES
    if not frames:
        return esquema_vacio(columnas)

    return pd.concat(frames, ignore_index=True)[columnas]


# ==============================================================================
# FUNCIÓN PRINCIPAL
# ==============================================================================

def _crear_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sinaica-descargar",
        description="Descarga datos de calidad del aire de SINAICA por parámetro",
    )
    parser.add_argument("parameter", help="Código del parámetro (O3, PM10, ...)")
    parser.add_argument("start_date", help="Fecha inicial YYYY-MM-DD")
    parser.add_argument("end_date", help="Fecha final YYYY-MM-DD")
    parser.add_argument("--type", dest="data_type", default="Crude",
                        choices=TIPOS_DESCARGA)
    parser.add_argument("--remove-extremes", action="store_true",
                        help="Anular valores por encima del límite del parámetro")
    parser.add_argument("--estaciones", default=None,
                        help="CSV con el catálogo de estaciones")
    parser.add_argument("--parquet", action="store_true",
                        help="Guardar también en Parquet")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Descarga un parámetro y guarda el resultado en OUTPUT_DIR."""
    args = _crear_parser().parse_args(argv)

    logger = setup_logging("SINAICA_Descarga", "sinaica_descarga.log")
    logger.info("=" * 70)
    logger.info(f"DESCARGA SINAICA: {args.parameter} ({args.data_type})")
    logger.info("=" * 70)

    estaciones = None
    if args.estaciones:
        estaciones = cargar_estaciones(args.estaciones, logger)

    try:
        df = sinaica_param_data_range(
            args.parameter,
            args.start_date,
            args.end_date,
            data_type=args.data_type,
            remove_extremes=args.remove_extremes,
            estaciones=estaciones,
            logger=logger,
        )
    except SinaicaError as e:
        logger.error(f"Descarga fallida: {e}")
        return 1

    imprimir_resumen(df, logger)

    nombre = (
        f"sinaica_{args.parameter}_{args.data_type}_"
        f"{args.start_date}_{args.end_date}"
    )
    ruta_parquet = configuracion.OUTPUT_DIR / f"{nombre}.parquet" if args.parquet else None
    csv_path, _ = guardar_resultados(
        df, configuracion.OUTPUT_DIR / f"{nombre}.csv", logger, ruta_parquet)

    return 0 if csv_path is not None else 1


if __name__ == "__main__":
    sys.exit(main())
