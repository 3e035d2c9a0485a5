# -*- coding: utf-8 -*-
"""
==============================================================================
SINAICA DATOS
Normalización de las respuestas de SINAICA
==============================================================================

Descripción:
    Transforma el JSON que devuelve SINAICA en DataFrames con columnas,
    tipos y unidades estables. Son funciones puras: no hacen peticiones
    de red ni guardan estado entre llamadas.

Formas de entrada (JSON de SINAICA):
    1. Datos crudos     → getData.php, tabla "Datos"
    2. Datos manuales   → getData.php, tabla "DatosManuales"
    3. Metadatos        → cnxn.php (parámetros y fechas límite por estación)

Esquemas de salida:
    Ver COLUMNAS_CRUDOS, COLUMNAS_MANUALES y COLUMNAS_PARAMETROS en
    sinaica/catalogo.py. Las dos tablas de mediciones terminan siempre
    con "unit" y "value".

Decisiones de diseño:
    - Los campos se extraen POR NOMBRE usando tablas de aliases
      (nombre en SINAICA → nombre canónico), nunca por posición.
      Un campo ausente se rellena con NA y se registra un warning.
    - "value" se calcula a partir de valorAct:
        · NaN si no es numérico o no es finito
        · NaN si validoAct == 0
        · NaN si es negativo
        · NaN si supera el límite del parámetro (solo con remove_extremes)
    - Las columnas originales (value_actual, valid_actual, ...) se
      conservan tal cual llegan, para trazabilidad.
    - El catálogo de estaciones se recibe como argumento (DataFrame) y
      NUNCA se modifica.
    - Una respuesta vacía devuelve una tabla sin filas con el esquema
      completo y los mismos dtypes que una tabla con datos.
"""

import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from sinaica.catalogo import (
    COLUMNAS_CRUDOS,
    COLUMNAS_ENTERAS,
    COLUMNAS_ESTACIONES,
    COLUMNAS_MANUALES,
    COLUMNAS_PARAMETROS,
    limite_permitido,
    recode_sinaica_units,
)
from sinaica.configuracion import get_logger
from sinaica.errores import InvalidArgumentError, SinaicaError

# ==============================================================================
# MAPEO DE CAMPOS (nombre canónico → aliases en SINAICA)
# ==============================================================================

CAMPOS_CRUDOS: Dict[str, Tuple[str, ...]] = {
    "id": ("id",),
    "station_id": ("estacionesId", "estacionId"),
    "date": ("fecha",),
    "hour": ("hora",),
    "parameter": ("parametro",),
    "value_original": ("valorOrig",),
    "flag_original": ("banderasOrig",),
    "valid_original": ("validoOrig",),
    "value_actual": ("valorAct",),
    "valid_actual": ("validoAct",),
    "date_validated": ("fechaValidoAct",),
    "validation_level": ("nivelValidacion",),
}

# archivosId existe en la respuesta pero no forma parte del esquema
CAMPOS_MANUALES: Dict[str, Tuple[str, ...]] = {
    "id": ("id",),
    "station_id": ("estacionesId", "estacionId"),
    "date": ("fecha",),
    "hour": ("hora",),
    "parameter": ("parametro",),
    "value_actual": ("valorAct",),
    "valid_actual": ("validoAct",),
    "validation_level": ("nivelValidacion",),
}

CAMPOS_PARAMETROS: Dict[str, Tuple[str, ...]] = {
    "param_code": ("parametro", "param", "clave", "id"),
    "param_name": ("nombre", "parametroNombre", "descripcion", "name"),
}


# ==============================================================================
# UTILIDADES
# ==============================================================================

def _dtype_columna(columna: str) -> str:
    if columna in COLUMNAS_ENTERAS:
        return "Int64"
    if columna == "value":
        return "float64"
    return "object"


def esquema_vacio(columnas: List[str]) -> pd.DataFrame:
    """Tabla sin filas con las columnas y dtypes del esquema."""
    return pd.DataFrame(
        {col: pd.Series(dtype=_dtype_columna(col)) for col in columnas}
    )


def tiene_registros(registros: Any) -> bool:
    """True si la respuesta JSON contiene al menos un registro."""
    if registros is None:
        return False
    if isinstance(registros, pd.DataFrame):
        return not registros.empty
    if isinstance(registros, (list, tuple, dict)):
        return len(registros) > 0
    return False


def _es_nulo(valor: Any) -> bool:
    if valor is None:
        return True
    if isinstance(valor, float) and math.isnan(valor):
        return True
    return False


def _a_entero(serie: pd.Series) -> pd.Series:
    """Convierte a entero nullable (Int64), truncando decimales."""
    numeros = pd.to_numeric(serie, errors="coerce").astype("float64")
    numeros = numeros.where(np.isfinite(numeros))
    return np.trunc(numeros).astype("Int64")


def _a_texto(serie: pd.Series) -> pd.Series:
    """Convierte a str conservando los nulos como None."""
    return serie.astype(object).map(lambda v: None if pd.isna(v) else str(v))


def extraer_campos(
    registros: Any,
    campos: Dict[str, Tuple[str, ...]],
    logger: logging.Logger
) -> pd.DataFrame:
    """
    Construye un DataFrame con las columnas canónicas de `campos`.

    Para cada columna se usa el primer alias presente en la respuesta.
    Los campos que no aparecen se rellenan con None y se avisa por log.

    Args:
        registros: JSON decodificado (lista de objetos o dict de listas)
        campos: Mapeo nombre canónico → aliases aceptados
        logger: Logger

    Returns:
        DataFrame con exactamente las claves de `campos` como columnas
    """
    if isinstance(registros, dict) and not any(
        isinstance(v, (list, tuple)) for v in registros.values()
    ):
        registros = [registros]

    crudo = pd.DataFrame(registros)

    columnas = {}
    faltantes = []
    for destino, aliases in campos.items():
        origen = next((a for a in aliases if a in crudo.columns), None)
        if origen is None:
            faltantes.append(destino)
            columnas[destino] = pd.Series(
                [None] * len(crudo), index=crudo.index, dtype=object
            )
        else:
            columnas[destino] = crudo[origen]

    if faltantes:
        logger.warning(
            f"Campos ausentes en la respuesta de SINAICA (se rellenan con NA): "
            f"{faltantes}. Columnas recibidas: {list(crudo.columns)}"
        )

    return pd.DataFrame(columnas, index=crudo.index)


# ==============================================================================
# TRANSFORMACIONES
# ==============================================================================

def filtrar_valores(
    valores: pd.Series,
    validos: pd.Series,
    parameter: str,
    remove_extremes: bool = False
) -> pd.Series:
    """
    Calcula la columna "value" a partir de los valores y sus banderas.

    Las comprobaciones de validez y signo se aplican siempre; el límite
    superior del parámetro solo si remove_extremes es True. Los
    parámetros sin límite en LIMITES_PERMITIDOS no se recortan nunca.

    Returns:
        Serie float64 con NaN en los valores descartados
    """
    valores = pd.to_numeric(valores, errors="coerce").astype("float64")
    valores = valores.where(np.isfinite(valores))

    banderas = pd.to_numeric(validos, errors="coerce")
    valores = valores.mask(banderas == 0)

    valores = valores.mask(valores < 0)

    if remove_extremes is True:
        valores = valores.mask(valores > limite_permitido(parameter))

    return valores


def unir_estaciones(
    df: pd.DataFrame,
    estaciones: Optional[pd.DataFrame],
    logger: logging.Logger
) -> pd.DataFrame:
    """
    Añade nombre, código y red de cada estación (left join por station_id).

    Si no hay catálogo, las columnas de estación quedan como NA.
    Los IDs sin entrada en el catálogo se registran como warning.
    """
    if estaciones is None or estaciones.empty:
        tabla = esquema_vacio(COLUMNAS_ESTACIONES)
    else:
        faltantes = [c for c in COLUMNAS_ESTACIONES if c not in estaciones.columns]
        if faltantes:
            raise InvalidArgumentError(
                f"The station table is missing the columns: {faltantes}"
            )
        tabla = estaciones.loc[:, COLUMNAS_ESTACIONES].copy()
        tabla["station_id"] = _a_entero(tabla["station_id"])
        tabla["network_id"] = _a_entero(tabla["network_id"])
        tabla = (
            tabla.dropna(subset=["station_id"])
            .drop_duplicates(subset="station_id", keep="first")
        )

    resultado = df.merge(tabla, on="station_id", how="left")

    if estaciones is not None and not estaciones.empty:
        ids_desc = sorted(
            set(df["station_id"].dropna()) - set(tabla["station_id"].dropna())
        )
        if ids_desc:
            logger.warning(
                f"Estaciones: {len(ids_desc)} ID(s) sin entrada en el catálogo → {ids_desc}"
            )

    return resultado


def _limpiar_mediciones(
    registros: Any,
    campos: Dict[str, Tuple[str, ...]],
    columnas: List[str],
    parameter: str,
    remove_extremes: bool,
    estaciones: Optional[pd.DataFrame],
    logger: logging.Logger
) -> pd.DataFrame:
    if not tiene_registros(registros):
        logger.info(f"{parameter}: SINAICA no devolvió registros")
        return esquema_vacio(columnas)

    df = extraer_campos(registros, campos, logger)

    df["value"] = filtrar_valores(
        df["value_actual"], df["valid_actual"], parameter, remove_extremes
    )
    df["station_id"] = _a_entero(df["station_id"])
    df["hour"] = _a_entero(df["hour"])
    if "date_validated" in df.columns:
        df["date_validated"] = _a_texto(df["date_validated"])

    df = unir_estaciones(df, estaciones, logger)
    df["unit"] = recode_sinaica_units(parameter)

    df = df[columnas].reset_index(drop=True)

    n_validos = int(df["value"].notna().sum())
    logger.info(
        f"{parameter}: {len(df):,} registros normalizados | "
        f"{n_validos:,} valores válidos | {len(df) - n_validos:,} descartados"
    )
    return df


def limpiar_datos_crudos(
    registros: Any,
    parameter: str,
    remove_extremes: bool = False,
    estaciones: Optional[pd.DataFrame] = None,
    logger: Optional[logging.Logger] = None
) -> pd.DataFrame:
    """
    Normaliza la respuesta de datos crudos (tabla "Datos").

    Args:
        registros: JSON decodificado de getData.php
        parameter: Código del parámetro descargado (p.ej. "O3")
        remove_extremes: Aplicar los límites de LIMITES_PERMITIDOS
        estaciones: Catálogo de estaciones (ver COLUMNAS_ESTACIONES)
        logger: Logger

    Returns:
        DataFrame con las columnas de COLUMNAS_CRUDOS
    """
    return _limpiar_mediciones(
        registros, CAMPOS_CRUDOS, COLUMNAS_CRUDOS, parameter,
        remove_extremes, estaciones, get_logger(logger)
    )


def limpiar_datos_manuales(
    registros: Any,
    parameter: str,
    remove_extremes: bool = False,
    estaciones: Optional[pd.DataFrame] = None,
    logger: Optional[logging.Logger] = None
) -> pd.DataFrame:
    """
    Normaliza la respuesta de datos manuales (tabla "DatosManuales").

    Igual que limpiar_datos_crudos pero sin las columnas *_original ni
    date_validated.
    """
    return _limpiar_mediciones(
        registros, CAMPOS_MANUALES, COLUMNAS_MANUALES, parameter,
        remove_extremes, estaciones, get_logger(logger)
    )


def limpiar_parametros_estacion(
    registros: Any,
    logger: Optional[logging.Logger] = None
) -> pd.DataFrame:
    """
    Lista de parámetros de una estación → [param_code, param_name].

    Raises:
        SinaicaError: si la respuesta tiene filas pero ninguno de los
            campos conocidos para código o nombre
    """
    if not tiene_registros(registros):
        return esquema_vacio(COLUMNAS_PARAMETROS)

    df = extraer_campos(registros, CAMPOS_PARAMETROS, get_logger(logger))

    vacias = [c for c in COLUMNAS_PARAMETROS if df[c].isna().all()]
    if vacias:
        raise SinaicaError(
            f"Unrecognized station parameter fields, {vacias} could not be read"
        )

    return df[COLUMNAS_PARAMETROS].reset_index(drop=True)


def limpiar_fechas_estacion(
    registros: Any
) -> Tuple[Optional[str], Optional[str]]:
    """
    Fechas límite de una estación → (inicio, fin).

    Devuelve (None, None) si la estación no tiene datos.
    """
    if registros is None:
        return (None, None)
    if isinstance(registros, dict):
        valores = list(registros.values())
    elif isinstance(registros, (list, tuple)):
        valores = list(registros)
    else:
        valores = [registros]

    # Un único registro {"fechaIni": ..., "fechaFin": ...}
    if valores and isinstance(valores[0], dict):
        valores = list(valores[0].values())

    if not valores or _es_nulo(valores[0]):
        return (None, None)

    inicio = str(valores[0])
    fin = valores[1] if len(valores) > 1 else None
    return (inicio, None if _es_nulo(fin) else str(fin))


# ==============================================================================
# CATÁLOGO DE ESTACIONES
# ==============================================================================

def cargar_estaciones(
    ruta: Path,
    logger: Optional[logging.Logger] = None
) -> Optional[pd.DataFrame]:
    """
    Carga el catálogo de estaciones desde un CSV.

    El CSV debe contener al menos las columnas de COLUMNAS_ESTACIONES;
    las demás (latitud, zona horaria, ...) se conservan.

    Returns:
        DataFrame con el catálogo o None si no se pudo leer
    """
    logger = get_logger(logger)
    ruta = Path(ruta)

    if not ruta.exists():
        logger.warning(f"Estaciones: archivo no encontrado → {ruta}")
        return None

    try:
        df = pd.read_csv(ruta, encoding="utf-8")
    except (OSError, ValueError) as e:
        logger.error(f"Estaciones: error leyendo {ruta.name}: {e}")
        return None

    faltantes = [c for c in COLUMNAS_ESTACIONES if c not in df.columns]
    if faltantes:
        logger.error(f"Estaciones: columnas faltantes en {ruta.name}: {faltantes}")
        return None

    logger.info(f"Estaciones: {len(df):,} estaciones cargadas desde {ruta.name}")
    return df


# ==============================================================================
# GUARDADO
# ==============================================================================

def guardar_resultados(
    df: pd.DataFrame,
    ruta_csv: Path,
    logger: logging.Logger,
    ruta_parquet: Optional[Path] = None
) -> Tuple[Optional[Path], Optional[Path]]:
    """
    Guarda el dataset normalizado en CSV y, opcionalmente, en Parquet.

    Returns:
        (ruta_csv, ruta_parquet); None en las que no se pudieron escribir
    """
    csv_path = None
    parquet_path = None

    try:
        ruta_csv.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(ruta_csv, index=False, encoding="utf-8")
        size_kb = ruta_csv.stat().st_size / 1024
        csv_path = ruta_csv
        logger.info(f"✔ CSV guardado: {ruta_csv.name} ({size_kb:.1f} KB)")
    except OSError as e:
        logger.error(f"Error guardando CSV: {e}")

    if ruta_parquet is not None:
        try:
            ruta_parquet.parent.mkdir(parents=True, exist_ok=True)
            df.to_parquet(ruta_parquet, engine="pyarrow",
                          index=False, compression="snappy")
            size_mb = ruta_parquet.stat().st_size / (1024 * 1024)
            parquet_path = ruta_parquet
            logger.info(
                f"✔ Parquet guardado: {ruta_parquet.name} ({size_mb:.2f} MB)")
        except (OSError, ValueError) as e:
            logger.error(f"Error guardando Parquet: {e}")

    return csv_path, parquet_path


# ==============================================================================
# INFORME DE RESUMEN
# ==============================================================================

def imprimir_resumen(df: pd.DataFrame, logger: logging.Logger) -> None:
    """Registra un resumen estadístico de una tabla de mediciones."""
    if df.empty:
        logger.info("Dataset vacío - sin resumen que mostrar")
        return

    logger.info("")
    logger.info("=" * 70)
    logger.info("RESUMEN DE DATOS SINAICA")
    logger.info("=" * 70)

    logger.info(f"  Total registros: {len(df):,}")
    logger.info(f"  Rango temporal:  {df['date'].min()} → {df['date'].max()}")
    logger.info(f"  Estaciones:      {df['station_id'].nunique()}")
    logger.info(f"  Parámetros:      {sorted(df['parameter'].dropna().unique())}")

    validos = df["value"].dropna()
    pct = len(validos) / len(df) * 100
    logger.info(f"  Valores válidos: {len(validos):,} ({pct:.1f}%)")

    if not validos.empty:
        unidad = df["unit"].iloc[0]
        logger.info(
            f"  media={validos.mean():.3f} | mediana={validos.median():.3f} | "
            f"min={validos.min():.3f} | max={validos.max():.3f} {unidad}"
        )

    logger.info("=" * 70)
