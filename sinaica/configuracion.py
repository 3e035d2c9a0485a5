# -*- coding: utf-8 -*-
"""
==============================================================================
SINAICA DATOS
Configuración común: variables de entorno (.env) y logging
==============================================================================

Descripción:
    Centraliza las constantes de conexión con SINAICA y la configuración
    de logging que comparten los scripts de descarga.

    Todas las variables pueden definirse en un archivo .env en el
    directorio de trabajo:

        SINAICA_DATA_URL        → endpoint de descarga de mediciones
        SINAICA_CNXN_URL        → endpoint de metadatos de estaciones
        SINAICA_TIMEOUT         → timeout de las peticiones (segundos)
        SINAICA_VERIFY_SSL      → "false" para desactivar la verificación TLS
        SINAICA_PAUSA_MAXIMA    → pausa aleatoria máxima entre descargas
        SINAICA_ESTACIONES_CSV  → CSV con el catálogo de estaciones
        SINAICA_LOG_DIR         → directorio de logs
        SINAICA_OUTPUT_DIR      → directorio de salida de los CLI
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Cargar variables de entorno
load_dotenv()

# ==============================================================================
# CONFIGURACIÓN
# ==============================================================================

SINAICA_DATA_URL = os.getenv(
    "SINAICA_DATA_URL", "https://sinaica.inecc.gob.mx/lib/j/php/getData.php"
)
SINAICA_CNXN_URL = os.getenv(
    "SINAICA_CNXN_URL", "https://sinaica.inecc.gob.mx/lib/libd/cnxn.php"
)

REQUEST_TIMEOUT = float(os.getenv("SINAICA_TIMEOUT", "30"))
VERIFY_SSL = os.getenv("SINAICA_VERIFY_SSL", "true").strip().lower() not in (
    "0", "false", "no"
)
REQUEST_HEADERS = {
    "User-Agent": "sinaica-datos/0.1 (descarga de datos de calidad del aire)",
}

# Pausa aleatoria (0, PAUSA_MAXIMA] tras cada descarga para no saturar el servidor
PAUSA_MAXIMA = float(os.getenv("SINAICA_PAUSA_MAXIMA", "1.5"))

ESTACIONES_CSV: Optional[Path] = (
    Path(os.environ["SINAICA_ESTACIONES_CSV"])
    if os.getenv("SINAICA_ESTACIONES_CSV") else None
)

LOG_DIR = Path(os.getenv("SINAICA_LOG_DIR", "logs"))
OUTPUT_DIR = Path(os.getenv("SINAICA_OUTPUT_DIR", "datos"))

LOGGER_NAME = "SINAICA"


# ==============================================================================
# CONFIGURACIÓN DE LOGGING
# ==============================================================================

def setup_logging(
    nombre: str = LOGGER_NAME,
    archivo: str = "sinaica.log"
) -> logging.Logger:
    """
    Configura logging dual (archivo + consola).

    Args:
        nombre: Nombre del logger
        archivo: Nombre del archivo dentro de LOG_DIR

    Returns:
        logging.Logger: Instancia del logger configurado
    """
    LOG_DIR.mkdir(parents=True, exist_ok=True)

    log_file = LOG_DIR / archivo
    log_format = "%(asctime)s - %(levelname)s - %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logger = logging.getLogger(nombre)
    logger.setLevel(logging.DEBUG)

    # Limpiar handlers existentes (evita duplicados en re-ejecuciones)
    logger.handlers.clear()

    # Archivo (todo)
    file_handler = logging.FileHandler(log_file, encoding="utf-8", mode="a")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(log_format, date_format))

    # Consola (INFO+)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(log_format, date_format))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def get_logger(logger: Optional[logging.Logger] = None) -> logging.Logger:
    """Devuelve el logger recibido o el logger por defecto del paquete."""
    return logger if logger is not None else logging.getLogger(LOGGER_NAME)
