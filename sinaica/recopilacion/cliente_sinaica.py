# -*- coding: utf-8 -*-
"""
==============================================================================
SINAICA DATOS
Cliente HTTP de SINAICA
==============================================================================

Descripción:
    Envía los formularios a los dos endpoints de SINAICA y devuelve el
    JSON ya decodificado.

Endpoints utilizados:
    - getData.php  → mediciones     {tabla, fields, where}
    - cnxn.php     → estaciones     {estId|id, metodo, tipoDatos}

    Ambos se consultan con POST form-encoded y responden JSON con
    Content-Type text/html.

Errores:
    Cualquier fallo (HTTP no 2xx, content-type inesperado, JSON inválido
    o error de conexión) se lanza como TransportError. Decidir si el
    error se propaga o se registra es responsabilidad del llamador.
"""

import logging
import random
import time
from typing import Any, Dict, Optional

import requests

from sinaica import configuracion
from sinaica.configuracion import get_logger
from sinaica.errores import TransportError


def post_sinaica(
    url: str,
    payload: Dict[str, Any],
    logger: Optional[logging.Logger] = None
) -> Any:
    """
    Realiza una petición POST a SINAICA.

    Args:
        url: Endpoint completo
        payload: Campos del formulario
        logger: Logger para registrar eventos

    Returns:
        JSON decodificado (lista, dict o escalar)

    Raises:
        TransportError: si la petición falla o la respuesta no es legible
    """
    logger = get_logger(logger)
    logger.debug(f"Solicitando {url} con {payload}")

    try:
        response = requests.post(
            url,
            data=payload,
            headers=configuracion.REQUEST_HEADERS,
            timeout=configuracion.REQUEST_TIMEOUT,
            verify=configuracion.VERIFY_SSL,
        )
    except requests.exceptions.Timeout as e:
        raise TransportError(
            f"The request to <{url}> timed out after "
            f"{configuracion.REQUEST_TIMEOUT}s", url=url
        ) from e
    except requests.exceptions.RequestException as e:
        raise TransportError(
            f"The request to <{url}> failed: {e}", url=url
        ) from e

    # --- Manejo de códigos HTTP ---
    if not 200 <= response.status_code < 300:
        raise TransportError(
            f"The request to <{url}> failed [{response.status_code}]",
            url=url,
            status_code=response.status_code,
        )

    content_type = response.headers.get("Content-Type", "")
    if content_type.split(";")[0].strip().lower() != "text/html":
        raise TransportError(
            f"{url} did not return text/html (got '{content_type}')",
            url=url,
            status_code=response.status_code,
        )

    response.encoding = "utf-8"
    try:
        data = response.json()
    except requests.exceptions.JSONDecodeError as e:
        raise TransportError(
            f"{url} returned invalid JSON: {e}",
            url=url,
            status_code=response.status_code,
        ) from e

    logger.debug(f"{url}: respuesta OK ({len(response.text):,} caracteres)")
    return data


def pausa_cortesia(logger: Optional[logging.Logger] = None) -> float:
    """
    Espera un tiempo aleatorio para no saturar el servidor de SINAICA.

    Returns:
        Segundos esperados
    """
    segundos = random.uniform(0, configuracion.PAUSA_MAXIMA)
    get_logger(logger).debug(f"Pausa de cortesía: {segundos:.2f}s")
    time.sleep(segundos)
    return segundos
