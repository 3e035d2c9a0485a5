# -*- coding: utf-8 -*-
"""
Excepciones del paquete sinaica.

    SinaicaError          → base común
    InvalidArgumentError  → argumentos mal formados (fechas, parámetro, tipo, estación)
    TransportError        → fallo HTTP, content-type inesperado o JSON inválido

Una respuesta vacía del servidor NO es un error: se devuelve una tabla
sin filas con el esquema completo.
"""

from typing import Optional


class SinaicaError(Exception):
    """Error base de todas las operaciones contra SINAICA."""


class InvalidArgumentError(SinaicaError, ValueError):
    """Argumento inválido; se lanza antes de cualquier petición de red."""


class TransportError(SinaicaError):
    """La petición a SINAICA falló o devolvió algo que no se puede leer."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
