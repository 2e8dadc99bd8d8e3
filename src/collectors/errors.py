# src/collectors/errors.py
# Errores de recolección
# ======================

"""
Jerarquía de errores de los colectores.

Todos son fatales para la ejecución: el colector no reintenta ni devuelve
resultados parciales, y el CLI los reporta como ``[ERROR FATAL]``.
"""

from typing import Optional


class CollectorError(RuntimeError):
    """Base de todos los fallos de una consulta."""

    def __init__(self, message: str, *, source_id: Optional[str] = None):
        super().__init__(message)
        self.source_id = source_id


class TransportError(CollectorError):
    """Fallo de conexión, DNS o timeout antes de recibir una respuesta."""


class HTTPStatusError(CollectorError):
    """La respuesta llegó con un código HTTP fuera del rango 2xx."""

    def __init__(
        self,
        status_code: int,
        body_preview: str = "",
        *,
        source_id: Optional[str] = None,
    ):
        message = f"error HTTP: status code {status_code}"
        if body_preview:
            message = f"{message}, body: {body_preview}"
        super().__init__(message, source_id=source_id)
        self.status_code = status_code
        self.body_preview = body_preview


class APIStatusError(CollectorError):
    """El payload decodificado reporta un estado de error propio de la API."""

    def __init__(
        self,
        provider: str,
        status: str,
        detail: str = "",
        *,
        source_id: Optional[str] = None,
    ):
        message = f"error de {provider} (Status: {status})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, source_id=source_id)
        self.provider = provider
        self.status = status
        self.detail = detail


class PayloadDecodeError(CollectorError):
    """El cuerpo no corresponde al formato esperado (JSON o XML)."""

    def __init__(
        self,
        reason: str,
        preview: str,
        *,
        source_id: Optional[str] = None,
    ):
        super().__init__(
            f"error parseando respuesta: {reason}. "
            f"Respuesta recibida (Inicio):\n{preview}",
            source_id=source_id,
        )
        self.reason = reason
        self.preview = preview


__all__ = [
    "APIStatusError",
    "CollectorError",
    "HTTPStatusError",
    "PayloadDecodeError",
    "TransportError",
]
