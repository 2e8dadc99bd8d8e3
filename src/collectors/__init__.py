"""
Paquete de colectores del crawler.

Un colector por fuente: cuatro APIs JSON y un lector de feeds RSS.
"""

from .base_collector import APICollector, BaseCollector
from .errors import (
    APIStatusError,
    CollectorError,
    HTTPStatusError,
    PayloadDecodeError,
    TransportError,
)
from .gdelt_collector import GdeltCollector
from .guardian_collector import GuardianCollector
from .newsapi_collector import NewsAPICollector
from .rss_collector import RSSCollector
from .x_collector import XCollector

AVAILABLE_COLLECTORS = {
    "newsapi": NewsAPICollector,
    "guardian": GuardianCollector,
    "gdelt": GdeltCollector,
    "x": XCollector,
    "rss": RSSCollector,
}


def get_available_collector_types():
    """Retorna lista de tipos de colectores disponibles."""
    return list(AVAILABLE_COLLECTORS.keys())


def create_collector_by_name(collector_type: str, **kwargs):
    """Crea un colector por nombre de tipo."""
    if collector_type not in AVAILABLE_COLLECTORS:
        raise ValueError(f"Tipo de colector no disponible: {collector_type}")
    return AVAILABLE_COLLECTORS[collector_type](**kwargs)


__all__ = [
    "APICollector",
    "APIStatusError",
    "AVAILABLE_COLLECTORS",
    "BaseCollector",
    "CollectorError",
    "GdeltCollector",
    "GuardianCollector",
    "HTTPStatusError",
    "NewsAPICollector",
    "PayloadDecodeError",
    "RSSCollector",
    "TransportError",
    "XCollector",
    "create_collector_by_name",
    "get_available_collector_types",
]
