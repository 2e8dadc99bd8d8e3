"""
Paquete principal del crawler.

Contiene los colectores por fuente, el ranking de frecuencias, los reportes
de consola y las utilidades compartidas.
"""

from config.version import PROJECT_VERSION, PYTHON_REQUIRES_SPECIFIER

from .analysis import RankedEntry, frequency_table, top_n
from .collectors import AVAILABLE_COLLECTORS, BaseCollector, CollectorError
from .utils import get_logger, setup_logging

__version__ = PROJECT_VERSION
__description__ = (
    "Colectores de noticias por API y RSS con estadísticas descriptivas en consola"
)

__package_info__ = {
    "name": "ethicalcrawler",
    "version": __version__,
    "description": __description__,
    "author": "EthicalCrawler Team",
    "license": "MIT",
    "python_requires": PYTHON_REQUIRES_SPECIFIER,
}

__all__ = [
    "AVAILABLE_COLLECTORS",
    "BaseCollector",
    "CollectorError",
    "RankedEntry",
    "frequency_table",
    "get_logger",
    "setup_logging",
    "top_n",
]
