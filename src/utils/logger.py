# src/utils/logger.py
# Sistema de logging del crawler
# ==============================

"""
Este módulo configura el logging del crawler con loguru.

La salida estándar queda reservada para los reportes de exploración, por eso
el handler de consola escribe en stderr. Opcionalmente se agrega un archivo
con rotación y retención configurables.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from config.settings import build_logging_config, get_config


class CrawlerLogger:
    """
    Configurador centralizado de logging para todos los colectores.

    Se configura una sola vez por proceso; cada módulo obtiene un logger
    enlazado con su nombre mediante ``create_module_logger``.
    """

    def __init__(self):
        self.is_configured = False
        self.log_file_path: Optional[Path] = None

    def configure_logging(self, config: Optional[Dict[str, Any]] = None):
        """
        Configura los handlers de loguru.

        Args:
            config: Configuración de logging. Si no se proporciona,
                   la construye a partir de la configuración activa
        """
        if self.is_configured:
            logger.debug("Logger ya configurado, omitiendo reconfiguración")
            return

        config = config or build_logging_config(get_config())

        logger.remove()
        self._configure_console_handler(config)

        if config.get("file_path"):
            self._configure_file_handler(config)

        self.is_configured = True
        logger.debug(f"Configuración de logging aplicada: {config}")

    def reconfigure(self, config: Dict[str, Any]):
        """Descarta los handlers actuales y aplica una nueva configuración."""
        self.is_configured = False
        self.configure_logging(config)

    def _configure_console_handler(self, config: Dict[str, Any]):
        """
        Handler de consola sobre stderr.

        En modo debug el formato incluye módulo y línea; en otro caso es
        compacto.
        """
        debug = bool(config.get("debug", False))
        if debug:
            console_format = (
                "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
                "<level>{message}</level>"
            )
            console_level = "DEBUG"
        else:
            console_format = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}"
            console_level = config.get("level", "INFO")

        logger.add(
            sys.stderr,
            format=console_format,
            level=console_level,
            colorize=True,
            backtrace=debug,
            diagnose=debug,
        )

    def _configure_file_handler(self, config: Dict[str, Any]):
        """Handler de archivo con rotación, retención y compresión."""
        self.log_file_path = Path(config["file_path"])
        self.log_file_path.parent.mkdir(parents=True, exist_ok=True)

        file_format = (
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
            "{level: <8} | "
            "{process.id: <6} | "
            "{name}:{function}:{line} | "
            "{message}"
        )

        logger.add(
            str(self.log_file_path),
            format=file_format,
            level=config.get("level", "INFO"),
            rotation=config.get("max_file_size", "10 MB"),
            retention=config.get("retention", "30 days"),
            compression="gz",
            backtrace=True,
            diagnose=False,
        )

    def create_module_logger(self, module_name: str) -> Any:
        """
        Crea un logger enlazado a un módulo.

        Args:
            module_name: Nombre del módulo (ej: 'collectors.newsapicollector')

        Returns:
            Logger de loguru con el contexto ``module``
        """
        if not self.is_configured:
            self.configure_logging()

        return logger.bind(module=module_name)


_logger_instance = None


def get_logger() -> CrawlerLogger:
    """
    Devuelve la instancia única del configurador de logging.
    """
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = CrawlerLogger()
    return _logger_instance


def setup_logging(config: Optional[Dict[str, Any]] = None) -> CrawlerLogger:
    """
    Configura el logging al inicio del proceso.

    Args:
        config: Configuración opcional que reemplaza la actual

    Returns:
        Instancia configurada del logger
    """
    logger_instance = get_logger()
    if config:
        logger_instance.reconfigure(config)
    else:
        logger_instance.configure_logging()
    return logger_instance
