#!/usr/bin/env python3
# run_collector.py
# Script de ejecución de los colectores
# =====================================

"""
Ejecuta una consulta contra una fuente y muestra la exploración de datos.

Cada ejecución es una sola pasada: una petición (o una por feed en el caso
de RSS), un reporte en la salida estándar y un código de salida. Cualquier
error de red, HTTP o de formato es fatal: se imprime como ``[ERROR FATAL]``
y el proceso termina con código 1, sin reintentos.

Uso:
    python run_collector.py newsapi                     # Parámetros de la configuración
    python run_collector.py gdelt --query "UdeA"        # Otra frase de búsqueda
    python run_collector.py guardian --limit 20 --top 3 # Página y ranking más cortos
    python run_collector.py rss --verbose               # Logs de depuración en stderr
    python run_collector.py --list-sources              # Fuentes disponibles
"""

import argparse
import sys
import time
import uuid
from pathlib import Path
from typing import Optional, Sequence, TextIO

# Agregar el directorio raíz al path para imports
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from ethicalcrawler.config_manager import Config, ConfigError, load_config

from config.settings import build_logging_config, validate_config
from config.sources import SOURCES, get_source, validate_sources
from src.collectors import CollectorError, create_collector_by_name
from src.reporting import REPORTERS, print_fatal, print_footer
from src.utils import setup_logging
from src.utils.datetime_utils import format_iso_seconds


def print_sources_list(stream: Optional[TextIO] = None) -> None:
    """Imprime la lista de fuentes disponibles."""
    out = stream if stream is not None else sys.stdout
    print("\nFUENTES DISPONIBLES:", file=out)
    print("-" * 50, file=out)
    for source_id, source in SOURCES.items():
        print(f"  {source_id:<10} {source['name']:<14} {source['description']}", file=out)
        print(
            f"  {'':<10} auth: {source['auth']} | fechas: {source['time_format']}",
            file=out,
        )


def _top_for(config: Config, source_id: str, override: Optional[int]) -> int:
    if override is not None:
        return override
    return getattr(config, source_id).top_n


def run_source(
    source_id: str,
    config: Config,
    *,
    phrase: Optional[str] = None,
    limit: Optional[int] = None,
    top: Optional[int] = None,
    logger_factory=None,
    stream: Optional[TextIO] = None,
) -> int:
    """
    Ejecuta la consulta de una fuente e imprime su reporte.

    Returns:
        Código de salida: 0 si todo salió bien, 1 si hubo un error fatal o
        algún feed RSS no se pudo leer
    """
    out = stream if stream is not None else sys.stdout
    logger_factory = logger_factory or setup_logging()
    run_logger = logger_factory.create_module_logger("cli.run")
    session_id = uuid.uuid4().hex[:12]
    run_start = time.perf_counter()

    run_logger.info(
        {
            "event": "cli.collection.start",
            "session_id": session_id,
            "source_id": source_id,
            "latency": 0.0,
            "details": {"phrase": phrase, "limit": limit, "top": top},
        }
    )

    exit_code = 0
    try:
        validate_config(config)
        validate_sources()
        source = get_source(source_id)
        collector = create_collector_by_name(
            source_id,
            config=config,
            logger_factory=logger_factory,
            session_id=session_id,
        )
        with collector:
            if source["kind"] == "feed":
                collection = collector.collect(limit=limit)
                REPORTERS["rss"](
                    collection,
                    top=_top_for(config, "rss", top),
                    sample_size=config.rss.sample_size,
                    description_chars=config.collection.description_max_chars,
                    stream=out,
                )
                exit_code = 0 if collection.ok else 1
            else:
                phrase = phrase or config.query.phrase
                time_range = collector.default_time_range()
                print(f"Consultando {collector.provider_name}...", file=out)
                print(f"Query: {collector.build_query(phrase)}", file=out)
                print(
                    f"Rango: {format_iso_seconds(time_range.start)} a "
                    f"{format_iso_seconds(time_range.end)}",
                    file=out,
                )
                payload = collector.collect(phrase, time_range=time_range, limit=limit)
                REPORTERS[source_id](
                    payload,
                    top=_top_for(config, source_id, top),
                    sample_size=config.collection.sample_size,
                    stream=out,
                )
    except (CollectorError, ConfigError, ValueError) as exc:
        print_fatal(exc, out)
        run_logger.error(
            {
                "event": "cli.collection.error",
                "session_id": session_id,
                "source_id": source_id,
                "latency": time.perf_counter() - run_start,
                "details": {"error": str(exc), "error_type": type(exc).__name__},
            }
        )
        return 1

    print_footer(out)
    run_logger.info(
        {
            "event": "cli.collection.completed",
            "session_id": session_id,
            "source_id": source_id,
            "latency": time.perf_counter() - run_start,
            "details": {"exit_code": exit_code},
        }
    )
    return exit_code


def _non_negative(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError("debe ser un entero >= 0")
    return number


def _positive(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError("debe ser un entero > 0")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="EthicalCrawler - exploración de noticias por API y RSS",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Ejemplos de uso:
  python run_collector.py newsapi                    # Consulta con la configuración
  python run_collector.py x --query "UdeA"           # Otra frase de búsqueda
  python run_collector.py gdelt --top 5              # Rankings más cortos
  python run_collector.py --list-sources             # Ver fuentes disponibles
        """,
    )

    parser.add_argument(
        "source",
        nargs="?",
        choices=sorted(SOURCES),
        help="Fuente a consultar",
    )
    parser.add_argument("--query", help="Frase de búsqueda (reemplaza query.phrase)")
    parser.add_argument(
        "--limit",
        type=_positive,
        help="Resultados pedidos a la API, o ítems leídos por feed en RSS",
    )
    parser.add_argument(
        "--top",
        type=_non_negative,
        help="Tamaño de los rankings (por defecto el de cada fuente)",
    )
    parser.add_argument("--config", type=Path, help="Archivo TOML de configuración")
    parser.add_argument(
        "--list-sources",
        action="store_true",
        help="Mostrar lista de fuentes disponibles y salir",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Modo detallado (logs de depuración en stderr)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Función principal del script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_sources:
        print_sources_list()
        return 0

    if not args.source:
        parser.error("indique una fuente o use --list-sources")

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print_fatal(exc)
        return 1

    logging_config = build_logging_config(config)
    if args.verbose:
        logging_config["level"] = "DEBUG"
    logger_factory = setup_logging(logging_config)

    return run_source(
        args.source,
        config,
        phrase=args.query,
        limit=args.limit,
        top=args.top,
        logger_factory=logger_factory,
    )


if __name__ == "__main__":
    sys.exit(main())
