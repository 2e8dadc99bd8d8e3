# src/reporting/explorer.py
# Reportes de exploración en consola
# ==================================

"""
Reportes de exploración de datos que se imprimen al terminar cada consulta.

Cada fuente tiene su propio reporte porque sus campos difieren, pero todos
siguen el mismo esquema: encabezado, totales, uno o más rankings top-N y una
muestra de los primeros registros. Todas las funciones escriben en
``stream`` (stdout por defecto) y no tienen otros efectos.
"""

import sys
from typing import Iterable, Optional, TextIO

from src.analysis import RankedEntry, top_n
from src.contracts import (
    FeedCollection,
    GdeltResponse,
    GuardianResponse,
    NewsAPIResponse,
    XResponse,
)
from src.utils.datetime_utils import DATE_ONLY_FORMAT, format_date_only, format_display
from src.utils.text_cleaner import truncate

MISSING_LABEL = "(sin dato)"
NO_ARTICLES = "No se encontraron artículos que coincidan con la búsqueda."


def _out(stream: Optional[TextIO]) -> TextIO:
    return stream if stream is not None else sys.stdout


def _label(value: Optional[str]) -> str:
    return value if value else MISSING_LABEL


def print_header(title: str, stream: Optional[TextIO] = None) -> None:
    print(f"\n--- {title} ---", file=_out(stream))


def print_ranking(
    heading: str,
    entries: Iterable[RankedEntry],
    *,
    width: int = 30,
    unit: str = "artículos",
    stream: Optional[TextIO] = None,
) -> None:
    """Imprime un ranking numerado con el formato ``NN. valor (conteo unidad)``."""
    out = _out(stream)
    print(heading, file=out)
    for position, entry in enumerate(entries, start=1):
        print(
            f"  {position:2d}. {_label(entry.value):<{width}} ({entry.count} {unit})",
            file=out,
        )


def print_footer(stream: Optional[TextIO] = None) -> None:
    print("\nExploración completada.", file=_out(stream))


def print_fatal(error: BaseException, stream: Optional[TextIO] = None) -> None:
    """Reporte de un error que aborta la ejecución."""
    out = _out(stream)
    print("\n--- [ERROR FATAL] ---", file=out)
    print(f"Error: {error}", file=out)


def report_newsapi(
    payload: NewsAPIResponse,
    *,
    top: int = 10,
    sample_size: int = 5,
    stream: Optional[TextIO] = None,
) -> None:
    out = _out(stream)
    articles = payload.articles
    if not articles:
        print_header("EXPLORACIÓN DE DATOS", out)
        print(NO_ARTICLES, file=out)
        return

    print_header("EXPLORACIÓN DE DATOS - NEWSAPI", out)
    print(f"Total de artículos encontrados: {payload.total_results}\n", file=out)
    print(f"Artículos recuperados (página): {len(articles)}\n", file=out)

    print_ranking(
        f"Top {top} Fuentes:",
        top_n(articles, lambda article: article.source.name, top),
        stream=out,
    )

    print(f"\nPrimeros {sample_size} Artículos de Muestra:", file=out)
    for position, article in enumerate(articles[:sample_size], start=1):
        print(f"\n  {position}. Título: {article.title or ''}", file=out)
        print(
            f"      Fuente: {_label(article.source.name)} | "
            f"Autor: {_label(article.author)}",
            file=out,
        )
        print(f"      Publicado: {format_display(article.published_at)}", file=out)
        print(f"      URL: {article.url or ''}", file=out)


def report_guardian(
    payload: GuardianResponse,
    *,
    top: int = 5,
    sample_size: int = 5,
    stream: Optional[TextIO] = None,
) -> None:
    out = _out(stream)
    result = payload.response
    if not result.results:
        print_header("EXPLORACIÓN DE DATOS", out)
        print(
            f"No se encontraron artículos. Total de resultados reportados: {result.total}",
            file=out,
        )
        return

    print_header("EXPLORACIÓN DE DATOS - THE GUARDIAN", out)
    print(f"Total de artículos encontrados (en el archivo): {result.total}", file=out)
    print(f"Artículos recuperados (página): {len(result.results)}\n", file=out)

    print_ranking(
        f"Top {top} Secciones:",
        top_n(result.results, lambda article: article.section_name, top),
        width=20,
        stream=out,
    )

    print(f"\nPrimeros {sample_size} Artículos de Muestra:", file=out)
    for position, article in enumerate(result.results[:sample_size], start=1):
        print(f"\n  {position}. Título: {article.web_title or ''}", file=out)
        print(f"      Sección: {_label(article.section_name)}", file=out)
        print(
            f"      Publicado: {format_display(article.web_publication_date, DATE_ONLY_FORMAT)}",
            file=out,
        )
        print(f"      URL: {article.web_url or ''}", file=out)


def report_gdelt(
    payload: GdeltResponse,
    *,
    top: int = 10,
    sample_size: int = 5,
    stream: Optional[TextIO] = None,
) -> None:
    out = _out(stream)
    articles = payload.articles
    if not articles:
        print_header("EXPLORACIÓN DE DATOS", out)
        print(
            "No se encontraron artículos que coincidan con la búsqueda y los filtros.",
            file=out,
        )
        return

    print_header("EXPLORACIÓN DE DATOS - GDELT", out)
    print(f"Total de artículos: {len(articles)}\n", file=out)

    print_ranking(
        f"Top {top} Dominios:",
        top_n(articles, lambda article: article.domain, top),
        stream=out,
    )

    # La distribución por idioma se muestra completa
    print("\nDistribución por Idioma:", file=out)
    languages = top_n(articles, lambda article: article.language, len(articles))
    for entry in languages:
        print(f"  {_label(entry.value)}: {entry.count}", file=out)

    print("", file=out)
    print_ranking(
        f"Top {top} Países:",
        top_n(articles, lambda article: article.source_country, top),
        stream=out,
    )

    print(f"\nPrimeros {sample_size} Artículos de Muestra:", file=out)
    for position, article in enumerate(articles[:sample_size], start=1):
        print(f"\n  {position}. Título: {article.title or ''}", file=out)
        print(
            f"      Dominio: {_label(article.domain)} | "
            f"Idioma: {_label(article.language)} | "
            f"País: {_label(article.source_country)}",
            file=out,
        )
        print(f"      Fecha: {article.seen_date or ''}", file=out)
        print(f"      URL: {article.url or ''}", file=out)


def report_x(
    payload: XResponse,
    *,
    top: int = 7,
    sample_size: int = 5,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Reporte de la búsqueda reciente de X.

    La distribución por día se imprime completa, como la de idiomas en
    GDELT; ``top`` se acepta por uniformidad con los demás reportes.
    """
    out = _out(stream)
    tweets = payload.tweets
    if not tweets:
        print_header("EXPLORACIÓN DE DATOS X", out)
        print("No se encontraron tweets que coincidan con la búsqueda.", file=out)
        return

    print_header("EXPLORACIÓN DE DATOS - X (Últimos 7 Días)", out)
    print(f"Total de tweets encontrados: {payload.meta.result_count}", file=out)
    print(f"Tweets recuperados: {len(tweets)}\n", file=out)

    print_ranking(
        "Tweets por Día:",
        top_n(
            tweets,
            lambda tweet: format_date_only(tweet.created_at) if tweet.created_at else None,
            len(tweets),
        ),
        width=12,
        unit="tweets",
        stream=out,
    )

    print(f"\nPrimeros {sample_size} Tweets de Muestra:", file=out)
    for position, tweet in enumerate(tweets[:sample_size], start=1):
        metrics = tweet.public_metrics
        print(f"\n  {position}. ID: {tweet.id}", file=out)
        print(f"      Fecha: {format_display(tweet.created_at)}", file=out)
        print(f"      Compartidos/Retweets: {metrics.retweet_count}", file=out)
        print(
            f"      Likes: {metrics.like_count} | Respuestas: {metrics.reply_count}",
            file=out,
        )
        print(f"      Texto: {tweet.text}", file=out)


def report_rss(
    collection: FeedCollection,
    *,
    top: int = 10,
    sample_size: int = 3,
    description_chars: int = 120,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Reporte del lector RSS.

    Imprime cada canal con sus primeros ítems, luego los feeds que fallaron
    y un ranking de categorías sobre todos los ítems leídos.
    """
    out = _out(stream)
    separator = "=" * 47

    for channel in collection.channels:
        print(separator, file=out)
        print(f"FEED: {channel.url}", file=out)
        print(separator, file=out)
        print(f"Título del canal: {channel.title}", file=out)
        print(f"Descripción: {channel.description}", file=out)
        print(f"Primeros {sample_size} artículos:", file=out)

        for item in channel.items[:sample_size]:
            print("---------------", file=out)
            print(f"Title: {item.title}", file=out)
            print(f"Link: {item.link}", file=out)
            print(f"Published: {item.published}", file=out)
            print(
                f"Description: {truncate(item.description, description_chars)}",
                file=out,
            )
            if item.categories:
                print(f"Categories: {', '.join(item.categories)}", file=out)
            if item.author:
                print(f"Author: {item.author}", file=out)
            if item.image:
                print(f"Image: {item.image}", file=out)
            if item.enclosure:
                print(f"Enclosure: {item.enclosure}", file=out)

    if collection.failures:
        print_header("FEEDS CON ERROR", out)
        for failure in collection.failures:
            print(f"  {failure.url}: {failure.error}", file=out)

    categories = [
        category for item in collection.items for category in item.categories
    ]
    print_header("EXPLORACIÓN DE DATOS - RSS", out)
    print(
        f"Feeds leídos: {len(collection.channels)} | "
        f"Feeds con error: {len(collection.failures)} | "
        f"Ítems: {len(collection.items)}\n",
        file=out,
    )
    if categories:
        print_ranking(
            f"Top {top} Categorías:",
            top_n(categories, lambda category: category, top),
            unit="ítems",
            stream=out,
        )
    else:
        print("Los ítems leídos no declaran categorías.", file=out)


REPORTERS = {
    "newsapi": report_newsapi,
    "guardian": report_guardian,
    "gdelt": report_gdelt,
    "x": report_x,
    "rss": report_rss,
}
