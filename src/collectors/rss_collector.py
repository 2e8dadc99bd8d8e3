# src/collectors/rss_collector.py
# Colector RSS
# ============

"""
Lector de una lista fija de feeds RSS y Atom.

A diferencia de los colectores de API, aquí un feed caído no detiene la
ejecución: se registra, se reporta como fallo y se sigue con el siguiente.
Cada feed individual, eso sí, se trata igual que una API: un error de red,
un código HTTP fuera de 2xx o un XML ilegible descartan ese feed completo.
"""

import time
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import feedparser

from ethicalcrawler.config_manager import Config

from src.contracts import FeedChannel, FeedCollection, FeedFailure, FeedItem
from src.utils.text_cleaner import clean_html, normalize_text

from .base_collector import BaseCollector
from .errors import CollectorError, PayloadDecodeError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from src.utils.logger import CrawlerLogger


class RSSCollector(BaseCollector):
    """
    Colector especializado en feeds RSS y Atom.

    Hereda de BaseCollector la sesión HTTP y el manejo de errores fatales;
    el parseo del XML queda en manos de feedparser.
    """

    source_id = "rss"
    provider_name = "RSS"

    def __init__(
        self,
        config: Optional[Config] = None,
        logger_factory: Optional["CrawlerLogger"] = None,
        *,
        session_id: Optional[str] = None,
    ) -> None:
        super().__init__(config, logger_factory, session_id=session_id)

        # Estadísticas de la sesión actual
        self.session_stats = {
            "feeds_checked": 0,
            "feeds_failed": 0,
            "items_found": 0,
        }

    def _create_session(self):
        session = super()._create_session()
        session.headers.update(
            {
                "Accept": "application/rss+xml, application/atom+xml, application/xml, text/xml",
            }
        )
        return session

    @property
    def timeout(self) -> float:
        return (
            self.config.rss.timeout_seconds
            or self.config.collection.request_timeout_seconds
        )

    def collect(
        self,
        feeds: Optional[List[str]] = None,
        *,
        limit: Optional[int] = None,
    ) -> FeedCollection:
        """
        Lee cada feed en orden y acumula canales y fallos.

        Args:
            feeds: URLs a leer; por defecto ``rss.feeds``
            limit: Máximo de ítems conservados por feed

        Returns:
            FeedCollection con los canales leídos y los feeds que fallaron
        """
        if limit is not None and limit <= 0:
            raise ValueError(f"limit debe ser positivo, recibido {limit}")

        start_time = time.time()
        feeds = list(feeds or self.config.rss.feeds)
        channels: List[FeedChannel] = []
        failures: List[FeedFailure] = []

        for url in feeds:
            self.session_stats["feeds_checked"] += 1
            try:
                channel = self.collect_feed(url, limit=limit)
            except CollectorError as exc:
                self.session_stats["feeds_failed"] += 1
                failures.append(FeedFailure(url=url, error=str(exc)))
                self._emit_log(
                    "warning",
                    "collector.feed.failed",
                    source_id=url,
                    details={"error": str(exc)},
                )
                continue

            channels.append(channel)
            self.session_stats["items_found"] += len(channel.items)

        self.stats["processing_time_seconds"] = time.time() - start_time
        self._emit_log(
            "info",
            "collector.collect.completed",
            latency=self.stats["processing_time_seconds"],
            details={
                "feeds": len(feeds),
                "failed": len(failures),
                "items": self.session_stats["items_found"],
            },
        )
        return FeedCollection(channels=channels, failures=failures)

    def collect_feed(self, url: str, *, limit: Optional[int] = None) -> FeedChannel:
        """
        Descarga y parsea un único feed.

        Raises:
            CollectorError: El feed no se pudo descargar o no es XML válido
        """
        response = self._fetch(url, timeout=self.timeout, source_id=url)
        parsed_feed = feedparser.parse(response.content)

        if parsed_feed.bozo and not self._is_acceptable_bozo(parsed_feed):
            self.stats["errors"] += 1
            self._emit_log(
                "warning",
                "collector.feed.malformed",
                source_id=url,
                details={"error": str(parsed_feed.bozo_exception)},
            )
            raise PayloadDecodeError(
                f"feed malformado: {parsed_feed.bozo_exception}",
                self._preview(response.text or ""),
                source_id=url,
            )

        entries = parsed_feed.entries
        if limit is not None:
            entries = entries[:limit]
        items = [self._extract_item(entry) for entry in entries]
        self.stats["records_found"] += len(items)

        if not items:
            self._emit_log(
                "info",
                "collector.feed.empty",
                source_id=url,
            )

        feed_info = parsed_feed.feed
        return FeedChannel(
            url=url,
            title=normalize_text(feed_info.get("title", "")),
            description=clean_html(
                feed_info.get("subtitle") or feed_info.get("description") or ""
            ),
            items=items,
        )

    def _is_acceptable_bozo(self, parsed_feed) -> bool:
        """
        Determina si un feed "bozo" (malformado) es aceptable para procesar.

        feedparser marca muchos feeds como "bozo" por pequeñas imperfecciones
        que no impiden extraer información útil, como una codificación
        declarada distinta de la real.
        """
        if not parsed_feed.bozo:
            return True

        # Excepciones que podemos tolerar
        acceptable_exceptions = [
            "CharacterEncodingOverride",
            "NonXMLContentType",
            "UndeclaredNamespace",
        ]

        exception_name = parsed_feed.bozo_exception.__class__.__name__
        return exception_name in acceptable_exceptions

    def _extract_item(self, entry) -> FeedItem:
        """Reduce una entrada de feedparser a los campos del reporte."""
        return FeedItem(
            title=normalize_text(entry.get("title", "")),
            link=entry.get("link", ""),
            published=entry.get("published") or entry.get("updated") or "",
            description=clean_html(
                entry.get("summary") or entry.get("description") or ""
            ),
            categories=self._extract_categories(entry),
            author=normalize_text(entry.get("author", "")) or None,
            image=self._extract_image(entry),
            enclosure=self._extract_enclosure(entry),
        )

    def _extract_categories(self, entry) -> List[str]:
        categories = []
        for tag in entry.get("tags") or []:
            term = normalize_text(tag.get("term") or "")
            if term:
                categories.append(term)
        return categories

    def _extract_image(self, entry) -> Optional[str]:
        """
        Busca la imagen del ítem.

        Orden: ``<image>`` propio, ``media:thumbnail`` y por último un
        ``media:content`` de tipo imagen.
        """
        image = entry.get("image")
        if isinstance(image, dict) and image.get("href"):
            return image["href"]

        for thumbnail in entry.get("media_thumbnail") or []:
            if thumbnail.get("url"):
                return thumbnail["url"]

        for media in entry.get("media_content") or []:
            medium = media.get("medium") or ""
            mime = media.get("type") or ""
            if media.get("url") and (medium == "image" or mime.startswith("image/")):
                return media["url"]

        return None

    def _extract_enclosure(self, entry) -> Optional[str]:
        for enclosure in entry.get("enclosures") or []:
            href = enclosure.get("href") or enclosure.get("url")
            if href:
                return href
        return None

    def get_session_stats(self) -> Dict[str, Any]:
        """
        Obtiene estadísticas de la sesión actual de recolección.
        """
        return self.session_stats.copy()
