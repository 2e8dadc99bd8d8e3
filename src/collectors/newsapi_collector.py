# src/collectors/newsapi_collector.py
# Colector para NewsAPI.org
# =========================

"""
Consulta el endpoint ``/v2/everything`` de NewsAPI.

NewsAPI no usa ``sourceLang`` como GDELT sino el parámetro ``language`` con
códigos ISO 639-1 separados por comas, y reporta los errores de uso (clave
inválida, rango de fechas fuera del plan) con ``status != "ok"`` dentro del
cuerpo.
"""

from typing import Any, Dict, Optional

from src.contracts import NewsAPIResponse
from src.utils.datetime_utils import TimeRange, format_iso_seconds, trailing_window

from .base_collector import APICollector
from .errors import APIStatusError


class NewsAPICollector(APICollector[NewsAPIResponse]):
    """Búsqueda de artículos en NewsAPI, autenticada con ``X-Api-Key``."""

    source_id = "newsapi"
    provider_name = "NewsAPI"
    response_model = NewsAPIResponse
    credential_env = "NEWSAPI_API_KEY"

    @property
    def endpoint(self) -> str:
        return self.config.newsapi.base_url

    @property
    def timeout(self) -> float:
        return self.config.newsapi.timeout_seconds or super().timeout

    def configured_credential(self) -> Optional[str]:
        return self.config.newsapi.api_key

    def auth_headers(self, credential: Optional[str]) -> Dict[str, str]:
        return {"X-Api-Key": credential} if credential else {}

    def build_query(self, phrase: str) -> str:
        # NewsAPI acepta comillas y AND/OR tal cual
        return phrase

    def default_time_range(self) -> TimeRange:
        return trailing_window(self.config.newsapi.lookback_days, now=self.clock())

    def default_limit(self) -> int:
        return self.config.newsapi.page_size

    def build_params(
        self, phrase: str, time_range: TimeRange, limit: int
    ) -> Dict[str, Any]:
        return {
            "q": self.build_query(phrase),
            "language": ",".join(self.config.newsapi.languages),
            "sortBy": self.config.newsapi.sort_by,
            "pageSize": str(limit),
            "from": format_iso_seconds(time_range.start),
            "to": format_iso_seconds(time_range.end),
        }

    def check_payload(self, payload: NewsAPIResponse) -> None:
        if payload.status == "ok":
            return
        detail = " - ".join(part for part in (payload.code, payload.message) if part)
        self._api_status_failure(payload.status, detail)
        raise APIStatusError(
            self.provider_name, payload.status, detail, source_id=self.source_id
        )

    def count_records(self, payload: NewsAPIResponse) -> int:
        return len(payload.articles)


__all__ = ["NewsAPICollector"]
