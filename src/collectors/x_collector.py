# src/collectors/x_collector.py
# Colector para la búsqueda reciente de X (Twitter)
# ================================================

"""
Consulta ``/2/tweets/search/recent`` de la API v2 de X.

La búsqueda reciente solo cubre los últimos siete días y rechaza un
``end_time`` igual al instante actual, por eso la ventana termina unos
minutos antes de ahora. Se piden ``created_at`` y ``public_metrics`` para
poder mostrar fecha, retweets, likes y respuestas.
"""

from datetime import timedelta
from typing import Any, Dict, Optional

from src.contracts import XResponse
from src.utils.datetime_utils import TimeRange, format_iso_utc, trailing_window

from .base_collector import APICollector
from .errors import APIStatusError


class XCollector(APICollector[XResponse]):
    """Búsqueda de tweets autenticada con un bearer token de aplicación."""

    source_id = "x"
    provider_name = "X API"
    response_model = XResponse
    credential_env = "X_BEARER_TOKEN"

    @property
    def endpoint(self) -> str:
        return self.config.x.base_url

    @property
    def timeout(self) -> float:
        return self.config.x.timeout_seconds or super().timeout

    def configured_credential(self) -> Optional[str]:
        return self.config.x.bearer_token

    def auth_headers(self, credential: Optional[str]) -> Dict[str, str]:
        return {"Authorization": f"Bearer {credential}"} if credential else {}

    def build_query(self, phrase: str) -> str:
        suffix = self.config.x.query_suffix
        return f"({phrase}) {suffix}" if suffix else f"({phrase})"

    def default_time_range(self) -> TimeRange:
        return trailing_window(
            self.config.x.lookback_days,
            now=self.clock(),
            end_offset=timedelta(minutes=self.config.x.end_offset_minutes),
        )

    def default_limit(self) -> int:
        return self.config.x.max_results

    def build_params(
        self, phrase: str, time_range: TimeRange, limit: int
    ) -> Dict[str, Any]:
        return {
            "query": self.build_query(phrase),
            "tweet.fields": "created_at,public_metrics",
            "max_results": str(limit),
            "start_time": format_iso_utc(time_range.start),
            "end_time": format_iso_utc(time_range.end),
        }

    def check_payload(self, payload: XResponse) -> None:
        # Con errores parciales X devuelve igualmente "data"; solo es fatal
        # cuando no hay ningún tweet que acompañe a los errores.
        if payload.data is not None or not payload.errors:
            return
        problem = payload.errors[0]
        status = problem.title or "error"
        detail = problem.detail or ""
        self._api_status_failure(status, detail)
        raise APIStatusError(self.provider_name, status, detail, source_id=self.source_id)

    def count_records(self, payload: XResponse) -> int:
        return len(payload.tweets)
