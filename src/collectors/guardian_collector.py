# src/collectors/guardian_collector.py
# Colector para The Guardian Open Platform
# ========================================

"""
Consulta el archivo histórico de The Guardian (``/search``).

La API usa ``|`` como OR y no entiende frases entre comillas como NewsAPI,
así que la frase configurada se reescribe antes de enviarla. La clave viaja
como parámetro ``api-key`` y el estado de la respuesta va embebido en
``response.status``.
"""

import re
from datetime import datetime, time, timezone
from typing import Any, Dict, Optional

from src.contracts import GuardianResponse
from src.utils.datetime_utils import TimeRange, format_date_only

from .base_collector import APICollector
from .errors import APIStatusError

_OR_PATTERN = re.compile(r"\s+OR\s+")


class GuardianCollector(APICollector[GuardianResponse]):
    """Búsqueda de artículos (``type=article``) en The Guardian."""

    source_id = "guardian"
    provider_name = "Guardian API"
    response_model = GuardianResponse
    credential_env = "GUARDIAN_API_KEY"

    @property
    def endpoint(self) -> str:
        return self.config.guardian.base_url

    @property
    def timeout(self) -> float:
        return self.config.guardian.timeout_seconds or super().timeout

    def configured_credential(self) -> Optional[str]:
        return self.config.guardian.api_key

    def auth_params(self, credential: Optional[str]) -> Dict[str, str]:
        return {"api-key": credential} if credential else {}

    def build_query(self, phrase: str) -> str:
        query = _OR_PATTERN.sub(" | ", phrase)
        return query.replace('"', "").strip()

    def default_time_range(self) -> TimeRange:
        cfg = self.config.guardian
        return TimeRange(
            start=datetime.combine(cfg.from_date, time.min, tzinfo=timezone.utc),
            end=datetime.combine(cfg.to_date, time.max, tzinfo=timezone.utc),
        )

    def default_limit(self) -> int:
        return self.config.guardian.page_size

    def build_params(
        self, phrase: str, time_range: TimeRange, limit: int
    ) -> Dict[str, Any]:
        return {
            "q": self.build_query(phrase),
            "type": "article",
            "page-size": str(limit),
            "from-date": format_date_only(time_range.start),
            "to-date": format_date_only(time_range.end),
        }

    def check_payload(self, payload: GuardianResponse) -> None:
        status = payload.response.status
        if status == "ok":
            return
        detail = payload.response.message or ""
        self._api_status_failure(status, detail)
        raise APIStatusError(self.provider_name, status, detail, source_id=self.source_id)

    def count_records(self, payload: GuardianResponse) -> int:
        return len(payload.response.results)
