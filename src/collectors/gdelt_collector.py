# src/collectors/gdelt_collector.py
# Colector para GDELT DOC 2.0
# ===========================

"""
Consulta el modo ``artlist`` de la API DOC 2.0 de GDELT.

GDELT no requiere clave; basta con un User-Agent identificable. El filtro de
idiomas se arma dentro de la propia consulta con ``sourceLang:`` y las fechas
van en formato compacto ``YYYYMMDDHHMMSS``.

GDELT no tiene estado embebido: cuando la consulta es inválida responde 200
con un mensaje de texto plano, que aquí termina como ``PayloadDecodeError``.
"""

from typing import Any, Dict

from src.contracts import GdeltResponse
from src.utils.datetime_utils import TimeRange, format_compact

from .base_collector import APICollector


class GdeltCollector(APICollector[GdeltResponse]):
    """Lista de artículos de GDELT filtrada por idioma de la fuente."""

    source_id = "gdelt"
    provider_name = "GDELT"
    response_model = GdeltResponse

    @property
    def endpoint(self) -> str:
        return self.config.gdelt.base_url

    @property
    def timeout(self) -> float:
        return self.config.gdelt.timeout_seconds or super().timeout

    def build_query(self, phrase: str) -> str:
        languages = " OR ".join(
            f"sourceLang:{language}" for language in self.config.gdelt.languages
        )
        return f"({phrase}) AND ({languages})"

    def default_time_range(self) -> TimeRange:
        return TimeRange(start=self.config.gdelt.start, end=self.config.gdelt.end)

    def default_limit(self) -> int:
        return self.config.gdelt.max_records

    def build_params(
        self, phrase: str, time_range: TimeRange, limit: int
    ) -> Dict[str, Any]:
        return {
            "query": self.build_query(phrase),
            "mode": "artlist",
            "maxrecords": str(limit),
            "format": "json",
            "startdatetime": format_compact(time_range.start),
            "enddatetime": format_compact(time_range.end),
        }

    def count_records(self, payload: GdeltResponse) -> int:
        return len(payload.articles)
