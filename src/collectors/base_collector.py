# src/collectors/base_collector.py
# Clase base para todos los colectores del sistema
# ===============================================

"""
Esta clase base reúne la plomería que comparten todos los colectores: una
sesión HTTP con un User-Agent identificable, logs estructurados con campos de
correlación, y la regla de oro de errores del crawler: cualquier fallo de
transporte, de código HTTP o de formato es fatal para la ejecución.

``APICollector`` agrega el flujo de una consulta única a una API JSON
(construir parámetros, un GET bloqueante, decodificar, verificar el estado
embebido). Cada API define sus propios parámetros y su propio contrato; no
hay un formato de consulta común entre ellas.
"""

import time
from abc import ABC, abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Dict, Generic, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from ethicalcrawler.config_manager import Config, ConfigError

from config.secret_manager import secret_loader
from src.utils.datetime_utils import TimeRange, utc_now
from src.utils.logger import get_logger
from src.utils.text_cleaner import truncate

from .errors import HTTPStatusError, PayloadDecodeError, TransportError

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from src.utils.logger import CrawlerLogger

PayloadT = TypeVar("PayloadT", bound=BaseModel)

_SECRET_PARAMS = {"api-key", "apiKey", "api_key"}


def _default_config() -> Config:
    from config.settings import get_config

    return get_config()


class BaseCollector(ABC):
    """
    Clase base abstracta para todos los colectores del sistema.

    Define cómo se habla con la red y cómo se registra lo que pasa; las
    subclases deciden qué pedir y cómo interpretar la respuesta.
    """

    source_id: str = ""
    provider_name: str = ""

    def __init__(
        self,
        config: Optional[Config] = None,
        logger_factory: Optional["CrawlerLogger"] = None,
        *,
        session_id: Optional[str] = None,
    ) -> None:
        """Inicialización común para todos los colectores."""

        self.config: Config = config or _default_config()
        self.collector_type = self.__class__.__name__
        self.stats = {
            "requests_made": 0,
            "records_found": 0,
            "errors": 0,
            "processing_time_seconds": 0.0,
        }

        self.logger_factory: "CrawlerLogger" = logger_factory or get_logger()
        self.module_logger = self.logger_factory.create_module_logger(
            f"collectors.{self.collector_type.lower()}"
        )
        self._session_id = session_id
        self.session = self._create_session()

        self._emit_log(
            "debug",
            "collector.instance.initialized",
            details={"collector_type": self.collector_type},
        )

    @abstractmethod
    def collect(self, *args: Any, **kwargs: Any) -> Any:
        """Ejecuta la consulta completa y devuelve el resultado decodificado."""

    def _create_session(self) -> requests.Session:
        """
        Crea la sesión HTTP usada por el colector.

        Los headers nos identifican como un bot de investigación; la
        autenticación se agrega por request porque cambia entre fuentes.
        """
        session = requests.Session()
        session.headers.update(
            {
                "User-Agent": self.config.collection.user_agent,
                "Accept-Language": "es,en;q=0.9",
            }
        )
        return session

    def close(self) -> None:
        """Libera la conexión subyacente."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def set_logger_factory(self, logger_factory: "CrawlerLogger") -> None:
        """Actualiza la fábrica de loggers reutilizando el mismo módulo."""

        self.logger_factory = logger_factory
        self.module_logger = self.logger_factory.create_module_logger(
            f"collectors.{self.collector_type.lower()}"
        )

    # Logging estructurado
    # ====================

    def _build_log_payload(
        self,
        event: str,
        *,
        source_id: Optional[str] = None,
        latency: Optional[float] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Crea un payload consistente para logs estructurados."""

        payload: Dict[str, Any] = {
            "event": event,
            "session_id": self._session_id,
            "source_id": source_id or self.source_id or None,
            "collector_type": self.collector_type,
            "latency": latency,
        }

        if details:
            payload["details"] = details

        return {key: value for key, value in payload.items() if value is not None}

    def _emit_log(
        self,
        level: str,
        event: str,
        *,
        source_id: Optional[str] = None,
        latency: Optional[float] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Emite logs estructurados garantizando campos de correlación."""

        payload = self._build_log_payload(
            event,
            source_id=source_id,
            latency=latency,
            details=details,
        )

        log_method = getattr(self.module_logger, level, None)
        if callable(log_method):
            log_method(payload)
        else:  # pragma: no cover
            self.module_logger.info(payload)

    # Red y decodificación
    # ====================

    def _preview(self, body: str) -> str:
        return truncate(body, self.config.collection.error_preview_chars)

    def _fetch(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        source_id: Optional[str] = None,
    ) -> requests.Response:
        """
        Ejecuta un único GET bloqueante.

        Un error de red se convierte en ``TransportError`` y un código fuera
        de 2xx en ``HTTPStatusError`` antes de intentar leer el cuerpo como
        datos. No hay reintentos.
        """
        timeout = timeout or self.config.collection.request_timeout_seconds
        self.stats["requests_made"] += 1
        start_time = time.time()

        self._emit_log(
            "info",
            "collector.fetch.start",
            source_id=source_id,
            details={"url": url, "params": _redact(params), "timeout": timeout},
        )

        try:
            response = self.session.get(
                url, params=params, headers=headers, timeout=timeout
            )
        except requests.RequestException as exc:
            self.stats["errors"] += 1
            self._emit_log(
                "error",
                "collector.fetch.network_error",
                source_id=source_id,
                latency=time.time() - start_time,
                details={"error": str(exc), "url": url},
            )
            raise TransportError(
                f"error en petición: {exc}", source_id=source_id or self.source_id
            ) from exc

        elapsed = time.time() - start_time
        if not 200 <= response.status_code < 300:
            self.stats["errors"] += 1
            preview = self._preview(response.text or "")
            self._emit_log(
                "error",
                "collector.fetch.http_error",
                source_id=source_id,
                latency=elapsed,
                details={"status_code": response.status_code, "url": url},
            )
            raise HTTPStatusError(
                response.status_code,
                preview,
                source_id=source_id or self.source_id,
            )

        self._emit_log(
            "info",
            "collector.fetch.completed",
            source_id=source_id,
            latency=elapsed,
            details={
                "status_code": response.status_code,
                "bytes": len(response.content or b""),
            },
        )
        return response

    def _decode(self, model: Type[PayloadT], body: str) -> PayloadT:
        """
        Decodifica ``body`` con el contrato ``model``.

        Un JSON malformado o con una forma distinta descarta la respuesta
        completa: nunca se devuelven registros parciales.
        """
        try:
            return model.model_validate_json(body)
        except ValidationError as exc:
            self.stats["errors"] += 1
            reason = _summarize_validation_error(exc)
            self._emit_log(
                "error",
                "collector.payload.decode_failed",
                details={"error": reason, "model": model.__name__},
            )
            raise PayloadDecodeError(
                reason, self._preview(body), source_id=self.source_id
            ) from exc

    def get_stats(self) -> Dict[str, Any]:
        """
        Obtiene las estadísticas actuales del colector.
        """
        return self.stats.copy()


class APICollector(BaseCollector, Generic[PayloadT]):
    """
    Flujo de una consulta a una API JSON.

    Usando el patrón Template Method, ``collect`` fija el orden de los pasos
    y cada subclase completa los específicos de su proveedor:
    ``build_params``, ``default_time_range``, ``default_limit``,
    ``auth_headers`` o ``auth_params``, y ``check_payload``.
    """

    response_model: Type[PayloadT]
    credential_env: Optional[str] = None

    def __init__(
        self,
        config: Optional[Config] = None,
        logger_factory: Optional["CrawlerLogger"] = None,
        *,
        session_id: Optional[str] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        super().__init__(config, logger_factory, session_id=session_id)
        self.clock = clock

    @property
    @abstractmethod
    def endpoint(self) -> str:
        """URL base del endpoint de búsqueda."""

    @property
    def timeout(self) -> float:
        return self.config.collection.request_timeout_seconds

    @abstractmethod
    def build_query(self, phrase: str) -> str:
        """Adapta la frase de búsqueda a la sintaxis del proveedor."""

    @abstractmethod
    def build_params(
        self, phrase: str, time_range: TimeRange, limit: int
    ) -> Dict[str, Any]:
        """Parámetros de la URL para una consulta."""

    @abstractmethod
    def default_time_range(self) -> TimeRange:
        """Rango de fechas usado cuando no se indica otro."""

    @abstractmethod
    def default_limit(self) -> int:
        """Cantidad de resultados pedida cuando no se indica otra."""

    def configured_credential(self) -> Optional[str]:
        """Credencial tal como viene de la configuración."""
        return None

    def auth_headers(self, credential: Optional[str]) -> Dict[str, str]:
        return {}

    def auth_params(self, credential: Optional[str]) -> Dict[str, str]:
        return {}

    def check_payload(self, payload: PayloadT) -> None:
        """Lanza ``APIStatusError`` si el payload reporta un fallo propio."""

    def count_records(self, payload: PayloadT) -> int:
        return 0

    def resolve_credential(self) -> Optional[str]:
        """
        Obtiene la credencial de la configuración o del gestor de secretos.

        Raises:
            ConfigError: La fuente requiere credencial y no hay ninguna
        """
        if self.credential_env is None:
            return None
        credential = secret_loader.resolve(
            self.configured_credential(), self.credential_env
        )
        if not credential:
            raise ConfigError(
                f"Falta la credencial de {self.provider_name}: defina "
                f"{self.credential_env} o la clave correspondiente en "
                f"la sección [{self.source_id}] de la configuración"
            )
        return credential

    def collect(
        self,
        phrase: Optional[str] = None,
        *,
        time_range: Optional[TimeRange] = None,
        limit: Optional[int] = None,
    ) -> PayloadT:
        """
        Ejecuta la consulta y devuelve el payload decodificado y verificado.

        Args:
            phrase: Frase de búsqueda; por defecto ``query.phrase``
            time_range: Rango temporal; por defecto el configurado por fuente
            limit: Tamaño de página; por defecto el configurado por fuente

        Raises:
            ConfigError: Falta la credencial de la fuente
            CollectorError: Cualquier fallo de red, HTTP o formato
        """
        start_time = time.time()
        credential = self.resolve_credential()

        phrase = phrase or self.config.query.phrase
        time_range = time_range or self.default_time_range()
        if limit is None:
            limit = self.default_limit()
        if limit <= 0:
            raise ValueError(f"limit debe ser positivo, recibido {limit}")

        params = self.build_params(phrase, time_range, limit)
        params.update(self.auth_params(credential))
        response = self._fetch(
            self.endpoint,
            params=params,
            headers=self.auth_headers(credential) or None,
            timeout=self.timeout,
        )
        payload = self._decode(self.response_model, response.text)
        self.check_payload(payload)

        records = self.count_records(payload)
        self.stats["records_found"] += records
        self.stats["processing_time_seconds"] = time.time() - start_time
        self._emit_log(
            "info",
            "collector.collect.completed",
            latency=self.stats["processing_time_seconds"],
            details={"records": records},
        )
        return payload

    def _api_status_failure(self, status: str, detail: str = "") -> None:
        self.stats["errors"] += 1
        self._emit_log(
            "error",
            "collector.payload.api_status",
            details={"status": status, "detail": detail},
        )


def _redact(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not params:
        return params
    return {
        key: ("***" if key in _SECRET_PARAMS else value)
        for key, value in params.items()
    }


def _summarize_validation_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "<raíz>"
    summary = f"{location}: {first.get('msg', 'valor inválido')}"
    if len(errors) > 1:
        summary += f" (+{len(errors) - 1} errores)"
    return summary
