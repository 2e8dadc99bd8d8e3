# config/sources.py
# Catálogo de fuentes consultadas por el crawler
# ==============================================

"""
Este archivo describe las fuentes que el crawler sabe consultar. Cada entrada
documenta cómo se autentica la fuente, en qué formato espera el rango de
fechas y qué campos categóricos se resumen en el reporte.

Los parámetros de consulta (frase, fechas, límites, credenciales) no viven
aquí sino en la configuración (config.toml, .env o variables de entorno).
"""

SOURCES = {
    "newsapi": {
        "name": "NewsAPI",
        "kind": "api",
        "auth": "X-Api-Key header",
        "time_format": "YYYY-MM-DDTHH:MM:SS",
        "ranked_fields": ["source.name"],
        "description": "Agregador de noticias (endpoint /v2/everything)",
    },
    "guardian": {
        "name": "The Guardian",
        "kind": "api",
        "auth": "api-key query param",
        "time_format": "YYYY-MM-DD",
        "ranked_fields": ["sectionName"],
        "description": "Archivo histórico del periódico The Guardian",
    },
    "gdelt": {
        "name": "GDELT",
        "kind": "api",
        "auth": "User-Agent",
        "time_format": "YYYYMMDDHHMMSS",
        "ranked_fields": ["domain", "language", "sourcecountry"],
        "description": "Índice global de eventos y noticias (DOC 2.0 artlist)",
    },
    "x": {
        "name": "X (Twitter)",
        "kind": "api",
        "auth": "Authorization: Bearer",
        "time_format": "YYYY-MM-DDTHH:MM:SSZ",
        "ranked_fields": ["created_at (día)"],
        "description": "Búsqueda reciente de tweets (últimos 7 días)",
    },
    "rss": {
        "name": "RSS",
        "kind": "feed",
        "auth": "none",
        "time_format": "feed-native",
        "ranked_fields": ["categories"],
        "description": "Lector de una lista fija de feeds RSS/Atom",
    },
}


def get_source(source_id):
    """Devuelve la ficha de una fuente o lanza ValueError si no existe."""
    try:
        return SOURCES[source_id]
    except KeyError:
        raise ValueError(f"Fuente no disponible: {source_id}") from None


def validate_sources():
    """Verifica que todas las fichas tengan los campos requeridos."""
    required_fields = ["name", "kind", "auth", "time_format", "ranked_fields"]

    for source_id, source_config in SOURCES.items():
        for field in required_fields:
            if field not in source_config:
                raise ValueError(f"Fuente {source_id} le falta el campo {field}")
        if source_config["kind"] not in ("api", "feed"):
            raise ValueError(f"Tipo de fuente inválido para {source_id}")
