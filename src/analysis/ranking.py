# src/analysis/ranking.py
# Ranking de frecuencias para campos categóricos
# ==============================================

"""
Conteo de valores categóricos (fuente, dominio, idioma, sección...) sobre una
colección de registros y ranking de los N más frecuentes.

Es la única pieza compartida por todos los colectores: cada uno decide qué
campo extraer de sus registros y este módulo se encarga del resto.

Política de valores vacíos: un selector que devuelve ``None`` o ``""`` se
cuenta bajo la clave ``""``, de modo que la suma de conteos siempre coincide
con el número de registros.

Desempate: a igual conteo, los valores se ordenan alfabéticamente.
"""

from __future__ import annotations

from collections import Counter
from typing import Callable, Iterable, List, NamedTuple, Optional, TypeVar

T = TypeVar("T")

FieldSelector = Callable[[T], Optional[str]]


class RankedEntry(NamedTuple):
    """Par (valor, conteo) de un ranking."""

    value: str
    count: int


def frequency_table(records: Iterable[T], field: FieldSelector) -> Counter:
    """
    Construye la tabla de frecuencias recorriendo los registros una vez.

    Args:
        records: Registros en su orden original
        field: Función pura que extrae el valor categórico de un registro

    Returns:
        Counter con un conteo por valor distinto
    """
    table: Counter = Counter()
    for record in records:
        value = field(record)
        table[value if value is not None else ""] += 1
    return table


def rank_table(table: Counter, n: Optional[int] = None) -> List[RankedEntry]:
    """Ordena una tabla por conteo descendente y valor ascendente."""
    if n is not None and n < 0:
        raise ValueError(f"n debe ser >= 0, recibido {n}")
    ordered = sorted(table.items(), key=lambda item: (-item[1], item[0]))
    if n is not None:
        ordered = ordered[:n]
    return [RankedEntry(value, count) for value, count in ordered]


def top_n(records: Iterable[T], field: FieldSelector, n: int) -> List[RankedEntry]:
    """
    Devuelve los ``n`` valores más frecuentes de ``field`` en ``records``.

    Si hay menos de ``n`` valores distintos se devuelven todos, sin relleno.
    Una entrada vacía o ``n == 0`` producen una lista vacía.
    """
    return rank_table(frequency_table(records, field), n)
