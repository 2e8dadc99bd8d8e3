"""Frequency table and top-N ranking behaviour."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from src.analysis import RankedEntry, frequency_table, top_n


def _records(*sources):
    return [{"src": source} for source in sources]


def test_top_n_orders_by_count() -> None:
    records = _records("A", "B", "A", "C", "A", "B")
    assert top_n(records, lambda record: record["src"], 2) == [("A", 3), ("B", 2)]


def test_top_n_returns_ranked_entries() -> None:
    result = top_n(_records("A", "B", "A"), lambda record: record["src"], 5)
    assert result == [RankedEntry("A", 2), RankedEntry("B", 1)]
    assert result[0].value == "A"
    assert result[0].count == 2


def test_ties_are_broken_alphabetically() -> None:
    records = _records("zeta", "alfa", "mu", "alfa", "zeta", "mu")
    assert top_n(records, lambda record: record["src"], 3) == [
        ("alfa", 2),
        ("mu", 2),
        ("zeta", 2),
    ]


def test_n_larger_than_distinct_values_returns_all() -> None:
    records = _records("A", "B")
    assert len(top_n(records, lambda record: record["src"], 50)) == 2


def test_empty_input_and_zero_n() -> None:
    assert top_n([], lambda record: record["src"], 10) == []
    assert top_n(_records("A"), lambda record: record["src"], 0) == []


def test_negative_n_is_rejected() -> None:
    with pytest.raises(ValueError):
        top_n(_records("A"), lambda record: record["src"], -1)


def test_missing_values_counted_under_empty_key() -> None:
    records = [
        SimpleNamespace(domain="a.com"),
        SimpleNamespace(domain=None),
        SimpleNamespace(domain=""),
        SimpleNamespace(domain="a.com"),
    ]
    table = frequency_table(records, lambda record: record.domain)
    assert table == {"a.com": 2, "": 2}
    assert sum(table.values()) == len(records)


def test_accepts_generators() -> None:
    records = (source for source in ["x", "y", "x"])
    assert top_n(records, lambda value: value, 1) == [("x", 2)]
