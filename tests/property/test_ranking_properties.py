from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from src.analysis import frequency_table, top_n

VALUES = st.one_of(
    st.none(),
    st.sampled_from(["", "bbc.co.uk", "eltiempo.com", "nytimes.com"]),
    st.text(max_size=6),
)
RECORDS = st.lists(st.fixed_dictionaries({"domain": VALUES}), max_size=60)


def _domain(record):
    return record["domain"]


def _distinct(records) -> int:
    return len({record["domain"] or "" for record in records})


@given(RECORDS)
@settings(max_examples=150)
def test_counts_sum_to_record_count(records) -> None:
    assert sum(frequency_table(records, _domain).values()) == len(records)


@given(RECORDS, st.integers(min_value=0, max_value=80))
@settings(max_examples=150)
def test_counts_are_non_increasing(records, n: int) -> None:
    counts = [entry.count for entry in top_n(records, _domain, n)]
    assert counts == sorted(counts, reverse=True)


@given(RECORDS, st.integers(min_value=0, max_value=80))
@settings(max_examples=150)
def test_length_is_min_of_n_and_distinct_values(records, n: int) -> None:
    assert len(top_n(records, _domain, n)) == min(n, _distinct(records))


@given(st.integers(min_value=0, max_value=1000))
def test_empty_records_give_empty_ranking(n: int) -> None:
    assert top_n([], _domain, n) == []


@given(RECORDS)
def test_zero_n_gives_empty_ranking(records) -> None:
    assert top_n(records, _domain, 0) == []


@given(RECORDS, st.integers(min_value=1, max_value=80))
@settings(max_examples=100)
def test_ranking_is_a_prefix_of_the_full_ranking(records, n: int) -> None:
    full = top_n(records, _domain, _distinct(records))
    assert top_n(records, _domain, n) == full[:n]


@given(RECORDS)
def test_ranking_is_order_independent(records) -> None:
    size = _distinct(records)
    assert top_n(list(reversed(records)), _domain, size) == top_n(records, _domain, size)
