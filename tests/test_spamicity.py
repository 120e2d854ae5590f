"""
Tests for the spamicity calculator and table.

Covers pruning on document frequency, the [0, 1] range, order
independence of training, monotonicity in the spam count, the
degenerate zero-count case, and table serialization.
"""

from __future__ import annotations

import random

import pytest

from bayes_spam.models.spamicity import (
    OCCUR_THRESHOLD_OF_DISCARD_TERM,
    SpamicityCalculator,
    SpamicityTable,
    compute_spamicity,
)
from bayes_spam.models.term_statistics import TermStatisticsStore


def _store(*documents):
    return TermStatisticsStore().record_documents(documents)


def test_scenario_spamicities(scenario_documents):
    table = compute_spamicity(_store(*scenario_documents))

    assert table["viagra"] == 1.0
    assert table["free"] == 1.0
    assert table["meeting"] == 0.0
    assert len(table) == 3


def test_mixed_term_uses_relative_frequencies():
    docs = [(["cash", "cash", "hello"], "spam")] * 6 + [(["hello", "lunch"], "ham")] * 6
    table = compute_spamicity(_store(*docs))

    # spam total 18, ham total 12: hello -> (6/18) / (6/18 + 6/12) = 0.4
    assert table["hello"] == pytest.approx(0.4)
    assert table["cash"] == 1.0
    assert table["lunch"] == 0.0


@pytest.mark.parametrize("doc_count", [1, 3, OCCUR_THRESHOLD_OF_DISCARD_TERM])
def test_terms_at_or_below_threshold_are_pruned(doc_count):
    rare = [(["rare"] * 1000, "spam")] * doc_count
    common = [(["common"], "spam")] * 6 + [(["common"], "ham")] * 6
    table = compute_spamicity(_store(*(rare + common)))

    assert "rare" not in table
    assert "common" in table
    assert table.pruned_count == 1


def test_term_just_above_threshold_is_kept():
    docs = [(["edge"], "spam")] * (OCCUR_THRESHOLD_OF_DISCARD_TERM + 1)
    table = compute_spamicity(_store(*docs))
    assert table["edge"] == 1.0


def test_pruned_terms_still_count_toward_class_totals():
    # "rare" is pruned but its 10 spam occurrences stay in the spam total.
    docs = (
        [(["rare"] * 10, "spam")]
        + [(["shared"], "spam")] * 6
        + [(["shared"], "ham")] * 6
    )
    table = compute_spamicity(_store(*docs))

    spam_freq = 6 / 16
    ham_freq = 6 / 6
    assert table["shared"] == pytest.approx(spam_freq / (spam_freq + ham_freq))


def test_values_lie_in_unit_interval():
    rng = random.Random(7)
    vocabulary = [f"w{i}" for i in range(30)]
    docs = []
    for _ in range(60):
        terms = [rng.choice(vocabulary) for _ in range(rng.randint(1, 15))]
        docs.append((terms, rng.choice(["spam", "ham"])))
    table = compute_spamicity(_store(*docs))

    assert len(table) > 0
    for value in table.values():
        assert 0.0 <= value <= 1.0


def test_training_order_does_not_change_table():
    rng = random.Random(11)
    vocabulary = ["cash", "prize", "hello", "lunch", "report", "click"]
    docs = [
        ([rng.choice(vocabulary) for _ in range(rng.randint(1, 8))], rng.choice(["spam", "ham"]))
        for _ in range(80)
    ]
    reference = compute_spamicity(_store(*docs))

    for seed in range(5):
        shuffled = list(docs)
        random.Random(seed).shuffle(shuffled)
        table = compute_spamicity(_store(*shuffled))
        assert set(table) == set(reference)
        for term, value in reference.items():
            assert table[term] == pytest.approx(value)


def _spamicity_with_spam_count(spam_count: int) -> float:
    store = TermStatisticsStore()
    store.spam_counts.update({"probe": spam_count, "other": 10})
    store.ham_counts.update({"probe": 3, "other": 10})
    store.doc_frequency.update({"probe": 10, "other": 10})
    return compute_spamicity(store)["probe"]


def test_spamicity_is_monotonic_in_spam_count():
    values = [_spamicity_with_spam_count(k) for k in range(1, 40)]
    assert all(a <= b for a, b in zip(values, values[1:]))


def test_term_with_no_counts_is_treated_as_unknown():
    store = _store(*([(["cash"], "spam")] * 6 + [(["lunch"], "ham")] * 6))
    # Injected statistics: frequent but never counted.
    store.spam_counts["ghost"] = 0
    store.doc_frequency["ghost"] = 10

    table = compute_spamicity(store)

    assert "ghost" not in table
    assert table.degenerate_count == 1
    assert "cash" in table and "lunch" in table


def test_missing_class_does_not_divide_by_zero():
    table = compute_spamicity(_store(*([(["only", "spam"], "spam")] * 6)))
    assert table["only"] == 1.0
    assert table["spam"] == 1.0


def test_custom_discard_threshold():
    docs = [(["cash"], "spam")] * 2 + [(["lunch"], "ham")] * 2
    table = SpamicityCalculator(_store(*docs), discard_threshold=1).compute()
    assert table.discard_threshold == 1
    assert set(table) == {"cash", "lunch"}


def test_table_is_read_only_mapping(scenario_documents):
    table = compute_spamicity(_store(*scenario_documents))
    with pytest.raises(TypeError):
        table["viagra"] = 0.5  # type: ignore[index]


def test_table_dict_round_trip_and_validation(scenario_documents):
    table = compute_spamicity(_store(*scenario_documents))
    restored = SpamicityTable.from_dict(table.to_dict())

    assert restored == table
    assert restored.discard_threshold == table.discard_threshold

    with pytest.raises(ValueError):
        SpamicityTable.from_dict({"spamicity": {"bad": 1.5}})
