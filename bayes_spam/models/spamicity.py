"""
Spamicity computation.

Turns the raw counts of a :class:`TermStatisticsStore` into the trained
model: a read-only table of P(spam | term) per term.

Class priors are taken as equal, so a term's spamicity is its relative
frequency among spam terms divided by the sum of its relative
frequencies among spam and ham terms. Terms found in too few training
documents are pruned before this step; the class totals are fixed over
the full vocabulary first.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional

from bayes_spam.models.term_statistics import TermStatisticsStore


logger = logging.getLogger(__name__)

# Terms appearing in this many documents or fewer are discarded.
OCCUR_THRESHOLD_OF_DISCARD_TERM = 5


class SpamicityTable(Mapping):
    """
    Immutable term -> spamicity mapping produced by training.

    Terms missing from the table are unknown to the model.

    Parameters
    ----------
    values : Mapping[str, float]
        Spamicity per term, each in [0, 1].
    discard_threshold : int
        Document-frequency threshold used for pruning.
    pruned_count : int
        Number of vocabulary terms dropped for low document frequency.
    degenerate_count : int
        Number of terms dropped because neither class gave them any weight.
    """

    def __init__(
        self,
        values: Mapping[str, float],
        discard_threshold: int = OCCUR_THRESHOLD_OF_DISCARD_TERM,
        pruned_count: int = 0,
        degenerate_count: int = 0,
    ) -> None:
        self._values: Dict[str, float] = dict(values)
        self.discard_threshold = discard_threshold
        self.pruned_count = pruned_count
        self.degenerate_count = degenerate_count

    def __getitem__(self, term: str) -> float:
        return self._values[term]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return (
            f"SpamicityTable(terms={len(self)}, pruned={self.pruned_count}, "
            f"discard_threshold={self.discard_threshold})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the table to plain Python types."""
        return {
            "discard_threshold": self.discard_threshold,
            "pruned_count": self.pruned_count,
            "degenerate_count": self.degenerate_count,
            "spamicity": dict(self._values),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SpamicityTable":
        """
        Deserialize a table produced by :meth:`to_dict`.

        Raises
        ------
        ValueError
            If a spamicity value is not a number in [0, 1].
        """
        values = {}
        for term, value in (data.get("spamicity") or {}).items():
            value = float(value)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Spamicity of {term!r} out of range [0, 1]: {value}")
            values[term] = value
        return cls(
            values,
            discard_threshold=int(data.get("discard_threshold", OCCUR_THRESHOLD_OF_DISCARD_TERM)),
            pruned_count=int(data.get("pruned_count", 0)),
            degenerate_count=int(data.get("degenerate_count", 0)),
        )


class SpamicityCalculator:
    """
    Computes a :class:`SpamicityTable` from a term statistics store.

    Parameters
    ----------
    store : TermStatisticsStore
        Fully recorded training statistics.
    discard_threshold : int
        Terms whose document frequency is at or below this value are
        pruned.
    """

    def __init__(
        self,
        store: TermStatisticsStore,
        discard_threshold: int = OCCUR_THRESHOLD_OF_DISCARD_TERM,
    ) -> None:
        self.store = store
        self.discard_threshold = discard_threshold

    def compute(self) -> SpamicityTable:
        """
        Compute the spamicity of every sufficiently frequent term.

        The store is marked as computed; it can be read again but no
        longer recorded into.

        Returns
        -------
        SpamicityTable
            The trained model.
        """
        store = self.store
        spam_counts = store.spam_counts
        ham_counts = store.ham_counts

        # Totals include terms that are pruned below.
        spam_total = float(sum(spam_counts.values()))
        ham_total = float(sum(ham_counts.values()))

        values: Dict[str, float] = {}
        pruned = 0
        degenerate = 0
        for term in store.vocabulary:
            if store.doc_frequency.get(term, 0) <= self.discard_threshold:
                pruned += 1
                continue

            spamicity = _spamicity(
                spam_counts.get(term, 0), spam_total, ham_counts.get(term, 0), ham_total
            )
            if spamicity is None:
                logger.debug("Term %r has no usable class frequency; treated as unknown.", term)
                degenerate += 1
                continue
            values[term] = spamicity

        store.mark_computed()
        logger.info(
            "Spamicity computed for %d terms (%d pruned with document frequency <= %d, "
            "%d degenerate).",
            len(values),
            pruned,
            self.discard_threshold,
            degenerate,
        )
        return SpamicityTable(
            values,
            discard_threshold=self.discard_threshold,
            pruned_count=pruned,
            degenerate_count=degenerate,
        )


def _spamicity(
    spam_count: float,
    spam_total: float,
    ham_count: float,
    ham_total: float,
) -> Optional[float]:
    """P(spam | term) under equal priors, or None when undefined."""
    spam_freq = spam_count / spam_total if spam_total > 0 else 0.0
    ham_freq = ham_count / ham_total if ham_total > 0 else 0.0
    if spam_freq < 0 or ham_freq < 0:
        return None
    denominator = spam_freq + ham_freq
    if denominator <= 0:
        return None
    return spam_freq / denominator


def compute_spamicity(
    store: TermStatisticsStore,
    discard_threshold: int = OCCUR_THRESHOLD_OF_DISCARD_TERM,
) -> SpamicityTable:
    """Shortcut for ``SpamicityCalculator(store, discard_threshold).compute()``."""
    return SpamicityCalculator(store, discard_threshold=discard_threshold).compute()
