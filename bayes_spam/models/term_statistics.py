"""
Per-term training statistics for the Bayesian spam filter.

The store accumulates, for every term seen during training:

- its total number of occurrences in spam documents
- its total number of occurrences in ham documents
- the number of distinct documents (spam or ham) containing it

Accumulation is purely additive, so partial stores built from disjoint
slices of the training stream can be summed into the same totals the
sequential pass would produce. :func:`build_term_statistics` uses this
to spread ingestion over joblib workers.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping
from functools import reduce
from itertools import islice
from typing import Dict, Iterable, Iterator, List, Set, Tuple, Union

from joblib import Parallel, delayed

from bayes_spam.models.labels import Label


logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 256

# A document's terms: a sequence of term occurrences, or a mapping of
# term -> occurrence count.
TermMultiset = Union[Iterable[str], Mapping[str, int]]
LabeledDocument = Tuple[TermMultiset, Union[Label, str, bool, int]]


def _as_counts(terms: TermMultiset) -> Counter:
    if isinstance(terms, str):
        raise TypeError("Expected a collection of terms, got a single string.")
    if isinstance(terms, Mapping):
        return Counter({t: n for t, n in terms.items() if n > 0})
    return Counter(terms)


class TermStatisticsStore:
    """
    Accumulator for spam/ham term counts and document frequencies.

    A store follows a two-phase protocol: documents are recorded, then
    the store is handed to the spamicity calculator. Once
    :meth:`mark_computed` has been called further recording is refused
    until :meth:`reset`.

    Attributes
    ----------
    spam_counts : Counter
        Term -> occurrences across all spam documents.
    ham_counts : Counter
        Term -> occurrences across all ham documents.
    doc_frequency : Counter
        Term -> number of distinct documents containing the term.
    document_counts : Dict[Label, int]
        Number of non-empty documents recorded per label.
    """

    def __init__(self) -> None:
        self.spam_counts: Counter = Counter()
        self.ham_counts: Counter = Counter()
        self.doc_frequency: Counter = Counter()
        self.document_counts: Dict[Label, int] = {Label.SPAM: 0, Label.HAM: 0}
        self._computed = False

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def record_document(self, terms: TermMultiset, label) -> None:
        """
        Record one training document.

        Every occurrence increments the class counter; every distinct
        term increments its document frequency once. Empty documents
        leave the store unchanged.

        Raises
        ------
        RuntimeError
            If the store has already been computed and not reset.
        ValueError
            If the label is not spam or ham.
        TypeError
            If ``terms`` is a single string instead of a collection of terms.
        """
        if self._computed:
            raise RuntimeError(
                "Term statistics have already been computed. Call reset() "
                "before recording new documents."
            )
        label = Label.coerce(label)
        counts = _as_counts(terms)
        if not counts:
            return

        target = self.spam_counts if label is Label.SPAM else self.ham_counts
        target.update(counts)
        self.doc_frequency.update(counts.keys())
        self.document_counts[label] += 1

    def record_documents(self, documents: Iterable[LabeledDocument]) -> "TermStatisticsStore":
        """Record an iterable of (terms, label) pairs. Returns self."""
        for terms, label in documents:
            self.record_document(terms, label)
        return self

    # ------------------------------------------------------------------
    # Merging
    # ------------------------------------------------------------------

    def merge(self, other: "TermStatisticsStore") -> "TermStatisticsStore":
        """
        Return a new store holding the summed statistics of both stores.

        Neither operand is modified.
        """
        merged = TermStatisticsStore()
        for store in (self, other):
            merged.spam_counts.update(store.spam_counts)
            merged.ham_counts.update(store.ham_counts)
            merged.doc_frequency.update(store.doc_frequency)
            for label, count in store.document_counts.items():
                merged.document_counts[label] += count
        return merged

    def __add__(self, other: "TermStatisticsStore") -> "TermStatisticsStore":
        if not isinstance(other, TermStatisticsStore):
            return NotImplemented
        return self.merge(other)

    # ------------------------------------------------------------------
    # Introspection / lifecycle
    # ------------------------------------------------------------------

    @property
    def vocabulary(self) -> Set[str]:
        """Every term with a spam or ham count."""
        return set(self.spam_counts) | set(self.ham_counts)

    @property
    def vocabulary_size(self) -> int:
        return len(self.vocabulary)

    @property
    def is_computed(self) -> bool:
        return self._computed

    def mark_computed(self) -> None:
        self._computed = True

    def reset(self) -> None:
        """Clear all statistics and reopen the store for recording."""
        self.spam_counts.clear()
        self.ham_counts.clear()
        self.doc_frequency.clear()
        self.document_counts = {Label.SPAM: 0, Label.HAM: 0}
        self._computed = False

    def __repr__(self) -> str:
        return (
            f"TermStatisticsStore(vocabulary={self.vocabulary_size}, "
            f"spam_docs={self.document_counts[Label.SPAM]}, "
            f"ham_docs={self.document_counts[Label.HAM]})"
        )


# ---------------------------------------------------------------------------
# Parallel ingestion
# ---------------------------------------------------------------------------


def _chunked(items: Iterable, size: int) -> Iterator[List]:
    iterator = iter(items)
    while True:
        chunk = list(islice(iterator, size))
        if not chunk:
            return
        yield chunk


def _store_from_chunk(chunk: List[LabeledDocument]) -> TermStatisticsStore:
    return TermStatisticsStore().record_documents(chunk)


def build_term_statistics(
    documents: Iterable[LabeledDocument],
    n_jobs: int = 1,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> TermStatisticsStore:
    """
    Build a term statistics store from a stream of labeled documents.

    Parameters
    ----------
    documents : Iterable[LabeledDocument]
        (terms, label) pairs.
    n_jobs : int
        Number of joblib workers. 1 records inline; other values split
        the stream into chunks, build one partial store per chunk and
        sum the partial stores.
    chunk_size : int
        Documents per chunk when running in parallel.

    Returns
    -------
    TermStatisticsStore
        Store with the totals of every document.
    """
    if n_jobs == 1:
        store = TermStatisticsStore().record_documents(documents)
    else:
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        partials = Parallel(n_jobs=n_jobs)(
            delayed(_store_from_chunk)(chunk) for chunk in _chunked(documents, chunk_size)
        )
        store = reduce(TermStatisticsStore.merge, partials, TermStatisticsStore())

    logger.info(
        "Recorded %d spam and %d ham documents, vocabulary size %d.",
        store.document_counts[Label.SPAM],
        store.document_counts[Label.HAM],
        store.vocabulary_size,
    )
    return store
