"""
Bayesian spam classifier.

Training counts term occurrences in labeled documents and converts them
into per-term spamicities (see bayes_spam.models.spamicity).

Scoring a document works on the set of its known terms:

1. look up the spamicity of every distinct term present in the table
2. pick the most extreme values: on each of ``nr_of_terms_consider``
   rounds take the largest and then the smallest remaining value from
   one shared pool, so no value is used twice
3. clamp 0 and 1 away from the edges and sum ln(1 - p) - ln(p)
4. the posterior is the logistic of the negated sum; the document is
   spam only if it is strictly above ``spam_probab_threshold``

A document with no known terms scores exactly 0.5 and is ham.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar

from bayes_spam.features.preprocessing import Normalizer
from bayes_spam.models.labels import Label
from bayes_spam.models.spamicity import (
    OCCUR_THRESHOLD_OF_DISCARD_TERM,
    SpamicityCalculator,
    SpamicityTable,
)
from bayes_spam.models.term_statistics import LabeledDocument, build_term_statistics


logger = logging.getLogger(__name__)

# Number of values taken from each end of a document's spamicities.
NR_OF_TERMS_CONSIDER = 20
# Posterior above which a document is spam.
SPAM_PROBAB_THRESHOLD = 0.7
MIN_CLAMP = 0.0001
MAX_CLAMP = 0.9999

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ModelSettings:
    """
    Tunable constants of the filter.

    Attributes:
        nr_of_terms_consider: Rounds of extreme-value selection.
        spam_probab_threshold: Decision threshold on the posterior.
        occur_threshold_of_discard_term: Pruning threshold on document
            frequency used at training time.
        min_clamp: Replacement for a spamicity of exactly 0.
        max_clamp: Replacement for a spamicity of exactly 1.
    """

    nr_of_terms_consider: int = NR_OF_TERMS_CONSIDER
    spam_probab_threshold: float = SPAM_PROBAB_THRESHOLD
    occur_threshold_of_discard_term: int = OCCUR_THRESHOLD_OF_DISCARD_TERM
    min_clamp: float = MIN_CLAMP
    max_clamp: float = MAX_CLAMP

    def __post_init__(self) -> None:
        if self.nr_of_terms_consider < 1:
            raise ValueError(
                f"nr_of_terms_consider must be positive, got {self.nr_of_terms_consider}"
            )
        if not 0.0 < self.spam_probab_threshold < 1.0:
            raise ValueError(
                "spam_probab_threshold must lie in (0, 1), got "
                f"{self.spam_probab_threshold}"
            )
        if self.occur_threshold_of_discard_term < 0:
            raise ValueError(
                "occur_threshold_of_discard_term must be non-negative, got "
                f"{self.occur_threshold_of_discard_term}"
            )
        if not 0.0 < self.min_clamp < self.max_clamp < 1.0:
            raise ValueError(
                f"Clamp bounds must satisfy 0 < min_clamp < max_clamp < 1, got "
                f"{self.min_clamp}, {self.max_clamp}"
            )

    @classmethod
    def from_config(cls, train_cfg: Dict[str, Any]) -> "ModelSettings":
        """Build settings from the 'model' section of config/train.yaml."""
        model_cfg = train_cfg.get("model", {}) or {}
        defaults = cls()
        return cls(
            nr_of_terms_consider=int(
                model_cfg.get("nr_of_terms_consider", defaults.nr_of_terms_consider)
            ),
            spam_probab_threshold=float(
                model_cfg.get("spam_probab_threshold", defaults.spam_probab_threshold)
            ),
            occur_threshold_of_discard_term=int(
                model_cfg.get(
                    "occur_threshold_of_discard_term",
                    defaults.occur_threshold_of_discard_term,
                )
            ),
            min_clamp=float(model_cfg.get("min_clamp", defaults.min_clamp)),
            max_clamp=float(model_cfg.get("max_clamp", defaults.max_clamp)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_SETTINGS = ModelSettings()


# ---------------------------------------------------------------------------
# Combination rule
# ---------------------------------------------------------------------------


def _select_extreme_items(items: Sequence[T], n: int, key) -> List[T]:
    pool = sorted(items, key=key)
    low, high = 0, len(pool) - 1
    selected: List[T] = []
    for _ in range(n):
        if low > high:
            break
        selected.append(pool[high])
        high -= 1
        if low > high:
            break
        selected.append(pool[low])
        low += 1
    return selected


def select_extremes(probabilities: Iterable[float], n: int = NR_OF_TERMS_CONSIDER) -> List[float]:
    """
    Lock-step extreme-value selection.

    On each of ``n`` rounds the largest and then the smallest remaining
    value are removed from one shared pool. At most ``2 * n`` values are
    returned, in removal order; a pool smaller than that is used whole.
    """
    return _select_extreme_items(list(probabilities), n, key=float)


def clamp(p: float, settings: ModelSettings = DEFAULT_SETTINGS) -> float:
    """Move a spamicity of exactly 0 or 1 onto the clamp bounds."""
    if p >= 1.0:
        return settings.max_clamp
    if p <= 0.0:
        return settings.min_clamp
    return p


def _logistic_of_negated(log_sum: float) -> float:
    # 1 / (1 + e**log_sum) without overflowing for large sums.
    if log_sum >= 0:
        z = math.exp(-log_sum)
        return z / (1.0 + z)
    return 1.0 / (1.0 + math.exp(log_sum))


def combine(
    probabilities: Iterable[float],
    settings: ModelSettings = DEFAULT_SETTINGS,
) -> float:
    """
    Combine term spamicities into a document posterior.

    Parameters
    ----------
    probabilities : Iterable[float]
        Spamicities of the document's distinct known terms.
    settings : ModelSettings
        Selection size and clamp bounds.

    Returns
    -------
    float
        P(spam | document); exactly 0.5 when there is no evidence.
    """
    selected = select_extremes(probabilities, settings.nr_of_terms_consider)
    return _posterior(selected, settings)


def _posterior(selected: Iterable[float], settings: ModelSettings) -> float:
    log_sum = 0.0
    for p in selected:
        p = clamp(p, settings)
        log_sum += math.log(1.0 - p) - math.log(p)
    return _logistic_of_negated(log_sum)


def decide(probability: float, threshold: float = SPAM_PROBAB_THRESHOLD) -> Label:
    """Spam iff the posterior is strictly greater than the threshold."""
    return Label.SPAM if probability > threshold else Label.HAM


# ---------------------------------------------------------------------------
# Classifier
# ---------------------------------------------------------------------------


class BayesianClassifier:
    """
    Term-based Bayesian spam filter.

    Usage:
        >>> clf = BayesianClassifier()
        >>> clf.train([(["viagra", "free"], "spam"), (["meet"], "ham"), ...])
        >>> clf.classify({"viagra", "free"})
        <Label.SPAM: 'spam'>

    Attributes:
        settings: Model constants.
        normalizer: Used by the ``*_text`` methods to turn raw text into terms.
        n_jobs: joblib workers used to record training documents.
        table: Spamicity table, None until trained.
    """

    def __init__(
        self,
        settings: Optional[ModelSettings] = None,
        normalizer: Optional[Normalizer] = None,
        n_jobs: int = 1,
    ) -> None:
        self.settings = settings or DEFAULT_SETTINGS
        self.normalizer = normalizer
        self.n_jobs = n_jobs
        self.table: Optional[SpamicityTable] = None

    @classmethod
    def from_table(
        cls,
        table: SpamicityTable,
        settings: Optional[ModelSettings] = None,
        normalizer: Optional[Normalizer] = None,
    ) -> "BayesianClassifier":
        """Wrap an already trained spamicity table."""
        clf = cls(settings=settings, normalizer=normalizer)
        clf.table = table
        return clf

    @property
    def is_trained(self) -> bool:
        return self.table is not None

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def train(self, documents: Iterable[LabeledDocument]) -> "BayesianClassifier":
        """
        Train from (terms, label) pairs, replacing any previous model.

        Terms may be a sequence of occurrences or a term -> count mapping.

        Returns
        -------
        BayesianClassifier
            Self (for method chaining).
        """
        store = build_term_statistics(documents, n_jobs=self.n_jobs)
        self.table = SpamicityCalculator(
            store,
            discard_threshold=self.settings.occur_threshold_of_discard_term,
        ).compute()
        return self

    def train_texts(self, documents: Iterable[Tuple[str, Any]]) -> "BayesianClassifier":
        """Train from (raw text, label) pairs using the attached normalizer."""
        normalizer = self._require_normalizer()
        return self.train((normalizer.normalize_text(text), label) for text, label in documents)

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def clues(self, terms: Iterable[str]) -> List[Tuple[str, float]]:
        """
        The (term, spamicity) pairs that decide a document, in selection
        order. Unknown terms and repeats are ignored.
        """
        table = self._require_table()
        if isinstance(terms, str):
            raise TypeError(
                "Expected a collection of terms, got a single string; use classify_text()."
            )
        known = [(term, table[term]) for term in set(terms) if term in table]
        # Ties broken by term so the selection is deterministic.
        return _select_extreme_items(
            known,
            self.settings.nr_of_terms_consider,
            key=lambda item: (item[1], item[0]),
        )

    def predicted_probability(self, terms: Iterable[str]) -> float:
        """Posterior P(spam | document) for a collection of terms."""
        return _posterior((p for _, p in self.clues(terms)), self.settings)

    def classify(self, terms: Iterable[str]) -> Label:
        """Classify a collection of terms as spam or ham."""
        return decide(self.predicted_probability(terms), self.settings.spam_probab_threshold)

    def is_spam(self, terms: Iterable[str]) -> bool:
        return self.classify(terms) is Label.SPAM

    def predicted_probability_text(self, text: str) -> float:
        return self.predicted_probability(self._require_normalizer().normalize_text(text))

    def classify_text(self, text: str) -> Label:
        """Normalize raw text and classify it."""
        return self.classify(self._require_normalizer().normalize_text(text))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_table(self) -> SpamicityTable:
        if self.table is None:
            raise RuntimeError("Classifier has not been trained. Call train() first.")
        return self.table

    def _require_normalizer(self) -> Normalizer:
        if self.normalizer is None:
            raise RuntimeError("No normalizer attached; pass normalizer= to the classifier.")
        return self.normalizer
