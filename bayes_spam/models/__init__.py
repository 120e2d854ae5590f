"""
Model definitions for spam detection.

This subpackage contains:
- the term statistics store that accumulates training counts
- the spamicity calculator and the immutable spamicity table
- the Bayesian classifier with its extreme-value combination rule
- persistence helpers for trained tables.
"""

from bayes_spam.models.bayesian_classifier import (
    BayesianClassifier,
    ModelSettings,
    combine,
    decide,
    select_extremes,
)
from bayes_spam.models.labels import Label
from bayes_spam.models.spamicity import SpamicityCalculator, SpamicityTable, compute_spamicity
from bayes_spam.models.term_statistics import TermStatisticsStore, build_term_statistics

__all__ = [
    "BayesianClassifier",
    "Label",
    "ModelSettings",
    "SpamicityCalculator",
    "SpamicityTable",
    "TermStatisticsStore",
    "build_term_statistics",
    "combine",
    "compute_spamicity",
    "decide",
    "select_extremes",
]
