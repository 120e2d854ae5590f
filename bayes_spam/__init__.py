"""
Top-level package for the Bayesian term-based spam filter.

This package contains modules for:
- data configuration and corpus reading
- text normalization (tokenizing, stopwords, stemming)
- the statistical engine: term statistics, spamicity, and the
  extreme-value combination rule
- the train-then-test pipeline
- evaluation utilities
- shared helper functions
"""

__version__ = "1.0.0"
