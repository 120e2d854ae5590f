"""
Text normalization utilities.

This subpackage includes the Normalizer that turns raw document text
into stemmed, stopword-free, alphabetic terms for the Bayesian filter.
"""
