"""
Training pipeline for the Bayesian spam filter.

This subpackage provides the train-then-test runner that reads spam/ham
folders, builds the spamicity table, and evaluates it on held-out
folders.
"""
