"""
Evaluation utilities.

This subpackage offers:
- metric computations (accuracy, precision, recall, F1-score)
- confusion matrix and misclassification counts for the testing phase.
"""
