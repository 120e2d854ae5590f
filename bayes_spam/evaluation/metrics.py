"""
Evaluation metrics for the spam filter.

This module centralizes the computation of the classification metrics
reported after the testing phase:

- accuracy
- precision
- recall
- F1-score
- confusion matrix
- raw error counts (spam classified as ham, ham classified as spam)

Labels are numeric ids: 0 for ham, 1 for spam.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Union

import numpy as np
from sklearn.metrics import (
    accuracy_score,
    confusion_matrix,
    precision_recall_fscore_support,
)


ArrayLike = Union[Sequence[int], np.ndarray]

BINARY_LABELS = [0, 1]


def compute_classification_metrics(
    y_true: ArrayLike,
    y_pred: ArrayLike,
    average: str = "binary",
    labels: Optional[Sequence[int]] = None,
    output_confusion_matrix: bool = True,
) -> Dict[str, Any]:
    """
    Compute standard classification metrics for a predicted label set.

    Parameters
    ----------
    y_true : ArrayLike
        Ground-truth labels (0 for ham, 1 for spam).
    y_pred : ArrayLike
        Predicted labels, same shape as y_true.
    average : str
        Averaging mode for precision/recall/F1 ("binary", "macro",
        "micro" or "weighted").
    labels : Optional[Sequence[int]]
        Label ids for the confusion matrix. Defaults to [0, 1] so the
        matrix is always 2x2.
    output_confusion_matrix : bool
        If True, also compute and include the confusion matrix.

    Returns
    -------
    Dict[str, Any]
        Keys "accuracy", "precision", "recall", "f1" and, optionally,
        "confusion_matrix" as a nested list (rows = true labels).

    Raises
    ------
    ValueError
        If the inputs are empty or of different lengths.
    """
    y_true_arr = np.asarray(y_true)
    y_pred_arr = np.asarray(y_pred)

    if y_true_arr.shape != y_pred_arr.shape:
        raise ValueError(
            f"y_true {y_true_arr.shape} and y_pred {y_pred_arr.shape} must have the same shape"
        )
    if y_true_arr.size == 0:
        raise ValueError("Cannot compute metrics on an empty label set")

    acc = accuracy_score(y_true_arr, y_pred_arr)
    prec, rec, f1, _ = precision_recall_fscore_support(
        y_true_arr,
        y_pred_arr,
        average=average,
        labels=None if average == "binary" else labels,
        zero_division=0,
    )

    metrics: Dict[str, Any] = {
        "accuracy": float(acc),
        "precision": float(prec),
        "recall": float(rec),
        "f1": float(f1),
    }

    if output_confusion_matrix:
        cm = confusion_matrix(
            y_true_arr,
            y_pred_arr,
            labels=list(labels) if labels is not None else BINARY_LABELS,
        )
        metrics["confusion_matrix"] = cm.tolist()

    return metrics


def error_counts(y_true: ArrayLike, y_pred: ArrayLike) -> Dict[str, int]:
    """
    Count test documents per class and the misclassifications.

    Returns
    -------
    Dict[str, int]
        {"spam", "ham", "spam_classified_as_ham", "ham_classified_as_spam"}
    """
    y_true_arr = np.asarray(y_true, dtype=int)
    y_pred_arr = np.asarray(y_pred, dtype=int)
    spam_mask = y_true_arr == 1
    ham_mask = y_true_arr == 0
    return {
        "spam": int(spam_mask.sum()),
        "ham": int(ham_mask.sum()),
        "spam_classified_as_ham": int((y_pred_arr[spam_mask] == 0).sum()),
        "ham_classified_as_spam": int((y_pred_arr[ham_mask] == 1).sum()),
    }
