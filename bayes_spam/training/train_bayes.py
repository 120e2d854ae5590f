"""
Training and evaluation pipeline for the Bayesian spam filter.

The pipeline:

- reads the spam and ham training folders (one document per .txt file)
- normalizes every document into stemmed terms
- records the terms into the term statistics store and computes the
  spamicity table
- optionally saves the table under experiments/models/
- classifies every document of the spam and ham testing folders
- reports the misclassification counts plus accuracy, precision,
  recall and F1-score
- writes per-document predictions (CSV) and metrics (JSON) under
  experiments/results/

Folder arguments default to the "corpus" section of config/data.yaml.
The module can be used as a library function or run as a script
(``python -m bayes_spam.training.train_bayes``).
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

import pandas as pd

from bayes_spam.data.corpus import load_labeled_corpus
from bayes_spam.data.datasets import (
    DEFAULT_DATA_CONFIG_PATH,
    get_corpus_config,
    load_data_config,
)
from bayes_spam.evaluation.metrics import compute_classification_metrics, error_counts
from bayes_spam.features.preprocessing import Normalizer
from bayes_spam.models.bayesian_classifier import BayesianClassifier, ModelSettings, decide
from bayes_spam.models.model_io import save_spamicity_table
from bayes_spam.utils.training_utils import (
    DEFAULT_TRAIN_CONFIG_PATH,
    ensure_dir_exists,
    get_logger,
    load_train_config,
)


# ---------------------------------------------------------------------------
# Core helpers
# ---------------------------------------------------------------------------


def _resolve_dir(explicit: Optional[str], corpus_cfg: Dict[str, Any], key: str) -> str:
    directory = explicit or corpus_cfg.get(key)
    if not directory:
        raise ValueError(f'No directory given for "{key}" and none configured in data config.')
    return directory


def build_classifier(
    data_config_path: str = DEFAULT_DATA_CONFIG_PATH,
    train_config_path: str = DEFAULT_TRAIN_CONFIG_PATH,
) -> BayesianClassifier:
    """
    Build an untrained classifier from the data and train configs.

    Returns
    -------
    BayesianClassifier
        Classifier with its normalizer, model settings and n_jobs set.
    """
    data_cfg = load_data_config(data_config_path)
    train_cfg = load_train_config(train_config_path)
    general_cfg = train_cfg.get("general", {}) or {}

    return BayesianClassifier(
        settings=ModelSettings.from_config(train_cfg),
        normalizer=Normalizer.from_config(data_cfg["preprocessing"] or {}),
        n_jobs=int(general_cfg.get("n_jobs", 1)),
    )


def classify_corpus(classifier: BayesianClassifier, corpus_df: pd.DataFrame) -> pd.DataFrame:
    """
    Classify every document of a labeled corpus DataFrame.

    Parameters
    ----------
    classifier : BayesianClassifier
        Trained classifier with a normalizer attached.
    corpus_df : pd.DataFrame
        Output of :func:`load_labeled_corpus`.

    Returns
    -------
    pd.DataFrame
        Columns ["path", "label", "label_id", "spam_probability",
        "predicted_label", "predicted_label_id"].
    """
    probabilities = [classifier.predicted_probability_text(text) for text in corpus_df["text"]]
    threshold = classifier.settings.spam_probab_threshold
    predicted = [decide(p, threshold) for p in probabilities]

    result = corpus_df[["path", "label", "label_id"]].copy()
    result["spam_probability"] = probabilities
    result["predicted_label"] = [label.value for label in predicted]
    result["predicted_label_id"] = [label.label_id for label in predicted]
    return result


# ---------------------------------------------------------------------------
# Training + evaluation
# ---------------------------------------------------------------------------


def train_and_evaluate(
    spam_train_dir: Optional[str] = None,
    ham_train_dir: Optional[str] = None,
    spam_test_dir: Optional[str] = None,
    ham_test_dir: Optional[str] = None,
    data_config_path: str = DEFAULT_DATA_CONFIG_PATH,
    train_config_path: str = DEFAULT_TRAIN_CONFIG_PATH,
) -> Dict[str, Any]:
    """
    End-to-end pipeline: train on two folders, test on two folders.

    Parameters
    ----------
    spam_train_dir, ham_train_dir : Optional[str]
        Training folders; default to the data config.
    spam_test_dir, ham_test_dir : Optional[str]
        Testing folders; default to the data config.
    data_config_path : str
        Path to config/data.yaml.
    train_config_path : str
        Path to config/train.yaml.

    Returns
    -------
    Dict[str, Any]
        Error counts ("spam", "ham", "spam_classified_as_ham",
        "ham_classified_as_spam"), metrics ("accuracy", "precision",
        "recall", "f1", "confusion_matrix") and "vocabulary_size".

    Raises
    ------
    FileNotFoundError
        If a corpus folder does not exist.
    """
    corpus_cfg = get_corpus_config(data_config_path)
    train_cfg = load_train_config(train_config_path)

    logger = get_logger(
        name="train_bayes",
        config=train_cfg,
        log_file_suffix="bayes",
    )

    read_kwargs = dict(
        file_extension=corpus_cfg["file_extension"],
        encoding=corpus_cfg["encoding"],
        errors=corpus_cfg["encoding_errors"],
    )

    train_df = load_labeled_corpus(
        _resolve_dir(spam_train_dir, corpus_cfg, "spam_train_dir"),
        _resolve_dir(ham_train_dir, corpus_cfg, "ham_train_dir"),
        stage="training",
        **read_kwargs,
    )
    logger.info(
        "Training corpus: %d spam and %d ham files.",
        int((train_df["label_id"] == 1).sum()),
        int((train_df["label_id"] == 0).sum()),
    )

    classifier = build_classifier(data_config_path, train_config_path)
    logger.info("Model settings: %s", classifier.settings.to_dict())
    classifier.train_texts(zip(train_df["text"], train_df["label"]))
    table = classifier.table
    logger.info("Trained spamicity table with %d terms.", len(table))

    save_cfg = train_cfg.get("save", {}) or {}
    if bool(save_cfg.get("save_model", True)):
        save_spamicity_table(
            table,
            models_dir=train_cfg["paths"].get("models_dir", "experiments/models"),
            overwrite=bool(save_cfg.get("overwrite_existing", False)),
        )

    logger.info("Testing phase:")
    test_df = load_labeled_corpus(
        _resolve_dir(spam_test_dir, corpus_cfg, "spam_test_dir"),
        _resolve_dir(ham_test_dir, corpus_cfg, "ham_test_dir"),
        stage="testing",
        **read_kwargs,
    )
    predictions_df = classify_corpus(classifier, test_df)

    y_true = predictions_df["label_id"].astype(int).values
    y_pred = predictions_df["predicted_label_id"].astype(int).values

    results: Dict[str, Any] = error_counts(y_true, y_pred)
    logger.info("Spam = %d", results["spam"])
    logger.info("Ham = %d", results["ham"])
    logger.info("SpamClassifAsHam = %d", results["spam_classified_as_ham"])
    logger.info("HamClassifAsSpam = %d", results["ham_classified_as_spam"])

    if len(y_true) > 0:
        metrics = compute_classification_metrics(y_true=y_true, y_pred=y_pred, average="binary")
        logger.info(
            "Metrics - acc: %.4f, prec: %.4f, rec: %.4f, f1: %.4f",
            metrics["accuracy"],
            metrics["precision"],
            metrics["recall"],
            metrics["f1"],
        )
        results.update(metrics)
    else:
        logger.warning("Testing folders contain no documents; metrics not computed.")

    results["vocabulary_size"] = len(table)

    results_dir = train_cfg["paths"].get("results_dir", "experiments/results")
    ensure_dir_exists(results_dir)

    predictions_path = os.path.join(results_dir, "predictions_bayes.csv")
    predictions_df.to_csv(predictions_path, index=False)
    logger.info("Saved per-document predictions to %s", predictions_path)

    metrics_path = os.path.join(results_dir, "metrics_bayes.json")
    with open(metrics_path, "w", encoding="utf-8") as f:
        json.dump(results, f, indent=2)
    logger.info("Saved metrics JSON to %s", metrics_path)

    return results


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """
    Main entry point when running this module as a script.
    """
    _ = train_and_evaluate()


if __name__ == "__main__":
    main()
