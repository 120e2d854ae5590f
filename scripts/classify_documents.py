"""
Classify documents with a previously trained spamicity table.

Prints one line per file: ``path<TAB>spam|ham<TAB>probability``.

Usage (from project root):

    python scripts/classify_documents.py mail1.txt mail2.txt
    python scripts/classify_documents.py --model experiments/models/spamicity_table.joblib mail.txt
"""

from __future__ import annotations

import argparse

from bayes_spam.data.corpus import read_document
from bayes_spam.data.datasets import get_corpus_config, load_data_config
from bayes_spam.features.preprocessing import Normalizer
from bayes_spam.models.bayesian_classifier import BayesianClassifier, ModelSettings, decide
from bayes_spam.models.model_io import load_spamicity_table
from bayes_spam.utils.training_utils import get_logger, load_train_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Classify text files as spam or ham with a trained model."
    )
    parser.add_argument("files", nargs="+", help="Documents to classify.")
    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Path to a saved spamicity table (default: models_dir from train config).",
    )
    parser.add_argument(
        "--data-config",
        type=str,
        default="config/data.yaml",
        help="Path to data config YAML (default: config/data.yaml).",
    )
    parser.add_argument(
        "--train-config",
        type=str,
        default="config/train.yaml",
        help="Path to global train config YAML (default: config/train.yaml).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    train_cfg = load_train_config(args.train_config)
    logger = get_logger(
        name="classify_documents",
        config=train_cfg,
        log_file_suffix="classify",
    )

    if args.model:
        table = load_spamicity_table(path=args.model)
    else:
        table = load_spamicity_table(models_dir=train_cfg["paths"].get("models_dir"))
    logger.info("Loaded spamicity table with %d terms.", len(table))

    classifier = BayesianClassifier.from_table(
        table,
        settings=ModelSettings.from_config(train_cfg),
        normalizer=Normalizer.from_config(load_data_config(args.data_config)["preprocessing"] or {}),
    )
    corpus_cfg = get_corpus_config(args.data_config)

    for path in args.files:
        text = read_document(
            path,
            encoding=corpus_cfg["encoding"],
            errors=corpus_cfg["encoding_errors"],
        )
        probability = classifier.predicted_probability_text(text)
        label = decide(probability, classifier.settings.spam_probab_threshold)
        print(f"{path}\t{label.value}\t{probability:.6f}")


if __name__ == "__main__":
    main()
