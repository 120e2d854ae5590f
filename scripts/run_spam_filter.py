"""
Train the Bayesian spam filter on two folders and test it on two others.

This script is a convenience wrapper around
`bayes_spam.training.train_bayes.train_and_evaluate`, which:

- reads the spam and ham training folders
- computes the spamicity table and saves it under experiments/models/
- classifies every file of the spam and ham testing folders
- logs the misclassification counts and metrics
- writes predictions and metrics under experiments/results/

Usage (from project root):

    python -m scripts.run_spam_filter SPAM_TRAIN HAM_TRAIN SPAM_TEST HAM_TEST
    # or
    python scripts/run_spam_filter.py SPAM_TRAIN HAM_TRAIN SPAM_TEST HAM_TEST
"""

from __future__ import annotations

import argparse

from bayes_spam.training.train_bayes import train_and_evaluate
from bayes_spam.utils.training_utils import get_logger, load_train_config


def parse_args() -> argparse.Namespace:
    """
    Parse command-line arguments.

    The four folders are required, in this order:
    spamTrainingFolder, hamTrainingFolder, spamTestingFolder, hamTestingFolder.
    """
    parser = argparse.ArgumentParser(
        description="Train and test the Bayesian spam filter.",
        epilog=(
            "Input format should be: spamTrainingFolder, hamTrainingFolder, "
            "spamTestingFolder, hamTestingFolder"
        ),
    )
    parser.add_argument("spam_train_dir", metavar="spamTrainingFolder")
    parser.add_argument("ham_train_dir", metavar="hamTrainingFolder")
    parser.add_argument("spam_test_dir", metavar="spamTestingFolder")
    parser.add_argument("ham_test_dir", metavar="hamTestingFolder")
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
        name="run_spam_filter",
        config=train_cfg,
        log_file_suffix="run",
    )

    logger.info("=" * 80)
    logger.info("Starting spam filter training and testing.")
    logger.info(
        "Folders: spam_train=%s, ham_train=%s, spam_test=%s, ham_test=%s",
        args.spam_train_dir,
        args.ham_train_dir,
        args.spam_test_dir,
        args.ham_test_dir,
    )

    results = train_and_evaluate(
        spam_train_dir=args.spam_train_dir,
        ham_train_dir=args.ham_train_dir,
        spam_test_dir=args.spam_test_dir,
        ham_test_dir=args.ham_test_dir,
        data_config_path=args.data_config,
        train_config_path=args.train_config,
    )

    logger.info("Full results dict: %s", results)
    logger.info("Spam filter run completed.")


if __name__ == "__main__":
    main()
