"""
Persistence of trained spamicity tables.

Tables are stored with joblib under the models directory defined in
config/train.yaml, next to a JSON export for inspection.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Optional

import joblib

from bayes_spam.models.spamicity import SpamicityTable
from bayes_spam.utils.training_utils import ensure_dir_exists, load_train_config


logger = logging.getLogger(__name__)

DEFAULT_MODEL_FILENAME = "spamicity_table.joblib"


def _resolve_models_dir(models_dir: Optional[str]) -> str:
    if models_dir is None:
        train_cfg = load_train_config()
        models_dir = train_cfg["paths"].get("models_dir", "experiments/models")
    return models_dir


def save_spamicity_table(
    table: SpamicityTable,
    models_dir: Optional[str] = None,
    filename: str = DEFAULT_MODEL_FILENAME,
    overwrite: bool = False,
    export_json: bool = True,
) -> str:
    """
    Save a spamicity table to disk.

    Parameters
    ----------
    table : SpamicityTable
        Trained table.
    models_dir : Optional[str]
        Target directory. If None, this is read from config/train.yaml.
    filename : str
        File name of the joblib dump.
    overwrite : bool
        Replace an existing file if True; otherwise leave it in place.
    export_json : bool
        Also write ``<filename stem>.json`` with the plain mapping.

    Returns
    -------
    str
        Path of the joblib file.
    """
    models_dir = _resolve_models_dir(models_dir)
    ensure_dir_exists(models_dir)
    path = os.path.join(models_dir, filename)

    if os.path.exists(path) and not overwrite:
        logger.info("Model file already exists and overwrite is disabled: %s", path)
        return path

    joblib.dump(table, path)
    logger.info("Saved spamicity table (%d terms) to %s", len(table), path)

    if export_json:
        json_path = os.path.splitext(path)[0] + ".json"
        with open(json_path, "w", encoding="utf-8") as f:
            json.dump(table.to_dict(), f, indent=2, sort_keys=True)

    return path


def load_spamicity_table(
    models_dir: Optional[str] = None,
    filename: str = DEFAULT_MODEL_FILENAME,
    path: Optional[str] = None,
) -> SpamicityTable:
    """
    Load a previously saved spamicity table.

    Parameters
    ----------
    models_dir : Optional[str]
        Directory holding the table; read from config/train.yaml if None.
    filename : str
        File name of the joblib dump.
    path : Optional[str]
        Full path, overriding ``models_dir`` and ``filename``.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    TypeError
        If the file does not hold a SpamicityTable.
    """
    if path is None:
        path = os.path.join(_resolve_models_dir(models_dir), filename)
    if not os.path.exists(path):
        raise FileNotFoundError(f"Spamicity table not found at: {path}")

    table = joblib.load(path)
    if not isinstance(table, SpamicityTable):
        raise TypeError(f"File does not contain a SpamicityTable: {path}")
    return table
