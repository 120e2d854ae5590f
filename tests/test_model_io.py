"""
Tests for saving and loading spamicity tables.
"""

from __future__ import annotations

import json
import os

import joblib
import pytest

from bayes_spam.models.model_io import (
    DEFAULT_MODEL_FILENAME,
    load_spamicity_table,
    save_spamicity_table,
)
from bayes_spam.models.spamicity import SpamicityTable


@pytest.fixture
def table():
    return SpamicityTable({"viagra": 1.0, "meeting": 0.0, "hello": 0.4}, pruned_count=2)


def test_round_trip(tmp_path, table):
    models_dir = str(tmp_path / "models")
    path = save_spamicity_table(table, models_dir=models_dir)

    assert path == os.path.join(models_dir, DEFAULT_MODEL_FILENAME)
    restored = load_spamicity_table(models_dir=models_dir)
    assert restored == table
    assert restored.pruned_count == 2
    assert load_spamicity_table(path=path) == table


def test_json_export(tmp_path, table):
    path = save_spamicity_table(table, models_dir=str(tmp_path))
    json_path = os.path.splitext(path)[0] + ".json"

    with open(json_path, "r", encoding="utf-8") as f:
        exported = json.load(f)
    assert exported["spamicity"]["hello"] == 0.4
    assert SpamicityTable.from_dict(exported) == table


def test_existing_file_kept_without_overwrite(tmp_path, table):
    models_dir = str(tmp_path)
    save_spamicity_table(table, models_dir=models_dir)

    save_spamicity_table(SpamicityTable({"other": 0.5}), models_dir=models_dir)
    assert load_spamicity_table(models_dir=models_dir) == table

    save_spamicity_table(SpamicityTable({"other": 0.5}), models_dir=models_dir, overwrite=True)
    assert dict(load_spamicity_table(models_dir=models_dir)) == {"other": 0.5}


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_spamicity_table(models_dir=str(tmp_path))


def test_wrong_object_type(tmp_path):
    path = str(tmp_path / "bogus.joblib")
    joblib.dump({"viagra": 1.0}, path)
    with pytest.raises(TypeError):
        load_spamicity_table(path=path)
