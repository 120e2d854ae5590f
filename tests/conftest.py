"""
Shared pytest fixtures.

Provides:
- the labeled training stream from the reference scenario (spam documents
  made of "viagra"/"free", ham documents made of "meeting")
- a helper writing spam/ham corpus folders to a temporary directory
- data/train YAML configs pointing every output path into tmp_path
"""

from __future__ import annotations

import os
from collections import Counter
from typing import Dict

import pytest
import yaml


@pytest.fixture
def scenario_documents():
    """8 spam documents {viagra:5, free:3} and 8 ham documents {meeting:6}."""
    spam = [(Counter({"viagra": 5, "free": 3}), "spam") for _ in range(8)]
    ham = [(Counter({"meeting": 6}), "ham") for _ in range(8)]
    return spam + ham


def _write_corpus(root: str, files: Dict[str, str]) -> str:
    os.makedirs(root, exist_ok=True)
    for name, text in files.items():
        with open(os.path.join(root, name), "w", encoding="utf-8") as f:
            f.write(text)
    return root


@pytest.fixture
def write_corpus(tmp_path):
    """Return a function writing {filename: text} into tmp_path/<relative>."""

    def _writer(relative: str, files: Dict[str, str]) -> str:
        return _write_corpus(str(tmp_path / relative), files)

    return _writer


@pytest.fixture
def corpus_dirs(write_corpus) -> Dict[str, str]:
    """Training and testing folders for a small, perfectly separable corpus."""
    spam_train = {
        f"spam_{i}.txt": "Viagra viagra viagra\nviagra viagra FREE free free\n" for i in range(8)
    }
    ham_train = {f"ham_{i}.txt": "meeting meeting meeting\nmeeting meeting meeting\n" for i in range(8)}
    # Files without the .txt suffix are ignored.
    spam_train["README.md"] = "meeting meeting meeting"

    spam_test = {"s1.txt": "Buy viagra for free!", "s2.txt": "FREE VIAGRA"}
    ham_test = {
        "h1.txt": "The meeting is at noon.",
        "h2.txt": "Completely unrelated words here.",
    }

    return {
        "spam_train_dir": write_corpus("corpus/train/spam", spam_train),
        "ham_train_dir": write_corpus("corpus/train/ham", ham_train),
        "spam_test_dir": write_corpus("corpus/test/spam", spam_test),
        "ham_test_dir": write_corpus("corpus/test/ham", ham_test),
    }


@pytest.fixture
def data_config_path(tmp_path, corpus_dirs) -> str:
    cfg = {
        "corpus": dict(corpus_dirs, file_extension=".txt", encoding="utf-8"),
        "preprocessing": {
            "lowercase": True,
            "stopwords": {"enabled": True, "source": "file", "path": None},
            "stemming": {"enabled": True, "algorithm": "porter"},
        },
    }
    path = tmp_path / "data.yaml"
    path.write_text(yaml.safe_dump(cfg), encoding="utf-8")
    return str(path)


@pytest.fixture
def train_config_path(tmp_path) -> str:
    cfg = {
        "model": {
            "nr_of_terms_consider": 20,
            "spam_probab_threshold": 0.7,
            "occur_threshold_of_discard_term": 5,
        },
        "general": {"n_jobs": 1},
        "paths": {
            "results_dir": str(tmp_path / "results"),
            "models_dir": str(tmp_path / "models"),
            "logs_dir": str(tmp_path / "logs"),
        },
        "logging": {"level": "WARNING", "to_file": False},
        "save": {"save_model": True, "overwrite_existing": True},
    }
    path = tmp_path / "train.yaml"
    path.write_text(yaml.safe_dump(cfg), encoding="utf-8")
    return str(path)
