"""
Tests for the config and logging helpers.
"""

from __future__ import annotations

import logging

import pytest
import yaml

from bayes_spam.utils.training_utils import ensure_dir_exists, get_logger, load_train_config


def test_train_config_requires_sections(tmp_path):
    path = tmp_path / "train.yaml"
    path.write_text(yaml.safe_dump({"model": {}}), encoding="utf-8")
    with pytest.raises(KeyError, match="paths"):
        load_train_config(str(path))


def test_train_config_empty(tmp_path):
    path = tmp_path / "train.yaml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        load_train_config(str(path))


def test_ensure_dir_exists(tmp_path):
    target = tmp_path / "a" / "b"
    ensure_dir_exists(str(target))
    ensure_dir_exists(str(target))
    assert target.is_dir()


def test_get_logger_writes_log_file(tmp_path):
    config = {
        "paths": {"logs_dir": str(tmp_path / "logs")},
        "logging": {"level": "debug", "to_file": True, "file_prefix": "unit"},
    }
    logger = get_logger("test_training_utils.file", config, log_file_suffix="probe")
    logger.debug("hello")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    assert not logger.propagate
    log_path = tmp_path / "logs" / "unit_probe.log"
    assert "hello" in log_path.read_text(encoding="utf-8")

    # A second call reuses the configured handlers.
    assert get_logger("test_training_utils.file", config) is logger
    assert len(logger.handlers) == 2


def test_get_logger_unknown_level_defaults_to_info():
    logger = get_logger(
        "test_training_utils.console",
        {"logging": {"level": "chatty", "to_file": False}},
    )
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
