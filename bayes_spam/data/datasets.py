"""
Data configuration utilities for the spam/ham corpora.

This module is responsible for:
- reading the data configuration from config/data.yaml
- exposing the "corpus" section (training/testing folders, file filter,
  text encoding)

Reading the corpora themselves lives in bayes_spam.data.corpus.
"""

from __future__ import annotations

import os
from typing import Any, Dict

import yaml


DEFAULT_DATA_CONFIG_PATH = "config/data.yaml"

_REQUIRED_SECTIONS = ("corpus", "preprocessing")


def _load_yaml(path: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file and return it as a dictionary.

    Parameters
    ----------
    path : str
        Path to the YAML file.

    Returns
    -------
    Dict[str, Any]
        Parsed YAML content.

    Raises
    ------
    FileNotFoundError
        If the YAML file does not exist.
    ValueError
        If the YAML file is empty or cannot be parsed into a mapping.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)

    if cfg is None or not isinstance(cfg, dict):
        raise ValueError(f"Config file is empty or invalid: {path}")

    return cfg


def load_data_config(config_path: str = DEFAULT_DATA_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load and return the full data configuration dictionary.

    Parameters
    ----------
    config_path : str, optional
        Path to the data YAML configuration file.

    Returns
    -------
    Dict[str, Any]
        Dictionary containing the "corpus" and "preprocessing" sections.
    """
    cfg = _load_yaml(config_path)

    for section in _REQUIRED_SECTIONS:
        if section not in cfg:
            raise KeyError(f'Missing "{section}" section in data config: {config_path}')

    return cfg


def get_corpus_config(
    config_path: str = DEFAULT_DATA_CONFIG_PATH,
) -> Dict[str, Any]:
    """
    Retrieve the 'corpus' section from the data configuration, with
    defaults filled in for the file filter and text decoding.
    """
    corpus_cfg = dict(load_data_config(config_path)["corpus"] or {})
    corpus_cfg.setdefault("file_extension", ".txt")
    corpus_cfg.setdefault("encoding", "utf-8")
    corpus_cfg.setdefault("encoding_errors", "replace")
    return corpus_cfg
