"""
Corpus reading utilities.

A corpus is a directory of plain-text documents, one document per file.
Training and testing use one directory per class (spam, ham). This
module provides helpers to:

- list the document files of a corpus directory (filtered by extension)
- read a document's raw text
- load a labeled spam/ham corpus into a pandas DataFrame

Missing or invalid directories are reported as explicit errors rather
than treated as empty corpora.
"""

from __future__ import annotations

import logging
import os
from typing import Iterator, List, Optional, Tuple

import pandas as pd

from bayes_spam.models.labels import Label


logger = logging.getLogger(__name__)

CORPUS_COLUMNS = ["path", "text", "label", "label_id"]


def list_corpus_files(
    directory: str,
    file_extension: str = ".txt",
    kind: str = "Corpus",
) -> List[str]:
    """
    List document files in a corpus directory.

    Parameters
    ----------
    directory : str
        Corpus directory.
    file_extension : str
        Only files whose name ends with this suffix are kept. An empty
        string keeps every regular file.
    kind : str
        Human-readable corpus name used in error messages, e.g.
        "Spam training".

    Returns
    -------
    List[str]
        Sorted list of file paths.

    Raises
    ------
    FileNotFoundError
        If the directory does not exist.
    NotADirectoryError
        If the path exists but is not a directory.
    """
    if not os.path.exists(directory):
        raise FileNotFoundError(f"{kind} directory not found: {directory}")
    if not os.path.isdir(directory):
        raise NotADirectoryError(f"{kind} path is not a directory: {directory}")

    files = []
    for name in sorted(os.listdir(directory)):
        path = os.path.join(directory, name)
        if not os.path.isfile(path):
            continue
        if file_extension and not name.endswith(file_extension):
            continue
        files.append(path)

    logger.debug("%d files found in %s directory %s", len(files), kind.lower(), directory)
    return files


def read_document(
    path: str,
    encoding: str = "utf-8",
    errors: str = "replace",
) -> str:
    """
    Read the raw text of a single document.

    Errors raised by the filesystem (missing file, permissions) propagate
    to the caller.
    """
    with open(path, "r", encoding=encoding, errors=errors) as f:
        return f.read()


def iter_corpus(
    directory: str,
    file_extension: str = ".txt",
    encoding: str = "utf-8",
    errors: str = "replace",
    kind: str = "Corpus",
) -> Iterator[Tuple[str, str]]:
    """
    Yield (path, text) pairs for every document of a corpus directory.
    """
    for path in list_corpus_files(directory, file_extension=file_extension, kind=kind):
        yield path, read_document(path, encoding=encoding, errors=errors)


def load_labeled_corpus(
    spam_dir: str,
    ham_dir: str,
    file_extension: str = ".txt",
    encoding: str = "utf-8",
    errors: str = "replace",
    stage: Optional[str] = None,
) -> pd.DataFrame:
    """
    Load a spam directory and a ham directory into a single DataFrame.

    Parameters
    ----------
    spam_dir : str
        Directory holding spam documents.
    ham_dir : str
        Directory holding ham documents.
    file_extension : str
        File name suffix filter.
    encoding : str
        Text encoding of the documents.
    errors : str
        Decoding error policy passed to open().
    stage : Optional[str]
        "training" or "testing"; only used to phrase error messages.

    Returns
    -------
    pd.DataFrame
        Columns ["path", "text", "label", "label_id"], spam rows first.
    """
    suffix = f" {stage}" if stage else ""
    records = []
    for directory, label in ((spam_dir, Label.SPAM), (ham_dir, Label.HAM)):
        kind = f"{label.value.capitalize()}{suffix}"
        count = 0
        for path, text in iter_corpus(
            directory,
            file_extension=file_extension,
            encoding=encoding,
            errors=errors,
            kind=kind,
        ):
            records.append(
                {
                    "path": path,
                    "text": text,
                    "label": label.value,
                    "label_id": label.label_id,
                }
            )
            count += 1
        logger.info("%d %s files read.", count, kind.lower())

    if not records:
        return pd.DataFrame(columns=CORPUS_COLUMNS)
    return pd.DataFrame.from_records(records, columns=CORPUS_COLUMNS)
