"""
Text normalization for the Bayesian spam filter.

A document is turned into a sequence of terms line by line:

- extract alphabetic runs ([a-zA-Z]+); digits and punctuation split words
- lowercase
- stopword removal
- stemming (Porter by default, Snowball optional)

The pipeline is configured by the 'preprocessing' section of
config/data.yaml. Stopwords can come from the comma-separated list
shipped with the package, from scikit-learn, or from NLTK's corpus.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Any, Dict, FrozenSet, Iterable, List, Optional

from nltk.corpus import stopwords as nltk_stopwords
from nltk.stem import PorterStemmer, SnowballStemmer
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

from bayes_spam.data.datasets import DEFAULT_DATA_CONFIG_PATH, load_data_config


logger = logging.getLogger(__name__)

DEFAULT_STOPWORDS_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    "resources",
    "stop_words.txt",
)

_ALPHA_RE = re.compile(r"[a-zA-Z]+")


# ---------------------------------------------------------------------------
# Stopwords
# ---------------------------------------------------------------------------


def load_stopwords_file(path: str = DEFAULT_STOPWORDS_PATH) -> FrozenSet[str]:
    """
    Load stopwords from a text file of comma-separated words.

    Words may be split across any number of lines; surrounding
    whitespace and empty entries are ignored.

    Parameters
    ----------
    path : str
        Path to the stopword file.

    Returns
    -------
    FrozenSet[str]
        Lowercased stopwords.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Stopword file not found: {path}")

    words = set()
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            for word in line.split(","):
                word = word.strip().lower()
                if word:
                    words.add(word)
    return frozenset(words)


def get_stopword_set(
    source: str = "file",
    path: Optional[str] = None,
    language: str = "english",
) -> FrozenSet[str]:
    """
    Build the stopword set for the requested source.

    Parameters
    ----------
    source : str
        "file" (packaged or custom comma-separated list), "sklearn"
        (scikit-learn's English list) or "nltk" (NLTK stopword corpus,
        which must have been downloaded with nltk.download("stopwords")).
    path : Optional[str]
        Stopword file for the "file" source. Defaults to the packaged list.
    language : str
        Language for the "nltk" source.

    Returns
    -------
    FrozenSet[str]
        Set of stopwords.

    Raises
    ------
    ValueError
        If the source is unknown, or "sklearn" is requested for a
        language other than English.
    """
    source = (source or "file").lower()

    if source == "file":
        return load_stopwords_file(path or DEFAULT_STOPWORDS_PATH)
    if source == "sklearn":
        if (language or "english").lower() != "english":
            raise ValueError("scikit-learn only ships English stopwords.")
        return frozenset(ENGLISH_STOP_WORDS)
    if source == "nltk":
        return frozenset(nltk_stopwords.words((language or "english").lower()))

    raise ValueError(f"Unknown stopword source: {source!r}")


# ---------------------------------------------------------------------------
# Stemming
# ---------------------------------------------------------------------------


def build_stemmer(algorithm: str = "porter"):
    """
    Build a stemming object based on the chosen algorithm.

    Parameters
    ----------
    algorithm : str
        Name of the stemming algorithm: "porter" or "snowball".

    Returns
    -------
    object
        Stemmer object with a .stem(token) method.

    Raises
    ------
    ValueError
        If the algorithm is unknown.
    """
    algo = (algorithm or "porter").lower()
    if algo == "porter":
        return PorterStemmer()
    if algo == "snowball":
        return SnowballStemmer("english")
    raise ValueError(f"Unknown stemming algorithm: {algorithm!r}")


# ---------------------------------------------------------------------------
# Normalizer
# ---------------------------------------------------------------------------


class Normalizer:
    """
    Converts raw text into a sequence of normalized terms.

    The stopword set and the stemmer are fixed at construction; calls to
    :meth:`normalize` are deterministic and keep no state between calls.

    Parameters
    ----------
    stopwords : Iterable[str]
        Words dropped before stemming (compared after lowercasing).
    stemmer : object or None
        Object with a ``stem(token)`` method; None disables stemming.
    lowercase : bool
        Lowercase tokens before stopword filtering and stemming.
    """

    def __init__(
        self,
        stopwords: Iterable[str] = (),
        stemmer=None,
        lowercase: bool = True,
    ) -> None:
        self.stopwords = frozenset(w.lower() for w in stopwords)
        self.stemmer = stemmer
        self.lowercase = lowercase

    @classmethod
    def from_config(
        cls,
        preprocessing_cfg: Optional[Dict[str, Any]] = None,
        config_path: str = DEFAULT_DATA_CONFIG_PATH,
    ) -> "Normalizer":
        """
        Build a normalizer from the 'preprocessing' config section.

        If ``preprocessing_cfg`` is None the section is read from
        ``config_path``.
        """
        if preprocessing_cfg is None:
            preprocessing_cfg = load_data_config(config_path)["preprocessing"] or {}

        sw_cfg = preprocessing_cfg.get("stopwords", {}) or {}
        stopwords: FrozenSet[str] = frozenset()
        if bool(sw_cfg.get("enabled", True)):
            stopwords = get_stopword_set(
                source=sw_cfg.get("source", "file"),
                path=sw_cfg.get("path"),
                language=sw_cfg.get("language", "english"),
            )

        stem_cfg = preprocessing_cfg.get("stemming", {}) or {}
        stemmer = None
        if bool(stem_cfg.get("enabled", True)):
            stemmer = build_stemmer(stem_cfg.get("algorithm", "porter"))

        normalizer = cls(
            stopwords=stopwords,
            stemmer=stemmer,
            lowercase=bool(preprocessing_cfg.get("lowercase", True)),
        )
        logger.debug(
            "Normalizer built with %d stopwords, stemmer=%s",
            len(normalizer.stopwords),
            type(stemmer).__name__ if stemmer is not None else None,
        )
        return normalizer

    def normalize(self, line: str) -> List[str]:
        """
        Normalize one line of text into terms.

        Parameters
        ----------
        line : str
            Raw text line.

        Returns
        -------
        List[str]
            Terms in order of appearance; may be empty.
        """
        terms: List[str] = []
        for match in _ALPHA_RE.finditer(line):
            token = match.group()
            if self.lowercase:
                token = token.lower()
            if token.lower() in self.stopwords:
                continue
            if self.stemmer is not None:
                token = self.stemmer.stem(token)
                # Stemmers may return an empty string for odd input.
                if not token.isalpha():
                    continue
            terms.append(token)
        return terms

    def normalize_text(self, text: str) -> List[str]:
        """Normalize a whole document, line by line."""
        terms: List[str] = []
        for line in text.splitlines():
            terms.extend(self.normalize(line))
        return terms

    __call__ = normalize_text
