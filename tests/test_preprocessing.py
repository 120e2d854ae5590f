"""
Tests for text normalization.

These tests validate that:

- only alphabetic runs become terms; digits and punctuation split words
- terms are lowercased and stopwords are removed before stemming
- the Porter stemmer reduces inflected forms
- stopword sources and stemmer names are validated
- a normalizer can be built from the 'preprocessing' config section
"""

from __future__ import annotations

import pytest

from bayes_spam.features.preprocessing import (
    DEFAULT_STOPWORDS_PATH,
    Normalizer,
    build_stemmer,
    get_stopword_set,
    load_stopwords_file,
)


def _packaged_normalizer() -> Normalizer:
    return Normalizer(stopwords=load_stopwords_file(), stemmer=build_stemmer("porter"))


def test_alphabetic_tokens_only():
    normalizer = Normalizer(stopwords=(), stemmer=None)
    assert normalizer.normalize("Hello, world 42 foo_bar 3x!") == [
        "hello",
        "world",
        "foo",
        "bar",
        "x",
    ]


def test_empty_and_symbol_only_lines():
    normalizer = _packaged_normalizer()
    assert normalizer.normalize("") == []
    assert normalizer.normalize("1234 !!! $$$") == []


def test_stopwords_removed_case_insensitively():
    normalizer = Normalizer(stopwords={"the", "is"}, stemmer=None)
    assert normalizer.normalize("The offer IS real") == ["offer", "real"]


def test_porter_stemming():
    normalizer = Normalizer(stopwords=(), stemmer=build_stemmer("porter"))
    assert normalizer.normalize("meetings running viagra") == ["meet", "run", "viagra"]


def test_lowercase_can_be_disabled():
    normalizer = Normalizer(stopwords=(), stemmer=None, lowercase=False)
    assert normalizer.normalize("Free CASH") == ["Free", "CASH"]


def test_normalize_text_processes_every_line():
    normalizer = Normalizer(stopwords=(), stemmer=None)
    assert normalizer.normalize_text("cash\nprize\r\nnow") == ["cash", "prize", "now"]
    assert normalizer("cash") == ["cash"]


def test_normalize_is_deterministic():
    normalizer = _packaged_normalizer()
    text = "Congratulations! You have WON a free cruise."
    assert normalizer.normalize(text) == normalizer.normalize(text)


def test_packaged_stopword_file(tmp_path):
    words = load_stopwords_file(DEFAULT_STOPWORDS_PATH)
    assert {"the", "and", "is"} <= words

    custom = tmp_path / "stop.txt"
    custom.write_text("Foo, bar,\nbaz,,\n", encoding="utf-8")
    assert load_stopwords_file(str(custom)) == frozenset({"foo", "bar", "baz"})


def test_missing_stopword_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_stopwords_file(str(tmp_path / "nope.txt"))


def test_stopword_sources():
    assert "the" in get_stopword_set("sklearn")
    assert "the" in get_stopword_set("file")
    with pytest.raises(ValueError):
        get_stopword_set("bogus")
    with pytest.raises(ValueError):
        get_stopword_set("sklearn", language="german")


def test_stemmer_names():
    assert build_stemmer("snowball").stem("running") == "run"
    with pytest.raises(ValueError):
        build_stemmer("lancaster-ish")


def test_from_config_respects_switches():
    normalizer = Normalizer.from_config(
        {
            "lowercase": True,
            "stopwords": {"enabled": False},
            "stemming": {"enabled": False},
        }
    )
    assert normalizer.stopwords == frozenset()
    assert normalizer.stemmer is None
    assert normalizer.normalize("The Meetings") == ["the", "meetings"]


def test_from_config_reads_data_yaml(data_config_path):
    normalizer = Normalizer.from_config(config_path=data_config_path)
    assert normalizer.normalize("The meetings") == ["meet"]
