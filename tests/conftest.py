"""Shared test fixtures for nb-text-classifier tests."""

from __future__ import annotations

from typing import Callable, Iterable

import pytest

from nb_text_classifier.classifier import NaiveBayesClassifier
from nb_text_classifier.preprocessing import TextPreprocessor, ensure_nltk_resources


class IdentityStemmer:
    def stem(self, word: str) -> str:
        return word


class IdentityLemmatizer:
    def lemmatize(self, word: str) -> str:
        return word


@pytest.fixture(scope="session", autouse=True)
def nltk_resources() -> None:
    """Stop-word and WordNet corpora used by the default pipeline."""
    if not ensure_nltk_resources():
        pytest.skip("NLTK corpora are not available")


@pytest.fixture
def make_preprocessor() -> Callable[..., TextPreprocessor]:
    """Factory for preprocessors that skip stemming and lemmatization.

    Keeps expected tokens exact in tests that check arithmetic rather than
    NLTK behaviour.
    """

    def _make(n: int = 1, stop_words: Iterable[str] = ()) -> TextPreprocessor:
        return TextPreprocessor(
            stop_words=stop_words,
            n=n,
            stemmer=IdentityStemmer(),
            lemmatizer=IdentityLemmatizer(),
        )

    return _make


@pytest.fixture
def plain_classifier(make_preprocessor) -> NaiveBayesClassifier:
    """Untrained classifier with identity stemming and no stop words."""
    return NaiveBayesClassifier(preprocessor=make_preprocessor())


@pytest.fixture
def sentiment_classifier() -> NaiveBayesClassifier:
    """Default NLTK pipeline trained on two tiny sentiment examples."""
    classifier = NaiveBayesClassifier()
    classifier.train("I love cats", "positive")
    classifier.train("I hate dogs", "negative")
    return classifier


@pytest.fixture
def fruit_veg_data() -> list[tuple[str, str]]:
    """Alternating, trivially separable examples (10 items)."""
    data = []
    for _ in range(5):
        data.append(("apple banana cherry", "fruit"))
        data.append(("carrot potato onion", "vegetable"))
    return data
