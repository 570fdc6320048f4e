"""Text preprocessing for Naive Bayes classification.

Turns raw text into the token sequence the classifier trains and scores on:

1. lowercase
2. strip punctuation (anything that is not a word character or whitespace)
3. split on whitespace
4. drop stop words
5. stem each token, then lemmatize the stem
6. optionally combine consecutive tokens into space-joined n-grams

Stemming, lemmatization and the default stop-word list come from NLTK.
The lemmatizer is applied to the already-stemmed form, so its output can
differ from a plain dictionary lemma lookup.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Iterable, Optional, Protocol

import nltk
from nltk.stem import PorterStemmer, WordNetLemmatizer

logger = logging.getLogger(__name__)

_PUNCT_RE = re.compile(r"[^\w\s]")

# (lookup path, download id) pairs needed by the default pipeline
_NLTK_RESOURCES: tuple[tuple[str, str], ...] = (
    ("corpora/stopwords", "stopwords"),
    ("corpora/wordnet", "wordnet"),
    ("corpora/omw-1.4", "omw-1.4"),
)


class Stemmer(Protocol):
    def stem(self, word: str) -> str: ...


class Lemmatizer(Protocol):
    def lemmatize(self, word: str) -> str: ...


def ensure_nltk_resources(quiet: bool = True) -> bool:
    """Make sure the NLTK corpora used by the default pipeline are present.

    Missing corpora are downloaded. Returns ``False`` if any corpus could
    not be found or fetched; the failure is logged rather than raised.
    """
    ok = True
    for path, package in _NLTK_RESOURCES:
        try:
            nltk.data.find(path)
            continue
        except LookupError:
            logger.debug("NLTK resource %s missing, downloading", package)

        if not nltk.download(package, quiet=quiet):
            logger.warning("Could not download NLTK resource %r", package)
            ok = False
    return ok


@lru_cache(maxsize=1)
def default_stop_words() -> frozenset[str]:
    """NLTK's English stop-word list."""
    from nltk.corpus import stopwords

    return frozenset(stopwords.words("english"))


def ngrams(tokens: list[str], n: int) -> list[str]:
    """Join each window of ``n`` consecutive tokens with a single space.

    With fewer than ``n`` tokens the result is empty.
    """
    if n <= 1:
        return tokens
    return [" ".join(tokens[i : i + n]) for i in range(len(tokens) - n + 1)]


class TextPreprocessor:
    """Normalizes raw text into classifier tokens.

    Args:
        stop_words: Tokens to drop after punctuation stripping. Defaults to
            NLTK's English list.
        n: N-gram size. ``1`` keeps single tokens; larger values emit only
            the joined n-grams.
        stemmer: Object with a ``stem(word)`` method (NLTK Porter by default).
        lemmatizer: Object with a ``lemmatize(word)`` method (NLTK WordNet by
            default).
    """

    def __init__(
        self,
        stop_words: Optional[Iterable[str]] = None,
        n: int = 1,
        stemmer: Optional[Stemmer] = None,
        lemmatizer: Optional[Lemmatizer] = None,
    ) -> None:
        if n < 1:
            raise ValueError(f"n-gram size must be >= 1, got {n}")
        self.stop_words: frozenset[str] = (
            default_stop_words() if stop_words is None else frozenset(stop_words)
        )
        self.n = n
        self.stemmer = stemmer or PorterStemmer()
        self.lemmatizer = lemmatizer or WordNetLemmatizer()

    def tokenize(self, text: str) -> list[str]:
        """Steps 1-4: lowercase, strip punctuation, split, drop stop words."""
        cleaned = _PUNCT_RE.sub("", text.lower())
        return [word for word in cleaned.split() if word not in self.stop_words]

    def normalize(self, word: str) -> str:
        """Stem ``word`` and lemmatize the stem."""
        return self.lemmatizer.lemmatize(self.stemmer.stem(word))

    def preprocess(self, text: str) -> list[str]:
        """Full pipeline: tokens (or n-grams) ready for training/scoring."""
        words = [self.normalize(word) for word in self.tokenize(text)]
        return ngrams(words, self.n)

    def __call__(self, text: str) -> list[str]:
        return self.preprocess(text)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(n={self.n}, "
            f"stop_words=<{len(self.stop_words)} words>)"
        )
