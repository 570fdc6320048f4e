"""Data models for the Naive Bayes model store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from .tfidf import TermFrequencyIndex


@dataclass
class CategoryStats:
    """Aggregate training statistics for one category.

    Attributes:
        total: Number of tokens (with repetition) trained into the category.
        word_count: Occurrences of each token in the category.
        term_index: Optional TF-IDF index with one document per training
            call. Diagnostic only.
    """

    total: int = 0
    word_count: dict[str, int] = field(default_factory=dict)
    term_index: Optional[TermFrequencyIndex] = field(default=None, repr=False)

    def count(self, token: str) -> int:
        return self.word_count.get(token, 0)

    def to_dict(self) -> dict:
        data: dict = {
            "total": self.total,
            "word_count": dict(self.word_count),
        }
        if self.term_index is not None:
            data["term_index"] = self.term_index.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CategoryStats":
        # "wordCount" / "tfidf" are the key names of older snapshots
        word_count = data.get("word_count", data.get("wordCount", {}))
        index_data = data.get("term_index", data.get("tfidf"))
        return cls(
            total=int(data["total"]),
            word_count={token: int(c) for token, c in word_count.items()},
            term_index=(
                TermFrequencyIndex.from_dict(index_data)
                if isinstance(index_data, dict)
                else None
            ),
        )


@dataclass
class Model:
    """All category statistics plus the global vocabulary.

    Categories keep insertion order; classification breaks score ties in
    favour of the category that was created first.
    """

    categories: dict[str, CategoryStats] = field(default_factory=dict)
    vocabulary: set[str] = field(default_factory=set)

    @property
    def category_names(self) -> list[str]:
        return list(self.categories)

    def total_examples(self) -> int:
        """Sum of ``total`` over all categories (a token count)."""
        return sum(stats.total for stats in self.categories.values())

    def ensure_category(self, name: str, track_term_index: bool = True) -> CategoryStats:
        stats = self.categories.get(name)
        if stats is None:
            stats = CategoryStats(
                term_index=TermFrequencyIndex() if track_term_index else None,
            )
            self.categories[name] = stats
        return stats

    def add_tokens(
        self,
        category: str,
        tokens: Iterable[str],
        track_term_index: bool = True,
    ) -> CategoryStats:
        """Record one training document's tokens under ``category``."""
        tokens = list(tokens)
        stats = self.ensure_category(category, track_term_index)
        if stats.term_index is not None:
            stats.term_index.add_document(tokens)

        for token in tokens:
            stats.word_count[token] = stats.word_count.get(token, 0) + 1
            self.vocabulary.add(token)
            stats.total += 1
        return stats

    def to_dict(self) -> dict:
        return {
            "categories": {
                name: stats.to_dict() for name, stats in self.categories.items()
            },
            "vocab": sorted(self.vocabulary),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Model":
        return cls(
            categories={
                name: CategoryStats.from_dict(stats)
                for name, stats in data["categories"].items()
            },
            vocabulary=set(data["vocab"]),
        )
