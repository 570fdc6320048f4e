"""Incremental TF-IDF index used for word-importance reporting.

Each training call adds one document to the index of its category. The
index is diagnostic only: classification scores never read from it, so a
classifier can run with index tracking switched off.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Union


@dataclass
class TermFrequencyIndex:
    """Per-document term counts with smoothed IDF weighting.

    Args:
        sublinear_tf: Use ``1 + log(tf)`` instead of raw term frequency.
    """

    sublinear_tf: bool = False
    documents: list[dict[str, int]] = field(default_factory=list, repr=False)

    @property
    def num_docs(self) -> int:
        return len(self.documents)

    def add_document(self, document: Union[str, list[str]]) -> None:
        """Add one document.

        A string is split on whitespace; a list is taken as already
        tokenized, which keeps space-joined n-grams intact.
        """
        terms = document.split() if isinstance(document, str) else document
        self.documents.append(dict(Counter(terms)))

    def document_frequency(self, term: str) -> int:
        return sum(1 for doc in self.documents if term in doc)

    def idf(self, term: str) -> float:
        # Smooth IDF: log((1 + N) / (1 + df)) + 1
        df = self.document_frequency(term)
        return math.log((1 + self.num_docs) / (1 + df)) + 1

    def tfidf(self, term: str, doc_index: int) -> float:
        """TF-IDF weight of ``term`` in the document at ``doc_index``."""
        raw_tf = self.documents[doc_index].get(term, 0)
        if raw_tf == 0:
            return 0.0
        tf = 1 + math.log(raw_tf) if self.sublinear_tf else raw_tf
        return tf * self.idf(term)

    def top_terms(self, top_n: int = 10) -> list[tuple[str, float]]:
        """Terms ranked by TF-IDF summed over all documents.

        Ties are broken alphabetically so the ranking is stable.
        """
        totals: Counter[str] = Counter()
        for i, doc in enumerate(self.documents):
            for term in doc:
                totals[term] += self.tfidf(term, i)

        ranked = sorted(totals.items(), key=lambda x: (-x[1], x[0]))
        return [(term, round(score, 4)) for term, score in ranked[:top_n]]

    def to_dict(self) -> dict:
        return {
            "sublinear_tf": self.sublinear_tf,
            "documents": self.documents,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TermFrequencyIndex":
        """Deserialize an index.

        Accepts the ``documents`` list layout written by other TF-IDF
        implementations too; bookkeeping keys starting with ``__`` are
        ignored.
        """
        index = cls(sublinear_tf=bool(data.get("sublinear_tf", False)))
        for doc in data.get("documents", []):
            index.documents.append({
                term: int(count)
                for term, count in doc.items()
                if not term.startswith("__")
            })
        return index
