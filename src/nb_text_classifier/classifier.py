"""Multinomial Naive Bayes text classifier with Laplace smoothing.

Training accumulates token counts per category; classification scores each
category as::

    log((total[c] + 1) / (sum(total) + num_categories))
        + sum over tokens w of log((count[c][w] + 1) / (total[c] + |V|))

and returns the highest-scoring category. ``sum(total)`` counts tokens, not
training documents.

Example::

    classifier = NaiveBayesClassifier()
    classifier.train("I love cats", "positive")
    classifier.train("I hate dogs", "negative")
    classifier.classify("I love my cats")    # "positive"

    classifier.save_model("model.json")
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional

from . import evaluation, persistence
from .evaluation import LabeledData, PrecisionRecallF1
from .models import CategoryStats, Model
from .preprocessing import TextPreprocessor

logger = logging.getLogger(__name__)


class NaiveBayesClassifier:
    """Trainable text classifier.

    Args:
        stop_words: Stop words for the default preprocessor. ``None`` uses
            NLTK's English list.
        n: N-gram size for the default preprocessor.
        preprocessor: Fully configured preprocessor; overrides
            ``stop_words`` and ``n``.
        track_term_index: Keep a per-category TF-IDF index for
            :meth:`important_words`. Scoring does not depend on it.
    """

    def __init__(
        self,
        stop_words: Optional[Iterable[str]] = None,
        n: int = 1,
        preprocessor: Optional[TextPreprocessor] = None,
        track_term_index: bool = True,
    ) -> None:
        self.preprocessor = preprocessor or TextPreprocessor(stop_words=stop_words, n=n)
        self.track_term_index = track_term_index
        self.model = Model()

    @property
    def stop_words(self) -> frozenset[str]:
        return self.preprocessor.stop_words

    @property
    def n(self) -> int:
        return self.preprocessor.n

    @property
    def categories(self) -> list[str]:
        """Known category names in creation order."""
        return self.model.category_names

    @property
    def vocabulary(self) -> set[str]:
        return self.model.vocabulary

    def category_stats(self, category: str) -> CategoryStats:
        return self.model.categories[category]

    def preprocess(self, text: str) -> list[str]:
        return self.preprocessor.preprocess(text)

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def train(self, text: str, category: str) -> None:
        """Add one labeled example to the model."""
        tokens = self.preprocess(text)
        self.model.add_tokens(category, tokens, track_term_index=self.track_term_index)
        logger.debug("Trained %d tokens into %r", len(tokens), category)

    def train_many(self, examples: Iterable[tuple[str, str]]) -> None:
        """Train on a sequence of ``(text, category)`` pairs."""
        for text, category in examples:
            self.train(text, category)

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def total_examples(self) -> int:
        return self.model.total_examples()

    def scores(self, text: str) -> dict[str, float]:
        """Unnormalized log score for every category, in creation order.

        With an empty vocabulary every token term is ``log(1 / 0)``, taken
        as ``+inf``.
        """
        tokens = self.preprocess(text)
        categories = self.model.categories
        vocab_size = len(self.model.vocabulary)
        prior_denominator = self.total_examples() + len(categories)

        scores: dict[str, float] = {}
        for name, stats in categories.items():
            score = math.log((stats.total + 1) / prior_denominator)
            likelihood_denominator = stats.total + vocab_size
            for token in tokens:
                if likelihood_denominator == 0:
                    score += math.inf
                    continue
                score += math.log((stats.count(token) + 1) / likelihood_denominator)
            scores[name] = score
        return scores

    def classify(self, text: str) -> Optional[str]:
        """Most likely category for ``text``.

        Exact ties go to the category created first. Returns ``None`` when
        nothing has been trained yet.
        """
        scores = self.scores(text)
        if not scores:
            return None
        return max(scores, key=scores.get)  # type: ignore[arg-type]

    def classify_batch(self, texts: Iterable[str]) -> list[Optional[str]]:
        return [self.classify(text) for text in texts]

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def important_words(
        self,
        category: Optional[str] = None,
        top_n: int = 10,
    ) -> dict[str, list[tuple[str, float]]]:
        """Highest TF-IDF terms per category.

        Args:
            category: Restrict the report to one category.
            top_n: Number of terms per category.

        Returns:
            Mapping of category name to ``(term, score)`` pairs, best first.
            Categories without a term index map to an empty list.

        Raises:
            ValueError: If ``category`` is not a known category.
        """
        if category is not None and category not in self.model.categories:
            raise ValueError(f"Unknown category: {category}. Known: {self.categories}")

        names = [category] if category is not None else self.categories
        report: dict[str, list[tuple[str, float]]] = {}
        for name in names:
            index = self.model.categories[name].term_index
            report[name] = index.top_terms(top_n) if index is not None else []
        return report

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluate(self, test_data: LabeledData) -> float:
        """Accuracy on ``test_data``."""
        return evaluation.evaluate(self, test_data)

    def precision_recall_f1(self, test_data: LabeledData) -> PrecisionRecallF1:
        return evaluation.precision_recall_f1(self, test_data)

    def cross_validate(self, data: LabeledData, k: int = 5) -> float:
        """Mean accuracy of ``k``-fold cross-validation.

        Each fold trains a fresh classifier with this classifier's
        configuration; this instance's model is not touched.
        """
        return evaluation.cross_validate(data, k, self.spawn)

    def spawn(self) -> "NaiveBayesClassifier":
        """Untrained classifier sharing this one's preprocessing setup."""
        return type(self)(
            preprocessor=self.preprocessor,
            track_term_index=self.track_term_index,
        )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save_model(self, destination: persistence.Destination) -> bool:
        """Write the model snapshot. Failures are logged; returns success."""
        return persistence.save_model(self.model, destination)

    def load_model(self, source: persistence.Destination) -> bool:
        """Replace the model with a stored snapshot.

        On failure the error is logged, the current model is kept and
        ``False`` is returned.
        """
        model = persistence.load_model(source)
        if model is None:
            return False
        self.model = model
        return True

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(n={self.n}, categories={len(self.categories)}, "
            f"vocabulary={len(self.vocabulary)})"
        )
