"""Accuracy, precision/recall/F1 and k-fold cross-validation.

All functions take a labeled dataset: a sequence of ``(text, category)``
pairs. Degenerate inputs (an empty test set, no positive predictions)
produce ``nan`` instead of raising.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Sequence

if TYPE_CHECKING:
    from .classifier import NaiveBayesClassifier

logger = logging.getLogger(__name__)

LabeledData = Sequence[tuple[str, str]]


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else math.nan


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------

@dataclass
class ConfusionCounts:
    """True positive, false positive and false negative counts."""

    tp: int = 0
    fp: int = 0
    fn: int = 0

    def __add__(self, other: "ConfusionCounts") -> "ConfusionCounts":
        return ConfusionCounts(
            tp=self.tp + other.tp,
            fp=self.fp + other.fp,
            fn=self.fn + other.fn,
        )


@dataclass
class PrecisionRecallF1:
    """Micro-averaged precision, recall and F1."""

    precision: float
    recall: float
    f1: float

    def to_dict(self) -> dict:
        return {
            "precision": self.precision,
            "recall": self.recall,
            "f1": self.f1,
        }


def evaluate(classifier: "NaiveBayesClassifier", test_data: LabeledData) -> float:
    """Fraction of examples whose predicted category matches the label."""
    correct = sum(
        1 for text, true_category in test_data
        if classifier.classify(text) == true_category
    )
    return _ratio(correct, len(test_data))


def confusion_counts(
    classifier: "NaiveBayesClassifier",
    test_data: LabeledData,
) -> dict[str, ConfusionCounts]:
    """Per-category TP/FP/FN counts.

    A correct prediction is a TP for its category. A wrong one is a FN for
    the true category and a FP for the predicted one.
    """
    counts: dict[str, ConfusionCounts] = {}
    for text, true_category in test_data:
        predicted = classifier.classify(text)
        truth = counts.setdefault(true_category, ConfusionCounts())
        if predicted == true_category:
            truth.tp += 1
        else:
            truth.fn += 1
            counts.setdefault(predicted, ConfusionCounts()).fp += 1
    return counts


def precision_recall_f1(
    classifier: "NaiveBayesClassifier",
    test_data: LabeledData,
) -> PrecisionRecallF1:
    """Precision, recall and F1 over globally summed confusion counts.

    Zero denominators yield ``nan`` for the affected metric.
    """
    totals = sum(confusion_counts(classifier, test_data).values(), ConfusionCounts())

    precision = _ratio(totals.tp, totals.tp + totals.fp)
    recall = _ratio(totals.tp, totals.tp + totals.fn)
    f1 = _ratio(2 * precision * recall, precision + recall)
    return PrecisionRecallF1(precision=precision, recall=recall, f1=f1)


# ---------------------------------------------------------------------------
# Cross-Validation
# ---------------------------------------------------------------------------

def k_fold_splits(n_examples: int, k: int) -> list[tuple[list[int], list[int]]]:
    """Contiguous k-fold ``(train_indices, validation_indices)`` splits.

    Every fold holds ``n_examples // k`` examples. The trailing
    ``n_examples % k`` examples belong to no fold and appear in neither
    list of any split.

    Raises:
        ValueError: If ``k`` is less than 1.
    """
    if k < 1:
        raise ValueError(f"k must be >= 1, got {k}")

    fold_size = n_examples // k
    covered = fold_size * k
    splits: list[tuple[list[int], list[int]]] = []
    for i in range(k):
        start, end = i * fold_size, (i + 1) * fold_size
        validation = list(range(start, end))
        train = list(range(0, start)) + list(range(end, covered))
        splits.append((train, validation))
    return splits


def cross_validate(
    data: LabeledData,
    k: int,
    classifier_factory: Callable[[], "NaiveBayesClassifier"],
) -> float:
    """Mean validation accuracy over ``k`` contiguous folds.

    A fresh classifier from ``classifier_factory`` is trained for each fold.

    Raises:
        ValueError: If ``k`` is less than 1.
    """
    accuracies: list[float] = []
    for fold, (train_idx, val_idx) in enumerate(k_fold_splits(len(data), k)):
        classifier = classifier_factory()
        classifier.train_many(data[i] for i in train_idx)

        accuracy = evaluate(classifier, [data[i] for i in val_idx])
        logger.debug(
            "Fold %d/%d: trained on %d, validated on %d, accuracy %.4f",
            fold + 1, k, len(train_idx), len(val_idx), accuracy,
        )
        accuracies.append(accuracy)

    return sum(accuracies) / len(accuracies)
