"""nb-text-classifier -- multinomial Naive Bayes text classification."""

__version__ = "0.1.0"

from .classifier import NaiveBayesClassifier
from .evaluation import (
    ConfusionCounts,
    PrecisionRecallF1,
    confusion_counts,
    cross_validate,
    evaluate,
    k_fold_splits,
    precision_recall_f1,
)
from .models import CategoryStats, Model
from .persistence import dumps, load_model, loads, save_model
from .preprocessing import (
    TextPreprocessor,
    default_stop_words,
    ensure_nltk_resources,
    ngrams,
)
from .tfidf import TermFrequencyIndex

__all__ = [
    # Core
    "NaiveBayesClassifier",
    "Model",
    "CategoryStats",
    # Preprocessing
    "TextPreprocessor",
    "default_stop_words",
    "ensure_nltk_resources",
    "ngrams",
    "TermFrequencyIndex",
    # Evaluation
    "evaluate",
    "precision_recall_f1",
    "confusion_counts",
    "cross_validate",
    "k_fold_splits",
    "ConfusionCounts",
    "PrecisionRecallF1",
    # Persistence
    "dumps",
    "loads",
    "save_model",
    "load_model",
]
