"""Tests for the Naive Bayes classifier.

Covers training bookkeeping, the smoothed log-probability scores, tie
breaking, the empty-model boundary and word-importance reporting.
"""

from __future__ import annotations

import math

import pytest

from nb_text_classifier.classifier import NaiveBayesClassifier


# ---------------------------------------------------------------------------
# Training
# ---------------------------------------------------------------------------

class TestTraining:

    def test_new_category_created(self, plain_classifier):
        plain_classifier.train("red green", "colors")
        assert plain_classifier.categories == ["colors"]

    def test_counts_tokens_with_repetition(self, plain_classifier):
        plain_classifier.train("red red green", "colors")
        stats = plain_classifier.category_stats("colors")
        assert stats.total == 3
        assert stats.word_count == {"red": 2, "green": 1}

    def test_vocabulary_grows_across_categories(self, plain_classifier):
        plain_classifier.train("red green", "colors")
        plain_classifier.train("cat green", "things")
        assert plain_classifier.vocabulary == {"red", "green", "cat"}

    def test_training_is_additive(self, plain_classifier):
        plain_classifier.train("red", "colors")
        plain_classifier.train("red blue", "colors")
        stats = plain_classifier.category_stats("colors")
        assert stats.total == 3
        assert stats.word_count["red"] == 2

    def test_empty_text_creates_category_only(self, plain_classifier):
        plain_classifier.train("", "empty")
        assert plain_classifier.categories == ["empty"]
        assert plain_classifier.category_stats("empty").total == 0
        assert plain_classifier.vocabulary == set()

    def test_train_many(self, plain_classifier, fruit_veg_data):
        plain_classifier.train_many(fruit_veg_data)
        assert plain_classifier.categories == ["fruit", "vegetable"]
        assert plain_classifier.total_examples() == 30

    def test_total_equals_sum_of_word_counts(self, sentiment_classifier):
        sentiment_classifier.train("Cats and dogs love playing games", "positive")
        for name in sentiment_classifier.categories:
            stats = sentiment_classifier.category_stats(name)
            assert stats.total == sum(stats.word_count.values())

    def test_vocabulary_matches_word_counts(self, sentiment_classifier):
        seen = set()
        for name in sentiment_classifier.categories:
            seen.update(sentiment_classifier.category_stats(name).word_count)
        assert seen == sentiment_classifier.vocabulary

    def test_ngram_training(self, make_preprocessor):
        classifier = NaiveBayesClassifier(preprocessor=make_preprocessor(n=2))
        classifier.train("new york city", "places")
        assert classifier.vocabulary == {"new york", "york city"}

    def test_term_index_records_documents(self, plain_classifier):
        plain_classifier.train("red green", "colors")
        plain_classifier.train("blue", "colors")
        assert plain_classifier.category_stats("colors").term_index.num_docs == 2

    def test_term_index_can_be_disabled(self, make_preprocessor):
        classifier = NaiveBayesClassifier(
            preprocessor=make_preprocessor(), track_term_index=False
        )
        classifier.train("red", "colors")
        assert classifier.category_stats("colors").term_index is None


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

class TestScores:

    def test_matches_formula(self, plain_classifier):
        plain_classifier.train("a a b", "x")
        plain_classifier.train("c", "y")
        # totals: x=3, y=1; all tokens=4; categories=2; |V|=3
        scores = plain_classifier.scores("a c d")

        expected_x = (
            math.log(4 / 6)
            + math.log(3 / 6)  # a: count 2
            + math.log(1 / 6)  # c: unseen in x
            + math.log(1 / 6)  # d: unseen everywhere
        )
        expected_y = (
            math.log(2 / 6)
            + math.log(1 / 4)
            + math.log(2 / 4)
            + math.log(1 / 4)
        )
        assert scores["x"] == pytest.approx(expected_x)
        assert scores["y"] == pytest.approx(expected_y)

    def test_empty_input_scores_are_priors(self, plain_classifier):
        plain_classifier.train("a a a", "x")
        plain_classifier.train("b", "y")
        scores = plain_classifier.scores("")
        assert scores["x"] == pytest.approx(math.log(4 / 6))
        assert scores["y"] == pytest.approx(math.log(2 / 6))

    def test_scores_in_category_order(self, plain_classifier):
        plain_classifier.train("b", "second")
        plain_classifier.train("a", "first")
        assert list(plain_classifier.scores("a")) == ["second", "first"]

    def test_no_categories_no_scores(self, plain_classifier):
        assert plain_classifier.scores("anything") == {}

    def test_total_examples_counts_tokens(self, plain_classifier):
        plain_classifier.train("a b c", "x")
        plain_classifier.train("d", "x")
        assert plain_classifier.total_examples() == 4


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

class TestClassify:

    def test_untrained_returns_none(self, plain_classifier):
        assert plain_classifier.classify("anything at all") is None

    def test_single_category_is_determinate(self):
        classifier = NaiveBayesClassifier()
        classifier.train("The quick brown fox", "animals")
        assert classifier.classify("The quick brown fox") == "animals"

    def test_single_category_any_text(self, plain_classifier):
        plain_classifier.train("red", "colors")
        assert plain_classifier.classify("completely unrelated words") == "colors"

    def test_sentiment_example(self, sentiment_classifier):
        result = sentiment_classifier.classify("I love dogs")
        assert result in ("positive", "negative")

    def test_sentiment_example_scores_balanced(self, sentiment_classifier):
        # one known word per category, so both scores come out the same
        scores = sentiment_classifier.scores("I love dogs")
        assert scores["positive"] == pytest.approx(scores["negative"])

    def test_clear_cases(self, sentiment_classifier):
        assert sentiment_classifier.classify("I love my cats") == "positive"
        assert sentiment_classifier.classify("I hate these dogs") == "negative"

    def test_exact_tie_first_seen_wins(self, plain_classifier):
        plain_classifier.train("a", "one")
        plain_classifier.train("b", "two")
        assert plain_classifier.classify("c") == "one"

    def test_larger_category_wins_on_unseen_input(self, plain_classifier):
        plain_classifier.train("a", "small")
        plain_classifier.train("b c d e f g h", "large")
        # small: log(2/10) + log(1/9); large: log(8/10) + log(1/15)
        assert plain_classifier.classify("z") == "large"

    def test_separable_data(self, plain_classifier, fruit_veg_data):
        plain_classifier.train_many(fruit_veg_data)
        assert plain_classifier.classify("banana split") == "fruit"
        assert plain_classifier.classify("baked potato") == "vegetable"

    def test_classify_batch(self, plain_classifier, fruit_veg_data):
        plain_classifier.train_many(fruit_veg_data)
        assert plain_classifier.classify_batch(["apple", "onion"]) == ["fruit", "vegetable"]

    def test_ngram_classification(self, make_preprocessor):
        classifier = NaiveBayesClassifier(preprocessor=make_preprocessor(n=2))
        classifier.train("new york city", "usa")
        classifier.train("york minster cathedral", "uk")
        assert classifier.classify("visit new york") == "usa"

    def test_returns_only_trained_categories(self, sentiment_classifier):
        for text in ["", "cats", "zzz unknown", "love hate love"]:
            assert sentiment_classifier.classify(text) in sentiment_classifier.categories


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class TestConfiguration:

    def test_custom_stop_words(self):
        classifier = NaiveBayesClassifier(stop_words={"red"})
        assert classifier.stop_words == frozenset({"red"})
        classifier.train("red blue", "colors")
        assert "red" not in classifier.vocabulary

    def test_n_forwarded(self):
        assert NaiveBayesClassifier(n=3).n == 3

    def test_spawn_shares_configuration_not_state(self, plain_classifier):
        plain_classifier.train("red", "colors")
        fresh = plain_classifier.spawn()
        assert fresh.preprocessor is plain_classifier.preprocessor
        assert fresh.categories == []
        assert fresh.vocabulary == set()

    def test_repr(self, plain_classifier):
        plain_classifier.train("red blue", "colors")
        assert repr(plain_classifier) == (
            "NaiveBayesClassifier(n=1, categories=1, vocabulary=2)"
        )


# ---------------------------------------------------------------------------
# Important words
# ---------------------------------------------------------------------------

class TestImportantWords:

    def test_report_per_category(self, plain_classifier):
        plain_classifier.train("apple apple banana", "fruit")
        plain_classifier.train("carrot", "vegetable")
        report = plain_classifier.important_words()
        assert list(report) == ["fruit", "vegetable"]
        assert report["fruit"][0][0] == "apple"
        assert report["vegetable"] == [("carrot", 1.0)]

    def test_single_category(self, plain_classifier):
        plain_classifier.train("apple", "fruit")
        plain_classifier.train("carrot", "vegetable")
        assert list(plain_classifier.important_words("vegetable")) == ["vegetable"]

    def test_top_n(self, plain_classifier):
        plain_classifier.train("a b c d e", "letters")
        assert len(plain_classifier.important_words(top_n=2)["letters"]) == 2

    def test_unknown_category(self, plain_classifier):
        plain_classifier.train("apple", "fruit")
        with pytest.raises(ValueError, match="Unknown category"):
            plain_classifier.important_words("meat")

    def test_without_index(self, make_preprocessor):
        classifier = NaiveBayesClassifier(
            preprocessor=make_preprocessor(), track_term_index=False
        )
        classifier.train("apple", "fruit")
        assert classifier.important_words() == {"fruit": []}

    def test_does_not_affect_scores(self, make_preprocessor):
        with_index = NaiveBayesClassifier(preprocessor=make_preprocessor())
        without = NaiveBayesClassifier(
            preprocessor=make_preprocessor(), track_term_index=False
        )
        for classifier in (with_index, without):
            classifier.train("apple banana", "fruit")
            classifier.train("carrot", "vegetable")
        assert with_index.scores("apple carrot") == without.scores("apple carrot")
