"""Command-line interface for nb-text-classifier.

Provides ``train``, ``classify``, ``evaluate``, ``cross-validate`` and
``important-words`` commands with rich terminal output using the ``click``
and ``rich`` libraries.

Usage::

    nb-text-classifier train reviews.json --model model.json
    nb-text-classifier classify --model model.json "what a lovely film"
    nb-text-classifier evaluate held_out.csv --model model.json
    nb-text-classifier cross-validate reviews.json -k 5

Labeled data files are ``.json`` (a list of ``[text, category]`` pairs or
``{"text": ..., "category": ...}`` objects), ``.jsonl`` or ``.csv``/``.tsv``
with ``text`` and ``category`` columns.
"""

from __future__ import annotations

import csv
import json
import logging
import math
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .classifier import NaiveBayesClassifier
from .preprocessing import ensure_nltk_resources

console = Console()
logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Data loading helpers
# ------------------------------------------------------------------

def _as_pair(item) -> tuple[str, str]:
    if isinstance(item, dict):
        return str(item["text"]), str(item["category"])
    text, category = item
    return str(text), str(category)


def read_labeled_data(path: Path) -> list[tuple[str, str]]:
    """Load ``(text, category)`` pairs from a JSON, JSONL, CSV or TSV file.

    Raises:
        ValueError: If the file extension is not supported.
    """
    suffix = path.suffix.lower()
    if suffix == ".json":
        examples = [_as_pair(item) for item in json.loads(path.read_text(encoding="utf-8"))]
    elif suffix == ".jsonl":
        with open(path, "r", encoding="utf-8") as f:
            examples = [_as_pair(json.loads(line)) for line in f if line.strip()]
    elif suffix in (".csv", ".tsv"):
        delimiter = "\t" if suffix == ".tsv" else ","
        with open(path, "r", encoding="utf-8", newline="") as f:
            examples = [_as_pair(row) for row in csv.DictReader(f, delimiter=delimiter)]
    else:
        raise ValueError(f"Unsupported data file type: {path.suffix or path.name}")

    logger.debug("Read %d labeled examples from %s", len(examples), path)
    return examples


def _read_stop_words(path: Path | None) -> set[str] | None:
    if path is None:
        return None
    lines = path.read_text(encoding="utf-8").splitlines()
    return {line.strip().lower() for line in lines if line.strip() and not line.startswith("#")}


def _build_classifier(ngram: int, stop_words_file: Path | None) -> NaiveBayesClassifier:
    if not ensure_nltk_resources():
        console.print("[yellow]Warning:[/] some NLTK corpora are unavailable")
    return NaiveBayesClassifier(stop_words=_read_stop_words(stop_words_file), n=ngram)


def _load_trained(model: Path, ngram: int, stop_words_file: Path | None) -> NaiveBayesClassifier:
    classifier = _build_classifier(ngram, stop_words_file)
    if not classifier.load_model(model):
        console.print(f"[bold red]Error:[/] could not load model from {model}")
        sys.exit(1)
    return classifier


def _fmt(value: float) -> str:
    return "n/a" if math.isnan(value) else f"{value:.4f}"


def _json_number(value: float) -> float | None:
    return None if math.isnan(value) else round(value, 4)


# ------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------

_model_option = click.option(
    "--model", "-m", "model", type=click.Path(path_type=Path), required=True,
    help="Model snapshot file (JSON).",
)
_ngram_option = click.option(
    "--ngram", "-n", type=click.IntRange(min=1), default=1, show_default=True,
    help="N-gram size used by the preprocessor.",
)
_stop_words_option = click.option(
    "--stop-words", "stop_words_file", type=click.Path(exists=True, path_type=Path),
    default=None, help="File with one stop word per line (default: NLTK English).",
)
_output_option = click.option(
    "--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
    help="Output format.",
)


@click.group()
@click.version_option(package_name="nb-text-classifier")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Naive Bayes text classifier.

    Train a model on labeled text, classify new text and measure accuracy.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@main.command()
@click.argument("data", type=click.Path(exists=True, path_type=Path))
@_model_option
@_ngram_option
@_stop_words_option
@click.option("--append", is_flag=True,
              help="Continue training an existing model instead of starting fresh.")
def train(data: Path, model: Path, ngram: int, stop_words_file: Path | None,
          append: bool) -> None:
    """Train a model on a labeled data file and save it.

    Example: nb-text-classifier train reviews.json --model model.json
    """
    try:
        examples = read_labeled_data(data)
    except (OSError, ValueError, KeyError, TypeError) as e:
        console.print(f"[bold red]Error:[/] {e}")
        sys.exit(1)

    if append and model.exists():
        classifier = _load_trained(model, ngram, stop_words_file)
    else:
        classifier = _build_classifier(ngram, stop_words_file)

    with console.status("[bold blue]Training...", spinner="dots"):
        classifier.train_many(examples)

    if not classifier.save_model(model):
        console.print(f"[bold red]Error:[/] could not save model to {model}")
        sys.exit(1)

    console.print(
        f"Trained on [bold]{len(examples)}[/] examples: "
        f"{len(classifier.categories)} categories, "
        f"{len(classifier.vocabulary)} vocabulary terms"
    )
    console.print(f"[dim]Model saved to {model}[/]")


@main.command()
@click.argument("text", nargs=-1, required=True)
@_model_option
@_ngram_option
@_stop_words_option
@click.option("--scores", is_flag=True, help="Show the log score of every category.")
@_output_option
def classify(text: tuple[str, ...], model: Path, ngram: int,
             stop_words_file: Path | None, scores: bool, output: str) -> None:
    """Classify one or more texts.

    Example: nb-text-classifier classify --model model.json "great movie"
    """
    classifier = _load_trained(model, ngram, stop_words_file)

    results = []
    for item in text:
        result = {"text": item, "category": classifier.classify(item)}
        if scores:
            result["scores"] = classifier.scores(item)
        results.append(result)

    if output == "json":
        click.echo(json.dumps(results, indent=2))
        return

    table = Table(title="Classification", show_lines=scores)
    table.add_column("Text", style="white", max_width=60)
    table.add_column("Category", style="cyan")
    if scores:
        table.add_column("Scores", style="dim")

    for result in results:
        row = [result["text"], str(result["category"] or "-")]
        if scores:
            row.append("\n".join(
                f"{name}: {value:.4f}" for name, value in result["scores"].items()
            ))
        table.add_row(*row)

    console.print(table)


@main.command()
@click.argument("data", type=click.Path(exists=True, path_type=Path))
@_model_option
@_ngram_option
@_stop_words_option
@_output_option
def evaluate(data: Path, model: Path, ngram: int, stop_words_file: Path | None,
             output: str) -> None:
    """Measure accuracy, precision, recall and F1 on a labeled data file.

    Example: nb-text-classifier evaluate held_out.json --model model.json
    """
    try:
        examples = read_labeled_data(data)
    except (OSError, ValueError, KeyError, TypeError) as e:
        console.print(f"[bold red]Error:[/] {e}")
        sys.exit(1)

    classifier = _load_trained(model, ngram, stop_words_file)

    with console.status("[bold blue]Evaluating...", spinner="dots"):
        accuracy = classifier.evaluate(examples)
        prf = classifier.precision_recall_f1(examples)

    if output == "json":
        click.echo(json.dumps({
            "examples": len(examples),
            "accuracy": _json_number(accuracy),
            **{k: _json_number(v) for k, v in prf.to_dict().items()},
        }, indent=2))
        return

    table = Table(title=f"Evaluation: {data.name} ({len(examples)} examples)")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Accuracy", _fmt(accuracy))
    table.add_row("Precision", _fmt(prf.precision))
    table.add_row("Recall", _fmt(prf.recall))
    table.add_row("F1", _fmt(prf.f1))
    console.print(table)


@main.command("cross-validate")
@click.argument("data", type=click.Path(exists=True, path_type=Path))
@click.option("--folds", "-k", type=click.IntRange(min=1), default=5, show_default=True,
              help="Number of folds.")
@_ngram_option
@_stop_words_option
@_output_option
def cross_validate(data: Path, folds: int, ngram: int, stop_words_file: Path | None,
                   output: str) -> None:
    """Run contiguous k-fold cross-validation on a labeled data file.

    Example: nb-text-classifier cross-validate reviews.json -k 5
    """
    try:
        examples = read_labeled_data(data)
    except (OSError, ValueError, KeyError, TypeError) as e:
        console.print(f"[bold red]Error:[/] {e}")
        sys.exit(1)

    classifier = _build_classifier(ngram, stop_words_file)

    with console.status(f"[bold blue]Cross-validating ({folds} folds)...", spinner="dots"):
        accuracy = classifier.cross_validate(examples, k=folds)

    if output == "json":
        click.echo(json.dumps({
            "examples": len(examples),
            "folds": folds,
            "mean_accuracy": _json_number(accuracy),
        }, indent=2))
        return

    unused = len(examples) % folds
    console.print(f"Mean accuracy over {folds} folds: [bold]{_fmt(accuracy)}[/]")
    if unused:
        console.print(f"[dim]{unused} trailing example(s) not assigned to any fold[/]")


@main.command("important-words")
@_model_option
@click.option("--category", "-c", default=None, help="Only report this category.")
@click.option("--top", "top_n", type=click.IntRange(min=1), default=10, show_default=True,
              help="Number of terms per category.")
def important_words(model: Path, category: str | None, top_n: int) -> None:
    """Show the highest TF-IDF terms of each category.

    Example: nb-text-classifier important-words --model model.json --top 5
    """
    classifier = NaiveBayesClassifier(stop_words=(), track_term_index=True)
    if not classifier.load_model(model):
        console.print(f"[bold red]Error:[/] could not load model from {model}")
        sys.exit(1)

    try:
        report = classifier.important_words(category, top_n=top_n)
    except ValueError as e:
        console.print(f"[bold red]Error:[/] {e}")
        sys.exit(1)

    for name, terms in report.items():
        table = Table(title=f"Important words: {name}")
        table.add_column("#", justify="right", width=4)
        table.add_column("Term", style="cyan")
        table.add_column("TF-IDF", justify="right")
        for i, (term, score) in enumerate(terms, 1):
            table.add_row(str(i), term, f"{score:.4f}")
        if not terms:
            table.add_row("-", "[dim]no term index stored[/]", "")
        console.print(table)
        console.print()


if __name__ == "__main__":
    main()
