"""JSON snapshots of the model store.

A snapshot holds the categories and the vocabulary (as a sorted list)::

    {
      "categories": {"spam": {"total": 3, "word_count": {...}, "term_index": {...}}},
      "vocab": ["free", "money", ...]
    }

``save_model`` and ``load_model`` log and swallow I/O and parse errors; the
return value tells the caller whether the call succeeded.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .models import Model

logger = logging.getLogger(__name__)

Destination = Union[str, Path, BinaryIO]


def dumps(model: Model) -> bytes:
    """Encode a model as UTF-8 JSON."""
    return json.dumps(model.to_dict(), ensure_ascii=False).encode("utf-8")


def loads(data: Union[bytes, str]) -> Model:
    """Decode a snapshot produced by :func:`dumps`.

    Raises:
        ValueError: If the payload is not valid JSON.
        KeyError: If ``categories`` or ``vocab`` is missing.
    """
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    return Model.from_dict(json.loads(data))


def save_model(model: Model, destination: Destination) -> bool:
    """Write ``model`` to a file path or binary file object.

    Returns:
        ``True`` on success, ``False`` if the write failed (the error is
        logged, not raised).
    """
    try:
        payload = dumps(model)
        if hasattr(destination, "write"):
            destination.write(payload)  # type: ignore[union-attr]
        else:
            path = Path(destination)  # type: ignore[arg-type]
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "wb") as f:
                f.write(payload)
    except (OSError, TypeError, ValueError):
        logger.exception("Error saving model to %s", destination)
        return False

    logger.debug(
        "Saved model with %d categories, %d vocabulary terms",
        len(model.categories),
        len(model.vocabulary),
    )
    return True


def load_model(source: Destination) -> Optional[Model]:
    """Read a snapshot from a file path or binary file object.

    Returns:
        The loaded :class:`Model`, or ``None`` if reading or parsing failed
        (the error is logged, not raised).
    """
    try:
        if hasattr(source, "read"):
            raw = source.read()  # type: ignore[union-attr]
        else:
            with open(source, "rb") as f:  # type: ignore[arg-type]
                raw = f.read()
        model = loads(raw)
    except (OSError, ValueError, KeyError, TypeError, AttributeError):
        logger.exception("Error loading model from %s", source)
        return None

    logger.debug(
        "Loaded model with %d categories, %d vocabulary terms",
        len(model.categories),
        len(model.vocabulary),
    )
    return model
