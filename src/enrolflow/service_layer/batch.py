"""Batch transformation with per-item results and cooperative cancellation."""

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, TypeAlias

from enrolflow.interfaces.transformer import Transformer

logger = logging.getLogger(__name__)


class BatchCancelled(Exception):
    """Raised when a batch is cancelled before every item was transformed.

    Args:
        completed: Number of items transformed before the cancel signal was seen.
    """

    def __init__(self, completed: int) -> None:
        super().__init__(f"Batch cancelled after {completed} item(s)")
        self.completed = completed


@dataclass(frozen=True, slots=True)
class ItemSucceeded:
    """The item at `index` was transformed into `records`."""

    index: int
    records: tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class ItemFailed:
    """The item at `index` raised `error` while being transformed."""

    index: int
    error: Exception


ItemResult: TypeAlias = ItemSucceeded | ItemFailed


def transform_batch(
    transformer: Transformer[Any, Any],
    inputs: Iterable[Any],
    cancel: threading.Event | None = None,
) -> list[ItemResult]:
    """Transform `inputs` one at a time, isolating failures per item.

    Items are passed to the transformer individually so that one malformed
    input yields an `ItemFailed` instead of aborting the whole batch. Results
    are returned in input order.

    Args:
        transformer: Any `Transformer` implementation.
        inputs: Items to transform.
        cancel: Optional event checked before each item.

    Returns:
        One result per input item.

    Raises:
        BatchCancelled: If `cancel` is set before the batch completes. No
            partial results are returned.
    """
    results: list[ItemResult] = []
    for index, item in enumerate(inputs):
        if cancel is not None and cancel.is_set():
            logger.info("Batch cancelled after %d item(s)", index)
            raise BatchCancelled(index)
        try:
            records = transformer.transform([item])
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("Item %d failed to transform: %s", index, e)
            results.append(ItemFailed(index, e))
        else:
            results.append(ItemSucceeded(index, tuple(records)))
    return results
