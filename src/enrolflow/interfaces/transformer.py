"""The generic batch transformation capability.

A transformer turns an ordered batch of raw inputs into an ordered batch of
canonical outputs. Each input may yield zero, one or many outputs, and the
outputs of earlier inputs always come first, so that::

    transform(xs) == [y for x in xs for y in transform([x])]

Implementations must be pure with respect to their inputs and injected
(read-only) collaborators.
"""

from collections.abc import Callable, Iterable
from typing import Protocol, TypeVar

InT = TypeVar("InT")
OutT = TypeVar("OutT")
InT_contra = TypeVar("InT_contra", contravariant=True)
OutT_co = TypeVar("OutT_co", covariant=True)

# pylint: disable=too-few-public-methods


class Transformer(Protocol[InT_contra, OutT_co]):
    """Contract for a per-source batch transformer."""

    def transform(self, inputs: Iterable[InT_contra]) -> list[OutT_co]:
        """Transform `inputs` in order, concatenating each input's outputs."""
        ...  # pylint: disable=unnecessary-ellipsis


def fan_out(expand: Callable[[InT], Iterable[OutT]], inputs: Iterable[InT]) -> list[OutT]:
    """Expand every input and concatenate the results in input order."""
    return [output for item in inputs for output in expand(item)]
