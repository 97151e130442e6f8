"""Relocating a single element within an ordered sequence."""

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def array_move(sequence: Sequence[T], from_index: int, to_index: int) -> list[T]:
    """
    Return a copy of sequence with one element relocated.

    The element at from_index ends up at to_index; every other element keeps
    its relative order. The input is never mutated.

    Example: array_move(["a", "b", "c"], 0, 2) -> ["b", "c", "a"]

    Raises:
        IndexError: If either index is outside 0 <= i < len(sequence).
    """
    size = len(sequence)
    for name, index in (("from_index", from_index), ("to_index", to_index)):
        if not 0 <= index < size:
            raise IndexError(f"{name} {index} out of range for sequence of length {size}")

    items = list(sequence)
    item = items.pop(from_index)
    items.insert(to_index, item)
    return items
