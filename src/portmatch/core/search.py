"""Binary search over sorted sequences."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Callable, Sequence


def sorted_search(
    sequence: Sequence[Any],
    target: Any,
    key: Callable[[Any], Any] | None = None,
) -> int | None:
    """Find the index of target in an ascending sorted sequence.

    Elements are compared with their natural ordering (``==`` and ``<``),
    optionally after applying key to each element. The sequence must
    already be sorted by that ordering; this is not checked.

    Args:
        sequence: Sorted sequence to search.
        target: Value to look for, compared against key(element).
        key: Optional function extracting the comparison value of an element.

    Returns:
        Index of a matching element, or None if there is none. When several
        elements match, which of their indexes is returned is unspecified.

    Examples:
        >>> sorted_search([1, 3, 5, 7, 9], 5)
        2
        >>> sorted_search([1, 3, 5, 7, 9], 4) is None
        True
    """
    lower = -1
    upper = len(sequence)

    while lower + 1 != upper:
        mid = (lower + upper) // 2
        value = sequence[mid] if key is None else key(sequence[mid])

        if value == target:
            return mid
        if value < target:
            lower = mid
        else:
            upper = mid

    return None


def sorted_contains(
    sequence: Sequence[Any],
    target: Any,
    key: Callable[[Any], Any] | None = None,
) -> bool:
    """Return True if target is present in the sorted sequence."""
    return sorted_search(sequence, target, key=key) is not None
