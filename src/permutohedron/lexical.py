"""Step a sequence to its lexicographic successor or predecessor in place.

This is an alternative traversal order to Heap's algorithm: starting
from the sorted arrangement and calling :func:`next_permutation` until
it returns ``False`` visits every *distinct* arrangement in sorted
order.  Because each call only inspects the current arrangement, the
walk can be resumed from any known arrangement with no extra state.

At the boundary (the last arrangement for :func:`next_permutation`, the
first for :func:`prev_permutation`) the sequence is left **unchanged**
and ``False`` is returned.  It is not wrapped around to the other end.

Unlike the Heap engines, these helpers accept sequences of any length
and do not borrow the sequence beyond the call.
"""

from __future__ import annotations

import operator

import numpy as np

from ._compat import _ensure_mutable_sequence, _swap
from ._typing import LessThan, SequenceLike

__all__ = ["next_permutation", "prev_permutation"]


def _resolve_order(seq: SequenceLike, less_than: LessThan | None) -> LessThan:
    """Return *less_than*, or ``<`` when the elements support it."""
    if less_than is not None:
        return less_than
    if isinstance(seq, np.ndarray) and seq.ndim > 1:
        raise TypeError(
            f"The rows of a {seq.ndim}-D array have no default order: "
            f"``<`` compares them elementwise.  Pass less_than, for example "
            f"lambda a, b: tuple(a) < tuple(b)."
        )
    return operator.lt


def _reverse_tail(seq: SequenceLike, start: int) -> None:
    """Reverse ``seq[start:]`` in place using swaps."""
    i, j = start, len(seq) - 1
    while i < j:
        _swap(seq, i, j)
        i += 1
        j -= 1


def next_permutation(seq: SequenceLike, less_than: LessThan | None = None) -> bool:
    """Permute *seq* into the next arrangement in lexicographic order.

    1. Find the longest non-increasing suffix.  If it is the whole
       sequence, the arrangement is already the largest one.
    2. The element just before that suffix is the pivot.  Swap it with
       the rightmost suffix element that is greater than it.
    3. Reverse the suffix, which turns it into its smallest arrangement.

    Args:
        seq: Mutable sequence to permute in place.
        less_than: Strict ordering ``less_than(a, b) -> bool``.  Defaults
            to ``a < b``.  Required for N-D NumPy arrays, whose rows
            ``<`` cannot order.

    Returns:
        ``True`` if *seq* was permuted, ``False`` if it was already the
        last arrangement (in which case it is left unchanged).

    Raises:
        TypeError: If *seq* is immutable, or is an N-D array and
            *less_than* is not given.

    Example::

        >>> data = [1, 3, 2]
        >>> next_permutation(data), data
        (True, [2, 1, 3])
        >>> data = [3, 2, 1]
        >>> next_permutation(data), data
        (False, [3, 2, 1])
    """
    seq = _ensure_mutable_sequence(seq)
    lt = _resolve_order(seq, less_than)

    i = len(seq) - 1
    while i > 0 and not lt(seq[i - 1], seq[i]):
        i -= 1
    if i <= 0:
        return False

    pivot = i - 1
    j = len(seq) - 1
    while not lt(seq[pivot], seq[j]):
        j -= 1
    _swap(seq, pivot, j)
    _reverse_tail(seq, i)
    return True


def prev_permutation(seq: SequenceLike, less_than: LessThan | None = None) -> bool:
    """Permute *seq* into the previous arrangement in lexicographic order.

    Mirror image of :func:`next_permutation`: the suffix is the longest
    non-decreasing one and the pivot swaps with the rightmost suffix
    element smaller than it.

    Returns:
        ``True`` if *seq* was permuted, ``False`` if it was already the
        first arrangement (in which case it is left unchanged).

    Raises:
        TypeError: If *seq* is immutable, or is an N-D array and
            *less_than* is not given.
    """
    seq = _ensure_mutable_sequence(seq)
    lt = _resolve_order(seq, less_than)

    i = len(seq) - 1
    while i > 0 and not lt(seq[i], seq[i - 1]):
        i -= 1
    if i <= 0:
        return False

    pivot = i - 1
    j = len(seq) - 1
    while not lt(seq[j], seq[pivot]):
        j -= 1
    _swap(seq, pivot, j)
    _reverse_tail(seq, i)
    return True
