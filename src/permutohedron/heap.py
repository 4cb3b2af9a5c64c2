"""In-place permutation generation with Heap's algorithm.

Heap's algorithm visits all n! arrangements of a sequence so that each
arrangement differs from the previous one by a single swap.  Nothing is
allocated per permutation: the caller's sequence is mutated in place
and handed back at every step.

Two engines produce the *same* order for the same starting arrangement:

1. :class:`Heap`: an iterative, resumable state machine.  Call
   :meth:`Heap.next_permutation` to step once, or iterate over the
   engine to receive owned copies lazily.

2. :func:`heap_recursive`: a callback-driven full enumeration with the
   small cases (n <= 3) unrolled into literal swap sequences.  The
   callback can stop the enumeration early by returning
   ``Control.Break(value)``.

Order for ``[1, 2, 3]``::

    [1, 2, 3]  [2, 1, 3]  [3, 1, 2]  [1, 3, 2]  [2, 3, 1]  [3, 2, 1]

For n <= 3 the last arrangement is the reversal of the first.  That
does not hold in general: ``ABCD`` ends at ``BCDA``.
"""

from __future__ import annotations

import logging
import math
import weakref
from collections.abc import Callable
from typing import Any

import numpy as np
from typing_extensions import Self

from . import _lease
from ._compat import _ensure_mutable_sequence, _owned_copy, _swap
from ._config import MAXHEAP, get_max_length
from ._typing import SequenceLike
from .control import Control, as_control

logger = logging.getLogger(__name__)

__all__ = ["MAXHEAP", "Heap", "factorial", "heap_recursive"]


def factorial(n: int) -> int:
    """Compute *n!* (*n* factorial), the number of permutations of *n* items.

    Python integers are unbounded, so the result is exact for every *n*.
    Code that stores it in a fixed-width word must keep ``n <= 20`` for
    64 bits.

    Raises:
        ValueError: If *n* is negative.
    """
    if n < 0:
        raise ValueError(f"factorial is undefined for negative n, got {n}.")
    return math.factorial(n)


def _check_length(seq: SequenceLike, max_length: int) -> int:
    """Return ``len(seq)`` or raise if it exceeds *max_length*."""
    n = len(seq)
    if n > max_length:
        # n! is only quoted while it fits a 64-bit word.
        count = f" ({factorial(n):,} permutations)" if n <= 20 else ""
        raise ValueError(
            f"Sequence of length {n} exceeds the maximum of {max_length} "
            f"supported by the permutation engines{count}.  Raise the "
            f"limit with set_max_length() or PERMUTOHEDRON_MAX_LENGTH if "
            f"this is intended."
        )
    return n


# ------------------------------------------------------------------ #
# Iterative engine
# ------------------------------------------------------------------ #
#
# The recursive algorithm keeps one loop variable per recursion level.
# The iterative engine stores those loop variables explicitly:
#
#   counters[k]: how many swaps level k (the prefix of length k + 1)
#               has emitted in its current cycle, 0 <= counters[k] <= k
#   position:    the level being scanned for remaining work
#
# A step scans upward from level 0.  A level whose counter reached k
# has finished its cycle: its counter resets to 0 (it will run a fresh
# cycle under the new arrangement) and the scan carries to level k + 1.
# The first level with work left performs one swap and the scan
# restarts from the bottom.  Running off the top means every level has
# finished: all n! permutations have been produced.


class Heap:
    """Heap's algorithm as a resumable, in-place permutation iterator.

    The engine borrows *sequence* exclusively until it is released
    (explicitly via :meth:`release`, by leaving a ``with`` block, or when
    the engine is garbage collected).  Building a second engine, or
    calling :func:`heap_recursive`, on a borrowed sequence raises
    :class:`~permutohedron.BorrowError`.

    Two ways to drive it:

    * :meth:`next_permutation` mutates the sequence and returns it (the
      same object every time) or ``None`` when exhausted.
    * Iteration (``for perm in heap``) yields an owned copy of each
      arrangement.  The iterator is the engine itself, so it is not
      restartable; call :meth:`reset` first.

    Args:
        sequence: A mutable sequence or NumPy array of length at most
            :func:`~permutohedron.get_max_length` (16 by default).

    Raises:
        TypeError: If *sequence* is not mutable.
        ValueError: If *sequence* is longer than the configured maximum.
        BorrowError: If *sequence* is already borrowed by another engine.

    Example::

        >>> data = [1, 2, 3]
        >>> with Heap(data) as heap:
        ...     [p for p in heap]
        [[1, 2, 3], [2, 1, 3], [3, 1, 2], [1, 3, 2], [2, 3, 1], [3, 2, 1]]
        >>> data
        [3, 2, 1]
    """

    def __init__(self, sequence: SequenceLike) -> None:
        seq = _ensure_mutable_sequence(sequence)
        max_length = get_max_length()
        self._n = _check_length(seq, max_length)
        self._data = seq
        self._counters = np.zeros(max_length, dtype=np.uint8)
        self._position = 0
        # Number of permutations produced; 0 means "not started".
        self._index = 0
        self._exhausted = False

        token = _lease.acquire(seq, owner=f"Heap at 0x{id(self):x}")
        self._finalizer = weakref.finalize(self, _lease.release, id(seq), token)
        logger.debug("Heap engine created for %s of length %d", type(seq).__name__, self._n)

    # ---- Access -------------------------------------------------------

    def get(self) -> SequenceLike:
        """Return the wrapped sequence in its current arrangement."""
        return self._data

    def get_mut(self) -> SequenceLike:
        """Return the wrapped sequence for in-place modification.

        Modifying it between steps changes the arrangement the next step
        starts from; the engine does not notice.
        """
        return self._data

    @property
    def sequence(self) -> SequenceLike:
        """The wrapped sequence; same object as :meth:`get`."""
        return self._data

    @property
    def index(self) -> int:
        """Number of permutations produced since construction or reset."""
        return self._index

    @property
    def exhausted(self) -> bool:
        """``True`` once every permutation has been produced."""
        return self._exhausted

    @property
    def released(self) -> bool:
        """``True`` once the lease on the sequence has been returned."""
        return not self._finalizer.alive

    # ---- Stepping -----------------------------------------------------

    def next_permutation(self) -> SequenceLike | None:
        """Step the sequence to its next permutation and return it.

        The first call returns the sequence unchanged (the identity
        permutation).  Each later call performs exactly one swap.  Once
        all n! permutations have been produced, returns ``None`` and
        keeps returning ``None``; the sequence keeps its last
        arrangement.

        Raises:
            BorrowError: If the engine has been released.
        """
        if not self._finalizer.alive:
            raise _lease.BorrowError(
                "This Heap engine has been released; create a new one to "
                "continue permuting the sequence."
            )

        if self._index == 0:
            self._index = 1
            return self._data

        counters = self._counters
        while self._position < self._n:
            k = self._position
            if counters[k] < k:
                # An even-length prefix swaps its last element with the
                # counter position; an odd-length prefix always with 0.
                j = int(counters[k]) if k % 2 == 1 else 0
                _swap(self._data, j, k)
                counters[k] += 1
                self._position = 0
                self._index += 1
                return self._data
            counters[k] = 0
            self._position += 1

        if not self._exhausted:
            self._exhausted = True
            logger.debug("Heap engine exhausted after %d permutations", self._index)
        return None

    def reset(self) -> None:
        """Restart the walk from the sequence's **current** arrangement.

        Only the bookkeeping is cleared; elements are not moved back.
        After a full enumeration the sequence sits in its last
        arrangement, so a reset engine enumerates the n! permutations
        starting from *there*, not from the original input order.
        Callers who want the original order again must restore it
        themselves before or after calling ``reset``.
        """
        self._counters.fill(0)
        self._position = 0
        self._index = 0
        self._exhausted = False
        logger.debug("Heap engine reset at %r", self._data)

    # ---- Iterator protocol --------------------------------------------

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> SequenceLike:
        perm = self.next_permutation()
        if perm is None:
            raise StopIteration
        return _owned_copy(perm)

    # ---- Lease management ---------------------------------------------

    def release(self) -> None:
        """Return the sequence's lease.  Further stepping raises."""
        self._finalizer()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "exhausted" if self._exhausted else f"index={self._index}"
        if self.released:
            state += ", released"
        return f"Heap(len={self._n}, {state})"


# ------------------------------------------------------------------ #
# Recursive engine
# ------------------------------------------------------------------ #
#
# heap_(n): permute the prefix of length n.
#
#   for i in 0 .. n-2:
#       heap_(n - 1)
#       swap(i if n is even else 0, n - 1)
#   heap_(n - 1)
#
# The final recursion sits outside the loop so no swap follows the
# last callback; the sequence ends on the last visited arrangement,
# exactly where the iterative engine leaves it.
#
# n = 3 is the same recursion written out: the 2-prefix alternates
# (0, 1) swaps with odd-level (0, 2) swaps.

_THREE_SWAPS = ((0, 1), (0, 2), (0, 1), (0, 2), (0, 1))


def _heap_unrolled(
    n: int, xs: SequenceLike, f: Callable[[SequenceLike], Any]
) -> Control:
    if n <= 1:
        return as_control(f(xs))

    if n == 2:
        ctrl = as_control(f(xs))
        if ctrl.should_break:
            return ctrl
        _swap(xs, 0, 1)
        return as_control(f(xs))

    if n == 3:
        for a, b in _THREE_SWAPS:
            ctrl = as_control(f(xs))
            if ctrl.should_break:
                return ctrl
            _swap(xs, a, b)
        return as_control(f(xs))

    last = n - 1
    for i in range(last):
        ctrl = _heap_unrolled(last, xs, f)
        if ctrl.should_break:
            return ctrl
        _swap(xs, i if n % 2 == 0 else 0, last)
    return _heap_unrolled(last, xs, f)


def heap_recursive(
    sequence: SequenceLike, callback: Callable[[SequenceLike], Any]
) -> Control:
    """Visit every permutation of *sequence* in place, calling *callback* for each.

    The callback receives the sequence itself in its current
    arrangement.  It must not keep a reference past the call: the next
    swap rearranges the same object.  It is called exactly n! times
    unless it stops early.

    The callback's return value controls the walk:

    * ``None`` or ``Control.Continue``: keep going.
    * ``Control.Break(value)``: stop immediately.  No further swaps
      are made, so the sequence stays in the arrangement the callback
      last saw.

    Exceptions raised by the callback propagate unchanged, with the
    sequence in the arrangement the callback was given.

    Args:
        sequence: A mutable sequence or NumPy array of length at most
            :func:`~permutohedron.get_max_length`.
        callback: Called once per permutation.

    Returns:
        The ``Control.Break`` that stopped the walk, or
        ``Control.Continue`` if every permutation was visited.

    Raises:
        TypeError: If *sequence* is not mutable, or *callback* returns
            something other than ``None`` or a ``Control``.
        ValueError: If *sequence* is longer than the configured maximum.
        BorrowError: If *sequence* is borrowed by another engine.
    """
    seq = _ensure_mutable_sequence(sequence)
    n = _check_length(seq, get_max_length())

    with _lease.lease(seq, owner="heap_recursive"):
        ctrl = _heap_unrolled(n, seq, callback)

    if ctrl.should_break:
        logger.debug("heap_recursive stopped early with %r", ctrl)
    return ctrl
