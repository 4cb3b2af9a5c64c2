"""Sequence compatibility layer for the permutation engines.

The engines permute their input in place, so they accept any *mutable*
indexable container:

* ``collections.abc.MutableSequence``: ``list``, ``bytearray``,
  ``array.array``, ``collections.deque`` and user subclasses.
* ``numpy.ndarray``: permuted along axis 0.  A 2-D array therefore has
  its *rows* permuted.

NumPy arrays need special handling at the boundary: ``a[i], a[j] =
a[j], a[i]`` is wrong for N-D arrays because ``a[i]`` is a *view*, and
the second assignment reads the already-overwritten row.  Fancy
indexing (``a[[i, j]] = a[[j, i]]``) copies the right-hand side first,
so every swap goes through :func:`_swap`.

Immutable containers (``tuple``, ``str``, ``bytes``) and read-only
arrays are rejected up front with ``TypeError``.
"""

from __future__ import annotations

import copy
from collections.abc import MutableSequence
from typing import Any

import numpy as np

from ._typing import SequenceLike


def _ensure_mutable_sequence(obj: Any, *, name: str = "sequence") -> SequenceLike:
    """Return *obj* unchanged if the engines can permute it in place.

    Args:
        obj: Candidate container.
        name: Label used in error messages.

    Returns:
        *obj* itself, never a copy.

    Raises:
        TypeError: If *obj* is immutable, zero-dimensional, or a
            read-only NumPy array.
    """
    if isinstance(obj, np.ndarray):
        if obj.ndim == 0:
            raise TypeError(f"'{name}' must have at least one dimension, got a 0-d array.")
        if not obj.flags.writeable:
            raise TypeError(f"'{name}' is a read-only NumPy array; pass a writeable array.")
        return obj

    if isinstance(obj, MutableSequence):
        return obj

    raise TypeError(
        f"'{name}' must be a mutable sequence (list, bytearray, "
        f"array.array, ...) or a NumPy array, got {type(obj).__name__}."
    )


def _swap(seq: SequenceLike, i: int, j: int) -> None:
    """Exchange the elements at positions *i* and *j* in place."""
    if isinstance(seq, np.ndarray):
        seq[[i, j]] = seq[[j, i]]
    else:
        seq[i], seq[j] = seq[j], seq[i]


def _owned_copy(seq: SequenceLike) -> SequenceLike:
    """Return a shallow copy of *seq* with the same container type."""
    if isinstance(seq, np.ndarray):
        return seq.copy()
    return copy.copy(seq)
