"""Runtime exclusive-borrow registry.

An engine permutes caller-owned storage in place.  Two engines driving
the same sequence would interleave their swaps and silently corrupt
both enumerations, so every engine takes a *lease* on its sequence
before touching it and gives it back when done.  A second lease on a
sequence that is already leased fails fast with :class:`BorrowError`.

Leases are keyed by ``id(sequence)``.  That is safe because the registry
keeps a strong reference to the sequence for as long as the lease
exists, so the id cannot be recycled underneath it.  Each lease also
carries a unique token: releasing with a stale token (for example from
the finaliser of an engine whose lease was already returned) is a no-op
and never drops somebody else's lease.

NumPy views are distinct objects over the same buffer (``a`` and
``a[:]``, or ``a`` and ``a.reshape(...)``), so for arrays the identity
check is not enough: an array also conflicts with every leased array
it shares memory with, as reported by ``np.shares_memory``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)

# id(sequence) -> (token, owner, sequence)
_registry: dict[int, tuple[object, str, Any]] = {}
_lock = threading.Lock()


class BorrowError(RuntimeError):
    """Raised when a sequence is already leased by another engine."""


def _holder(seq: Any) -> str | None:
    """Return the owner of a lease that conflicts with *seq*, if any.

    Must be called with ``_lock`` held.
    """
    held = _registry.get(id(seq))
    if held is not None:
        return held[1]
    if isinstance(seq, np.ndarray):
        for _, owner, other in _registry.values():
            if isinstance(other, np.ndarray) and np.shares_memory(seq, other):
                return owner
    return None


def acquire(seq: Any, owner: str) -> object:
    """Lease *seq* to *owner* and return the release token.

    Raises:
        BorrowError: If *seq*, or an array sharing its memory, is
            already leased.
    """
    with _lock:
        holder = _holder(seq)
        if holder is not None:
            logger.debug("Lease conflict on %s sequence held by %s", type(seq).__name__, holder)
            raise BorrowError(
                f"{type(seq).__name__} of length {len(seq)} is already "
                f"borrowed by {holder}; release it before starting "
                f"another enumeration over the same sequence."
            )
        token = object()
        _registry[id(seq)] = (token, owner, seq)
    return token


def release(key: int, token: object) -> None:
    """Drop the lease stored under *key* if it still belongs to *token*."""
    with _lock:
        held = _registry.get(key)
        if held is not None and held[0] is token:
            del _registry[key]


def is_leased(seq: Any) -> bool:
    """Return ``True`` if *seq*, or an array sharing its memory, is leased."""
    with _lock:
        return _holder(seq) is not None


@contextmanager
def lease(seq: Any, owner: str) -> Iterator[None]:
    """Hold a lease on *seq* for the duration of a ``with`` block."""
    token = acquire(seq, owner)
    try:
        yield
    finally:
        release(id(seq), token)
