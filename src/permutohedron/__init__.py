"""permutohedron: in-place permutation generation.

Generates every permutation of a mutable sequence without allocating a
new container per permutation.  Heap's algorithm drives two engines
that visit the same single-swap order: the resumable :class:`Heap`
iterator and the callback-driven :func:`heap_recursive`, which can be
stopped early with a :class:`Control` signal.  The lexical helpers step
a sequence to its next or previous arrangement in sorted order.

Public API:
    .. autosummary::
        Heap
        heap_recursive
        Control
        next_permutation
        prev_permutation
        factorial
        get_max_length
        set_max_length
        BorrowError
        MAXHEAP
"""

from ._config import MAXHEAP, get_max_length, set_max_length
from ._lease import BorrowError
from .control import Control
from .heap import Heap, factorial, heap_recursive
from .lexical import next_permutation, prev_permutation

__all__ = [
    "BorrowError",
    "Control",
    "Heap",
    "MAXHEAP",
    "factorial",
    "get_max_length",
    "heap_recursive",
    "next_permutation",
    "prev_permutation",
    "set_max_length",
]

__version__ = "0.2.0"
