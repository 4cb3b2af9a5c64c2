"""Shared type aliases for the permutohedron package."""

from collections.abc import Callable, MutableSequence
from typing import Any

import numpy as np

# Containers the engines permute in place.
SequenceLike = MutableSequence[Any] | np.ndarray

# Strict "a comes before b" relation used by the lexical helpers.
LessThan = Callable[[Any, Any], bool]
