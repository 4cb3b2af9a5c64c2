"""Length-limit configuration for the permutohedron package.

Controls the largest sequence the permutation engines accept.  The
iterative engine keeps one ``uint8`` counter per level in a
fixed-capacity array, so the limit is also the size of that array.

Resolution order (first match wins):
    1. Programmatic override via :func:`set_max_length`.
    2. The ``PERMUTOHEDRON_MAX_LENGTH`` environment variable.
    3. The default, :data:`MAXHEAP` (16).

Valid limits are integers in ``[1, 255]``; ``255`` is the largest value
a ``uint8`` counter can hold.

Examples:
    Raise the limit from the shell::

        export PERMUTOHEDRON_MAX_LENGTH=20

    Raise it programmatically::

        import permutohedron
        permutohedron.set_max_length(20)

    Restore the default resolution order::

        permutohedron.set_max_length("auto")
"""

from __future__ import annotations

import os
import warnings

#: Default maximum number of elements the engines accept.  16! already
#: exceeds 2·10¹³ permutations; 20! is the last factorial that fits in
#: a 64-bit unsigned word.
MAXHEAP = 16

#: Hard ceiling imposed by the ``uint8`` counter storage.
_COUNTER_CEILING = 255

_ENV_VAR = "PERMUTOHEDRON_MAX_LENGTH"

# Sentinel indicating "no programmatic override has been set".
_max_length_override: int | None = None


def _validate(value: object, *, source: str) -> int:
    """Return *value* as a limit in ``[1, 255]`` or raise ``ValueError``."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(
            f"{source} must be an integer in [1, {_COUNTER_CEILING}], "
            f"got {value!r}."
        )
    if not 1 <= value <= _COUNTER_CEILING:
        raise ValueError(
            f"{source} must be in [1, {_COUNTER_CEILING}], got {value}."
        )
    return value


def get_max_length() -> int:
    """Return the active maximum sequence length.

    Resolution order:
        1. Value set by :func:`set_max_length` (unless ``"auto"``).
        2. ``PERMUTOHEDRON_MAX_LENGTH`` environment variable.
        3. :data:`MAXHEAP`.

    An environment value that is not an integer in ``[1, 255]`` is
    ignored with a ``UserWarning``.

    Returns:
        The maximum length accepted by :class:`~permutohedron.Heap` and
        :func:`~permutohedron.heap_recursive`.
    """
    # 1. Programmatic override
    if _max_length_override is not None:
        return _max_length_override

    # 2. Environment variable
    env = os.environ.get(_ENV_VAR, "").strip()
    if env:
        try:
            return _validate(int(env), source=_ENV_VAR)
        except ValueError:
            warnings.warn(
                f"Ignoring {_ENV_VAR}={env!r}: expected an integer in "
                f"[1, {_COUNTER_CEILING}].  Using the default of {MAXHEAP}.",
                UserWarning,
                stacklevel=2,
            )

    # 3. Default
    return MAXHEAP


def set_max_length(value: int | str | None) -> None:
    """Override the maximum sequence length.

    Args:
        value: An integer in ``[1, 255]``, or ``None`` / ``"auto"``
            (case-insensitive) to restore the default resolution order.

    Raises:
        ValueError: If *value* is not a valid limit.
    """
    global _max_length_override
    if value is None or (isinstance(value, str) and value.strip().lower() == "auto"):
        _max_length_override = None
        return
    _max_length_override = _validate(value, source="max_length")
