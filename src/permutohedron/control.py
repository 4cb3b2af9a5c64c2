"""Control flow for enumeration callbacks.

A callback passed to :func:`~permutohedron.heap_recursive` tells the
engine whether to keep going by what it returns:

* ``None``: continue (the common case; plain functions need no
  ``return``).
* :data:`Control.Continue`: continue, stated explicitly.
* ``Control.Break(value)``: stop now.  No further swaps or callbacks
  happen; *value* is handed back to the caller of the engine.

Example::

    from permutohedron import Control, heap_recursive

    def find_sorted(seq):
        if list(seq) == sorted(seq):
            return Control.Break(list(seq))

    result = heap_recursive([3, 1, 2], find_sorted)
    result.break_value()   # [1, 2, 3]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass(frozen=True)
class Control:
    """Continue-or-break signal returned by enumeration callbacks.

    Attributes:
        is_break: ``True`` for a break signal.
        value: Payload carried by a break (``None`` for a continue).
    """

    is_break: bool = False
    value: Any = None

    Continue: ClassVar[Control]

    @classmethod
    def Break(cls, value: Any = None) -> Control:
        """Return a break signal carrying *value*."""
        return cls(is_break=True, value=value)

    @classmethod
    def continuing(cls) -> Control:
        return cls.Continue

    @classmethod
    def breaking(cls) -> Control:
        """Return a break signal with no payload."""
        return cls.Break(None)

    @property
    def should_break(self) -> bool:
        return self.is_break

    def break_value(self) -> Any:
        """Return the payload of a break, or ``None`` for a continue."""
        return self.value if self.is_break else None

    def __repr__(self) -> str:
        if self.is_break:
            return f"Control.Break({self.value!r})"
        return "Control.Continue"


Control.Continue = Control()


def as_control(result: Any) -> Control:
    """Coerce a callback's return value to a :class:`Control`.

    Raises:
        TypeError: If *result* is neither ``None`` nor a ``Control``.
    """
    if result is None:
        return Control.Continue
    if isinstance(result, Control):
        return result
    raise TypeError(
        f"Enumeration callbacks must return None or a Control, "
        f"got {type(result).__name__}."
    )
