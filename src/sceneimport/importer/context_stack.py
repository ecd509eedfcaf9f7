"""
Execution Context Stack

Stack of (builder, settings) pairs. The top entry is the active context; the
legacy ambient accessor mirrors the top entry's builder so that call sites
without an explicit builder reference (old scene script helpers) still find one.

The stack only records which context is current. Restoring builder settings is
done by the owning import scope via ScopedSettings.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from ..shared.errors import ImportScopeError

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Legacy ambient accessor (single compatibility seam)
# -----------------------------------------------------------------------------

_active_builder: Optional[Any] = None


def set_active_builder(builder: Optional[Any]) -> None:
    global _active_builder
    _active_builder = builder


def get_active_builder() -> Optional[Any]:
    """Builder of the innermost running import, or None outside of any import."""
    return _active_builder


# -----------------------------------------------------------------------------
# Execution context
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class ExecutionContext:
    """Builder handle and the settings snapshot taken when its import started."""
    builder: Any
    settings: Any


class ExecutionContextStack:
    """
    push(builder, settings): new top, becomes active
    pop(): drop top; the next entry becomes active. Once empty, the ambient
           builder goes back to what it was before the first push (None at top level)
    """

    def __init__(self) -> None:
        self._stack: List[ExecutionContext] = []
        # Ambient builder seen before the first push (None unless another session is running)
        self._outer_builder: Optional[Any] = None

    def __len__(self) -> int:
        return len(self._stack)

    @property
    def active(self) -> Optional[ExecutionContext]:
        return self._stack[-1] if self._stack else None

    def push(self, builder: Any, settings: Any) -> ExecutionContext:
        if not self._stack:
            self._outer_builder = get_active_builder()
        context = ExecutionContext(builder=builder, settings=settings)
        self._stack.append(context)
        set_active_builder(builder)
        return context

    def pop(self) -> ExecutionContext:
        if not self._stack:
            raise ImportScopeError("Cannot pop execution context: stack is empty", error_code="E9003")
        context = self._stack.pop()
        if self._stack:
            set_active_builder(self._stack[-1].builder)
        else:
            set_active_builder(self._outer_builder)
            self._outer_builder = None
            logger.debug("Execution context stack empty, restored outer active builder")
        return context
