"""Dispatch trigger lifecycle states.

Transitions:
    IDLE -> SCHEDULED -> COLLECTING -> DISPATCHED
    IDLE -> SCHEDULED -> CANCELED
    COLLECTING -> FAILED
    IDLE -> COLLECTING (direct notify_now without scheduling)

DISPATCHED, CANCELED and FAILED are terminal.
"""

from enum import Enum


class DispatchState(str, Enum):
    """State of a one-shot notifier."""

    IDLE = "idle"
    SCHEDULED = "scheduled"
    COLLECTING = "collecting"
    DISPATCHED = "dispatched"
    CANCELED = "canceled"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition is possible."""
        return self in {
            DispatchState.DISPATCHED,
            DispatchState.CANCELED,
            DispatchState.FAILED,
        }
