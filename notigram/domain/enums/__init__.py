"""Domain enums package."""

from notigram.domain.enums.dispatch_state import DispatchState
from notigram.domain.enums.message_field import MessageField

__all__ = ["DispatchState", "MessageField"]
