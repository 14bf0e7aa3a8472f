"""
Data types shared by the registration watcher and the event log reader.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum
from typing import Dict, Optional


class EventCategory(IntEnum):
    """Device registration event IDs the watcher reacts to."""

    JOIN_FAILED = 304
    REGISTRATION_SUCCEEDED = 306
    PRECHECK_NO_DC = 334
    PRECHECK_ALREADY_JOINED = 335


class WatcherState(str, Enum):
    """Classification of the most recent loop iteration."""

    POLLING = "polling"
    SUCCEEDED = "succeeded"
    ALREADY_JOINED = "already_joined"
    PRECHECK_BLOCKED = "precheck_blocked"
    JOIN_FAILED_RETRY = "join_failed_retry"
    NO_SIGNAL = "no_signal"


TERMINAL_STATES = frozenset({WatcherState.SUCCEEDED, WatcherState.ALREADY_JOINED})


@dataclass(frozen=True)
class RegistrationEvent:
    """The most recent event log record for one category."""

    category: EventCategory
    message: str = ""
    time_created: Optional[datetime] = None


EventSnapshot = Dict[EventCategory, Optional[RegistrationEvent]]


@dataclass
class LoopState:
    """Mutable state threaded through every iteration of the watcher loop."""

    iteration: int = 0
    status: WatcherState = WatcherState.POLLING
    terminal: bool = False
    trigger: Optional[RegistrationEvent] = None
    task_starts: int = 0

    def finish(self, status: WatcherState, trigger: RegistrationEvent) -> None:
        """Move to a terminal state caused by the given event."""
        self.status = status
        self.trigger = trigger
        self.terminal = status in TERMINAL_STATES

    @property
    def exhausted(self) -> bool:
        """True when the loop ended without observing a terminal event."""
        return not self.terminal
