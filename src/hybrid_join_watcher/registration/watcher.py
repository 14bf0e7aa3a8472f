"""
Registration watcher for Hybrid Azure AD Join.

Polls the device registration event log once per interval and decides, per
iteration and in strict priority order, whether registration has finished,
whether the device join task should be started again, or whether to keep
waiting. The loop runs for a bounded number of iterations.
"""

import logging
import time
from typing import Callable, Optional

from src.i18n import _
from src.hybrid_join_watcher.core.config import WatcherSettings
from src.hybrid_join_watcher.registration.models import (
    EventCategory,
    EventSnapshot,
    LoopState,
    WatcherState,
)

EXIT_SUCCESS = 0
EXIT_SOFT_REBOOT = 3010


class RegistrationWatcher:
    """Drives the polling loop that waits for device registration."""

    def __init__(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        settings: WatcherSettings,
        event_reader,
        prober,
        task_runner,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings
        self.event_reader = event_reader
        self.prober = prober
        self.task_runner = task_runner
        self.sleep = sleep
        self.logger = logging.getLogger(__name__)

    def run(self, state: Optional[LoopState] = None) -> LoopState:
        """Poll until a terminal event is seen or the iteration ceiling is hit."""
        state = state or LoopState()
        while not state.terminal and state.iteration < self.settings.max_iterations:
            self.poll_once(state)

        if state.exhausted:
            self.logger.warning(
                _("Device registration not observed after %d checks"),
                state.iteration,
            )
        return state

    def poll_once(self, state: LoopState) -> LoopState:
        """Run a single iteration of the watcher loop."""
        state.iteration += 1
        events = self.event_reader.snapshot()
        observed = sorted(int(category) for category, event in events.items() if event)
        self.logger.info(
            _("Check %d of %d, registration events observed: %s"),
            state.iteration,
            self.settings.max_iterations,
            observed or _("none"),
        )

        already_joined = events.get(EventCategory.PRECHECK_ALREADY_JOINED)
        if already_joined:
            state.finish(WatcherState.ALREADY_JOINED, already_joined)
            return state

        succeeded = events.get(EventCategory.REGISTRATION_SUCCEEDED)
        if succeeded:
            state.finish(WatcherState.SUCCEEDED, succeeded)
            return state

        if self._precheck_blocked(events):
            state.status = WatcherState.PRECHECK_BLOCKED
            self.logger.info(
                _("Precheck found no domain controller but one is reachable now")
            )
            self._start_join_task(state)
            self.sleep(self.settings.poll_interval)
            return state

        self.sleep(self.settings.poll_interval)
        if events.get(EventCategory.JOIN_FAILED):
            state.status = WatcherState.JOIN_FAILED_RETRY
            self.logger.info(_("Previous device join attempt failed, retrying"))
            self._start_join_task(state)
            self.sleep(self.settings.retry_delay)
        else:
            state.status = WatcherState.NO_SIGNAL
        return state

    def _precheck_blocked(self, events: EventSnapshot) -> bool:
        # The prober only runs once both event conditions hold.
        return bool(
            events.get(EventCategory.PRECHECK_NO_DC)
            and not events.get(EventCategory.JOIN_FAILED)
            and self.prober.is_reachable(
                self.settings.domain, self.settings.exhaustive_probe
            )
        )

    def _start_join_task(self, state: LoopState) -> None:
        self.task_runner.start()
        state.task_starts += 1


def report_outcome(state: LoopState, logger: Optional[logging.Logger] = None) -> int:
    """Log the result of a finished watcher run and return the exit code."""
    logger = logger or logging.getLogger(__name__)

    if state.trigger and state.trigger.time_created:
        logger.info(
            _("Event %d recorded at %s UTC"),
            int(state.trigger.category),
            state.trigger.time_created.strftime("%Y-%m-%d %H:%M:%S"),
        )

    if state.status == WatcherState.SUCCEEDED:
        logger.info("%s", state.trigger.message)
        logger.info(_("Device registration succeeded, a soft reboot is required"))
        return EXIT_SOFT_REBOOT

    if state.status == WatcherState.ALREADY_JOINED:
        logger.info("%s", state.trigger.message)
        return EXIT_SUCCESS

    logger.info(_("Timed out waiting for device registration, exiting"))
    return EXIT_SUCCESS
