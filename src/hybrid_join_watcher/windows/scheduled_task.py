"""
Scheduled task trigger for the device join task.
"""

import logging

from src.i18n import _
from src.hybrid_join_watcher.windows.powershell import quote, run_powershell


class ScheduledTaskRunner:
    """Starts a named Windows scheduled task on demand."""

    def __init__(self, task_path: str, task_name: str, timeout: int = 60):
        self.task_path = task_path
        self.task_name = task_name
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    def start(self) -> bool:
        """Start the task. Failures are logged and reported as False."""
        script = (
            f"Start-ScheduledTask -TaskPath {quote(self.task_path)} "
            f"-TaskName {quote(self.task_name)} -ErrorAction Stop"
        )
        self.logger.info(_("Starting scheduled task %s"), self.task_name)
        result = run_powershell(script, timeout=self.timeout)

        if result is None:
            return False
        if result.returncode != 0:
            self.logger.warning(
                _("Failed to start scheduled task %s: %s"),
                self.task_name,
                (result.stderr or result.stdout or "").strip()[:500],
            )
            return False
        return True
