"""
This module is the main entry point for Hybrid Join Watcher. It runs during
Autopilot Hybrid Azure AD Join, waits for device registration to complete,
and exits with 3010 when a soft reboot is needed.
"""

import logging
import os
import sys

from src.i18n import _, set_language
from src.hybrid_join_watcher.connectivity.dc_prober import (
    DomainControllerProber,
    ReachabilityChecker,
    SrvLocator,
)
from src.hybrid_join_watcher.core.config import CONFIG_FILENAME, ConfigManager
from src.hybrid_join_watcher.registration.watcher import (
    RegistrationWatcher,
    report_outcome,
)
from src.hybrid_join_watcher.utils.tag_file import write_tag_file
from src.hybrid_join_watcher.utils.transcript import Transcript
from src.hybrid_join_watcher.windows.event_log import EventLogReader
from src.hybrid_join_watcher.windows.scheduled_task import ScheduledTaskRunner


class HybridJoinWatcherApp:
    """Wires configuration, OS adapters and the registration watcher together."""

    def __init__(self, config_file: str = CONFIG_FILENAME):
        self.config = ConfigManager(config_file)
        self.settings = self.config.get_watcher_settings()
        set_language(self.config.get_language())
        self.logger = logging.getLogger(__name__)

    def build_watcher(self) -> RegistrationWatcher:
        """Create the watcher with the real Windows and network adapters."""
        settings = self.settings
        prober = DomainControllerProber(
            SrvLocator(timeout=settings.dns_timeout),
            ReachabilityChecker(
                ping_count=settings.ping_count, tcp_timeout=settings.tcp_timeout
            ),
            port=settings.ldap_port,
        )
        return RegistrationWatcher(
            settings,
            EventLogReader(settings.event_channel),
            prober,
            ScheduledTaskRunner(settings.task_path, settings.task_name),
        )

    def run(self) -> int:
        """Run one watch session and return the process exit code."""
        with Transcript(
            self.settings.transcript_file,
            level=self.config.get_log_level(),
            log_format=self.config.get_log_format(),
        ):
            self.logger.info(
                _("Waiting for device registration in domain %s"), self.settings.domain
            )
            write_tag_file(self.settings.tag_file)
            state = self.build_watcher().run()
            return report_outcome(state, self.logger)


def resolve_config_path() -> str:
    """
    Return the configuration file named by HYBRID_JOIN_WATCHER_CONFIG, or the
    default file name. ConfigManager looks the default up in the system and
    local locations.
    """
    return os.getenv("HYBRID_JOIN_WATCHER_CONFIG") or CONFIG_FILENAME


def main() -> int:
    """Console script entry point."""
    return HybridJoinWatcherApp(resolve_config_path()).run()


if __name__ == "__main__":
    sys.exit(main())
