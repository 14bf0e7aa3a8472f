"""
Configuration management for Hybrid Join Watcher.
Reads an optional YAML configuration file and builds the watcher settings.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict

import yaml

from src.i18n import _

DEFAULT_DOMAIN = "corp.contoso.com"
DEFAULT_EVENT_CHANNEL = "Microsoft-Windows-User Device Registration/Admin"
DEFAULT_TASK_PATH = "\\Microsoft\\Windows\\Workplace Join\\"
DEFAULT_TASK_NAME = "Automatic-Device-Join"
DEFAULT_DATA_DIR = r"C:\ProgramData\Microsoft\HybridJoinWatcher"

CONFIG_FILENAME = "hybrid-join-watcher.yaml"


@dataclass
class WatcherSettings:  # pylint: disable=too-many-instance-attributes
    """Tunable values for the registration watcher and its collaborators."""

    domain: str = DEFAULT_DOMAIN
    poll_interval: int = 60
    retry_delay: int = 5
    max_iterations: int = 60
    exhaustive_probe: bool = False
    task_path: str = DEFAULT_TASK_PATH
    task_name: str = DEFAULT_TASK_NAME
    event_channel: str = DEFAULT_EVENT_CHANNEL
    ping_count: int = 2
    ldap_port: int = 389
    tcp_timeout: float = 5.0
    dns_timeout: float = 10.0
    tag_file: str = DEFAULT_DATA_DIR + r"\HybridJoinWatcher.tag"
    transcript_file: str = DEFAULT_DATA_DIR + r"\HybridJoinWatcher.log"


class ConfigManager:
    """Manages configuration for Hybrid Join Watcher."""

    def __init__(self, config_file: str = CONFIG_FILENAME):
        self.logger = logging.getLogger(__name__)
        self.config_file = self._determine_config_path(config_file)
        self.config_data: Dict[str, Any] = {}
        self.load_config()

    def _determine_config_path(self, default_filename: str) -> str:
        """
        Determine configuration file path.

        Priority order:
        1. Absolute path as given (tests, explicit config)
        2. Platform-specific system config location
        3. ./hybrid-join-watcher.yaml
        4. The provided filename, relative to the working directory
        """
        if os.path.isabs(default_filename):
            return default_filename

        if os.name == "nt":
            system_config = r"C:\ProgramData\HybridJoinWatcher\hybrid-join-watcher.yaml"
        else:
            system_config = "/etc/hybrid-join-watcher.yaml"

        local_config = os.path.join(".", CONFIG_FILENAME)

        if os.path.exists(system_config):
            return system_config
        if os.path.exists(local_config):
            return local_config
        return default_filename

    def load_config(self) -> None:
        """Load configuration from YAML file, keeping defaults if it is absent."""
        if not os.path.exists(self.config_file):
            self.logger.debug(
                "No configuration file at %s, using built-in defaults",
                self.config_file,
            )
            return

        try:
            with open(self.config_file, "r", encoding="utf-8") as file:
                self.config_data = yaml.safe_load(file) or {}
        except yaml.YAMLError as e:
            raise ValueError(_("Invalid YAML in configuration file: %s") % e) from e
        except Exception as e:
            raise RuntimeError(_("Failed to load configuration file: %s") % e) from e

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration key (e.g., 'watcher.domain')
            default: Default value if key is not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split(".")
        value = self.config_data

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def get_log_level(self) -> str:
        """Get logging level."""
        return self.get("logging.level", "INFO|WARNING|ERROR|CRITICAL")

    def get_log_format(self) -> str:
        """Get log format string."""
        return self.get("logging.format", "%(levelname)s: %(message)s")

    def get_language(self) -> str:
        """Get configured language/locale."""
        return self.get("i18n.language", "en")

    def get_watcher_settings(self) -> WatcherSettings:
        """Build watcher settings, overlaying configured values on the defaults."""
        defaults = WatcherSettings()
        return WatcherSettings(
            domain=self.get("watcher.domain", defaults.domain),
            poll_interval=int(self.get("watcher.poll_interval", defaults.poll_interval)),
            retry_delay=int(self.get("watcher.retry_delay", defaults.retry_delay)),
            max_iterations=int(
                self.get("watcher.max_iterations", defaults.max_iterations)
            ),
            exhaustive_probe=bool(
                self.get("watcher.exhaustive_probe", defaults.exhaustive_probe)
            ),
            task_path=self.get("scheduled_task.path", defaults.task_path),
            task_name=self.get("scheduled_task.name", defaults.task_name),
            event_channel=self.get("event_log.channel", defaults.event_channel),
            ping_count=int(self.get("probe.ping_count", defaults.ping_count)),
            ldap_port=int(self.get("probe.ldap_port", defaults.ldap_port)),
            tcp_timeout=float(self.get("probe.tcp_timeout", defaults.tcp_timeout)),
            dns_timeout=float(self.get("probe.dns_timeout", defaults.dns_timeout)),
            tag_file=self.get("paths.tag_file", defaults.tag_file),
            transcript_file=self.get("paths.transcript_file", defaults.transcript_file),
        )
