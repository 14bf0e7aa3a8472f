"""
UTC timestamp logging formatter for Hybrid Join Watcher.

Every transcript and console line is prefixed with a UTC timestamp in square
brackets so runs on machines in different time zones line up.
"""

import datetime
import logging


class UTCTimestampFormatter(logging.Formatter):
    """
    Logging formatter that prefixes records with a UTC timestamp.

    Format: [YYYY-MM-DD HH:MM:SS.sss UTC] <formatted record>
    """

    def format(self, record):
        stamp = datetime.datetime.fromtimestamp(record.created, datetime.timezone.utc)
        timestamp = stamp.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        return f"[{timestamp} UTC] {super().format(record)}"
