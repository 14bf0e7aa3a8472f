"""
Event log reader for device registration events.

Queries the "User Device Registration" admin channel through Get-WinEvent,
returning only the most recent record for each event ID.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Iterable, Optional

from src.hybrid_join_watcher.registration.models import (
    EventCategory,
    EventSnapshot,
    RegistrationEvent,
)
from src.hybrid_join_watcher.windows.powershell import quote, run_powershell

QUERY_TEMPLATE = """
try {{
    $record = Get-WinEvent -FilterHashtable @{{LogName={channel}; Id={event_id}}} -MaxEvents 1 -ErrorAction Stop
    @{{
        Id = $record.Id
        TimeCreated = $record.TimeCreated.ToUniversalTime().ToString('s')
        Message = $record.Message
    }} | ConvertTo-Json -Compress
}} catch {{
    Write-Output 'null'
}}
"""


class EventLogReader:
    """Reads the latest registration events from the local event log."""

    def __init__(self, channel: str, timeout: int = 60):
        self.channel = channel
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    def latest(self, category: EventCategory) -> Optional[RegistrationEvent]:
        """Return the most recent event of a category, or None if there is none."""
        script = QUERY_TEMPLATE.format(
            channel=quote(self.channel), event_id=int(category)
        )
        result = run_powershell(script, timeout=self.timeout)
        if result is None or result.returncode != 0:
            self.logger.debug("Event query for %d failed", int(category))
            return None

        output = result.stdout.strip()
        if not output or output == "null":
            return None

        try:
            record = json.loads(output)
        except json.JSONDecodeError as error:
            self.logger.debug("Unparseable event output for %d: %s", int(category), error)
            return None
        if not isinstance(record, dict):
            return None

        return RegistrationEvent(
            category=category,
            message=(record.get("Message") or "").strip(),
            time_created=_parse_time(record.get("TimeCreated")),
        )

    def snapshot(
        self, categories: Iterable[EventCategory] = tuple(EventCategory)
    ) -> EventSnapshot:
        """Query every category once and return what was observed."""
        return {category: self.latest(category) for category in categories}


def _parse_time(value) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value)).replace(tzinfo=timezone.utc)
    except ValueError:
        return None
