"""Helpers for instrumenting applications with telemetry."""

from __future__ import annotations

import json
import logging
import time
import urllib.request
import uuid
from dataclasses import dataclass, field
from typing import Any, Mapping

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventContext:
    """The command and event name an event is reported under."""

    command: str
    event_name: str


def _new_run_id() -> str:
    return str(uuid.uuid4())


@dataclass
class MixpanelTelemetryTracker:
    """Posts events as JSON to a telemetry endpoint, tagged with one id per run."""

    url: str
    app_name: str
    version: str
    run_id: str = field(default_factory=_new_run_id)
    timeout: float = 10.0

    def track_event(self, event_context: EventContext, event_props: Mapping[str, Any] | None = None) -> None:
        """Send one event. Failures are logged, never raised."""
        props: dict[str, Any] = {
            "timestamp": int(time.time()),
            "context": self.app_name,
            "command": event_context.command,
            "version": self.version,
        }
        props.update(event_props or {})

        payload = {"id": self.run_id, "event": event_context.event_name, "eventProps": props}
        try:
            body = json.dumps(payload, sort_keys=True).encode("utf-8")
        except (TypeError, ValueError) as err:
            _log.warning("%s", err)
            return

        request = urllib.request.Request(
            self.url,
            data=body,
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                response.read()
        except (OSError, ValueError) as err:
            _log.warning("%s", err)