"""Reboot and snapshot times reported by the web UI state endpoint."""

from __future__ import annotations

from .base import Desc, FortiClient, Metric, ProbeError, TargetMetadata, fetch

_REBOOT = Desc("fortigate_last_reboot_seconds", "Last system reboot epoch time in seconds")
_SNAPSHOT = Desc("fortigate_last_snapshot_seconds", "Last snapshot epoch time in seconds")


def probe_webui_state(client: FortiClient, meta: TargetMetadata) -> list[Metric]:
    """Report the last reboot and snapshot times, converted from milliseconds."""
    response = fetch(client, "api/v2/monitor/web-ui/state", "")
    if not isinstance(response, dict):
        raise ProbeError("web-ui state: unexpected response")
    results = response.get("results") or {}
    return [
        _REBOOT.gauge((results.get("utc_last_reboot") or 0.0) / 1000),
        _SNAPSHOT.gauge((results.get("snapshot_utc_time") or 0.0) / 1000),
    ]