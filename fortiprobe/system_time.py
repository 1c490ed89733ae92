"""System clock of the target."""

from __future__ import annotations

from .base import Desc, FortiClient, Metric, ProbeError, TargetMetadata, fetch

_TIME = Desc("fortigate_time_seconds", "System epoch time in seconds")


def probe_system_time(client: FortiClient, meta: TargetMetadata) -> list[Metric]:
    """Report the system epoch time of the target."""
    response = fetch(client, "api/v2/monitor/system/time", "vdom=root")
    if not isinstance(response, dict):
        raise ProbeError("system time: unexpected response")
    results = response.get("results") or {}
    return [_TIME.gauge(results.get("time") or 0.0)]