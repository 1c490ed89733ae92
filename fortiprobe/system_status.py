"""Version and build information of the target."""

from __future__ import annotations

from .base import Desc, FortiClient, Metric, ProbeError, TargetMetadata, fetch

_VERSION = Desc(
    "fortigate_version_info",
    "System version and build information",
    ("serial", "version", "build"),
)


def probe_system_status(client: FortiClient, meta: TargetMetadata) -> list[Metric]:
    """Report the serial number, OS version and build as an info metric."""
    status = fetch(client, "api/v2/monitor/system/status", "")
    if not isinstance(status, dict):
        raise ProbeError("system status: unexpected response")
    return [
        _VERSION.gauge(
            1.0,
            status.get("serial") or "",
            status.get("version") or "",
            str(int(status.get("build") or 0)),
        )
    ]