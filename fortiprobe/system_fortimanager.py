"""Connection and registration state of the FortiManager link per VDOM."""

from __future__ import annotations

from .base import Desc, FortiClient, Metric, ProbeError, TargetMetadata, fetch

_CONNECTION = Desc(
    "fortigate_fortimanager_connection_status",
    "Fortimanager status ID",
    ("vdom", "mode", "status"),
)
_REGISTRATION = Desc(
    "fortigate_fortimanager_registration_status",
    "Fortimanager registration status ID",
    ("vdom", "mode", "status"),
)

# Position in each tuple is the numeric id reported by the device.
_CONNECTION_STATES = ("down", "handshake", "up")
_REGISTRATION_STATES = ("unknown", "inprogress", "registered", "unregistered")


def probe_system_fortimanager_status(client: FortiClient, meta: TargetMetadata) -> list[Metric]:
    """Report one-hot connection and registration states for each VDOM."""
    response = fetch(client, "api/v2/monitor/system/fortimanager/status", "vdom=*")
    if not isinstance(response, list):
        raise ProbeError("fortimanager status: unexpected response")
    metrics = []
    for vdom_result in response:
        vdom = vdom_result.get("vdom") or ""
        results = vdom_result.get("results") or {}
        mode = results.get("mode") or ""
        status_id = results.get("fortimanager_status_id") or 0
        registration_id = results.get("fortimanager_registration_status_id") or 0
        metrics.extend(
            _CONNECTION.gauge(1.0 if status_id == index else 0.0, vdom, mode, state)
            for index, state in enumerate(_CONNECTION_STATES)
        )
        metrics.extend(
            _REGISTRATION.gauge(1.0 if registration_id == index else 0.0, vdom, mode, state)
            for index, state in enumerate(_REGISTRATION_STATES)
        )
    return metrics