"""Access point and client counts of the wireless controller per VDOM."""

from __future__ import annotations

from .base import Desc, FortiClient, Metric, ProbeError, TargetMetadata, fetch

_ACCESS_POINTS = Desc(
    "fortigate_wifi_access_points",
    "Number of connected access points by status",
    ("vdom", "status"),
)
_CLIENTS = Desc("fortigate_wifi_fabric_clients", "Number of connected clients", ("vdom",))
_MAX_CLIENTS = Desc(
    "fortigate_wifi_fabric_max_allowed_clients",
    "Maximum number of clients which are allowed to connect",
    ("vdom",),
)


def probe_wifi_ap_status(client: FortiClient, meta: TargetMetadata) -> list[Metric]:
    """Report access points by state, plus current and maximum client counts."""
    response = fetch(client, "api/v2/monitor/wifi/ap_status", "vdom=*")
    if not isinstance(response, list):
        raise ProbeError("wifi ap status: unexpected response")
    metrics = []
    for vdom_result in response:
        vdom = vdom_result.get("vdom") or ""
        results = vdom_result.get("results") or {}
        metrics += [
            _ACCESS_POINTS.gauge(results.get("wtp_active") or 0.0, vdom, "active"),
            _ACCESS_POINTS.gauge(results.get("wtp_down") or 0.0, vdom, "down"),
            _ACCESS_POINTS.gauge(results.get("wtp_rebooted") or 0.0, vdom, "rebooting"),
            _CLIENTS.gauge(results.get("client_count") or 0.0, vdom),
            _MAX_CLIENTS.gauge(results.get("client_count_max") or 0.0, vdom),
        ]
    return metrics