"""Current SSL VPN users, tunnels and connections per VDOM."""

from __future__ import annotations

from .base import Desc, FortiClient, Metric, ProbeError, TargetMetadata, fetch

_USERS = Desc("fortigate_vpn_ssl_users", "Number of current SSL VPN users", ("vdom",))
_TUNNELS = Desc("fortigate_vpn_ssl_tunnels", "Number of current SSL VPN tunnels", ("vdom",))
_CONNECTIONS = Desc(
    "fortigate_vpn_ssl_connections", "Number of current SSL VPN connections", ("vdom",)
)


def probe_vpn_ssl_stats(client: FortiClient, meta: TargetMetadata) -> list[Metric]:
    """Report current SSL VPN users, tunnels and connections for each VDOM."""
    response = fetch(client, "api/v2/monitor/vpn/ssl/stats", "vdom=*")
    if not isinstance(response, list):
        raise ProbeError("vpn ssl stats: unexpected response")
    metrics = []
    for vdom_result in response:
        vdom = vdom_result.get("vdom") or ""
        current = (vdom_result.get("results") or {}).get("current") or {}
        metrics.append(_USERS.gauge(current.get("users") or 0, vdom))
        metrics.append(_TUNNELS.gauge(current.get("tunnels") or 0, vdom))
        metrics.append(_CONNECTIONS.gauge(current.get("connections") or 0, vdom))
    return metrics