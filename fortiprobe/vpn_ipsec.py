"""IPsec tunnel state and traffic per phase-2 selector."""

from __future__ import annotations

from .base import Desc, FortiClient, Metric, ProbeError, TargetMetadata, fetch

_LABELS = ("vdom", "name", "p2serial", "parent")

_UP = Desc("fortigate_ipsec_tunnel_up", "Status of IPsec tunnel (0 - Down, 1 - Up)", _LABELS)
_TRANSMITTED = Desc(
    "fortigate_ipsec_tunnel_transmit_bytes_total",
    "Total number of bytes transmitted over the IPsec tunnel",
    _LABELS,
)
_RECEIVED = Desc(
    "fortigate_ipsec_tunnel_receive_bytes_total",
    "Total number of bytes received over the IPsec tunnel",
    _LABELS,
)


def probe_vpn_ipsec(client: FortiClient, meta: TargetMetadata) -> list[Metric]:
    """Report state and byte counters of every phase-2 selector.

    Dial-up tunnels (client VPN) are skipped.
    """
    response = fetch(client, "api/v2/monitor/vpn/ipsec", "vdom=*")
    if not isinstance(response, list):
        raise ProbeError("vpn ipsec: unexpected response")
    metrics = []
    for vdom_result in response:
        vdom = vdom_result.get("vdom") or ""
        for tunnel in vdom_result.get("results") or []:
            if tunnel.get("type") == "dialup":
                continue
            parent = tunnel.get("name") or ""
            for selector in tunnel.get("proxyid") or []:
                labels = (
                    vdom,
                    selector.get("p2name") or "",
                    str(int(selector.get("p2serial") or 0)),
                    parent,
                )
                up = 1.0 if selector.get("status") == "up" else 0.0
                metrics.append(_UP.gauge(up, *labels))
                metrics.append(_TRANSMITTED.counter(selector.get("outgoing_bytes") or 0.0, *labels))
                metrics.append(_RECEIVED.counter(selector.get("incoming_bytes") or 0.0, *labels))
    return metrics