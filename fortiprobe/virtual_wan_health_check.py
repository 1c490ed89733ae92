"""SD-WAN health check results per SLA and member interface."""

from __future__ import annotations

from .base import Desc, FortiClient, Metric, ProbeError, TargetMetadata, fetch

_MEMBER = ("vdom", "sla", "interface")

_STATUS = Desc(
    "fortigate_virtual_wan_status",
    "Status of the Interface. If the SD-WAN interface is disabled, disable will be returned. "
    "If the interface does not participate in the health check, error will be returned.",
    ("vdom", "sla", "interface", "state"),
)
_LATENCY = Desc(
    "fortigate_virtual_wan_latency_seconds", "Measured latency for this Health check", _MEMBER
)
_JITTER = Desc(
    "fortigate_virtual_wan_latency_jitter_seconds",
    "Measured latency jitter for this Health check",
    _MEMBER,
)
_PACKET_LOSS = Desc(
    "fortigate_virtual_wan_packet_loss_ratio",
    "Measured packet loss in percentage for this Health check",
    _MEMBER,
)
_PACKET_SENT = Desc(
    "fortigate_virtual_wan_packet_sent_total",
    "Number of packets sent for this Health check",
    _MEMBER,
)
_PACKET_RECEIVED = Desc(
    "fortigate_virtual_wan_packet_received_total",
    "Number of packets received for this Health check",
    _MEMBER,
)
_SESSIONS = Desc(
    "fortigate_virtual_wan_active_sessions",
    "Active Session count for the health check interface",
    _MEMBER,
)
_BANDWIDTH_TX = Desc(
    "fortigate_virtual_wan_bandwidth_tx_byte_per_second",
    "Upload bandwidth of the health check interface",
    _MEMBER,
)
_BANDWIDTH_RX = Desc(
    "fortigate_virtual_wan_bandwidth_rx_byte_per_second",
    "Download bandwidth of the health check interface",
    _MEMBER,
)
_STATUS_CHANGED = Desc(
    "fortigate_virtual_wan_status_change_time_seconds",
    "Unix timestamp describing the time when the last status change has occurred",
    _MEMBER,
)

_KNOWN_STATES = ("up", "down", "error", "disable")
_STATES = _KNOWN_STATES + ("unknown",)


def _member_metrics(member: dict, labels: tuple[str, str, str]) -> list[Metric]:
    def value(key: str) -> float:
        return member.get(key) or 0.0

    return [
        _LATENCY.gauge(value("latency") / 1000, *labels),
        _JITTER.gauge(value("jitter") / 1000, *labels),
        _PACKET_LOSS.gauge(value("packet_loss") / 100, *labels),
        _PACKET_SENT.gauge(value("packet_sent"), *labels),
        _PACKET_RECEIVED.gauge(value("packet_received"), *labels),
        _SESSIONS.gauge(value("session"), *labels),
        _BANDWIDTH_TX.gauge(value("tx_bandwidth") / 8, *labels),
        _BANDWIDTH_RX.gauge(value("rx_bandwidth") / 8, *labels),
        _STATUS_CHANGED.gauge(value("state_changed"), *labels),
    ]


def probe_virtual_wan_health_check(client: FortiClient, meta: TargetMetadata) -> list[Metric]:
    """Report one-hot status of each SLA member and, when it is up, its
    latency, loss, packet, session and bandwidth figures."""
    response = fetch(client, "api/v2/monitor/virtual-wan/health-check", "vdom=*")
    if not isinstance(response, list):
        raise ProbeError("virtual-wan health check: unexpected response")
    metrics = []
    for vdom_result in response:
        vdom = vdom_result.get("vdom") or ""
        for sla, members in (vdom_result.get("results") or {}).items():
            for member_name, member in (members or {}).items():
                labels = (vdom, sla, member_name)
                status = member.get("status")
                state = status if status in _KNOWN_STATES else "unknown"
                metrics.extend(
                    _STATUS.gauge(1.0 if candidate == state else 0.0, *labels, candidate)
                    for candidate in _STATES
                )
                if state == "up":
                    metrics.extend(_member_metrics(member, labels))
    return metrics