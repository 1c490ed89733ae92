"""Health of links watched by the link monitor."""

from __future__ import annotations

from .base import Desc, FortiClient, Metric, ProbeError, TargetMetadata, fetch

_LINK = ("vdom", "monitor", "link")

_STATUS = Desc(
    "fortigate_link_status",
    "Signals the status of the link. 1 means that this state is present in every other "
    "case the value is 0",
    ("vdom", "monitor", "link", "state"),
)
_LATENCY = Desc(
    "fortigate_link_latency_seconds",
    "Average latency of this link based on the last 30 probes in seconds",
    _LINK,
)
_JITTER = Desc(
    "fortigate_link_latency_jitter_seconds",
    "Average of the latency jitter  on this link based on the last 30 probes in seconds",
    _LINK,
)
_PACKET_LOSS = Desc(
    "fortigate_link_packet_loss_ratio",
    "Percentage of packets lost relative to  all sent based on the last 30 probes",
    _LINK,
)
_PACKET_SENT = Desc("fortigate_link_packet_sent_total", "Number of packets sent on this link", _LINK)
_PACKET_RECEIVED = Desc(
    "fortigate_link_packet_received_total", "Number of packets received on this link", _LINK
)
_SESSIONS = Desc("fortigate_link_active_sessions", "Number of sessions active on this link", _LINK)
_BANDWIDTH_TX = Desc(
    "fortigate_link_bandwidth_tx_byte_per_second",
    "Bandwidth available on this link for sending",
    _LINK,
)
_BANDWIDTH_RX = Desc(
    "fortigate_link_bandwidth_rx_byte_per_second",
    "Bandwidth available on this link for sending",
    _LINK,
)
_STATUS_CHANGED = Desc(
    "fortigate_link_status_change_time_seconds",
    "Unix timestamp describing the time when the last status change has occurred",
    _LINK,
)

_STATES = ("up", "down", "error", "unknown")


def _link_metrics(link: dict, labels: tuple[str, str, str]) -> list[Metric]:
    value = lambda key: link.get(key) or 0.0  # noqa: E731
    return [
        _LATENCY.gauge(value("latency") / 1000, *labels),
        _JITTER.gauge(value("jitter") / 1000, *labels),
        _PACKET_LOSS.gauge(value("packet_loss") / 100, *labels),
        _PACKET_SENT.counter(value("packet_sent"), *labels),
        _PACKET_RECEIVED.counter(value("packet_received"), *labels),
        _SESSIONS.gauge(value("session"), *labels),
        _BANDWIDTH_TX.gauge(value("tx_bandwidth") / 8, *labels),
        _BANDWIDTH_RX.gauge(value("rx_bandwidth") / 8, *labels),
        _STATUS_CHANGED.gauge(value("state_changed"), *labels),
    ]


def probe_system_link_monitor(client: FortiClient, meta: TargetMetadata) -> list[Metric]:
    """Report one-hot status of each monitored link and, unless it is in error
    or an unknown state, its latency, loss, traffic and bandwidth figures."""
    response = fetch(client, "api/v2/monitor/system/link-monitor", "vdom=*")
    if not isinstance(response, list):
        raise ProbeError("link monitor: unexpected response")
    metrics = []
    for vdom_result in response:
        vdom = vdom_result.get("vdom") or ""
        for monitor, links in (vdom_result.get("results") or {}).items():
            for link_name, link in (links or {}).items():
                labels = (vdom, monitor, link_name)
                status = link.get("status")
                state = status if status in ("up", "down", "error") else "unknown"
                metrics.extend(
                    _STATUS.gauge(1.0 if candidate == state else 0.0, *labels, candidate)
                    for candidate in _STATES
                )
                if state not in ("error", "unknown"):
                    metrics.extend(_link_metrics(link, labels))
    return metrics