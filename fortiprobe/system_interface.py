"""Link state, speed and traffic counters of every network interface."""

from __future__ import annotations

from .base import Desc, FortiClient, Metric, ProbeError, TargetMetadata, fetch

_LABELS = ("vdom", "name", "alias", "parent")

_LINK = Desc(
    "fortigate_interface_link_up",
    "Whether the link is up or not (not taking into account admin status)",
    _LABELS,
)
_SPEED = Desc("fortigate_interface_speed_bps", "Speed negotiated on the port in bits/s", _LABELS)
_TX_PACKETS = Desc(
    "fortigate_interface_transmit_packets_total",
    "Number of packets transmitted on the interface",
    _LABELS,
)
_RX_PACKETS = Desc(
    "fortigate_interface_receive_packets_total",
    "Number of packets received on the interface",
    _LABELS,
)
_TX_BYTES = Desc(
    "fortigate_interface_transmit_bytes_total",
    "Number of bytes transmitted on the interface",
    _LABELS,
)
_RX_BYTES = Desc(
    "fortigate_interface_receive_bytes_total",
    "Number of bytes received on the interface",
    _LABELS,
)
_TX_ERRORS = Desc(
    "fortigate_interface_transmit_errors_total",
    "Number of transmission errors detected on the interface",
    _LABELS,
)
_RX_ERRORS = Desc(
    "fortigate_interface_receive_errors_total",
    "Number of reception errors detected on the interface",
    _LABELS,
)

_COUNTERS = (
    (_TX_PACKETS, "tx_packets"),
    (_RX_PACKETS, "rx_packets"),
    (_TX_BYTES, "tx_bytes"),
    (_RX_BYTES, "rx_bytes"),
    (_TX_ERRORS, "tx_errors"),
    (_RX_ERRORS, "rx_errors"),
)


def probe_system_interface(client: FortiClient, meta: TargetMetadata) -> list[Metric]:
    """Report link state, negotiated speed and traffic counters of each interface.

    VLAN and aggregate interfaces are included; their parent interface is
    given in the ``parent`` label.
    """
    response = fetch(
        client,
        "api/v2/monitor/system/interface/select",
        "vdom=*&include_vlan=true&include_aggregate=true",
    )
    if not isinstance(response, list):
        raise ProbeError("system interface: unexpected response")
    metrics = []
    for vdom_result in response:
        vdom = vdom_result.get("vdom") or ""
        for iface in (vdom_result.get("results") or {}).values():
            labels = (
                vdom,
                iface.get("name") or "",
                iface.get("alias") or "",
                iface.get("interface") or "",
            )
            metrics.append(_LINK.gauge(1.0 if iface.get("link") else 0.0, *labels))
            metrics.append(_SPEED.gauge((iface.get("speed") or 0.0) * 1000 * 1000, *labels))
            metrics.extend(desc.counter(iface.get(key) or 0.0, *labels) for desc, key in _COUNTERS)
    return metrics