"""Wireless clients connected through managed access points."""

from __future__ import annotations

from .base import Desc, FortiClient, Metric, ProbeError, TargetMetadata, fetch

_CLIENT = ("vdom", "mac")

_INFO = Desc(
    "fortigate_wifi_client_info",
    "Number of connected access points by status",
    ("vdom", "mac", "hostname", "wtp_name"),
)
_DATA_RATE = Desc(
    "fortigate_wifi_client_data_rate_bps", "Data rate of the client connection", _CLIENT
)
_BANDWIDTH_RX = Desc(
    "fortigate_wifi_client_bandwidth_rx_bps", "Bandwidth for receiving traffic", _CLIENT
)
_BANDWIDTH_TX = Desc(
    "fortigate_wifi_client_bandwidth_tx_bps", "Bandwidth for transmitting traffic", _CLIENT
)
_SIGNAL = Desc(
    "fortigate_wifi_client_signal_strength_dBm", "Signal strength of the connected client", _CLIENT
)
_NOISE = Desc(
    "fortigate_wifi_client_signal_noise_dBm",
    "Signal noise on the frequency of the client",
    _CLIENT,
)
_TX_DISCARD = Desc(
    "fortigate_wifi_client_tx_discard_ratio", "Percentage of discarded packets", _CLIENT
)
_TX_RETRIES = Desc(
    "fortigate_wifi_client_tx_retries_ratio",
    "Percentage of retried connection to all connection attempts",
    _CLIENT,
)


def probe_wifi_clients(client: FortiClient, meta: TargetMetadata) -> list[Metric]:
    """Report data rate, bandwidth, signal and retry figures of each wireless client.

    At most 1000 clients are fetched.
    """
    response = fetch(client, "api/v2/monitor/wifi/client", "vdom=*&start=0&count=1000")
    if not isinstance(response, list):
        raise ProbeError("wifi client: unexpected response")
    metrics = []
    for vdom_result in response:
        vdom = vdom_result.get("vdom") or ""
        for station in vdom_result.get("results") or []:
            mac = station.get("mac") or ""

            def value(key: str) -> float:
                return station.get(key) or 0.0

            metrics += [
                _INFO.counter(
                    1, vdom, mac, station.get("hostname") or "", station.get("wtp_name") or ""
                ),
                _DATA_RATE.gauge(value("data_rate_bps"), vdom, mac),
                _BANDWIDTH_RX.gauge(value("bandwidth_rx"), vdom, mac),
                _BANDWIDTH_TX.gauge(value("bandwidth_tx"), vdom, mac),
                _SIGNAL.gauge(value("signal"), vdom, mac),
                _NOISE.gauge(value("noise"), vdom, mac),
                _TX_DISCARD.gauge(value("tx_discard_percentage") / 100, vdom, mac),
                _TX_RETRIES.gauge(value("tx_retry_percentage") / 100, vdom, mac),
            ]
    return metrics