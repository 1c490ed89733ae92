"""Managed wireless access points: system, radio and wired interface figures."""

from __future__ import annotations

from .base import Desc, FortiClient, Metric, ProbeError, TargetMetadata, fetch

_AP = ("vdom", "ap_name")
_RADIO = ("vdom", "ap_name", "radio_id")
_WIRED = ("vdom", "ap_name", "interface")

_INFO = Desc(
    "fortigate_wifi_managed_ap_info",
    "Infos about a managed access point",
    ("vdom", "ap_name", "ap_profile", "os_version", "serial"),
)
_JOIN_TIME = Desc(
    "fortigate_wifi_managed_ap_join_time_seconds",
    "Unix time when the managed access point has joined the mesh",
    _AP,
)
_CPU_USAGE = Desc(
    "fortigate_wifi_managed_ap_cpu_usage_ratio", "CPU usage of the access point", _AP
)
_MEM_FREE = Desc(
    "fortigate_wifi_managed_ap_memory_free_bytes", "Free memory of the managed access point", _AP
)
_MEM_TOTAL = Desc(
    "fortigate_wifi_managed_ap_memory_bytes_total", "Total memory of the managed access point", _AP
)

_RADIO_INFO = Desc(
    "fortigate_wifi_managed_ap_radio_info",
    "Informations about radios on managed access points",
    ("vdom", "ap_name", "radio_id", "operating_channel"),
)
_RADIO_CLIENTS = Desc(
    "fortigate_wifi_managed_ap_radio_client_count",
    "Number of clients that are connected using this radio",
    _RADIO,
)
_RADIO_OPER_TX_POWER = Desc(
    "fortigate_wifi_managed_ap_radio_operating_tx_power_ratio",
    "Power usage on the operating channel in percent",
    _RADIO,
)
_RADIO_CHANNEL_UTILIZATION = Desc(
    "fortigate_wifi_managed_ap_radio_operating_channel_utilization_ratio",
    "Utilization on the operating channel of the radio",
    _RADIO,
)
_RADIO_BANDWIDTH_RX = Desc(
    "fortigate_wifi_managed_ap_radio_bandwidth_rx_bps",
    "Bandwidth of this radio for receiving",
    _RADIO,
)
_RADIO_BANDWIDTH_TX = Desc(
    "fortigate_wifi_managed_ap_radio_bandwidth_tx_bps",
    "Bandwidth of this radio for transmitting",
    _RADIO,
)
_RADIO_RX_BYTES = Desc(
    "fortigate_wifi_managed_ap_radio_rx_bytes_total", "Total number of received bytes", _RADIO
)
_RADIO_TX_BYTES = Desc(
    "fortigate_wifi_managed_ap_radio_tx_bytes_total", "Total number of transferred bytes", _RADIO
)
_RADIO_INTERFERING = Desc(
    "fortigate_wifi_managed_ap_radio_interfering_aps",
    "Number of interfering access points",
    _RADIO,
)
_RADIO_TX_POWER = Desc(
    "fortigate_wifi_managed_ap_radio_tx_power_ratio",
    "Set Wifi power for the radio in percent",
    _RADIO,
)
_RADIO_TX_DISCARD = Desc(
    "fortigate_wifi_managed_ap_radio_tx_discard_ratio", "Percentage of discarded packets", _RADIO
)
_RADIO_TX_RETRIES = Desc(
    "fortigate_wifi_managed_ap_radio_tx_retries_ratio",
    "Percentage of retried connection to all connection attempts",
    _RADIO,
)

# (description, field, divisor) for every per-radio gauge, in emission order.
_RADIO_GAUGES = (
    (_RADIO_CLIENTS, "client_count", 1),
    (_RADIO_OPER_TX_POWER, "oper_txpower", 100),
    (_RADIO_CHANNEL_UTILIZATION, "channel_utilization_percent", 100),
    (_RADIO_BANDWIDTH_RX, "bandwidth_rx", 1),
    (_RADIO_BANDWIDTH_TX, "bandwidth_tx", 1),
    (_RADIO_RX_BYTES, "bytes_rx", 1),
    (_RADIO_TX_BYTES, "bytes_tx", 1),
    (_RADIO_INTERFERING, "interfering_aps", 1),
    (_RADIO_TX_POWER, "txpower", 100),
    (_RADIO_TX_RETRIES, "tx_retries_percent", 100),
    (_RADIO_TX_DISCARD, "tx_discard_percentage", 100),
)

_WIRED_GAUGES = tuple(
    (Desc(f"fortigate_wifi_managed_ap_interface_{name}", help_text, _WIRED), field)
    for name, help_text, field in (
        ("rx_bytes_total", "total number of bytes received on this interface", "bytes_rx"),
        ("tx_bytes_total", "total number of bytes transferred on this interface", "bytes_tx"),
        ("rx_packets_total", "total number of packets received on this interface", "packets_rx"),
        (
            "tx_packets_total",
            "total number of packets transferred on this interface",
            "packets_tx",
        ),
        ("rx_errors_total", "total number of errors received on this interface", "errors_rx"),
        ("tx_errors_total", "total number of errors transferred on this interface", "errors_tx"),
        (
            "rx_dropped_packets_total",
            "total number of dropped packets received on this interface",
            "dropped_rx",
        ),
        (
            "tx_dropped_packets_total",
            "total number of dropped packets transferred on this interface",
            "dropped_tx",
        ),
    )
)


def _number(record: dict, key: str) -> float:
    return float(record.get(key) or 0.0)


def _radio_metrics(radio: dict, vdom: str, ap_name: str) -> list[Metric]:
    radio_id = str(int(radio.get("radio_id") or 0))
    channel = str(int(radio.get("oper_chan") or 0))
    metrics = [_RADIO_INFO.counter(1, vdom, ap_name, radio_id, channel)]
    metrics.extend(
        desc.gauge(_number(radio, key) / divisor, vdom, ap_name, radio_id)
        for desc, key, divisor in _RADIO_GAUGES
    )
    return metrics


def _wired_metrics(wired: dict, vdom: str, ap_name: str) -> list[Metric]:
    interface = wired.get("interface") or ""
    return [desc.gauge(_number(wired, key), vdom, ap_name, interface) for desc, key in _WIRED_GAUGES]


def probe_wifi_managed_ap(client: FortiClient, meta: TargetMetadata) -> list[Metric]:
    """Report system figures, radios and wired interfaces of each managed access point.

    At most 1000 access points are fetched.
    """
    response = fetch(client, "api/v2/monitor/wifi/managed_ap", "vdom=*&start=0&count=1000")
    if not isinstance(response, list):
        raise ProbeError("wifi managed ap: unexpected response")
    metrics = []
    for vdom_result in response:
        for ap in vdom_result.get("results") or []:
            vdom = ap.get("vdom") or ""
            name = ap.get("name") or ""
            metrics += [
                _INFO.counter(
                    1,
                    vdom,
                    name,
                    ap.get("ap_profile") or "",
                    ap.get("os_version") or "",
                    ap.get("serial") or "",
                ),
                _JOIN_TIME.counter(_number(ap, "join_time_raw"), vdom, name),
                _CPU_USAGE.gauge(_number(ap, "cpu_usage") / 100, vdom, name),
                _MEM_FREE.gauge(_number(ap, "mem_free"), vdom, name),
                _MEM_TOTAL.gauge(_number(ap, "mem_total"), vdom, name),
            ]
            for radio in ap.get("radio") or []:
                metrics.extend(_radio_metrics(radio, vdom, name))
            for wired in ap.get("wired") or []:
                metrics.extend(_wired_metrics(wired, vdom, name))
    return metrics