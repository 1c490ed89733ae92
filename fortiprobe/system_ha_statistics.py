"""Per-member statistics of an HA cluster."""

from __future__ import annotations

from .base import Desc, FortiClient, Metric, ProbeError, TargetMetadata, fetch

_MEMBER = ("vdom", "hostname")

_INFO = Desc(
    "fortigate_ha_member_info",
    "Info metric regarding cluster members",
    ("vdom", "hostname", "serial", "group"),
)
_SESSIONS = Desc(
    "fortigate_ha_member_sessions", "Sessions which are handled by this HA member", _MEMBER
)
_PACKETS = Desc(
    "fortigate_ha_member_packets_total", "Packets which are handled by this HA member", _MEMBER
)
_VIRUS_EVENTS = Desc(
    "fortigate_ha_member_virus_events_total",
    "Virus events which are detected by this HA member",
    _MEMBER,
)
_NETWORK_USAGE = Desc(
    "fortigate_ha_member_network_usage_ratio", "Network usage by HA member", _MEMBER
)
_BYTES = Desc("fortigate_ha_member_bytes_total", "Bytes transferred by HA member", _MEMBER)
_IPS_EVENTS = Desc(
    "fortigate_ha_member_ips_events_total", "IPS events processed by HA member", _MEMBER
)
_CPU_USAGE = Desc("fortigate_ha_member_cpu_usage_ratio", "CPU usage by HA member", _MEMBER)
_MEMORY_USAGE = Desc(
    "fortigate_ha_member_memory_usage_ratio", "Memory usage by HA member", _MEMBER
)


def probe_system_ha_statistics(client: FortiClient, meta: TargetMetadata) -> list[Metric]:
    """Report sessions, traffic, events and resource usage of every HA member.

    The cluster group name comes from the HA configuration; when it is not
    readable the ``group`` label is left empty.
    """
    stats = fetch(client, "api/v2/monitor/system/ha-statistics", "")
    if not isinstance(stats, dict):
        raise ProbeError("ha statistics: unexpected response")
    config = fetch(client, "api/v2/cmdb/system/ha", "")
    if not isinstance(config, dict):
        raise ProbeError("ha config: unexpected response")
    config_results = config.get("results")
    group = (config_results.get("group-name") or "") if isinstance(config_results, dict) else ""

    vdom = stats.get("vdom") or ""
    metrics = []
    for member in stats.get("results") or []:
        host = member.get("hostname") or ""
        metrics += [
            _INFO.gauge(1, vdom, host, member.get("serial_no") or "", group),
            _SESSIONS.gauge(member.get("sessions") or 0.0, vdom, host),
            _PACKETS.counter(member.get("tpacket") or 0.0, vdom, host),
            _VIRUS_EVENTS.counter(member.get("vir_usage") or 0.0, vdom, host),
            _NETWORK_USAGE.gauge((member.get("net_usage") or 0.0) / 100, vdom, host),
            _BYTES.counter(member.get("tbyte") or 0.0, vdom, host),
            _IPS_EVENTS.counter(member.get("intr_usage") or 0.0, vdom, host),
            _CPU_USAGE.gauge((member.get("cpu_usage") or 0.0) / 100, vdom, host),
            _MEMORY_USAGE.gauge((member.get("mem_usage") or 0.0) / 100, vdom, host),
        ]
    return metrics