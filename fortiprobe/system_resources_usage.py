"""CPU, memory and session usage, for the whole system and per VDOM."""

from __future__ import annotations

from .base import Desc, FortiClient, Metric, ProbeError, TargetMetadata, fetch

_PATH = "api/v2/monitor/system/resource/usage"

_CPU = Desc(
    "fortigate_cpu_usage_ratio",
    "Current resource usage ratio of system CPU, per core",
    ("processor",),
)
_MEMORY = Desc("fortigate_memory_usage_ratio", "Current resource usage ratio of system memory")
_SESSIONS = Desc(
    "fortigate_current_sessions", "Current amount of sessions, per IP version", ("protocol",)
)

_VDOM_CPU = Desc(
    "fortigate_vdom_cpu_usage_ratio", "Current resource usage ratio of CPU, per VDOM", ("vdom",)
)
_VDOM_MEMORY = Desc(
    "fortigate_vdom_memory_usage_ratio",
    "Current resource usage ratio of memory, per VDOM",
    ("vdom",),
)
_VDOM_SESSIONS = Desc(
    "fortigate_vdom_current_sessions",
    "Current amount of sessions, per VDOM and IP version",
    ("vdom", "protocol"),
)


def _currents(results: dict, key: str) -> list[float]:
    samples = results.get(key) or []
    if not samples:
        raise ProbeError(f"resource usage: no {key!r} samples")
    return [float(sample.get("current") or 0.0) for sample in samples]


def probe_system_resource_usage(client: FortiClient, meta: TargetMetadata) -> list[Metric]:
    """Report per-core CPU usage, memory usage and IPv4/IPv6 session counts.

    The first CPU sample is the average over all cores and is skipped.
    """
    response = fetch(client, _PATH, "interval=1-min&scope=global")
    if not isinstance(response, dict):
        raise ProbeError("resource usage: unexpected response")
    results = response.get("results") or {}
    cpus = _currents(results, "cpu")
    metrics = [_CPU.gauge(value / 100.0, str(core)) for core, value in enumerate(cpus[1:])]
    metrics.append(_MEMORY.gauge(_currents(results, "mem")[0] / 100.0))
    metrics.append(_SESSIONS.gauge(_currents(results, "session")[0], "ipv4"))
    metrics.append(_SESSIONS.gauge(_currents(results, "session6")[0], "ipv6"))
    return metrics


def probe_system_vdom_resources(client: FortiClient, meta: TargetMetadata) -> list[Metric]:
    """Report CPU usage, memory usage and IPv4/IPv6 session counts of each VDOM."""
    response = fetch(client, _PATH, "interval=1-min&vdom=*")
    if not isinstance(response, list):
        raise ProbeError("vdom resource usage: unexpected response")
    metrics = []
    for vdom_result in response:
        vdom = vdom_result.get("vdom") or ""
        results = vdom_result.get("results") or {}
        metrics += [
            _VDOM_CPU.gauge(_currents(results, "cpu")[0] / 100.0, vdom),
            _VDOM_MEMORY.gauge(_currents(results, "mem")[0] / 100.0, vdom),
            _VDOM_SESSIONS.gauge(_currents(results, "session")[0], vdom, "ipv4"),
            _VDOM_SESSIONS.gauge(_currents(results, "session6")[0], vdom, "ipv6"),
        ]
    return metrics