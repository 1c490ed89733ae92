"""Runs the selected probes against a target and gathers their metrics."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Sequence

from .base import FortiClient, Metric, ProbeError, TargetMetadata, fetch
from .system_available_certificates import probe_system_available_certificates
from .system_fortimanager import probe_system_fortimanager_status
from .system_ha_checksum import probe_system_ha_checksum
from .system_ha_statistics import probe_system_ha_statistics
from .system_interface import probe_system_interface
from .system_link_monitor import probe_system_link_monitor
from .system_resources_usage import probe_system_resource_usage, probe_system_vdom_resources
from .system_sdn_connector import probe_system_sdn_connector
from .system_sensor_info import probe_system_sensor_info
from .system_status import probe_system_status
from .system_time import probe_system_time
from .user_fsso import probe_user_fsso
from .virtual_wan_health_check import probe_virtual_wan_health_check
from .vpn_ipsec import probe_vpn_ipsec
from .vpn_ssl import probe_vpn_ssl
from .vpn_ssl_stats import probe_vpn_ssl_stats
from .webui_state import probe_webui_state
from .wifi_ap_status import probe_wifi_ap_status
from .wifi_clients import probe_wifi_clients
from .wifi_managed_ap import probe_wifi_managed_ap

log = logging.getLogger(__name__)

ProbeFunction = Callable[[FortiClient, TargetMetadata], list]

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)")


@dataclass(frozen=True)
class ProbeSpec:
    """A named probe; the name is what include/exclude prefixes match against."""

    name: str
    function: ProbeFunction


# The clock probe stays first so the reported time is as close as possible
# to the moment the scrape was requested.
PROBES: tuple[ProbeSpec, ...] = (
    ProbeSpec("System/Time/Clock", probe_system_time),
    ProbeSpec("System/AvailableCertificates", probe_system_available_certificates),
    ProbeSpec("System/Fortimanager/Status", probe_system_fortimanager_status),
    ProbeSpec("System/HAStatistics", probe_system_ha_statistics),
    ProbeSpec("System/Interface", probe_system_interface),
    ProbeSpec("System/LinkMonitor", probe_system_link_monitor),
    ProbeSpec("System/Resource/Usage", probe_system_resource_usage),
    ProbeSpec("System/SDNConnector", probe_system_sdn_connector),
    ProbeSpec("System/SensorInfo", probe_system_sensor_info),
    ProbeSpec("System/Status", probe_system_status),
    ProbeSpec("System/VDOMResources", probe_system_vdom_resources),
    ProbeSpec("System/HAChecksum", probe_system_ha_checksum),
    ProbeSpec("User/Fsso", probe_user_fsso),
    ProbeSpec("VPN/IPSec", probe_vpn_ipsec),
    ProbeSpec("VPN/Ssl/Connections", probe_vpn_ssl),
    ProbeSpec("VPN/Ssl/Stats", probe_vpn_ssl_stats),
    ProbeSpec("VirtualWAN/HealthCheck", probe_virtual_wan_health_check),
    ProbeSpec("WebUI/State", probe_webui_state),
    ProbeSpec("Wifi/APStatus", probe_wifi_ap_status),
    ProbeSpec("Wifi/Clients", probe_wifi_clients),
    ProbeSpec("Wifi/ManagedAP", probe_wifi_managed_ap),
)


def is_wanted(name: str, include: Sequence[str], exclude: Sequence[str]) -> bool:
    """Decide whether a probe runs.

    With no include prefixes every probe is wanted; otherwise only those whose
    name starts with one of them. A matching exclude prefix always wins.
    """
    wanted = not include or any(name.startswith(prefix) for prefix in include)
    if any(name.startswith(prefix) for prefix in exclude):
        wanted = False
    return wanted


def check_connectivity(client: FortiClient) -> TargetMetadata:
    """Test the API connection and read the OS version of the target.

    Raises ProbeError when the target is unreachable, reports a status other
    than "success", or has a version that cannot be parsed.
    """
    try:
        status = fetch(client, "api/v2/monitor/system/status", "")
    except ProbeError as exc:
        raise ProbeError(f"API connectivity test failed, {exc}") from exc
    if not isinstance(status, dict):
        raise ProbeError("API connectivity test returned an unexpected response")
    if status.get("status") != "success":
        raise ProbeError(f"API connectivity test returned status: {status.get('status') or ''}")
    version = status.get("version") or ""
    match = _VERSION_RE.match(version) if isinstance(version, str) else None
    if match is None:
        raise ProbeError(f"Failed to parse OS version: {version!r}")
    return TargetMetadata(version_major=int(match.group(1)), version_minor=int(match.group(2)))


class ProbeCollector:
    """Runs every wanted probe and keeps the metrics they return."""

    def __init__(self, include: Iterable[str] = (), exclude: Iterable[str] = ()) -> None:
        self.include = tuple(include)
        self.exclude = tuple(exclude)
        self.metrics: list[Metric] = []

    def probe(self, client: FortiClient, meta: TargetMetadata) -> bool:
        """Run the wanted probes in order; return False if any of them failed.

        A failing probe is logged and skipped; the others still run.
        """
        success = True
        for spec in PROBES:
            if not is_wanted(spec.name, self.include, self.exclude):
                continue
            try:
                self.metrics.extend(spec.function(client, meta))
            except ProbeError as exc:
                log.error("Error: %s: %s", spec.name, exc)
                success = False
        return success

    def collect(self) -> Iterator[Metric]:
        """Yield every metric gathered so far."""
        yield from self.metrics