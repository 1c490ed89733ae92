"""HA role of each cluster member, from the HA checksum endpoint."""

from __future__ import annotations

from .base import Desc, FortiClient, Metric, ProbeError, TargetMetadata, fetch

_HAS_ROLE = Desc("fortigate_ha_member_has_role", "Master/Slave information", ("role", "serial"))


def probe_system_ha_checksum(client: FortiClient, meta: TargetMetadata) -> list[Metric]:
    """Report for each member whether it is the manage and root master."""
    response = fetch(client, "api/v2/monitor/system/ha-checksums", "scope=global")
    if not isinstance(response, dict):
        raise ProbeError("ha checksums: unexpected response")
    metrics = []
    for member in response.get("results") or []:
        serial = member.get("serial_no") or ""
        metrics.append(_HAS_ROLE.gauge(member.get("is_manage_master") or 0, "manage_master", serial))
        metrics.append(_HAS_ROLE.gauge(member.get("is_root_master") or 0, "root_master", serial))
    return metrics