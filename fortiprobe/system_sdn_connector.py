"""Status of SDN connectors per VDOM."""

from __future__ import annotations

from .base import Desc, FortiClient, Metric, ProbeError, TargetMetadata, fetch

_LABELS = ("vdom", "name", "type")

_STATUS = Desc(
    "fortigate_system_sdn_connector_status",
    "Status of SDN connectors (0=Disabled, 1=Down, 2=Unknown, 3=Up, 4=Updating)",
    _LABELS,
)
_LAST_UPDATE = Desc(
    "fortigate_system_sdn_connector_last_update_seconds",
    "Last update time for SDN connectors (in seconds from epoch)",
    _LABELS,
)

_STATUS_CODES = {"Disabled": 0, "Down": 1, "Unknown": 2, "Up": 3, "Updating": 4}


def probe_system_sdn_connector(client: FortiClient, meta: TargetMetadata) -> list[Metric]:
    """Report status code and last update time of every SDN connector.

    A connector whose status is not one of the known values gets no status
    sample, only its last update time.
    """
    response = fetch(client, "api/v2/monitor/system/sdn-connector/status", "vdom=*")
    if not isinstance(response, list):
        raise ProbeError("sdn connector: unexpected response")
    metrics = []
    for vdom_result in response:
        vdom = vdom_result.get("vdom") or ""
        for connector in vdom_result.get("results") or []:
            labels = (vdom, connector.get("name") or "", connector.get("type") or "")
            code = _STATUS_CODES.get(connector.get("status"))
            if code is not None:
                metrics.append(_STATUS.gauge(code, *labels))
            metrics.append(_LAST_UPDATE.gauge(int(connector.get("last_update") or 0), *labels))
    return metrics