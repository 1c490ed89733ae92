"""Fortinet single sign-on connector information."""

from __future__ import annotations

from .base import Desc, FortiClient, Metric, ProbeError, TargetMetadata, fetch

_FSSO = Desc(
    "fortigate_user_fsso_info",
    "Info on Fsso defined connectors",
    ("vdom", "name", "id", "type", "status"),
)


def probe_user_fsso(client: FortiClient, meta: TargetMetadata) -> list[Metric]:
    """Report each FSSO connector; 'fsso' connectors by name, others by id."""
    response = fetch(client, "api/v2/monitor/user/fsso", "vdom=*")
    if not isinstance(response, list):
        raise ProbeError("user fsso: unexpected response")
    metrics = []
    for vdom_result in response:
        vdom = vdom_result.get("vdom") or ""
        for connector in vdom_result.get("results") or []:
            kind = connector.get("type") or ""
            status = connector.get("status") or ""
            if kind == "fsso":
                metrics.append(_FSSO.gauge(1, vdom, connector.get("name") or "", "", kind, status))
            else:
                ident = str(int(connector.get("id") or 0))
                metrics.append(_FSSO.gauge(1, vdom, "", ident, kind, status))
    return metrics