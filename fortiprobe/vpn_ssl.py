"""SSL VPN connections, optionally broken down per user."""

from __future__ import annotations

import logging
from collections import Counter

from .base import Desc, FortiClient, Metric, ProbeError, TargetMetadata, fetch

log = logging.getLogger(__name__)

_CONNECTIONS = Desc("fortigate_vpn_connections", "Number of VPN connections", ("vdom",))
_USERS = Desc("fortigate_vpn_users", "Number of VPN users connections", ("vdom", "user"))


def probe_vpn_ssl(client: FortiClient, meta: TargetMetadata) -> list[Metric]:
    """Report SSL VPN connections per VDOM and, up to ``meta.max_vpn_users``, per user."""
    response = fetch(client, "api/v2/monitor/vpn/ssl", "vdom=*")
    if not isinstance(response, list):
        raise ProbeError("vpn ssl: unexpected response")
    limit = meta.max_vpn_users
    metrics = []
    for vdom_result in response:
        vdom = vdom_result.get("vdom") or ""
        sessions = vdom_result.get("results") or []
        count = len(sessions)
        metrics.append(_CONNECTIONS.gauge(count, vdom))
        if limit == 0:
            continue
        if count > limit:
            log.error(
                "Received more VPN Users than maximum (%d > %d) allowed, ignoring metric ...",
                count,
                limit,
            )
            continue
        per_user = Counter(session.get("user_name") or "" for session in sessions)
        metrics.extend(_USERS.gauge(n, vdom, user) for user, n in per_user.items())
    return metrics