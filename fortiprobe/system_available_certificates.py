"""Certificates available on the target, both global and per VDOM."""

from __future__ import annotations

from .base import Desc, FortiClient, Metric, ProbeError, TargetMetadata, fetch

_PATH = "api/v2/monitor/system/available-certificates"

_INFO = Desc(
    "fortigate_certificate_info",
    "Info metric containing meta information about the certificate",
    ("name", "source", "scope", "vdom", "status", "type"),
)
_VALID_FROM = Desc(
    "fortigate_certificate_valid_from_seconds",
    "Unix timestamp from which this certificate is valid",
    ("name", "source", "scope", "vdom"),
)
_VALID_TO = Desc(
    "fortigate_certificate_valid_to_seconds",
    "Unix timestamp till which this certificate is valid",
    ("name", "source", "scope", "vdom"),
)
_CMDB_REFERENCES = Desc(
    "fortigate_certificate_cmdb_references",
    "Number of times the certificate is referenced",
    ("name", "source", "scope", "vdom"),
)


def _certificate_metrics(response: dict, scope: str) -> list[Metric]:
    vdom = response.get("vdom") or ""
    metrics = []
    for cert in response.get("results") or []:
        name = cert.get("name") or ""
        source = cert.get("source") or ""
        metrics.append(
            _INFO.gauge(
                1, name, source, scope, vdom, cert.get("status") or "", cert.get("type") or ""
            )
        )
        metrics.append(_VALID_FROM.gauge(cert.get("valid_from") or 0.0, name, source, scope, vdom))
        metrics.append(_VALID_TO.gauge(cert.get("valid_to") or 0.0, name, source, scope, vdom))
        metrics.append(_CMDB_REFERENCES.gauge(cert.get("q_ref") or 0.0, name, source, scope, vdom))
    return metrics


def probe_system_available_certificates(
    client: FortiClient, meta: TargetMetadata
) -> list[Metric]:
    """Report validity period and reference count of every certificate.

    Per-VDOM certificates are reported first with scope "vdom", followed by
    the global ones with scope "global".
    """
    global_response = fetch(client, _PATH, "scope=global")
    if not isinstance(global_response, dict):
        raise ProbeError("available certificates: unexpected global response")
    vdom_responses = fetch(client, _PATH, "vdom=*")
    if not isinstance(vdom_responses, list):
        raise ProbeError("available certificates: unexpected vdom response")

    metrics = []
    for response in vdom_responses:
        metrics.extend(_certificate_metrics(response, "vdom"))
    metrics.extend(_certificate_metrics(global_response, "global"))
    return metrics