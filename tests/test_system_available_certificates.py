import copy

import pytest

from fortiprobe.base import ProbeError, TargetMetadata, ValueType, render_text
from fortiprobe.system_available_certificates import probe_system_available_certificates

PATH = "api/v2/monitor/system/available-certificates"
META = TargetMetadata(version_major=7, version_minor=0)


class FakeClient:
    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def get(self, path, query):
        self.calls.append((path, query))
        return copy.deepcopy(self.responses[(path, query)])


class FailingClient:
    def __init__(self, responses, failing):
        self.responses = responses
        self.failing = failing

    def get(self, path, query):
        if (path, query) == self.failing:
            raise OSError("connection refused")
        return copy.deepcopy(self.responses[(path, query)])


def _cert(name, kind, valid_from, valid_to, q_ref):
    return {
        "name": name,
        "source": "factory",
        "type": kind,
        "status": "valid",
        "valid_from": valid_from,
        "valid_to": valid_to,
        "q_ref": q_ref,
    }


GLOBAL_RESPONSE = {
    "http_method": "GET",
    "results": [
        _cert("Fortinet_CA_SSL", "local-ca", 1472285182, 1787904382, 0),
        _cert("Fortinet_CA_Untrusted", "local-ca", 1472285185, 1787904385, 0),
        _cert("Fortinet_Factory", "local-cer", 1468370862, 2147483647, 4),
        _cert("Fortinet_Wifi", "local-cer", 1606176000, 1640476799, 1),
    ],
    "vdom": "root",
    "status": "success",
}

VDOM_RESPONSE = [
    {
        "http_method": "GET",
        "results": [_cert("Fortinet_CA_SSL", "local-ca", 1472285182, 1787904382, 5)],
        "vdom": "root",
        "status": "success",
    }
]

RESPONSES = {
    (PATH, "scope=global"): GLOBAL_RESPONSE,
    (PATH, "vdom=*"): VDOM_RESPONSE,
}


def _values(metrics):
    return {
        (m.name, m.labels()["name"], m.labels()["scope"]): m.value for m in metrics
    }


def test_certificate_values():
    values = _values(probe_system_available_certificates(FakeClient(RESPONSES), META))
    assert values[("fortigate_certificate_cmdb_references", "Fortinet_CA_SSL", "vdom")] == 5
    assert values[("fortigate_certificate_cmdb_references", "Fortinet_CA_SSL", "global")] == 0
    assert values[("fortigate_certificate_cmdb_references", "Fortinet_Factory", "global")] == 4
    assert values[("fortigate_certificate_valid_to_seconds", "Fortinet_Factory", "global")] == 2147483647
    assert values[("fortigate_certificate_valid_from_seconds", "Fortinet_Wifi", "global")] == 1606176000
    assert values[("fortigate_certificate_info", "Fortinet_CA_Untrusted", "global")] == 1


def test_certificates_text_lines():
    metrics = probe_system_available_certificates(FakeClient(RESPONSES), META)
    lines = render_text(metrics).splitlines()
    assert lines[:2] == [
        "# HELP fortigate_certificate_cmdb_references Number of times the certificate is referenced",
        "# TYPE fortigate_certificate_cmdb_references gauge",
    ]
    assert (
        'fortigate_certificate_info{name="Fortinet_Factory",scope="global",source="factory",'
        'status="valid",type="local-cer",vdom="root"} 1'
    ) in lines
    assert (
        'fortigate_certificate_valid_from_seconds{name="Fortinet_Wifi",scope="global",'
        'source="factory",vdom="root"} 1.606176e+09'
    ) in lines
    assert (
        'fortigate_certificate_valid_to_seconds{name="Fortinet_Factory",scope="global",'
        'source="factory",vdom="root"} 2.147483647e+09'
    ) in lines
    assert len(lines) == 4 * (2 + 5)


def test_certificates_queries_both_scopes():
    client = FakeClient(RESPONSES)
    probe_system_available_certificates(client, META)
    assert client.calls == [(PATH, "scope=global"), (PATH, "vdom=*")]


def test_vdom_certificates_come_before_global():
    metrics = probe_system_available_certificates(FakeClient(RESPONSES), META)
    assert metrics[0].labels()["scope"] == "vdom"
    assert metrics[-1].labels()["scope"] == "global"
    assert len(metrics) == 4 * 5


def test_all_metrics_are_gauges():
    metrics = probe_system_available_certificates(FakeClient(RESPONSES), META)
    assert {m.value_type for m in metrics} == {ValueType.GAUGE}


def test_empty_results_give_no_metrics():
    responses = {
        (PATH, "scope=global"): {"results": [], "vdom": "root"},
        (PATH, "vdom=*"): [],
    }
    assert probe_system_available_certificates(FakeClient(responses), META) == []


def test_global_fetch_failure_raises():
    client = FailingClient(RESPONSES, (PATH, "scope=global"))
    with pytest.raises(ProbeError):
        probe_system_available_certificates(client, META)


def test_vdom_fetch_failure_raises():
    client = FailingClient(RESPONSES, (PATH, "vdom=*"))
    with pytest.raises(ProbeError):
        probe_system_available_certificates(client, META)


def test_vdom_response_of_wrong_shape_raises():
    responses = {(PATH, "scope=global"): GLOBAL_RESPONSE, (PATH, "vdom=*"): {"results": []}}
    with pytest.raises(ProbeError):
        probe_system_available_certificates(FakeClient(responses), META)