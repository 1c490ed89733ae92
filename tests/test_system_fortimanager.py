import textwrap

import pytest

from fortiprobe.base import ProbeError, TargetMetadata, render_text
from fortiprobe.system_fortimanager import probe_system_fortimanager_status

PATH = "api/v2/monitor/system/fortimanager/status"
META = TargetMetadata(version_major=7, version_minor=0)


class FakeClient:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def get(self, path, query):
        self.calls.append((path, query))
        return self.response


class BrokenClient:
    def get(self, path, query):
        raise OSError("timed out")


def _vdom(name, status_id, registration_id, mode="normal"):
    return {
        "http_method": "GET",
        "results": {
            "mode": mode,
            "fortimanager_status_id": status_id,
            "fortimanager_registration_status_id": registration_id,
        },
        "vdom": name,
        "status": "success",
    }


EXPECTED = textwrap.dedent(
    """\
    # HELP fortigate_fortimanager_connection_status Fortimanager status ID
    # TYPE fortigate_fortimanager_connection_status gauge
    fortigate_fortimanager_connection_status{mode="normal",status="down",vdom="VDOM1"} 0
    fortigate_fortimanager_connection_status{mode="normal",status="down",vdom="root"} 0
    fortigate_fortimanager_connection_status{mode="normal",status="handshake",vdom="VDOM1"} 0
    fortigate_fortimanager_connection_status{mode="normal",status="handshake",vdom="root"} 0
    fortigate_fortimanager_connection_status{mode="normal",status="up",vdom="VDOM1"} 1
    fortigate_fortimanager_connection_status{mode="normal",status="up",vdom="root"} 1
    # HELP fortigate_fortimanager_registration_status Fortimanager registration status ID
    # TYPE fortigate_fortimanager_registration_status gauge
    fortigate_fortimanager_registration_status{mode="normal",status="inprogress",vdom="VDOM1"} 0
    fortigate_fortimanager_registration_status{mode="normal",status="inprogress",vdom="root"} 0
    fortigate_fortimanager_registration_status{mode="normal",status="registered",vdom="VDOM1"} 1
    fortigate_fortimanager_registration_status{mode="normal",status="registered",vdom="root"} 1
    fortigate_fortimanager_registration_status{mode="normal",status="unknown",vdom="VDOM1"} 0
    fortigate_fortimanager_registration_status{mode="normal",status="unknown",vdom="root"} 0
    fortigate_fortimanager_registration_status{mode="normal",status="unregistered",vdom="VDOM1"} 0
    fortigate_fortimanager_registration_status{mode="normal",status="unregistered",vdom="root"} 0
    """
)


def _values(metrics):
    return {(m.name, m.labels()["status"]): m.value for m in metrics}


def test_fortimanager_status_text_matches():
    client = FakeClient([_vdom("root", 2, 2), _vdom("VDOM1", 2, 2)])
    metrics = probe_system_fortimanager_status(client, META)
    assert render_text(metrics) == EXPECTED
    assert client.calls == [(PATH, "vdom=*")]


def test_down_and_unregistered():
    metrics = probe_system_fortimanager_status(FakeClient([_vdom("root", 0, 3)]), META)
    values = _values(metrics)
    assert values[("fortigate_fortimanager_connection_status", "down")] == 1.0
    assert values[("fortigate_fortimanager_connection_status", "up")] == 0.0
    assert values[("fortigate_fortimanager_registration_status", "unregistered")] == 1.0
    assert values[("fortigate_fortimanager_registration_status", "unknown")] == 0.0


def test_handshake_and_in_progress():
    metrics = probe_system_fortimanager_status(FakeClient([_vdom("root", 1, 1)]), META)
    values = _values(metrics)
    assert values[("fortigate_fortimanager_connection_status", "handshake")] == 1.0
    assert values[("fortigate_fortimanager_registration_status", "inprogress")] == 1.0
    assert sum(values.values()) == 2.0


def test_unrecognised_ids_set_no_state():
    metrics = probe_system_fortimanager_status(FakeClient([_vdom("root", 9, 9)]), META)
    assert len(metrics) == 7
    assert all(m.value == 0.0 for m in metrics)


def test_fetch_failure_raises():
    with pytest.raises(ProbeError):
        probe_system_fortimanager_status(BrokenClient(), META)


def test_non_list_response_raises():
    with pytest.raises(ProbeError):
        probe_system_fortimanager_status(FakeClient({"results": {}}), META)