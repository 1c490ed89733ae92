import textwrap

import pytest

from fortiprobe.base import ProbeError, TargetMetadata, render_text
from fortiprobe.wifi_ap_status import probe_wifi_ap_status

PATH = "api/v2/monitor/wifi/ap_status"
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
        raise OSError("unreachable")


RESPONSE = [
    {
        "http_method": "GET",
        "results": {
            "wtp_session_count": 3,
            "wtp_active": 3,
            "wtp_down": 0,
            "wtp_rebooted": 0,
            "client_count": 17,
            "client_count_max": 0,
        },
        "vdom": "root",
        "status": "success",
    }
]

EXPECTED = textwrap.dedent(
    """\
    # HELP fortigate_wifi_access_points Number of connected access points by status
    # TYPE fortigate_wifi_access_points gauge
    fortigate_wifi_access_points{status="active",vdom="root"} 3
    fortigate_wifi_access_points{status="down",vdom="root"} 0
    fortigate_wifi_access_points{status="rebooting",vdom="root"} 0
    # HELP fortigate_wifi_fabric_clients Number of connected clients
    # TYPE fortigate_wifi_fabric_clients gauge
    fortigate_wifi_fabric_clients{vdom="root"} 17
    # HELP fortigate_wifi_fabric_max_allowed_clients Maximum number of clients which are allowed to connect
    # TYPE fortigate_wifi_fabric_max_allowed_clients gauge
    fortigate_wifi_fabric_max_allowed_clients{vdom="root"} 0
    """
)


def test_wifi_ap_status_text_matches():
    client = FakeClient(RESPONSE)
    assert render_text(probe_wifi_ap_status(client, META)) == EXPECTED
    assert client.calls == [(PATH, "vdom=*")]


def test_empty_response_gives_no_metrics():
    assert probe_wifi_ap_status(FakeClient([]), META) == []


def test_each_vdom_gets_five_samples():
    response = RESPONSE + [{"results": {"wtp_down": 2}, "vdom": "guest"}]
    metrics = probe_wifi_ap_status(FakeClient(response), META)
    guest = {
        (m.name, m.labels().get("status")): m.value
        for m in metrics
        if m.labels()["vdom"] == "guest"
    }
    assert len(metrics) == 10
    assert guest[("fortigate_wifi_access_points", "down")] == 2.0
    assert guest[("fortigate_wifi_fabric_clients", None)] == 0.0


def test_fetch_failure_raises():
    with pytest.raises(ProbeError):
        probe_wifi_ap_status(BrokenClient(), META)


def test_non_list_response_raises():
    with pytest.raises(ProbeError):
        probe_wifi_ap_status(FakeClient({"results": {}}), META)