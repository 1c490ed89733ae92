import copy

import pytest

from fortiprobe.base import ProbeError, TargetMetadata, render_text
from fortiprobe.system_sensor_info import probe_system_sensor_info

META = TargetMetadata(7, 0)


class _FakeClient:
    def __init__(self, responses):
        self.responses = responses

    def get(self, path, query):
        return copy.deepcopy(self.responses[(path, query)])


class _FailingClient:
    def get(self, path, query):
        raise ProbeError("unreachable")


def _lines(text):
    return sorted(line.strip() for line in text.strip().splitlines())


FANS = [
    ("FAN1", 2900), ("FAN2", 2400), ("FAN3", 3000), ("FAN4", 2500),
    ("FAN5", 2900), ("FAN6", 2600), ("PS1 Fan 1", 4096), ("PS2 Fan 1", 4224),
]
TEMPERATURES = [
    ("CPU 0 Core 0", 40), ("CPU 0 Core 1", 42), ("CPU 0 Core 2", 42), ("CPU 0 Core 3", 41),
    ("CPU 0 Core 4", 43), ("CPU 0 Core 5", 41), ("CPU 0 Core 6", 44), ("CPU 0 Core 7", 43),
    ("CPU 1 Core 0", 41), ("CPU 1 Core 1", 42), ("CPU 1 Core 2", 42), ("CPU 1 Core 3", 41),
    ("CPU 1 Core 4", 43), ("CPU 1 Core 5", 41), ("CPU 1 Core 6", 44), ("CPU 1 Core 7", 43),
    ("DTS CPU0", 47), ("DTS CPU1", 49), ("PS1 Temp", 25), ("PS2 Temp", 25),
    ("TD1", 31), ("TD2", 38), ("TD3", 27), ("TD4", 30),
    ("TS1", 31), ("TS2", 31), ("TS3", 32), ("TS4", 32), ("TS5", 31),
]
VOLTAGES = [
    ("+12V", "12.077", 12.077), ("+3.3VSB", "3.264", 3.264), ("+3.3VSB_SMC", "3.264", 3.264),
    ("3VDD", "3.264", 3.264), ("CPU0 PVCCIN", "1.792", 1.792), ("CPU1 PVCCIN", "1.792", 1.792),
    ("MAC_1.025V", "1.027", 1.027), ("MAC_AVS 1V", "0.99", 0.99), ("P1V05_PCH", "1.008", 1.008),
    ("P3V3_AUX", "3.3126", 3.3126), ("PS1 VIN", "224", 224), ("PS1 VOUT_12V", "12.032", 12.032),
    ("PS2 VIN", "226", 226), ("PS2 VOUT_12V", "12.032", 12.032), ("PVCCIO", "1.04", 1.04),
    ("PVDDQ AB", "1.2", 1.2), ("PVDDQ EF", "1.2", 1.2), ("PVTT AB", "0.592", 0.592),
    ("PVTT CD", "0.592", 0.592), ("PVTT GH", "0.592", 0.592), ("VCC1.15V", "1.1581", 1.1581),
    ("VCC2.5V", "2.5169", 2.5169), ("VCC3V3", "3.3126", 3.3126), ("VCC5V", "4.999", 4.999),
]


def _response():
    results = [{"name": n, "type": "fan", "value": v} for n, v in FANS]
    results += [{"name": n, "type": "temperature", "value": v} for n, v in TEMPERATURES]
    results += [{"name": n, "type": "voltage", "value": v} for n, _, v in VOLTAGES]
    results.append({"name": "PSU1", "type": "power", "value": 1})
    return {"results": results, "vdom": "root", "status": "success"}


def test_system_sensor_info():
    client = _FakeClient({("api/v2/monitor/system/sensor-info", "vdom=root"): _response()})
    expected = [
        "# HELP fortigate_sensor_fan_rpm Sensor fan rotation speed in RPM",
        "# TYPE fortigate_sensor_fan_rpm gauge",
        "# HELP fortigate_sensor_temperature_celsius Sensor temperature in degree celsius",
        "# TYPE fortigate_sensor_temperature_celsius gauge",
        "# HELP fortigate_sensor_voltage_volts Sensor voltage in volts",
        "# TYPE fortigate_sensor_voltage_volts gauge",
    ]
    expected += [f'fortigate_sensor_fan_rpm{{name="{n}"}} {v}' for n, v in FANS]
    expected += [f'fortigate_sensor_temperature_celsius{{name="{n}"}} {v}' for n, v in TEMPERATURES]
    expected += [f'fortigate_sensor_voltage_volts{{name="{n}"}} {text}' for n, text, _ in VOLTAGES]
    assert _lines(render_text(probe_system_sensor_info(client, META))) == sorted(expected)


def test_system_sensor_info_skips_unknown_types():
    client = _FakeClient(
        {
            ("api/v2/monitor/system/sensor-info", "vdom=root"): {
                "results": [{"name": "PSU1", "type": "power", "value": 1}]
            }
        }
    )
    assert probe_system_sensor_info(client, META) == []


def test_system_sensor_info_error():
    with pytest.raises(ProbeError):
        probe_system_sensor_info(_FailingClient(), META)