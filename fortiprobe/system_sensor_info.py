"""Hardware sensor readings: temperatures, fans and voltages."""

from __future__ import annotations

from .base import Desc, FortiClient, Metric, ProbeError, TargetMetadata, fetch

_SENSORS = {
    "temperature": Desc(
        "fortigate_sensor_temperature_celsius", "Sensor temperature in degree celsius", ("name",)
    ),
    "fan": Desc("fortigate_sensor_fan_rpm", "Sensor fan rotation speed in RPM", ("name",)),
    "voltage": Desc("fortigate_sensor_voltage_volts", "Sensor voltage in volts", ("name",)),
}


def probe_system_sensor_info(client: FortiClient, meta: TargetMetadata) -> list[Metric]:
    """Report every temperature, fan and voltage sensor; other sensor types are skipped."""
    response = fetch(client, "api/v2/monitor/system/sensor-info", "vdom=root")
    if not isinstance(response, dict):
        raise ProbeError("sensor info: unexpected response")
    metrics = []
    for sensor in response.get("results") or []:
        desc = _SENSORS.get(sensor.get("type"))
        if desc is not None:
            metrics.append(desc.gauge(sensor.get("value") or 0.0, sensor.get("name") or ""))
    return metrics