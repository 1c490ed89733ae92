# fortiprobe

`fortiprobe` reads the monitoring endpoints of a FortiGate firewall's REST API
and turns the answers into metrics, which it can write in the Prometheus text
exposition format. It has no dependencies outside the standard library.

## Probes

Each probe is a function `probe_...(client, meta)` that asks the device for
one area of its state and returns a list of `Metric` objects. When the request
fails or the answer has an unexpected shape, the probe raises `ProbeError`.

| Probe name                     | Function (module)                                                        | What it reports                               |
|--------------------------------|--------------------------------------------------------------------------|-----------------------------------------------|
| `System/Time/Clock`            | `probe_system_time` (`system_time`)                                      | the device clock                              |
| `System/AvailableCertificates` | `probe_system_available_certificates` (`system_available_certificates`)  | certificate validity and references           |
| `System/Fortimanager/Status`   | `probe_system_fortimanager_status` (`system_fortimanager`)               | FortiManager tunnel and registration state    |
| `System/HAStatistics`          | `probe_system_ha_statistics` (`system_ha_statistics`)                    | HA cluster members and their load             |
| `System/Interface`             | `probe_system_interface` (`system_interface`)                            | link state, speed, packets, bytes and errors  |
| `System/LinkMonitor`           | `probe_system_link_monitor` (`system_link_monitor`)                      | link monitor status, latency, jitter, loss    |
| `System/Resource/Usage`        | `probe_system_resource_usage` (`system_resources_usage`)                 | per-core CPU, memory and sessions             |
| `System/SDNConnector`          | `probe_system_sdn_connector` (`system_sdn_connector`)                    | SDN connector status and last update          |
| `System/SensorInfo`            | `probe_system_sensor_info` (`system_sensor_info`)                        | temperatures, fan speeds and voltages         |
| `System/Status`                | `probe_system_status` (`system_status`)                                  | serial number, OS version and build           |
| `System/VDOMResources`         | `probe_system_vdom_resources` (`system_resources_usage`)                 | CPU, memory and sessions per VDOM             |
| `System/HAChecksum`            | `probe_system_ha_checksum` (`system_ha_checksum`)                        | HA member roles                               |
| `User/Fsso`                    | `probe_user_fsso` (`user_fsso`)                                          | FSSO connectors                               |
| `VPN/IPSec`                    | `probe_vpn_ipsec` (`vpn_ipsec`)                                          | IPsec tunnel state and traffic                |
| `VPN/Ssl/Connections`          | `probe_vpn_ssl` (`vpn_ssl`)                                              | SSL VPN connections and users                 |
| `VPN/Ssl/Stats`                | `probe_vpn_ssl_stats` (`vpn_ssl_stats`)                                  | SSL VPN users, tunnels and connections        |
| `VirtualWAN/HealthCheck`       | `probe_virtual_wan_health_check` (`virtual_wan_health_check`)            | SD-WAN health checks                          |
| `WebUI/State`                  | `probe_webui_state` (`webui_state`)                                      | last reboot and last snapshot                 |
| `Wifi/APStatus`                | `probe_wifi_ap_status` (`wifi_ap_status`)                                | access points and wireless clients            |
| `Wifi/Clients`                 | `probe_wifi_clients` (`wifi_clients`)                                    | connected wireless clients (at most 1000)     |
| `Wifi/ManagedAP`               | `probe_wifi_managed_ap` (`wifi_managed_ap`)                              | managed access points, radios and wired ports |

The probes run by `ProbeCollector` are the ones listed above, in that order,
and are kept in `fortiprobe.collector.PROBES` as `ProbeSpec(name, function)`.

## Talking to the device

The probes never open a connection themselves. They ask a client for data:
anything with a `get(path, query)` method fits the `FortiClient` protocol in
`fortiprobe.base`. It receives an API path such as
`api/v2/monitor/system/status` and a query string such as `vdom=*`, and returns
the decoded JSON document. `ProbeError`, `OSError` and `ValueError` raised by
the client all reach the caller of a probe as `ProbeError` (through
`fetch(client, path, query)`).

A client that answers from recorded documents is enough for testing:

```python
class RecordedClient:
    def __init__(self, documents):
        self.documents = documents  # {(path, query): decoded JSON}

    def get(self, path, query):
        return self.documents[(path, query)]
```

## Running the probes

`check_connectivity(client)` from `fortiprobe.collector` asks the device for
its system status. It raises `ProbeError` if the request fails, if the status
is not `"success"`, or if the OS version cannot be parsed; otherwise it returns
a `TargetMetadata` holding the major and minor OS version.

`ProbeCollector(include, exclude)` runs every probe that is wanted. Both
arguments are sequences of name prefixes from the table above, and
`is_wanted(name, include, exclude)` applies the rule to one name:

- with an empty `include`, every probe is wanted; otherwise only those whose
  name starts with one of its entries;
- a probe whose name starts with an entry of `exclude` is never run.

```python
from fortiprobe.base import render_text
from fortiprobe.collector import ProbeCollector, check_connectivity

meta = check_connectivity(client)
meta.max_vpn_users = 50  # report per-user SSL VPN connections up to 50 sessions

collector = ProbeCollector(include=["System/", "VPN/"], exclude=["System/SensorInfo"])
ok = collector.probe(client, meta)
print(render_text(collector.collect()))
```

`probe` returns `False` if any probe raised `ProbeError`; that probe is logged
and skipped, and the metrics of the others are kept. Metrics accumulate in
`collector.metrics` across calls, and `collect()` yields them all.

`TargetMetadata.max_vpn_users` defaults to 0, which turns the per-user
`fortigate_vpn_users` metric off; when a VDOM has more SSL VPN sessions than
the limit, an error is logged and the per-user metric is left out for it.

## Metrics

A metric family is described by a `Desc(name, help, label_names)`. A sample is
made with `Desc.gauge(value, *label_values)` or
`Desc.counter(value, *label_values)`; a wrong number of label values raises
`ValueError`. The resulting `Metric` has `name`, `value`, `value_type` (a
`ValueType`: `GAUGE` or `COUNTER`) and `label_values`, and `Metric.labels()`
returns the labels as a dict.

`render_text(metrics)` writes metrics in the Prometheus text format: families
sorted by name, each with its `# HELP` and `# TYPE` lines, and samples sorted
by their labels.

Ratios are reported between 0 and 1, times in seconds and bandwidths in bytes
or bits per second, as the metric names say.

## What it does not do

`fortiprobe` is a library. It has no command-line program, no HTTP server to
expose the metrics, no configuration file for targets or API tokens, and no
HTTP client for the FortiGate API: the caller supplies the `FortiClient` and
publishes the text that `render_text` produces.