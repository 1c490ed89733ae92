"""Probes that read a FortiGate's REST API and return metrics in Prometheus form."""

__version__ = "0.1.0"