"""Shared building blocks for probes: client protocol, metric model and text output."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from itertools import groupby
from typing import Any, Iterable, Protocol, runtime_checkable


class ValueType(Enum):
    """Kind of a metric sample."""

    GAUGE = "gauge"
    COUNTER = "counter"


class ProbeError(Exception):
    """Raised when a probe cannot obtain or understand data from the target."""


@runtime_checkable
class FortiClient(Protocol):
    """Anything able to fetch a decoded JSON document from the FortiGate API."""

    def get(self, path: str, query: str) -> Any:
        """Return the decoded JSON document at ``path`` with ``query``.

        Implementations raise ProbeError (or OSError/ValueError) on failure.
        """
        ...


@dataclass
class TargetMetadata:
    """Facts about the probed device, plus per-target probe settings."""

    version_major: int
    version_minor: int
    max_vpn_users: int = 0


@dataclass(frozen=True)
class Desc:
    """Description of a metric family: name, help text and label names."""

    name: str
    help: str
    label_names: tuple[str, ...] = field(default=())

    def _make(self, value_type: ValueType, value: float, label_values: tuple) -> "Metric":
        if len(label_values) != len(self.label_names):
            raise ValueError(
                f"{self.name}: expected {len(self.label_names)} label values, "
                f"got {len(label_values)}"
            )
        return Metric(self, value_type, float(value), tuple(label_values))

    def gauge(self, value: float, *args: str) -> "Metric":
        """Create a gauge sample with the given label values."""
        return self._make(ValueType.GAUGE, value, args)

    def counter(self, value: float, *args: str) -> "Metric":
        """Create a counter sample with the given label values."""
        return self._make(ValueType.COUNTER, value, args)


@dataclass(frozen=True)
class Metric:
    """A single constant metric sample."""

    desc: Desc
    value_type: ValueType
    value: float
    label_values: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.desc.name

    def labels(self) -> dict[str, str]:
        """Return the labels of this sample as a name-to-value mapping."""
        return dict(zip(self.desc.label_names, self.label_values))


def fetch(client: FortiClient, path: str, query: str) -> Any:
    """Fetch a document through ``client``, turning transport errors into ProbeError."""
    try:
        return client.get(path, query)
    except ProbeError:
        raise
    except (OSError, ValueError) as exc:
        raise ProbeError(f"{path}?{query}: {exc}") from exc


def _format_value(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    point = len(digit_tuple) + exponent
    digits = "".join(map(str, digit_tuple)).rstrip("0")
    prefix = "-" if sign else ""
    exp = point - 1
    if exp < -4 or exp >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        return f"{prefix}{mantissa}e{'-' if exp < 0 else '+'}{abs(exp):02d}"
    if point <= 0:
        body = "0." + "0" * (-point) + digits
    elif point >= len(digits):
        body = digits + "0" * (point - len(digits))
    else:
        body = digits[:point] + "." + digits[point:]
    return prefix + body


def _escape_label(value: str) -> str:
    return value.replace("\\", "\\\\").replace("\n", "\\n").replace('"', '\\"')


def _escape_help(text: str) -> str:
    return text.replace("\\", "\\\\").replace("\n", "\\n")


def _sorted_pairs(metric: Metric) -> tuple[tuple[str, str], ...]:
    return tuple(sorted(metric.labels().items()))


def render_text(metrics: Iterable[Metric]) -> str:
    """Render metrics in the Prometheus text exposition format, sorted by name and labels."""
    ordered = sorted(metrics, key=lambda m: m.name)
    lines: list[str] = []
    for name, family in groupby(ordered, key=lambda m: m.name):
        samples = sorted(family, key=_sorted_pairs)
        first = samples[0]
        lines.append(f"# HELP {name} {_escape_help(first.desc.help)}")
        lines.append(f"# TYPE {name} {first.value_type.value}")
        for sample in samples:
            pairs = _sorted_pairs(sample)
            if pairs:
                label_text = ",".join(f'{k}="{_escape_label(v)}"' for k, v in pairs)
                lines.append(f"{name}{{{label_text}}} {_format_value(sample.value)}")
            else:
                lines.append(f"{name} {_format_value(sample.value)}")
    return "".join(line + "\n" for line in lines)