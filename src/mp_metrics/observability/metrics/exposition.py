"""Observability – Prometheus text exposition format (version 0.0.4)."""
from __future__ import annotations

import dataclasses
import math
from decimal import Decimal
from typing import Iterable, Union

from mp_metrics.observability.metrics.labels import format_pairs
from mp_metrics.observability.metrics.ports import MetricDefinition
from mp_metrics.observability.metrics.series import CounterSample, HistogramSample

CONTENT_TYPE_LATEST = "text/plain; version=0.0.4; charset=utf-8"

Sample = Union[CounterSample, HistogramSample]


@dataclasses.dataclass(frozen=True)
class MetricFamily:
    """One metric definition and the samples of its series."""

    definition: MetricDefinition
    samples: tuple[Sample, ...]


def format_value(value: float) -> str:
    """Render a sample value.

    Whole numbers drop the decimal point (``42``); other finite values use
    the shortest digits that round-trip the float, written positionally
    (``0.00001`` rather than ``1e-05``) so bucket bounds read as decimals.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if float(value).is_integer():
        return str(int(value))
    text = repr(float(value))
    if "e" in text:
        text = format(Decimal(text), "f")
    return text


def escape_help(text: str) -> str:
    return text.replace("\\", "\\\\").replace("\n", "\\n")


def _braces(body: str) -> str:
    return f"{{{body}}}" if body else ""


def _histogram_lines(name: str, sample: HistogramSample) -> list[str]:
    base = format_pairs(sample.labels)
    prefix = f"{base}," if base else ""
    lines = []
    for bound, cumulative in sample.buckets:
        le = "+Inf" if math.isinf(bound) else format_value(bound)
        lines.append(f'{name}_bucket{{{prefix}le="{le}"}} {cumulative}')
    lines.append(f"{name}_sum{_braces(base)} {format_value(sample.sum)}")
    lines.append(f"{name}_count{_braces(base)} {sample.count}")
    return lines


def render(families: Iterable[MetricFamily], *, include_help: bool = False) -> str:
    """Render *families* as a scrape body.

    Families without samples are skipped entirely, so a registry with no
    series renders as ``""``. Samples are ordered by their label key.
    """
    lines: list[str] = []
    for family in families:
        if not family.samples:
            continue
        definition = family.definition
        if include_help and definition.help:
            lines.append(f"# HELP {definition.name} {escape_help(definition.help)}")
        lines.append(f"# TYPE {definition.name} {definition.type.value}")
        for sample in sorted(family.samples, key=lambda s: format_pairs(s.labels)):
            if isinstance(sample, HistogramSample):
                lines.extend(_histogram_lines(definition.name, sample))
            else:
                lines.append(
                    f"{definition.name}{_braces(format_pairs(sample.labels))} {format_value(sample.value)}"
                )
    return "\n".join(lines) + "\n" if lines else ""


__all__ = [
    "CONTENT_TYPE_LATEST",
    "MetricFamily",
    "Sample",
    "escape_help",
    "format_value",
    "render",
]
