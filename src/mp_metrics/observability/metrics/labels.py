"""Observability – label canonicalisation.

A label set is unordered, but everything that identifies or renders a
series uses one canonical form: names sorted lexicographically, each pair
rendered ``name="value"`` with the value escaped, pairs joined by ``,``.
Values are escaped injectively and names are restricted to identifier
characters by the registry, so two label sets share a key exactly when they
hold the same pairs. The key doubles as the exposition label body.
"""
from __future__ import annotations

from typing import Mapping

EMPTY_KEY = ""

LabelPairs = tuple[tuple[str, str], ...]


def escape_label_value(value: str) -> str:
    """Escape ``\\``, ``"`` and newlines for the text exposition format."""
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def canonical_labels(labels: Mapping[str, object] | None) -> LabelPairs:
    """Return the label pairs sorted by name, values coerced to ``str``."""
    if not labels:
        return ()
    return tuple(sorted((str(k), str(v)) for k, v in labels.items()))


def format_pairs(pairs: LabelPairs) -> str:
    return ",".join(f'{name}="{escape_label_value(value)}"' for name, value in pairs)


def canonical_key(labels: Mapping[str, object] | None) -> str:
    """Deterministic, order-independent identity key for *labels*."""
    if not labels:
        return EMPTY_KEY
    return format_pairs(canonical_labels(labels))


__all__ = [
    "EMPTY_KEY",
    "LabelPairs",
    "canonical_key",
    "canonical_labels",
    "escape_label_value",
    "format_pairs",
]
