"""Observability – request path normalisation for the ``path`` label.

Raw paths carry ids, which would create one series per id. Each segment
that is all digits or a UUID is replaced by ``:id``; everything else is
kept verbatim. This is a shape heuristic, not a router: it knows nothing
about the application's route table.
"""
from __future__ import annotations

import re

ID_PLACEHOLDER = ":id"

_NUMERIC = re.compile(r"[0-9]+")
_UUID = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def _is_dynamic(segment: str) -> bool:
    return bool(_NUMERIC.fullmatch(segment) or _UUID.fullmatch(segment))


def normalize_path(path: str) -> str:
    """Collapse numeric and UUID segments of *path* into ``:id``.

    Slash structure (leading, trailing, repeated) is preserved, and the
    function is idempotent::

        >>> normalize_path("/users/123/orders/550e8400-e29b-41d4-a716-446655440000/")
        '/users/:id/orders/:id/'
    """
    return "/".join(
        ID_PLACEHOLDER if segment and _is_dynamic(segment) else segment
        for segment in path.split("/")
    )


__all__ = ["ID_PLACEHOLDER", "normalize_path"]
