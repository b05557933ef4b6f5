"""FastAPI adapter – optional dependency guard."""
from __future__ import annotations


def _require_fastapi() -> None:
    try:
        import fastapi  # noqa: F401
    except ImportError as exc:
        raise ImportError(
            "Install 'mp-metrics[fastapi]' to use the FastAPI adapter"
        ) from exc


__all__ = ["_require_fastapi"]
