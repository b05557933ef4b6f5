"""Config settings – MetricsSettings for the HTTP instrumentation adapter."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from mp_metrics.config.settings.base import Settings
from mp_metrics.config.validation import InvalidSettingValueError
from mp_metrics.kernel.errors import InvalidBoundariesError
from mp_metrics.observability.metrics.instrumentation import HTTP_REQUEST_DURATION_SECONDS
from mp_metrics.observability.metrics.ports import DEFAULT_BUCKETS
from mp_metrics.observability.metrics.series import validate_boundaries


@dataclasses.dataclass
class MetricsSettings(Settings):
    """Adapter configuration, loadable from ``METRICS_*`` environment variables.

    ``path`` is where the scrape endpoint is mounted; ``buckets`` are the
    latency boundaries (seconds) of ``http_request_duration_seconds``.
    """

    _prefix: ClassVar[str] = "METRICS"

    path: str = "/metrics"
    buckets: tuple[float, ...] = DEFAULT_BUCKETS
    include_help: bool = False

    def _validate(self) -> None:
        if not self.path.startswith("/"):
            raise InvalidSettingValueError("path", self.path, "must start with '/'")
        try:
            self.buckets = validate_boundaries(HTTP_REQUEST_DURATION_SECONDS, self.buckets)
        except InvalidBoundariesError as exc:
            raise InvalidSettingValueError("buckets", self.buckets, exc.reason) from exc


__all__ = ["MetricsSettings"]
