"""Unit tests for the kernel error hierarchy."""

from __future__ import annotations

import json
import math

import pytest

from mp_metrics.kernel.errors import (
    BaseError,
    DefinitionConflictError,
    InvalidBoundariesError,
    InvalidDeltaError,
    InvalidLabelError,
    InvalidMetricNameError,
    MetricsError,
    UnknownMetricError,
)


class TestBaseError:
    def test_message_is_stored(self) -> None:
        err = BaseError("something went wrong")
        assert err.message == "something went wrong"

    def test_default_code(self) -> None:
        assert BaseError("m").code == "base_error"

    def test_custom_code(self) -> None:
        assert BaseError("m", code="custom").code == "custom"

    def test_to_dict(self) -> None:
        err = BaseError("m", code="my_code", detail={"key": "val"})
        assert err.to_dict() == {"code": "my_code", "message": "m", "detail": {"key": "val"}}

    def test_str_is_valid_json(self) -> None:
        parsed = json.loads(str(BaseError("oops", detail={"x": 1})))
        assert parsed["message"] == "oops"
        assert parsed["detail"] == {"x": 1}

    def test_repr_contains_code_and_message(self) -> None:
        r = repr(BaseError("hello", code="hi"))
        assert "hi" in r and "hello" in r


class TestMetricsErrors:
    @pytest.mark.parametrize(
        ("err", "code"),
        [
            (DefinitionConflictError("x", "counter", "histogram[1.0]"), "definition_conflict"),
            (UnknownMetricError("x", "counter"), "unknown_metric"),
            (InvalidDeltaError("x", -1), "invalid_delta"),
            (InvalidBoundariesError("x", [2, 1], "must ascend"), "invalid_boundaries"),
            (InvalidMetricNameError("1x"), "invalid_metric_name"),
            (InvalidLabelError("x", "le", "reserved"), "invalid_label"),
        ],
    )
    def test_codes_and_base(self, err: MetricsError, code: str) -> None:
        assert err.code == code
        assert isinstance(err, MetricsError)
        assert isinstance(err, BaseError)
        assert err.detail["metric"] == ("1x" if code == "invalid_metric_name" else "x")

    def test_conflict_message_names_both_types(self) -> None:
        err = DefinitionConflictError("x", "counter", "histogram[1.0]")
        assert "counter" in err.message and "histogram" in err.message

    def test_boundaries_error_keeps_reason(self) -> None:
        err = InvalidBoundariesError("h", [1, math.nan], "boundaries must be finite")
        assert err.reason == "boundaries must be finite"
        assert err.boundaries[0] == 1

    def test_str_serialises_nan_detail(self) -> None:
        err = InvalidDeltaError("c", math.nan)
        assert json.loads(str(err))["code"] == "invalid_delta"
