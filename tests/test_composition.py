"""Tests for composed scales and output type inference."""

import logging
import math

import numpy as np
import pytest

from landscape_simple.errors import ScaleTypeError
from landscape_simple.scales import (
    UNTYPED,
    compose,
    constant,
    discrete,
    geometric,
    infer_output_type,
    minmax,
)


class TestInferOutputType:
    """Tests for probing post-processing functions."""

    def test_inferred_at_zero(self):
        """The output type is the type of func(T())."""
        assert infer_output_type(math.floor, float) == (int, None)
        assert infer_output_type(np.round, np.float32) == (np.float32, None)

    def test_failing_inference(self):
        """A zero-element call that raises gives UNTYPED with the reason."""
        output_type, note = infer_output_type(lambda x: 1 / x, float)
        assert output_type is UNTYPED
        assert "ZeroDivisionError" in note

    def test_untyped_input(self):
        """Nothing can be inferred from an untyped scale."""
        output_type, note = infer_output_type(str, UNTYPED)
        assert output_type is UNTYPED
        assert "untyped" in note


class TestCompose:
    """Tests for composing functions with scales."""

    def test_int32_round_float32(self):
        """np.int32 after np.round after a float32 scale gives np.int32."""
        scale = compose(np.int32, np.round, minmax(np.float32(0.0), np.float32(10.0)))
        assert scale.output_type is np.int32
        values = [scale(u) for u in np.linspace(0.0, 1.0, 17)]
        assert all(type(v) is np.int32 for v in values)
        assert all(0 <= v <= 10 for v in values)

    def test_int_floor_geometric(self):
        """int after math.floor after a float scale gives int."""
        scale = compose(np.int64, math.floor, geometric(1.0, 100.0))
        assert scale.output_type is np.int64
        assert type(scale(0.5)) is np.int64

    def test_ceil_keeps_float32(self):
        """np.ceil keeps single precision."""
        scale = compose(np.ceil, minmax(np.float32(0.0), np.float32(5.0)))
        assert scale.output_type is np.float32
        value = scale(0.3)
        assert type(value) is np.float32
        assert value == 2.0

    def test_int_ceil_geometric_float32(self):
        """int after math.ceil of a float32 geometric scale gives int."""
        scale = compose(int, math.ceil, geometric(np.float32(0.0), np.float32(10.0)))
        assert scale.output_type is int
        assert all(isinstance(scale(u), int) for u in (0.0, 0.4, 1.0))
        assert scale(1.0) == 10

    def test_then(self):
        """Scale.then is composition with a single function."""
        scale = minmax(0.0, 4.0).then(math.floor)
        assert scale.output_type is int
        assert scale(0.6) == 2
        assert scale.kind == "composed"

    def test_right_to_left(self):
        """Functions are applied right to left."""
        scale = compose(str, abs, constant(-3))
        assert scale(0.5) == "3"
        assert scale.output_type is str

    def test_failing_inference_untyped(self, caplog):
        """A failing zero-element call keeps the scale usable and untyped."""
        with caplog.at_level(logging.DEBUG, logger="landscape_simple"):
            scale = compose(lambda x: 1 / x, minmax(1.0, 2.0))
        assert scale.output_type is UNTYPED
        assert "ZeroDivisionError" in scale.note
        assert scale.describe()["note"] == scale.note
        assert scale(1.0) == 0.5
        assert "untyped" in caplog.text

    def test_lookup_failure_untyped(self):
        """Functions failing at zero with lookup errors are untyped."""
        table = {1: "one", 2: "two"}
        scale = compose(table.__getitem__, discrete([1, 2]))
        assert scale.output_type is UNTYPED
        assert scale(1.0) == "two"

    def test_untyped_inner(self):
        """Composing with an untyped scale stays untyped."""
        scale = compose(str, discrete(["a", 1]))
        assert scale.output_type is UNTYPED
        assert scale(1.0) == "1"

    def test_inferred_type_mismatch_fails_loudly(self):
        """A function whose type differs away from zero fails at evaluation."""
        scale = compose(lambda x: 0 if x == 0 else x / 3, minmax(0, 1))
        assert scale.output_type is int
        with pytest.raises(ScaleTypeError):
            scale(0.5)

    def test_requires_scale_last(self):
        """The last argument must be a Scale."""
        with pytest.raises(ScaleTypeError):
            compose(math.floor, lambda u: u)
        with pytest.raises(ScaleTypeError):
            compose()

    def test_requires_callables(self):
        """Composed parts must be callable."""
        with pytest.raises(ScaleTypeError):
            compose(3, minmax(0.0, 1.0))
