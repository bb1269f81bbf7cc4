"""Shared fixtures for landscape-simple tests."""

import math
import textwrap

import numpy as np
import pytest

from landscape_simple import compose, discrete, geometric, minmax


@pytest.fixture
def mixed_space():
    """Space mixing discrete, geometric, composed and linear scales."""
    return {
        "a": discrete([3, 5, 8, 12, 17, 23]),
        "c": geometric(0.0, 2.0),
        "d": compose(int, math.ceil, geometric(np.float32(0.0), np.float32(10.0))),
        "b": minmax(1.0e-3, 5.0e-2),
    }


@pytest.fixture
def space_toml(tmp_path):
    """A declarative space file exercising every scale kind."""
    path = tmp_path / "search.toml"
    path.write_text(textwrap.dedent(
        """
        [sampling]
        m = 4
        seed = 7

        [parameters.layers]
        scale = "discrete"
        values = [2, 4, 8]

        [parameters.lr]
        scale = "geometric"
        min = 1e-4
        max = 1e-1
        dtype = "float32"

        [parameters.width]
        scale = "geo"
        min = 1.0
        max = 10.0
        round = "ceil"
        cast = "int"

        [parameters.dropout]
        scale = "mixture"
        components = [
            { proportion = 0.2, scale = "constant", value = 0.0 },
            { proportion = 0.8, scale = "minmax", min = 0.05, max = 0.5 },
        ]
        """
    ))
    return path
