"""Tests for hyperparameter spaces and configuration records."""

import math
import pickle

import numpy as np
import pytest

from landscape_simple import compose, configurations, mixture
from landscape_simple.errors import DomainError, ScaleTypeError
from landscape_simple.scales import UNTYPED, constant, discrete, geometric, minmax
from landscape_simple.space import Configuration, HyperparameterSpace


class TestHyperparameterSpace:
    """Tests for HyperparameterSpace."""

    def test_declaration_order(self):
        """Names keep their declaration order."""
        space = HyperparameterSpace.new(
            layers=discrete([2, 4, 8]),
            lr=geometric(1e-4, 1e-1),
            dropout=minmax(0.0, 0.5),
        )
        assert space.names() == ["layers", "lr", "dropout"]
        assert list(space) == ["layers", "lr", "dropout"]
        assert len(space) == 3

    def test_from_pairs(self):
        """A sequence of pairs is accepted."""
        space = HyperparameterSpace([("b", constant(1)), ("a", constant(2))])
        assert space.names() == ["b", "a"]

    def test_duplicate_names(self):
        """Names must be unique."""
        with pytest.raises(DomainError, match="Duplicate"):
            HyperparameterSpace([("a", constant(1)), ("a", constant(2))])

    @pytest.mark.parametrize("name", ["", 3, None])
    def test_invalid_names(self, name):
        """Names are non-empty strings."""
        with pytest.raises(DomainError, match="non-empty strings"):
            HyperparameterSpace([(name, constant(1))])

    def test_non_scale(self):
        """Every dimension is declared with a Scale."""
        with pytest.raises(ScaleTypeError, match="lr"):
            HyperparameterSpace({"lr": lambda u: u})

    def test_get_scale(self):
        """Scales are looked up by name."""
        scale = minmax(0.0, 1.0)
        space = HyperparameterSpace({"x": scale})
        assert space.get_scale("x") is scale
        assert "x" in space
        assert "y" not in space
        with pytest.raises(KeyError, match="Unknown parameter"):
            space.get_scale("y")

    def test_output_types(self):
        """Declared output types are reported per parameter."""
        space = HyperparameterSpace({
            "n": discrete(np.array([1, 2], dtype=np.int32)),
            "x": minmax(np.float32(0), np.float32(1)),
            "mode": discrete(["a", 1]),
        })
        assert space.output_types() == {"n": np.int32, "x": np.float32, "mode": UNTYPED}

    def test_immutable(self):
        """Dimensions cannot be added after creation."""
        space = HyperparameterSpace({"x": minmax(0.0, 1.0)})
        with pytest.raises(TypeError):
            space.dimensions["y"] = minmax(0.0, 1.0)

    def test_source_mapping_copied(self):
        """Later changes to the source mapping are not seen."""
        source = {"x": minmax(0.0, 1.0)}
        space = HyperparameterSpace(source)
        source["y"] = constant(1)
        assert space.names() == ["x"]

    def test_pickle_round_trip(self):
        """Spaces survive pickling and evaluate identically afterwards."""
        space = HyperparameterSpace.new(
            layers=discrete([2, 4, 8]),
            lr=geometric(np.float32(1e-4), np.float32(1e-1)),
            width=compose(int, math.ceil, geometric(1.0, 10.0)),
            dropout=mixture([(0.2, constant(0.0)), (0.8, minmax(0.05, 0.5))]),
        )
        restored = pickle.loads(pickle.dumps(space))
        assert restored.names() == space.names()
        assert restored.output_types() == space.output_types()
        with pytest.raises(TypeError):
            restored.dimensions["extra"] = constant(1)
        assert configurations(restored, m=4, rng=3) == configurations(space, m=4, rng=3)

    def test_describe(self):
        """Descriptions list names, kinds and types in order."""
        space = HyperparameterSpace.new(
            layers=discrete([2, 4]),
            lr=geometric(np.float32(1e-4), np.float32(1e-1)),
        )
        assert space.describe() == {
            "parameters": [
                {"name": "layers", "kind": "discrete", "type": "int"},
                {"name": "lr", "kind": "geometric", "type": "float32"},
            ]
        }


class TestConfiguration:
    """Tests for Configuration records."""

    def test_access(self):
        """Values are reachable by key and attribute."""
        config = Configuration({"lr": 0.01, "layers": 4})
        assert config["lr"] == 0.01
        assert config.layers == 4

    def test_missing(self):
        """Unknown names raise the matching error kind."""
        config = Configuration({"lr": 0.01})
        with pytest.raises(KeyError):
            config["momentum"]
        with pytest.raises(AttributeError, match="momentum"):
            config.momentum

    def test_order_and_export(self):
        """Iteration, tuples and dicts keep declaration order."""
        config = Configuration({"b": 2, "a": 1})
        assert list(config) == [("b", 2), ("a", 1)]
        assert config.names() == ["b", "a"]
        assert config.as_tuple() == (2, 1)
        assert config.to_dict() == {"b": 2, "a": 1}
        assert len(config) == 2

    def test_equality_and_hash(self):
        """Equal values give equal, equally hashed records."""
        first = Configuration({"a": 1, "b": "x"})
        second = Configuration({"a": 1, "b": "x"})
        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1
        assert first != Configuration({"a": 2, "b": "x"})

    def test_frozen(self):
        """Records cannot be modified."""
        config = Configuration({"a": 1})
        with pytest.raises(AttributeError):
            config.a = 2
        with pytest.raises(TypeError):
            config.values["a"] = 2

    def test_pickle_round_trip(self):
        """Sampled records can be sent to worker processes."""
        configs = configurations({"x": discrete([1, 2]), "lr": minmax(0.0, 1.0)}, m=2, rng=1)
        restored = pickle.loads(pickle.dumps(configs))
        assert restored == configs
        assert restored[0].names() == ["x", "lr"]
        with pytest.raises(TypeError):
            restored[0].values["x"] = 3

    def test_repr(self):
        """The repr lists fields in order."""
        assert repr(Configuration({"a": 1, "b": "x"})) == "Configuration(a=1, b='x')"
