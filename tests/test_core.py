"""Tests for core modules: parameter store, grid layout, exceptions."""

import pytest
import numpy as np
from numpy.testing import assert_array_equal

from gpue.core.exceptions import (
    ConfigurationError,
    ExpressionSyntaxError,
    GPUEError,
    NormalizationError,
    NumericalError,
    OperatorFileError,
    ParameterStoreFrozenError,
    UnknownOperatorError,
    UnknownParameterError,
)
from gpue.core.grid import GridIndex, GridLayout
from gpue.core.parameters import ParameterStore


class TestParameterStore:
    """Tests for ParameterStore."""

    def test_typed_storage(self):
        """Test that each value lands in the map of its type."""
        store = ParameterStore()
        store.store("xDim", 64)
        store.store("omega", 0.5)
        store.store("x", [1.0, 2.0, 3.0])
        store.store("dimensionless", True)
        store.store("Kfn", "rotation")

        assert store.ival("xDim") == 64
        assert store.dval("omega") == 0.5
        assert_array_equal(store.dsval("x"), [1.0, 2.0, 3.0])
        assert store.bval("dimensionless") is True
        assert store.sval("Kfn") == "rotation"
        assert len(store) == 5

    def test_bool_is_not_int(self):
        store = ParameterStore({"flag": True, "count": 3})
        assert store.is_bool("flag")
        assert not store.is_int("flag")
        assert store.is_int("count")

    def test_numpy_scalars(self):
        store = ParameterStore({"n": np.int64(8), "dx": np.float32(0.25)})
        assert store.ival("n") == 8
        assert isinstance(store.ival("n"), int)
        assert store.dval("dx") == 0.25
        assert isinstance(store.dval("dx"), float)

    def test_predicates(self, simple_store):
        """Test predicates used by the expression evaluator."""
        assert simple_store.is_double("omega")
        assert not simple_store.is_double("x")
        assert simple_store.is_dstar("x")
        assert not simple_store.is_dstar("omega")
        assert simple_store.is_string("Kfn")
        assert "omega" in simple_store
        assert "missing" not in simple_store

    def test_wrong_type_lookup(self, simple_store):
        """Test that a name stored as one type is unknown as another."""
        with pytest.raises(UnknownParameterError):
            simple_store.ival("omega")

    def test_unknown_parameter(self, simple_store):
        """Test error message lists available names of the requested type."""
        with pytest.raises(UnknownParameterError) as excinfo:
            simple_store.dval("omegaQ")

        error = excinfo.value
        assert error.name == "omegaQ"
        assert error.kind == "double"
        assert "omegaX" in error.available
        assert "omegaQ" in str(error)
        assert "omegaX" in str(error)

    def test_unknown_parameter_is_key_error(self, simple_store):
        with pytest.raises(KeyError):
            simple_store.sval("nothing")
        with pytest.raises(ConfigurationError):
            simple_store.sval("nothing")

    def test_restore_replaces_type(self):
        """Test storing a name again with a new type replaces the old entry."""
        store = ParameterStore({"value": 1})
        store.store("value", 1.5)

        assert not store.is_int("value")
        assert store.dval("value") == 1.5
        assert len(store) == 1

    def test_rejects_2d_array(self):
        store = ParameterStore()
        with pytest.raises(TypeError):
            store.store("grid", np.zeros((2, 2)))

    def test_rejects_unsupported_type(self):
        store = ParameterStore()
        with pytest.raises(TypeError):
            store.store("mapping", {"a": 1})

    def test_freeze(self, simple_store):
        """Test that a frozen store rejects writes and locks its arrays."""
        assert simple_store.frozen
        with pytest.raises(ParameterStoreFrozenError):
            simple_store.store("omega", 0.9)

        x = simple_store.dsval("x")
        with pytest.raises(ValueError):
            x[0] = 10.0
        assert simple_store.dval("omega") == 0.5

    def test_freeze_returns_self(self):
        store = ParameterStore({"a": 1.0})
        assert store.freeze() is store

    def test_copy_is_mutable_and_independent(self, simple_store):
        clone = simple_store.copy()
        assert not clone.frozen

        clone.store("omega", 0.9)
        clone.dsval("x")[0] = 42.0

        assert simple_store.dval("omega") == 0.5
        assert simple_store.dsval("x")[0] == -2.0

    def test_known_keys(self, simple_store):
        keys = simple_store.known_keys()
        assert set(keys) == {"int", "double", "array", "bool", "string"}
        assert "xDim" in keys["int"]
        assert "x" in keys["array"]
        assert keys["double"] == sorted(keys["double"])

    def test_describe(self, simple_store):
        text = simple_store.describe()
        assert "x (array) = array[4]" in text
        assert "omega (double) = 0.5" in text
        assert "frozen" in repr(simple_store)


class TestGridLayout:
    """Tests for GridLayout."""

    def test_shape_2d(self):
        layout = GridLayout(8, 6)
        assert layout.shape == (8, 6)
        assert layout.size == 48
        assert layout.strides == (6, 1, 1)

    def test_shape_3d(self):
        layout = GridLayout(4, 6, 8, dimnum=3)
        assert layout.shape == (4, 6, 8)
        assert layout.size == 192
        assert layout.strides == (48, 8, 1)

    def test_linear_index_matches_c_order(self):
        """Test flat offsets agree with NumPy's C-order raveling."""
        layout = GridLayout(4, 6, 8, dimnum=3)
        for i, j, k in [(0, 0, 0), (1, 2, 3), (3, 5, 7), (2, 0, 5)]:
            expected = np.ravel_multi_index((i, j, k), layout.shape)
            assert layout.linear_index(i, j, k) == expected

        layout_2d = GridLayout(5, 7)
        assert layout_2d.linear_index(3, 4) == np.ravel_multi_index((3, 4), (5, 7))

    def test_unravel_inverts_linear_index(self):
        layout = GridLayout(3, 4, 5, dimnum=3)
        for flat in range(layout.size):
            index = layout.unravel(flat)
            assert layout.linear_index(index.i, index.j, index.k) == flat

    def test_unravel_out_of_range(self):
        layout = GridLayout(2, 2)
        with pytest.raises(IndexError):
            layout.unravel(4)
        with pytest.raises(IndexError):
            layout.unravel(-1)

    def test_indices_in_linear_order(self):
        layout = GridLayout(2, 3, 2, dimnum=3)
        flats = [layout.linear_index(*index) for index in layout.indices()]
        assert flats == list(range(layout.size))

    def test_mesh_broadcasts_to_shape(self):
        layout = GridLayout(4, 6, 8, dimnum=3)
        mesh = layout.mesh()
        assert np.broadcast(mesh.i, mesh.j, mesh.k).shape == layout.shape

        layout_2d = GridLayout(4, 6)
        mesh_2d = layout_2d.mesh()
        assert np.broadcast(mesh_2d.i, mesh_2d.j).shape == (4, 6)
        assert mesh_2d.k == 0

    def test_lookup(self):
        layout = GridLayout(3, 4)
        grid = np.arange(12.0).reshape(3, 4)

        assert layout.lookup(grid, GridIndex(2, 1)) == 9.0
        assert_array_equal(layout.lookup(grid, layout.mesh()), grid)

    def test_lookup_shape_mismatch(self):
        layout = GridLayout(3, 4)
        with pytest.raises(ValueError):
            layout.lookup(np.zeros((4, 3)), GridIndex(0, 0))

    @pytest.mark.parametrize("kwargs", [
        {"xDim": 0, "yDim": 4},
        {"xDim": 4, "yDim": -1},
        {"xDim": 4, "yDim": 4, "dimnum": 1},
        {"xDim": 4, "yDim": 4, "zDim": 4, "dimnum": 2},
    ])
    def test_invalid_layouts(self, kwargs):
        with pytest.raises(ValueError):
            GridLayout(**kwargs)

    def test_from_store(self, simple_store, store_3d):
        assert GridLayout.from_store(simple_store) == GridLayout(4, 4)

        layout = GridLayout.from_store(store_3d)
        assert layout.dimnum == 3
        assert layout.shape == (32, 32, 32)


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_hierarchy(self):
        assert issubclass(ConfigurationError, GPUEError)
        assert issubclass(NormalizationError, NumericalError)
        assert issubclass(UnknownOperatorError, ConfigurationError)
        assert issubclass(OperatorFileError, OSError)
        assert issubclass(OperatorFileError, GPUEError)

    def test_syntax_error_points_at_position(self):
        error = ExpressionSyntaxError("Unexpected character '$'", "2$3", 1)
        assert error.position == 1
        assert error.text == "2$3"
        assert "position 1" in str(error)
        assert "   ^" in str(error)

    def test_unknown_operator_lists_vocabulary(self):
        error = UnknownOperatorError("V", "spiral", ["harmonic", "torus"])
        assert "spiral" in str(error)
        assert "harmonic, torus" in str(error)

    def test_operator_file_error_message(self):
        error = OperatorFileError("/tmp/V.dat", "file does not exist")
        assert str(error) == "Operator file '/tmp/V.dat': file does not exist"
