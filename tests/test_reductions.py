"""Tests for multipass reduction and renormalization."""

import pytest
import numpy as np
from numpy.testing import assert_allclose

from gpue.core.exceptions import NormalizationError
from gpue.gpu.reductions import (
    multipass_sum,
    reduction_pass_count,
    renormalize,
    wavefunction_norm,
)
from gpue.gpu.utils import to_host


class TestMultipassSum:
    """Tests for the multipass tree reduction."""

    @pytest.mark.parametrize("block_size", [2, 4, 256])
    @pytest.mark.parametrize("n", [1, 7, 256, 1000, 4096])
    def test_constant_field(self, n, block_size):
        """Test a constant field sums to c * N for every block size."""
        field = np.full(n, 0.125)
        assert multipass_sum(field, block_size) == pytest.approx(0.125 * n, rel=1e-12)

    @pytest.mark.parametrize("block_size", [2, 8, 64, 512])
    def test_matches_numpy(self, rng, block_size, tolerance):
        field = rng.normal(size=(37, 53))
        assert multipass_sum(field, block_size) == pytest.approx(
            np.sum(field), rel=tolerance["reduction"], abs=1e-10
        )

    def test_block_sizes_agree(self, rng):
        field = rng.uniform(size=(64, 64, 8))
        totals = [multipass_sum(field, b) for b in (2, 4, 32, 256, 1024)]
        assert_allclose(totals, totals[0], rtol=1e-12)

    def test_complex_field(self, random_field):
        total = multipass_sum(random_field, 16)
        assert isinstance(total, complex)
        assert total == pytest.approx(np.sum(random_field), rel=1e-10)

    def test_returns_python_float(self):
        total = multipass_sum(np.ones(10, dtype=np.float32), 4)
        assert isinstance(total, float)
        assert total == 10.0

    def test_integer_field_promoted(self):
        assert multipass_sum(np.arange(100), 8) == 4950.0

    def test_empty_field(self):
        assert multipass_sum(np.zeros(0)) == 0.0

    @pytest.mark.parametrize("block_size", [0, 1, 3, 100])
    def test_invalid_block_size(self, block_size):
        with pytest.raises(ValueError):
            multipass_sum(np.ones(8), block_size)

    def test_input_not_modified(self, rng):
        field = rng.normal(size=300)
        original = field.copy()
        multipass_sum(field, 4)
        assert np.array_equal(field, original)


class TestPassCount:

    @pytest.mark.parametrize("n, block_size, expected", [
        (1, 256, 1),
        (256, 256, 1),
        (257, 256, 2),
        (65536, 256, 2),
        (65537, 256, 3),
        (8, 2, 3),
        (9, 2, 4),
    ])
    def test_pass_count(self, n, block_size, expected):
        assert reduction_pass_count(n, block_size) == expected

    def test_empty(self):
        with pytest.raises(ValueError):
            reduction_pass_count(0)


class TestRenormalize:
    """Tests for wavefunction renormalization."""

    dr = 0.01

    def test_reaches_target_norm(self, random_field):
        result = renormalize(random_field, self.dr)
        assert wavefunction_norm(result, self.dr) == pytest.approx(1.0, rel=1e-12)

    def test_custom_target(self, random_field):
        result = renormalize(random_field, self.dr, target_norm=2.5)
        assert wavefunction_norm(result, self.dr) == pytest.approx(2.5, rel=1e-12)

    def test_idempotent(self, random_field):
        once = renormalize(random_field, self.dr)
        twice = renormalize(once, self.dr)
        assert_allclose(twice, once, rtol=1e-12)

    def test_preserves_shape_of_field(self, random_field):
        """Test renormalization only rescales, keeping relative amplitudes."""
        result = renormalize(random_field, self.dr)
        ratio = result / random_field
        assert_allclose(ratio, ratio.flat[0], rtol=1e-12)
        assert abs(ratio.flat[0].imag) < 1e-15

    def test_in_place(self, random_field):
        result = renormalize(random_field, self.dr, out=random_field)
        assert result is random_field
        assert wavefunction_norm(random_field, self.dr) == pytest.approx(1.0, rel=1e-12)

    def test_block_size_independent(self, random_field):
        a = renormalize(random_field, self.dr, block_size=2)
        b = renormalize(random_field, self.dr, block_size=512)
        assert_allclose(a, b, rtol=1e-12)

    def test_zero_field(self):
        with pytest.raises(NormalizationError):
            renormalize(np.zeros((8, 8), dtype=complex), self.dr)

    def test_nan_field(self, random_field):
        random_field[3, 4] = np.nan
        with pytest.raises(NormalizationError):
            renormalize(random_field, self.dr)

    def test_infinite_field(self, random_field):
        random_field[0, 0] = np.inf
        with pytest.raises(NormalizationError):
            renormalize(random_field, self.dr)

    def test_below_minimum(self):
        field = np.full((4, 4), 1e-160 + 0j)
        with pytest.raises(NormalizationError):
            renormalize(field, self.dr)

    @pytest.mark.parametrize("dr", [0.0, -1.0, np.nan])
    def test_invalid_dr(self, random_field, dr):
        with pytest.raises(NormalizationError):
            renormalize(random_field, dr)

    def test_invalid_target(self, random_field):
        with pytest.raises(NormalizationError):
            renormalize(random_field, self.dr, target_norm=0.0)

    def test_failure_leaves_field_untouched(self):
        field = np.zeros((4, 4), dtype=complex)
        with pytest.raises(NormalizationError):
            renormalize(field, self.dr, out=field)
        assert np.all(field == 0)


class TestDeviceReductions:

    def test_sum_matches_host(self, cupy_module, rng):
        field = rng.normal(size=(128, 96))
        assert multipass_sum(cupy_module.asarray(field), 64) == pytest.approx(
            multipass_sum(field, 64), rel=1e-12
        )

    def test_renormalize_on_device(self, cupy_module, random_field):
        device = renormalize(cupy_module.asarray(random_field), 0.01)
        assert_allclose(to_host(device), renormalize(random_field, 0.01), rtol=1e-12)
