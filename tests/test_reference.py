"""
Correctness tests for the reference kernel.

The reference kernel is the oracle every specialized kernel is checked
against, so it is itself checked against scipy.fft (norm="ortho" has the
same 1/sqrt(N) scaling and sign convention).

Run:
    pytest tests/test_reference.py -v -s
"""

import numpy as np
import pytest
from scipy import fft as scipy_fft

from conftest import ALL_SIZES, SMALL_SIZES
from fft_engine.core.reference import ReferenceKernel, get_reference_kernel
from fft_engine.errors import InvalidInput, InvalidSize


GOLDEN_8_REAL = [12.727922061357855] + [-1.4142135623730951] * 7
GOLDEN_8_IMAG = [
    0.0,
    3.414213562373095,
    1.4142135623730951,
    0.5857864376269049,
    0.0,
    -0.5857864376269049,
    -1.4142135623730951,
    -3.414213562373095,
]


@pytest.fixture(scope="module")
def kernel():
    return get_reference_kernel()


class TestReferenceKernel:
    """Reference Cooley-Tukey kernel."""

    def test_golden_size_8(self, kernel):
        """[1..8] forward, 1/sqrt(8) scaling."""
        result = kernel.transform(np.arange(1.0, 9.0), np.zeros(8), True)
        np.testing.assert_allclose(result.real_parts(), GOLDEN_8_REAL, atol=1e-12)
        np.testing.assert_allclose(result.imaginary_parts(), GOLDEN_8_IMAG, atol=1e-12)

    def test_size_2(self, kernel):
        result = kernel.transform([1.0, 2.0], [0.0, 0.0])
        s = 1.0 / np.sqrt(2.0)
        np.testing.assert_allclose(result.real_parts(), [3.0 * s, -1.0 * s])
        np.testing.assert_allclose(result.imaginary_parts(), [0.0, 0.0], atol=1e-15)

    @pytest.mark.parametrize("n", [2, 8, 64, 1024])
    def test_impulse_is_flat(self, kernel, n):
        """delta[0] -> every bin equal to 1/sqrt(N)."""
        x = np.zeros(n)
        x[0] = 1.0
        result = kernel.transform(x)
        np.testing.assert_allclose(result.real_parts(), np.full(n, 1.0 / np.sqrt(n)))
        np.testing.assert_allclose(result.imaginary_parts(), np.zeros(n), atol=1e-15)

    @pytest.mark.parametrize("n", [4, 16, 256])
    def test_constant_concentrates_in_dc(self, kernel, n):
        result = kernel.transform(np.ones(n))
        mags = result.magnitudes()
        assert mags[0] == pytest.approx(np.sqrt(n))
        assert np.max(mags[1:]) < 1e-12

    @pytest.mark.parametrize("n", SMALL_SIZES)
    def test_matches_scipy(self, kernel, rng, n):
        """Forward and inverse against scipy.fft with orthonormal scaling."""
        x = rng.standard_normal(n) + 1j * rng.standard_normal(n)

        fwd = kernel.transform(x.real, x.imag, True).to_complex()
        inv = kernel.transform(x.real, x.imag, False).to_complex()

        np.testing.assert_allclose(fwd, scipy_fft.fft(x, norm="ortho"), rtol=1e-10, atol=1e-12)
        np.testing.assert_allclose(inv, scipy_fft.ifft(x, norm="ortho"), rtol=1e-10, atol=1e-12)

    @pytest.mark.parametrize("n", ALL_SIZES)
    def test_round_trip(self, kernel, rng, n):
        """inverse(forward(x)) == x for every supported size."""
        re = rng.standard_normal(n)
        im = rng.standard_normal(n)

        spectrum = kernel.transform(re, im, True)
        restored = kernel.transform(spectrum.real_parts(), spectrum.imaginary_parts(), False)

        err = max(np.max(np.abs(restored.real_parts() - re)),
                  np.max(np.abs(restored.imaginary_parts() - im)))
        assert err < 1e-10, f"N={n}: round-trip error {err:.2e}"

    @pytest.mark.parametrize("n", [8, 512, 65536])
    def test_parseval(self, kernel, rng, n):
        """Unitary scaling preserves energy."""
        re = rng.standard_normal(n)
        im = rng.standard_normal(n)
        energy_time = np.sum(re ** 2 + im ** 2)
        energy_freq = np.sum(kernel.transform(re, im).power_spectrum())
        assert energy_freq == pytest.approx(energy_time, rel=1e-10)

    def test_linearity(self, kernel, rng):
        n = 128
        a, b = 2.5, -0.75
        x = rng.standard_normal(n)
        y = rng.standard_normal(n)

        combined = kernel.transform(a * x + b * y).to_complex()
        separate = a * kernel.transform(x).to_complex() + b * kernel.transform(y).to_complex()
        np.testing.assert_allclose(combined, separate, atol=1e-12)

    def test_single_tone_lands_in_bin(self, kernel):
        """exp(+2*pi*i*k*j/N) forward -> all energy in bin k."""
        n, k = 64, 5
        angle = 2 * np.pi * k * np.arange(n) / n
        result = kernel.transform(np.cos(angle), np.sin(angle))
        mags = result.magnitudes()
        assert int(np.argmax(mags)) == k
        assert mags[k] == pytest.approx(np.sqrt(n))

    def test_input_not_mutated(self, kernel):
        re = np.arange(16.0)
        im = np.ones(16)
        re0, im0 = re.copy(), im.copy()
        kernel.transform(re, im, True)
        kernel.transform(re, im, False)
        np.testing.assert_array_equal(re, re0)
        np.testing.assert_array_equal(im, im0)

    def test_deterministic(self, kernel, rng):
        x = rng.standard_normal(256)
        assert kernel.transform(x) == kernel.transform(x)

    def test_errors(self, kernel):
        with pytest.raises(InvalidSize):
            kernel.transform(np.ones(6))
        with pytest.raises(InvalidSize):
            kernel.transform(np.ones(1))
        with pytest.raises(InvalidInput):
            kernel.transform(np.ones(8), np.ones(16))
        with pytest.raises(InvalidInput):
            kernel.transform([0.0, np.nan, 1.0, 2.0])

    def test_not_genuine(self):
        kernel = ReferenceKernel()
        assert kernel.is_genuine is False
        assert kernel.supports_size(2)
        assert kernel.supports_size(65536)
        assert kernel.name == "ReferenceKernel"
