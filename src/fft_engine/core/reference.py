"""
Reference Cooley-Tukey kernel.

Generic radix-2 decimation-in-time transform valid for every supported size.
Every specialized kernel is verified against this one.

Algorithm (E. O. Brigham, The Fast Fourier Transform, 1973):
1. Work on private copies of the input.
2. For log2(N) stages, halving the butterfly distance n2 each stage, combine
   each pair (k, k + n2) with the twiddle W^p, where p is the bit-reversed
   high-order part of k.
3. Restore natural order with the bit-reversal permutation.
4. Scale every sample by 1/sqrt(N), in both directions.
"""

import numpy as np
from numba import jit

from .. import config
from .bitrev import _bit_reverse, get_bit_reversal
from .kernel import Kernel
from .twiddle import get_twiddle_cache


@jit(nopython=True, cache=True)
def _butterfly_stages(
    x_re: np.ndarray,
    x_im: np.ndarray,
    cos_table: np.ndarray,
    sin_table: np.ndarray,
    sign: float,
    nu: int
) -> None:
    """
    In-place butterfly stages (Numba JIT).

    sign is +1.0 for the forward transform and -1.0 for the inverse; it only
    flips the sine of each twiddle.
    """
    n = x_re.shape[0]
    n2 = n // 2
    nu1 = nu - 1
    k = 0

    for stage in range(nu):
        while k < n:
            for i in range(n2):
                p = _bit_reverse(k >> nu1, nu)
                c = cos_table[p]
                s = sign * sin_table[p]

                t_re = x_re[k + n2] * c + x_im[k + n2] * s
                t_im = x_im[k + n2] * c - x_re[k + n2] * s
                x_re[k + n2] = x_re[k] - t_re
                x_im[k + n2] = x_im[k] - t_im
                x_re[k] += t_re
                x_im[k] += t_im
                k += 1
            k += n2
        k = 0
        nu1 -= 1
        n2 //= 2


def scale(re: np.ndarray, im: np.ndarray) -> None:
    """Symmetric 1/sqrt(N) normalization, in place."""
    factor = 1.0 / np.sqrt(re.size)
    re *= factor
    im *= factor


class ReferenceKernel(Kernel):
    """
    Generic FFT valid for any supported power-of-two size.

    This is the correctness baseline and the registry's fallback. It is not a
    specialization, so ``is_genuine`` is False.

    Examples
    --------
    >>> kernel = ReferenceKernel()
    >>> result = kernel.transform([1.0, 0.0, 0.0, 0.0])
    >>> result.magnitudes()
    array([0.5, 0.5, 0.5, 0.5])
    """

    size = None
    priority = config.REFERENCE_PRIORITY
    is_genuine = False
    description = "Generic radix-2 decimation-in-time FFT (reference implementation)"

    def __init__(self):
        self._twiddles = get_twiddle_cache()
        self._bit_reversal = get_bit_reversal()

    def _execute(self, re: np.ndarray, im: np.ndarray, forward: bool) -> None:
        n = re.size
        table = self._twiddles.get(n)
        sign = 1.0 if forward else -1.0

        _butterfly_stages(re, im, table.cos, table.sin, sign, n.bit_length() - 1)
        self._bit_reversal.for_size(n).apply(re, im)
        scale(re, im)


# Shared instance: the reference kernel holds no per-call state
_REFERENCE = ReferenceKernel()


def get_reference_kernel() -> ReferenceKernel:
    return _REFERENCE
