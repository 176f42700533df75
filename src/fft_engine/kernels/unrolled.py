"""
Fully unrolled kernels for small sizes.

The transform body is rendered from the parametric template and compiled
once per size with Numba. Compilation happens at the first call.

Only source rendered by ``template.render_unrolled_source`` from the shared
twiddle and bit-reversal tables is ever compiled; no caller-supplied text
reaches ``exec``.
"""

import linecache
import logging

import numpy as np
from numba import njit

from .. import config
from ..core.bitrev import get_bit_reversal
from ..core.kernel import Kernel
from ..core.twiddle import get_twiddle_cache
from ..core.validation import check_size
from ..errors import InvalidSize
from .template import render_unrolled_source

logger = logging.getLogger(__name__)


def compile_kernel_source(source: str, func_name: str, jit: bool = True):
    """
    Compile rendered kernel source into a callable.

    The source is registered with linecache so tracebacks and Numba
    diagnostics can show the generated lines.
    """
    filename = f"<fft_engine:{func_name}>"
    linecache.cache[filename] = (len(source), None, source.splitlines(True), filename)

    namespace = {}
    exec(compile(source, filename, "exec"), namespace)
    fn = namespace[func_name]
    if jit:
        fn = njit(fn)
    return fn


class UnrolledKernel(Kernel):
    """
    Straight-line FFT for one size in [UNROLL_MIN_SIZE, UNROLL_MAX_SIZE].

    Attributes:
        source: The generated Python source of the transform body
    """

    priority = config.SPECIALIZED_PRIORITY
    is_genuine = True

    def __init__(self, size: int, jit: bool = None):
        size = check_size(size)
        if size > config.UNROLL_MAX_SIZE:
            raise InvalidSize(
                f"UnrolledKernel supports sizes up to {config.UNROLL_MAX_SIZE}, got {size}"
            )
        if jit is None:
            jit = config.JIT_UNROLLED

        self.size = size
        self.description = self.summary(size)

        func_name = f"_unrolled_fft_{size}"
        self.source = render_unrolled_source(
            func_name,
            get_twiddle_cache().get(size),
            get_bit_reversal().for_size(size),
        )
        self._fn = compile_kernel_source(self.source, func_name, jit=jit)
        logger.debug(f"Rendered unrolled kernel for N={size} (jit={jit})")

    @classmethod
    def summary(cls, size: int) -> str:
        n_stages = size.bit_length() - 1
        return (
            f"Fully unrolled FFT for N={size} "
            f"({n_stages} stages, literal twiddles, inline bit-reversal swaps)"
        )

    def _execute(self, re: np.ndarray, im: np.ndarray, forward: bool) -> None:
        self._fn(re, im, 1.0 if forward else -1.0)
