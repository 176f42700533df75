"""
Public transform API.

All functions use the process-wide registry unless one is passed in.

Normalization: both directions scale by 1/sqrt(N). This differs from the
common DSP convention (no scaling forward, 1/N inverse). It makes the
transform unitary: inverse(forward(x)) == x with no rescaling, and
sum(|x|^2) == sum(power_spectrum) exactly as Parseval's theorem states.
To obtain unnormalized forward bins, multiply by sqrt(N).
"""

import logging
import numpy as np
from typing import Callable, Optional

from . import config
from .core.bitrev import get_bit_reversal
from .core.kernel import Kernel
from .core.result import TransformResult
from .core.twiddle import get_twiddle_cache
from .registry import KernelEntry, KernelRegistry, get_registry

logger = logging.getLogger(__name__)


def transform(
    real,
    imag: Optional[np.ndarray] = None,
    forward: bool = True,
    registry: Optional[KernelRegistry] = None
) -> TransformResult:
    """
    Compute the normalized discrete Fourier transform of a signal.

    Parameters
    ----------
    real : array_like
        Real parts, length N. N must be a power of two in [2, 65536].
    imag : array_like, optional
        Imaginary parts, length N. Defaults to all zeros.
    forward : bool
        True: X[k] = 1/sqrt(N) * sum_j x[j] * exp(-2*pi*i*j*k/N)
        False: the inverse, with exp(+2*pi*i*j*k/N) and the same scaling
    registry : KernelRegistry, optional
        Registry used to pick the kernel (default: process-wide registry)

    Returns
    -------
    TransformResult
        Output spectrum (or signal, for the inverse)

    Raises
    ------
    InvalidInput
        Mismatched lengths, non-1D or complex arrays, NaN/inf samples
    InvalidSize
        N is not a supported power of two

    Examples
    --------
    >>> import numpy as np
    >>> result = transform(np.arange(1.0, 9.0))
    >>> round(result.magnitude_at(0), 4)
    12.7279
    """
    if registry is None:
        registry = get_registry()
    return registry.transform(real, imag, forward)


def forward(real, imag: Optional[np.ndarray] = None) -> TransformResult:
    """Forward transform (time -> frequency)."""
    return transform(real, imag, forward=True)


def inverse(real, imag: Optional[np.ndarray] = None) -> TransformResult:
    """Inverse transform (frequency -> time)."""
    return transform(real, imag, forward=False)


def supports_size(n) -> bool:
    """True if n is a power of two in [MIN_SIZE, MAX_SIZE]."""
    return get_registry().supports_size(n)


def describe_implementation(n) -> str:
    """Describe the kernel selected for size n."""
    return get_registry().describe_implementation(n)


def resolve(n: int) -> Kernel:
    """Kernel selected for size n."""
    return get_registry().resolve(n)


def register(
    n: int,
    factory: Callable[[], Kernel],
    priority: int = config.DEFAULT_PRIORITY,
    is_genuine: bool = True,
    description: Optional[str] = None
) -> KernelEntry:
    """
    Add a kernel candidate to the process-wide registry.

    Must be called before size n is first transformed.
    """
    return get_registry().register(n, factory, priority, is_genuine, description)


def init(precompute: bool = True) -> KernelRegistry:
    """
    Explicitly build the process-wide registry and, optionally, the twiddle
    and bit-reversal tables for ``config.PRECOMPUTED_SIZES``.

    Calling it is optional: everything is also built lazily on first use.
    """
    registry = get_registry()
    if precompute:
        get_twiddle_cache().precompute(config.PRECOMPUTED_SIZES)
        get_bit_reversal().precompute(config.PRECOMPUTED_SIZES)
        logger.info(f"Precomputed tables for sizes {list(config.PRECOMPUTED_SIZES)}")
    return registry
