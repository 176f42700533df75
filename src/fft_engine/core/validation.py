"""
Boundary validation for signals and transform sizes.

Everything here runs once, at the outermost call, before any buffer is
written. Kernels receive the arrays returned by ``as_signal`` and never
validate again.
"""

import numpy as np
from typing import Optional, Tuple

from .. import config
from ..errors import InvalidInput, InvalidSize


def is_power_of_two(n: int) -> bool:
    """Check if n is a positive power of two."""
    return n > 0 and (n & (n - 1)) == 0


def is_supported_size(n) -> bool:
    """Check if n is a power of two within [MIN_SIZE, MAX_SIZE]."""
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        return False
    n = int(n)
    return is_power_of_two(n) and config.MIN_SIZE <= n <= config.MAX_SIZE


def check_size(n) -> int:
    """
    Validate a transform size.

    Args:
        n: Requested transform size

    Returns:
        The size as a plain int

    Raises:
        InvalidSize: If n is not an integer power of two within the supported range
    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise InvalidSize(f"Size must be an integer, got {type(n).__name__}")
    n = int(n)
    if not is_power_of_two(n):
        raise InvalidSize(f"Array length must be a power of 2, got: {n}")
    if n < config.MIN_SIZE or n > config.MAX_SIZE:
        raise InvalidSize(
            f"Size {n} out of supported range [{config.MIN_SIZE}, {config.MAX_SIZE}]"
        )
    return n


def _as_real_array(x, name: str) -> np.ndarray:
    try:
        arr = np.asarray(x)
    except (ValueError, TypeError) as e:
        raise InvalidInput(f"{name} is not a 1D numeric array: {e}") from e
    if np.iscomplexobj(arr):
        raise InvalidInput(f"{name} must be real-valued, got dtype {arr.dtype}")
    if arr.dtype.kind not in "biuf":
        raise InvalidInput(f"{name} contains non-numeric values (dtype {arr.dtype})")
    if arr.ndim != 1:
        raise InvalidInput(f"{name} must be 1D, got shape {arr.shape}")
    # Always a fresh buffer: callers' arrays are never mutated
    return np.array(arr, dtype=np.float64, copy=True)


def as_signal(
    real,
    imag: Optional[np.ndarray] = None
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Validate and copy a signal into owned float64 working buffers.

    Parameters
    ----------
    real : array_like
        Real parts, length N
    imag : array_like, optional
        Imaginary parts, length N. Defaults to all zeros.

    Returns
    -------
    tuple of np.ndarray
        Contiguous float64 copies (real, imag)

    Raises
    ------
    InvalidInput
        If the arrays are not 1D, have different lengths, are complex, or
        contain non-finite values (when ``config.REJECT_NON_FINITE`` is set)
    InvalidSize
        If the length is not a supported power of two
    """
    re = _as_real_array(real, "real")
    if imag is None:
        im = np.zeros_like(re)
    else:
        im = _as_real_array(imag, "imag")

    if re.shape != im.shape:
        raise InvalidInput(
            f"Real and imaginary arrays must have same length, got {re.size} and {im.size}"
        )

    check_size(re.size)

    if config.REJECT_NON_FINITE:
        if not (np.isfinite(re).all() and np.isfinite(im).all()):
            raise InvalidInput("Signal contains NaN or infinite values")

    return re, im
