"""
fft_engine - Power-of-two Discrete Fourier Transform engine

A generic radix-2 Cooley-Tukey kernel serves as the correctness baseline,
and a catalogue of size-specialized kernels (fully unrolled for small sizes,
vectorized stage plans for larger ones) is selected automatically through a
kernel registry.

Both directions are scaled by 1/sqrt(N): the transform is unitary, so
inverse(forward(x)) == x and Parseval's theorem holds without rescaling.

Modules:
    - core: Validation, twiddle and bit-reversal caches, result type,
      reference kernel
    - kernels: Specialized kernel set and its static catalogue
    - registry: Size -> kernel resolution
    - api: Public transform functions
    - verification: Cross-kernel equivalence checks
    - utils: Logging and signal helpers

Example:
    >>> import numpy as np
    >>> from fft_engine import transform
    >>> result = transform(np.arange(1.0, 9.0), forward=True)
    >>> result.magnitudes()[0]  # 36 / sqrt(8)
    12.727922061357855
"""

from .api import (
    describe_implementation,
    forward,
    init,
    inverse,
    register,
    resolve,
    supports_size,
    transform,
)
from .core import (
    BitReversalPermutation,
    Kernel,
    ReferenceKernel,
    TransformResult,
    TwiddleFactorCache,
    get_bit_reversal,
    get_twiddle_cache,
)
from .errors import (
    FFTError,
    InternalInconsistency,
    InvalidInput,
    InvalidSize,
    KernelRegistrationError,
)
from .kernels import FallbackKernel, StagedKernel, UnrolledKernel
from .registry import KernelRegistry, get_registry

__all__ = [
    # Transform API
    'transform',
    'forward',
    'inverse',
    'supports_size',
    'describe_implementation',
    'register',
    'resolve',
    'init',
    # Types
    'TransformResult',
    'Kernel',
    'ReferenceKernel',
    'UnrolledKernel',
    'StagedKernel',
    'FallbackKernel',
    'KernelRegistry',
    'get_registry',
    'TwiddleFactorCache',
    'get_twiddle_cache',
    'BitReversalPermutation',
    'get_bit_reversal',
    # Errors
    'FFTError',
    'InvalidSize',
    'InvalidInput',
    'InternalInconsistency',
    'KernelRegistrationError',
]

__version__ = '1.0.0'
