"""
Core transform machinery: validation, caches, result type and the
reference kernel.
"""

from .bitrev import BitReversalPermutation, BitReversalTable, get_bit_reversal, reverse
from .kernel import Kernel
from .reference import ReferenceKernel, get_reference_kernel
from .result import TransformResult
from .twiddle import TwiddleFactorCache, TwiddleTable, get_twiddle_cache
from .validation import as_signal, check_size, is_power_of_two, is_supported_size

__all__ = [
    'BitReversalPermutation',
    'BitReversalTable',
    'get_bit_reversal',
    'reverse',
    'Kernel',
    'ReferenceKernel',
    'get_reference_kernel',
    'TransformResult',
    'TwiddleFactorCache',
    'TwiddleTable',
    'get_twiddle_cache',
    'as_signal',
    'check_size',
    'is_power_of_two',
    'is_supported_size',
]
