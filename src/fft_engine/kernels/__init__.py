"""
Specialized kernel set.

Modules:
    - template: Source template for unrolled kernels
    - unrolled: Fully unrolled kernels (small sizes, Numba JIT)
    - staged: Vectorized stage-plan kernels (medium and large sizes)
    - fallback: Size-bound delegation to the reference kernel
    - catalogue: Static registration table
"""

from .catalogue import CATALOGUE, CatalogueEntry, catalogued_sizes
from .fallback import FallbackKernel
from .staged import StagedKernel
from .unrolled import UnrolledKernel

__all__ = [
    'CATALOGUE',
    'CatalogueEntry',
    'catalogued_sizes',
    'FallbackKernel',
    'StagedKernel',
    'UnrolledKernel',
]
