"""
Size-bound kernel that delegates to the reference algorithm.
"""

import numpy as np

from .. import config
from ..core.kernel import Kernel
from ..core.reference import ReferenceKernel, get_reference_kernel
from ..core.validation import check_size


class FallbackKernel(Kernel):
    """
    Reserve a size in the registry without claiming a specialization.

    Output is the reference kernel's output. ``is_genuine`` is always False,
    so the registry never describes it as an optimization.
    """

    priority = config.FALLBACK_PRIORITY
    is_genuine = False

    def __init__(self, size: int, reference: ReferenceKernel = None):
        self.size = check_size(size)
        self.description = self.summary(self.size)
        self._reference = reference if reference is not None else get_reference_kernel()

    @classmethod
    def summary(cls, size: int) -> str:
        return f"Fallback for N={size} (delegates to the reference kernel)"

    def _execute(self, re: np.ndarray, im: np.ndarray, forward: bool) -> None:
        self._reference._execute(re, im, forward)
