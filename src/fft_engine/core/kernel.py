"""
Base class for transform kernels.
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import Optional

from ..errors import InvalidSize
from .result import TransformResult
from .validation import as_signal


class Kernel(ABC):
    """
    Base class for all transform kernels.

    Subclasses implement ``_execute``, which transforms validated working
    buffers in place (butterfly stages, bit-reversal, 1/sqrt(N) scaling).
    ``transform`` is the validating public entry point; the registry facade
    validates once and calls ``_run`` directly.

    Attributes:
        size: Bound transform size, or None for kernels valid at any size
        priority: Default registry priority
        is_genuine: False when the kernel only delegates to the reference
            algorithm and offers no specialization
        description: Human-readable summary
    """

    size: Optional[int] = None
    priority: int = 0
    is_genuine: bool = True
    description: str = ""

    def supports_size(self, n: int) -> bool:
        return self.size is None or n == self.size

    def transform(
        self,
        real,
        imag: Optional[np.ndarray] = None,
        forward: bool = True
    ) -> TransformResult:
        """
        Compute the normalized DFT of a signal.

        Parameters
        ----------
        real : array_like
            Real parts, length N (power of two)
        imag : array_like, optional
            Imaginary parts, defaults to zeros
        forward : bool
            True for the forward transform (exp(-2*pi*i*jk/N)), False for
            the inverse (exp(+2*pi*i*jk/N))

        Returns
        -------
        TransformResult
            Both directions are scaled by 1/sqrt(N), so inverse(forward(x))
            returns x and the transform preserves energy.

        Raises
        ------
        InvalidInput, InvalidSize
            Before any computation, if the signal is malformed or N is not
            supported by this kernel
        """
        re, im = as_signal(real, imag)
        if not self.supports_size(re.size):
            raise InvalidSize(
                f"{self.name} is bound to size {self.size}, got {re.size}"
            )
        return self._run(re, im, forward)

    def _run(self, re: np.ndarray, im: np.ndarray, forward: bool) -> TransformResult:
        """Transform owned, validated buffers and wrap them."""
        self._execute(re, im, bool(forward))
        return TransformResult._from_buffers(re, im)

    def __call__(self, real, imag=None, forward: bool = True) -> TransformResult:
        return self.transform(real, imag, forward)

    @abstractmethod
    def _execute(self, re: np.ndarray, im: np.ndarray, forward: bool) -> None:
        pass

    @property
    def name(self) -> str:
        if self.size is None:
            return type(self).__name__
        return f"{type(self).__name__}[{self.size}]"

    def __repr__(self):
        kind = "specialized" if self.is_genuine else "fallback"
        return f"<{self.name} {kind} priority={self.priority}>"
