"""
Immutable transform output.
"""

import numpy as np
from typing import Optional


class TransformResult:
    """
    Output of a forward or inverse transform.

    Owns read-only real/imaginary arrays of length N. Magnitude, phase and
    power are derived lazily and cached; once observed they never change.
    Every bulk accessor returns a fresh array, so callers can modify what
    they receive without affecting the result.

    Examples
    --------
    >>> from fft_engine import transform
    >>> result = transform([1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0])
    >>> round(result.magnitude_at(0), 2)
    12.73
    """

    __slots__ = ('_real', '_imag', '_magnitude', '_phase', '_power')

    def __init__(self, real_parts, imaginary_parts):
        real = np.array(real_parts, dtype=np.float64, copy=True)
        imag = np.array(imaginary_parts, dtype=np.float64, copy=True)
        if real.ndim != 1 or real.shape != imag.shape:
            raise ValueError("Real and imaginary arrays must be 1D with the same length")
        self._init(real, imag)

    def _init(self, real: np.ndarray, imag: np.ndarray) -> None:
        real.setflags(write=False)
        imag.setflags(write=False)
        self._real = real
        self._imag = imag
        self._magnitude: Optional[np.ndarray] = None
        self._phase: Optional[np.ndarray] = None
        self._power: Optional[np.ndarray] = None

    @classmethod
    def _from_buffers(cls, real: np.ndarray, imag: np.ndarray) -> "TransformResult":
        """Take ownership of kernel working buffers without copying."""
        result = cls.__new__(cls)
        result._init(real, imag)
        return result

    @classmethod
    def from_interleaved(cls, data) -> "TransformResult":
        """Build from [re0, im0, re1, im1, ...]."""
        data = np.asarray(data, dtype=np.float64)
        if data.ndim != 1 or data.size % 2 != 0:
            raise ValueError("Interleaved result array length must be even")
        return cls(data[0::2], data[1::2])

    # ------------------------------------------------------------------
    # Size
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return int(self._real.size)

    def __len__(self):
        return self.size

    # ------------------------------------------------------------------
    # Lazily derived quantities (internal, read-only)
    # ------------------------------------------------------------------

    def _power_array(self) -> np.ndarray:
        if self._power is None:
            power = self._real * self._real + self._imag * self._imag
            power.setflags(write=False)
            self._power = power
        return self._power

    def _magnitude_array(self) -> np.ndarray:
        if self._magnitude is None:
            magnitude = np.sqrt(self._power_array())
            magnitude.setflags(write=False)
            self._magnitude = magnitude
        return self._magnitude

    def _phase_array(self) -> np.ndarray:
        if self._phase is None:
            phase = np.arctan2(self._imag, self._real)
            phase.setflags(write=False)
            self._phase = phase
        return self._phase

    # ------------------------------------------------------------------
    # Bulk accessors (fresh copies)
    # ------------------------------------------------------------------

    def real_parts(self) -> np.ndarray:
        return self._real.copy()

    def imaginary_parts(self) -> np.ndarray:
        return self._imag.copy()

    def magnitudes(self) -> np.ndarray:
        """sqrt(re^2 + im^2) per bin."""
        return self._magnitude_array().copy()

    def phases(self) -> np.ndarray:
        """atan2(im, re) per bin, in radians."""
        return self._phase_array().copy()

    def power_spectrum(self) -> np.ndarray:
        """re^2 + im^2 per bin."""
        return self._power_array().copy()

    def interleaved(self) -> np.ndarray:
        """[re0, im0, re1, im1, ...]"""
        out = np.empty(2 * self.size, dtype=np.float64)
        out[0::2] = self._real
        out[1::2] = self._imag
        return out

    def to_complex(self) -> np.ndarray:
        return self._real + 1j * self._imag

    # ------------------------------------------------------------------
    # Indexed accessors (bounds-checked)
    # ------------------------------------------------------------------

    def _check_index(self, index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            raise TypeError(f"Index must be an integer, got {type(index).__name__}")
        if index < 0 or index >= self.size:
            raise IndexError(f"Index {index} out of bounds for size {self.size}")
        return int(index)

    def real_at(self, index: int) -> float:
        return float(self._real[self._check_index(index)])

    def imaginary_at(self, index: int) -> float:
        return float(self._imag[self._check_index(index)])

    def magnitude_at(self, index: int) -> float:
        return float(self._magnitude_array()[self._check_index(index)])

    def phase_at(self, index: int) -> float:
        return float(self._phase_array()[self._check_index(index)])

    def power_at(self, index: int) -> float:
        return float(self._power_array()[self._check_index(index)])

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, TransformResult):
            return NotImplemented
        return (np.array_equal(self._real, other._real)
                and np.array_equal(self._imag, other._imag))

    def __hash__(self):
        return hash((self._real.tobytes(), self._imag.tobytes()))

    def __repr__(self):
        first = self.magnitude_at(0) if self.size > 0 else 0.0
        return f"TransformResult[size={self.size}, first_magnitude={first:.3f}]"
