"""
Bit-reversal permutation tables.

A decimation-in-time transform leaves its output in bit-reversed order. Each
table stores the full permutation plus the reduced list of swap pairs
(i, reverse(i)) with i < reverse(i), so kernels restore natural order with a
fixed sequence of swaps and no bit manipulation in the hot path.
"""

import logging
import threading
from typing import Dict, List, Optional, Tuple

import numpy as np
from numba import jit

from ..errors import InvalidInput
from .validation import check_size

logger = logging.getLogger(__name__)


@jit(nopython=True, cache=True)
def _bit_reverse(x: int, n_bits: int) -> int:
    """Reverse the bits of x with n_bits."""
    result = 0
    for _ in range(n_bits):
        result = (result << 1) | (x & 1)
        x >>= 1
    return result


@jit(nopython=True, cache=True)
def _apply_swaps(re: np.ndarray, im: np.ndarray, swap_i: np.ndarray, swap_j: np.ndarray):
    """In-place pairwise swaps on both buffers."""
    for m in range(swap_i.shape[0]):
        i = swap_i[m]
        j = swap_j[m]
        t = re[i]
        re[i] = re[j]
        re[j] = t
        t = im[i]
        im[i] = im[j]
        im[j] = t


def reverse(i: int, bit_width: int) -> int:
    """
    Reverse the bit_width-bit binary representation of i.

    Raises:
        InvalidInput: If bit_width is negative or i does not fit in bit_width bits
    """
    if bit_width < 0:
        raise InvalidInput(f"bit_width must be non-negative, got {bit_width}")
    if i < 0 or i >= (1 << bit_width):
        raise InvalidInput(f"{i} does not fit in {bit_width} bits")
    return int(_bit_reverse(i, bit_width))


def compute_permutation(n: int) -> np.ndarray:
    """Vectorized bit-reversal permutation for a power-of-two n."""
    n_bits = n.bit_length() - 1
    idx = np.arange(n, dtype=np.int64)
    rev = np.zeros(n, dtype=np.int64)
    for b in range(n_bits):
        rev |= ((idx >> b) & 1) << (n_bits - 1 - b)
    return rev


class BitReversalTable:
    """
    Bit-reversal permutation for one transform size.

    Attributes:
        size: Transform size N
        permutation: Read-only array, permutation[i] == reverse(i, log2(N))
        swap_i, swap_j: Read-only arrays of the swap pairs, swap_i < swap_j
    """

    __slots__ = ('size', 'permutation', 'swap_i', 'swap_j')

    def __init__(self, n: int):
        perm = compute_permutation(n)
        idx = np.arange(n, dtype=np.int64)
        mask = perm > idx
        swap_i = np.ascontiguousarray(idx[mask])
        swap_j = np.ascontiguousarray(perm[mask])

        for arr in (perm, swap_i, swap_j):
            arr.setflags(write=False)

        self.size = n
        self.permutation = perm
        self.swap_i = swap_i
        self.swap_j = swap_j

    @property
    def num_swaps(self) -> int:
        return int(self.swap_i.size)

    def pairs(self) -> List[Tuple[int, int]]:
        """Swap pairs as plain Python tuples."""
        return list(zip(self.swap_i.tolist(), self.swap_j.tolist()))

    def apply(self, re: np.ndarray, im: np.ndarray) -> None:
        """Permute both buffers in place (self-inverse)."""
        _apply_swaps(re, im, self.swap_i, self.swap_j)

    def __repr__(self):
        return f"BitReversalTable(size={self.size}, swaps={self.num_swaps})"


class BitReversalPermutation:
    """
    Lazily built, process-lifetime cache of bit-reversal tables keyed by size.
    """

    def __init__(self):
        self._tables: Dict[int, BitReversalTable] = {}
        self._lock = threading.Lock()

    @staticmethod
    def reverse(i: int, bit_width: int) -> int:
        return reverse(i, bit_width)

    def for_size(self, n: int) -> BitReversalTable:
        """
        Return the bit-reversal table for size n, building it on first use.

        Raises:
            InvalidSize: If n is not a supported power of two
        """
        n = check_size(n)
        table = self._tables.get(n)
        if table is not None:
            return table

        with self._lock:
            table = self._tables.get(n)
            if table is None:
                table = BitReversalTable(n)
                self._tables[n] = table
                logger.debug(f"Built bit-reversal table for N={n} ({table.num_swaps} swaps)")
        return table

    def precompute(self, sizes) -> None:
        for n in sizes:
            self.for_size(n)

    def is_cached(self, n: int) -> bool:
        return n in self._tables

    def stats(self) -> str:
        tables = list(self._tables.values())
        kib = sum(t.permutation.nbytes + t.swap_i.nbytes + t.swap_j.nbytes for t in tables) / 1024.0
        return f"BitReversalPermutation: {len(tables)} sizes cached, ~{kib:.2f} KB memory"


# Global instance (lazy initialization)
_global_tables: Optional[BitReversalPermutation] = None
_tables_lock = threading.Lock()


def get_bit_reversal() -> BitReversalPermutation:
    """Get or create the process-wide bit-reversal table cache."""
    global _global_tables

    tables = _global_tables
    if tables is None:
        with _tables_lock:
            if _global_tables is None:
                _global_tables = BitReversalPermutation()
            tables = _global_tables
    return tables
