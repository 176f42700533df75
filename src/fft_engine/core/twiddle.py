"""
Twiddle factor cache.

Holds one table of N/2 (cos, sin) pairs per transform size, for the angles
2*pi*k/N. Tables are built lazily on first request, frozen, and only then
published, so concurrent readers never see a half-built table.
"""

import logging
import threading
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

import numpy as np

from .validation import check_size

logger = logging.getLogger(__name__)


class TwiddleTable(NamedTuple):
    """Read-only cosine/sine table for one transform size."""
    size: int
    cos: np.ndarray
    sin: np.ndarray


def build_twiddle_table(n: int) -> TwiddleTable:
    """
    Compute the twiddle table for size n.

    The quarter-turn entry is set to exactly (0, 1) so that W^{N/4}
    butterflies are bit-exact across every kernel.
    """
    half = n // 2
    k = np.arange(half, dtype=np.float64)
    angle = 2.0 * np.pi * k / n
    cos = np.cos(angle)
    sin = np.sin(angle)
    if n >= 4:
        cos[n // 4] = 0.0
        sin[n // 4] = 1.0
    cos.setflags(write=False)
    sin.setflags(write=False)
    return TwiddleTable(n, cos, sin)


class TwiddleFactorCache:
    """
    Lazily built, process-lifetime cache of twiddle tables keyed by size.
    """

    def __init__(self):
        self._tables: Dict[int, TwiddleTable] = {}
        self._lock = threading.Lock()

    def get(self, n: int) -> TwiddleTable:
        """
        Return the twiddle table for size n, building it on first use.

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
                table = build_twiddle_table(n)
                self._tables[n] = table
                logger.debug(f"Built twiddle table for N={n} ({n // 2} factors)")
        return table

    def twiddle(self, n: int, k: int, forward: bool = True) -> Tuple[float, float]:
        """
        Direction-signed twiddle (c, s) for index k.

        The butterfly multiplies by c - i*s, so s is the table sine for the
        forward transform and its negation for the inverse.
        """
        table = self.get(n)
        if k < 0 or k >= table.cos.size:
            raise IndexError(f"Twiddle index {k} out of bounds for size {n}")
        s = float(table.sin[k])
        return float(table.cos[k]), (s if forward else -s)

    def precompute(self, sizes: Iterable[int]) -> None:
        """Build tables for several sizes up front."""
        for n in sizes:
            self.get(n)

    def is_cached(self, n: int) -> bool:
        return n in self._tables

    def cached_sizes(self) -> List[int]:
        return sorted(self._tables)

    def stats(self) -> str:
        """Human-readable summary of cache occupancy."""
        sizes = list(self._tables.values())
        entries = sum(t.cos.size for t in sizes)
        kib = entries * 16 / 1024.0
        return (
            f"TwiddleFactorCache: {len(sizes)} sizes cached, "
            f"{entries} twiddle factors, ~{kib:.1f} KB"
        )

    def __repr__(self):
        return f"TwiddleFactorCache(sizes={self.cached_sizes()})"


# Global cache instance (lazy initialization)
_global_cache: Optional[TwiddleFactorCache] = None
_cache_lock = threading.Lock()


def get_twiddle_cache() -> TwiddleFactorCache:
    """Get or create the process-wide twiddle factor cache."""
    global _global_cache

    cache = _global_cache
    if cache is None:
        with _cache_lock:
            if _global_cache is None:
                _global_cache = TwiddleFactorCache()
            cache = _global_cache
    return cache
