"""
Static catalogue of specialized kernels.

One explicit table of (size, factory, priority, is_genuine, description),
assembled at import time from the kernel classes. Priorities and
descriptions come from the kernel classes and their ``is_genuine`` flag,
not from per-size text.
"""

from functools import partial
from typing import Callable, List, NamedTuple

from .. import config
from ..core.kernel import Kernel
from .staged import StagedKernel
from .unrolled import UnrolledKernel


class CatalogueEntry(NamedTuple):
    size: int
    factory: Callable[[], Kernel]
    priority: int
    is_genuine: bool
    description: str


def kernel_class_for(size: int):
    """Kernel family used for a catalogued size."""
    if size <= config.UNROLL_MAX_SIZE:
        return UnrolledKernel
    return StagedKernel


def build_catalogue() -> List[CatalogueEntry]:
    entries = []
    size = config.UNROLL_MIN_SIZE
    while size <= config.STAGED_MAX_SIZE:
        cls = kernel_class_for(size)
        entries.append(CatalogueEntry(
            size=size,
            factory=partial(cls, size),
            priority=config.LARGE_SIZE_PRIORITY.get(size, cls.priority),
            is_genuine=cls.is_genuine,
            description=cls.summary(size),
        ))
        size *= 2
    return entries


CATALOGUE = tuple(build_catalogue())


def catalogued_sizes() -> List[int]:
    return [entry.size for entry in CATALOGUE]
