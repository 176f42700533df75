"""
Pytest configuration and fixtures for fft_engine tests
"""
import os
import sys

import numpy as np
import pytest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from fft_engine.registry import KernelRegistry


ALL_SIZES = [2 ** p for p in range(1, 17)]
SMALL_SIZES = [2 ** p for p in range(1, 11)]


@pytest.fixture
def rng():
    """Seeded random generator"""
    return np.random.default_rng(42)


@pytest.fixture
def empty_registry():
    """Registry with nothing registered (everything resolves to the reference kernel)"""
    return KernelRegistry(discover=False)


@pytest.fixture
def catalogue_registry():
    """Fresh registry with the static catalogue registered"""
    return KernelRegistry(discover=True)


@pytest.fixture
def test_signal(rng):
    """Random complex signal factory"""
    def make(n):
        return rng.standard_normal(n), rng.standard_normal(n)
    return make
