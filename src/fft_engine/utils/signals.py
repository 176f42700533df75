"""
Signal helpers for feeding the transform.

Test signals and power-of-two padding for callers whose buffers are not
already a supported size.
"""

import numpy as np
from typing import Sequence

from ..core.validation import is_power_of_two


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 0)."""
    if n <= 1:
        return 1
    return 1 << (int(n) - 1).bit_length()


def zero_pad_to_power_of_two(x) -> np.ndarray:
    """
    Zero-pad a 1D signal to the next power-of-two length.

    Returns a copy even when no padding is needed.
    """
    x = np.asarray(x, dtype=np.float64)
    if x.ndim != 1:
        raise ValueError(f"Input must be 1D, got shape {x.shape}")
    n = max(next_power_of_two(x.size), 2)
    out = np.zeros(n, dtype=np.float64)
    out[:x.size] = x
    return out


def multitone(
    size: int,
    sample_rate: float,
    frequencies: Sequence[float],
    amplitudes: Sequence[float]
) -> np.ndarray:
    """
    Sum of sines sampled at sample_rate.

    Args:
        size: Number of samples
        sample_rate: Sampling rate in Hz
        frequencies: Tone frequencies in Hz
        amplitudes: Tone amplitudes, same length as frequencies

    Returns:
        Signal of length size
    """
    if len(frequencies) != len(amplitudes):
        raise ValueError(
            f"Got {len(frequencies)} frequencies but {len(amplitudes)} amplitudes"
        )
    t = np.arange(size) / sample_rate
    signal = np.zeros(size)
    for freq, amp in zip(frequencies, amplitudes):
        signal += amp * np.sin(2 * np.pi * freq * t)
    return signal


def sine_wave(size: int, frequency: float, sample_rate: float) -> np.ndarray:
    """Unit-amplitude sine of the given frequency."""
    return multitone(size, sample_rate, [frequency], [1.0])


def generate_test_signal(size: int, kind: str, seed: int = 42) -> np.ndarray:
    """
    Generate a named test signal.

    Parameters
    ----------
    size : int
        Number of samples
    kind : str
        - 'impulse': 1 at index 0, zeros elsewhere
        - 'dc': all ones
        - 'sine': 5 cycles over the buffer
        - 'cosine': 3 cycles over the buffer
        - 'mixed': sines/cosines at 5, 10 and 15 cycles
        - 'random': standard normal noise (seeded)
    seed : int
        Seed for 'random'

    Returns
    -------
    np.ndarray
        Signal of length size
    """
    n = np.arange(size)
    kind = kind.lower()

    if kind == 'impulse':
        signal = np.zeros(size)
        if size > 0:
            signal[0] = 1.0
        return signal
    elif kind == 'dc':
        return np.ones(size)
    elif kind == 'sine':
        return np.sin(2.0 * np.pi * 5 * n / size)
    elif kind == 'cosine':
        return np.cos(2.0 * np.pi * 3 * n / size)
    elif kind == 'mixed':
        return (np.sin(2.0 * np.pi * 5 * n / size)
                + 0.5 * np.cos(2.0 * np.pi * 10 * n / size)
                + 0.25 * np.sin(2.0 * np.pi * 15 * n / size))
    elif kind == 'random':
        return np.random.default_rng(seed).standard_normal(size)
    else:
        raise ValueError(f"Unknown signal type: {kind}")


__all__ = [
    'is_power_of_two',
    'next_power_of_two',
    'zero_pad_to_power_of_two',
    'multitone',
    'sine_wave',
    'generate_test_signal',
]
