"""
Utility modules.
"""

from .logging import setup_logging, get_logger
from .signals import (
    generate_test_signal,
    multitone,
    next_power_of_two,
    sine_wave,
    zero_pad_to_power_of_two,
)

__all__ = [
    'setup_logging',
    'get_logger',
    'generate_test_signal',
    'multitone',
    'next_power_of_two',
    'sine_wave',
    'zero_pad_to_power_of_two',
]
