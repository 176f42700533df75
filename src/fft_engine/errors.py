"""
Exception taxonomy for the transform engine.
"""


class FFTError(Exception):
    """Base class for every error raised by fft_engine."""


class InvalidSize(FFTError, ValueError):
    """Transform size is not a supported power of two."""


class InvalidInput(FFTError, ValueError):
    """Signal arrays are malformed (length mismatch, shape, dtype, non-finite)."""


class InternalInconsistency(FFTError):
    """
    A kernel disagrees with the reference kernel, or a registered factory
    built a kernel for the wrong size.

    This is a defect in a kernel or in the catalogue. It is raised by the
    verification tooling and by the registry, never by the numeric hot path.
    """


class KernelRegistrationError(FFTError):
    """A kernel registration cannot be accepted."""
