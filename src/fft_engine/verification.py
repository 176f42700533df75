"""
Cross-kernel verification against the reference kernel.

Test-time tooling: a kernel may only be registered as a genuine
specialization if it matches the reference kernel on a representative
input suite. Nothing here runs on the transform path.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from . import config
from .core.kernel import Kernel
from .core.reference import ReferenceKernel, get_reference_kernel
from .core.result import TransformResult
from .core.validation import check_size
from .errors import InternalInconsistency, InvalidSize

logger = logging.getLogger(__name__)


@dataclass
class VerificationReport:
    """Outcome of comparing one kernel with the reference kernel."""
    kernel: str
    size: int
    tolerance: float
    cases: int = 0
    max_error: float = 0.0
    worst_case: Optional[str] = None
    failures: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failures

    def summary(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        return (
            f"{self.kernel}: {status} over {self.cases} cases, "
            f"max relative error {self.max_error:.2e} (tolerance {self.tolerance:.0e})"
        )


def verified_bins(n: int, max_bins: int = config.MAX_VERIFIED_BINS) -> List[int]:
    """Every bin for small n, an evenly spaced sample (including both ends) above."""
    if n <= max_bins:
        return list(range(n))
    return sorted(set(np.linspace(0, n - 1, max_bins).astype(int).tolist()))


def representative_inputs(
    n: int,
    seed: int = config.VERIFICATION_SEED,
    max_bins: int = config.MAX_VERIFIED_BINS
) -> Iterator[Tuple[str, np.ndarray, np.ndarray]]:
    """
    Yield (name, real, imag) test signals of length n.

    Covers impulses, constants, seeded random real and complex signals, and
    a pure complex sinusoid at each verified bin.
    """
    n = check_size(n)
    zeros = np.zeros(n)

    impulse = zeros.copy()
    impulse[0] = 1.0
    yield "impulse", impulse, zeros

    shifted = zeros.copy()
    shifted[n // 2 - 1] = 1.0
    yield "shifted_impulse", zeros, shifted

    yield "constant", np.ones(n), zeros
    yield "complex_constant", np.full(n, 0.5), np.full(n, -2.0)

    rng = np.random.default_rng(seed)
    yield "random_real", rng.standard_normal(n), zeros
    yield "random_complex", rng.standard_normal(n), rng.standard_normal(n)
    yield "random_large", 1e6 * rng.standard_normal(n), 1e6 * rng.standard_normal(n)

    j = np.arange(n)
    for k in verified_bins(n, max_bins):
        angle = 2.0 * np.pi * k * j / n
        yield f"sinusoid_bin_{k}", np.cos(angle), np.sin(angle)


def max_relative_error(actual: TransformResult, expected: TransformResult) -> float:
    """max |actual - expected| divided by max |expected| (absolute if expected is zero)."""
    diff = np.abs(actual.to_complex() - expected.to_complex()).max()
    scale = np.abs(expected.to_complex()).max()
    if scale == 0.0:
        return float(diff)
    return float(diff / scale)


def verify_kernel(
    kernel: Kernel,
    size: Optional[int] = None,
    tolerance: float = config.EQUIVALENCE_TOLERANCE,
    reference: Optional[ReferenceKernel] = None,
    raise_on_failure: bool = False
) -> VerificationReport:
    """
    Compare a kernel with the reference kernel in both directions.

    Args:
        kernel: Kernel under test
        size: Size to verify (required when the kernel is not size-bound)
        tolerance: Maximum relative error
        reference: Oracle kernel (default: the shared reference kernel)
        raise_on_failure: Raise instead of only reporting

    Returns:
        VerificationReport

    Raises:
        InternalInconsistency: If raise_on_failure is set and any case exceeds
            the tolerance
    """
    if size is None:
        size = kernel.size
    if size is None:
        raise InvalidSize(f"{kernel.name} is not size-bound; pass size explicitly")
    if reference is None:
        reference = get_reference_kernel()

    report = VerificationReport(kernel=kernel.name, size=size, tolerance=tolerance)
    for name, re, im in representative_inputs(size):
        for forward in (True, False):
            actual = kernel.transform(re, im, forward)
            expected = reference.transform(re, im, forward)
            error = max_relative_error(actual, expected)
            case = f"{name}/{'forward' if forward else 'inverse'}"
            report.cases += 1
            if error > report.max_error:
                report.max_error = error
                report.worst_case = case
            if not error <= tolerance:
                report.failures.append(case)

    if not report.passed:
        logger.warning(report.summary())
        if raise_on_failure:
            raise InternalInconsistency(
                f"{report.summary()}; failing cases: {', '.join(report.failures[:5])}"
            )
    return report


def verify_registry(
    registry,
    sizes: Optional[Iterable[int]] = None,
    tolerance: float = config.EQUIVALENCE_TOLERANCE
) -> List[VerificationReport]:
    """
    Verify every candidate registered as a genuine specialization.

    Kernels are built from their factories, so verification does not
    resolve (and freeze) any size in the registry.

    Raises:
        InternalInconsistency: On the first genuine candidate that fails
    """
    if sizes is None:
        sizes = [s for s in registry.supported_sizes() if registry.implementation_count(s)]

    reports = []
    for size in sizes:
        for entry in registry.candidates(size):
            if not entry.is_genuine:
                continue
            kernel = entry.factory()
            reports.append(verify_kernel(kernel, size, tolerance, raise_on_failure=True))
    return reports
