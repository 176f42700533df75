"""
Kernel registry: resolves the best available kernel for a transform size.
"""

import logging
import threading
from typing import Callable, Dict, List, NamedTuple, Optional

import numpy as np

from . import config
from .core.kernel import Kernel
from .core.reference import get_reference_kernel
from .core.result import TransformResult
from .core.validation import as_signal, check_size, is_supported_size
from .errors import InternalInconsistency, KernelRegistrationError

logger = logging.getLogger(__name__)


class KernelEntry(NamedTuple):
    """A registered candidate kernel for one size."""
    size: int
    factory: Callable[[], Kernel]
    priority: int
    is_genuine: bool
    description: str
    sequence: int


class KernelRegistry:
    """
    Priority-ordered map from transform size to candidate kernels.

    ``resolve(n)`` returns the highest-priority candidate for n (earliest
    registration wins ties), or the shared reference kernel when none is
    registered. Each size is instantiated once, on first resolution, and
    the instance is reused afterwards. Registering for a size that has
    already been resolved is rejected: there is no hot swapping.

    Args:
        discover: Register the static kernel catalogue on construction
    """

    def __init__(self, discover: bool = False):
        self._entries: Dict[int, List[KernelEntry]] = {}
        self._resolved: Dict[int, Kernel] = {}
        self._sequence = 0
        self._discovered = False
        self._lock = threading.RLock()
        self._reference = get_reference_kernel()

        if discover:
            self.discover()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        size: int,
        factory: Callable[[], Kernel],
        priority: int = config.DEFAULT_PRIORITY,
        is_genuine: bool = True,
        description: Optional[str] = None
    ) -> KernelEntry:
        """
        Add a candidate kernel for one size.

        Args:
            size: Transform size the kernel is bound to
            factory: Zero-argument callable building the kernel
            priority: Higher wins; the implicit reference kernel sits at 0
            is_genuine: False for kernels that only delegate to the
                reference algorithm
            description: Text for describe_implementation(); defaults to the
                factory's name

        Returns:
            The stored entry

        Raises:
            InvalidSize: If size is not a supported power of two
            KernelRegistrationError: If factory is not callable or size has
                already been resolved
        """
        size = check_size(size)
        if not callable(factory):
            raise KernelRegistrationError("Implementation factory must be callable")
        if description is None:
            description = getattr(factory, '__name__', type(factory).__name__)

        with self._lock:
            if size in self._resolved:
                raise KernelRegistrationError(
                    f"Size {size} is already resolved to {self._resolved[size].name}; "
                    f"kernels must be registered before first use"
                )
            entry = KernelEntry(size, factory, int(priority), bool(is_genuine),
                                description, self._sequence)
            self._sequence += 1
            candidates = self._entries.setdefault(size, [])
            candidates.append(entry)
            candidates.sort(key=lambda e: (-e.priority, e.sequence))

        logger.debug(f"Registered kernel for N={size}: {description} (priority {entry.priority})")
        return entry

    def discover(self) -> int:
        """
        Register every entry of the static kernel catalogue.

        Idempotent: a second call registers nothing. All-or-nothing: if any
        catalogued size has already been resolved, nothing is registered.

        Returns:
            Number of entries registered by this call

        Raises:
            KernelRegistrationError: If a catalogued size is already resolved
        """
        from .kernels.catalogue import CATALOGUE

        with self._lock:
            if self._discovered:
                return 0
            resolved = sorted({e.size for e in CATALOGUE if e.size in self._resolved})
            if resolved:
                raise KernelRegistrationError(
                    f"Cannot register the kernel catalogue: sizes {resolved} are already resolved"
                )
            for entry in CATALOGUE:
                self.register(entry.size, entry.factory, entry.priority,
                              entry.is_genuine, entry.description)
            self._discovered = True

        logger.info(f"Registered {len(CATALOGUE)} catalogue kernels")
        return len(CATALOGUE)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, size: int) -> Kernel:
        """
        Return the best kernel for a size.

        Raises:
            InvalidSize: If size is not a supported power of two
            InternalInconsistency: If the winning factory builds a kernel that
                does not transform this size, or claims a specialization the
                kernel does not provide
        """
        size = check_size(size)
        kernel = self._resolved.get(size)
        if kernel is not None:
            return kernel

        with self._lock:
            kernel = self._resolved.get(size)
            if kernel is None:
                kernel = self._instantiate(size)
                self._resolved[size] = kernel
                logger.debug(f"Resolved N={size} -> {kernel.name}")
        return kernel

    def _best_entry(self, size: int) -> Optional[KernelEntry]:
        """Top candidate, or None when the reference kernel outranks every entry."""
        candidates = self._entries.get(size)
        if not candidates or candidates[0].priority < config.REFERENCE_PRIORITY:
            return None
        return candidates[0]

    def _instantiate(self, size: int) -> Kernel:
        best = self._best_entry(size)
        if best is None:
            return self._reference

        kernel = best.factory()
        if not isinstance(kernel, Kernel):
            raise InternalInconsistency(
                f"Factory for N={size} returned {type(kernel).__name__}, not a Kernel"
            )
        if not kernel.supports_size(size):
            raise InternalInconsistency(
                f"Factory for N={size} built {kernel.name}, which does not support size {size}"
            )
        if best.is_genuine and not kernel.is_genuine:
            raise InternalInconsistency(
                f"{kernel.name} is registered as a specialization for N={size} "
                f"but only delegates to the reference algorithm"
            )
        return kernel

    def transform(
        self,
        real,
        imag: Optional[np.ndarray] = None,
        forward: bool = True
    ) -> TransformResult:
        """Validate once, resolve by length, run the kernel."""
        re, im = as_signal(real, imag)
        return self.resolve(re.size)._run(re, im, forward)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def supports_size(self, size) -> bool:
        return is_supported_size(size)

    def supported_sizes(self) -> List[int]:
        sizes = []
        size = config.MIN_SIZE
        while size <= config.MAX_SIZE:
            sizes.append(size)
            size *= 2
        return sizes

    def candidates(self, size: int) -> List[KernelEntry]:
        """Registered entries for a size, best first."""
        size = check_size(size)
        with self._lock:
            return list(self._entries.get(size, ()))

    def implementation_count(self, size: int) -> int:
        return len(self.candidates(size))

    def is_resolved(self, size: int) -> bool:
        return size in self._resolved

    def describe_implementation(self, size) -> str:
        """
        Describe the kernel that resolve(size) selects.

        Diagnostic only; an unsupported size yields a message, not an error.
        """
        if not is_supported_size(size):
            return (
                f"Invalid size {size} (must be a power of 2 in "
                f"[{config.MIN_SIZE}, {config.MAX_SIZE}])"
            )
        size = int(size)
        with self._lock:
            best = self._best_entry(size)
        if best is None:
            return (
                f"{self._reference.description} "
                f"(priority: {config.REFERENCE_PRIORITY}, generic fallback for size {size})"
            )
        kind = "specialized" if best.is_genuine else "fallback, no specialization"
        return f"{best.description} (priority: {best.priority}, {kind})"

    def report(self) -> str:
        """Multi-line summary of every supported size and its candidates."""
        lines = [
            "FFT Kernel Registry:",
            "====================",
        ]
        for size in self.supported_sizes():
            lines.append(f"Size {size}: {self.describe_implementation(size)}")
            candidates = self.candidates(size)
            with self._lock:
                best = self._best_entry(size)
            alternatives = candidates[1:] if best is not None else candidates
            if alternatives:
                lines.append("  Alternative implementations:")
                for entry in alternatives:
                    kind = "specialized" if entry.is_genuine else "fallback"
                    lines.append(f"    - {entry.description} (priority: {entry.priority}, {kind})")
        return "\n".join(lines)


# Global registry instance (lazy initialization)
_global_registry: Optional[KernelRegistry] = None
_registry_lock = threading.Lock()


def get_registry() -> KernelRegistry:
    """Get or create the process-wide registry, with the catalogue registered."""
    global _global_registry

    registry = _global_registry
    if registry is None:
        with _registry_lock:
            if _global_registry is None:
                _global_registry = KernelRegistry(discover=True)
            registry = _global_registry
    return registry
