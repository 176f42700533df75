"""
Configuration constants for the transform engine.
"""

# =============================================================================
# Supported sizes
# =============================================================================
MIN_SIZE = 2
MAX_SIZE = 65536

# Sizes whose twiddle and bit-reversal tables are built by init()
PRECOMPUTED_SIZES = (8, 16, 32, 64, 128, 256, 512, 1024, 2048, 4096)

# =============================================================================
# Specialized kernel catalogue
# =============================================================================

# Fully unrolled straight-line kernels
UNROLL_MIN_SIZE = 8
UNROLL_MAX_SIZE = 32

# Vectorized stage-plan kernels cover everything above the unrolled range
STAGED_MAX_SIZE = MAX_SIZE

# Compile generated unrolled kernels with numba
JIT_UNROLLED = True

# =============================================================================
# Registry priorities (higher wins)
# =============================================================================
REFERENCE_PRIORITY = 0
FALLBACK_PRIORITY = 1
DEFAULT_PRIORITY = 10
SPECIALIZED_PRIORITY = 50

# Large plans allocate more memory per kernel and gain less over the reference
LARGE_SIZE_PRIORITY = {
    32768: 45,
    65536: 40,
}

# =============================================================================
# Validation
# =============================================================================

# Reject NaN/inf samples at the boundary
REJECT_NON_FINITE = True

# Relative error bound for cross-kernel equivalence
EQUIVALENCE_TOLERANCE = 1e-9

# Above this size, sinusoid-per-bin verification samples bins evenly
MAX_VERIFIED_BINS = 64

# Seed for the random inputs of the verification suite
VERIFICATION_SEED = 42
