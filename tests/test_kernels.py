"""
Tests for the specialized kernel set and its catalogue.

Run:
    pytest tests/test_kernels.py -v -s
"""

import time

import numpy as np
import pytest

from fft_engine import config
from fft_engine.core.bitrev import BitReversalTable
from fft_engine.core.reference import get_reference_kernel
from fft_engine.core.twiddle import build_twiddle_table
from fft_engine.errors import InternalInconsistency, InvalidSize
from fft_engine.kernels import CATALOGUE, FallbackKernel, StagedKernel, UnrolledKernel, catalogued_sizes
from fft_engine.kernels.catalogue import kernel_class_for
from fft_engine.kernels.staged import build_stage_plan
from fft_engine.kernels.template import butterfly_schedule, render_unrolled_source, stage_twiddle_indices
from fft_engine.kernels.unrolled import compile_kernel_source
from fft_engine.verification import (
    max_relative_error,
    representative_inputs,
    verified_bins,
    verify_kernel,
)


class TestTemplate:
    """Unrolled source template."""

    def test_stage_twiddles_size_8(self):
        perm = BitReversalTable(8).permutation
        assert stage_twiddle_indices(perm, 0).tolist() == [0]
        assert stage_twiddle_indices(perm, 1).tolist() == [0, 2]
        assert stage_twiddle_indices(perm, 2).tolist() == [0, 2, 1, 3]

    def test_schedule_size(self):
        for n in [2, 8, 32]:
            schedule = list(butterfly_schedule(BitReversalTable(n).permutation))
            n_stages = n.bit_length() - 1
            assert len(schedule) == n_stages * n // 2
            assert all(b.bottom - b.top == n >> (b.stage + 1) for b in schedule)

    def test_rendered_source(self):
        source = render_unrolled_source("_fft8", build_twiddle_table(8), BitReversalTable(8))
        print(f"\n{source}")
        assert source.startswith("def _fft8(re, im, sign):")
        assert "N=8, 3 stages, 12 butterflies" in source
        # W^1 and W^3 are shared, W^0 and W^2 collapse
        assert "s1 = sign * " in source
        assert "s3 = sign * " in source
        assert "s2 =" not in source
        assert "t_re = sign * im[" in source
        assert "norm = 0.35355339059327" in source
        assert "re[1] = re[4]" in source
        assert "re[3] = re[6]" in source

    def test_compile_without_jit(self):
        source = render_unrolled_source("_fft4_py", build_twiddle_table(4), BitReversalTable(4))
        fn = compile_kernel_source(source, "_fft4_py", jit=False)
        re = np.array([1.0, 0.0, 0.0, 0.0])
        im = np.zeros(4)
        fn(re, im, 1.0)
        np.testing.assert_allclose(re, [0.5, 0.5, 0.5, 0.5])
        np.testing.assert_allclose(im, [0.0, 0.0, 0.0, 0.0], atol=1e-15)


class TestUnrolledKernel:
    """Fully unrolled kernels."""

    @pytest.mark.parametrize("n", [8, 16, 32])
    def test_matches_reference(self, n, rng):
        kernel = UnrolledKernel(n)
        reference = get_reference_kernel()
        re = rng.standard_normal(n)
        im = rng.standard_normal(n)
        for forward in (True, False):
            actual = kernel.transform(re, im, forward)
            expected = reference.transform(re, im, forward)
            assert max_relative_error(actual, expected) < 1e-12

    def test_python_source_matches_jit(self, rng):
        re = rng.standard_normal(16)
        im = rng.standard_normal(16)
        jitted = UnrolledKernel(16, jit=True).transform(re, im)
        plain = UnrolledKernel(16, jit=False).transform(re, im)
        np.testing.assert_allclose(jitted.to_complex(), plain.to_complex(), atol=1e-14)

    def test_bound_to_size(self):
        kernel = UnrolledKernel(8)
        assert kernel.size == 8
        assert kernel.supports_size(8)
        assert not kernel.supports_size(16)
        assert kernel.name == "UnrolledKernel[8]"
        with pytest.raises(InvalidSize):
            kernel.transform(np.ones(16))

    def test_size_limits(self):
        with pytest.raises(InvalidSize):
            UnrolledKernel(config.UNROLL_MAX_SIZE * 2)
        with pytest.raises(InvalidSize):
            UnrolledKernel(12)


class TestStagedKernel:
    """Vectorized stage-plan kernels."""

    def test_plan_shape(self):
        plan = build_stage_plan(64)
        assert len(plan) == 6
        assert [s.groups for s in plan] == [1, 2, 4, 8, 16, 32]
        assert [s.n2 for s in plan] == [32, 16, 8, 4, 2, 1]
        np.testing.assert_array_equal(plan[0].cos, [[1.0]])
        np.testing.assert_array_equal(plan[2].sin_inv, -plan[2].sin)

    @pytest.mark.parametrize("n", [2, 4, 64, 1024, 65536])
    def test_matches_reference(self, n, rng):
        kernel = StagedKernel(n)
        reference = get_reference_kernel()
        re = rng.standard_normal(n)
        im = rng.standard_normal(n)
        for forward in (True, False):
            actual = kernel.transform(re, im, forward)
            expected = reference.transform(re, im, forward)
            error = max_relative_error(actual, expected)
            assert error < 1e-12, f"N={n} forward={forward}: {error:.2e}"

    def test_priorities(self):
        assert StagedKernel(1024).priority == config.SPECIALIZED_PRIORITY
        assert StagedKernel(32768).priority == 45
        assert StagedKernel(65536).priority == 40
        assert StagedKernel(256).num_stages == 8

    def test_foreign_size(self):
        with pytest.raises(InvalidSize):
            StagedKernel(128).transform(np.ones(256))


class TestFallbackKernel:
    """Size-bound delegation to the reference kernel."""

    def test_output_equals_reference(self, rng):
        x = rng.standard_normal(128)
        fallback = FallbackKernel(128)
        assert fallback.transform(x) == get_reference_kernel().transform(x)

    def test_flags(self):
        fallback = FallbackKernel(16)
        assert fallback.is_genuine is False
        assert fallback.priority == config.FALLBACK_PRIORITY
        assert "Fallback" in fallback.description
        with pytest.raises(InvalidSize):
            FallbackKernel(17)


class TestCatalogue:
    """Static kernel catalogue."""

    def test_covers_range(self):
        sizes = catalogued_sizes()
        assert sizes[0] == config.UNROLL_MIN_SIZE
        assert sizes[-1] == config.MAX_SIZE
        assert len(sizes) == len(set(sizes))
        assert all(entry.is_genuine for entry in CATALOGUE)

    def test_kernel_families(self):
        assert kernel_class_for(8) is UnrolledKernel
        assert kernel_class_for(32) is UnrolledKernel
        assert kernel_class_for(64) is StagedKernel

    def test_priorities(self):
        priorities = {entry.size: entry.priority for entry in CATALOGUE}
        assert priorities[8] == config.SPECIALIZED_PRIORITY
        assert priorities[4096] == config.SPECIALIZED_PRIORITY
        assert priorities[32768] == 45
        assert priorities[65536] == 40

    @pytest.mark.parametrize("entry", CATALOGUE, ids=lambda e: f"N{e.size}")
    def test_every_entry_verifies(self, entry):
        """Each catalogued kernel matches the reference on the full input suite."""
        kernel = entry.factory()
        assert kernel.size == entry.size
        assert kernel.is_genuine == entry.is_genuine
        report = verify_kernel(kernel)
        print(f"\n[Verify] {report.summary()}")
        assert report.passed, report.failures


class TestVerification:
    """Cross-kernel verification tooling."""

    def test_verified_bins(self):
        assert verified_bins(16) == list(range(16))
        bins = verified_bins(4096)
        assert bins[0] == 0
        assert bins[-1] == 4095
        assert len(bins) <= config.MAX_VERIFIED_BINS

    def test_representative_inputs(self):
        cases = list(representative_inputs(8))
        names = [name for name, _, _ in cases]
        assert "impulse" in names
        assert "random_complex" in names
        assert "sinusoid_bin_7" in names
        assert all(re.size == 8 and im.size == 8 for _, re, im in cases)

    def test_detects_wrong_kernel(self):
        """A kernel that conjugates its output fails verification."""

        class Conjugating(FallbackKernel):
            is_genuine = True

            def _execute(self, re, im, forward):
                super()._execute(re, im, forward)
                im *= -1.0

        kernel = Conjugating(16)
        report = verify_kernel(kernel)
        assert not report.passed
        assert report.max_error > 1e-3
        with pytest.raises(InternalInconsistency):
            verify_kernel(kernel, raise_on_failure=True)

    def test_unbound_kernel_needs_size(self):
        with pytest.raises(InvalidSize):
            verify_kernel(get_reference_kernel())
        report = verify_kernel(get_reference_kernel(), size=32)
        assert report.passed
        assert report.max_error == 0.0


class TestPerformance:
    """Performance benchmarks (informational)."""

    @pytest.mark.parametrize("n", [32, 1024, 16384])
    def test_specialized_vs_reference(self, n, rng):
        reference = get_reference_kernel()
        kernel = kernel_class_for(n)(n)
        x = rng.standard_normal(n)
        n_runs = 20

        # Warm up JIT
        reference.transform(x)
        kernel.transform(x)

        start = time.perf_counter()
        for _ in range(n_runs):
            reference.transform(x)
        reference_time = (time.perf_counter() - start) / n_runs * 1000

        start = time.perf_counter()
        for _ in range(n_runs):
            kernel.transform(x)
        kernel_time = (time.perf_counter() - start) / n_runs * 1000

        print(f"\n[Benchmark N={n}]")
        print(f"  Reference: {reference_time:.3f} ms")
        print(f"  {kernel.name}: {kernel_time:.3f} ms")

        assert kernel_time > 0
