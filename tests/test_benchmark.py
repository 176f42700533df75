"""
Tests for the kernel benchmark experiment.

Run:
    pytest tests/test_benchmark.py -v -s
"""

import json
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'experiments'))

import run_kernel_benchmark as bench
from fft_engine.registry import KernelRegistry


CONFIG_PATH = os.path.join(os.path.dirname(__file__), '..', 'experiments', 'configs', 'benchmark.yaml')


class TestBenchmark:
    """Benchmark experiment."""

    def test_load_config(self):
        config = bench.load_config(CONFIG_PATH)
        assert config['sizes'][0] == 8
        assert config['sizes'][-1] == 65536
        assert config['verify'] is True

    def test_default_config(self):
        config = bench.load_config(None)
        assert config == bench.DEFAULT_CONFIG
        assert config is not bench.DEFAULT_CONFIG

    def test_measure_size(self):
        timing = bench.measure_size(KernelRegistry(discover=True), 64, n_runs=3, warmup=1)
        print(f"\n[Benchmark] {timing}")
        assert timing.kernel_name == "StagedKernel[64]"
        assert timing.is_genuine
        assert timing.verified is True
        assert timing.max_error < 1e-9
        assert timing.kernel_time_ms > 0

    def test_reference_size_not_verified(self):
        timing = bench.measure_size(KernelRegistry(discover=True), 4, n_runs=2, warmup=1)
        assert timing.kernel_name == "ReferenceKernel"
        assert timing.verified is None
        assert timing.max_error == 0.0

    def test_run_benchmark(self, tmp_path):
        config = dict(bench.DEFAULT_CONFIG, sizes=[8, 128], n_runs=2, warmup=1)
        results = bench.run_benchmark(config, tmp_path, show_progress=False)

        assert [r.size for r in results] == [8, 128]
        data = json.loads((tmp_path / 'timing.json').read_text())
        assert [k['size'] for k in data['kernels']] == [8, 128]
        assert data['kernels'][0]['kernel_name'] == "UnrolledKernel[8]"
        assert (tmp_path / 'benchmark.log').exists()
