#!/usr/bin/env python3
"""
Kernel Benchmark for the FFT Engine

This script measures, for every configured transform size:
  1. Reference kernel time (ms per transform)
  2. Selected kernel time (ms per transform)
  3. Speedup of the selected kernel over the reference
  4. Maximum relative error against the reference

Usage:
    python run_kernel_benchmark.py [--config CONFIG_PATH] [--output OUTPUT_DIR]
"""

import sys
import json
import argparse
import time
from pathlib import Path
from datetime import datetime
from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass, asdict
import yaml
import numpy as np

# Add src to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / 'src'))

# Rich imports
from rich.console import Console
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    BarColumn,
    TaskProgressColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.panel import Panel
from rich import box

# Project imports
from fft_engine.core.kernel import Kernel
from fft_engine.core.reference import get_reference_kernel
from fft_engine.registry import KernelRegistry
from fft_engine.utils.logging import setup_logging
from fft_engine.verification import max_relative_error, verify_kernel

console = Console()

DEFAULT_CONFIG = {
    'sizes': [8, 64, 1024, 16384],
    'n_runs': 50,
    'warmup': 3,
    'seed': 42,
    'verify': True,
}


@dataclass
class KernelTiming:
    """Benchmark results for one transform size."""
    size: int
    kernel_name: str
    is_genuine: bool
    # Reference kernel
    reference_time_ms: float
    reference_std_ms: float
    # Selected kernel
    kernel_time_ms: float
    kernel_std_ms: float
    speedup: float
    # Accuracy
    max_error: float
    verified: Optional[bool]

    def to_dict(self) -> Dict:
        return asdict(self)


def measure_transform(
    kernel: Kernel,
    re: np.ndarray,
    im: np.ndarray,
    n_runs: int = 50,
    warmup: int = 3,
) -> Tuple[float, float]:
    """Mean and std of forward transform time in ms."""
    for _ in range(warmup):
        kernel.transform(re, im, True)

    times = []
    for _ in range(n_runs):
        start = time.perf_counter()
        kernel.transform(re, im, True)
        times.append((time.perf_counter() - start) * 1000)

    return float(np.mean(times)), float(np.std(times))


def measure_size(
    registry: KernelRegistry,
    size: int,
    n_runs: int = 50,
    warmup: int = 3,
    seed: int = 42,
    verify: bool = True,
) -> KernelTiming:
    """Time the selected kernel for one size against the reference kernel."""
    rng = np.random.default_rng(seed)
    re = rng.standard_normal(size)
    im = rng.standard_normal(size)

    reference = get_reference_kernel()
    kernel = registry.resolve(size)

    ref_ms, ref_std = measure_transform(reference, re, im, n_runs, warmup)
    ker_ms, ker_std = measure_transform(kernel, re, im, n_runs, warmup)

    error = max_relative_error(kernel.transform(re, im), reference.transform(re, im))

    verified = None
    if verify and kernel.is_genuine:
        verified = verify_kernel(kernel, size).passed

    return KernelTiming(
        size=size,
        kernel_name=kernel.name,
        is_genuine=kernel.is_genuine,
        reference_time_ms=ref_ms,
        reference_std_ms=ref_std,
        kernel_time_ms=ker_ms,
        kernel_std_ms=ker_std,
        speedup=ref_ms / ker_ms if ker_ms > 0 else 0.0,
        max_error=error,
        verified=verified,
    )


def load_config(config_path: Optional[str]) -> Dict:
    """Load the benchmark section of a YAML config, filling in defaults."""
    config = dict(DEFAULT_CONFIG)
    if config_path is not None:
        with open(config_path, 'r') as f:
            loaded = yaml.safe_load(f) or {}
        config.update(loaded.get('benchmark', {}))
    return config


def display_results_table(results: List[KernelTiming]):
    """Display benchmark results."""
    table = Table(title="FFT Kernel Benchmark", box=box.ROUNDED)
    table.add_column("N", justify="right", style="bold")
    table.add_column("Kernel")
    table.add_column("Reference (ms)", justify="right")
    table.add_column("Kernel (ms)", justify="right")
    table.add_column("Speedup", justify="right")
    table.add_column("Max Rel Error", justify="right")
    table.add_column("Verified", justify="center")

    for r in results:
        if r.verified is None:
            verified = "-"
        elif r.verified:
            verified = "[green]✓[/green]"
        else:
            verified = "[red]✗[/red]"
        table.add_row(
            str(r.size),
            r.kernel_name,
            f"{r.reference_time_ms:.3f}±{r.reference_std_ms:.3f}",
            f"{r.kernel_time_ms:.3f}±{r.kernel_std_ms:.3f}",
            f"{r.speedup:.2f}x",
            f"{r.max_error:.1e}",
            verified,
        )

    console.print(table)


def run_benchmark(
    config: Dict,
    output_dir: Path,
    registry: Optional[KernelRegistry] = None,
    show_progress: bool = True,
) -> List[KernelTiming]:
    """Run the benchmark and write timing.json to output_dir."""
    output_dir.mkdir(parents=True, exist_ok=True)
    logger = setup_logging(log_file=str(output_dir / 'benchmark.log'),
                           name='fft_engine.benchmark')

    if registry is None:
        registry = KernelRegistry(discover=True)

    sizes = [int(n) for n in config['sizes']]

    console.print(Panel.fit(
        "[bold blue]FFT Kernel Benchmark[/bold blue]\n"
        f"Sizes: {sizes[0]} .. {sizes[-1]} ({len(sizes)} sizes), runs: {config['n_runs']}",
        border_style="blue"
    ))

    logger.info("=" * 60)
    logger.info("KERNEL BENCHMARK STARTED")
    logger.info("=" * 60)

    results = []

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(bar_width=30),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        disable=not show_progress,
    ) as progress:
        task = progress.add_task("[cyan]Benchmarking", total=len(sizes))

        for size in sizes:
            progress.update(task, description=f"[cyan]N={size}")

            timing = measure_size(
                registry,
                size,
                n_runs=config['n_runs'],
                warmup=config['warmup'],
                seed=config['seed'],
                verify=config['verify'],
            )
            results.append(timing)

            logger.info(
                f"N={size}: {timing.kernel_name} {timing.kernel_time_ms:.3f}ms, "
                f"reference {timing.reference_time_ms:.3f}ms, "
                f"speedup {timing.speedup:.2f}x, error {timing.max_error:.1e}"
            )

            progress.update(task, advance=1)

    console.print("\n")
    display_results_table(results)

    results_dict = {
        'timestamp': datetime.now().isoformat(),
        'n_runs': config['n_runs'],
        'seed': config['seed'],
        'kernels': [r.to_dict() for r in results],
    }

    with open(output_dir / 'timing.json', 'w') as f:
        json.dump(results_dict, f, indent=2)

    console.print(f"\n[green]✓[/green] Results saved to {output_dir}")

    return results


def main():
    parser = argparse.ArgumentParser(description="FFT Kernel Benchmark")
    parser.add_argument(
        '--config',
        type=str,
        default=str(PROJECT_ROOT / 'experiments' / 'configs' / 'benchmark.yaml'),
        help='Path to configuration file'
    )
    parser.add_argument(
        '--output',
        type=str,
        default=None,
        help='Output directory'
    )
    args = parser.parse_args()

    if args.output:
        output_dir = Path(args.output)
    else:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        output_dir = PROJECT_ROOT / 'experiments' / 'results' / 'benchmark' / timestamp

    try:
        run_benchmark(load_config(args.config), output_dir)
        console.print(Panel.fit(
            "[bold green]Benchmark completed![/bold green]",
            border_style="green"
        ))
    except Exception as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise


if __name__ == '__main__':
    main()
