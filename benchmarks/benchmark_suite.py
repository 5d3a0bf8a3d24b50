"""
Benchmark Suite

Performance testing for the two step paths of the engine:
the NumPy reference kernels and the Numba kernels.
"""

import time
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from fluidsim.solver import FluidSim


def benchmark_solver(rows, cols, num_steps, use_fast=True, warmup_steps=20,
                     omega=1.0, wind=0.05):
    """
    Benchmark one solver configuration.

    A wind tunnel and a small obstacle keep every code path busy.

    Returns
    -------
    mlups : float
        Million Lattice Updates Per Second
    """
    sim = FluidSim(rows, cols, omega=omega, use_fast=use_fast)
    sim.place_wall_disk(rows // 2, cols // 4, max(rows // 10, 1))
    sim.wind_tunnel(wind)

    # Warmup (JIT compilation)
    for _ in range(warmup_steps):
        sim.step()

    start = time.perf_counter()
    for _ in range(num_steps):
        sim.step()
    elapsed = time.perf_counter() - start

    return num_steps * rows * cols / elapsed / 1e6


def compute_memory_bandwidth(mlups, bytes_per_site=144):
    """Compute effective memory bandwidth (GB/s) from MLUPS."""
    return mlups * bytes_per_site / 1000


def run_full_benchmark(grid_sizes=None, num_steps=200):
    """
    Run the benchmark comparing both step paths.

    Returns
    -------
    results : dict
        {'numpy': {(rows, cols): mlups}, 'numba': {...}}
    """
    if grid_sizes is None:
        grid_sizes = [
            (50, 100),
            (100, 200),
            (200, 400),
            (400, 800),
        ]

    print("=" * 60)
    print("LBM Performance Benchmark Suite")
    print("=" * 60)
    print(f"Steps: {num_steps}")
    print()

    results = {'numpy': {}, 'numba': {}}

    for label, use_fast in (('numpy', False), ('numba', True)):
        print(f"Benchmarking {label} kernels...")
        print("-" * 40)
        for rows, cols in grid_sizes:
            mlups = benchmark_solver(rows, cols, num_steps, use_fast=use_fast)
            results[label][(rows, cols)] = mlups
            print(f"  {rows:4d} x {cols:4d}: {mlups:8.2f} MLUPS")
        print()

    print("=" * 60)
    print("SUMMARY: Performance Comparison (MLUPS)")
    print("=" * 60)
    print(f"{'Grid':<12} {'NumPy':>10} {'Numba':>10} {'Speedup':>10} {'GB/s':>10}")
    print("-" * 60)

    for rows, cols in grid_sizes:
        slow = results['numpy'][(rows, cols)]
        fast = results['numba'][(rows, cols)]
        speedup = f"{fast / slow:.1f}x" if slow > 0 else "N/A"
        bandwidth = compute_memory_bandwidth(fast)
        print(f"{rows:4d}x{cols:<4d}    {slow:>10.2f} {fast:>10.2f} {speedup:>10} {bandwidth:>10.2f}")

    print("=" * 60)

    peak = max(results['numba'].items(), key=lambda item: item[1])
    print(f"\nPeak Performance: {peak[1]:.2f} MLUPS at {peak[0][0]}x{peak[0][1]}")

    return results


if __name__ == "__main__":
    run_full_benchmark()
