"""
Performance benchmarks for the GS1 scan decoder.
"""

import time
import statistics
from typing import Tuple

from gs1_decoder import decode_gs1
from gs1_decoder.log import configure_logging


def benchmark(func, iterations: int = 1000) -> Tuple[float, float, float]:
    """
    Run a benchmark and return timing statistics.

    Returns:
        (mean_ms, min_ms, max_ms)
    """
    times = []

    for _ in range(iterations):
        start = time.perf_counter()
        func()
        elapsed = time.perf_counter() - start
        times.append(elapsed * 1000)  # Convert to ms

    return (
        statistics.mean(times),
        min(times),
        max(times)
    )


def run_benchmarks():
    """Run all benchmarks and print results."""
    configure_logging("WARNING")

    print("=" * 60)
    print("GS1 Scan Decoder Benchmarks")
    print("=" * 60)
    print()

    test_cases = [
        ("EAN-13", "1234567890128"),
        ("Simple GTIN", "0112345678901231"),
        ("GTIN + Expiry", "011234567890123117241231"),
        ("GTIN + Batch (variable)", "011234567890123110BATCH123"),
        ("Bracketed", "(01)12345678901231(17)241231(10)LOT99(21)SN001"),
        ("With GS separators", "]d20112345678901231" "17241231" "10ABC\x1d21XYZ"),
        ("Truncated batch", "0112345678901231" "10" + "A" * 25),
        ("Unknown format", "HELLO WORLD"),
    ]

    print("Per-scan decoding:")
    print("-" * 60)

    for name, input_str in test_cases:
        mean, min_t, max_t = benchmark(
            lambda s=input_str: decode_gs1(s),
            iterations=1000
        )
        print(f"  {name:30} {mean:8.3f}ms avg ({min_t:.3f}-{max_t:.3f})")

    print()
    print("Worst case (loop limit reached):")
    print("-" * 60)

    worst_case = "2001" * 200
    mean, min_t, max_t = benchmark(lambda: decode_gs1(worst_case), iterations=200)
    print(f"  {'200 repeated fixed AIs':30} {mean:8.3f}ms avg ({min_t:.3f}-{max_t:.3f})")

    print()
    print("Throughput test (1000 iterations):")
    print("-" * 60)

    complex_input = "]d20112345678901231" "17270301" "10BATCH456\x1d21SERIAL123"

    start = time.perf_counter()
    for _ in range(1000):
        decode_gs1(complex_input)
    total = time.perf_counter() - start

    throughput = 1000 / total
    print(f"  Throughput: {throughput:.0f} decodes/second")
    print(f"  Total time: {total:.3f}s for 1000 decodes")

    print()
    print("=" * 60)


if __name__ == "__main__":
    run_benchmarks()
