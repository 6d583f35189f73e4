#!/usr/bin/env python3
"""
Performance Test Script for the log-structured store

Tests:
1. Sequential insert throughput
2. Overwrite throughput (same keys, new values)
3. Random read throughput
4. Delete (tombstone) throughput
5. Index replay time on reopen

Metrics:
- Operations per second (ops/sec)
- Throughput (MB/s)
- Latency (p50, p95, p99)
"""

import os
import random
import shutil
import statistics
import sys
import tempfile
import time
from typing import List

from logkv import Store


class PerformanceTest:
    def __init__(self, storage_dir: str, sync_writes: bool = False):
        self.storage_dir = storage_dir
        self.log_path = os.path.join(storage_dir, "perf.log")
        self.sync_writes = sync_writes
        self.store: Store | None = None

    def setup(self):
        """Open the store."""
        self.store = Store.open(self.log_path, sync_writes=self.sync_writes)

    def teardown(self):
        """Clean up resources."""
        if self.store:
            self.store.close()
            self.store = None

    @staticmethod
    def generate_value(length: int) -> bytes:
        return os.urandom(length)

    @staticmethod
    def generate_key(i: int, prefix: str = "key") -> bytes:
        """Generate a zero-padded key."""
        return f"{prefix}_{i:010d}".encode()

    @staticmethod
    def calculate_stats(latencies: List[int]) -> dict:
        """Calculate latency statistics (latencies in nanoseconds)."""
        if not latencies:
            return {}

        sorted_latencies = sorted(latencies)
        return {
            "min_ms": min(latencies) / 1_000_000,
            "max_ms": max(latencies) / 1_000_000,
            "mean_ms": statistics.mean(latencies) / 1_000_000,
            "median_ms": statistics.median(latencies) / 1_000_000,
            "p95_ms": sorted_latencies[int(len(sorted_latencies) * 0.95)] / 1_000_000,
            "p99_ms": sorted_latencies[int(len(sorted_latencies) * 0.99)] / 1_000_000,
        }

    def _timed_writes(self, name: str, keys: List[bytes], value_size: int) -> dict:
        print(f"\n{'='*60}")
        print(f"{name}: {len(keys)} operations, {value_size} byte values")
        print(f"{'='*60}")

        value = self.generate_value(value_size)
        latencies = []

        start_time = time.perf_counter_ns()
        for key in keys:
            op_start = time.perf_counter_ns()
            self.store.insert(key, value)
            latencies.append(time.perf_counter_ns() - op_start)
        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        total_bytes = sum(len(k) + value_size + 8 for k in keys)
        return {
            "test": name,
            "count": len(keys),
            "elapsed_sec": elapsed,
            "ops_per_sec": len(keys) / elapsed,
            "throughput_mb_per_sec": (total_bytes / elapsed) / (1024 * 1024),
            **self.calculate_stats(latencies),
        }

    def test_sequential_insert(self, count: int, value_size: int) -> dict:
        keys = [self.generate_key(i) for i in range(count)]
        return self._timed_writes("Sequential Insert", keys, value_size)

    def test_overwrite(self, count: int, value_size: int) -> dict:
        keys = [self.generate_key(i) for i in range(count)]
        random.shuffle(keys)
        return self._timed_writes("Overwrite", keys, value_size)

    def test_random_read(self, count: int, key_range: int) -> dict:
        print(f"\n{'='*60}")
        print(f"Random Read: {count} operations over {key_range} keys")
        print(f"{'='*60}")

        latencies = []
        start_time = time.perf_counter_ns()
        for _ in range(count):
            key = self.generate_key(random.randrange(key_range))
            op_start = time.perf_counter_ns()
            self.store.get(key)
            latencies.append(time.perf_counter_ns() - op_start)
        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        return {
            "test": "Random Read",
            "count": count,
            "elapsed_sec": elapsed,
            "ops_per_sec": count / elapsed,
            **self.calculate_stats(latencies),
        }

    def test_delete(self, count: int) -> dict:
        print(f"\n{'='*60}")
        print(f"Delete: {count} tombstones")
        print(f"{'='*60}")

        latencies = []
        start_time = time.perf_counter_ns()
        for i in range(count):
            op_start = time.perf_counter_ns()
            self.store.delete(self.generate_key(i))
            latencies.append(time.perf_counter_ns() - op_start)
        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        return {
            "test": "Delete",
            "count": count,
            "elapsed_sec": elapsed,
            "ops_per_sec": count / elapsed,
            **self.calculate_stats(latencies),
        }

    def test_replay(self) -> dict:
        """Measure the full-log replay performed on open."""
        print(f"\n{'='*60}")
        print("Replay on reopen")
        print(f"{'='*60}")

        self.teardown()
        log_bytes = os.path.getsize(self.log_path)

        start_time = time.perf_counter_ns()
        self.setup()
        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        return {
            "test": "Replay",
            "keys": len(self.store),
            "log_mb": log_bytes / (1024 * 1024),
            "elapsed_sec": elapsed,
            "throughput_mb_per_sec": (log_bytes / elapsed) / (1024 * 1024),
        }

    @staticmethod
    def print_results(results: dict):
        print(f"\nResults for {results['test']}:")
        for key, value in results.items():
            if key == "test":
                continue
            if isinstance(value, float):
                print(f"  {key:>24}: {value:,.4f}")
            else:
                print(f"  {key:>24}: {value:,}")


def run_tests(count: int = 20_000, value_size: int = 100, sync_writes: bool = False):
    storage_dir = tempfile.mkdtemp(prefix="logkv_perf_")
    test = PerformanceTest(storage_dir, sync_writes=sync_writes)
    try:
        test.setup()
        all_results = [
            test.test_sequential_insert(count, value_size),
            test.test_overwrite(count, value_size),
            test.test_random_read(count, count),
            test.test_delete(count // 2),
            test.test_replay(),
        ]
        for results in all_results:
            test.print_results(results)
    finally:
        test.teardown()
        shutil.rmtree(storage_dir, ignore_errors=True)


if __name__ == "__main__":
    count = int(sys.argv[1]) if len(sys.argv) > 1 else 20_000
    run_tests(count=count, sync_writes="--sync" in sys.argv)
