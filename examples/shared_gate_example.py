"""Example: Pace several workers through one shared admission gate.

This script demonstrates how to:
1. Build a gate admitting 3 operations per second
2. Hand the same gate to every worker thread
3. Observe admissions grouped into one-second windows

Usage:
    python examples/shared_gate_example.py
"""

import threading
import time
from collections import Counter

from docgate import AdmissionGate, TimeUnit


def main() -> None:
    """Run 9 workers through a 3-per-second gate."""
    gate = AdmissionGate.per(TimeUnit.SECOND, 3)
    start = time.monotonic()
    admitted_at: list[float] = []
    lock = threading.Lock()

    def worker() -> None:
        with gate:
            with lock:
                admitted_at.append(time.monotonic() - start)

    threads = [threading.Thread(target=worker) for _ in range(9)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    per_window = Counter(int(offset) for offset in admitted_at)
    print(f"Gate: {gate}")
    for window, count in sorted(per_window.items()):
        print(f"  window {window}s: {count} admission(s)")


if __name__ == "__main__":
    main()
