# src/fibcalc/engine.py
from __future__ import annotations

import gmpy2


def fibonacci(n: int) -> int:
    """
    Exact F(n) with F(0)=0, F(1)=1.

    Iterates the recurrence with two gmpy2 bigint accumulators (n-1 additions),
    so the result is exact for any n >= 0 regardless of the configured bound.
    """
    if n < 0:
        raise ValueError(f"Fibonacci index must be >= 0, got {n}")
    if n < 2:
        return n

    a, b = gmpy2.mpz(0), gmpy2.mpz(1)
    for _ in range(n - 1):
        a, b = b, a + b
    return int(b)


def fibonacci_sequence(count: int) -> list[int]:
    """Return [F(0), F(1), ..., F(count-1)]."""
    if count <= 0:
        return []
    out = [0]
    a, b = gmpy2.mpz(0), gmpy2.mpz(1)
    for _ in range(count - 1):
        out.append(int(b))
        a, b = b, a + b
    return out
