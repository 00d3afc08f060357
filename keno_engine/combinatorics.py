"""Exact combinatorics on Python's arbitrary-precision integers."""
import math


def factorial(n: int) -> int:
    """n! for n > 1, else 1."""
    if n <= 1:
        return 1
    return math.factorial(n)


def binomial(n: int, k: int) -> int:
    """C(n, k), the number of ways to choose k items from n.

    Out-of-range pairs (k < 0 or k > n) return 0 rather than raising:
    "no way to choose" is a valid answer.
    """
    if k < 0 or k > n:
        return 0
    if k == 0 or k == n:
        return 1

    k = min(k, n - k)
    # n * (n-1) * ... * (n-k+1), then divide out k! (always exact)
    falling = math.prod(range(n - k + 1, n + 1))
    return falling // factorial(k)
