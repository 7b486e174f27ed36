"""
Exact integer helpers shared by the factor searches.
No floating point anywhere; operands are thousands of bits long.
"""
from math import gcd
from typing import Optional, Tuple


def isqrt_exact(n: int) -> Tuple[int, bool]:
    """
    Newton's method integer square root.

    Returns (floor(sqrt(n)), n is a perfect square).
    """
    if n < 0:
        raise ValueError("isqrt_exact() argument must be non-negative")
    prev = 0
    current = 1 << ((n.bit_length() + 1) // 2) if n else 1
    while abs(prev - current) > 1:
        prev = current
        current = (current + n // current) >> 1
    root = min(prev, current)
    # Newton can stop one above the floor when n = r^2 - 1
    while root * root > n:
        root -= 1
    return root, root * root == n


def solve_quadratic(a: int, b: int, c: int) -> Optional[int]:
    """
    Integer root of a*x^2 + b*x + c = 0 taken from the "+" branch
    x = (-b + sqrt(b^2 - 4ac)) / 2a, or None when it is not an integer.
    """
    if a == 0:
        raise ValueError("not a quadratic: a == 0")
    disc = b * b - 4 * a * c
    if disc < 0:
        return None
    root, is_square = isqrt_exact(disc)
    if not is_square:
        return None
    x, r = divmod(root - b, 2 * a)
    if r:
        return None
    return x


def split_power_of_two(x: int) -> Tuple[int, int]:
    """Write x > 0 as t * 2^s with t odd; returns (t, s)."""
    if x <= 0:
        raise ValueError("split_power_of_two() needs a positive integer")
    s = (x & -x).bit_length() - 1
    return x >> s, s


def carmichael(p: int, q: int) -> int:
    """lambda(p*q) for distinct primes p, q."""
    return (p - 1) * (q - 1) // gcd(p - 1, q - 1)


def check_key_relation(e: int, d: int, p: int, q: int) -> bool:
    return (e * d) % carmichael(p, q) == 1
