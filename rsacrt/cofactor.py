"""
Factor n by guessing k in e*d - 1 = k*(p-1)*(q-1).

Substituting q = n/p and clearing the denominator gives a quadratic in p:

    k*p^2 + (d*e - k*n - k - 1)*p + k*n = 0

d is usually about the size of n, so e*d is about e*n and k stays below e.
The search only terminates when d was derived modulo phi(n) (or any k that
happens to be a multiple of gcd(p-1, q-1)); see DESIGN.md.
"""
import logging
from itertools import count
from typing import Optional

from .errors import SearchExhausted
from .numeric import solve_quadratic

logger = logging.getLogger(__name__)

LOG_EVERY = 10000


def solve_for_p(n: int, e: int, d: int, k: int) -> Optional[int]:
    """Return p for this guess of k, or None."""
    kn = k * n
    p = solve_quadratic(k, d * e - kn - k - 1, kn)
    if p is None or not 1 < p < n or n % p:
        return None
    return p


def find_factor_cofactor(n: int, e: int, d: int, max_attempts: Optional[int] = None) -> int:
    """
    Try k = 1, 2, 3, ... until solve_for_p() yields a factor.

    Unbounded by default. With max_attempts set, raise SearchExhausted once
    that many values of k have failed.
    """
    for k in count(1):
        if max_attempts is not None and k > max_attempts:
            raise SearchExhausted("cofactor", max_attempts)
        p = solve_for_p(n, e, d, k)
        if p is not None:
            logger.debug("k = %d gives a factor", k)
            return p
        if k % LOG_EVERY == 0:
            logger.debug("cofactor search: k = %d", k)
