"""
Factor n from a matching (e, d) pair.

Follows the Handbook of Applied Cryptography, section 8.2.2(i): e*d - 1 is a
multiple of lambda(n), so for almost every base a the sequence
a^t, a^2t, a^4t, ... (mod n) reaches 1 and the element just before it is a
square root of unity. When that root is not +-1 it splits n.
"""
import logging
from itertools import count
from math import gcd
from typing import Optional

from .errors import InvalidKeyRelation, SearchExhausted
from .numeric import split_power_of_two

logger = logging.getLogger(__name__)

FIRST_BASE = 2
LOG_EVERY = 1000


def try_base(a: int, t: int, s: int, n: int) -> Optional[int]:
    """Look for a non-trivial square root of unity on base a; returns a factor or None."""
    g = gcd(a, n)
    if 1 < g < n:
        return g
    x = pow(a, t, n)
    for _ in range(s):
        if x == 1 or x == n - 1:
            return None
        y = x * x % n
        if y == 1:
            return gcd(x - 1, n)
        x = y
    return None


def find_factor_witness(e: int, d: int, n: int, max_attempts: Optional[int] = None) -> int:
    """
    Return a proper factor of n (never 1 or n).

    Bases 2, 3, 4, ... are tried in order. Each one exposes a factor with
    probability at least 1/2 when n has two prime factors, so the default
    unbounded search ends quickly on valid keys. With max_attempts set, give
    up after that many bases and raise SearchExhausted.
    """
    ed_minus_1 = e * d - 1
    if ed_minus_1 <= 0:
        raise InvalidKeyRelation("e*d - 1 must be positive")
    t, s = split_power_of_two(ed_minus_1)
    if s == 0:
        raise InvalidKeyRelation("e*d - 1 is odd, so it cannot be a multiple of lambda(n)")
    logger.debug("e*d - 1 = t * 2^%d, t has %d bits", s, t.bit_length())

    bases = count(FIRST_BASE)
    for attempt, a in enumerate(bases, start=1):
        if max_attempts is not None and attempt > max_attempts:
            raise SearchExhausted("witness", max_attempts)
        f = try_base(a, t, s, n)
        if f is not None:
            logger.debug("base %d split n after %d attempt(s)", a, attempt)
            return f
        if attempt % LOG_EVERY == 0:
            logger.debug("witness search: %d bases tried", attempt)
