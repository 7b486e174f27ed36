"""
Complete an RSA private key (n, e, d) into its CRT form.

    p, q   the prime factors, p < q
    exp1   d mod (p-1)
    exp2   d mod (q-1)
    coeff  q^-1 mod p

The layout matches PKCS#1 RSAPrivateKey, so the result converts directly
into a pycryptodome key and exports to PEM.
"""
import logging
from enum import Enum
from typing import NamedTuple, Optional

from Crypto.PublicKey import RSA
from Crypto.Util.number import inverse

from .cofactor import find_factor_cofactor
from .errors import FactorizationMismatch, InvalidKeyRelation
from .numeric import check_key_relation
from .witness import find_factor_witness

logger = logging.getLogger(__name__)


class Method(Enum):
    WITNESS = "witness"
    COFACTOR = "cofactor"


DEFAULT_METHOD = Method.WITNESS


class KeyMaterial(NamedTuple):
    n: int
    e: int
    d: int


class Factorization(NamedTuple):
    p: int
    q: int

    @classmethod
    def of(cls, n: int, f: int) -> "Factorization":
        """Build (p, q) from any proper factor f of n, smaller prime first."""
        if not 1 < f < n or n % f:
            raise FactorizationMismatch(f"{f:#x} is not a proper factor of n")
        g = n // f
        return cls(f, g) if f < g else cls(g, f)


class CrtParameters(NamedTuple):
    exp1: int
    exp2: int
    coeff: int


class CrtKey(NamedTuple):
    n: int
    e: int
    d: int
    p: int
    q: int
    exp1: int
    exp2: int
    coeff: int

    @property
    def crt(self) -> CrtParameters:
        return CrtParameters(self.exp1, self.exp2, self.coeff)


def complete_crt(p: int, q: int, d: int, n: int, e: Optional[int] = None) -> CrtParameters:
    """
    Derive the CRT exponents and coefficient from a known factorization.

    The factors may come in either order. Raises FactorizationMismatch when
    p*q != n and InvalidKeyRelation when e is given and e*d != 1 mod lambda(n).
    """
    if p > q:
        p, q = q, p
    if p <= 1 or p == q or p * q != n:
        raise FactorizationMismatch("p * q != n")
    if e is not None and not check_key_relation(e, d, p, q):
        raise InvalidKeyRelation("e*d != 1 (mod lcm(p-1, q-1))")
    return CrtParameters(d % (p - 1), d % (q - 1), inverse(q, p))


def find_factor(n: int, e: int, d: int, method: Method = DEFAULT_METHOD,
                max_attempts: Optional[int] = None) -> int:
    method = Method(method)
    if method is Method.WITNESS:
        return find_factor_witness(e, d, n, max_attempts=max_attempts)
    return find_factor_cofactor(n, e, d, max_attempts=max_attempts)


def complete_crt_key(n: int, e: int, d: int, method: Method = DEFAULT_METHOD,
                     max_attempts: Optional[int] = None) -> CrtKey:
    """Factor n with the chosen method and return the full CRT private key."""
    f = find_factor(n, e, d, method, max_attempts)
    p, q = Factorization.of(n, f)
    logger.debug("n factored (%d-bit p, %d-bit q) via %s search",
                 p.bit_length(), q.bit_length(), Method(method).value)
    exp1, exp2, coeff = complete_crt(p, q, d, n, e)
    return CrtKey(n, e, d, p, q, exp1, exp2, coeff)


def to_rsa_key(key: CrtKey) -> RSA.RsaKey:
    """pycryptodome private key; export_key(pkcs=1) writes exp1, exp2, coeff."""
    return RSA.construct((key.n, key.e, key.d, key.p, key.q))


def from_rsa_key(rsa_key: RSA.RsaKey) -> KeyMaterial:
    if not rsa_key.has_private():
        raise ValueError("need a private key to read d")
    return KeyMaterial(rsa_key.n, rsa_key.e, rsa_key.d)


find_factor_by_witness_search = find_factor_witness
find_factor_by_cofactor_search = find_factor_cofactor
