"""Recover p, q and the CRT parameters of an RSA key from (n, e, d)."""
from .cofactor import find_factor_cofactor, solve_for_p
from .completer import (
    CrtKey,
    CrtParameters,
    DEFAULT_METHOD,
    Factorization,
    KeyMaterial,
    Method,
    complete_crt,
    complete_crt_key,
    find_factor,
    find_factor_by_cofactor_search,
    find_factor_by_witness_search,
    from_rsa_key,
    to_rsa_key,
)
from .errors import FactorizationMismatch, InvalidKeyRelation, RSACrtError, SearchExhausted
from .numeric import isqrt_exact, solve_quadratic, split_power_of_two
from .witness import find_factor_witness

__version__ = "0.1.0"
