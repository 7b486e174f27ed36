"""Errors raised while completing an RSA private key."""


class RSACrtError(ValueError):
    """Base class for every failure surfaced to the caller."""


class InvalidKeyRelation(RSACrtError):
    """n, e, d do not satisfy e*d = 1 (mod lambda(n))."""


class SearchExhausted(RSACrtError):
    """A bounded factor search ran out of candidates."""

    def __init__(self, method, attempts):
        super().__init__(f"{method} search found no factor after {attempts} attempts")
        self.method = method
        self.attempts = attempts


class FactorizationMismatch(RSACrtError):
    """p and q are not a valid two-prime split of n."""
