from math import gcd

import pytest
from Crypto.PublicKey import RSA
from Crypto.Util.number import getPrime, inverse

from rsacrt import KeyMaterial


def make_key(bits, e=65537, mod_phi=False):
    """Random two-prime key; d is reduced mod phi(n) or mod lambda(n)."""
    while True:
        p = getPrime(bits)
        q = getPrime(bits)
        if p == q:
            continue
        phi = (p - 1) * (q - 1)
        lam = phi // gcd(p - 1, q - 1)
        if gcd(e, phi) != 1:
            continue
        d = inverse(e, phi if mod_phi else lam)
        return KeyMaterial(p * q, e, d), (min(p, q), max(p, q))


@pytest.fixture
def small_key():
    # 61 * 53, d = 17^-1 mod phi
    return KeyMaterial(3233, 17, 2753), (53, 61)


@pytest.fixture(params=range(3))
def lambda_key(request):
    return make_key(128)


@pytest.fixture(params=range(3))
def phi_key(request):
    return make_key(128, mod_phi=True)


@pytest.fixture(scope="module")
def rsa_1024():
    return RSA.generate(1024)


@pytest.fixture
def key_factory():
    return make_key
