#!/usr/bin/env python3
"""
Complete an RSA private key given only n, e and d.

Usage:
  python3 -m rsacrt complete -n N -e E -d D [--method witness|cofactor] [--max-attempts K] [--pem FILE]
  python3 -m rsacrt selftest [--bits B] [--count C] [--method witness|cofactor]

Integers may be hex (0x...), decimal, or bare hex digits; a digits-only value
is read as decimal. Results are printed with a 0x prefix.
"""
import argparse
import logging
import sys

from Crypto.PublicKey import RSA
from Crypto.Util.number import inverse
from tqdm import tqdm

from .completer import DEFAULT_METHOD, CrtKey, Method, complete_crt_key, from_rsa_key, to_rsa_key
from .errors import RSACrtError

DEFAULT_E = 65537
DEFAULT_SELFTEST_BITS = 1024
DEFAULT_SELFTEST_COUNT = 10

logger = logging.getLogger(__name__)

HEX_DIGITS = set("0123456789abcdefABCDEF")


def parse_int(s: str) -> int:
    raw = s.strip().lower()
    try:
        if raw.startswith("0x"):
            return int(raw, 16)
        if raw.isdigit():
            return int(raw, 10)
        if raw and set(raw) <= HEX_DIGITS:
            return int(raw, 16)
        return int(raw, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {s!r} (use hex 0x.., decimal or hex digits)")


def positive_int(s: str) -> int:
    try:
        value = int(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {s!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return value


def print_key(key):
    for name, value in key._asdict().items():
        print(f"{name} = {value:#x}")


def cmd_complete(args):
    key = complete_crt_key(args.n, args.e, args.d, method=args.method, max_attempts=args.max_attempts)
    print_key(key)
    if args.pem:
        with open(args.pem, "wb") as f:
            f.write(to_rsa_key(key).export_key(format="PEM", pkcs=1))
        print(f"PEM written -> {args.pem}")
    return 0


def reference_key(ref, d):
    """CrtKey straight from a generated key's own primes."""
    p, q = sorted((ref.p, ref.q))
    return CrtKey(ref.n, ref.e, d, p, q, d % (p - 1), d % (q - 1), inverse(q, p))


def cmd_selftest(args):
    failures = 0
    for _ in tqdm(range(args.count), desc=f"{args.bits}-bit keys", disable=args.count < 2):
        ref = RSA.generate(args.bits, e=args.e)
        n, e, d = from_rsa_key(ref)
        if args.method is Method.COFACTOR:
            # pycryptodome reduces d mod lambda(n); the cofactor search needs it mod phi(n)
            d = inverse(e, (ref.p - 1) * (ref.q - 1))
        key = complete_crt_key(n, e, d, method=args.method, max_attempts=args.max_attempts)
        if key != reference_key(ref, d):
            failures += 1
            logger.error("rebuilt key differs for n = %x", n)
    print(f"{args.count - failures}/{args.count} keys rebuilt")
    return 1 if failures else 0


def build_argparser():
    p = argparse.ArgumentParser(prog="rsacrt", description="Recover p, q and CRT parameters from an RSA (n, e, d).")
    p.add_argument("-v", "--verbose", action="store_true", help="Log search progress")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_search_options(sp):
        sp.add_argument("--method", type=Method, choices=list(Method), default=DEFAULT_METHOD,
                        metavar="{" + ",".join(m.value for m in Method) + "}",
                        help=f"Factor search to use (default {DEFAULT_METHOD.value})")
        sp.add_argument("--max-attempts", type=positive_int, default=None,
                        help="Give up after this many bases / cofactors (default: unbounded)")

    comp = sub.add_parser("complete", help="Complete a single key.")
    comp.add_argument("-n", type=parse_int, required=True, help="Modulus")
    comp.add_argument("-e", type=parse_int, default=DEFAULT_E, help=f"Public exponent (default {DEFAULT_E})")
    comp.add_argument("-d", type=parse_int, required=True, help="Private exponent")
    comp.add_argument("--pem", help="Also write the completed key as PKCS#1 PEM to this file")
    add_search_options(comp)
    comp.set_defaults(func=cmd_complete)

    test = sub.add_parser("selftest", help="Generate keys, strip them to (n, e, d) and rebuild them.")
    test.add_argument("-b", "--bits", type=int, default=DEFAULT_SELFTEST_BITS,
                      help=f"Key size (default {DEFAULT_SELFTEST_BITS})")
    test.add_argument("-c", "--count", type=positive_int, default=DEFAULT_SELFTEST_COUNT,
                      help=f"Number of keys (default {DEFAULT_SELFTEST_COUNT})")
    test.add_argument("-e", type=int, default=DEFAULT_E, help=f"Public exponent (default {DEFAULT_E})")
    add_search_options(test)
    test.set_defaults(func=cmd_selftest)
    return p


def main(argv=None):
    args = build_argparser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except RSACrtError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
