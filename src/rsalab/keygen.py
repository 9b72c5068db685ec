"""Textbook RSA key generation over a pluggable arithmetic backend.

Keys are built either from explicit primes (with or without an explicit public exponent) or from a target bit
length. Without an explicit exponent, `e` is found by rejection sampling over the whole range below
2**(bitlength(phi) - 1) rather than fixed to a small value such as 65537. This is a didactic generator exploring the
full exponent space; it is not hardened for production use.

Typical usage example:

    gen = KeyGenerator(get_backend("native"))
    kp = gen.from_primes(61, 53, 17)
    kp = gen.from_bits(512, random.Random(42))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import math
import random
import typing

from rsalab.backends import ArithmeticBackend
from rsalab.backends import get_backend
from rsalab.errors import InvalidPublicExponent
from rsalab.errors import PrimalityFailure
from rsalab.primes import DEFAULT_CERTAINTY

MAX_EXPONENT_DRAWS: int = 10_000
MIN_KEY_BITS: int = 16

logger = logging.getLogger(__name__)


class KeyPair(typing.NamedTuple):
    """An immutable textbook RSA key pair.

    Attributes:
        p: Private prime 1.
        q: Private prime 2.
        n: The modulus, p * q.
        phi: Euler's totient of n, (p - 1) * (q - 1).
        e: The public exponent.
        d: The private exponent, e**-1 mod phi.
    """
    p: int
    q: int
    n: int
    phi: int
    e: int
    d: int


def _as_integer(value: int | str) -> int:
    """Decode a decimal string (or pass through an int) into the canonical integer."""
    return value if isinstance(value, int) else int(value)


class KeyGenerator:
    """Builds `KeyPair` objects with one arithmetic backend.

    Attributes:
        backend: The arithmetic strategy used for every primality test, gcd, inverse and random draw.
        certainty: Primes are accepted with confidence at least 1 - 2**-certainty.
        max_exponent_draws: Upper bound on draws during the public exponent search.
    """

    def __init__(self,
                 backend: ArithmeticBackend | str = "native",
                 certainty: int = DEFAULT_CERTAINTY,
                 max_exponent_draws: int = MAX_EXPONENT_DRAWS) -> None:
        self.backend = get_backend(backend)
        self.certainty = certainty
        self.max_exponent_draws = max_exponent_draws

    def _check_primes(self, p: int, q: int) -> None:
        failed = [x for x in (p, q) if not self.backend.is_probable_prime(x, self.certainty)]
        if failed:
            raise PrimalityFailure(*failed)
        if p == q:
            raise PrimalityFailure(p, q, reason="are not distinct primes")

    def search_public_exponent(self, phi: int, rng: random.Random) -> int:
        """Find a public exponent by rejection sampling.

        Candidates are uniform in [0, 2**(bitlength(phi) - 1)); a candidate is kept when 1 < e < phi and
        gcd(phi, e) == 1. Units modulo phi have density phi(phi)/phi, which only shrinks like 1/ln ln phi, so a
        handful of draws suffices at any realistic size. The draw cap turns a pathological input into an error
        instead of a hang.

        Args:
            phi: Euler's totient of the modulus.
            rng: Seedable source for the candidates.

        Returns:
            A valid public exponent.

        Raises:
            RuntimeError: If no candidate is accepted within `max_exponent_draws` draws.
        """
        bound = 1 << (phi.bit_length() - 1)
        for attempt in range(self.max_exponent_draws):
            e = self.backend.random_below(bound, rng)
            if e <= 1 or self.backend.gcd(phi, e) != 1 or e >= phi:
                continue
            logger.debug("Public exponent accepted after %d draws", attempt + 1)
            return e
        raise RuntimeError(f"No public exponent found for phi={phi} in {self.max_exponent_draws} draws.")

    def from_primes(self,
                    p: int | str,
                    q: int | str,
                    e: int | str | None = None,
                    rng: random.Random | None = None) -> KeyPair:
        """Build a key pair from two explicit primes.

        Args:
            p: First prime.
            q: Second prime, distinct from `p`.
            e: Optional public exponent. Searched for at random when omitted.
            rng: Source for the exponent search. A fresh generator is created when omitted.

        Returns:
            The fully populated key pair.

        Raises:
            PrimalityFailure: If `p` or `q` is not a probable prime, or they are equal.
            InvalidPublicExponent: If the explicit `e` is not a unit in (1, phi).
        """
        p, q = _as_integer(p), _as_integer(q)
        self._check_primes(p, q)
        n = p * q
        phi = (p - 1) * (q - 1)
        if e is None:
            e = self.search_public_exponent(phi, rng if rng is not None else random.Random())
        else:
            e = _as_integer(e)
            if not 1 < e < phi or self.backend.gcd(phi, e) != 1:
                raise InvalidPublicExponent(e, phi)
        d = self.backend.mod_inverse(e, phi)
        return KeyPair(p, q, n, phi, e, d)

    def from_bits(self, bits: int, rng: random.Random | None = None) -> KeyPair:
        """Generate a key pair whose modulus has about `bits` bits.

        Each prime gets ceil(bits / 2) bits and is acquired through the backend's prime sampling strategy.

        Args:
            bits: Target modulus size. Must be at least `MIN_KEY_BITS`.
            rng: Source for prime sampling and the exponent search. A fresh generator is created when omitted.

        Returns:
            The fully populated key pair.

        Raises:
            ValueError: If `bits` is too small to hold two distinct primes.
        """
        if bits < MIN_KEY_BITS:
            raise ValueError(f"Key size must be at least {MIN_KEY_BITS} bits.")
        if rng is None:
            rng = random.Random()
        size = math.ceil(bits / 2)
        p = self.backend.random_prime(size, self.certainty, rng)
        q = self.backend.random_prime(size, self.certainty, rng)
        while p == q:  # (Un)Likely story.
            q = self.backend.random_prime(size, self.certainty, rng)
        logger.debug("Acquired %d-bit primes for a %d-bit key on %s", size, bits, self.backend.name)
        return self.from_primes(p, q, rng=rng)
