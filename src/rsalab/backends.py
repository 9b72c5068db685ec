"""Interchangeable big-integer arithmetic backends.

Both backends satisfy the `ArithmeticBackend` protocol with identical semantics. `NativeBigInt` relies on Python's
own arbitrary-precision integers only, `ExternalMultiprecision` hands the same operations to GMP through gmpy2. They
are picked by name from a registry, so the RSA code and the tests never depend on a concrete class.

Backends are stateless. Randomized operations consume a caller-owned `random.Random`, and both backends draw from
it in exactly the same way, so one seed drives both through identical sequences.

Typical usage example:

    backend = get_backend("gmp")
    backend.mod_pow(65, 17, 3233)  # 2790
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import math
import random
from typing import Protocol, runtime_checkable

import gmpy2

from rsalab import euclid
from rsalab import primes
from rsalab.errors import NotInvertible

logger = logging.getLogger(__name__)


@runtime_checkable
class ArithmeticBackend(Protocol):
    """Capabilities RSA key generation and the engine need from an arithmetic strategy."""

    name: str

    def is_probable_prime(self, x: int, certainty: int) -> bool:
        ...

    def gcd(self, a: int, b: int) -> int:
        ...

    def mod_inverse(self, a: int, modulus: int) -> int:
        ...

    def mod_pow(self, base: int, exponent: int, modulus: int) -> int:
        ...

    def random_below(self, bound: int, rng: random.Random) -> int:
        ...

    def random_prime(self, bits: int, certainty: int, rng: random.Random) -> int:
        ...


def _draw_below(bound: int, rng: random.Random) -> int:
    """Uniform draw in [0, bound) by rejection sampling on the fewest bits covering `bound - 1`."""
    if bound <= 0:
        raise ValueError("bound must be positive")
    k = (bound - 1).bit_length()
    r = rng.getrandbits(k)
    while r >= bound:
        r = rng.getrandbits(k)
    return r


class NativeBigInt:
    """Backend built on Python integers and the self-contained routines in `rsalab.primes` and `rsalab.euclid`."""

    name = "native"

    def is_probable_prime(self, x: int, certainty: int) -> bool:
        return primes.check_prime(x, certainty)

    def gcd(self, a: int, b: int) -> int:
        return math.gcd(a, b)

    def mod_inverse(self, a: int, modulus: int) -> int:
        """Inverse of `a` modulo `modulus` from the Bezout coefficients.

        Raises:
            NotInvertible: If gcd(a, modulus) != 1.
        """
        g, s, _ = euclid.eea(a % modulus, modulus)
        if g != 1:
            raise NotInvertible(a, modulus)
        return s % modulus

    def mod_pow(self, base: int, exponent: int, modulus: int) -> int:
        return pow(base, exponent, modulus)

    def random_below(self, bound: int, rng: random.Random) -> int:
        return _draw_below(bound, rng)

    def random_prime(self, bits: int, certainty: int, rng: random.Random) -> int:
        """Sample `bits`-bit candidates directly until one is a probable prime."""
        return primes.generate_probable_prime(bits, rng, certainty)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ExternalMultiprecision:
    """Backend delegating to the GMP library through gmpy2.

    Results are converted back to `int` so they compare and hash like the native backend's. Only there to compare
    throughput: correctness never depends on it.
    """

    name = "gmp"

    def is_probable_prime(self, x: int, certainty: int) -> bool:
        if x < 2:
            return False
        return bool(gmpy2.is_prime(x, primes.rounds_for_certainty(certainty)))

    def gcd(self, a: int, b: int) -> int:
        return int(gmpy2.gcd(a, b))

    def mod_inverse(self, a: int, modulus: int) -> int:
        """Inverse of `a` modulo `modulus` via `gmpy2.invert`.

        Raises:
            NotInvertible: If gcd(a, modulus) != 1.
        """
        if gmpy2.gcd(a, modulus) != 1:
            raise NotInvertible(a, modulus)
        if modulus == 1:
            return 0
        return int(gmpy2.invert(a, modulus))

    def mod_pow(self, base: int, exponent: int, modulus: int) -> int:
        return int(gmpy2.powmod(base, exponent, modulus))

    def random_below(self, bound: int, rng: random.Random) -> int:
        """Uniform integer in [0, bound) from the shared sampler.

        Both backends draw through `_draw_below`, so one seed keeps their random streams in lockstep.
        """
        return _draw_below(bound, rng)

    def random_prime(self, bits: int, certainty: int, rng: random.Random) -> int:
        """Draw a random `bits`-bit lower bound and take the next prime above it.

        The result may spill one bit over `bits` when the bound lands right below a power of two.
        """
        if bits < 2:
            raise ValueError("Prime size must be at least 2 bits.")
        lower = self.random_below(1 << bits, rng) | (1 << bits - 1) | (1 << bits - 2)
        p = gmpy2.next_prime(lower)
        while not gmpy2.is_prime(p, primes.rounds_for_certainty(certainty)):
            p = gmpy2.next_prime(p)
        logger.debug("Next prime above %d-bit lower bound has %d bits", bits, p.bit_length())
        return int(p)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


_BACKENDS: dict[str, ArithmeticBackend] = {
    NativeBigInt.name: NativeBigInt(),
    ExternalMultiprecision.name: ExternalMultiprecision(),
}


def available_backends() -> list[str]:
    """Registered backend names, in registration order."""
    return list(_BACKENDS)


def get_backend(name: str | ArithmeticBackend) -> ArithmeticBackend:
    """Resolve a backend by registry name.

    Args:
        name: Registry name, or an object already satisfying `ArithmeticBackend`, which is returned unchanged.

    Returns:
        The shared backend instance.

    Raises:
        KeyError: If the name is not registered.
    """
    if not isinstance(name, str):
        return name
    try:
        return _BACKENDS[name]
    except KeyError:
        raise KeyError(f"Unknown backend {name!r}, expected one of {available_backends()}") from None
