"""Self-contained primality testing and probable-prime sampling over Python integers.

Used by the native arithmetic backend. A composite test runs a cheap trial division against a cached table of small
primes before falling back to Miller-Rabin with a number of rounds derived from the requested certainty.

Typical usage example:

    get_pre_primes(12000)
    check_prime(3571, certainty=20)
    p = generate_probable_prime(512, random.Random(42))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import math
import random
import secrets

DEFAULT_CERTAINTY: int = 20

_SMALL_PRIMES: list[int] = []
_SMALL_PRIMES_CAP: int = 0

logger = logging.getLogger(__name__)


def _sieve(n: int = 10000) -> list[int]:
    """Implements the Sieve of Eratosthenes.

    Uses the textbook Sieve of Eratosthenes over odd numbers only, sieving until root.

    Args:
        n: The number up to which to generate primes. Defaults to 10000. Must be >= 0.

    Returns:
        A list of primes up to `n`.
    """
    if n < 2:
        return []
    i_size = (n - 1) // 2
    candidate: list[bool] = [True] * i_size
    for i in range(math.isqrt(n) // 2):
        if candidate[i]:
            r = 2 * i + 3
            for j in range((r * r - 3) // 2, i_size, r):
                candidate[j] = False
    return [2] + [(no * 2 + 3) for no, ele in enumerate(candidate) if ele]


def get_pre_primes(n: int = 10000, change: bool = False) -> list[int]:
    """Get the small primes, automatically generating if necessary.

    The module-level table acts as a cache. It is regenerated when the requested range is greater, when forced by
    `change` or when the cache is empty.

    Args:
        n: The number up to which to generate primes. Defaults to 10000. Must be >= 0.
        change: Whether to force a recomputation of primes. Defaults to False.

    Returns:
        List of primes in ascending order, covering at least up to `n` unless `change` is True.

    Raises:
        ValueError: If `n` is negative.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    global _SMALL_PRIMES
    global _SMALL_PRIMES_CAP
    if n > _SMALL_PRIMES_CAP or change or not _SMALL_PRIMES:
        _SMALL_PRIMES = _sieve(n)
        _SMALL_PRIMES_CAP = n
    return _SMALL_PRIMES


def _trial_division(no: int, n: int = 10000) -> bool:
    """Check the provided `no` against the known small primes.

    Args:
         no: The number to check.
         n: The bound of the small prime table, passed to `get_pre_primes()`.

    Returns:
        False if `no` cannot be prime, True otherwise.
    """
    if no < 2:
        return False
    for prime in get_pre_primes(n):
        if prime * prime > no:
            return True
        if no % prime == 0:
            return False
    return True


def rounds_for_certainty(certainty: int) -> int:
    """Number of Miller-Rabin rounds keeping the false-positive rate at or below 2**-certainty.

    A single round lets a composite through with probability at most 1/4.
    """
    return max(1, math.ceil(certainty / 2))


def _miller_rabin(w: int, iters: int) -> bool:
    """Perform the Miller-Rabin primality test.

    Witnesses come from the operating system source, never from a caller-owned generator, so seeded streams are
    not disturbed by primality testing.

    Args:
        w: Odd integer to be tested.
        iters: Number of Miller-Rabin rounds to perform.

    Returns:
        True if `w` is probably prime, False otherwise.
    """
    if w <= 3:
        return w in (2, 3)
    tw = w - 1
    a = (tw & -tw).bit_length() - 1
    m = tw >> a
    for _ in range(iters):
        b = secrets.randbelow(w - 3) + 2
        z = pow(b, m, w)
        if z in (1, tw):
            continue
        for _ in range(1, a):
            z = pow(z, 2, w)
            if z == tw:
                break
            if z == 1:
                return False
        else:
            return False
    return True


def check_prime(candidate: int, certainty: int = DEFAULT_CERTAINTY, n: int = 10000) -> bool:
    """Composite primality test: trial division by small primes, then Miller-Rabin.

    Args:
        candidate: The candidate prime to test.
        certainty: The candidate is declared prime with confidence at least 1 - 2**-certainty.
        n: Bound of the small prime table used for trial division.

    Returns:
        True if `candidate` is probably prime, False otherwise.
    """
    if candidate < 2:
        return False
    if not _trial_division(candidate, n):
        return False
    return _miller_rabin(candidate, rounds_for_certainty(certainty))


def generate_probable_prime(size: int, rng: random.Random, certainty: int = DEFAULT_CERTAINTY) -> int:
    """Draw probable primes of exactly `size` bits from `rng`.

    The two most significant bits are forced so the product of two such primes has exactly `2 * size` bits, the
    least significant bit so only odd candidates are tested.

    Args:
        size: Bit length of the prime. Must be at least 2.
        rng: Seedable source for the candidates.
        certainty: Passed to `check_prime`.

    Returns:
        A probable prime of `size` bits.

    Raises:
        ValueError: If `size` is below 2.
        RuntimeError: If no prime turns up within an improbable number of draws.
    """
    if size < 2:
        raise ValueError("Prime size must be at least 2 bits.")
    msk = (1 << size - 1) | (1 << size - 2) | 1
    rep_cap = max(size * 5, 100)
    for attempt in range(rep_cap):
        byts = rng.getrandbits(size) | msk
        if check_prime(byts, certainty):
            logger.debug("Found %d-bit probable prime after %d draws", size, attempt + 1)
            return byts
    raise RuntimeError(f"Ran an improbable {rep_cap} loops with no prime found. Check the random number generator.")
