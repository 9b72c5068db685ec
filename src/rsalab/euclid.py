"""Euclidean-algorithm based modular inversion, independent of any arithmetic backend.

`inverse` rebuilds the Bezout coefficient from the recorded quotient sequence by back substitution, which keeps each
step auditable by hand. It is slower than a backend's built-in inverse and exists to cross-check it.

Typical usage example:

    inverse(17, 3120)  # 2753
    g, s, t = eea(240, 46)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import math

logger = logging.getLogger(__name__)


def eea(a: int, b: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such that a*s0 + b*t0 = r0 = gcd(a, b).

    Args:
        a: The first natural number.
        b: The second natural number.

    Returns:
        Greatest common divisor of two integers, as well as the Bezout coefficients.
    """
    r0, r1 = a, b
    s0, s1, t0, t1 = 1, 0, 0, 1
    while r1 != 0:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    return r0, s0, t0


def _quotients(a: int, b: int) -> list[int]:
    """Quotients of the Euclidean division chain of `a` by `b`, last one first."""
    rev: list[int] = []
    while b != 0:
        q, r = divmod(a, b)
        rev.insert(0, q)
        a, b = b, r
    return rev


def inverse(k: int, modulus: int) -> int | None:
    """Compute the multiplicative inverse of `k` modulo `modulus` by back substitution.

    Runs the Euclidean algorithm on (modulus, k), keeping every quotient. With B the quotients in reverse order of
    production, the sequence A[0] = 0, A[1] = 1, A[i] = A[i-1]*B[i-1] + A[i-2] ends on the absolute value of the
    Bezout coefficient of `k`; its sign is whichever makes k * A mod modulus equal to the gcd.

    Args:
        k: Value to invert. Must satisfy 0 <= k < modulus.
        modulus: The modulus.

    Returns:
        The inverse in [0, modulus), or None if `k` is out of range or not invertible. Failures are logged.
    """
    if not 0 <= k < modulus:
        logger.warning("k needs to be in [0, %d), got %d", modulus, k)
        return None
    if modulus == 1:
        return 0
    gcd = math.gcd(modulus, k)
    if gcd != 1:
        logger.warning("%d is not invertible modulo %d", k, modulus)
        return None

    b_list = _quotients(modulus, k)
    a_list = [0, 1]
    for i in range(2, len(b_list) + 1):
        a_list.append(a_list[i - 1] * b_list[i - 1] + a_list[i - 2])

    inv = a_list[-1]
    if (k * inv) % modulus == gcd:
        return inv % modulus
    if (k * -inv) % modulus == gcd:
        return -inv % modulus
    logger.warning("Unable to invert %d modulo %d", k, modulus)
    return None
