"""Typed failures raised by key generation, the arithmetic backends and the benchmark harness.

Every failure derives from `RSALabError` and from the builtin exception a caller would naturally expect, so that
`except ValueError` keeps working for bad inputs and `except RuntimeError` for correctness defects.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class RSALabError(Exception):
    """Base class of all rsalab failures."""


class PrimalityFailure(RSALabError, ValueError):
    """One or both candidate primes failed the probabilistic primality test.

    Attributes:
        values: The offending candidates.
    """

    def __init__(self, *values: int, reason: str = "failed the primality test") -> None:
        self.values = values
        super().__init__(f"Primality testing failed: {', '.join(str(v) for v in values)} {reason}.")


class InvalidPublicExponent(RSALabError, ValueError):
    """The supplied public exponent is not a unit modulo phi.

    Attributes:
        exponent: The rejected exponent.
        phi: Euler's totient it was checked against.
    """

    def __init__(self, exponent: int, phi: int) -> None:
        self.exponent = exponent
        self.phi = phi
        super().__init__(f"Public exponent {exponent} is not relatively prime to phi or not in (1, phi).")


class NotInvertible(RSALabError, ValueError):
    """gcd(value, modulus) != 1, so no modular inverse exists."""

    def __init__(self, value: int, modulus: int) -> None:
        self.value = value
        self.modulus = modulus
        super().__init__(f"{value} is not invertible modulo {modulus}")


class DecryptionMismatch(RSALabError, RuntimeError):
    """A benchmark correctness check failed.

    Raised when a decrypted message differs from the original or when two backends disagree on the same input.
    Never expected in correct operation.

    Attributes:
        backend_id: Backend that produced the bad result.
        bit_length: Requested key size of the failing trial.
        trial: Index of the failing trial within its phase.
    """

    def __init__(self, backend_id: str, bit_length: int, trial: int, detail: str = "round-trip mismatch") -> None:
        self.backend_id = backend_id
        self.bit_length = bit_length
        self.trial = trial
        self.detail = detail
        super().__init__(f"{detail} on backend {backend_id!r} at {bit_length} bits, trial {trial}")
