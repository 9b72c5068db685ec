"""Textbook RSA over interchangeable big-integer arithmetic backends.

Provides unpadded RSA key generation, integer encryption and decryption, an auditable Euclidean modular inverse and
a harness comparing a self-contained Python-integer backend against GMP (through gmpy2) for correctness and speed.
Not a secure RSA implementation: no padding, no constant-time arithmetic.

Typical usage example:

    gen = KeyGenerator(get_backend("gmp"))
    engine = RSAEngine(gen.from_bits(1024, random.Random(42)), "gmp")
    c = engine.encrypt(65)
    m = engine.decrypt(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsalab.backends import ArithmeticBackend
from rsalab.backends import available_backends
from rsalab.backends import ExternalMultiprecision
from rsalab.backends import get_backend
from rsalab.backends import NativeBigInt
from rsalab.bench import BenchmarkConfig
from rsalab.bench import BenchmarkHarness
from rsalab.bench import BenchmarkRecord
from rsalab.bench import format_report
from rsalab.errors import DecryptionMismatch
from rsalab.errors import InvalidPublicExponent
from rsalab.errors import NotInvertible
from rsalab.errors import PrimalityFailure
from rsalab.errors import RSALabError
from rsalab.euclid import inverse
from rsalab.keygen import KeyGenerator
from rsalab.keygen import KeyPair
from rsalab.primes import DEFAULT_CERTAINTY
from rsalab.rsa import RSAEngine

__version__ = "0.1.0"
__all__ = [
    "ArithmeticBackend",
    "NativeBigInt",
    "ExternalMultiprecision",
    "available_backends",
    "get_backend",
    "KeyGenerator",
    "KeyPair",
    "RSAEngine",
    "inverse",
    "BenchmarkConfig",
    "BenchmarkHarness",
    "BenchmarkRecord",
    "format_report",
    "RSALabError",
    "PrimalityFailure",
    "InvalidPublicExponent",
    "NotInvertible",
    "DecryptionMismatch",
    "DEFAULT_CERTAINTY",
]
