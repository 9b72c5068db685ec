"""Unpadded ("textbook") RSA encryption and decryption of integers.

No padding of any kind is applied and the arithmetic is not constant-time. Messages are expected in [0, n); values
outside that range are not rejected and simply get reduced modulo n by the exponentiation.

Typical usage example:

    engine = RSAEngine.generate(1024, "gmp")
    c = engine.encrypt(65)
    m = engine.decrypt(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import random

from rsalab.backends import ArithmeticBackend
from rsalab.backends import get_backend
from rsalab.keygen import KeyGenerator
from rsalab.keygen import KeyPair
from rsalab.primes import DEFAULT_CERTAINTY


class RSAEngine:
    """Encrypts and decrypts with one key pair over one arithmetic backend.

    Attributes:
        keypair: The key pair in use.
        backend: The arithmetic strategy performing the modular exponentiations.
    """

    def __init__(self, keypair: KeyPair, backend: ArithmeticBackend | str = "native") -> None:
        self.keypair = keypair
        self.backend = get_backend(backend)

    @property
    def public_modulus(self) -> int:
        return self.keypair.n

    @property
    def public_exponent(self) -> int:
        return self.keypair.e

    @property
    def private_exponent(self) -> int:
        """The private exponent. Debugging only."""
        return self.keypair.d

    def encrypt(self, message: int) -> int:
        """Encrypt an integer message: message**e mod n."""
        return self.backend.mod_pow(message, self.keypair.e, self.keypair.n)

    def decrypt(self, cipher: int) -> int:
        """Decrypt an integer ciphertext: cipher**d mod n."""
        return self.backend.mod_pow(cipher, self.keypair.d, self.keypair.n)

    def status(self) -> str:
        """Human-readable dump of every key component."""
        kp = self.keypair
        lines = [
            "========== RSA Object Status =========",
            f"  p = {kp.p}",
            f"  q = {kp.q}",
            f"  n = {kp.n}",
            f"phi = {kp.phi}",
            f"  e = {kp.e}",
            f"  d = {kp.d}",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n={self.keypair.n.bit_length()} bits, backend={self.backend.name!r})"

    @classmethod
    def generate(cls,
                 bits: int,
                 backend: ArithmeticBackend | str = "native",
                 certainty: int = DEFAULT_CERTAINTY,
                 rng: random.Random | None = None) -> "RSAEngine":
        """Generate a fresh key pair of about `bits` bits and wrap it.

        Args:
            bits: Target modulus size.
            backend: Backend instance or registry name.
            certainty: Primality certainty for the generated primes.
            rng: Seedable source. A fresh generator is created when omitted.

        Returns:
            A new engine over the generated key pair.
        """
        keypair = KeyGenerator(backend, certainty).from_bits(bits, rng)
        return cls(keypair, backend)
