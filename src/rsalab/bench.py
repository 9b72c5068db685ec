"""Cross-backend correctness checks and timing.

For every bit length of the sweep, each backend is reseeded with the same value and times three phases:

    keygen      building a number of key pairs from scratch,
    cycle       encrypting then decrypting random messages shorter than the modulus,
    crosscheck  feeding one shared set of primes to every backend and requiring bitwise-identical keys and
                ciphertexts.

Any mismatch is fatal for the run and raises `DecryptionMismatch` naming the backend, bit length and trial.

Typical usage example:

    harness = BenchmarkHarness(BenchmarkConfig(bit_lengths=(64, 128)))
    print(format_report(harness.run()))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import dataclasses
import logging
import random
import time
import typing

from rsalab.backends import available_backends
from rsalab.backends import get_backend
from rsalab.errors import DecryptionMismatch
from rsalab.keygen import KeyGenerator
from rsalab.keygen import KeyPair
from rsalab.primes import DEFAULT_CERTAINTY
from rsalab.rsa import RSAEngine

PHASES = ("keygen", "cycle", "crosscheck")

logger = logging.getLogger(__name__)


class BenchmarkRecord(typing.NamedTuple):
    """One timed phase of one backend at one key size.

    Attributes:
        bit_length: Requested modulus size.
        backend_id: Registry name of the backend.
        phase: One of `PHASES`.
        elapsed: Wall-clock seconds spent in the phase.
        outcome: "pass" or "fail".
    """
    bit_length: int
    backend_id: str
    phase: str
    elapsed: float
    outcome: str


@dataclasses.dataclass(frozen=True)
class BenchmarkConfig:
    """Parameters of one benchmark run.

    Attributes:
        bit_lengths: Key sizes to sweep.
        keypairs: Key pairs generated per backend and bit length.
        messages: Round trips checked per key pair.
        seed: Seed every backend is reset to at the start of each bit length.
        certainty: Primality certainty for key generation.
        backends: Registry names of the backends to compare.
    """
    bit_lengths: tuple[int, ...] = (16, 32, 64, 128, 256, 512)
    keypairs: int = 3
    messages: int = 100
    seed: int = 42
    certainty: int = DEFAULT_CERTAINTY
    backends: tuple[str, ...] = dataclasses.field(default_factory=lambda: tuple(available_backends()))


class BenchmarkHarness:
    """Drives key generation and encryption over every configured backend.

    Attributes:
        config: The run parameters.
        records: Records produced so far, kept even when a run aborts.
    """

    def __init__(self, config: BenchmarkConfig | None = None) -> None:
        self.config = config if config is not None else BenchmarkConfig()
        self.records: list[BenchmarkRecord] = []

    def _record(self, bits: int, backend_id: str, phase: str, start: float, outcome: str = "pass") -> None:
        elapsed = time.perf_counter() - start
        self.records.append(BenchmarkRecord(bits, backend_id, phase, elapsed, outcome))
        logger.info("%5d bits | %-8s | %-10s | %.6fs | %s", bits, backend_id, phase, elapsed, outcome)

    def run(self) -> list[BenchmarkRecord]:
        """Run the whole sweep.

        Returns:
            One record per bit length, backend and phase.

        Raises:
            DecryptionMismatch: On the first correctness failure. The run stops there.
        """
        self.records = []
        for bits in self.config.bit_lengths:
            for backend_id in self.config.backends:
                keypairs = self._keygen_phase(bits, backend_id)
                self._cycle_phase(bits, backend_id, keypairs)
            self._crosscheck_phase(bits)
        return self.records

    def _keygen_phase(self, bits: int, backend_id: str) -> list[KeyPair]:
        rng = random.Random(self.config.seed)
        gen = KeyGenerator(backend_id, self.config.certainty)
        start = time.perf_counter()
        keypairs = [gen.from_bits(bits, rng) for _ in range(self.config.keypairs)]
        self._record(bits, backend_id, "keygen", start)
        return keypairs

    def _cycle_phase(self, bits: int, backend_id: str, keypairs: list[KeyPair]) -> None:
        rng = random.Random(self.config.seed)
        backend = get_backend(backend_id)
        trial = 0
        start = time.perf_counter()
        for keypair in keypairs:
            engine = RSAEngine(keypair, backend)
            bound = 1 << (keypair.n.bit_length() - 1)
            for _ in range(self.config.messages):
                message = backend.random_below(bound, rng)
                if engine.decrypt(engine.encrypt(message)) != message:
                    self._record(bits, backend_id, "cycle", start, "fail")
                    raise DecryptionMismatch(backend_id, bits, trial)
                trial += 1
        self._record(bits, backend_id, "cycle", start)

    def _crosscheck_phase(self, bits: int) -> None:
        """Same primes, same seed: every backend must produce the reference backend's key and ciphertexts."""
        backend_ids = self.config.backends
        if len(backend_ids) < 2:
            return
        reference_id = backend_ids[0]
        prime_rng = random.Random(self.config.seed)
        reference = get_backend(reference_id)
        size = (bits + 1) // 2
        p = reference.random_prime(size, self.config.certainty, prime_rng)
        q = reference.random_prime(size, self.config.certainty, prime_rng)
        while p == q:
            q = reference.random_prime(size, self.config.certainty, prime_rng)

        expected_key = None
        expected_ciphers: list[int] = []
        for backend_id in backend_ids:
            rng = random.Random(self.config.seed)
            start = time.perf_counter()
            keypair = KeyGenerator(backend_id, self.config.certainty).from_primes(p, q, rng=rng)
            engine = RSAEngine(keypair, backend_id)
            bound = 1 << (keypair.n.bit_length() - 1)
            ciphers = [engine.encrypt(engine.backend.random_below(bound, rng)) for _ in range(self.config.messages)]
            if expected_key is None:
                expected_key, expected_ciphers = keypair, ciphers
            elif keypair != expected_key:
                self._record(bits, backend_id, "crosscheck", start, "fail")
                raise DecryptionMismatch(backend_id, bits, 0, f"key pair differs from {reference_id!r}")
            else:
                for trial, (got, want) in enumerate(zip(ciphers, expected_ciphers, strict=True)):
                    if got != want:
                        self._record(bits, backend_id, "crosscheck", start, "fail")
                        raise DecryptionMismatch(backend_id, bits, trial, f"ciphertext differs from {reference_id!r}")
            self._record(bits, backend_id, "crosscheck", start)


def format_report(records: typing.Iterable[BenchmarkRecord]) -> str:
    """Render records as a comparative table: one row per bit length and phase, one column per backend."""
    records = list(records)
    backend_ids: list[str] = []
    table: dict[tuple[int, str], dict[str, BenchmarkRecord]] = {}
    for rec in records:
        if rec.backend_id not in backend_ids:
            backend_ids.append(rec.backend_id)
        table.setdefault((rec.bit_length, rec.phase), {})[rec.backend_id] = rec

    header = f"{'bits':>6} | {'phase':<10} | " + " | ".join(f"{b:>14}" for b in backend_ids)
    lines = [header, "-" * len(header)]
    for (bits, phase), row in sorted(table.items(), key=lambda kv: (kv[0][0], PHASES.index(kv[0][1]))):
        cells = []
        for backend_id in backend_ids:
            rec = row.get(backend_id)
            if rec is None:
                cells.append(f"{'-':>14}")
            elif rec.outcome != "pass":
                cells.append(f"{'FAILED':>14}")
            else:
                cells.append(f"{rec.elapsed * 1000:>12.3f}ms")
        lines.append(f"{bits:>6} | {phase:<10} | " + " | ".join(cells))
    return "\n".join(lines)
