"""The Command Line Interface for rsalab.

The only place that configures logging, prints results and decides the process exit status. Any rsalab failure
exits with status 1.

Typical usage example:

    rsalab keygen --bits 512 --backend gmp
    rsalab bench --bits 64 128 256 --messages 500
    python -m rsalab encrypt --modulus 3233 --exponent 17 --message 65
    python -m rsalab decrypt -p 61 -q 53 -e 17 --message 2790
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import random
import sys

import rsalab
from rsalab import bench
from rsalab.backends import available_backends
from rsalab.errors import RSALabError
from rsalab.keygen import KeyGenerator
from rsalab.rsa import RSAEngine

logger = logging.getLogger("rsalab")

backend_opt = argparse.ArgumentParser(add_help=False)
backend_opt.add_argument("--backend", "-b", choices=available_backends(), default="native",
                         help="Arithmetic backend to use.")
seed_opt = argparse.ArgumentParser(add_help=False)
seed_opt.add_argument("--seed", "-s", type=int, default=None, help="Seed for the random source.")
message_opt = argparse.ArgumentParser(add_help=False)
message_opt.add_argument("--message", "-m", type=int, required=True, help="Integer message or ciphertext.")
certainty_opt = argparse.ArgumentParser(add_help=False)
certainty_opt.add_argument("--certainty", type=int, default=rsalab.DEFAULT_CERTAINTY, help="Primality certainty.")

corep = argparse.ArgumentParser(prog="rsalab")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {rsalab.__version__}")
corep.add_argument("--log-level", "-L", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   help="Logging verbosity.")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands", required=True)

keygen = commands.add_parser("keygen", parents=[backend_opt, seed_opt, certainty_opt],
                             help="Key generation utility.")
keygen.add_argument("--bits", type=int, default=1024, help="Modulus size (in bits).")

encrypt = commands.add_parser("encrypt", parents=[backend_opt, message_opt], help="Encryption utility.")
encrypt.add_argument("--modulus", "-n", type=int, required=True, help="Public modulus.")
encrypt.add_argument("--exponent", "-e", type=int, required=True, help="Public exponent.")
decrypt = commands.add_parser("decrypt", parents=[backend_opt, message_opt, certainty_opt],
                              help="Decryption utility.")
decrypt.add_argument("-p", type=int, required=True, help="First prime factor of the modulus.")
decrypt.add_argument("-q", type=int, required=True, help="Second prime factor of the modulus.")
decrypt.add_argument("-e", type=int, required=True, help="Public exponent.")

benchp = commands.add_parser("bench", parents=[certainty_opt], help="Cross-backend correctness and timing sweep.")
benchp.add_argument("--bits", type=int, nargs="+", default=list(bench.BenchmarkConfig.bit_lengths),
                    help="Key sizes to sweep.")
benchp.add_argument("--keypairs", type=int, default=bench.BenchmarkConfig.keypairs,
                    help="Key pairs per backend and size.")
benchp.add_argument("--messages", type=int, default=bench.BenchmarkConfig.messages,
                    help="Round trips per key pair.")
benchp.add_argument("--seed", "-s", type=int, default=bench.BenchmarkConfig.seed, help="Seed per trial set.")
benchp.add_argument("--backend", "-b", action="append", choices=available_backends(),
                    help="Backend to include. Repeat for several; defaults to all.")


def run(args: argparse.Namespace) -> None:
    """Execute one parsed subcommand."""
    match args.subcommand:
        case "keygen":
            rng = random.Random(args.seed)
            keypair = KeyGenerator(args.backend, args.certainty).from_bits(args.bits, rng)
            print(RSAEngine(keypair, args.backend).status())
        case "encrypt":
            print(rsalab.get_backend(args.backend).mod_pow(args.message, args.exponent, args.modulus))
        case "decrypt":
            keypair = KeyGenerator(args.backend, args.certainty).from_primes(args.p, args.q, args.e)
            print(RSAEngine(keypair, args.backend).decrypt(args.message))
        case "bench":
            config = bench.BenchmarkConfig(bit_lengths=tuple(args.bits),
                                           keypairs=args.keypairs,
                                           messages=args.messages,
                                           seed=args.seed,
                                           certainty=args.certainty,
                                           backends=tuple(args.backend or available_backends()))
            harness = bench.BenchmarkHarness(config)
            try:
                harness.run()
            finally:
                print(bench.format_report(harness.records))


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run, and map failures onto exit status 1."""
    args = corep.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    try:
        run(args)
    except (RSALabError, ValueError, RuntimeError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
