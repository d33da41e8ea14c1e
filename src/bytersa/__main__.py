"""The Command Line Interface for the utility.

Generates a fresh key pair, prints it, then encrypts and decrypts every message given on the command line byte by
byte, printing the ciphertext numbers and the recovered text.

Typical usage example:

    bytersa "Hello, RSA!"
    OR
    python -m bytersa --seed 42 "first message" "second message"
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import os
import sys
import typing

import bytersa
from bytersa import keygen
from bytersa.randsrc import RandomSource

logger = logging.getLogger("bytersa")

corep = argparse.ArgumentParser(prog="bytersa", description="Textbook RSA, one byte at a time.")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {bytersa.__version__}")
corep.add_argument("--verbose", "-V", action="store_true", help="Enable debug logging on stderr")
corep.add_argument("--low", type=int, default=keygen.DEFAULT_LOW, help="Inclusive lower bound for the primes.")
corep.add_argument("--high", type=int, default=keygen.DEFAULT_HIGH, help="Exclusive upper bound for the primes.")
corep.add_argument("--seed", type=int, help="Seed for the random source. Taken from the clock if omitted.")
corep.add_argument("messages", nargs="*", metavar="message", help="Message to encrypt and decrypt.")


def fail(text: str) -> typing.NoReturn:
    """Report a fatal error and exit with status 1."""
    print(f"Error: {text}", file=sys.stderr)
    sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    """Core CLI entry point."""
    args = corep.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.captureWarnings(True)

    source = RandomSource(args.seed)
    logger.debug("Random source seeded with %d.", source.seed)
    try:
        kp = keygen.generate_key_pair(args.low, args.high, source)
    except ValueError as exc:
        fail(f"invalid prime range: {exc}")
    except RuntimeError as exc:
        fail(str(exc))

    print(f"p = {kp.p}\nq = {kp.q}\nn = {kp.n}\nphi = {kp.phi}\ne = {kp.e}\nd = {kp.d}\n")

    if not args.messages:
        print(f"Use: {corep.prog} \"message to encrypt\"")
        return

    for message in args.messages:
        try:
            # Raw argv bytes, undecodable ones included.
            ciph = kp.encrypt(os.fsencode(message))
            clear = kp.decrypt(ciph)
        except MemoryError:
            fail("out of memory while processing message.")
        print("Ciphertext (numbers):")
        print(" ".join(str(value) for value in ciph))
        print()
        print("Decrypted message:")
        sys.stdout.flush()
        sys.stdout.buffer.write(clear + b"\n")
        sys.stdout.buffer.flush()
        print()


if __name__ == "__main__":
    main()
