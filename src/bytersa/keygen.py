"""Core Key Generation Utility, focusing on the generation of small random primes and the key pair built on them.

Primes are sampled from an explicit range and confirmed with a Miller-Rabin test using fixed witness sets, which is
deterministic for every value that fits the 64-bit arithmetic word. Both primes are kept below 2**32 so the modulus
does as well.

Typical usage example:

    kp = generate_key_pair(1000, 10000, RandomSource(42))
    c = kp.encrypt("Hi there!")
    r = kp.decrypt(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from collections.abc import Iterable
import logging
import typing

from bytersa import arith
from bytersa import cipher
from bytersa.randsrc import RandomSource

logger = logging.getLogger(__name__)

DEFAULT_LOW: int = 1000
DEFAULT_HIGH: int = 10000
DEFAULT_PUB: int = 65537
MAX_PRIME_BOUND: int = 1 << (arith.WORD_BITS // 2)

# Deterministic for all n < 4 759 123 141.
DEFAULT_WITNESSES: tuple[int, ...] = (2, 7, 61)
_DEFAULT_WITNESS_CAP: int = 4_759_123_141
# Deterministic for all n < 3.3 * 10**24, so the whole word.
WIDE_WITNESSES: tuple[int, ...] = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)
_SMALL_PRIMES: tuple[int, ...] = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53, 59, 61, 67, 71)


class KeyGenerationError(RuntimeError):
    """A key pair invariant could not be established."""


class KeyPair(typing.NamedTuple):
    """An immutable RSA key pair, together with the values it was derived from.

    Attributes:
        p: The first prime.
        q: The second prime, distinct from `p`.
        n: The modulus, `p * q`.
        phi: Euler's totient of `n`, `(p - 1) * (q - 1)`.
        e: The public exponent, coprime to `phi`.
        d: The private exponent, `e * d % phi == 1`.
    """
    p: int
    q: int
    n: int
    phi: int
    e: int
    d: int

    def encrypt(self, message: bytes | str) -> tuple[int, ...]:
        """Encrypts `message` byte-wise under the public half of the pair."""
        return cipher.encrypt_message(message, self.e, self.n)

    def decrypt(self, ciphertext: Iterable[int]) -> bytes:
        """Recovers the plaintext bytes from `ciphertext` with the private exponent."""
        return cipher.decrypt_message(ciphertext, self.d, self.n)


def _trial_division(no: int) -> bool:
    """Check the provided `no` against the known small primes.

    Runs a fast pre-check before Miller-Rabin by using modulo division on our known frequent primes.

    Args:
         no: The number to check. Must be >= 2.

    Returns:
        False if `no` cannot be prime, True otherwise.
    """
    for prime in _SMALL_PRIMES:
        if prime * prime > no:
            return True
        if no % prime == 0:
            return False
    return True


def _miller_rabin_round(a: int, n: int, d: int, s: int) -> bool:
    """Runs a single witness round, returns False if `a` proves `n` composite."""
    x = arith.pow_mod(a, d, n)
    if x == 1 or x == n - 1:
        return True
    for _ in range(1, s):
        x = arith.mul_mod(x, x, n)
        if x == n - 1:
            return True
    return False


def _miller_rabin(n: int, witnesses: Iterable[int]) -> bool:
    """Perform Miller-Rabin primality test against a fixed set of witnesses.

    Decomposes `n - 1 = d * 2**s` with `d` odd and runs one round per witness. Witnesses >= `n` are skipped.

    Args:
        n: Odd integer > 3 to be tested.
        witnesses: The bases to test against.

    Returns:
        True if no witness proves `n` composite, False otherwise.
    """
    d = n - 1
    s = 0
    while d & 1 == 0:
        d >>= 1
        s += 1
    for a in witnesses:
        if a >= n:
            continue
        if not _miller_rabin_round(a, n, d, s):
            return False
    return True


def check_prime(candidate: int, witnesses: Iterable[int] | None = None) -> bool:
    """Performs a composite Primality test, using a short trial division before a Miller-Rabin test.

    Args:
        candidate: The candidate prime to test. Must not exceed `arith.WORD_MAX`.
        witnesses: The Miller-Rabin bases to use.
            If not provided, uses `DEFAULT_WITNESSES` below 4 759 123 141 and `WIDE_WITNESSES` above it.

    Returns:
        True if `candidate` is prime, False otherwise. Custom `witnesses` may turn this into "probably prime".

    Raises:
        ValueError: If `candidate` survives trial division but exceeds the arithmetic word.
    """
    if candidate <= 3:
        return candidate in (2, 3)
    if candidate % 2 == 0:
        return False
    if not _trial_division(candidate):
        return False
    if witnesses is None:
        witnesses = DEFAULT_WITNESSES if candidate < _DEFAULT_WITNESS_CAP else WIDE_WITNESSES
    return _miller_rabin(candidate, witnesses)


def generate_prime(low: int, high: int, source: RandomSource, max_attempts: int | None = None) -> int:
    """Samples odd candidates from `[low, high)` until one is prime.

    Even draws are bumped up by one. Draws pushed out of the range that way are discarded.

    Args:
        low: Inclusive lower bound of the range.
        high: Exclusive upper bound of the range.
        source: The random source to draw candidates from.
        max_attempts: Number of draws after which to give up. Unbounded by default.

    Returns:
        A prime from the range.

    Raises:
        ValueError: If the range is degenerate and its only value is not prime.
        RuntimeError: If `max_attempts` draws produced no prime.
    """
    attempts = 0
    while max_attempts is None or attempts < max_attempts:
        attempts += 1
        candidate = source.next(low, high)
        if high <= low + 1:
            if check_prime(candidate):
                return candidate
            raise ValueError(f"Degenerate range [{low}, {high}) holds no prime.")
        candidate |= 1
        if candidate >= high:
            continue
        if check_prime(candidate):
            logger.debug("Found prime %d after %d draws.", candidate, attempts)
            return candidate
    raise RuntimeError(f"Run {max_attempts} draws with no prime found in [{low}, {high}). Check the range.")


def _select_exponent(phi: int, pub: int) -> int:
    """Picks `pub` if usable, otherwise the smallest odd exponent coprime to `phi`."""
    if pub < phi and arith.gcd(pub, phi) == 1:
        return pub
    logger.debug("Public exponent %d unusable for phi %d, scanning odd exponents.", pub, phi)
    e = 3
    while e < phi and arith.gcd(e, phi) != 1:
        e += 2
    if e >= phi:
        raise KeyGenerationError(f"No public exponent below {phi} is coprime to phi.")
    return e


def generate_key_pair(low: int = DEFAULT_LOW,
                      high: int = DEFAULT_HIGH,
                      source: RandomSource | None = None,
                      pub: int = DEFAULT_PUB) -> KeyPair:
    """Generates an RSA key pair from two distinct primes in `[low, high)`.

    Args:
        low: Inclusive lower bound for the primes. Defaults to 1000. Must be >= 2.
        high: Exclusive upper bound for the primes. Defaults to 10000. Must be <= 2**32.
        source: The random source to use. A fresh, clock-seeded one if not provided.
        pub: The preferred public exponent. Defaults to 65537.
            Replaced by the smallest odd exponent coprime to phi if it is not usable.

    Returns:
        The generated key pair.

    Raises:
        ValueError: If the range has fewer than two values or exceeds the word size.
        RuntimeError: If the draws yield no prime, or only one distinct prime, within the attempt cap.
            The cap scales with the bit length of `high`.
        KeyGenerationError: If no valid public or private exponent exists. Indicates a broken invariant.
    """
    if low < 2 or high > MAX_PRIME_BOUND:
        raise ValueError(f"Prime range must lie within [2, {MAX_PRIME_BOUND}].")
    if high <= low + 1:
        raise ValueError("Prime range must span at least two values.")
    if source is None:
        source = RandomSource()
    rep_cap = 20 * high.bit_length()
    p = generate_prime(low, high, source, rep_cap)
    for _ in range(rep_cap):
        q = generate_prime(low, high, source, rep_cap)
        if q != p:
            break
    else:
        raise RuntimeError(f"Run {rep_cap} draws with no second distinct prime found in [{low}, {high}).")
    n = p * q
    phi = (p - 1) * (q - 1)
    e = _select_exponent(phi, pub)
    d = arith.mod_inverse(e, phi)
    if d is None:
        raise KeyGenerationError("Impossible to calculate the modular inverse.")
    logger.debug("Generated key pair with n=%d, e=%d.", n, e)
    return KeyPair(p, q, n, phi, e, d)
