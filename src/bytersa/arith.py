"""Modular arithmetic over a fixed 64-bit machine word.

Provides the number-theory primitives the rest of the package is built on: overflow-safe modular multiplication,
square-and-multiply exponentiation, greatest common divisor and the modular inverse via the Extended Euclidean
Algorithm. Moduli are bounded by `WORD_MAX`, mimicking the unsigned word a hardware implementation would work with.

Typical usage example:

    c = pow_mod(72, 65537, 3233)
    d = mod_inverse(17, 3120)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
WORD_BITS: int = 64
WORD_MAX: int = (1 << WORD_BITS) - 1


def _check_modulus(mod: int) -> None:
    if not 0 < mod <= WORD_MAX:
        raise ValueError(f"Modulus must be in range [1, {WORD_MAX}]")


def mul_mod(a: int, b: int, mod: int) -> int:
    """Computes `(a * b) % mod` without losing precision.

    Both factors are reduced first, so each fits in a single word. Their product can need up to twice `WORD_BITS`
    bits, therefore it is formed as a double-width intermediate before the final reduction brings it back under
    `mod`. This keeps the result exact for every modulus up to `WORD_MAX`.

    Args:
        a: The first factor.
        b: The second factor.
        mod: The modulus. Must be in range `[1, WORD_MAX]`.

    Returns:
        The product of `a` and `b` modulo `mod`.

    Raises:
        ValueError: If `mod` is outside the supported word range.
    """
    _check_modulus(mod)
    a %= mod
    b %= mod
    wide = a * b  # At most 2 * WORD_BITS bits.
    return wide % mod


def pow_mod(base: int, exp: int, mod: int) -> int:
    """Computes `base**exp % mod` with right-to-left square-and-multiply.

    The modulus is not assumed to be prime.

    Args:
        base: The base. Reduced modulo `mod` before use.
        exp: The exponent. Must be >= 0.
        mod: The modulus. Must be in range `[1, WORD_MAX]`.

    Returns:
        The modular power. Always 1 for `exp == 0` when `mod > 1`, always 0 when `mod == 1`.

    Raises:
        ValueError: If `exp` is negative or `mod` is outside the supported word range.
    """
    _check_modulus(mod)
    if exp < 0:
        raise ValueError("Exponent must be >= 0")
    res = 1 % mod
    base %= mod
    while exp:
        if exp & 1:
            res = mul_mod(res, base, mod)
        base = mul_mod(base, base, mod)
        exp >>= 1
    return res


def gcd(a: int, b: int) -> int:
    """Euclidean algorithm. `gcd(a, 0) == a` and `gcd(0, 0) == 0`."""
    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return a


def eea(a: int, b: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such that a*s0 + b*t0 = r0 = gcd(a, b). Runs as a loop rather than through recursion, so the depth does not
    grow with the size of the inputs.

    Args:
        a: The first natural number.
        b: The second natural number.

    Returns:
        Greatest common divisor of two integers.
        As well as the Bezout coefficients.
    """
    r0, r1 = a, b
    s0, s1, t0, t1 = 1, 0, 0, 1
    while r1 != 0:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    return r0, s0, t0


def mod_inverse(a: int, m: int) -> int | None:
    """Finds the modular inverse of `a` modulo `m`.

    Args:
        a: The value to invert. Negative values are normalised into `[0, m)` first.
        m: The modulus.

    Returns:
        The unique `x` in `[0, m)` with `a * x % m == 1`, or None if `m <= 1` or `gcd(a, m) != 1`.
    """
    if m <= 1:
        return None
    g, s, _ = eea(a % m, m)
    if g != 1:
        return None
    return s % m
