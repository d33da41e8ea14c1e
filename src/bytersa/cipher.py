"""Byte-wise textbook RSA encryption and decryption.

Each plaintext byte is raised to the public exponent on its own, with no padding and no chaining between bytes.
Identical bytes therefore always map to identical numbers, which leaks the byte-frequency profile of the message.
This mode exists for demonstration only.

The modulus must exceed 255 for decryption to recover every byte. This is not checked here; keys produced by
`bytersa.keygen.generate_key_pair` with the default prime range satisfy it.

Typical usage example:

    c = encrypt_message("Hi there!", kp.e, kp.n)
    r = decrypt_message(c, kp.d, kp.n)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from collections.abc import Iterable
import warnings

from bytersa import arith


def encrypt_byte(byte: int, e: int, n: int) -> int:
    """Encrypts a single byte.

    Args:
        byte: The plaintext byte.
        e: The public exponent.
        n: The modulus.

    Returns:
        The ciphertext value, in range `[0, n)`.

    Raises:
        ValueError: If `byte` is not in range `[0, 255]`.
    """
    if not 0 <= byte <= 0xFF:
        raise ValueError("Plaintext value must be a single byte in range [0, 255]")
    return arith.pow_mod(byte, e, n)


def decrypt_byte(value: int, d: int, n: int) -> int:
    """Decrypts a single ciphertext value, keeping only the low 8 bits."""
    return arith.pow_mod(value, d, n) & 0xFF


def encrypt_message(message: bytes | str, e: int, n: int) -> tuple[int, ...]:
    """Encrypts a message one byte at a time.

    Args:
        message: The plaintext. Strings are encoded as UTF-8.
        e: The public exponent.
        n: The modulus.

    Returns:
        One ciphertext value per plaintext byte, in order.
    """
    warnings.warn("Per-byte encryption leaks byte frequencies! Use for demonstration only.", RuntimeWarning)
    if isinstance(message, str):
        message = message.encode("utf-8")
    return tuple(encrypt_byte(byte, e, n) for byte in message)


def decrypt_message(ciphertext: Iterable[int], d: int, n: int) -> bytes:
    """Decrypts a sequence of ciphertext values into a new bytes object."""
    return bytes(decrypt_byte(value, d, n) for value in ciphertext)
