"""Textbook RSA in an Academic Sense.

Provides the number-theory core of RSA: modular arithmetic on a 64-bit word, deterministic Miller-Rabin primality
testing, prime and key pair generation from an injectable random source, and a byte-wise cipher. Not suitable for
protecting anything.

Typical usage example:

    kp = generate_key_pair(1000, 10000)
    c = kp.encrypt("Hi there!")
    r = kp.decrypt(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from bytersa.arith import gcd
from bytersa.arith import mod_inverse
from bytersa.arith import mul_mod
from bytersa.arith import pow_mod
from bytersa.cipher import decrypt_byte
from bytersa.cipher import decrypt_message
from bytersa.cipher import encrypt_byte
from bytersa.cipher import encrypt_message
from bytersa.keygen import check_prime
from bytersa.keygen import generate_key_pair
from bytersa.keygen import generate_prime
from bytersa.keygen import KeyGenerationError
from bytersa.keygen import KeyPair
from bytersa.randsrc import RandomSource

__version__ = "0.0.1"
__all__ = [
    "KeyPair",
    "KeyGenerationError",
    "RandomSource",
    "mul_mod",
    "pow_mod",
    "gcd",
    "mod_inverse",
    "check_prime",
    "generate_prime",
    "generate_key_pair",
    "encrypt_byte",
    "decrypt_byte",
    "encrypt_message",
    "decrypt_message",
]
