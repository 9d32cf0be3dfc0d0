"""
Key agreement primitives for the handshake simulator.

This package provides:
- Prime field parameter selection (curated primes, generator search)
- Ephemeral Diffie-Hellman key exchange
- HKDF session key derivation sized to the negotiated cipher suite
"""

from .dh import (
    CURATED_PRIMES, select_prime, is_primitive_root, find_primitive_root,
    PrimeFieldParameters, KeyExchangeOutcome, KeyExchangeEngine,
    generate_keypair, compute_shared_secret,
)
from .kdf import derive_session_key, key_fingerprint

__all__ = [
    'CURATED_PRIMES',
    'select_prime',
    'is_primitive_root',
    'find_primitive_root',
    'PrimeFieldParameters',
    'KeyExchangeOutcome',
    'KeyExchangeEngine',
    'generate_keypair',
    'compute_shared_secret',
    'derive_session_key',
    'key_fingerprint',
]
