"""
Session Key Derivation

Turns the DH shared secret into key material sized for the negotiated cipher
suite:
    K = HKDF-SHA256(ikm=big_endian(K_s), salt=context, info="tls-sim " || suite)
"""

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from ..common.utils import sha256_hex
from ..negotiation.catalog import CipherSuite


def secret_to_bytes(shared_secret: int) -> bytes:
    """Big-endian encoding of the shared secret (at least one byte)."""
    byte_length = max(1, (shared_secret.bit_length() + 7) // 8)
    return shared_secret.to_bytes(byte_length, byteorder='big')


def derive_session_key(shared_secret: int, cipher: CipherSuite, context: bytes = b"") -> bytes:
    """
    Derive the session key for a cipher suite.
    
    Args:
        shared_secret: DH shared secret
        cipher: Negotiated cipher suite (fixes the output length)
        context: Optional salt binding the key to the handshake
    
    Returns:
        cipher.key_length bytes of key material
    """
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=cipher.key_length,
        salt=context or None,
        info=b"tls-sim " + cipher.suite_name.encode('ascii'),
    )
    return hkdf.derive(secret_to_bytes(shared_secret))


def key_fingerprint(key: bytes) -> str:
    """Short hex fingerprint for display and transcripts."""
    return sha256_hex(key)[:16]
