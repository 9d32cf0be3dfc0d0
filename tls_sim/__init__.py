"""
TLS Handshake Simulator

A console-based simulation of the negotiation phase of a TLS-style handshake:
- Protocol version negotiation
- Cipher suite selection
- Ephemeral Diffie-Hellman key exchange over a small prime field
- Session key derivation for the negotiated cipher suite
"""

__version__ = "1.0.0"
