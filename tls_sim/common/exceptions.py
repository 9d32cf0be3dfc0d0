"""
Custom exceptions for the handshake simulator.
"""


class HandshakeSimException(Exception):
    """Base exception for handshake simulator errors."""
    pass


class InvalidSelection(HandshakeSimException):
    """A menu choice does not map to a catalog entry."""
    pass


class NegotiationError(HandshakeSimException):
    """Client and server share no common option."""
    pass


class NoCommonVersion(NegotiationError):
    """No protocol version is supported by both parties."""
    pass


class NoCommonCipher(NegotiationError):
    """No cipher suite is supported by both parties."""
    pass


class KeyExchangeError(HandshakeSimException):
    """Key exchange failed."""
    pass


class NoPrimitiveRootFound(KeyExchangeError):
    """Generator search exhausted every candidate for the chosen prime."""
    pass


class KeyExchangeMismatch(KeyExchangeError):
    """Client and server derived different shared secrets."""
    pass


class ProtocolError(HandshakeSimException):
    """Handshake state machine violation detected."""
    pass


class ConfigurationError(HandshakeSimException):
    """Invalid configuration value."""
    pass
