"""
Capability declaration and version/cipher negotiation.
"""

from .catalog import (
    Version, CipherSuite, Catalog, PreferenceCatalog,
    VERSION_CATALOG, CIPHER_CATALOG, PREFERENCE_CATALOG,
)
from .capability import CapabilitySet, CapabilityProvider, StaticCapabilityProvider, declare
from .negotiator import NegotiationResult, resolve, negotiate_version, negotiate_cipher

__all__ = [
    'Version',
    'CipherSuite',
    'Catalog',
    'PreferenceCatalog',
    'VERSION_CATALOG',
    'CIPHER_CATALOG',
    'PREFERENCE_CATALOG',
    'CapabilitySet',
    'CapabilityProvider',
    'StaticCapabilityProvider',
    'declare',
    'NegotiationResult',
    'resolve',
    'negotiate_version',
    'negotiate_cipher',
]
