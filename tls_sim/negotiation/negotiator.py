"""
Negotiation

One rank-based resolution routine, used for both protocol versions and
cipher suites.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from .capability import CapabilitySet
from .catalog import CIPHER_CATALOG, VERSION_CATALOG, CipherSuite, Version

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class NegotiationResult(Generic[T]):
    """
    Either Selected(value) or NoAgreement.
    """
    agreed: bool
    value: Optional[T] = None

    @staticmethod
    def selected(value: T) -> "NegotiationResult[T]":
        return NegotiationResult(agreed=True, value=value)

    @staticmethod
    def no_agreement() -> "NegotiationResult[T]":
        return NegotiationResult(agreed=False, value=None)


def resolve(
    client_set: CapabilitySet[T],
    server_set: CapabilitySet[T],
    rank: Callable[[T], int],
) -> NegotiationResult[T]:
    """
    Pick the highest-ranked entry both parties support.
    
    Args:
        client_set: Client's declared capabilities
        server_set: Server's declared capabilities
        rank: Preference rank of an entry (unique per entry)
    
    Returns:
        Selected(best common entry), or NoAgreement when the sets are disjoint
    """
    common = client_set.entries & server_set.entries
    if not common:
        return NegotiationResult.no_agreement()
    return NegotiationResult.selected(max(common, key=rank))


def negotiate_version(
    client_set: CapabilitySet[Version],
    server_set: CapabilitySet[Version],
) -> NegotiationResult[Version]:
    result = resolve(client_set, server_set, VERSION_CATALOG.rank)
    logger.info("Version negotiation: %s", result.value if result.agreed else "no agreement")
    return result


def negotiate_cipher(
    client_set: CapabilitySet[CipherSuite],
    server_set: CapabilitySet[CipherSuite],
) -> NegotiationResult[CipherSuite]:
    result = resolve(client_set, server_set, CIPHER_CATALOG.rank)
    logger.info("Cipher negotiation: %s", result.value if result.agreed else "no agreement")
    return result
