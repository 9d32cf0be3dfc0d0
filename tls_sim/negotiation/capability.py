"""
Capability Sets

A capability set is the unordered subset of a catalog one party declares it
supports for a single handshake attempt.
"""

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Generic, Iterable, Protocol, Sequence, Tuple, TypeVar

from ..common.exceptions import InvalidSelection
from .catalog import Catalog

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CapabilitySet(Generic[T]):
    """Entries one party supports. Never mutated after declaration."""
    party: str
    entries: FrozenSet[T]

    def __contains__(self, entry) -> bool:
        return entry in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)


def declare(party: str, catalog: Catalog[T], choices: Iterable[int]) -> CapabilitySet[T]:
    """
    Build a party's capability set from 1-based menu numbers.
    
    Out-of-range choices are dropped with a warning; an empty set is a valid
    result.
    
    Args:
        party: Human-readable party label ("Client", "Server")
        catalog: Catalog the choices index into
        choices: Menu numbers picked by the party
    
    Returns:
        Validated CapabilitySet
    """
    entries = set()
    for choice in choices:
        try:
            entries.add(catalog.entry_for(choice))
        except InvalidSelection as e:
            logger.warning("%s: discarding selection: %s", party, e)

    capability = CapabilitySet(party=party, entries=frozenset(entries))
    logger.debug(
        "%s declared %s: %s",
        party, catalog.label, ", ".join(str(e) for e in catalog if e in capability) or "<none>"
    )
    return capability


class CapabilityProvider(Protocol):
    """
    External collaborator that supplies each party's capabilities.
    
    How the selection is obtained (prompt, config, peer message) is up to
    the implementation.
    """

    def request_capability_set(self, party_label: str, catalog: Catalog[T]) -> CapabilitySet[T]:
        ...


class StaticCapabilityProvider:
    """
    Provider backed by preconfigured menu numbers.
    
    `choices` is keyed by (party label, catalog label), e.g.
    ("Client", "TLS versions"). Missing keys declare an empty set.
    """

    def __init__(self, choices: Dict[Tuple[str, str], Sequence[int]]):
        self.choices = dict(choices)
        self.requests = []

    def request_capability_set(self, party_label: str, catalog: Catalog[T]) -> CapabilitySet[T]:
        self.requests.append((party_label, catalog.label))
        return declare(party_label, catalog, self.choices.get((party_label, catalog.label), ()))
