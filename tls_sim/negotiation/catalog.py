"""
Preference Catalogs

Fixed, ordered reference lists of the protocol versions and cipher suites the
simulator knows about. Each entry has a unique preference rank; higher ranks
win negotiation. The catalogs are built once at import and never mutated.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Iterator, Tuple, TypeVar

from ..common.exceptions import InvalidSelection

T = TypeVar("T")


class Version(Enum):
    """Protocol versions, weakest to strongest."""
    TLS_1_0 = "TLS 1.0"
    TLS_1_1 = "TLS 1.1"
    TLS_1_2 = "TLS 1.2"
    TLS_1_3 = "TLS 1.3"

    @property
    def rank(self) -> int:
        return list(Version).index(self)

    def __str__(self) -> str:
        return self.value


class CipherSuite(Enum):
    """Cipher suites as (name, strength rank, key length in bytes)."""
    CHACHA20_POLY1305 = ("CHACHA20-POLY1305", 3, 32)
    AES_256_GCM = ("AES-256-GCM", 2, 32)
    AES_128_GCM = ("AES-128-GCM", 1, 16)
    DES_CBC3_SHA = ("DES-CBC3-SHA", 0, 24)

    def __init__(self, suite_name: str, strength: int, key_length: int):
        self.suite_name = suite_name
        self.strength = strength
        self.key_length = key_length

    @property
    def rank(self) -> int:
        return self.strength

    def __str__(self) -> str:
        return self.suite_name


@dataclass(frozen=True)
class Catalog(Generic[T]):
    """
    An ordered, read-only list of negotiable entries.
    
    `entries` is the display order used for menus; `ranking` maps an entry to
    its preference rank.
    """
    label: str
    entries: Tuple[T, ...]
    ranking: Callable[[T], int]

    def rank(self, entry: T) -> int:
        return self.ranking(entry)

    def entry_for(self, choice: int) -> T:
        """
        Map a 1-based menu number to its entry.
        
        Raises:
            InvalidSelection: If the number is outside the menu
        """
        if not 1 <= choice <= len(self.entries):
            raise InvalidSelection(
                f"Choice {choice} is outside 1..{len(self.entries)} for {self.label}"
            )
        return self.entries[choice - 1]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[T]:
        return iter(self.entries)


@dataclass(frozen=True)
class PreferenceCatalog:
    versions: Catalog[Version]
    ciphers: Catalog[CipherSuite]


VERSION_CATALOG: Catalog[Version] = Catalog(
    label="TLS versions",
    entries=tuple(Version),
    ranking=lambda v: v.rank,
)

CIPHER_CATALOG: Catalog[CipherSuite] = Catalog(
    label="cipher suites",
    entries=tuple(CipherSuite),
    ranking=lambda c: c.rank,
)

PREFERENCE_CATALOG = PreferenceCatalog(versions=VERSION_CATALOG, ciphers=CIPHER_CATALOG)
