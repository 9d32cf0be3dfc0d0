"""
Diffie-Hellman Key Exchange

Ephemeral DH over a small prime field. Parameters are picked fresh for every
exchange from a curated list of small primes, so this is a teaching model and
offers no real security.
"""

import logging
import secrets
from dataclasses import dataclass
from typing import Optional, Tuple

from ..common.exceptions import NoPrimitiveRootFound

logger = logging.getLogger(__name__)


# Curated list, not every prime below 64
CURATED_PRIMES = (61, 53, 47, 43, 41, 37, 31, 29, 23, 19, 17, 13, 11, 7, 5, 3, 2)


def select_prime(rng) -> int:
    """
    Pick a modulus uniformly from CURATED_PRIMES.
    
    Args:
        rng: Randomness source with a `choice` method
    
    Returns:
        Prime p
    """
    return rng.choice(CURATED_PRIMES)


def is_primitive_root(g: int, p: int) -> bool:
    """
    Simplified generator test: g^((p-1)/2) mod p != 1.
    
    This only rules out quadratic residues; it does not check that the order
    of g is exactly p-1.
    """
    return pow(g, (p - 1) // 2, p) != 1


def find_primitive_root(p: int) -> int:
    """
    Return the smallest g in [2, p-1) accepted by is_primitive_root.
    
    Args:
        p: Prime modulus
    
    Returns:
        Generator g
    
    Raises:
        NoPrimitiveRootFound: If no candidate qualifies
    """
    for g in range(2, p - 1):
        if is_primitive_root(g, p):
            return g
    raise NoPrimitiveRootFound(f"No primitive root found for p={p}")


@dataclass(frozen=True)
class PrimeFieldParameters:
    """Public DH parameters (p, g)."""
    p: int
    g: int

    @classmethod
    def generate(cls, rng=None) -> "PrimeFieldParameters":
        """
        Select a prime and its generator.
        
        Raises:
            NoPrimitiveRootFound: If the selected prime has no usable generator
        """
        rng = rng or secrets.SystemRandom()
        p = select_prime(rng)
        g = find_primitive_root(p)
        logger.debug("Selected DH parameters p=%d g=%d", p, g)
        return cls(p=p, g=g)


def generate_keypair(params: PrimeFieldParameters, rng) -> Tuple[int, int]:
    """
    Generate an ephemeral DH keypair.
    
    Args:
        params: Public parameters
        rng: Randomness source with a `randint` method
    
    Returns:
        Tuple of (private_key, public_key)
        private_key: Random integer in range [1, p-2]
        public_key: g^private_key mod p
    """
    private_key = rng.randint(1, params.p - 2)
    public_key = pow(params.g, private_key, params.p)
    return (private_key, public_key)


def compute_shared_secret(private_key: int, peer_public_key: int, p: int) -> int:
    """
    Compute the shared secret using peer's public key.
    
    Returns:
        Shared secret K_s = peer_public_key^private_key mod p
    """
    return pow(peer_public_key, private_key, p)


@dataclass(frozen=True)
class KeyExchangeOutcome:
    agree: bool
    shared_secret: int
    params: PrimeFieldParameters
    client_public: int
    server_public: int


class KeyExchangeEngine:
    """
    Runs both sides of an ephemeral DH exchange and checks they agree.
    """

    def __init__(self, rng=None):
        """
        Args:
            rng: Randomness source (`choice` and `randint`); defaults to
                secrets.SystemRandom
        """
        self.rng = rng or secrets.SystemRandom()

    def generate_params(self) -> PrimeFieldParameters:
        return PrimeFieldParameters.generate(self.rng)

    def exchange(self, params: Optional[PrimeFieldParameters] = None) -> KeyExchangeOutcome:
        """
        Perform one exchange with fresh ephemeral exponents.
        
        Args:
            params: Fixed parameters; generated fresh when omitted
        
        Returns:
            KeyExchangeOutcome (shared_secret is the client's view)
        
        Raises:
            NoPrimitiveRootFound: If parameter generation fails
        """
        if params is None:
            params = self.generate_params()

        client_private, client_public = generate_keypair(params, self.rng)
        server_private, server_public = generate_keypair(params, self.rng)
        logger.debug(
            "Ephemeral exponents a=%d b=%d, public A=%d B=%d",
            client_private, server_private, client_public, server_public
        )

        client_shared = compute_shared_secret(client_private, server_public, params.p)
        server_shared = compute_shared_secret(server_private, client_public, params.p)

        agree = client_shared == server_shared
        if not agree:
            logger.warning(
                "Shared secret mismatch: client=%d server=%d (p=%d g=%d)",
                client_shared, server_shared, params.p, params.g
            )
        return KeyExchangeOutcome(
            agree=agree,
            shared_secret=client_shared,
            params=params,
            client_public=client_public,
            server_public=server_public,
        )
