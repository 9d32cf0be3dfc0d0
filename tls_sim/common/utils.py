"""
Utility functions for the handshake simulator.
"""

import hashlib
import logging
import time
from typing import List

logger = logging.getLogger(__name__)


def now_ms() -> int:
    """
    Get current Unix timestamp in milliseconds.
    
    Returns:
        Current timestamp in milliseconds
    """
    return int(time.time() * 1000)


def sha256_hex(data: bytes) -> str:
    """
    Compute SHA-256 hash and return as hex string.
    
    Args:
        data: Data to hash
    
    Returns:
        Hex-encoded SHA-256 hash
    """
    return hashlib.sha256(data).hexdigest()


def parse_choices(text: str) -> List[int]:
    """
    Parse a comma-separated list of menu numbers.
    
    Tokens that are not integers are dropped. Range checking is left to
    the catalog, so "0" or "9" are returned as-is.
    
    Args:
        text: Operator input, e.g. "1, 2,3"
    
    Returns:
        Menu numbers in input order
    """
    choices = []
    for token in text.split(','):
        token = token.strip()
        if not token:
            continue
        try:
            choices.append(int(token))
        except ValueError:
            logger.warning("Ignoring non-numeric selection %r", token)
    return choices
