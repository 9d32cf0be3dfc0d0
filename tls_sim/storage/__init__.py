"""
Storage for handshake transcripts.
"""

from .transcript import TranscriptManager

__all__ = [
    'TranscriptManager',
]
