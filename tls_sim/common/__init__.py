"""
Common utilities, configuration and report definitions.
"""

from .protocol import *
from .utils import now_ms, sha256_hex, parse_choices
from .exceptions import *
from .config import Settings, load_settings

__all__ = [
    'HandshakeState',
    'FailureReason',
    'HandshakeReport',
    'serialize_report',
    'deserialize_report',
    'now_ms',
    'sha256_hex',
    'parse_choices',
    'Settings',
    'load_settings',
]
