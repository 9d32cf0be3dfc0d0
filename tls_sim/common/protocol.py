"""
Handshake state and report definitions using Pydantic.

Reports are serialized to JSON for display and for the transcript log.
"""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field


class HandshakeState(str, Enum):
    START = "Start"
    VERSION_NEGOTIATED = "VersionNegotiated"
    CIPHER_NEGOTIATED = "CipherNegotiated"
    KEY_EXCHANGED = "KeyExchanged"
    COMPLETED = "Completed"
    FAILED = "Failed"


class FailureReason(str, Enum):
    NO_COMMON_VERSION = "NoCommonVersion"
    NO_COMMON_CIPHER = "NoCommonCipher"
    NO_PRIMITIVE_ROOT = "NoPrimitiveRootFound"
    KEY_EXCHANGE_MISMATCH = "KeyExchangeMismatch"


class HandshakeReport(BaseModel):
    """Final outcome of one handshake attempt."""
    type: Literal["handshake_report"] = "handshake_report"
    state: HandshakeState
    reason: Optional[FailureReason] = None
    failed_at: Optional[Literal["version", "cipher", "key_exchange"]] = Field(
        None, description="Gate at which the handshake stopped"
    )
    version: Optional[str] = Field(None, description="Negotiated protocol version")
    cipher: Optional[str] = Field(None, description="Negotiated cipher suite")
    prime: Optional[int] = Field(None, description="DH prime modulus p")
    generator: Optional[int] = Field(None, description="DH generator g")
    shared_secret: Optional[int] = Field(None, description="DH shared secret (client's view)")
    session_key_fingerprint: Optional[str] = Field(None, description="Truncated SHA-256 of the session key")
    timestamp: int = Field(..., description="Unix timestamp in milliseconds")

    @property
    def succeeded(self) -> bool:
        return self.state == HandshakeState.COMPLETED


def serialize_report(report: HandshakeReport) -> str:
    """Serialize a report to a JSON string."""
    return report.model_dump_json()


def deserialize_report(json_str: str) -> HandshakeReport:
    """Parse a JSON string back into a report."""
    return HandshakeReport.model_validate_json(json_str)
