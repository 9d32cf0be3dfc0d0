"""
Handshake Orchestrator

Runs one handshake attempt through its gates:
1. Protocol version negotiation
2. Cipher suite selection
3. Ephemeral DH key exchange and session key derivation

Each gate either advances the state machine or fails the attempt with a
specific reason. Nothing is retried.
"""

import logging
from typing import Dict, Optional

from .common.exceptions import (
    HandshakeSimException, KeyExchangeMismatch, NoCommonCipher, NoCommonVersion,
    NoPrimitiveRootFound, ProtocolError,
)
from .common.protocol import FailureReason, HandshakeReport, HandshakeState
from .common.utils import now_ms
from .crypto.dh import KeyExchangeEngine, KeyExchangeOutcome
from .crypto.kdf import derive_session_key, key_fingerprint
from .negotiation.capability import CapabilityProvider
from .negotiation.catalog import PREFERENCE_CATALOG, CipherSuite, PreferenceCatalog, Version
from .negotiation.negotiator import resolve

logger = logging.getLogger(__name__)

CLIENT = "Client"
SERVER = "Server"

TRANSITIONS = {
    HandshakeState.START: (HandshakeState.VERSION_NEGOTIATED, HandshakeState.FAILED),
    HandshakeState.VERSION_NEGOTIATED: (HandshakeState.CIPHER_NEGOTIATED, HandshakeState.FAILED),
    HandshakeState.CIPHER_NEGOTIATED: (HandshakeState.KEY_EXCHANGED, HandshakeState.FAILED),
    HandshakeState.KEY_EXCHANGED: (HandshakeState.COMPLETED,),
    HandshakeState.COMPLETED: (),
    HandshakeState.FAILED: (),
}

# exception type -> (reason, gate)
FAILURES: Dict[type, tuple] = {
    NoCommonVersion: (FailureReason.NO_COMMON_VERSION, "version"),
    NoCommonCipher: (FailureReason.NO_COMMON_CIPHER, "cipher"),
    NoPrimitiveRootFound: (FailureReason.NO_PRIMITIVE_ROOT, "key_exchange"),
    KeyExchangeMismatch: (FailureReason.KEY_EXCHANGE_MISMATCH, "key_exchange"),
}


class HandshakeOrchestrator:
    """
    Sequences negotiation and key exchange for a single handshake attempt.
    
    All state is local to the instance; create a new orchestrator for every
    attempt.
    """

    def __init__(
        self,
        provider: CapabilityProvider,
        engine: Optional[KeyExchangeEngine] = None,
        catalog: PreferenceCatalog = PREFERENCE_CATALOG,
    ):
        """
        Args:
            provider: Collaborator supplying each party's capability sets
            engine: Key exchange engine (a default one with system randomness
                is created when omitted)
            catalog: Version and cipher catalogs
        """
        self.provider = provider
        self.engine = engine or KeyExchangeEngine()
        self.catalog = catalog

        self.state = HandshakeState.START
        self.version: Optional[Version] = None
        self.cipher: Optional[CipherSuite] = None
        self.outcome: Optional[KeyExchangeOutcome] = None
        self.session_key: Optional[bytes] = None

    def transition(self, new_state: HandshakeState):
        """
        Move the state machine forward.
        
        Raises:
            ProtocolError: If the transition is not allowed from the current state
        """
        if new_state not in TRANSITIONS[self.state]:
            raise ProtocolError(f"Illegal transition {self.state.value} -> {new_state.value}")
        logger.debug("State %s -> %s", self.state.value, new_state.value)
        self.state = new_state

    def run(self) -> HandshakeReport:
        """
        Run the handshake to a terminal state.
        
        Returns:
            HandshakeReport (COMPLETED, or FAILED with reason and gate)
        
        Raises:
            ProtocolError: If this orchestrator has already run
        """
        if self.state != HandshakeState.START:
            raise ProtocolError("Handshake attempt already ran; create a new orchestrator")

        try:
            self.phase1_version()
            self.phase2_cipher()
            self.phase3_key_exchange()
        except HandshakeSimException as e:
            failure = FAILURES.get(type(e))
            if failure is None:
                raise
            reason, gate = failure
            self.transition(HandshakeState.FAILED)
            logger.warning("Handshake failed at %s gate: %s (%s)", gate, reason.value, e)
            return self.report(reason=reason, failed_at=gate)

        self.transition(HandshakeState.COMPLETED)
        logger.info("Handshake completed: %s / %s", self.version, self.cipher)
        return self.report()

    def phase1_version(self):
        """Phase 1: Protocol version negotiation."""
        versions = self.catalog.versions
        client_versions = self.provider.request_capability_set(CLIENT, versions)
        server_versions = self.provider.request_capability_set(SERVER, versions)

        result = resolve(client_versions, server_versions, versions.rank)
        if not result.agreed:
            raise NoCommonVersion("No common TLS version")

        self.version = result.value
        logger.info("Negotiated TLS version: %s", self.version)
        self.transition(HandshakeState.VERSION_NEGOTIATED)

    def phase2_cipher(self):
        """Phase 2: Cipher suite selection."""
        ciphers = self.catalog.ciphers
        client_ciphers = self.provider.request_capability_set(CLIENT, ciphers)
        server_ciphers = self.provider.request_capability_set(SERVER, ciphers)

        result = resolve(client_ciphers, server_ciphers, ciphers.rank)
        if not result.agreed:
            raise NoCommonCipher("No common cipher suite")

        self.cipher = result.value
        logger.info("Selected cipher suite: %s", self.cipher)
        self.transition(HandshakeState.CIPHER_NEGOTIATED)

    def phase3_key_exchange(self):
        """Phase 3: Ephemeral DH and session key derivation."""
        outcome = self.engine.exchange()
        self.outcome = outcome

        if not outcome.agree:
            raise KeyExchangeMismatch("Client and server derived different shared secrets")

        context = f"{self.version}|{self.cipher}".encode('utf-8')
        self.session_key = derive_session_key(outcome.shared_secret, self.cipher, context)
        logger.info("Shared secret established (p=%d, g=%d)", outcome.params.p, outcome.params.g)
        self.transition(HandshakeState.KEY_EXCHANGED)

    def report(self, reason: Optional[FailureReason] = None, failed_at: Optional[str] = None) -> HandshakeReport:
        params = self.outcome.params if self.outcome else None
        return HandshakeReport(
            state=self.state,
            reason=reason,
            failed_at=failed_at,
            version=str(self.version) if self.version is not None else None,
            cipher=str(self.cipher) if self.cipher is not None else None,
            prime=params.p if params else None,
            generator=params.g if params else None,
            shared_secret=self.outcome.shared_secret if self.outcome and self.outcome.agree else None,
            session_key_fingerprint=key_fingerprint(self.session_key) if self.session_key else None,
            timestamp=now_ms(),
        )


def run_handshake(
    provider: CapabilityProvider,
    engine: Optional[KeyExchangeEngine] = None,
    catalog: PreferenceCatalog = PREFERENCE_CATALOG,
) -> HandshakeReport:
    """Run a single handshake attempt with a fresh orchestrator."""
    return HandshakeOrchestrator(provider, engine=engine, catalog=catalog).run()
