import pytest

from tls_sim.common.exceptions import ProtocolError
from tls_sim.common.protocol import FailureReason, HandshakeState
from tls_sim.crypto.dh import KeyExchangeEngine, KeyExchangeOutcome, PrimeFieldParameters
from tls_sim.crypto.kdf import derive_session_key, key_fingerprint
from tls_sim.handshake import HandshakeOrchestrator, run_handshake
from tls_sim.negotiation.capability import StaticCapabilityProvider
from tls_sim.negotiation.catalog import CipherSuite

VERSIONS = "TLS versions"
CIPHERS = "cipher suites"


def provider(client_versions, server_versions, client_ciphers=(), server_ciphers=()):
    return StaticCapabilityProvider({
        ("Client", VERSIONS): client_versions,
        ("Server", VERSIONS): server_versions,
        ("Client", CIPHERS): client_ciphers,
        ("Server", CIPHERS): server_ciphers,
    })


class MismatchEngine:
    def exchange(self):
        return KeyExchangeOutcome(
            agree=False,
            shared_secret=4,
            params=PrimeFieldParameters(p=23, g=5),
            client_public=8,
            server_public=19,
        )


def test_version_negotiation_picks_highest_common(stub_rng):
    # client {V1, V2, V3}, server {V2, V3, V4}
    report = run_handshake(provider([1, 2, 3], [2, 3, 4], [1], [1]), engine=KeyExchangeEngine(stub_rng(23, [6, 15])))
    assert report.version == "TLS 1.2"


def test_no_common_version_stops_before_cipher_step():
    p = provider([1], [4], [1], [1])
    report = HandshakeOrchestrator(p, engine=MismatchEngine()).run()
    assert report.state == HandshakeState.FAILED
    assert report.reason == FailureReason.NO_COMMON_VERSION
    assert report.failed_at == "version"
    assert report.version is None and report.cipher is None
    assert p.requests == [("Client", VERSIONS), ("Server", VERSIONS)]


def test_cipher_selected_by_strength(stub_rng):
    # client {AES-128-GCM, AES-256-GCM}, server {AES-256-GCM, CHACHA20-POLY1305}
    report = run_handshake(provider([4], [4], [3, 2], [2, 1]), engine=KeyExchangeEngine(stub_rng(23, [6, 15])))
    assert report.cipher == "AES-256-GCM"


def test_no_common_cipher(stub_rng):
    rng = stub_rng(23, [6, 15])
    report = run_handshake(provider([3, 4], [3], [1], [4]), engine=KeyExchangeEngine(rng))
    assert report.state == HandshakeState.FAILED
    assert report.reason == FailureReason.NO_COMMON_CIPHER
    assert report.failed_at == "cipher"
    assert report.version == "TLS 1.2"
    assert report.prime is None
    # key exchange never drew exponents
    assert rng.exponents == [6, 15]


def test_completed_handshake_reports_shared_secret(stub_rng):
    orchestrator = HandshakeOrchestrator(
        provider([1, 2, 3, 4], [3, 4], [1, 2, 3], [2, 3]),
        engine=KeyExchangeEngine(stub_rng(23, [6, 15])),
    )
    report = orchestrator.run()

    assert report.succeeded
    assert report.state == HandshakeState.COMPLETED
    assert report.reason is None and report.failed_at is None
    assert report.version == "TLS 1.3"
    assert report.cipher == "AES-256-GCM"
    assert (report.prime, report.generator) == (23, 5)
    assert report.shared_secret == 2
    assert orchestrator.outcome.agree

    expected_key = derive_session_key(2, CipherSuite.AES_256_GCM, b"TLS 1.3|AES-256-GCM")
    assert orchestrator.session_key == expected_key
    assert report.session_key_fingerprint == key_fingerprint(expected_key)


def test_key_exchange_mismatch_fails_attempt():
    report = HandshakeOrchestrator(provider([4], [4], [1], [1]), engine=MismatchEngine()).run()
    assert report.state == HandshakeState.FAILED
    assert report.reason == FailureReason.KEY_EXCHANGE_MISMATCH
    assert report.failed_at == "key_exchange"
    assert report.shared_secret is None
    assert report.session_key_fingerprint is None


def test_exhausted_generator_search_fails_attempt(stub_rng):
    report = run_handshake(provider([4], [4], [1], [1]), engine=KeyExchangeEngine(stub_rng(3)))
    assert report.state == HandshakeState.FAILED
    assert report.reason == FailureReason.NO_PRIMITIVE_ROOT
    assert report.failed_at == "key_exchange"
    assert report.cipher == "CHACHA20-POLY1305"


def test_orchestrator_runs_once(stub_rng):
    orchestrator = HandshakeOrchestrator(provider([1], [4]), engine=KeyExchangeEngine(stub_rng(23)))
    orchestrator.run()
    with pytest.raises(ProtocolError):
        orchestrator.run()


def test_state_machine_only_moves_forward():
    orchestrator = HandshakeOrchestrator(provider([], []))
    with pytest.raises(ProtocolError):
        orchestrator.transition(HandshakeState.CIPHER_NEGOTIATED)
    orchestrator.transition(HandshakeState.VERSION_NEGOTIATED)
    with pytest.raises(ProtocolError):
        orchestrator.transition(HandshakeState.START)
    orchestrator.transition(HandshakeState.FAILED)
    with pytest.raises(ProtocolError):
        orchestrator.transition(HandshakeState.COMPLETED)


def test_report_serializes_to_json(stub_rng):
    report = run_handshake(provider([4], [4], [2], [2]), engine=KeyExchangeEngine(stub_rng(23, [6, 15])))
    data = report.model_dump(mode="json")
    assert data["state"] == "Completed"
    assert data["type"] == "handshake_report"
