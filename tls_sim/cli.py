#!/usr/bin/env python3
"""
TLS Handshake Simulator CLI

Asks the operator which versions and cipher suites each party supports (or
takes them from flags), runs one handshake attempt and prints the outcome.
"""

import argparse
import logging
import sys
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .common.config import Settings, load_settings
from .common.exceptions import ConfigurationError
from .common.protocol import HandshakeReport
from .common.utils import parse_choices
from .crypto.dh import KeyExchangeEngine
from .handshake import CLIENT, SERVER, HandshakeOrchestrator
from .negotiation.capability import CapabilitySet, declare
from .negotiation.catalog import Catalog
from .storage.transcript import TranscriptManager


class PromptCapabilityProvider:
    """
    Collaborator that asks the operator for each party's capabilities.
    
    Preset choices keyed by (party, catalog label) skip the prompt.
    """

    def __init__(
        self,
        presets: Optional[Dict[Tuple[str, str], Sequence[int]]] = None,
        input_fn: Optional[Callable[[str], str]] = None,
        output_fn: Optional[Callable[[str], None]] = None,
    ):
        self.presets = dict(presets or {})
        self.input_fn = input_fn or input
        self.output_fn = output_fn or print

    def request_capability_set(self, party_label: str, catalog: Catalog) -> CapabilitySet:
        key = (party_label, catalog.label)
        if key in self.presets:
            return declare(party_label, catalog, self.presets[key])

        self.output_fn(f"\nAvailable {catalog.label} for {party_label}:")
        for i, entry in enumerate(catalog, start=1):
            self.output_fn(f"  {i}. {entry}")

        answer = self.input_fn(
            f"  [?] Enter numbers for {party_label}'s supported {catalog.label} (comma-separated): "
        )
        return declare(party_label, catalog, parse_choices(answer))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Simulate TLS version/cipher negotiation and a DH key exchange"
    )
    parser.add_argument("--client-versions", help="Client's versions as menu numbers, e.g. 1,2,3")
    parser.add_argument("--server-versions", help="Server's versions as menu numbers")
    parser.add_argument("--client-ciphers", help="Client's cipher suites as menu numbers")
    parser.add_argument("--server-ciphers", help="Server's cipher suites as menu numbers")
    parser.add_argument("--seed", type=int, help="Seed for deterministic prime/exponent selection")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument("--save-transcript", action="store_true", help="Append the report to the transcript")
    parser.add_argument("--transcript-dir", help="Transcript directory")
    return parser


def presets_from_args(args: argparse.Namespace) -> Dict[Tuple[str, str], List[int]]:
    presets = {}
    flags = [
        (CLIENT, "TLS versions", args.client_versions),
        (SERVER, "TLS versions", args.server_versions),
        (CLIENT, "cipher suites", args.client_ciphers),
        (SERVER, "cipher suites", args.server_ciphers),
    ]
    for party, label, value in flags:
        if value is not None:
            presets[(party, label)] = parse_choices(value)
    return presets


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Overlay CLI flags on top of environment settings."""
    overrides = {}
    if args.seed is not None:
        overrides['seed'] = args.seed
    if args.log_level:
        overrides['log_level'] = args.log_level
    if args.save_transcript:
        overrides['save_transcript'] = True
    if args.transcript_dir:
        overrides['transcript_dir'] = args.transcript_dir
    if not overrides:
        return settings
    try:
        return Settings(**{**settings.model_dump(), **overrides})
    except ValueError as e:
        raise ConfigurationError(f"Invalid option: {e}")


def print_report(report: HandshakeReport, output_fn: Callable[[str], None] = print):
    if report.version:
        output_fn(f"  [✓] Negotiated TLS Version: {report.version}")
    if report.cipher:
        output_fn(f"  [✓] Selected Cipher Suite: {report.cipher}")

    if not report.succeeded:
        output_fn(f"\n[!] Handshake failed at {report.failed_at} gate: {report.reason.value}")
        return

    output_fn(f"  [✓] DH parameters: p={report.prime}, g={report.generator}")
    output_fn(f"  [✓] Shared Secret Established: {report.shared_secret}")
    output_fn(f"  [✓] Session key fingerprint: {report.session_key_fingerprint}")
    output_fn("\n[✓] TLS Handshake Completed Successfully")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = apply_overrides(load_settings(), args)
    except ConfigurationError as e:
        print(f"[!] {e}")
        return 2

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("=" * 70)
    print("  TLS HANDSHAKE SIMULATION")
    print("=" * 70)

    provider = PromptCapabilityProvider(presets=presets_from_args(args))
    engine = KeyExchangeEngine(rng=settings.make_rng())
    report = HandshakeOrchestrator(provider, engine=engine).run()

    print("\n[*] Result")
    print_report(report)

    if settings.save_transcript:
        transcript = TranscriptManager(settings.transcript_dir)
        transcript.append_report(report)
        print(f"[*] Report appended to {transcript.transcript_path}")

    return 0 if report.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
