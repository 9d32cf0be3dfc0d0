"""
Handshake Transcript

Append-only JSON-lines log of handshake reports, one line per attempt.
"""

import hashlib
import logging
import os
from typing import List

from ..common.protocol import HandshakeReport, deserialize_report, serialize_report

logger = logging.getLogger(__name__)


class TranscriptManager:
    """
    Manages the handshake transcript file.
    """

    def __init__(self, transcript_dir: str = "transcripts", filename: str = "handshakes.jsonl"):
        """
        Args:
            transcript_dir: Directory to store the transcript
            filename: Transcript file name inside transcript_dir
        """
        self.transcript_dir = transcript_dir
        self.transcript_path = os.path.join(transcript_dir, filename)

        os.makedirs(transcript_dir, exist_ok=True)

    def append_report(self, report: HandshakeReport):
        """
        Append a report to the transcript.
        
        Args:
            report: Final report of one handshake attempt
        """
        with open(self.transcript_path, 'a', encoding='utf-8') as f:
            f.write(serialize_report(report) + "\n")
        logger.info("Appended %s report to %s", report.state.value, self.transcript_path)

    def load_reports(self) -> List[HandshakeReport]:
        """
        Read every report back, oldest first.
        
        Returns:
            List of reports (empty if the transcript does not exist yet)
        """
        reports = []
        try:
            with open(self.transcript_path, 'r', encoding='utf-8') as f:
                for line in f:
                    if line.strip():
                        reports.append(deserialize_report(line))
        except FileNotFoundError:
            pass
        return reports

    def compute_transcript_hash(self) -> str:
        """
        Compute SHA-256 hash of the entire transcript.
        
        Returns:
            Hex-encoded SHA-256 hash of transcript
        """
        hasher = hashlib.sha256()

        try:
            with open(self.transcript_path, 'r', encoding='utf-8') as f:
                for line in f:
                    hasher.update(line.encode('utf-8'))
        except FileNotFoundError:
            # Empty transcript
            pass

        return hasher.hexdigest()
