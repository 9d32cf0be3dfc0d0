"""
Runtime configuration.

Values come from the environment (optionally seeded from a .env file) and are
validated into a Settings model. CLI flags override them in tls_sim.cli.
"""

import os
import random
import secrets
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    """Validated simulator settings."""
    seed: Optional[int] = Field(None, description="Seed for a deterministic RNG")
    log_level: str = Field("WARNING", description="Root logging level")
    transcript_dir: str = Field("transcripts", description="Where handshake reports are appended")
    save_transcript: bool = Field(False, description="Append every report to the transcript")

    @field_validator('log_level')
    @classmethod
    def check_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return value

    def make_rng(self):
        """
        Build the randomness source for prime and exponent selection.
        
        Returns:
            random.Random seeded with `seed`, or secrets.SystemRandom when unset
        """
        if self.seed is None:
            return secrets.SystemRandom()
        return random.Random(self.seed)


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Load settings from the environment.
    
    Args:
        env_file: Optional path to a .env file (defaults to dotenv's lookup)
    
    Returns:
        Settings instance
    
    Raises:
        ConfigurationError: If any value fails validation
    """
    load_dotenv(env_file)

    raw = {
        'log_level': os.getenv('TLS_SIM_LOG_LEVEL', 'WARNING'),
        'transcript_dir': os.getenv('TLS_SIM_TRANSCRIPT_DIR', 'transcripts'),
        'save_transcript': os.getenv('TLS_SIM_SAVE_TRANSCRIPT', 'false'),
    }
    seed = os.getenv('TLS_SIM_SEED')
    if seed:
        raw['seed'] = seed

    try:
        return Settings(**raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")
