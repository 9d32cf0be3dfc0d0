import random

import pytest

from tls_sim.common.config import Settings, load_settings
from tls_sim.common.exceptions import ConfigurationError


def test_defaults(clean_env):
    settings = load_settings(str(clean_env / ".env"))
    assert settings.seed is None
    assert settings.log_level == "WARNING"
    assert settings.transcript_dir == "transcripts"
    assert settings.save_transcript is False


def test_environment_values(clean_env, monkeypatch):
    monkeypatch.setenv("TLS_SIM_SEED", "42")
    monkeypatch.setenv("TLS_SIM_LOG_LEVEL", "debug")
    monkeypatch.setenv("TLS_SIM_SAVE_TRANSCRIPT", "true")
    settings = load_settings(str(clean_env / ".env"))
    assert settings.seed == 42
    assert settings.log_level == "DEBUG"
    assert settings.save_transcript is True


def test_dotenv_file(clean_env):
    env_file = clean_env / ".env"
    env_file.write_text("TLS_SIM_TRANSCRIPT_DIR=out\nTLS_SIM_LOG_LEVEL=info\n")
    settings = load_settings(str(env_file))
    assert settings.transcript_dir == "out"
    assert settings.log_level == "INFO"


def test_invalid_values(clean_env, monkeypatch):
    monkeypatch.setenv("TLS_SIM_LOG_LEVEL", "loud")
    with pytest.raises(ConfigurationError):
        load_settings(str(clean_env / ".env"))

    monkeypatch.setenv("TLS_SIM_LOG_LEVEL", "INFO")
    monkeypatch.setenv("TLS_SIM_SEED", "abc")
    with pytest.raises(ConfigurationError):
        load_settings(str(clean_env / ".env"))


def test_seeded_rng_is_deterministic():
    first = Settings(seed=7).make_rng()
    second = Settings(seed=7).make_rng()
    assert isinstance(first, random.Random)
    assert [first.randint(1, 1000) for _ in range(5)] == [second.randint(1, 1000) for _ in range(5)]
