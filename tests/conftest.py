import pytest

ENV_VARS = (
    "TLS_SIM_SEED",
    "TLS_SIM_LOG_LEVEL",
    "TLS_SIM_TRANSCRIPT_DIR",
    "TLS_SIM_SAVE_TRANSCRIPT",
)


class StubRng:
    """Deterministic stand-in for random.Random: fixed prime, scripted exponents."""

    def __init__(self, prime, exponents=()):
        self.prime = prime
        self.exponents = list(exponents)

    def choice(self, seq):
        assert self.prime in seq
        return self.prime

    def randint(self, a, b):
        value = self.exponents.pop(0)
        assert a <= value <= b
        return value


@pytest.fixture
def stub_rng():
    return StubRng


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run with no TLS_SIM_* variables and no stray .env file."""
    for name in ENV_VARS:
        # setenv first so undo removes anything load_dotenv adds
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path
