import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"


def get_config() -> dict[str, str]:
    """
    Load configuration from environment variables.
    Called lazily to avoid crashing on import. A missing API key is allowed:
    enrichment then runs on heuristics only.
    """
    return {
        "OPENAI_API_KEY": os.getenv("OPENAI_API_KEY", "").strip(),
        "OPENAI_MODEL": os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL),
        "OPENAI_BASE_URL": os.getenv("OPENAI_BASE_URL", DEFAULT_OPENAI_BASE_URL),
    }


class _Config:
    """Lazy configuration that only validates when values are actually accessed."""

    def __init__(self) -> None:
        self._config: dict[str, str] | None = None

    def _load(self) -> dict[str, str]:
        if self._config is None:
            self._config = get_config()
        return self._config

    @property
    def OPENAI_API_KEY(self) -> str:
        """API key for the enrichment service. Empty string when not configured."""
        return self._load()["OPENAI_API_KEY"]

    @property
    def OPENAI_MODEL(self) -> str:
        raw = self._load()["OPENAI_MODEL"].strip()
        if not raw:
            raise ValueError("OPENAI_MODEL must not be empty.")
        return raw

    @property
    def OPENAI_BASE_URL(self) -> str:
        """Base URL of the Responses API, without a trailing slash."""
        raw = self._load()["OPENAI_BASE_URL"].strip().rstrip("/")
        if not raw.startswith(("http://", "https://")):
            raise ValueError(f"OPENAI_BASE_URL must be an http(s) URL, got '{raw}'")
        return raw


_cfg = _Config()

# Module-level type declarations for mypy.
# These are NOT assigned at module load time; the actual values come from __getattr__ below.
OPENAI_API_KEY: str
OPENAI_MODEL: str
OPENAI_BASE_URL: str


# Module-level lazy access using __getattr__ (PEP 562).
# Read as `config.OPENAI_API_KEY` at call time so the value is resolved on first use.
def __getattr__(name: str) -> str:
    if name == "OPENAI_API_KEY":
        return _cfg.OPENAI_API_KEY
    if name == "OPENAI_MODEL":
        return _cfg.OPENAI_MODEL
    if name == "OPENAI_BASE_URL":
        return _cfg.OPENAI_BASE_URL
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
