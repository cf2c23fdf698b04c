import os

from dotenv import load_dotenv

from eventer.exceptions import EventerConfigurationError

# Load .env file variables into environment
load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class Settings:
    """Library configuration settings loaded from environment variables."""

    # --- Logging Settings ---
    def get_log_level(self, default: str = "INFO") -> str:
        """Gets the configured log level, defaulting if not set."""
        return os.getenv("LOG_LEVEL", default).upper()

    # --- Registry Settings ---
    def get_strict_contracts(self) -> bool:
        """Whether typed registries reject payloads that break their event contract.

        Reads EVENTER_STRICT_CONTRACTS; defaults to True when unset.
        """
        raw = os.getenv("EVENTER_STRICT_CONTRACTS")
        if raw is None or raw.strip() == "":
            return True
        value = raw.strip().lower()
        if value in _TRUTHY:
            return True
        if value in _FALSY:
            return False
        raise EventerConfigurationError(f"EVENTER_STRICT_CONTRACTS must be a boolean flag, got {raw!r}.")
