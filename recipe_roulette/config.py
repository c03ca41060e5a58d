"""
Configuration management for the Random Recipe viewer.

This module centralizes environment variable loading from the .env file at the project root.
It should be imported early by the Streamlit entry point (streamlit_app/app.py) so .env is
loaded before any other code reads the environment.

When .env does not exist (e.g. on a hosted deployment), load_dotenv() is a no-op and the
platform's environment variables are used instead.

Environment Variables:
- EDAMAM_APP_ID: Required, Edamam application id
- EDAMAM_APP_KEY: Required, Edamam application key
- EDAMAM_ACCOUNT_USER: Optional, sent as the Edamam-Account-User header when set
  (only needed if your Edamam app has Active User tracking enabled)
- EDAMAM_HEALTH: Optional, comma-separated health filters (e.g. "low-sugar,vegan")
- EDAMAM_DIET: Optional, comma-separated diet filters (e.g. "high-fiber")
- EDAMAM_TIMEOUT_SECONDS: Optional, per-request timeout (defaults to 30)
- RECIPE_DEFAULT_QUERY: Optional, query used on first page load (defaults to "salad")
"""

import logging
import os
from pathlib import Path
from typing import List, Mapping, Optional, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

DEFAULT_QUERY = "salad"
DEFAULT_TIMEOUT_SECONDS = 30.0


class ConfigError(RuntimeError):
    """Raised when required Edamam credentials are missing."""
    pass


def load_env_file() -> None:
    """
    Load environment variables from .env file at project root.

    recipe_roulette/config.py -> recipe_roulette/ -> project root.
    Safe to call multiple times; existing environment variables take precedence.
    """
    env_path = Path(__file__).resolve().parent.parent / ".env"
    load_dotenv(env_path, override=False)


# Load .env file on module import
load_env_file()


def _split_csv(value: Optional[str]) -> Tuple[str, ...]:
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())


def _parse_timeout(value: Optional[str]) -> float:
    if not value:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(value)
    except ValueError:
        logger.warning("Invalid EDAMAM_TIMEOUT_SECONDS %r, using %.0fs", value, DEFAULT_TIMEOUT_SECONDS)
        return DEFAULT_TIMEOUT_SECONDS
    if timeout <= 0:
        logger.warning("EDAMAM_TIMEOUT_SECONDS must be positive, using %.0fs", DEFAULT_TIMEOUT_SECONDS)
        return DEFAULT_TIMEOUT_SECONDS
    return timeout


class EdamamConfig(BaseModel):
    """
    Immutable Edamam API configuration.

    Built once at startup (see from_env) and passed to the pool builder at call time.
    Credentials are optional at construction so that a missing key is reported to the
    user as a configuration error instead of crashing the app.
    """
    app_id: Optional[str] = Field(None, description="Edamam application id")
    app_key: Optional[str] = Field(None, description="Edamam application key")
    account_user: Optional[str] = Field(None, description="Value for the Edamam-Account-User header")
    health: Tuple[str, ...] = Field(default=(), description="Health filters appended to every search")
    diet: Tuple[str, ...] = Field(default=(), description="Diet filters appended to every search")
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0, description="Per-request timeout")
    default_query: str = Field(default=DEFAULT_QUERY, description="Query used on first page load")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EdamamConfig":
        """
        Build a configuration from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            EdamamConfig instance. Blank values are treated as unset.
        """
        env = os.environ if environ is None else environ
        return cls(
            app_id=env.get("EDAMAM_APP_ID") or None,
            app_key=env.get("EDAMAM_APP_KEY") or None,
            account_user=env.get("EDAMAM_ACCOUNT_USER") or None,
            health=_split_csv(env.get("EDAMAM_HEALTH")),
            diet=_split_csv(env.get("EDAMAM_DIET")),
            timeout_seconds=_parse_timeout(env.get("EDAMAM_TIMEOUT_SECONDS")),
            default_query=env.get("RECIPE_DEFAULT_QUERY") or DEFAULT_QUERY,
        )

    def missing_credentials(self) -> List[str]:
        """Return the names of required environment variables that are not set."""
        missing = []
        if not self.app_id:
            missing.append("EDAMAM_APP_ID")
        if not self.app_key:
            missing.append("EDAMAM_APP_KEY")
        return missing

    def validate_credentials(self) -> None:
        """
        Ensure both Edamam credentials are present.

        Raises:
            ConfigError: Naming every missing variable
        """
        missing = self.missing_credentials()
        if missing:
            raise ConfigError(
                f"Missing {' and '.join(missing)} env var{'s' if len(missing) > 1 else ''}. "
                "Add them to your .env file at the project root."
            )
