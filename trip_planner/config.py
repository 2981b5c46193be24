import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

API_KEY_ENV = "AI_GATEWAY_API_KEY"
DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1/chat/completions"
DEFAULT_MODEL = "google/gemini-2.5-flash"
DEFAULT_TIMEOUT_S = 60.0
TEMPERATURE = 0.7


@dataclass(frozen=True)
class Settings:
    """Process-wide gateway configuration, loaded once at startup."""
    api_key: Optional[str]
    gateway_url: str = DEFAULT_GATEWAY_URL
    model: str = DEFAULT_MODEL
    temperature: float = TEMPERATURE
    timeout_s: float = DEFAULT_TIMEOUT_S


def load_settings() -> Settings:
    """Build Settings from the environment (and a local .env file, if present).

    A missing API key is not an error here; the completion client refuses to
    start without one.
    """
    load_dotenv()

    timeout_raw = os.getenv("AI_GATEWAY_TIMEOUT")
    try:
        timeout_s = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT_S
    except ValueError:
        logger.warning("Ignoring invalid AI_GATEWAY_TIMEOUT=%r, using %.0fs", timeout_raw, DEFAULT_TIMEOUT_S)
        timeout_s = DEFAULT_TIMEOUT_S

    return Settings(
        api_key=os.getenv(API_KEY_ENV) or None,
        gateway_url=os.getenv("AI_GATEWAY_URL", DEFAULT_GATEWAY_URL),
        model=os.getenv("AI_GATEWAY_MODEL", DEFAULT_MODEL),
        timeout_s=timeout_s,
    )
