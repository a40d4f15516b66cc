import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1/chat/completions"
DEFAULT_MODEL = "google/gemini-2.5-flash"


@dataclass(frozen=True)
class Settings:
    ai_gateway_api_key: str | None
    ai_gateway_url: str
    ai_gateway_model: str
    ai_gateway_timeout: float
    database_url: str
    log_level: str


def get_settings() -> Settings:
    """Read settings from the environment.

    Nothing is validated here: a missing gateway key only surfaces when a
    generation request actually needs it.
    """
    return Settings(
        ai_gateway_api_key=os.getenv("AI_GATEWAY_API_KEY") or None,
        ai_gateway_url=os.getenv("AI_GATEWAY_URL", DEFAULT_GATEWAY_URL),
        ai_gateway_model=os.getenv("AI_GATEWAY_MODEL", DEFAULT_MODEL),
        ai_gateway_timeout=float(os.getenv("AI_GATEWAY_TIMEOUT", "60")),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./recipes.db"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str | None = None):
    logging.basicConfig(
        level=level or get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
