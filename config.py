import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

# Load environment variables from .env file
load_dotenv()

# OpenRouter speaks the OpenAI chat-completions protocol
DEFAULT_API_URL = "https://openrouter.ai/api/v1/chat/completions"

# Models are tried in order; the first successful reply wins
DEFAULT_IDENTIFY_MODELS = ["nvidia/nemotron-nano-12b-v2-vl:free", "openai/gpt-4o"]
DEFAULT_DIAGNOSE_MODELS = ["nvidia/nemotron-nano-12b-v2-vl:free", "mistralai/mixtral-8x7b"]

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_TOKENS = 600


def _split_models(raw: Optional[str], default: List[str]) -> List[str]:
    """Parse a comma-separated model list, falling back to the default."""
    if not raw:
        return list(default)
    models = [m.strip() for m in raw.split(",") if m.strip()]
    return models or list(default)


class Settings(BaseModel):
    """Runtime configuration, built once and handed to the app and client."""
    api_key: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    identify_models: List[str] = list(DEFAULT_IDENTIFY_MODELS)
    diagnose_models: List[str] = list(DEFAULT_DIAGNOSE_MODELS)
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    max_tokens: int = DEFAULT_MAX_TOKENS
    app_referer: str = "http://localhost"
    app_title: str = "Plant Doctor"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_key=os.getenv("OPENAI_API_KEY") or None,
            api_url=os.getenv("MODEL_API_URL") or DEFAULT_API_URL,
            identify_models=_split_models(os.getenv("IDENTIFY_MODELS"), DEFAULT_IDENTIFY_MODELS),
            diagnose_models=_split_models(os.getenv("DIAGNOSE_MODELS"), DEFAULT_DIAGNOSE_MODELS),
            timeout_seconds=float(os.getenv("MODEL_TIMEOUT_SECONDS") or DEFAULT_TIMEOUT_SECONDS),
            max_tokens=int(os.getenv("MODEL_MAX_TOKENS") or DEFAULT_MAX_TOKENS),
            app_referer=os.getenv("APP_REFERER") or "http://localhost",
            app_title=os.getenv("APP_TITLE") or "Plant Doctor",
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )
