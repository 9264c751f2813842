import logging
from typing import Any, Dict, List, Optional

import httpx

from config import Settings
from errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


class VisionModelClient:
    """Handles communication with an OpenAI-compatible chat-completions API"""

    def __init__(self, settings: Settings, http_client: Optional[httpx.Client] = None):
        """
        Initializes the client. A missing API key is not fatal here; it is
        reported on the first request so the service can still start.
        """
        self.settings = settings
        self.api_url = settings.api_url
        self.api_key = settings.api_key
        self.client = http_client or httpx.Client(timeout=settings.timeout_seconds)

    def close(self) -> None:
        self.client.close()

    def complete(
        self,
        models: List[str],
        system_prompt: str,
        prompt: str,
        image_url: str,
    ) -> str:
        """
        Main method: sends the prompt and image to each model in turn and
        returns the assistant text of the first one that answers.
        """
        if not self.api_key:
            raise ConfigurationError()

        last_error = "no models configured"
        for attempt, model in enumerate(models, start=1):
            payload = self.build_payload(model, system_prompt, prompt, image_url)
            logger.info(f"Sending request to {model} (attempt {attempt}/{len(models)})")
            try:
                return self._call_model_api(payload)
            except httpx.HTTPStatusError as e:
                last_error = f"{model} returned HTTP {e.response.status_code}: {e.response.text}"
            except httpx.RequestError as e:
                last_error = f"Failed to connect to {model}: {e!r}"
            except ValueError as e:
                last_error = f"{model} returned an unreadable response: {e}"

            logger.error(f"Model call failed: {last_error}")
            if attempt < len(models):
                logger.info("Retrying with fallback model...")

        raise UpstreamError(detail=f"All models failed: {last_error}")

    def build_payload(self, model: str, system_prompt: str, prompt: str, image_url: str) -> Dict[str, Any]:
        """Create the structured payload for the chat-completions API"""
        return {
            "model": model,
            "max_tokens": self.settings.max_tokens,
            "messages": [
                {
                    "role": "system",
                    "content": system_prompt,
                },
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "text",
                            "text": prompt
                        },
                        {
                            "type": "image_url",
                            "image_url": {
                                "url": image_url
                            }
                        }
                    ]
                }
            ]
        }

    def _call_model_api(self, payload: Dict[str, Any]) -> str:
        """Send request to the model API and get the raw text response"""
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
            "HTTP-Referer": self.settings.app_referer,
            "X-Title": self.settings.app_title,
        }

        response = self.client.post(self.api_url, json=payload, headers=headers)
        response.raise_for_status()

        raw_data = response.json()
        if not isinstance(raw_data, dict):
            raise ValueError("response body is not a JSON object")

        choices = raw_data.get("choices") or []
        if not choices:
            return ""
        if not isinstance(choices, list) or not isinstance(choices[0], dict):
            raise ValueError("choices is not a list of objects")

        message = choices[0].get("message") or {}
        if not isinstance(message, dict):
            raise ValueError("choice message is not an object")

        content = message.get("content") or ""
        # Some providers return content as a list of typed parts
        if isinstance(content, list):
            content = "".join(
                str(part.get("text") or "") for part in content if isinstance(part, dict)
            )
        if not isinstance(content, str):
            raise ValueError(f"message content has unexpected type {type(content).__name__}")
        return content
