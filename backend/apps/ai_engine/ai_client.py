"""
Google Gemini client for component generation
"""
import logging

import requests
from django.conf import settings

from .exceptions import GeminiAPIError, GeminiConfigurationError

logger = logging.getLogger(__name__)

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"


class GeminiClient:
    """Wrapper for the Gemini generateContent REST endpoint"""

    def __init__(self, api_key=None, model=None, timeout=None):
        self.api_key = settings.GEMINI_API_KEY if api_key is None else api_key
        self.model = model or settings.GEMINI_MODEL
        self.timeout = timeout or settings.GEMINI_TIMEOUT

    def _validate_api_key(self):
        if not self.api_key:
            raise GeminiConfigurationError("API key not configured for Google Gemini")

    def generate_text(self, prompt, temperature=0.7):
        """
        Send a single-turn prompt and return the reply text.

        Args:
            prompt: Full instruction sent as the user turn
            temperature: Sampling temperature (0-1)

        Returns:
            Text of the first candidate

        Raises:
            GeminiConfigurationError: no API key
            GeminiAPIError: transport failure, non-2xx status or malformed body
        """
        self._validate_api_key()

        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "maxOutputTokens": settings.GEMINI_MAX_OUTPUT_TOKENS,
                "temperature": temperature,
            },
        }

        try:
            response = requests.post(
                GEMINI_API_URL.format(model=self.model),
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
            text = data['candidates'][0]['content']['parts'][0]['text']
        except requests.RequestException as e:
            raise GeminiAPIError(f"Gemini request failed: {e}") from e
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise GeminiAPIError(f"Unexpected Gemini response: {e}") from e

        if not isinstance(text, str):
            raise GeminiAPIError(f"Unexpected Gemini response: text part is {type(text).__name__}")

        tokens = data.get('usageMetadata', {}).get('totalTokenCount', 0)
        logger.info(f"Gemini {self.model} replied ({tokens} tokens)")
        return text
