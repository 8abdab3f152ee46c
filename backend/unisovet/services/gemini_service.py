"""
Gemini API integration service.

This service:
- Handles the remote text-completion call for the virtual assistant
- Implements ITextCompletionService so tests can swap in a fake
- Turns every failure into AssistantServiceError
"""

import logging
import time
from typing import Any, Dict, List, Optional

import requests

from unisovet.core.exceptions import AssistantServiceError
from unisovet.core.logging_config import log_performance
from unisovet.domain.interfaces import ITextCompletionService

logger = logging.getLogger(__name__)


class GeminiService(ITextCompletionService):
    """Calls ``models/{model}:generateContent`` on the Gemini REST API."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 60.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate(
        self, contents: List[Dict[str, Any]], system_instruction: str
    ) -> str:
        if not self.api_key:
            logger.error(
                "Gemini API key not configured",
                extra={"context": {"model": self.model}},
            )
            raise AssistantServiceError("Gemini API key not configured")

        body = {
            "contents": contents,
            "systemInstruction": {"parts": [{"text": system_instruction}]},
        }
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }

        start = time.time()
        try:
            response = self.session.post(
                self.endpoint, json=body, headers=headers, timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.error(
                "Gemini request failed",
                extra={
                    "context": {
                        "model": self.model,
                        "error": str(e),
                        "status_code": getattr(
                            getattr(e, "response", None), "status_code", None
                        ),
                    }
                },
            )
            raise AssistantServiceError(f"Gemini request failed: {e}") from e
        except ValueError as e:
            logger.error(
                "Gemini returned a non-JSON body",
                extra={"context": {"model": self.model, "error": str(e)}},
            )
            raise AssistantServiceError("Gemini returned a non-JSON body") from e

        text = self._extract_text(data)
        log_performance(
            "gemini.generate",
            (time.time() - start) * 1000,
            model=self.model,
            turns=len(contents),
        )
        return text

    def _extract_text(self, data: Any) -> str:
        try:
            candidates = data.get("candidates") or []
            parts = candidates[0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts)
        except (AttributeError, IndexError, KeyError, TypeError) as e:
            logger.error(
                "Gemini response missing candidate text",
                extra={"context": {"model": self.model, "error": str(e)}},
            )
            raise AssistantServiceError("Gemini response missing candidate text") from e

        if not text:
            raise AssistantServiceError("Gemini response has empty text")
        return text
