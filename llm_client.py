"""
LLM CLIENT - GEMINI generateContent
Issues the single outbound generation call for a workflow request.

Purpose:
- Send system instruction + content payload to the hosted Gemini REST API
- Ask for low-variance, JSON-typed output
- Return the raw text of the first candidate (normalization/parsing happens elsewhere)

Any transport failure, HTTP error or malformed envelope is raised as GenerationError.
"""
from typing import Any, Dict, Optional
import logging

import requests

import config
from errors import GenerationError

logger = logging.getLogger(__name__)


class GeminiClient:
    """Thin wrapper over POST {base}/models/{model}:generateContent."""

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        api_base: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self.api_key = api_key
        self.model = model or config.GEMINI_MODEL
        self.api_base = (api_base or config.GEMINI_API_BASE).rstrip("/")
        self.timeout = timeout if timeout is not None else config.LLM_TIMEOUT

    @property
    def endpoint(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    def generate(
        self,
        system_instruction: str,
        contents: str,
        temperature: float = config.LLM_TEMPERATURE,
        response_mime_type: str = config.LLM_RESPONSE_MIME_TYPE
    ) -> str:
        """
        Call the model once and return its text.

        Args:
            system_instruction: Persona / schema / rules text
            contents: User content (the serialized gesture event)
            temperature: Sampling temperature (near zero for consistency)
            response_mime_type: Requested output type

        Returns:
            Concatenated text of the first candidate, possibly ""
        """
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key
        }

        payload = {
            "systemInstruction": {"parts": [{"text": system_instruction}]},
            "contents": [{"role": "user", "parts": [{"text": contents}]}],
            "generationConfig": {
                "temperature": temperature,
                "responseMimeType": response_mime_type
            }
        }

        logger.info(f"[LLM] Endpoint: {self.endpoint}")
        logger.debug(f"[LLM] System instruction length: {len(system_instruction)}")
        logger.debug(f"[LLM] Contents: {contents[:200]}")

        try:
            response = requests.post(
                self.endpoint,
                json=payload,
                headers=headers,
                timeout=self.timeout
            )
            logger.info(f"[LLM] Response status: {response.status_code}")
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.HTTPError as e:
            logger.error(f"[LLM] HTTP Error: {e.response.status_code}")
            logger.error(f"[LLM] Response text: {e.response.text[:500]}")
            raise GenerationError(f"API Error {e.response.status_code}: {e.response.reason}") from e
        except requests.exceptions.Timeout as e:
            raise GenerationError("Request timeout - LLM took too long to respond") from e
        except requests.exceptions.ConnectionError as e:
            raise GenerationError("Cannot connect to LLM service") from e
        except requests.exceptions.RequestException as e:
            raise GenerationError(f"LLM request failed: {e}") from e
        except ValueError as e:
            # body was not JSON
            raise GenerationError("LLM service returned a non-JSON envelope") from e

        return self._extract_text(data)

    def _extract_text(self, data: Dict[str, Any]) -> str:
        """Pull the text parts out of the first candidate."""
        try:
            candidate = data["candidates"][0]
        except (KeyError, IndexError, TypeError) as e:
            block_reason = data.get("promptFeedback", {}).get("blockReason") if isinstance(data, dict) else None
            raise GenerationError(f"No candidates in LLM response (blockReason={block_reason})") from e

        parts = (candidate.get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts if isinstance(part, dict))


def create_client(api_key: str) -> GeminiClient:
    """Create and return a GeminiClient using the configured model and endpoint."""
    return GeminiClient(api_key=api_key)
