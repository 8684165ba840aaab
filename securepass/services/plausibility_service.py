# =======================================================================================
# securepass/services/plausibility_service.py - AI Purpose Plausibility Check
# =======================================================================================
"""Client for the generative-AI text service that comments on a pass purpose.

Talks to the Gemini ``generateContent`` REST endpoint and asks for a JSON
answer of the form ``{"isValid": bool, "reasoning": str}``. Only the
reasoning text ends up on the gate pass.
"""

import json
from typing import Any, Dict, Optional

import httpx
from loguru import logger

from ..config import config
from ..models.enums import PassType
from ..models.schemas import PlausibilityResult
from ..utils.exceptions import ExternalServiceError

PROMPT_TEMPLATE = (
    "You are a security officer reviewing gate pass requests for a corporate campus.\n"
    "Pass type: {pass_type}\n"
    "Stated purpose: \"{purpose}\"\n"
    "Decide whether this purpose is plausible and appropriate for this pass type. "
    "Respond with JSON only: {{\"isValid\": true|false, \"reasoning\": \"one or two sentences\"}}."
)


class PlausibilityService:
    """Asks the AI service whether a pass purpose looks legitimate."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._api_key = config.AI_API_KEY if api_key is None else api_key
        self._model = model or config.AI_MODEL
        self._base_url = (base_url or config.AI_API_URL).rstrip("/")
        self._timeout = config.AI_TIMEOUT if timeout is None else timeout

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/{self._model}:generateContent"

    def build_payload(self, purpose: str, pass_type: PassType) -> Dict[str, Any]:
        prompt = PROMPT_TEMPLATE.format(pass_type=pass_type.value, purpose=purpose)
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"responseMimeType": "application/json"},
        }

    async def check(self, purpose: str, pass_type: PassType) -> PlausibilityResult:
        """Run the plausibility check.

        Raises:
            ExternalServiceError: On missing configuration, transport errors,
                non-2xx responses or an unusable response body.
        """
        if not self.is_configured:
            raise ExternalServiceError("Plausibility check is not configured (AI_API_KEY is empty)")

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    self.endpoint,
                    params={"key": self._api_key},
                    json=self.build_payload(purpose, pass_type),
                )
                response.raise_for_status()

            return self.parse_response(response.json())

        except httpx.TimeoutException as e:
            logger.warning("Plausibility check timed out")
            raise ExternalServiceError("Plausibility check timed out") from e
        except httpx.HTTPStatusError as e:
            logger.warning(f"Plausibility check HTTP error {e.response.status_code}")
            raise ExternalServiceError(
                f"AI service returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.ConnectError as e:
            logger.warning("Plausibility check connection error")
            raise ExternalServiceError("Connection to AI service failed") from e
        except ExternalServiceError:
            raise
        except Exception as e:
            logger.exception("Plausibility check unexpected error")
            raise ExternalServiceError(f"Unexpected error: {e}") from e

    @staticmethod
    def parse_response(data: Dict[str, Any]) -> PlausibilityResult:
        """Pull the model's text out of a generateContent response."""
        try:
            parts = data["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError) as e:
            raise ExternalServiceError("AI response contained no candidates") from e

        raw = "".join(p.get("text", "") for p in parts).strip()
        if not raw:
            raise ExternalServiceError("AI response was empty")

        try:
            body = json.loads(raw)
        except ValueError:
            # model ignored the JSON instruction; keep its prose as the reasoning
            return PlausibilityResult(reasoning=raw)

        if not isinstance(body, dict) or not body.get("reasoning"):
            return PlausibilityResult(reasoning=raw)
        return PlausibilityResult(
            reasoning=str(body["reasoning"]),
            is_valid=body.get("isValid"),
        )
