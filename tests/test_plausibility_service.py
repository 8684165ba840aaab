"""Unit tests for the AI plausibility client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from securepass.models.enums import PassType
from securepass.services.plausibility_service import PlausibilityService
from securepass.utils.exceptions import ExternalServiceError


def _gemini_body(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class TestResponseParsing:
    def test_json_answer(self) -> None:
        result = PlausibilityService.parse_response(
            _gemini_body('{"isValid": true, "reasoning": "Routine delivery."}')
        )
        assert result.reasoning == "Routine delivery."
        assert result.is_valid is True

    def test_prose_answer_kept_verbatim(self) -> None:
        result = PlausibilityService.parse_response(_gemini_body("  Looks fine to me.  "))
        assert result.reasoning == "Looks fine to me."
        assert result.is_valid is None

    def test_json_without_reasoning_falls_back_to_raw(self) -> None:
        result = PlausibilityService.parse_response(_gemini_body('{"isValid": false}'))
        assert result.reasoning == '{"isValid": false}'

    def test_no_candidates(self) -> None:
        with pytest.raises(ExternalServiceError, match="no candidates"):
            PlausibilityService.parse_response({"candidates": []})

    def test_empty_text(self) -> None:
        with pytest.raises(ExternalServiceError, match="empty"):
            PlausibilityService.parse_response(_gemini_body("   "))


class TestPayload:
    def test_prompt_mentions_purpose_and_type(self) -> None:
        service = PlausibilityService(api_key="k", model="m", base_url="https://ai.test/models/")
        payload = service.build_payload("Fix the boiler", PassType.MATERIAL)
        prompt = payload["contents"][0]["parts"][0]["text"]

        assert "Fix the boiler" in prompt
        assert "MATERIAL" in prompt
        assert service.endpoint == "https://ai.test/models/m:generateContent"


class TestCheck:
    async def test_not_configured(self) -> None:
        service = PlausibilityService(api_key="")
        assert not service.is_configured
        with pytest.raises(ExternalServiceError, match="not configured"):
            await service.check("delivery", PassType.VISITOR)

    async def test_successful_check(self) -> None:
        service = PlausibilityService(api_key="test-key")
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.json.return_value = _gemini_body('{"isValid": true, "reasoning": "ok"}')
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = mock_response
            result = await service.check("delivery", PassType.VISITOR)

        assert result.reasoning == "ok"
        assert mock_post.call_args.kwargs["params"] == {"key": "test-key"}

    async def test_timeout(self) -> None:
        service = PlausibilityService(api_key="test-key", timeout=0.1)
        with (
            patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post,
            pytest.raises(ExternalServiceError, match="timed out"),
        ):
            mock_post.side_effect = httpx.TimeoutException("slow")
            await service.check("delivery", PassType.VISITOR)

    async def test_http_error_keeps_status(self) -> None:
        service = PlausibilityService(api_key="test-key")
        request = httpx.Request("POST", service.endpoint)
        response = httpx.Response(429, request=request)

        with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = response
            with pytest.raises(ExternalServiceError) as exc_info:
                await service.check("delivery", PassType.VISITOR)

        assert exc_info.value.status_code == 429

    async def test_connect_error(self) -> None:
        service = PlausibilityService(api_key="test-key")
        with (
            patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post,
            pytest.raises(ExternalServiceError, match="Connection"),
        ):
            mock_post.side_effect = httpx.ConnectError("refused")
            await service.check("delivery", PassType.VISITOR)
