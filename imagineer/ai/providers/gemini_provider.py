from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from google import genai
from google.genai import types

from imagineer.ai.errors import describe_backend_error
from imagineer.core.errors import ModelRequestFailure
from imagineer.prompts.report_prompt import ReportRequest

logger = logging.getLogger(__name__)


class GeminiProvider:
    def __init__(self, model: str, api_key: str | None = None, temperature: float = 0.7):
        key = (api_key or "").strip()
        if not key:
            raise RuntimeError("GEMINI_API_KEY is missing")
        self._model = model
        self._temperature = temperature
        self._client = genai.Client(api_key=key)

    async def generate_json(
        self, request: ReportRequest, *, form_data: Mapping[str, Any] | None = None
    ) -> str:
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=request.user_content,
                config=types.GenerateContentConfig(
                    system_instruction=request.system_instruction,
                    response_mime_type="application/json",
                    response_schema=request.response_schema,
                    temperature=self._temperature,
                ),
            )
        except Exception as exc:  # noqa: BLE001 - SDK raises several unrelated types
            logger.warning("gemini_generate_failed model=%s: %s", self._model, exc)
            raise ModelRequestFailure(describe_backend_error(exc)) from exc

        feedback = getattr(response, "prompt_feedback", None)
        block_reason = getattr(feedback, "block_reason", None) if feedback else None
        if block_reason:
            ratings = getattr(feedback, "safety_ratings", None) or []
            logger.error(
                "gemini_prompt_blocked reason=%s ratings=%s",
                block_reason,
                json.dumps([str(r) for r in ratings]),
            )
            raise ModelRequestFailure(
                "The AI service blocked the request due to content safety policies. "
                f"Reason: {block_reason}. Please modify your input and try again.",
                code="content_blocked",
            )

        text = response.text
        if not text:
            logger.error("gemini_empty_response model=%s", self._model)
            raise ModelRequestFailure(
                "The AI service returned an empty response. This may be due to a content safety "
                "filter. Please check your inputs.",
                code="empty_response",
            )
        return text
