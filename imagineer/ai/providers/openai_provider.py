from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from openai import AsyncOpenAI

from imagineer.ai.errors import describe_backend_error
from imagineer.core.errors import ModelRequestFailure
from imagineer.prompts.report_prompt import ReportRequest

logger = logging.getLogger(__name__)


def to_json_schema(node: Any) -> Any:
    """Translate the OpenAPI-style report schema (upper-case types) to JSON Schema."""
    if isinstance(node, list):
        return [to_json_schema(item) for item in node]
    if not isinstance(node, dict):
        return node
    converted = {key: to_json_schema(value) for key, value in node.items()}
    if isinstance(converted.get("type"), str):
        converted["type"] = converted["type"].lower()
    if converted.get("type") == "object":
        converted.setdefault("additionalProperties", False)
    return converted


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        max_retries: int = 1,
        temperature: float = 0.7,
    ):
        self._model = model
        self._temperature = temperature
        key = (api_key or "").strip()
        if not key:
            raise RuntimeError("OPENAI_API_KEY is missing")

        # The caller bounds the request with its own timeout.
        self._client = AsyncOpenAI(
            api_key=key,
            base_url=base_url or None,
            max_retries=max_retries,
        )

    async def generate_json(
        self, request: ReportRequest, *, form_data: Mapping[str, Any] | None = None
    ) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": request.system_instruction},
                    {"role": "user", "content": request.user_content},
                ],
                temperature=self._temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "opportunity_report",
                        "schema": to_json_schema(request.response_schema),
                    },
                },
            )
        except Exception as exc:  # noqa: BLE001
            logger.warning("openai_generate_failed model=%s: %s", self._model, exc)
            raise ModelRequestFailure(describe_backend_error(exc)) from exc

        choice = response.choices[0] if response.choices else None
        refusal = getattr(choice.message, "refusal", None) if choice else None
        if refusal:
            raise ModelRequestFailure(
                f"The AI service declined the request. Reason: {refusal}",
                code="content_blocked",
            )
        content = choice.message.content if choice else None
        if not content:
            raise ModelRequestFailure("The AI service returned an empty response.", code="empty_response")
        return content
