from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from imagineer.core.errors import ModelRequestFailure
from imagineer.prompts.report_prompt import ReportRequest

logger = logging.getLogger(__name__)

RELAY_PATH = "/api/generate"


class RelayProvider:
    """Calls the credential-holding relay instead of the model backend directly."""

    def __init__(self, base_url: str, client: httpx.AsyncClient | None = None):
        self._url = base_url.rstrip("/") + RELAY_PATH
        self._client = client

    async def generate_json(
        self, request: ReportRequest, *, form_data: Mapping[str, Any] | None = None
    ) -> str:
        body = {
            "formData": dict(form_data or {}),
            "systemInstruction": request.system_instruction,
            "userContent": request.user_content,
            "schema": request.response_schema,
        }
        try:
            if self._client is not None:
                response = await self._client.post(self._url, json=body, timeout=None)
            else:
                async with httpx.AsyncClient(timeout=None) as client:
                    response = await client.post(self._url, json=body)
        except httpx.HTTPError as exc:
            logger.warning("relay_request_failed url=%s: %s", self._url, exc)
            raise ModelRequestFailure(f"Could not reach the report service: {exc}") from exc

        if response.is_success:
            return response.text

        reason = None
        try:
            payload = response.json()
            if isinstance(payload, dict):
                reason = payload.get("error")
        except ValueError:
            reason = None
        logger.warning("relay_error_status url=%s status=%s", self._url, response.status_code)
        raise ModelRequestFailure(str(reason) if reason else f"HTTP error! status: {response.status_code}")
