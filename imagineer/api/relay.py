import asyncio
import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from imagineer.api.deps import get_relay_client
from imagineer.core.config import settings
from imagineer.core.errors import GenerationTimeout, ModelRequestFailure
from imagineer.core.rate_limit import rate_limit
from imagineer.prompts.report_prompt import ReportRequest

router = APIRouter()
logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/generate")
@rate_limit()
async def relay_generate(request: Request, client=Depends(get_relay_client)):
    """Forward a prepared prompt to the model backend, holding the credential server-side."""
    try:
        body: Any = await request.json()
    except ValueError:
        return _error(400, "Request body must be valid JSON.")

    if not isinstance(body, dict):
        return _error(400, "Missing required data in the request body.")
    form_data = body.get("formData")
    schema = body.get("schema")
    system_instruction = body.get("systemInstruction")
    user_content = body.get("userContent")
    if not form_data or not schema or not system_instruction or not user_content:
        return _error(400, "Missing required data in the request body.")

    prompt = ReportRequest(
        system_instruction=str(system_instruction),
        user_content=str(user_content),
        response_schema=schema,
    )
    try:
        text = await asyncio.wait_for(
            client.generate_json(prompt, form_data=form_data),
            timeout=settings.generation_timeout_s,
        )
    except asyncio.TimeoutError:
        return _error(504, str(GenerationTimeout(settings.generation_timeout_s)))
    except ModelRequestFailure as exc:
        return _error(500, str(exc))

    try:
        return json.loads(text)
    except ValueError:
        logger.error("relay_response_not_json preview=%r", text[:200])
        return _error(
            500,
            "The AI service returned a malformed response that was not valid JSON. This is an internal error.",
        )
