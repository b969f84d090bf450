from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from pydantic import ValidationError

from imagineer.core.errors import MalformedResponse
from imagineer.features.persona import SkillProfile
from imagineer.schemas.form import FormSubmission
from imagineer.schemas.report import Report, ReportBody, ReportSnapshot

logger = logging.getLogger(__name__)


def build_snapshot(form: FormSubmission, profile: SkillProfile) -> ReportSnapshot:
    return ReportSnapshot(
        name=form.name,
        email=form.email,
        persona=profile.persona,
        strengths=list(profile.top_skills),
        markets=list(form.markets),
        scores=dict(profile.normalized),
        consent=form.consent,
    )


def _parse_raw(raw: str | bytes | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(raw, Mapping):
        return dict(raw)
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError) as exc:
        preview = raw[:200] if isinstance(raw, (str, bytes)) else type(raw).__name__
        logger.error("report_response_not_json preview=%r", preview)
        raise MalformedResponse(
            "The AI service returned a malformed response that was not valid JSON."
        ) from exc
    if not isinstance(parsed, dict):
        raise MalformedResponse("The AI service returned JSON that is not an object.")
    return parsed


def _error_fields(exc: ValidationError) -> list[str]:
    fields: list[str] = []
    for error in exc.errors():
        path = ".".join(str(part) for part in error.get("loc", ()))
        if path and path not in fields:
            fields.append(path)
    return fields


def assemble_report(raw: str | bytes | Mapping[str, Any], snapshot: ReportSnapshot) -> Report:
    """Validate the model output and attach the snapshot as ``jsonData``.

    Missing or ill-typed fields are never filled in; the whole response is rejected.
    """
    payload = _parse_raw(raw)
    payload.pop("jsonData", None)
    try:
        body = ReportBody.model_validate(payload)
    except ValidationError as exc:
        fields = _error_fields(exc)
        logger.error("report_response_invalid fields=%s", fields)
        raise MalformedResponse(
            f"The AI service response is missing or has invalid fields: {', '.join(fields)}",
            missing=fields,
        ) from exc

    return Report(**body.model_dump(), json_data=snapshot.model_dump_json(indent=2))


def parse_snapshot(report: Report) -> ReportSnapshot:
    try:
        return ReportSnapshot.model_validate_json(report.json_data)
    except ValidationError as exc:
        raise MalformedResponse(
            "The report's jsonData is not a valid snapshot.", missing=_error_fields(exc)
        ) from exc
