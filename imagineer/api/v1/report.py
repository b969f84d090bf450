from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel, ConfigDict, Field

from imagineer.api.deps import get_report_service
from imagineer.core.errors import MalformedResponse
from imagineer.core.rate_limit import rate_limit
from imagineer.schemas.form import FormSubmission
from imagineer.schemas.report import Report
from imagineer.services.export import export_filename, report_to_json, report_to_text
from imagineer.services.report_assembler import parse_snapshot
from imagineer.services.report_service import ReportService

router = APIRouter()


class ReportGenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    form_data: FormSubmission = Field(alias="formData")
    session_id: str | None = Field(default=None, alias="sessionId", min_length=8, max_length=128)


@router.post("/report")
@rate_limit()
async def generate_report(
    request: Request,
    payload: ReportGenerateRequest,
    service: ReportService = Depends(get_report_service),
):
    _ = request
    report = await service.generate(payload.form_data, session_id=payload.session_id)
    return report.model_dump(by_alias=True)


@router.post("/report/export/text", response_class=PlainTextResponse)
async def export_report_text(report: Report):
    return PlainTextResponse(report_to_text(report))


@router.post("/report/export/json")
async def export_report_json(report: Report):
    try:
        snapshot = parse_snapshot(report)
    except MalformedResponse as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    filename = export_filename(snapshot.name, "json")
    return Response(
        content=report_to_json(report),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
