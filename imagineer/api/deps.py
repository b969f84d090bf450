from __future__ import annotations

from fastapi import HTTPException, Request

from imagineer.core.scoring import ScoringRules, load_scoring_rules
from imagineer.services.report_service import ReportService

_NOT_CONFIGURED = (
    "API key is not configured on the server. "
    "Deployment is missing the model API key environment variable."
)


def get_scoring_rules(request: Request) -> ScoringRules:
    rules = getattr(request.app.state, "scoring_rules", None)
    return rules if rules is not None else load_scoring_rules()


def get_report_service(request: Request) -> ReportService:
    service = getattr(request.app.state, "report_service", None)
    if service is None:
        raise HTTPException(status_code=500, detail=_NOT_CONFIGURED)
    return service


def get_relay_client(request: Request):
    client = getattr(request.app.state, "relay_client", None)
    if client is None:
        raise HTTPException(status_code=500, detail=_NOT_CONFIGURED)
    return client
