import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
from starlette.exceptions import HTTPException as StarletteHTTPException
import sentry_sdk

from imagineer.api.v1.health import router as health_router
from imagineer.api.v1.options import router as options_router
from imagineer.api.v1.persona import router as persona_router
from imagineer.api.v1.report import router as report_router
from imagineer.api.relay import router as relay_router
from imagineer.core.cors import cors_allow_origin_regex, cors_allowed_origins
from imagineer.core.errors import (
    GenerationTimeout,
    MalformedResponse,
    ModelRequestFailure,
    ReportError,
    SchemaContractError,
    SubmissionSuperseded,
    SubmissionValidationError,
)
from imagineer.core.rate_limit import limiter
from imagineer.core.config import settings
from imagineer.core.lifespan import lifespan

logger = logging.getLogger(__name__)

logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

app = FastAPI(title="Persuasion Imagineering API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(),
    allow_origin_regex=cors_allow_origin_regex(),
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

_STATUS_BY_ERROR: list[tuple[type[ReportError], int]] = [
    (SubmissionValidationError, 400),
    (SubmissionSuperseded, 409),
    (GenerationTimeout, 504),
    (ModelRequestFailure, 502),
    (MalformedResponse, 502),
    (SchemaContractError, 500),
]


@app.exception_handler(ReportError)
async def report_error_handler(request: Request, exc: ReportError):
    status_code = next((code for kind, code in _STATUS_BY_ERROR if isinstance(exc, kind)), 500)
    logger.warning("report_error path=%s code=%s status=%s", request.url.path, exc.code, status_code)
    return JSONResponse(status_code=status_code, content={"error": str(exc), "code": exc.code})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    _ = request
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    _ = request
    fields = [".".join(str(part) for part in err.get("loc", ())) for err in exc.errors()]
    return JSONResponse(
        status_code=422,
        content={"error": "Please check the highlighted fields and try again.", "fields": fields},
    )


app.include_router(health_router, prefix="/v1", tags=["Health"])
app.include_router(options_router, prefix="/v1", tags=["Form"])
app.include_router(persona_router, prefix="/v1", tags=["Persona"])
app.include_router(report_router, prefix="/v1", tags=["Report"])
app.include_router(relay_router, prefix="/api", tags=["Relay"])
