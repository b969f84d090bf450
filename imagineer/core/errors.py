from __future__ import annotations


class ReportError(RuntimeError):
    def __init__(self, message: str, *, code: str = "report_failed"):
        super().__init__(message)
        self.code = code


class SubmissionValidationError(ReportError):
    def __init__(self, message: str, *, code: str = "invalid_submission"):
        super().__init__(message, code=code)


class GenerationTimeout(ReportError):
    def __init__(self, timeout_s: float):
        super().__init__(
            f"The AI service did not answer within {timeout_s:g} seconds. Please try again.",
            code="generation_timeout",
        )
        self.timeout_s = timeout_s


class ModelRequestFailure(ReportError):
    """The model backend could not be reached or refused the request.

    The message is the backend's own reason and is shown to the user as is.
    """

    def __init__(self, message: str, *, code: str = "model_request_failed"):
        super().__init__(message, code=code)


class MalformedResponse(ReportError):
    def __init__(self, message: str, *, missing: list[str] | None = None):
        super().__init__(message, code="malformed_response")
        self.missing = list(missing or [])


class SchemaContractError(ReportError):
    def __init__(self, message: str, *, missing: list[str] | None = None):
        super().__init__(message, code="schema_contract")
        self.missing = list(missing or [])


class SubmissionSuperseded(ReportError):
    def __init__(self, message: str = "A newer submission replaced this one."):
        super().__init__(message, code="superseded")


class WebhookDeliveryFailure(ReportError):
    """Logged by the webhook dispatcher, never raised to a caller."""

    def __init__(self, endpoint: str, message: str):
        super().__init__(f"{endpoint}: {message}", code="webhook_failed")
        self.endpoint = endpoint
