from typing import Any, Mapping, Protocol

from imagineer.prompts.report_prompt import ReportRequest


class AIClient(Protocol):
    async def generate_json(
        self, request: ReportRequest, *, form_data: Mapping[str, Any] | None = None
    ) -> str: ...
