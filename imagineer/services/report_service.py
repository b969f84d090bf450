from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass

from imagineer.ai.types import AIClient
from imagineer.core.errors import GenerationTimeout, SubmissionValidationError
from imagineer.core.scoring import ScoringRules
from imagineer.features.persona import SkillProfile, build_skill_profile
from imagineer.integrations.webhooks import WebhookDispatcher
from imagineer.prompts.report_prompt import ReportRequest, build_report_request
from imagineer.schemas.form import FormSubmission
from imagineer.schemas.report import Report, ReportSnapshot
from imagineer.services.report_assembler import assemble_report, build_snapshot
from imagineer.services.submission_gate import SubmissionGate

logger = logging.getLogger("imagineer.report")


@dataclass(frozen=True)
class PreparedReport:
    profile: SkillProfile
    request: ReportRequest
    snapshot: ReportSnapshot


class ReportService:
    def __init__(
        self,
        ai_client: AIClient,
        rules: ScoringRules,
        *,
        timeout_s: float,
        webhooks: WebhookDispatcher | None = None,
        gate: SubmissionGate | None = None,
    ):
        self._ai_client = ai_client
        self._rules = rules
        self._timeout_s = timeout_s
        self._webhooks = webhooks
        self._gate = gate or SubmissionGate()
        self._background: set[asyncio.Task] = set()

    def prepare(self, form: FormSubmission) -> PreparedReport:
        if not form.consent:
            raise SubmissionValidationError(
                "Consent is required before a report can be generated.", code="consent_required"
            )
        profile = build_skill_profile(form.scores, self._rules)
        return PreparedReport(
            profile=profile,
            request=build_report_request(form, profile),
            snapshot=build_snapshot(form, profile),
        )

    async def _generate(self, form: FormSubmission) -> Report:
        started = time.perf_counter()
        prepared = self.prepare(form)
        form_data = form.model_dump(mode="json")
        form_data["persona"] = prepared.profile.persona

        try:
            raw = await asyncio.wait_for(
                self._ai_client.generate_json(prepared.request, form_data=form_data),
                timeout=self._timeout_s,
            )
        except asyncio.TimeoutError as exc:
            logger.warning("report_generation_timeout timeout_s=%s", self._timeout_s)
            raise GenerationTimeout(self._timeout_s) from exc

        report = assemble_report(raw, prepared.snapshot)
        logger.info(
            "report_generated persona=%s top_skills=%s latency_ms=%s",
            prepared.profile.persona,
            ",".join(prepared.profile.top_skills),
            int((time.perf_counter() - started) * 1000),
        )
        self._schedule_webhooks(prepared.snapshot)
        return report

    async def generate(self, form: FormSubmission, *, session_id: str | None = None) -> Report:
        if not session_id:
            return await self._generate(form)
        return await self._gate.run(session_id, self._generate(form))

    def _schedule_webhooks(self, snapshot: ReportSnapshot) -> None:
        if self._webhooks is None or not snapshot.consent:
            return
        task = asyncio.create_task(self._webhooks.dispatch(snapshot))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def drain(self) -> None:
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)
