from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from imagineer.core.config import Settings
from imagineer.core.errors import WebhookDeliveryFailure
from imagineer.schemas.report import ReportSnapshot

logger = logging.getLogger(__name__)

SHEET = "sheet"
EMAIL_LIST = "email_list"

_PLACEHOLDER_MARKERS = ("...", "your.aweber.integration.url", "<", ">")
_PLACEHOLDER_HOST = "example.com"


@dataclass(frozen=True)
class WebhookConfig:
    sheet_url: str | None = None
    email_list_url: str | None = None
    timeout_s: float = 10.0


def webhook_config_from_settings(settings: Settings) -> WebhookConfig:
    return WebhookConfig(
        sheet_url=settings.sheet_webhook_url,
        email_list_url=settings.email_list_webhook_url,
        timeout_s=settings.webhook_timeout_s,
    )


def looks_like_placeholder(url: str | None) -> bool:
    value = (url or "").strip()
    if not value:
        return True
    lower = value.lower()
    if lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}:
        return True
    if not lower.startswith(("http://", "https://")):
        return True
    if any(marker in lower for marker in _PLACEHOLDER_MARKERS):
        return True
    try:
        host = httpx.URL(value).host.lower()
    except httpx.InvalidURL:
        return True
    return not host or host == _PLACEHOLDER_HOST or host.endswith("." + _PLACEHOLDER_HOST)


class WebhookDispatcher:
    """Best-effort forwarding of consenting leads to the sheet and email-list hooks."""

    def __init__(self, config: WebhookConfig, client: httpx.AsyncClient):
        self._config = config
        self._client = client

    async def _post(self, endpoint: str, url: str | None, payload: dict[str, Any]) -> str:
        if looks_like_placeholder(url):
            logger.warning("webhook_skipped endpoint=%s reason=placeholder_url", endpoint)
            return "skipped"
        try:
            response = await self._client.post(url, json=payload, timeout=self._config.timeout_s)
            response.raise_for_status()
        except Exception as exc:  # noqa: BLE001 - delivery must not affect the report
            failure = WebhookDeliveryFailure(endpoint, str(exc) or exc.__class__.__name__)
            logger.warning("webhook_delivery_failed %s", failure)
            return "failed"
        logger.info("webhook_delivered endpoint=%s status=%s", endpoint, response.status_code)
        return "sent"

    async def post_snapshot(self, snapshot: ReportSnapshot) -> str:
        return await self._post(SHEET, self._config.sheet_url, snapshot.model_dump())

    async def post_subscriber(self, name: str, email: str) -> str:
        return await self._post(EMAIL_LIST, self._config.email_list_url, {"name": name, "email": email})

    async def dispatch(self, snapshot: ReportSnapshot) -> dict[str, str]:
        if not snapshot.consent:
            logger.info("webhook_skipped reason=no_consent")
            return {SHEET: "skipped", EMAIL_LIST: "skipped"}
        return {
            SHEET: await self.post_snapshot(snapshot),
            EMAIL_LIST: await self.post_subscriber(snapshot.name, snapshot.email),
        }
