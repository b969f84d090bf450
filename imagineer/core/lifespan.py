from contextlib import asynccontextmanager
import logging

import httpx

from imagineer.ai.config import ai_config_from_settings
from imagineer.ai.factory import get_ai_client
from imagineer.core.config import settings
from imagineer.core.scoring import load_scoring_rules
from imagineer.integrations.webhooks import WebhookDispatcher, webhook_config_from_settings
from imagineer.services.report_service import ReportService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    rules = load_scoring_rules(settings.scoring_config_path)
    http_client = httpx.AsyncClient(timeout=settings.webhook_timeout_s)
    ai_cfg = ai_config_from_settings(settings)

    try:
        ai_client = get_ai_client(ai_cfg, http_client=http_client)
    except RuntimeError as exc:
        logger.error("ai_client_unavailable provider=%s: %s", ai_cfg.provider, exc)
        ai_client = None

    dispatcher = WebhookDispatcher(webhook_config_from_settings(settings), http_client)
    service = (
        ReportService(
            ai_client,
            rules,
            timeout_s=settings.generation_timeout_s,
            webhooks=dispatcher,
        )
        if ai_client is not None
        else None
    )

    app.state.scoring_rules = rules
    app.state.http_client = http_client
    app.state.report_service = service
    # The relay endpoint must talk to a real backend, never to itself.
    app.state.relay_client = ai_client if ai_cfg.provider != "relay" else None
    logger.info("startup provider=%s model=%s personas=%s", ai_cfg.provider, ai_cfg.model, len(rules.personas))

    try:
        yield
    finally:
        if service is not None:
            await service.drain()
        await http_client.aclose()
