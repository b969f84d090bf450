import httpx

from imagineer.ai.config import AIConfig
from imagineer.ai.types import AIClient

from imagineer.ai.providers.gemini_provider import GeminiProvider
from imagineer.ai.providers.openai_provider import OpenAIProvider
from imagineer.ai.providers.relay_provider import RelayProvider


def get_ai_client(cfg: AIConfig, http_client: httpx.AsyncClient | None = None) -> AIClient:
    if cfg.provider == "gemini":
        return GeminiProvider(model=cfg.model, api_key=cfg.gemini_api_key, temperature=cfg.temperature)

    if cfg.provider == "openai":
        return OpenAIProvider(
            model=cfg.model,
            api_key=cfg.openai_api_key,
            base_url=cfg.openai_base_url,
            temperature=cfg.temperature,
        )

    if cfg.provider == "relay":
        return RelayProvider(base_url=cfg.relay_base_url, client=http_client)

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
