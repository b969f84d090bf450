from dataclasses import dataclass

from imagineer.core.config import Settings


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    temperature: float
    gemini_api_key: str | None = None
    openai_api_key: str | None = None
    openai_base_url: str | None = None
    relay_base_url: str = "http://localhost:3001"


def ai_config_from_settings(settings: Settings) -> AIConfig:
    return AIConfig(
        provider=settings.ai_provider,
        model=settings.ai_model,
        temperature=settings.ai_temperature,
        gemini_api_key=settings.gemini_api_key,
        openai_api_key=settings.openai_api_key,
        openai_base_url=settings.openai_base_url,
        relay_base_url=settings.relay_base_url,
    )
