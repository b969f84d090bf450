from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Strength(_CamelModel):
    strength: str
    reason: str


class Opportunity(_CamelModel):
    what: str
    why_fit: str
    audience: str
    offer: str
    channel: str
    speed_plan: str


class StarterPrompt(_CamelModel):
    title: str
    prompt: str


class ReportBody(_CamelModel):
    """The part of a report written by the model."""

    persona_title: str
    identity_paragraph: str
    top_strengths: list[Strength]
    opportunity_map: list[Opportunity]
    quick_wins: list[str]
    build_plan: list[str]
    guardrails: list[str]
    tools: list[str]
    starter_prompts: list[StarterPrompt]


class Report(ReportBody):
    json_data: str


class ReportSnapshot(BaseModel):
    """Deterministic facts kept with a report, independent of the model's wording."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    persona: str
    strengths: list[str] = Field(default_factory=list)
    markets: list[str] = Field(default_factory=list)
    scores: dict[str, int] = Field(default_factory=dict)
    consent: bool = False
