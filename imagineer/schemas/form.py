from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

SkillKey = Literal["communication", "creative", "strategy", "technical", "eq", "learning"]
Workstyle = Literal["Create", "Teach", "Advise", "Build", "Lead"]
Budget = Literal["low", "medium", "high"]
AgeBracket = Literal["18-29", "30-44", "45-59", "60+"]
Market = Literal[
    "SMB",
    "Creators",
    "B2B SaaS",
    "Healthcare",
    "Education",
    "Nonprofits",
    "Local Services",
    "Professional Services",
    "Ecommerce",
]

# Fixed enumeration order. Ties between equal scores resolve in this order.
SKILL_KEYS: tuple[str, ...] = ("communication", "creative", "strategy", "technical", "eq", "learning")

SKILL_DEFINITIONS: dict[str, dict[str, str]] = {
    "communication": {
        "label": "Communication",
        "prompt": "How skilled are you at expressing ideas through words or speech (writing, teaching, persuading, presenting)?",
    },
    "creative": {
        "label": "Creative Expression",
        "prompt": "How confident are you in producing or shaping creative media: video, design, voice, humor, performance?",
    },
    "strategy": {
        "label": "Strategic Thinking",
        "prompt": "How well do you connect dots, design offers, plan campaigns, or architect marketing systems?",
    },
    "technical": {
        "label": "Technical Fluency",
        "prompt": "How comfortable are you with digital tools: AI apps, automation, analytics, or basic coding?",
    },
    "eq": {
        "label": "Emotional Intelligence",
        "prompt": "How strong are you at reading people, resolving conflict, inspiring, or leading through empathy?",
    },
    "learning": {
        "label": "Learning Agility / Curiosity",
        "prompt": "How quickly do you learn new ideas, explore trends, and synthesize knowledge?",
    },
}

WORKSTYLE_OPTIONS: tuple[str, ...] = ("Create", "Teach", "Advise", "Build", "Lead")
BUDGET_OPTIONS: tuple[dict[str, str], ...] = (
    {"value": "low", "label": "Low (<$100 mo)"},
    {"value": "medium", "label": "Medium ($100–500 mo)"},
    {"value": "high", "label": "High (>$500 mo)"},
)
AGE_BRACKET_OPTIONS: tuple[str, ...] = ("18-29", "30-44", "45-59", "60+")
MARKET_OPTIONS: tuple[str, ...] = (
    "SMB",
    "Creators",
    "B2B SaaS",
    "Healthcare",
    "Education",
    "Nonprofits",
    "Local Services",
    "Professional Services",
    "Ecommerce",
)

MAX_WORKSTYLES = 3

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class SkillScores(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    communication: int = Field(ge=0, le=10)
    creative: int = Field(ge=0, le=10)
    strategy: int = Field(ge=0, le=10)
    technical: int = Field(ge=0, le=10)
    eq: int = Field(ge=0, le=10)
    learning: int = Field(ge=0, le=10)

    def as_dict(self) -> dict[str, int]:
        return {key: getattr(self, key) for key in SKILL_KEYS}


class FormSubmission(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=200)
    consent: bool = False
    scores: SkillScores
    workstyle: tuple[Workstyle, ...] = Field(min_length=1, max_length=MAX_WORKSTYLES)
    time_per_week_hours: int = Field(default=10, ge=0, le=168)
    budget_level: Budget = "low"
    age_bracket: AgeBracket = "30-44"
    markets: tuple[Market, ...] = Field(min_length=1)
    wildcards: str = Field(default="", max_length=2000)
    constraints: str = Field(default="", max_length=2000)

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("name must not be empty")
        return cleaned

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        cleaned = value.strip()
        if not _EMAIL_RE.match(cleaned):
            raise ValueError("email must look like name@example.com")
        return cleaned

    @field_validator("workstyle", "markets")
    @classmethod
    def _validate_unique(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if len(set(value)) != len(value):
            raise ValueError("options must not repeat")
        return value

    @field_validator("wildcards", "constraints")
    @classmethod
    def _strip_free_text(cls, value: str) -> str:
        return value.strip()


def form_defaults() -> dict[str, object]:
    return {
        "name": "",
        "email": "",
        "consent": False,
        "scores": {key: 5 for key in SKILL_KEYS},
        "workstyle": [],
        "time_per_week_hours": 10,
        "budget_level": "low",
        "age_bracket": "30-44",
        "markets": [],
        "wildcards": "",
        "constraints": "",
    }
