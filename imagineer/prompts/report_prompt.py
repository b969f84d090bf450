from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from typing import Any

from imagineer.core.errors import SchemaContractError
from imagineer.features.persona import SkillProfile
from imagineer.schemas.form import SKILL_KEYS, FormSubmission

PROMPT_VERSION = "2024-06-advisor-v2"

SYSTEM_INSTRUCTION = (
    'You are "The Persuasion Imagineer", a strategic advisor that converts a person\'s skills, '
    "interests, and constraints into realistic, high-leverage market opportunities. Your outputs "
    "must be specific, feasible, and action-oriented. You are confident, warm, conversational, "
    "and direct. You avoid vague pep-talks and hype.\n"
    "\n"
    "OBJECTIVE:\n"
    "Given the user's data, produce a complete diagnostic report.\n"
    "\n"
    "PROCESS:\n"
    "1. Adopt Persona Tone: Generate the entire response in the voice of a trusted strategic "
    "advisor. Be clear, direct, and encouraging.\n"
    "2. Analyze Strengths: Use the top strengths to frame the entire report.\n"
    "3. Generate Opportunities: Create 3-5 opportunity plays that are a strong fit for the user's "
    "persona, strengths, chosen markets, workstyle, and constraints.\n"
    "4. Apply Feasibility Filters:\n"
    "   - Age/Physical Realism: Do not suggest physically demanding roles for older age brackets "
    "or roles that contradict constraints. Propose adjacent, realistic roles (e.g., coach "
    "instead of player).\n"
    "   - Budget/Time: Favor low-friction, digital-first ideas for low budgets and limited time.\n"
    "   - Speed-to-Revenue: Ensure at least one opportunity is viable within 30 days.\n"
    "   - Authenticity: Opportunities must align with the user's strengths and wildcards.\n"
    "5. Structure Output: Generate the report according to the JSON schema provided.\n"
    "\n"
    "You MUST return a single, valid JSON object that strictly follows the provided schema. "
    "Do not include any text, markdown, or explanations outside of the JSON object."
)


def _string(description: str) -> dict[str, Any]:
    return {"type": "STRING", "description": description}


def _string_list(description: str, *, min_items: int, max_items: int | None = None) -> dict[str, Any]:
    node: dict[str, Any] = {
        "type": "ARRAY",
        "description": description,
        "items": {"type": "STRING"},
        "minItems": min_items,
    }
    if max_items is not None:
        node["maxItems"] = max_items
    return node


REPORT_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "personaTitle": _string("A creative, 2-3 word title for the user's persona."),
        "identityParagraph": _string("A 3-4 sentence paragraph describing the user's core identity."),
        "topStrengths": {
            "type": "ARRAY",
            "description": "The user's top 2-3 strengths, derived from their highest scores.",
            "minItems": 2,
            "maxItems": 3,
            "items": {
                "type": "OBJECT",
                "properties": {
                    "strength": _string("Name of the strength."),
                    "reason": _string("Why this is a strength for them and how it applies."),
                },
                "required": ["strength", "reason"],
            },
        },
        "opportunityMap": {
            "type": "ARRAY",
            "description": "3-5 distinct, actionable opportunities tailored to the user.",
            "minItems": 3,
            "maxItems": 5,
            "items": {
                "type": "OBJECT",
                "properties": {
                    "what": _string("A concise name for the opportunity."),
                    "whyFit": _string("Why this fits their skill stack and workstyle."),
                    "audience": _string("The specific target audience."),
                    "offer": _string("The core offer or service."),
                    "channel": _string("The primary marketing or distribution channel."),
                    "speedPlan": _string("A concrete 30-day action plan."),
                },
                "required": ["what", "whyFit", "audience", "offer", "channel", "speedPlan"],
            },
        },
        "quickWins": _string_list("3-5 actions the user can take this week.", min_items=3, max_items=5),
        "buildPlan": _string_list("3-5 strategic actions for the next 90 days.", min_items=3, max_items=5),
        "guardrails": _string_list("At least 3 pitfalls to avoid based on their profile.", min_items=3),
        "tools": _string_list("5-7 recommended tools that align with the opportunities.", min_items=5, max_items=7),
        "starterPrompts": {
            "type": "ARRAY",
            "description": "Two detailed prompts for brainstorming the top opportunity with an AI assistant.",
            "minItems": 2,
            "maxItems": 2,
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": _string("A short title for the prompt's purpose."),
                    "prompt": _string("The full text of the starter prompt."),
                },
                "required": ["title", "prompt"],
            },
        },
    },
    "required": [
        "personaTitle",
        "identityParagraph",
        "topStrengths",
        "opportunityMap",
        "quickWins",
        "buildPlan",
        "guardrails",
        "tools",
        "starterPrompts",
    ],
}

REQUIRED_REPORT_FIELDS: dict[str, tuple[str, ...]] = {
    "personaTitle": (),
    "identityParagraph": (),
    "topStrengths": ("strength", "reason"),
    "opportunityMap": ("what", "whyFit", "audience", "offer", "channel", "speedPlan"),
    "quickWins": (),
    "buildPlan": (),
    "guardrails": (),
    "tools": (),
    "starterPrompts": ("title", "prompt"),
}


@dataclass(frozen=True)
class ReportRequest:
    system_instruction: str
    user_content: str
    response_schema: dict[str, Any]


def report_schema() -> dict[str, Any]:
    return copy.deepcopy(REPORT_SCHEMA)


def validate_report_schema(schema: dict[str, Any]) -> None:
    """Raise SchemaContractError unless every report field is declared and required."""
    properties = schema.get("properties") if isinstance(schema, dict) else None
    required = set(schema.get("required") or []) if isinstance(schema, dict) else set()
    if not isinstance(properties, dict):
        raise SchemaContractError("Report schema has no properties.", missing=list(REQUIRED_REPORT_FIELDS))

    missing: list[str] = []
    for field, sub_fields in REQUIRED_REPORT_FIELDS.items():
        node = properties.get(field)
        if not isinstance(node, dict) or field not in required:
            missing.append(field)
            continue
        if not sub_fields:
            continue
        items = node.get("items") or {}
        item_props = items.get("properties") or {}
        item_required = set(items.get("required") or [])
        for sub in sub_fields:
            if sub not in item_props or sub not in item_required:
                missing.append(f"{field}.{sub}")

    if missing:
        raise SchemaContractError(
            f"Report schema is missing required fields: {', '.join(missing)}",
            missing=missing,
        )


def _join(values: tuple[str, ...] | list[str], empty: str) -> str:
    return ", ".join(values) if values else empty


def build_user_content(
    form: FormSubmission,
    persona: str,
    top_skills: tuple[str, ...] | list[str],
    normalized: dict[str, int],
) -> str:
    scores = json.dumps({key: normalized[key] for key in SKILL_KEYS}, separators=(",", ":"))
    return "\n".join(
        [
            "USER DATA:",
            f"- Name: {form.name}",
            f"- Email: {form.email}",
            f"- Scores (0-100): {scores}",
            f"- Top Strengths: {_join(list(top_skills), 'Not specified')}",
            f"- Chosen Persona: {persona}",
            f"- Markets: {_join(form.markets, 'Not specified')}",
            f"- Workstyle: {_join(form.workstyle, 'Not specified')}",
            f"- Time per week: {form.time_per_week_hours} hours",
            f"- Budget: {form.budget_level}",
            f"- Age Bracket: {form.age_bracket}",
            f"- Wildcards (hobbies, interests, past careers): {form.wildcards or 'None'}",
            f"- Constraints: {form.constraints or 'None'}",
        ]
    )


def build_report_request(
    form: FormSubmission,
    profile: SkillProfile,
    schema: dict[str, Any] | None = None,
) -> ReportRequest:
    response_schema = report_schema() if schema is None else schema
    validate_report_schema(response_schema)
    return ReportRequest(
        system_instruction=SYSTEM_INSTRUCTION,
        user_content=build_user_content(form, profile.persona, profile.top_skills, profile.normalized),
        response_schema=response_schema,
    )
