from __future__ import annotations

import copy
from typing import Any

from imagineer.schemas.form import FormSubmission

SAMPLE_FORM: dict[str, Any] = {
    "name": "Dana Reyes",
    "email": "dana@reyes.studio",
    "consent": True,
    "scores": {
        "communication": 9,
        "creative": 8,
        "strategy": 9,
        "technical": 3,
        "eq": 4,
        "learning": 5,
    },
    "workstyle": ["Teach", "Advise"],
    "time_per_week_hours": 8,
    "budget_level": "low",
    "age_bracket": "45-59",
    "markets": ["Education", "Professional Services"],
    "wildcards": "Former radio host, amateur woodworker",
    "constraints": "Two kids, no weekend work",
}

SAMPLE_MODEL_RESPONSE: dict[str, Any] = {
    "personaTitle": "Signal Sculptor",
    "identityParagraph": "You turn complicated ideas into stories people act on.",
    "topStrengths": [
        {"strength": "Strategic Communication", "reason": "You pair clear messaging with a plan."},
        {"strength": "Creative Framing", "reason": "You know how to make an idea memorable."},
    ],
    "opportunityMap": [
        {
            "what": f"Opportunity {index}",
            "whyFit": "Uses your voice and planning skills.",
            "audience": "Independent consultants",
            "offer": "A four-week messaging sprint",
            "channel": "LinkedIn",
            "speedPlan": "Week 1 outline, week 2 pilot, week 3 refine, week 4 launch.",
        }
        for index in range(1, 4)
    ],
    "quickWins": ["Post a case study", "Email three past colleagues", "Draft an offer page"],
    "buildPlan": ["Run two pilots", "Collect testimonials", "Package a workshop"],
    "guardrails": ["Avoid custom one-off work", "Skip paid ads early", "Do not discount below cost"],
    "tools": ["Notion", "Canva", "Calendly", "ConvertKit", "Descript"],
    "starterPrompts": [
        {"title": "Offer builder", "prompt": "Help me design a messaging sprint offer for consultants."},
        {"title": "Content plan", "prompt": "Draft a 30-day LinkedIn content calendar for my offer."},
    ],
}


def form_payload(**overrides: Any) -> dict[str, Any]:
    payload = copy.deepcopy(SAMPLE_FORM)
    payload.update(overrides)
    return payload


def make_form(**overrides: Any) -> FormSubmission:
    return FormSubmission.model_validate(form_payload(**overrides))


def model_response(**overrides: Any) -> dict[str, Any]:
    payload = copy.deepcopy(SAMPLE_MODEL_RESPONSE)
    payload.update(overrides)
    return payload
