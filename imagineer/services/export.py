from __future__ import annotations

import json
import re

from imagineer.schemas.report import Report

_FILENAME_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


def export_filename(name: str, extension: str) -> str:
    safe = _FILENAME_UNSAFE.sub("-", name.strip()).strip("-") or "Report"
    return f"Persuasion-Imagineering-Report-{safe}.{extension}"


def report_to_json(report: Report) -> str:
    return json.dumps(report.model_dump(by_alias=True), indent=2, ensure_ascii=False)


def _bullets(items: list[str]) -> list[str]:
    return [f"- {item}" for item in items]


def report_to_text(report: Report) -> str:
    """Plain-text rendering used for clipboard copy and PDF export."""
    sections: list[tuple[str, list[str]]] = [
        ("Your Persona", [report.persona_title, report.identity_paragraph]),
        (
            "Your Edge (Top 3 Strength Zones)",
            [f"- {item.strength}: {item.reason}" for item in report.top_strengths],
        ),
        (
            "Opportunity Map (3-5 ideas)",
            [
                "\n".join(
                    [
                        f"{index}. {item.what}",
                        f"   Why it fits: {item.why_fit}",
                        f"   Audience: {item.audience}",
                        f"   Offer: {item.offer}",
                        f"   Channel: {item.channel}",
                        f"   30-day plan: {item.speed_plan}",
                    ]
                )
                for index, item in enumerate(report.opportunity_map, start=1)
            ],
        ),
        ("Quick Wins (Next 7-14 days)", _bullets(report.quick_wins)),
        ("30-Day Build Plan", _bullets(report.build_plan)),
        ("Guardrails (Not Worth Your Time)", _bullets(report.guardrails)),
        ("Tools to Explore", _bullets(report.tools)),
        (
            "Starter Prompts",
            [f"{item.title}\n{item.prompt}" for item in report.starter_prompts],
        ),
    ]
    blocks = [f"{title}\n" + "\n".join(lines) for title, lines in sections if lines]
    return "\n\n".join(blocks).strip() + "\n"
