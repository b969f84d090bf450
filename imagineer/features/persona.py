from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from imagineer.core.errors import SubmissionValidationError
from imagineer.core.scoring import ScoringRules
from imagineer.schemas.form import SkillScores

from .skills import identify_top_skills, normalize_scores

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkillProfile:
    normalized: dict[str, int]
    top_skills: tuple[str, ...]
    persona: str


def determine_persona(top_skills: Sequence[str], rules: ScoringRules) -> str:
    if not top_skills:
        raise SubmissionValidationError("Cannot resolve a persona without any dominant skills.")

    present = set(top_skills)
    for rule in rules.full_match_order:
        if rule.skills <= present:
            return rule.persona

    best_label: str | None = None
    best_count = 0
    for rule in rules.personas:
        count = len(rule.skills & present)
        if count > best_count:
            best_label, best_count = rule.persona, count
    if best_label is not None:
        logger.debug("persona_partial_match skills=%s persona=%s overlap=%s", list(top_skills), best_label, best_count)
        return best_label

    return rules.default_persona


def build_skill_profile(scores: SkillScores, rules: ScoringRules) -> SkillProfile:
    normalized = normalize_scores(scores)
    top_skills = identify_top_skills(normalized, rules)
    return SkillProfile(
        normalized=normalized,
        top_skills=top_skills,
        persona=determine_persona(top_skills, rules),
    )
