from __future__ import annotations

from collections.abc import Mapping

from imagineer.core.errors import SubmissionValidationError
from imagineer.core.scoring import ScoringRules
from imagineer.schemas.form import SKILL_KEYS, SkillScores

NORMALIZATION_FACTOR = 10


def normalize_scores(scores: SkillScores) -> dict[str, int]:
    """Rescale 0-10 ratings onto 0-100, keyed in skill enumeration order."""
    raw = scores.as_dict()
    return {key: raw[key] * NORMALIZATION_FACTOR for key in SKILL_KEYS}


def _check_skill_keys(normalized: Mapping[str, int]) -> None:
    keys = set(normalized)
    if keys != set(SKILL_KEYS) or len(normalized) != len(SKILL_KEYS):
        missing = sorted(set(SKILL_KEYS) - keys)
        unknown = sorted(keys - set(SKILL_KEYS))
        raise SubmissionValidationError(
            f"Scores must cover exactly the six skills (missing={missing}, unknown={unknown})."
        )


def rank_skills(normalized: Mapping[str, int]) -> list[str]:
    # sorted() is stable, so equal scores keep enumeration order.
    return sorted(SKILL_KEYS, key=lambda key: -normalized[key])


def identify_top_skills(normalized: Mapping[str, int], rules: ScoringRules) -> tuple[str, ...]:
    """Pick the dominant skills.

    Every skill at or above the primary threshold counts, plus any skill within
    the secondary margin of the top score. When that leaves fewer than
    ``rules.min_skills`` the top ranked skills are used instead. The result is
    capped at ``rules.max_skills``, highest scores first.
    """
    _check_skill_keys(normalized)
    ranked = rank_skills(normalized)
    top_score = normalized[ranked[0]]

    primary = [key for key in ranked if normalized[key] >= rules.primary_threshold]
    secondary = [
        key
        for key in ranked
        if normalized[key] >= top_score - rules.secondary_margin and key not in primary
    ]
    chosen = set(primary) | set(secondary)
    dominant = [key for key in ranked if key in chosen]

    if len(dominant) < rules.min_skills:
        dominant = ranked[: rules.min_skills]

    return tuple(dominant[: rules.max_skills])
