from .persona import SkillProfile, build_skill_profile, determine_persona
from .skills import identify_top_skills, normalize_scores, rank_skills

__all__ = [
    "normalize_scores",
    "rank_skills",
    "identify_top_skills",
    "determine_persona",
    "SkillProfile",
    "build_skill_profile",
]
