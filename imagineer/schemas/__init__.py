from .form import (
    AGE_BRACKET_OPTIONS,
    BUDGET_OPTIONS,
    MARKET_OPTIONS,
    SKILL_DEFINITIONS,
    SKILL_KEYS,
    WORKSTYLE_OPTIONS,
    FormSubmission,
    SkillScores,
)
from .report import Opportunity, Report, ReportBody, ReportSnapshot, StarterPrompt, Strength

__all__ = [
    "SKILL_KEYS",
    "SKILL_DEFINITIONS",
    "WORKSTYLE_OPTIONS",
    "BUDGET_OPTIONS",
    "AGE_BRACKET_OPTIONS",
    "MARKET_OPTIONS",
    "SkillScores",
    "FormSubmission",
    "Strength",
    "Opportunity",
    "StarterPrompt",
    "ReportBody",
    "Report",
    "ReportSnapshot",
]
