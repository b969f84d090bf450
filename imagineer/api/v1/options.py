from fastapi import APIRouter

from imagineer.schemas.form import (
    AGE_BRACKET_OPTIONS,
    BUDGET_OPTIONS,
    MARKET_OPTIONS,
    MAX_WORKSTYLES,
    SKILL_DEFINITIONS,
    SKILL_KEYS,
    WORKSTYLE_OPTIONS,
    form_defaults,
)

router = APIRouter()


@router.get("/options", summary="Form options", description="Choices and defaults for the diagnostic form.")
async def form_options():
    return {
        "skills": [{"id": key, **SKILL_DEFINITIONS[key]} for key in SKILL_KEYS],
        "workstyles": list(WORKSTYLE_OPTIONS),
        "maxWorkstyles": MAX_WORKSTYLES,
        "budgets": [dict(option) for option in BUDGET_OPTIONS],
        "ageBrackets": list(AGE_BRACKET_OPTIONS),
        "markets": list(MARKET_OPTIONS),
        "defaults": form_defaults(),
    }
