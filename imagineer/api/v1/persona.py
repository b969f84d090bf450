from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from imagineer.api.deps import get_scoring_rules
from imagineer.core.rate_limit import rate_limit
from imagineer.core.scoring import ScoringRules
from imagineer.features.persona import build_skill_profile
from imagineer.schemas.form import SkillScores

router = APIRouter()


class PersonaRequest(BaseModel):
    scores: SkillScores


@router.post("/persona")
@rate_limit()
async def persona_preview(
    request: Request,
    payload: PersonaRequest,
    rules: ScoringRules = Depends(get_scoring_rules),
):
    _ = request
    profile = build_skill_profile(payload.scores, rules)
    return {
        "normalized": profile.normalized,
        "topSkills": list(profile.top_skills),
        "persona": profile.persona,
    }
