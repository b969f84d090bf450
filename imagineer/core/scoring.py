from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from imagineer.schemas.form import SKILL_KEYS

_SCORING_CONFIG_CACHE: dict[str, Any] | None = None
_SCORING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "scoring.yaml"


@dataclass(frozen=True)
class PersonaRule:
    persona: str
    skills: frozenset[str]


@dataclass(frozen=True)
class ScoringRules:
    primary_threshold: int
    secondary_margin: int
    min_skills: int
    max_skills: int
    personas: tuple[PersonaRule, ...]
    default_persona: str

    @property
    def full_match_order(self) -> tuple[PersonaRule, ...]:
        """Personas with larger skill sets first, configured order kept within a size."""
        return tuple(sorted(self.personas, key=lambda rule: -len(rule.skills)))


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise RuntimeError(
            f"Scoring config not found at '{path}'. "
            "Expected file: config/scoring.yaml"
        )

    try:
        import yaml  # type: ignore[import-not-found]
    except Exception as exc:
        raise RuntimeError(
            "Unable to parse scoring config because PyYAML is unavailable. "
            "Install dependency: PyYAML."
        ) from exc

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Failed to read scoring config '{path}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:  # type: ignore[attr-defined]
        raise RuntimeError(f"Invalid YAML in scoring config '{path}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(f"Invalid scoring config '{path}': expected a top-level mapping.")
    return parsed


def get_scoring_config() -> dict[str, Any]:
    """Load scoring config from repo-level config/scoring.yaml and cache it."""
    global _SCORING_CONFIG_CACHE

    if _SCORING_CONFIG_CACHE is not None:
        return _SCORING_CONFIG_CACHE

    _SCORING_CONFIG_CACHE = _load_yaml(_SCORING_CONFIG_PATH)
    return _SCORING_CONFIG_CACHE


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Get nested config value using dot path notation, e.g. 'dominance.primary_threshold'."""
    if not path:
        return default

    current: Any = get_scoring_config()
    for key in path.split("."):
        if not isinstance(current, dict):
            return default
        if key not in current:
            return default
        current = current[key]
    return current


def _parse_personas(raw: Any) -> tuple[PersonaRule, ...]:
    if not isinstance(raw, list) or not raw:
        raise RuntimeError("Scoring config 'personas' must be a non-empty list.")

    rules: list[PersonaRule] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise RuntimeError(f"Scoring config personas[{index}] must be a mapping.")
        label = str(entry.get("persona") or "").strip()
        skills = entry.get("skills") or []
        if not label:
            raise RuntimeError(f"Scoring config personas[{index}] is missing a persona label.")
        unknown = [s for s in skills if s not in SKILL_KEYS]
        if unknown:
            raise RuntimeError(f"Scoring config persona '{label}' names unknown skills: {unknown}")
        if len(set(skills)) != len(skills) or not skills:
            raise RuntimeError(f"Scoring config persona '{label}' must list distinct skills.")
        rules.append(PersonaRule(persona=label, skills=frozenset(skills)))

    return tuple(rules)


def scoring_rules_from_mapping(config: dict[str, Any]) -> ScoringRules:
    dominance = config.get("dominance") or {}
    rules = ScoringRules(
        primary_threshold=int(dominance.get("primary_threshold", 70)),
        secondary_margin=int(dominance.get("secondary_margin", 10)),
        min_skills=int(dominance.get("min_skills", 2)),
        max_skills=int(dominance.get("max_skills", 3)),
        personas=_parse_personas(config.get("personas")),
        default_persona=str(config.get("default_persona") or "Integrated Imagineer").strip(),
    )
    if not 1 <= rules.min_skills <= rules.max_skills <= len(SKILL_KEYS):
        raise RuntimeError("Scoring config dominance.min_skills/max_skills are out of range.")
    return rules


def load_scoring_rules(path: str | Path | None = None) -> ScoringRules:
    if path is None:
        return scoring_rules_from_mapping(get_scoring_config())
    return scoring_rules_from_mapping(_load_yaml(Path(path)))
