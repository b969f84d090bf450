import sys
import tempfile
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from imagineer.core.scoring import (  # noqa: E402
    get_scoring_config,
    get_scoring_value,
    load_scoring_rules,
)


class ScoringConfigTests(unittest.TestCase):
    def test_loader_and_value_lookup(self):
        config = get_scoring_config()
        self.assertIsInstance(config, dict)
        self.assertEqual(get_scoring_value("dominance.primary_threshold"), 70)
        self.assertEqual(get_scoring_value("dominance.secondary_margin"), 10)
        self.assertIsNone(get_scoring_value("dominance.missing"))
        self.assertEqual(get_scoring_value("", default="x"), "x")

    def test_rules_keep_listed_order_and_match_three_skill_personas_first(self):
        rules = load_scoring_rules()
        self.assertEqual(rules.personas[0].persona, "Narrative Architect")
        self.assertEqual(rules.personas[-1].persona, "Community Catalyst")

        ordered = rules.full_match_order
        sizes = [len(rule.skills) for rule in ordered]
        self.assertEqual(sizes, sorted(sizes, reverse=True))
        self.assertEqual(ordered[0].persona, "Community Catalyst")
        # Two-skill entries keep their configured order.
        self.assertEqual(ordered[1].persona, "Narrative Architect")
        self.assertEqual(ordered[2].persona, "System Builder")
        self.assertEqual(rules.default_persona, "Integrated Imagineer")
        self.assertEqual((rules.min_skills, rules.max_skills), (2, 3))

    def test_unknown_skill_in_config_is_rejected(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "scoring.yaml"
            path.write_text(
                "personas:\n  - persona: Broken\n    skills: [communication, juggling]\n",
                encoding="utf-8",
            )
            with self.assertRaises(RuntimeError) as ctx:
                load_scoring_rules(path)
        self.assertIn("juggling", str(ctx.exception))

    def test_missing_config_file_is_reported(self):
        with self.assertRaises(RuntimeError):
            load_scoring_rules(Path("does/not/exist.yaml"))

    def test_custom_thresholds_are_read(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "scoring.yaml"
            path.write_text(
                "dominance:\n  primary_threshold: 80\n  secondary_margin: 5\n"
                "personas:\n  - persona: Solo\n    skills: [eq]\n"
                "default_persona: Nobody\n",
                encoding="utf-8",
            )
            rules = load_scoring_rules(path)
        self.assertEqual(rules.primary_threshold, 80)
        self.assertEqual(rules.secondary_margin, 5)
        self.assertEqual(rules.default_persona, "Nobody")


if __name__ == "__main__":
    unittest.main()
