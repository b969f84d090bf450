import json
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
for path in (PROJECT_ROOT, Path(__file__).resolve().parent):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from imagineer.core.errors import MalformedResponse  # noqa: E402
from imagineer.core.scoring import load_scoring_rules  # noqa: E402
from imagineer.features.persona import build_skill_profile  # noqa: E402
from imagineer.services.report_assembler import (  # noqa: E402
    assemble_report,
    build_snapshot,
    parse_snapshot,
)
from sample_data import make_form, model_response  # noqa: E402


class ReportAssemblerTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.rules = load_scoring_rules()

    def setUp(self):
        self.form = make_form()
        self.profile = build_skill_profile(self.form.scores, self.rules)
        self.snapshot = build_snapshot(self.form, self.profile)

    def test_assembles_report_from_json_text(self):
        report = assemble_report(json.dumps(model_response()), self.snapshot)
        self.assertEqual(report.persona_title, "Signal Sculptor")
        self.assertEqual(len(report.opportunity_map), 3)
        self.assertEqual(report.opportunity_map[0].why_fit, "Uses your voice and planning skills.")
        dumped = report.model_dump(by_alias=True)
        self.assertIn("speedPlan", dumped["opportunityMap"][0])
        self.assertIn("jsonData", dumped)

    def test_snapshot_uses_computed_persona_not_model_title(self):
        report = assemble_report(model_response(), self.snapshot)
        snapshot = json.loads(report.json_data)
        self.assertEqual(snapshot["persona"], "Narrative Architect")
        self.assertNotEqual(snapshot["persona"], report.persona_title)

    def test_model_supplied_json_data_is_ignored(self):
        report = assemble_report(model_response(jsonData='{"persona": "forged"}'), self.snapshot)
        self.assertEqual(parse_snapshot(report).persona, "Narrative Architect")

    def test_missing_required_field_is_rejected(self):
        payload = model_response()
        del payload["topStrengths"]
        with self.assertRaises(MalformedResponse) as ctx:
            assemble_report(payload, self.snapshot)
        self.assertIn("topStrengths", ctx.exception.missing)

    def test_missing_nested_field_is_rejected(self):
        payload = model_response()
        del payload["opportunityMap"][1]["channel"]
        with self.assertRaises(MalformedResponse) as ctx:
            assemble_report(payload, self.snapshot)
        self.assertIn("opportunityMap.1.channel", ctx.exception.missing)

    def test_wrong_type_is_rejected(self):
        with self.assertRaises(MalformedResponse):
            assemble_report(model_response(quickWins="do things"), self.snapshot)

    def test_invalid_json_is_rejected(self):
        with self.assertRaises(MalformedResponse):
            assemble_report("Sure! Here is your report: {", self.snapshot)

    def test_non_object_json_is_rejected(self):
        with self.assertRaises(MalformedResponse):
            assemble_report("[1, 2, 3]", self.snapshot)

    def test_snapshot_round_trip(self):
        report = assemble_report(model_response(), self.snapshot)
        restored = parse_snapshot(report)
        self.assertEqual(restored, self.snapshot)
        self.assertEqual(restored.strengths, ["communication", "strategy", "creative"])
        self.assertEqual(restored.scores["communication"], 90)
        self.assertTrue(restored.consent)
        self.assertEqual(restored.markets, ["Education", "Professional Services"])


if __name__ == "__main__":
    unittest.main()
