import unittest
import sys
import os
from unittest.mock import MagicMock
sys.path.append(os.getcwd())

from fakes import make_chart
from kundli.domain.rules.rule_engine import RuleEngine
from kundli.domain.rules.schemas import DoshaRule, MatchingRule, RuleEvaluation, YogaRule
from kundli.domain.rules.yoga_rules import YOGA_RULES, ruchaka


class TestRuleEngine(unittest.TestCase):
    def setUp(self):
        self.engine = RuleEngine()
        self.chart = make_chart({"Mars": 280.0, "Saturn": 10.0, "Moon": 110.0})

    def test_evaluate_collects_yogas_and_doshas(self):
        result = self.engine.evaluate(self.chart)

        self.assertIsInstance(result, RuleEvaluation)
        yoga_rules = {r.rule for r in result.yogas}
        self.assertIn(YogaRule.RUCHAKA, yoga_rules)
        self.assertIn(YogaRule.PARIVARTANA, yoga_rules)
        self.assertIn(DoshaRule.GANDMOOL, {r.rule for r in result.doshas})

    def test_deterministic(self):
        self.assertEqual(self.engine.evaluate(self.chart), self.engine.evaluate(self.chart))

    def test_subset_of_rules(self):
        records = self.engine.evaluate_yogas(self.chart, [YogaRule.RUCHAKA])
        self.assertEqual([r.rule for r in records], [YogaRule.RUCHAKA])

        self.assertEqual(self.engine.evaluate_doshas(self.chart, []), [])

    def test_missing_evaluator_is_rejected(self):
        with self.assertRaises(ValueError):
            RuleEngine(yoga_rules={YogaRule.RUCHAKA: ruchaka})

    def test_custom_evaluator_is_dispatched(self):
        evaluator = MagicMock(return_value=[])
        rules = {**YOGA_RULES, YogaRule.AMALA: evaluator}

        RuleEngine(yoga_rules=rules).evaluate_yogas(self.chart, [YogaRule.AMALA])
        evaluator.assert_called_once()

    def test_matching_requires_moons(self):
        positions = self.chart.positions
        with self.assertRaises(ValueError):
            self.engine.evaluate_matching(positions["Sun"], positions["Moon"])

    def test_matching(self):
        other = make_chart({"Moon": 295.0}).positions["Moon"]
        records = self.engine.evaluate_matching(self.chart.positions["Moon"], other)

        # Cancer and Capricorn are 7/7 apart; Ashlesha and Dhanishta differ in nadi
        self.assertNotIn(MatchingRule.BHAKOOT, {r.rule for r in records})
        self.assertNotIn(MatchingRule.NADI, {r.rule for r in records})


if __name__ == "__main__":
    unittest.main()
