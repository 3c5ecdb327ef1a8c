import unittest
import sys
import os
sys.path.append(os.getcwd())

from fakes import make_chart
from kundli.domain.kundali.derived.karaka_calculator import KarakaCalculator
from kundli.domain.kundali.derived.nakshatra_calculator import NakshatraCalculator


class TestNakshatraCalculator(unittest.TestCase):
    def setUp(self):
        self.calculator = NakshatraCalculator()

    def test_ashwini(self):
        info = self.calculator.calculate(0.0)

        self.assertEqual(info.name, "Ashwini")
        self.assertEqual(info.lord, "Ketu")
        self.assertEqual(info.pada, 1)
        self.assertEqual(info.gana, "Deva")
        self.assertEqual(info.nadi, "Adi")
        self.assertEqual(info.fraction_elapsed, 0.0)

    def test_pushya(self):
        info = self.calculator.calculate(105.0)

        self.assertEqual(info.index, 7)
        self.assertEqual(info.name, "Pushya")
        self.assertEqual(info.lord, "Saturn")
        self.assertEqual(info.pada, 4)
        self.assertAlmostEqual(info.fraction_elapsed, 0.875)

    def test_lords_repeat_every_nine(self):
        self.assertEqual(self.calculator.calculate(120.0 + 1.0).lord, "Ketu")     # Magha
        self.assertEqual(self.calculator.calculate(240.0 + 1.0).lord, "Ketu")     # Mula

    def test_wraps_longitude(self):
        self.assertEqual(self.calculator.calculate(361.0).name, "Ashwini")

    def test_gandmool(self):
        self.assertTrue(self.calculator.is_gandmool(5.0))       # Ashwini
        self.assertTrue(self.calculator.is_gandmool(355.0))     # Revati
        self.assertFalse(self.calculator.is_gandmool(50.0))


class TestKarakaCalculator(unittest.TestCase):
    def test_ranked_by_degree_in_sign(self):
        chart = make_chart({
            "Sun": 10.0, "Moon": 55.0, "Mars": 72.0, "Mercury": 18.0,
            "Jupiter": 149.0, "Venus": 3.0, "Saturn": 200.0,
        })
        karakas = KarakaCalculator().calculate(chart.positions)

        self.assertEqual(
            [k.body for k in karakas],
            ["Jupiter", "Moon", "Saturn", "Mercury", "Mars", "Sun", "Venus"],
        )
        self.assertEqual(karakas[0].karaka, "Atmakaraka")
        self.assertEqual(karakas[-1].abbreviation, "DK")

    def test_ties_keep_natural_order(self):
        chart = make_chart({
            "Sun": 10.0, "Moon": 40.0, "Mars": 70.0, "Mercury": 100.0,
            "Jupiter": 130.0, "Venus": 160.0, "Saturn": 190.0,
        })
        self.assertEqual(KarakaCalculator().atmakaraka(chart.positions), "Sun")

    def test_nodes_excluded(self):
        karakas = KarakaCalculator().calculate(make_chart({"Rahu": 29.9}).positions)
        self.assertEqual(len(karakas), 7)
        self.assertNotIn("Rahu", [k.body for k in karakas])


if __name__ == "__main__":
    unittest.main()
