import unittest
import sys
import os
sys.path.append(os.getcwd())

from fakes import FakeEphemerisProvider
from kundli.domain.kundali.position_resolver import PositionResolver
from kundli.domain.rules import matching_rules
from kundli.domain.rules.schemas import DoshaSeverity, MatchingRule


_resolver = PositionResolver(FakeEphemerisProvider())


def moon(longitude):
    return _resolver.resolve("Moon", longitude, 13.0, 0.0)


class TestNadi(unittest.TestCase):
    def test_same_nadi(self):
        # Ashwini and Ardra are both Adi
        record = matching_rules.nadi(moon(5.0), moon(70.0))[0]

        self.assertEqual(record.rule, MatchingRule.NADI)
        self.assertEqual(record.variant, "Adi")
        self.assertEqual(record.severity, DoshaSeverity.HIGH)

    def test_different_nadi(self):
        self.assertEqual(matching_rules.nadi(moon(5.0), moon(20.0)), [])

    def test_same_sign_different_nakshatra_cancels(self):
        # Ardra and Punarvasu, both in Gemini
        record = matching_rules.nadi(moon(70.0), moon(85.0))[0]
        self.assertEqual(record.severity, DoshaSeverity.CANCELLED)

    def test_same_nakshatra_different_pada_cancels(self):
        record = matching_rules.nadi(moon(1.0), moon(5.0))[0]
        self.assertIn(
            "same_nakshatra_different_pada",
            [c.rule for c in record.satisfied_cancellations],
        )

    def test_identical_pada_is_not_cancelled(self):
        record = matching_rules.nadi(moon(1.0), moon(2.0))[0]
        self.assertFalse(record.is_cancelled)


class TestBhakoot(unittest.TestCase):
    def test_six_eight(self):
        record = matching_rules.bhakoot(moon(10.0), moon(160.0))[0]
        self.assertEqual(record.variant, "6/8")
        self.assertEqual(record.severity, DoshaSeverity.HIGH)

    def test_two_twelve_and_five_nine(self):
        self.assertEqual(matching_rules.bhakoot(moon(10.0), moon(40.0))[0].base_severity, DoshaSeverity.MEDIUM)
        self.assertEqual(matching_rules.bhakoot(moon(10.0), moon(130.0))[0].base_severity, DoshaSeverity.LOW)

    def test_shared_lord_cancels(self):
        # Aries and Scorpio are 6/8 apart but both ruled by Mars
        record = matching_rules.bhakoot(moon(10.0), moon(220.0))[0]
        self.assertEqual(record.severity, DoshaSeverity.CANCELLED)

    def test_seven_seven_is_fine(self):
        self.assertEqual(matching_rules.bhakoot(moon(10.0), moon(190.0)), [])

    def test_symmetric(self):
        forward = matching_rules.bhakoot(moon(10.0), moon(160.0))[0]
        backward = matching_rules.bhakoot(moon(160.0), moon(10.0))[0]
        self.assertEqual(forward.variant, backward.variant)


class TestGana(unittest.TestCase):
    def test_deva_rakshasa(self):
        # Ashwini (Deva) with Krittika (Rakshasa)
        self.assertEqual(matching_rules.gana(moon(5.0), moon(30.0))[0].base_severity, DoshaSeverity.HIGH)

    def test_manushya_rakshasa(self):
        self.assertEqual(matching_rules.gana(moon(20.0), moon(30.0))[0].base_severity, DoshaSeverity.MEDIUM)

    def test_same_gana(self):
        self.assertEqual(matching_rules.gana(moon(5.0), moon(6.0)), [])


if __name__ == "__main__":
    unittest.main()
