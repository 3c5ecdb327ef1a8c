import unittest
import sys
import os
from unittest.mock import patch
sys.path.append(os.getcwd())

from fakes import EPOCH, FakeEphemerisProvider
from kundli.domain.kundali.errors import IncompleteComputationError, ProviderUnavailableError
from kundli.domain.kundali.position_resolver import PositionResolver, resolve_dignity
from kundli.domain.kundali.schemas import Dignity


class TestResolveDignity(unittest.TestCase):
    def test_exaltation_and_debilitation(self):
        self.assertEqual(resolve_dignity("Sun", 0, False), Dignity.EXALTED)
        self.assertEqual(resolve_dignity("Sun", 6, False), Dignity.DEBILITATED)
        self.assertEqual(resolve_dignity("Saturn", 6, False), Dignity.EXALTED)

    def test_own_sign(self):
        self.assertEqual(resolve_dignity("Mars", 7, False), Dignity.OWN_SIGN)
        self.assertEqual(resolve_dignity("Moon", 3, False), Dignity.OWN_SIGN)

    def test_neutral(self):
        self.assertEqual(resolve_dignity("Jupiter", 2, False), Dignity.NEUTRAL)

    def test_direct_is_a_label_only(self):
        results = {
            resolve_dignity(body, sign, retrograde)
            for body in ("Sun", "Moon", "Mars", "Mercury", "Jupiter", "Venus", "Saturn", "Rahu", "Ketu")
            for sign in range(12)
            for retrograde in (False, True)
        }
        self.assertNotIn(Dignity.DIRECT, results)
        self.assertEqual(Dignity("direct"), Dignity.DIRECT)

    def test_retrograde_takes_precedence(self):
        # Mercury in Virgo is both exalted and own sign
        self.assertEqual(resolve_dignity("Mercury", 5, False), Dignity.EXALTED)
        self.assertEqual(resolve_dignity("Mercury", 5, True), Dignity.RETROGRADE)

    def test_luminaries_never_retrograde(self):
        self.assertEqual(resolve_dignity("Sun", 0, True), Dignity.EXALTED)


class TestPositionResolver(unittest.TestCase):
    def test_subtracts_ayanamsa_and_wraps(self):
        resolver = PositionResolver(FakeEphemerisProvider())
        position = resolver.resolve("Mars", 10.0, 0.5, 24.0)

        self.assertAlmostEqual(position.longitude, 346.0)
        self.assertEqual(position.sign, "Pisces")
        self.assertAlmostEqual(position.degree_in_sign, 16.0)
        self.assertEqual(position.nakshatra, "Uttara Bhadrapada")
        self.assertFalse(position.is_retrograde)

    def test_retrograde_flag_from_speed(self):
        resolver = PositionResolver(FakeEphemerisProvider())
        position = resolver.resolve("Saturn", 200.0, -0.02, 0.0)

        self.assertTrue(position.is_retrograde)
        self.assertEqual(position.dignity, Dignity.RETROGRADE)

    def test_resolve_all_derives_ketu(self):
        provider = FakeEphemerisProvider(ayanamsa=24.0)
        positions = PositionResolver(provider).resolve_all(EPOCH, 24.0)

        self.assertEqual(len(positions), 9)
        self.assertAlmostEqual(positions["Rahu"].longitude, 101.0)
        self.assertAlmostEqual(positions["Ketu"].longitude, 281.0)
        self.assertEqual(positions["Ketu"].speed, positions["Rahu"].speed)
        self.assertAlmostEqual(positions["Sun"].longitude, 256.0)

    @patch("kundli.domain.kundali.position_resolver.PLANETS", ["Sun", "Moon"])
    def test_incomplete_set_is_fatal(self):
        resolver = PositionResolver(FakeEphemerisProvider())
        with self.assertRaises(IncompleteComputationError):
            resolver.resolve_all(EPOCH, 0.0)

    def test_provider_failure_propagates(self):
        resolver = PositionResolver(FakeEphemerisProvider(fail=True))
        with self.assertRaises(ProviderUnavailableError):
            resolver.resolve_all(EPOCH, 0.0)


if __name__ == "__main__":
    unittest.main()
