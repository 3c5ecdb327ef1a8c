import unittest
import sys
import os
from datetime import datetime, timezone
sys.path.append(os.getcwd())

from kundli.domain.kundali.ephemeris import SwissEphemerisProvider, estimate_ayanamsa
from kundli.domain.kundali.errors import InvalidInputError, ProviderUnavailableError
from kundli.domain.kundali.schemas import Ayanamsa, HouseSystem, NodeType


J2000 = datetime(2000, 1, 1, 12, 0, tzinfo=timezone.utc)


class TestSwissEphemerisProvider(unittest.TestCase):
    """
    Coarse checks against well-known J2000 values; the Moshier fallback
    is used when no ephemeris files are installed.
    """

    def setUp(self):
        self.provider = SwissEphemerisProvider()

    def test_sun_at_j2000(self):
        sun = self.provider.position("Sun", J2000)
        self.assertAlmostEqual(sun.longitude, 280.4, delta=0.15)
        self.assertAlmostEqual(sun.speed, 1.02, delta=0.02)

    def test_mean_node_moves_backwards(self):
        rahu = self.provider.position("Rahu", J2000, NodeType.MEAN)
        self.assertLess(rahu.speed, 0.0)
        self.assertAlmostEqual(rahu.longitude, 125.04, delta=0.1)

    def test_lahiri_at_j2000(self):
        value = self.provider.ayanamsa_value(J2000, Ayanamsa.LAHIRI)
        self.assertAlmostEqual(value, 23.85, delta=0.05)
        self.assertAlmostEqual(value, estimate_ayanamsa(J2000), delta=0.05)

    def test_house_cusps(self):
        houses = self.provider.house_cusps(J2000, 28.6, 77.2, HouseSystem.EQUAL)

        self.assertEqual(len(houses.cusps), 12)
        self.assertAlmostEqual(houses.cusps[0], houses.ascendant, places=6)

    def test_out_of_range_instant(self):
        provider = SwissEphemerisProvider(min_year=1800, max_year=2400)
        with self.assertRaises(ProviderUnavailableError):
            provider.position("Sun", datetime(2500, 1, 1, tzinfo=timezone.utc))

    def test_unsupported_body(self):
        with self.assertRaises(InvalidInputError):
            self.provider.position("Ketu", J2000)


if __name__ == "__main__":
    unittest.main()
