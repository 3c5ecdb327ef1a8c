import unittest
import sys
import os
from datetime import timedelta, timezone
from unittest.mock import patch
sys.path.append(os.getcwd())

from fakes import EPOCH, FakeEphemerisProvider
from kundli.cache.ephemeris_cache import CachedEphemerisProvider
from kundli.domain.kundali.errors import ProviderUnavailableError
from kundli.domain.kundali.schemas import Ayanamsa, HouseSystem, NodeType


class TestCachedEphemerisProvider(unittest.TestCase):
    def setUp(self):
        self.inner = FakeEphemerisProvider()
        self.provider = CachedEphemerisProvider(self.inner)

    def test_positions_are_memoized(self):
        first = self.provider.position("Sun", EPOCH)
        second = self.provider.position("Sun", EPOCH, "Mean")

        self.assertEqual(first, second)
        self.assertEqual(self.inner.calls, 1)

        self.provider.position("Sun", EPOCH + timedelta(hours=1))
        self.assertEqual(self.inner.calls, 2)

    def test_same_instant_in_any_zone_shares_an_entry(self):
        ist = timezone(timedelta(hours=5, minutes=30))
        self.provider.position("Moon", EPOCH)
        self.provider.position("Moon", EPOCH.astimezone(ist))

        self.assertEqual(self.inner.calls, 1)

    def test_node_type_is_part_of_the_key(self):
        self.provider.position("Rahu", EPOCH, NodeType.MEAN)
        self.provider.position("Rahu", EPOCH, NodeType.TRUE)

        self.assertEqual(self.inner.calls, 2)

    def test_zero_ayanamsa_is_cached(self):
        self.provider.ayanamsa_value(EPOCH, Ayanamsa.LAHIRI)
        self.provider.ayanamsa_value(EPOCH, "Lahiri")
        self.assertEqual(self.inner.calls, 1)

        self.provider.ayanamsa_value(EPOCH, Ayanamsa.RAMAN)
        self.assertEqual(self.inner.calls, 2)

    def test_house_cusps_keyed_by_location(self):
        self.provider.house_cusps(EPOCH, 28.6, 77.2, HouseSystem.EQUAL)
        self.provider.house_cusps(EPOCH, 28.6, 77.2, "Equal")
        self.provider.house_cusps(EPOCH, 19.1, 72.9, HouseSystem.EQUAL)

        self.assertEqual(self.inner.calls, 2)

    def test_failures_are_not_cached(self):
        self.inner.fail = True
        with self.assertRaises(ProviderUnavailableError):
            self.provider.position("Moon", EPOCH)

        self.inner.fail = False
        self.assertAlmostEqual(self.provider.position("Moon", EPOCH).longitude, 100.0)
        self.assertEqual(self.inner.calls, 2)

    def test_bounded_by_max_size(self):
        provider = CachedEphemerisProvider(self.inner, max_size=1)
        provider.position("Sun", EPOCH)
        provider.position("Moon", EPOCH)
        provider.position("Sun", EPOCH)

        self.assertEqual(self.inner.calls, 3)

    @patch("kundli.cache.ephemeris_cache.settings")
    def test_size_from_settings(self, mock_settings):
        mock_settings.EPHEMERIS_CACHE_SIZE = 7
        provider = CachedEphemerisProvider(self.inner)

        self.assertEqual(provider.cache_info()["position"].maxsize, 7)

    def test_cache_info_and_clear(self):
        self.provider.position("Sun", EPOCH)
        self.provider.position("Sun", EPOCH)

        info = self.provider.cache_info()["position"]
        self.assertEqual((info.hits, info.misses, info.currsize), (1, 1, 1))

        self.provider.cache_clear()
        self.provider.position("Sun", EPOCH)
        self.assertEqual(self.inner.calls, 2)


if __name__ == "__main__":
    unittest.main()
