import unittest
import sys
import os
sys.path.append(os.getcwd())

from fakes import EPOCH, FakeEphemerisProvider, make_chart
from kundli.domain.kundali.errors import InvalidInputError, ProviderUnavailableError
from kundli.domain.kundali.house_assigner import HouseAssigner
from kundli.domain.kundali.schemas import HouseSystem


PLACIDUS_LIKE = (10.0, 38.0, 66.0, 95.0, 127.0, 160.0, 190.0, 218.0, 246.0, 275.0, 307.0, 340.0)


class TestSignBasedHouses(unittest.TestCase):
    def test_whole_sign_counts_from_ascendant_sign(self):
        chart = make_chart({"Sun": 95.0, "Moon": 44.0}, ascendant=50.0)

        self.assertEqual(chart.houses.house_of("Sun"), 3)
        self.assertEqual(chart.houses.house_of("Moon"), 1)
        self.assertEqual(chart.houses.cusp(1).cusp_longitude, 30.0)
        self.assertEqual(chart.houses.cusp(1).sign, "Taurus")
        self.assertEqual(chart.houses.lord_of(1), "Venus")

    def test_equal_uses_signs_for_bodies_and_degrees_for_cusps(self):
        chart = make_chart({"Sun": 40.0}, ascendant=50.0, house_system=HouseSystem.EQUAL)

        # Sun sits before the ascendant degree but in the same sign
        self.assertEqual(chart.houses.house_of("Sun"), 1)
        self.assertAlmostEqual(chart.houses.cusp(2).cusp_longitude, 80.0)
        self.assertEqual(chart.houses.cusp(12).sign, "Aries")

    def test_every_body_gets_a_house(self):
        chart = make_chart({})
        self.assertEqual(set(chart.houses.body_houses), set(chart.positions))
        for house in chart.houses.body_houses.values():
            self.assertIn(house, range(1, 13))

    def test_bodies_in(self):
        chart = make_chart({"Sun": 5.0, "Mercury": 10.0}, ascendant=0.0)
        self.assertIn("Sun", chart.houses.bodies_in(1))
        self.assertIn("Mercury", chart.houses.bodies_in(1))


class TestCuspBasedHouses(unittest.TestCase):
    def setUp(self):
        self.positions = make_chart({"Sun": 9.0, "Moon": 10.0, "Mars": 345.0}).positions

    def test_half_open_interval(self):
        layout = HouseAssigner().layout(10.0, HouseSystem.PLACIDUS, self.positions, PLACIDUS_LIKE)

        self.assertEqual(layout.house_of("Moon"), 1)    # exactly on cusp 1
        self.assertEqual(layout.house_of("Sun"), 12)    # just before cusp 1
        self.assertEqual(layout.house_of("Mars"), 12)

    def test_bhava_chalita_shifts_cusps_back(self):
        equal = tuple((10.0 + 30.0 * i) % 360.0 for i in range(12))
        layout = HouseAssigner().layout(10.0, HouseSystem.BHAVA_CHALITA, self.positions, equal)

        self.assertAlmostEqual(layout.cusp(1).cusp_longitude, 355.0)
        self.assertEqual(layout.house_of("Sun"), 1)
        self.assertEqual(layout.house_of("Mars"), 12)

    def test_cusp_system_requires_twelve_cusps(self):
        with self.assertRaises(InvalidInputError):
            HouseAssigner().layout(10.0, HouseSystem.KOCH, self.positions, PLACIDUS_LIKE[:11])

    def test_bad_partition_is_a_provider_error(self):
        broken = list(PLACIDUS_LIKE)
        broken[3], broken[4] = broken[4], broken[3]
        with self.assertRaises(ProviderUnavailableError):
            HouseAssigner().layout(10.0, HouseSystem.SRIPATI, self.positions, broken)

    def test_assign_uses_provider_cusps_minus_ayanamsa(self):
        provider = FakeEphemerisProvider(ascendant=34.0, cusps=tuple(c + 24.0 for c in PLACIDUS_LIKE))
        layout = HouseAssigner(provider).assign(
            EPOCH, 28.6, 77.2, HouseSystem.PLACIDUS, 24.0, self.positions
        )

        self.assertAlmostEqual(layout.ascendant.longitude, 10.0)
        self.assertAlmostEqual(layout.cusp(4).cusp_longitude, 95.0)
        self.assertEqual(layout.system, "Placidus")

    def test_assign_without_provider(self):
        with self.assertRaises(InvalidInputError):
            HouseAssigner().assign(EPOCH, 0.0, 0.0, HouseSystem.EQUAL, 0.0, self.positions)


if __name__ == "__main__":
    unittest.main()
