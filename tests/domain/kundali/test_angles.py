import unittest
import sys
import os
from datetime import datetime, timezone, timedelta
sys.path.append(os.getcwd())

from kundli.domain.kundali.angles import (
    angular_distance,
    degree_in_sign,
    format_dms,
    forward_distance,
    from_dms,
    house_from,
    is_day_birth,
    julian_day,
    nakshatra_fraction,
    nakshatra_index,
    normalize,
    pada,
    sign_index,
    to_dms,
)
from kundli.domain.kundali.constants import NAKSHATRA_SPAN, PADA_SPAN
from kundli.domain.kundali.errors import InvalidInputError


class TestNormalize(unittest.TestCase):
    def test_wraps_negative_and_large(self):
        self.assertAlmostEqual(normalize(-30.0), 330.0)
        self.assertAlmostEqual(normalize(725.0), 5.0)
        self.assertEqual(normalize(360.0), 0.0)

    def test_tiny_negative_stays_below_360(self):
        value = normalize(-1e-15)
        self.assertGreaterEqual(value, 0.0)
        self.assertLess(value, 360.0)

    def test_rejects_non_finite(self):
        with self.assertRaises(InvalidInputError):
            normalize(float("nan"))
        with self.assertRaises(InvalidInputError):
            normalize(float("inf"))

    def test_distances(self):
        self.assertAlmostEqual(forward_distance(350.0, 10.0), 20.0)
        self.assertAlmostEqual(forward_distance(10.0, 350.0), 340.0)
        self.assertAlmostEqual(angular_distance(10.0, 350.0), 20.0)
        self.assertAlmostEqual(angular_distance(0.0, 180.0), 180.0)

    def test_house_from(self):
        self.assertEqual(house_from(3, 3), 1)
        self.assertEqual(house_from(3, 2), 12)
        self.assertEqual(house_from(11, 0), 2)


class TestDayBirth(unittest.TestCase):
    def test_sun_behind_the_rising_degree_is_above_the_horizon(self):
        # Same sign as the ascendant, but already risen
        self.assertTrue(is_day_birth(100.0, 95.0))
        self.assertFalse(is_day_birth(100.0, 105.0))

    def test_half_circles(self):
        self.assertTrue(is_day_birth(0.0, 280.0))
        self.assertTrue(is_day_birth(0.0, 180.0))
        self.assertFalse(is_day_birth(0.0, 179.9))


class TestSegments(unittest.TestCase):
    def test_sign_boundaries_belong_to_upper_sign(self):
        self.assertEqual(sign_index(0.0), 0)
        self.assertEqual(sign_index(29.999999), 0)
        self.assertEqual(sign_index(30.0), 1)
        self.assertEqual(sign_index(359.9999), 11)

    def test_degree_in_sign(self):
        self.assertAlmostEqual(degree_in_sign(45.5), 15.5)
        self.assertAlmostEqual(degree_in_sign(30.0), 0.0)

    def test_nakshatra_boundaries(self):
        self.assertEqual(nakshatra_index(0.0), 0)
        self.assertEqual(nakshatra_index(NAKSHATRA_SPAN), 1)
        self.assertEqual(nakshatra_index(NAKSHATRA_SPAN - 1e-6), 0)
        self.assertEqual(nakshatra_index(359.99), 26)

    def test_pada(self):
        self.assertEqual(pada(0.0), 1)
        self.assertEqual(pada(PADA_SPAN), 2)
        self.assertEqual(pada(3 * PADA_SPAN + 0.1), 4)
        # Next nakshatra starts again at pada 1
        self.assertEqual(pada(NAKSHATRA_SPAN), 1)

    def test_nakshatra_fraction(self):
        self.assertAlmostEqual(nakshatra_fraction(NAKSHATRA_SPAN / 2), 0.5)
        self.assertLess(nakshatra_fraction(NAKSHATRA_SPAN - 1e-12), 1.0)


class TestDms(unittest.TestCase):
    def test_to_dms(self):
        self.assertEqual(to_dms(10.5), (10, 30, 0.0))

    def test_round_trip_value(self):
        self.assertAlmostEqual(from_dms(23, 51, 4.32), 23.8512, places=4)

    def test_negative(self):
        d, m, s = to_dms(-0.5)
        self.assertEqual((d, m), (0, -30))
        self.assertAlmostEqual(from_dms(0, -30), -0.5)

    def test_format(self):
        self.assertEqual(format_dms(10.5), "10°30'00.00\"")


class TestJulianDay(unittest.TestCase):
    def test_j2000(self):
        instant = datetime(2000, 1, 1, 12, 0, tzinfo=timezone.utc)
        self.assertAlmostEqual(julian_day(instant), 2451545.0, places=6)

    def test_offset_aware_input_is_converted(self):
        ist = timezone(timedelta(hours=5, minutes=30))
        instant = datetime(2000, 1, 1, 17, 30, tzinfo=ist)
        self.assertAlmostEqual(julian_day(instant), 2451545.0, places=6)

    def test_meeus_example(self):
        # Meeus ex. 7.a: 1957 Oct 4.81
        instant = datetime(1957, 10, 4, 19, 26, 24, tzinfo=timezone.utc)
        self.assertAlmostEqual(julian_day(instant), 2436116.31, places=2)

    def test_naive_rejected(self):
        with self.assertRaises(InvalidInputError):
            julian_day(datetime(2000, 1, 1, 12, 0))


if __name__ == "__main__":
    unittest.main()
