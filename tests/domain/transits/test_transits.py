import unittest
import sys
import os
from datetime import timedelta
sys.path.append(os.getcwd())

from fakes import EPOCH, FakeEphemerisProvider, make_chart
from kundli.domain.transits.aspect_calculator import (
    AspectCalculator,
    orb_allowance,
    strength_for_orb,
)
from kundli.domain.transits.gochar_calculator import GocharCalculator
from kundli.domain.transits.period_calculator import PeriodCalculator, sade_sati_status
from kundli.domain.transits.schemas import (
    AspectStrength,
    AspectType,
    SadeSatiPhase,
    TransitPeriodType,
)
from kundli.domain.transits.transit_builder import TransitBuilder
from kundli.domain.transits.transit_engine import TransitEngine


ONE_HOUR = 3600.0


class TestTransitEngine(unittest.TestCase):
    def test_positions_at_query_instant(self):
        provider = FakeEphemerisProvider()
        transit = TransitEngine(provider).calculate(make_chart({}), EPOCH + timedelta(days=10))

        self.assertEqual(len(transit.positions), 9)
        self.assertAlmostEqual(transit.positions["Sun"].longitude, 290.0)
        self.assertAlmostEqual(transit.positions["Ketu"].longitude, 304.5)
        self.assertEqual(transit.instant, EPOCH + timedelta(days=10))

    def test_uses_query_ayanamsa(self):
        provider = FakeEphemerisProvider(ayanamsa=24.0)
        transit = TransitEngine(provider).calculate(make_chart({}), EPOCH)

        self.assertEqual(transit.ayanamsa_value, 24.0)
        self.assertAlmostEqual(transit.positions["Sun"].longitude, 256.0)


class TestGochar(unittest.TestCase):
    def test_houses_from_lagna_and_moon(self):
        natal = make_chart({"Moon": 100.0}, ascendant=0.0)
        transit = TransitEngine(FakeEphemerisProvider()).calculate(natal, EPOCH)
        gochar = GocharCalculator().calculate(natal, transit)

        saturn = gochar.planets["Saturn"]
        self.assertEqual(saturn.sign, "Taurus")
        self.assertEqual(saturn.from_lagna_house, 2)
        self.assertEqual(saturn.from_moon_house, 11)
        self.assertEqual(len(gochar.planets), 9)


class TestSadeSati(unittest.TestCase):
    def test_phases_for_cancer_moon(self):
        self.assertEqual(sade_sati_status(3, 1).phase, SadeSatiPhase.APPROACHING)
        self.assertEqual(sade_sati_status(3, 2).phase, SadeSatiPhase.RISING)
        self.assertEqual(sade_sati_status(3, 3).phase, SadeSatiPhase.PEAK)
        self.assertEqual(sade_sati_status(3, 4).phase, SadeSatiPhase.SETTING)

    def test_only_three_signs_are_active(self):
        self.assertFalse(sade_sati_status(3, 1).is_active)
        self.assertTrue(sade_sati_status(3, 2).is_active)
        self.assertTrue(sade_sati_status(3, 4).is_active)
        self.assertFalse(sade_sati_status(3, 5).is_active)
        self.assertIsNone(sade_sati_status(3, 6).phase)

    def test_wraps_around_pisces(self):
        status = sade_sati_status(0, 11)
        self.assertEqual(status.distance, 11)
        self.assertEqual(status.phase, SadeSatiPhase.RISING)


class TestAspects(unittest.TestCase):
    def setUp(self):
        self.calculator = AspectCalculator()

    def test_applying_conjunction(self):
        aspect = self.calculator._pair_aspects("Saturn", 95.0, 0.03, "Sun", 100.0)[0]

        self.assertEqual(aspect.aspect, AspectType.CONJUNCTION)
        self.assertAlmostEqual(aspect.orb, 5.0)
        self.assertTrue(aspect.is_applying)
        self.assertEqual(aspect.strength, AspectStrength.WEAK)

    def test_separating(self):
        aspect = self.calculator._pair_aspects("Saturn", 105.0, 0.03, "Sun", 100.0)[0]
        self.assertFalse(aspect.is_applying)

    def test_retrograde_body_applies_from_the_other_side(self):
        aspect = self.calculator._pair_aspects("Saturn", 105.0, -0.03, "Sun", 100.0)[0]
        self.assertTrue(aspect.is_applying)

    def test_luminary_orb_bonus(self):
        self.assertEqual(orb_allowance(AspectType.CONJUNCTION, "Mars", "Sun"), 12.0)
        self.assertEqual(orb_allowance(AspectType.CONJUNCTION, "Mars", "Venus"), 10.0)

        self.assertEqual(len(self.calculator._pair_aspects("Mars", 111.0, 0.5, "Sun", 100.0)), 1)
        self.assertEqual(self.calculator._pair_aspects("Mars", 111.0, 0.5, "Venus", 100.0), [])

    def test_quincunx(self):
        aspect = self.calculator._pair_aspects("Jupiter", 151.0, 0.1, "Mars", 1.0)[0]
        self.assertEqual(aspect.aspect, AspectType.QUINCUNX)
        self.assertEqual(aspect.strength, AspectStrength.STRONG)

    def test_strength_bands(self):
        self.assertEqual(strength_for_orb(1.9), AspectStrength.STRONG)
        self.assertEqual(strength_for_orb(2.0), AspectStrength.MODERATE)
        self.assertEqual(strength_for_orb(5.0), AspectStrength.WEAK)

    def test_sorted_by_orb(self):
        natal = make_chart({})
        transit = TransitEngine(FakeEphemerisProvider()).calculate(natal, EPOCH + timedelta(days=3))
        aspects = self.calculator.calculate(natal, transit)

        self.assertTrue(aspects)
        orbs = [a.orb for a in aspects]
        self.assertEqual(orbs, sorted(orbs))


class TestPeriods(unittest.TestCase):
    def setUp(self):
        self.provider = FakeEphemerisProvider()
        self.calculator = PeriodCalculator(self.provider)

    def assertNear(self, actual, expected):
        self.assertLessEqual(abs((actual - expected).total_seconds()), ONE_HOUR)

    def test_forward_ingress(self):
        # Saturn: 40° at 0.03°/day reaches Gemini after 666.67 days
        ingress = self.calculator.find_ingress("Saturn", EPOCH, 0.0, forward=True)
        self.assertNear(ingress, EPOCH + timedelta(days=20.0 / 0.03))

    def test_backward_ingress(self):
        ingress = self.calculator.find_ingress("Saturn", EPOCH, 0.0, forward=False)
        self.assertNear(ingress, EPOCH - timedelta(days=10.0 / 0.03))

    def test_retrograde_node(self):
        # Rahu at 125° moving backwards leaves Leo at 120°
        ingress = self.calculator.find_ingress("Rahu", EPOCH, 0.0, forward=True)
        self.assertNear(ingress, EPOCH + timedelta(days=100))

    def test_no_ingress_inside_window(self):
        calculator = PeriodCalculator(self.provider, search_days=10)
        self.assertIsNone(calculator.find_ingress("Saturn", EPOCH, 0.0, forward=True))

    def test_periods_for_approaching_sade_sati(self):
        natal = make_chart({"Moon": 100.0})
        transit = TransitEngine(self.provider).calculate(natal, EPOCH)
        periods = self.calculator.calculate(natal, transit)

        self.assertEqual(
            [p.period_type for p in periods],
            [
                TransitPeriodType.JUPITER_TRANSIT,
                TransitPeriodType.SATURN_TRANSIT,
                TransitPeriodType.RAHU_KETU_TRANSIT,
            ],
        )
        self.assertEqual(self.calculator.sade_sati(natal, transit).phase, SadeSatiPhase.APPROACHING)

    def test_active_sade_sati_period(self):
        natal = make_chart({"Moon": 70.0})
        transit = TransitEngine(self.provider).calculate(natal, EPOCH)
        periods = self.calculator.calculate(natal, transit)

        sade_sati = next(p for p in periods if p.period_type == TransitPeriodType.SADE_SATI)
        saturn = next(p for p in periods if p.period_type == TransitPeriodType.SATURN_TRANSIT)
        self.assertEqual(sade_sati.sade_sati_phase, SadeSatiPhase.RISING)
        self.assertEqual((sade_sati.start, sade_sati.end), (saturn.start, saturn.end))
        self.assertTrue(sade_sati.is_active(EPOCH))
        self.assertFalse(sade_sati.is_active(sade_sati.end))

    def test_dhaiya(self):
        for moon, expected in ((310.0, TransitPeriodType.KANTAKA_SHANI),
                               (190.0, TransitPeriodType.ASHTAMA_SHANI)):
            natal = make_chart({"Moon": moon})
            transit = TransitEngine(self.provider).calculate(natal, EPOCH)
            types = [p.period_type for p in self.calculator.calculate(natal, transit)]
            self.assertIn(expected, types)


class TestTransitBuilder(unittest.TestCase):
    def test_snapshot(self):
        provider = FakeEphemerisProvider()
        natal = make_chart({"Moon": 70.0})
        snapshot = TransitBuilder(provider).build(natal, EPOCH)

        self.assertEqual(snapshot.instant, EPOCH)
        self.assertEqual(snapshot.sade_sati.phase, SadeSatiPhase.RISING)
        self.assertEqual(len(snapshot.gochar.planets), 9)
        self.assertIsInstance(snapshot.aspects, tuple)
        self.assertEqual(len(snapshot.periods), 4)

    def test_defaults_to_now(self):
        provider = FakeEphemerisProvider()
        snapshot = TransitBuilder(provider).build(make_chart({}))
        self.assertIsNotNone(snapshot.instant.tzinfo)


if __name__ == "__main__":
    unittest.main()
