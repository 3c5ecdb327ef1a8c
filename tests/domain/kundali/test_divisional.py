import unittest
import sys
import os
sys.path.append(os.getcwd())

from fakes import make_chart
from kundli.domain.kundali.divisional.d9 import D9Calculator
from kundli.domain.kundali.divisional.d10 import D10Calculator
from kundli.domain.kundali.divisional.d30 import D30Calculator
from kundli.domain.kundali.divisional.divisional_builder import DivisionalBuilder, default_calculators
from kundli.domain.kundali.divisional.vargas import (
    D1Calculator,
    D2Calculator,
    D3Calculator,
    D60Calculator,
)
from kundli.domain.kundali.errors import DivisionalChartError


class TestEqualPartVargas(unittest.TestCase):
    def test_d1_is_identity(self):
        self.assertEqual(D1Calculator().varga_position(123.5), (4, 3.5))

    def test_d9_progression(self):
        d9 = D9Calculator()
        self.assertEqual(d9.varga_position(0.0)[0], 0)        # Aries → Aries
        self.assertEqual(d9.varga_position(3.5)[0], 1)        # 2nd navamsa → Taurus
        self.assertEqual(d9.varga_position(30.0)[0], 9)       # Taurus → Capricorn
        self.assertEqual(d9.varga_position(120.0)[0], 0)      # Leo → Aries
        self.assertEqual(d9.varga_position(359.9)[0], 11)     # end of Pisces

    def test_d9_boundary_belongs_to_next_part(self):
        self.assertEqual(D9Calculator().varga_position(10.0 / 3.0)[0], 1)

    def test_d9_degree_is_scaled(self):
        _, degree = D9Calculator().varga_position(1.0)
        self.assertAlmostEqual(degree, 9.0)

    def test_d10_even_sign_counts_from_ninth(self):
        d10 = D10Calculator()
        self.assertEqual(d10.varga_position(0.0)[0], 0)
        self.assertEqual(d10.varga_position(3.0)[0], 1)
        self.assertEqual(d10.varga_position(30.0)[0], 9)

    def test_d2_hora(self):
        d2 = D2Calculator()
        self.assertEqual(d2.varga_position(5.0)[0], 4)     # odd, first half → Leo
        self.assertEqual(d2.varga_position(20.0)[0], 3)
        self.assertEqual(d2.varga_position(35.0)[0], 3)    # even, first half → Cancer

    def test_d3_drekkana(self):
        d3 = D3Calculator()
        self.assertEqual(d3.varga_position(12.0)[0], 4)
        self.assertEqual(d3.varga_position(25.0)[0], 8)

    def test_degrees_stay_below_thirty(self):
        for calculator in default_calculators():
            _, degree = calculator.varga_position(29.999999999)
            self.assertLess(degree, 30.0, calculator.chart_type)
            self.assertGreaterEqual(degree, 0.0, calculator.chart_type)

    def test_d60_last_part(self):
        sign, _ = D60Calculator().varga_position(29.9)
        self.assertIn(sign, range(12))


class TestTrimshamsha(unittest.TestCase):
    def test_odd_sign_segments(self):
        d30 = D30Calculator()
        self.assertEqual(d30.varga_position(3.0)[0], 0)
        self.assertEqual(d30.varga_position(6.0)[0], 10)
        self.assertEqual(d30.varga_position(12.0)[0], 8)
        self.assertEqual(d30.varga_position(20.0)[0], 2)
        self.assertEqual(d30.varga_position(27.0)[0], 6)

    def test_even_sign_segments(self):
        d30 = D30Calculator()
        self.assertEqual(d30.varga_position(33.0)[0], 1)
        self.assertEqual(d30.varga_position(36.0)[0], 5)
        self.assertEqual(d30.varga_position(58.0)[0], 7)

    def test_degree_stretched_by_segment_width(self):
        _, degree = D30Calculator().varga_position(2.5)
        self.assertAlmostEqual(degree, 15.0)

    def test_end_of_sign_falls_in_the_last_segment(self):
        d30 = D30Calculator()
        sign, degree = d30.varga_position(29.999999)
        self.assertEqual(sign, 6)
        self.assertLess(degree, 30.0)

        self.assertEqual(d30.varga_position(59.999999)[0], 7)

    def test_ruler(self):
        d30 = D30Calculator()
        self.assertEqual(d30.ruler(6.0), "Saturn")
        self.assertEqual(d30.ruler(36.0), "Mercury")


class TestDivisionalBuilder(unittest.TestCase):
    def test_builds_sixteen_charts(self):
        charts = DivisionalBuilder().build(make_chart({}, ascendant=15.0))

        self.assertEqual(len(charts.charts), 16)
        self.assertEqual(charts.failures, {})
        d1 = charts.charts["D1"]
        self.assertEqual(d1.ascendant.sign_index, 0)
        self.assertEqual(d1.house_of("Sun"), 10)

    def test_failing_scheme_is_isolated(self):
        class BrokenCalculator(D9Calculator):
            chart_type = "D9"

            def varga_position(self, longitude):
                raise DivisionalChartError("broken scheme")

        builder = DivisionalBuilder([D1Calculator(), BrokenCalculator(), D10Calculator()])
        charts = builder.build(make_chart({}))

        self.assertEqual(set(charts.charts), {"D1", "D10"})
        self.assertIn("D9", charts.failures)
        self.assertIn("broken scheme", charts.failures["D9"])


if __name__ == "__main__":
    unittest.main()
