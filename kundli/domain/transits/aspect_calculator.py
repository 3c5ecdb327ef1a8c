from typing import Dict, List, Tuple

from kundli.domain.kundali.angles import angular_distance, normalize
from kundli.domain.kundali.constants import BODIES, LUMINARIES
from kundli.domain.kundali.schemas import KundaliChart
from kundli.domain.transits.schemas import (
    ActiveTransitAspect,
    AspectStrength,
    AspectType,
    TransitChart,
)


# aspect → (exact angle, orb)
ASPECTS: Dict[AspectType, Tuple[float, float]] = {
    AspectType.CONJUNCTION: (0.0, 10.0),
    AspectType.SEXTILE: (60.0, 6.0),
    AspectType.SQUARE: (90.0, 8.0),
    AspectType.TRINE: (120.0, 8.0),
    AspectType.QUINCUNX: (150.0, 3.0),
    AspectType.OPPOSITION: (180.0, 10.0),
}

LUMINARY_ORB_BONUS = 2.0
STRONG_ORB = 2.0
MODERATE_ORB = 5.0

# Look-ahead for applying/separating, in days
LOOK_AHEAD_DAYS = 1.0 / 24.0


def orb_allowance(aspect: AspectType, transit_body: str, natal_body: str) -> float:
    orb = ASPECTS[aspect][1]
    if transit_body in LUMINARIES or natal_body in LUMINARIES:
        orb += LUMINARY_ORB_BONUS
    return orb


def strength_for_orb(orb: float) -> AspectStrength:
    if orb < STRONG_ORB:
        return AspectStrength.STRONG
    if orb < MODERATE_ORB:
        return AspectStrength.MODERATE
    return AspectStrength.WEAK


class AspectCalculator:
    """
    Detects aspects from transit bodies to natal bodies.
    """

    calculation_version = "v1"

    def calculate(
        self,
        kundali: KundaliChart,
        transit: TransitChart,
    ) -> List[ActiveTransitAspect]:
        aspects: List[ActiveTransitAspect] = []

        for transit_body in BODIES:
            moving = transit.positions[transit_body]
            for natal_body in BODIES:
                natal = kundali.position(natal_body)
                aspects.extend(
                    self._pair_aspects(transit_body, moving.longitude, moving.speed,
                                       natal_body, natal.longitude)
                )

        # Tightest first; body order breaks ties
        return sorted(
            aspects,
            key=lambda a: (a.orb, BODIES.index(a.transit_body), BODIES.index(a.natal_body)),
        )

    def _pair_aspects(
        self,
        transit_body: str,
        transit_longitude: float,
        transit_speed: float,
        natal_body: str,
        natal_longitude: float,
    ) -> List[ActiveTransitAspect]:
        separation = angular_distance(transit_longitude, natal_longitude)
        found: List[ActiveTransitAspect] = []

        for aspect, (angle, _) in ASPECTS.items():
            orb = abs(separation - angle)
            if orb > orb_allowance(aspect, transit_body, natal_body):
                continue

            later = normalize(transit_longitude + transit_speed * LOOK_AHEAD_DAYS)
            later_orb = abs(angular_distance(later, natal_longitude) - angle)

            found.append(ActiveTransitAspect(
                transit_body=transit_body,
                natal_body=natal_body,
                aspect=aspect,
                exact_angle=angle,
                separation=round(separation, 4),
                orb=round(orb, 4),
                is_applying=later_orb < orb,
                strength=strength_for_orb(orb),
            ))

        return found
