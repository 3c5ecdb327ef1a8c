from typing import Dict, List

from kundli.domain.kundali.constants import PLANETS
from kundli.domain.kundali.derived.schemas import AshtakavargaGrid
from kundli.domain.kundali.schemas import KundaliChart


CONTRIBUTORS = PLANETS + ["Lagna"]

# Parashari benefic places: planet → contributor → houses counted
# from the contributor's sign that receive a bindu
BENEFIC_PLACES: Dict[str, Dict[str, List[int]]] = {
    "Sun": {
        "Sun": [1, 2, 4, 7, 8, 9, 10, 11],
        "Moon": [3, 6, 10, 11],
        "Mars": [1, 2, 4, 7, 8, 9, 10, 11],
        "Mercury": [3, 5, 6, 9, 10, 11, 12],
        "Jupiter": [5, 6, 9, 11],
        "Venus": [6, 7, 12],
        "Saturn": [1, 2, 4, 7, 8, 9, 10, 11],
        "Lagna": [3, 4, 6, 10, 11, 12],
    },
    "Moon": {
        "Sun": [3, 6, 7, 8, 10, 11],
        "Moon": [1, 3, 6, 7, 10, 11],
        "Mars": [2, 3, 5, 6, 9, 10, 11],
        "Mercury": [1, 3, 4, 5, 7, 8, 10, 11],
        "Jupiter": [1, 4, 7, 8, 10, 11, 12],
        "Venus": [3, 4, 5, 7, 9, 10, 11],
        "Saturn": [3, 5, 6, 11],
        "Lagna": [3, 6, 10, 11],
    },
    "Mars": {
        "Sun": [3, 5, 6, 10, 11],
        "Moon": [3, 6, 11],
        "Mars": [1, 2, 4, 7, 8, 10, 11],
        "Mercury": [3, 5, 6, 11],
        "Jupiter": [6, 10, 11, 12],
        "Venus": [6, 8, 11, 12],
        "Saturn": [1, 4, 7, 8, 9, 10, 11],
        "Lagna": [1, 3, 6, 10, 11],
    },
    "Mercury": {
        "Sun": [5, 6, 9, 11, 12],
        "Moon": [2, 4, 6, 8, 10, 11],
        "Mars": [1, 2, 4, 7, 8, 9, 10, 11],
        "Mercury": [1, 3, 5, 6, 9, 10, 11, 12],
        "Jupiter": [6, 8, 11, 12],
        "Venus": [1, 2, 3, 4, 5, 8, 9, 11],
        "Saturn": [1, 2, 4, 7, 8, 9, 10, 11],
        "Lagna": [1, 2, 4, 6, 8, 10, 11],
    },
    "Jupiter": {
        "Sun": [1, 2, 3, 4, 7, 8, 9, 10, 11],
        "Moon": [2, 5, 7, 9, 11],
        "Mars": [1, 2, 4, 7, 8, 10, 11],
        "Mercury": [1, 2, 4, 5, 6, 9, 10, 11],
        "Jupiter": [1, 2, 3, 4, 7, 8, 10, 11],
        "Venus": [2, 5, 6, 9, 10, 11],
        "Saturn": [3, 5, 6, 12],
        "Lagna": [1, 2, 4, 5, 6, 7, 9, 10, 11],
    },
    "Venus": {
        "Sun": [8, 11, 12],
        "Moon": [1, 2, 3, 4, 5, 8, 9, 11, 12],
        "Mars": [3, 5, 6, 9, 11, 12],
        "Mercury": [3, 5, 6, 9, 11],
        "Jupiter": [5, 8, 9, 10, 11],
        "Venus": [1, 2, 3, 4, 5, 8, 9, 10, 11],
        "Saturn": [3, 4, 5, 8, 9, 10, 11],
        "Lagna": [1, 2, 3, 4, 5, 8, 9, 11],
    },
    "Saturn": {
        "Sun": [1, 2, 4, 7, 8, 10, 11],
        "Moon": [3, 6, 11],
        "Mars": [3, 5, 6, 10, 11, 12],
        "Mercury": [6, 8, 9, 10, 11, 12],
        "Jupiter": [5, 6, 11, 12],
        "Venus": [6, 11, 12],
        "Saturn": [3, 5, 6, 11],
        "Lagna": [1, 3, 4, 6, 10, 11],
    },
}


class AshtakavargaCalculator:
    """
    Bhinna and Sarva ashtakavarga.

    Each of the seven planets receives bindus from eight reference
    points (the seven planets and the Lagna). The table totals 337
    bindus for every chart, so `is_valid` on the result is a checksum
    over the tables and the sign arithmetic rather than over the chart.
    """

    calculation_version = "v1"

    def calculate(self, kundali: KundaliChart) -> AshtakavargaGrid:
        reference_signs = {
            body: kundali.position(body).sign_index for body in PLANETS
        }
        reference_signs["Lagna"] = kundali.ascendant.sign_index

        bhinna: Dict[str, List[int]] = {}
        contributions: Dict[str, Dict[str, List[int]]] = {}

        for planet, table in BENEFIC_PLACES.items():
            rows = {
                contributor: self._contribution(reference_signs[contributor], table[contributor])
                for contributor in CONTRIBUTORS
            }
            contributions[planet] = rows
            bhinna[planet] = [
                sum(row[sign] for row in rows.values()) for sign in range(12)
            ]

        sarva = [sum(bhinna[planet][sign] for planet in PLANETS) for sign in range(12)]

        return AshtakavargaGrid(bhinna=bhinna, sarva=sarva, contributions=contributions)

    def _contribution(self, reference_sign: int, places: List[int]) -> List[int]:
        row = [0] * 12
        for place in places:
            row[(reference_sign + place - 1) % 12] = 1
        return row
