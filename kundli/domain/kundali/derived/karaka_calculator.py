from typing import Dict, List

from kundli.domain.kundali.constants import PLANETS
from kundli.domain.kundali.derived.schemas import CharaKaraka
from kundli.domain.kundali.schemas import BodyPosition


# Rank order: highest degree in sign first
KARAKAS = [
    ("Atmakaraka", "AK"),
    ("Amatyakaraka", "AmK"),
    ("Bhratrukaraka", "BK"),
    ("Matrukaraka", "MK"),
    ("Putrakaraka", "PK"),
    ("Gnatikaraka", "GK"),
    ("Darakaraka", "DK"),
]


class KarakaCalculator:
    """
    Seven-karaka Jaimini scheme (nodes excluded).
    """

    calculation_version = "v1"

    def calculate(self, positions: Dict[str, BodyPosition]) -> List[CharaKaraka]:
        # Ties resolve in natural planet order
        ranked = sorted(
            PLANETS,
            key=lambda body: (-positions[body].degree_in_sign, PLANETS.index(body)),
        )

        return [
            CharaKaraka(
                karaka=name,
                abbreviation=abbreviation,
                body=body,
                degree_in_sign=positions[body].degree_in_sign,
            )
            for (name, abbreviation), body in zip(KARAKAS, ranked)
        ]

    def atmakaraka(self, positions: Dict[str, BodyPosition]) -> str:
        return self.calculate(positions)[0].body
