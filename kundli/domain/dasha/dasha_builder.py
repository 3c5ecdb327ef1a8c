import logging
from typing import Dict

from kundli.domain.dasha.ashtottari import AshtottariDasha
from kundli.domain.dasha.chara import CharaDasha
from kundli.domain.dasha.schemas import DashaTimelines
from kundli.domain.dasha.vimshottari import VimshottariDasha
from kundli.domain.dasha.yogini import YoginiDasha
from kundli.domain.kundali.schemas import KundaliChart

logger = logging.getLogger(__name__)


class DashaBuilder:
    """
    Orchestrates all dasha systems for a given kundali.
    """

    def __init__(
        self,
        vimshottari: VimshottariDasha | None = None,
        yogini: YoginiDasha | None = None,
        ashtottari: AshtottariDasha | None = None,
        chara: CharaDasha | None = None,
    ):
        self.vimshottari = vimshottari or VimshottariDasha()
        self.yogini = yogini or YoginiDasha()
        self.ashtottari = ashtottari or AshtottariDasha()
        self.chara = chara or CharaDasha()

    def build(self, kundali: KundaliChart) -> DashaTimelines:
        """
        Build every dasha timeline. Inapplicable systems are absent,
        not errors.
        """
        inapplicable: Dict[str, str] = {}

        ashtottari = self.ashtottari.calculate(kundali)
        if ashtottari is None:
            inapplicable[self.ashtottari.system] = (
                self.ashtottari.ineligibility_reason(kundali) or "not applicable"
            )

        return DashaTimelines(
            vimshottari=self.vimshottari.calculate(kundali),
            yogini=self.yogini.calculate(kundali),
            ashtottari=ashtottari,
            chara=self.chara.calculate(kundali),
            inapplicable=inapplicable,
        )
