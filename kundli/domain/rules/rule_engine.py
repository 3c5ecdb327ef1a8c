import logging
from typing import Callable, Dict, Iterable, List, Type

from kundli.domain.kundali.schemas import BodyPosition, KundaliChart
from kundli.domain.rules.context import ChartContext
from kundli.domain.rules.dosha_rules import DOSHA_RULES
from kundli.domain.rules.matching_rules import MATCHING_RULES
from kundli.domain.rules.schemas import (
    DoshaRecord,
    DoshaRule,
    MatchingRule,
    RuleEvaluation,
    YogaRecord,
    YogaRule,
)
from kundli.domain.rules.yoga_rules import YOGA_RULES

logger = logging.getLogger(__name__)


def _check_exhaustive(kind: Type, table: Dict) -> None:
    missing = [member.value for member in kind if member not in table]
    if missing:
        raise ValueError(f"No evaluator registered for {kind.__name__}: {', '.join(missing)}")


class RuleEngine:
    """
    Evaluates yoga and dosha rules against a kundali chart.

    This engine:
    - Dispatches each closed rule variant to its evaluator
    - Is deterministic
    - Produces explainable records (forming bodies, cancellations)
    """

    calculation_version = "v1"

    def __init__(
        self,
        yoga_rules: Dict[YogaRule, Callable] | None = None,
        dosha_rules: Dict[DoshaRule, Callable] | None = None,
        matching_rules: Dict[MatchingRule, Callable] | None = None,
    ):
        self.yoga_rules = yoga_rules or YOGA_RULES
        self.dosha_rules = dosha_rules or DOSHA_RULES
        self.matching_rules = matching_rules or MATCHING_RULES

        _check_exhaustive(YogaRule, self.yoga_rules)
        _check_exhaustive(DoshaRule, self.dosha_rules)
        _check_exhaustive(MatchingRule, self.matching_rules)

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def evaluate(self, kundali: KundaliChart) -> RuleEvaluation:
        """
        Evaluate every yoga and dosha rule.
        """
        ctx = ChartContext.from_chart(kundali)
        yogas = self._evaluate_yogas(ctx, list(YogaRule))
        doshas = self._evaluate_doshas(ctx, list(DoshaRule))

        logger.debug(f"Rules evaluated: {len(yogas)} yogas, {len(doshas)} doshas")

        return RuleEvaluation(
            yogas=tuple(yogas),
            doshas=tuple(doshas),
            calculation_version=self.calculation_version,
        )

    def evaluate_yogas(
        self,
        kundali: KundaliChart,
        rules: Iterable[YogaRule] | None = None,
    ) -> List[YogaRecord]:
        ctx = ChartContext.from_chart(kundali)
        return self._evaluate_yogas(ctx, list(rules) if rules is not None else list(YogaRule))

    def evaluate_doshas(
        self,
        kundali: KundaliChart,
        rules: Iterable[DoshaRule] | None = None,
    ) -> List[DoshaRecord]:
        ctx = ChartContext.from_chart(kundali)
        return self._evaluate_doshas(ctx, list(rules) if rules is not None else list(DoshaRule))

    def evaluate_matching(
        self,
        moon_a: BodyPosition,
        moon_b: BodyPosition,
        rules: Iterable[MatchingRule] | None = None,
    ) -> List[DoshaRecord]:
        """
        Compatibility doshas between two natal Moons.
        """
        if moon_a.body != "Moon" or moon_b.body != "Moon":
            raise ValueError("Matching requires two Moon positions")

        records: List[DoshaRecord] = []
        for rule in (rules if rules is not None else MatchingRule):
            records.extend(self.matching_rules[rule](moon_a, moon_b))
        return records

    # ─────────────────────────────────────────────
    # Dispatch
    # ─────────────────────────────────────────────

    def _evaluate_yogas(self, ctx: ChartContext, rules: List[YogaRule]) -> List[YogaRecord]:
        records: List[YogaRecord] = []
        for rule in rules:
            records.extend(self.yoga_rules[rule](ctx))
        return records

    def _evaluate_doshas(self, ctx: ChartContext, rules: List[DoshaRule]) -> List[DoshaRecord]:
        records: List[DoshaRecord] = []
        for rule in rules:
            records.extend(self.dosha_rules[rule](ctx))
        return records
