# services.py
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple
from core.exceptions import InvalidInput, ConfigurationError, NoApplicableRule
from .models import Money, ParkingSession
from .rules import RateRule, build_rules

logger = logging.getLogger(__name__)

STANDARD_RULES = ("standard", "early_bird", "night_owl")

@dataclass(frozen=True)
class RateEvaluation:
    rule_name: str
    fee: Optional[Money]

    @property
    def is_applicable(self) -> bool:
        return self.fee is not None

@dataclass(frozen=True)
class CalculationResult:
    selected_fee: Money
    selected_rule: str
    evaluations: Tuple[RateEvaluation, ...]


class FeeEngine:
    """Evaluates every configured rule and keeps the cheapest applicable fee.

    The rule list is fixed at construction and never mutated, so one engine
    can serve concurrent callers. Ties go to the rule configured first.
    """

    def __init__(self, rules: Iterable[RateRule]):
        if rules is None:
            raise InvalidInput("rules are required")
        rules = tuple(rules)
        if not rules:
            raise ConfigurationError("At least one rate rule required")
        for rule in rules:
            if not isinstance(rule, RateRule):
                raise ConfigurationError(f"not a rate rule: {rule!r}")
        self._rules = rules

    @classmethod
    def with_standard_rules(cls) -> "FeeEngine":
        return cls.from_names(STANDARD_RULES)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "FeeEngine":
        return cls(build_rules(names))

    @property
    def rules(self) -> Tuple[RateRule, ...]:
        return self._rules

    @property
    def rule_names(self) -> list[str]:
        return [r.name for r in self._rules]

    def evaluate(self, session: ParkingSession) -> Tuple[RateEvaluation, ...]:
        if session is None:
            raise InvalidInput("session is required")
        if not isinstance(session, ParkingSession):
            raise InvalidInput(f"session must be ParkingSession, got {type(session).__name__}")
        evaluations = []
        for rule in self._rules:
            fee = rule.evaluate(session)
            logger.debug("rule %r -> %s", rule.name, fee if fee is not None else "not applicable")
            evaluations.append(RateEvaluation(rule.name, fee))
        return tuple(evaluations)

    def calculate_with_details(self, session: ParkingSession) -> CalculationResult:
        evaluations = self.evaluate(session)
        applicable = [e for e in evaluations if e.is_applicable]
        if not applicable:
            raise NoApplicableRule("No applicable strategy found")
        # min() keeps the first of equal fees
        best = min(applicable, key=lambda e: e.fee)
        logger.debug("selected %r at %s", best.rule_name, best.fee)
        return CalculationResult(best.fee, best.rule_name, evaluations)

    def calculate(self, session: ParkingSession) -> Money:
        return self.calculate_with_details(session).selected_fee
