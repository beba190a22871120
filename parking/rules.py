# rules.py
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from decimal import Decimal
from typing import Optional, Tuple
from core.enums import DayRelation
from core.exceptions import ConfigurationError
from .models import Money, ClockRange, InstantRange, ParkingSession

logger = logging.getLogger(__name__)

FIRST_HOUR_RATE = Decimal("5.00")
SECOND_HOUR_RATE = Decimal("3.00")
ADDITIONAL_HOUR_RATE = Decimal("2.00")
PEAK_HOUR_MULTIPLIER = Decimal("1.5")

MORNING_PEAK = ClockRange(time(7, 0), time(10, 0))
EVENING_PEAK = ClockRange(time(16, 0), time(19, 0))

def is_weekday(moment: datetime) -> bool:
    return moment.weekday() < 5

def rate_for_hour(hour_number: int) -> Decimal:
    if hour_number == 1:
        return FIRST_HOUR_RATE
    if hour_number == 2:
        return SECOND_HOUR_RATE
    return ADDITIONAL_HOUR_RATE


class RateRule(ABC):
    """A pricing policy that either prices a session or declines it (None)."""
    name: str

    @abstractmethod
    def evaluate(self, session: ParkingSession) -> Optional[Money]:
        pass


@dataclass(frozen=True)
class ProgressiveHourlyRule(RateRule):
    """Always applicable: tiered hourly rates with a weekday peak surcharge.

    Each started hour is priced on its own span [entry + (n-1)h, entry + nh);
    any overlap with a peak window surcharges the whole hour.
    """
    name: str = "Standard Hourly Rate with Peak Hour Surcharge"
    peak_windows: Tuple[ClockRange, ...] = (MORNING_PEAK, EVENING_PEAK)

    def evaluate(self, session: ParkingSession) -> Money:
        total = sum(
            (self.hour_rate(n, session) for n in range(1, session.rounded_hours + 1)),
            Decimal("0"),
        )
        return Money(total * session.vehicle_class.rate_multiplier)

    def hour_rate(self, hour_number: int, session: ParkingSession) -> Decimal:
        hour_start = session.entry_time + timedelta(hours=hour_number - 1)
        segment = InstantRange(hour_start, hour_start + timedelta(hours=1))
        base = rate_for_hour(hour_number)
        if self.is_peak(segment):
            return base * PEAK_HOUR_MULTIPLIER
        return base

    def is_peak(self, segment: InstantRange) -> bool:
        return is_weekday(segment.start) and any(segment.overlaps_window(w) for w in self.peak_windows)


@dataclass(frozen=True)
class FlatWindowRule(RateRule):
    """Fixed fee for sessions entering and leaving inside the given clock windows."""
    name: str
    base_fee: Money
    entry_window: ClockRange
    exit_window: ClockRange
    max_duration_hours: int
    day_relation: DayRelation

    def __post_init__(self):
        if not self.name:
            raise ConfigurationError("rule name is required")
        if not isinstance(self.base_fee, Money):
            object.__setattr__(self, "base_fee", Money(self.base_fee))
        if not isinstance(self.entry_window, ClockRange) or not isinstance(self.exit_window, ClockRange):
            raise ConfigurationError(f"{self.name}: entry and exit windows must be ClockRange")
        if isinstance(self.max_duration_hours, bool) or not isinstance(self.max_duration_hours, int):
            raise ConfigurationError(f"{self.name}: max_duration_hours must be an int")
        if self.max_duration_hours < 0:
            raise ConfigurationError(f"{self.name}: max_duration_hours cannot be negative")
        if not isinstance(self.day_relation, DayRelation):
            raise ConfigurationError(f"{self.name}: day_relation must be a DayRelation")

    def is_eligible(self, session: ParkingSession) -> bool:
        # exact (floored) hours against the cap, not the rounded-up billing hours
        return (
            session.duration_hours <= self.max_duration_hours
            and self.day_relation.holds(session)
            and self.entry_window.contains(session.entry_time.time())
            and self.exit_window.contains(session.exit_time.time())
        )

    def evaluate(self, session: ParkingSession) -> Optional[Money]:
        if not self.is_eligible(session):
            return None
        # vehicle multiplier first, then loyalty discount; rounded to cents once
        fee = self.base_fee.amount * session.vehicle_class.rate_multiplier
        return Money(session.loyalty_tier.apply_discount(fee))


def early_bird() -> FlatWindowRule:
    return FlatWindowRule(
        name="Early Bird Special",
        base_fee=Money(Decimal("15.00")),
        entry_window=ClockRange(time(6, 0), time(9, 0)),
        exit_window=ClockRange(time(15, 30), time(19, 0)),
        max_duration_hours=15,
        day_relation=DayRelation.SAME_DAY,
    )

def night_owl() -> FlatWindowRule:
    return FlatWindowRule(
        name="Night Owl Special",
        base_fee=Money(Decimal("8.00")),
        entry_window=ClockRange(time(18, 0), time(23, 59, 59)),
        exit_window=ClockRange(time(5, 0), time(10, 0)),
        max_duration_hours=18,
        day_relation=DayRelation.NEXT_DAY,
    )

RULE_FACTORIES = {
    "standard": ProgressiveHourlyRule,
    "early_bird": early_bird,
    "night_owl": night_owl,
}

def build_rules(names) -> list[RateRule]:
    rules = []
    for name in names:
        factory = RULE_FACTORIES.get(name)
        if factory is None:
            raise ConfigurationError(f"unknown rate rule: {name!r} (known: {', '.join(RULE_FACTORIES)})")
        rules.append(factory())
    logger.debug("built rate rules %s", [r.name for r in rules])
    return rules
