# models.py
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from core.enums import VehicleClass, LoyaltyTier
from core.exceptions import InvalidInput, InvalidArgument, InvalidAmount

_CENT = Decimal("0.01")

def _require(value, kind, field: str):
    if value is None:
        raise InvalidInput(f"{field} is required")
    if not isinstance(value, kind):
        raise InvalidInput(f"{field} must be {kind.__name__}, got {type(value).__name__}")
    return value

def _to_decimal(value) -> Decimal:
    if value is None:
        raise InvalidInput("amount is required")
    if isinstance(value, bool):
        raise InvalidInput("amount must be numeric")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # str() keeps the shortest repr, so 15.556 stays 15.556 rather than 15.55599...
        return Decimal(str(value))
    if isinstance(value, (int, str)):
        try:
            return Decimal(value)
        except InvalidOperation:
            raise InvalidInput(f"amount is not a number: {value!r}")
    raise InvalidInput(f"amount must be numeric, got {type(value).__name__}")


@dataclass(frozen=True, order=True)
class Money:
    """Non-negative amount held at two decimal places, rounded half-up."""
    amount: Decimal

    def __post_init__(self):
        value = _to_decimal(self.amount)
        if not value.is_finite():
            raise InvalidAmount(f"amount must be finite: {value}")
        if value < 0:
            raise InvalidAmount("Parking fee cannot be negative")
        object.__setattr__(self, "amount", value.quantize(_CENT, rounding=ROUND_HALF_UP))

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.amount + other.amount)

    def __mul__(self, factor) -> "Money":
        return Money(self.amount * _to_decimal(factor))

    __rmul__ = __mul__

    def is_less_than(self, other: "Money") -> bool:
        return self.amount < other.amount

    def as_float(self) -> float:
        return float(self.amount)

    def __str__(self) -> str:
        return f"${self.amount:.2f}"


@dataclass(frozen=True)
class ClockRange:
    """Inclusive time-of-day window; end earlier than start wraps past midnight."""
    start: time
    end: time

    def __post_init__(self):
        _require(self.start, time, "start")
        _require(self.end, time, "end")

    @property
    def crosses_midnight(self) -> bool:
        return self.end < self.start

    def contains(self, moment: time) -> bool:
        _require(moment, time, "moment")
        if self.crosses_midnight:
            return moment >= self.start or moment <= self.end
        return self.start <= moment <= self.end

    def __str__(self) -> str:
        return f"{self.start.isoformat()}-{self.end.isoformat()}"


@dataclass(frozen=True)
class InstantRange:
    start: datetime
    end: datetime

    def __post_init__(self):
        _require(self.start, datetime, "start")
        _require(self.end, datetime, "end")

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def overlaps_window(self, window: ClockRange) -> bool:
        """Compare the clock part of this range against a daily window, ignoring dates.

        Start is inclusive and end exclusive on both sides. A range whose clock
        end is not after its clock start (e.g. 23:30 -> 00:30) is treated as
        running over midnight.
        """
        _require(window, ClockRange, "window")
        start, end = self.start.time(), self.end.time()
        if end <= start:
            return not start > window.end or end > window.start
        return start < window.end and end > window.start

    def overlaps(self, other: "InstantRange") -> bool:
        _require(other, InstantRange, "other")
        return self.overlaps_window(ClockRange(other.start.time(), other.end.time()))


@dataclass(frozen=True)
class ParkingSession:
    entry_time: datetime
    exit_time: datetime
    vehicle_class: VehicleClass
    loyalty_tier: LoyaltyTier = LoyaltyTier.NONE

    def __post_init__(self):
        _require(self.entry_time, datetime, "entry_time")
        _require(self.exit_time, datetime, "exit_time")
        _require(self.vehicle_class, VehicleClass, "vehicle_class")
        _require(self.loyalty_tier, LoyaltyTier, "loyalty_tier")
        if (self.entry_time.tzinfo is None) != (self.exit_time.tzinfo is None):
            raise InvalidInput("entry_time and exit_time must both be naive or both timezone-aware")
        if self.exit_time < self.entry_time:
            raise InvalidArgument("Exit time cannot be before entry time")

    @property
    def elapsed(self) -> timedelta:
        return self.exit_time - self.entry_time

    @property
    def rounded_hours(self) -> int:
        seconds = self.elapsed // timedelta(seconds=1)
        return max(1, (seconds + 3599) // 3600)

    @property
    def duration_hours(self) -> int:
        return self.elapsed // timedelta(hours=1)

    @property
    def is_same_day(self) -> bool:
        return self.entry_time.date() == self.exit_time.date()

    @property
    def is_next_day(self) -> bool:
        return self.exit_time.date() == self.entry_time.date() + timedelta(days=1)

    @property
    def parking_period(self) -> InstantRange:
        return InstantRange(self.entry_time, self.exit_time)
