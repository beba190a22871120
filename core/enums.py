# /core/enums.py
import enum
from decimal import Decimal

class VehicleClass(enum.Enum):
    MOTORCYCLE = "MOTORCYCLE"
    CAR = "CAR"
    BUS = "BUS"

    @property
    def rate_multiplier(self) -> Decimal:
        return _RATE_MULTIPLIERS[self]

class LoyaltyTier(enum.Enum):
    NONE = "NONE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"

    @property
    def discount(self) -> Decimal:
        return _DISCOUNTS[self]

    def apply_discount(self, amount):
        """Multiply an amount (Decimal or Money) by (1 - discount)."""
        return amount * (Decimal("1") - self.discount)

class DayRelation(enum.Enum):
    SAME_DAY = "SAME_DAY"
    NEXT_DAY = "NEXT_DAY"

    def holds(self, session) -> bool:
        if self is DayRelation.SAME_DAY:
            return session.is_same_day
        return session.is_next_day

_RATE_MULTIPLIERS = {
    VehicleClass.MOTORCYCLE: Decimal("0.8"),
    VehicleClass.CAR: Decimal("1.0"),
    VehicleClass.BUS: Decimal("2.0"),
}

_DISCOUNTS = {
    LoyaltyTier.NONE: Decimal("0"),
    LoyaltyTier.SILVER: Decimal("0.10"),
    LoyaltyTier.GOLD: Decimal("0.20"),
    LoyaltyTier.PLATINUM: Decimal("0.30"),
}
