# schemas.py
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from core.enums import VehicleClass, LoyaltyTier

class FeeQuoteRequest(BaseModel):
    entry_time: datetime
    exit_time: datetime
    vehicle_class: VehicleClass = VehicleClass.CAR
    loyalty_tier: LoyaltyTier = LoyaltyTier.NONE

class FeeQuoteRead(BaseModel):
    fee: Decimal
    rule_name: str

class RateEvaluationRead(BaseModel):
    rule_name: str
    fee: Optional[Decimal] = None
    applicable: bool

class FeeQuoteDetailRead(FeeQuoteRead):
    evaluations: List[RateEvaluationRead] = Field(default_factory=list)

class RateRuleRead(BaseModel):
    name: str
    kind: str
