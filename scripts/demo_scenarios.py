import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import datetime
from core.enums import VehicleClass, LoyaltyTier
from parking.models import ParkingSession
from parking.services import FeeEngine

FMT = "%Y-%m-%d %H:%M"

SCENARIOS = [
    ("Standard - Off-Peak 5 hours", "2024-03-15 10:00", "2024-03-15 15:00", VehicleClass.CAR, LoyaltyTier.NONE),
    ("Standard - With Morning Peak", "2024-03-18 08:00", "2024-03-18 10:00", VehicleClass.CAR, LoyaltyTier.NONE),
    ("Standard - With Evening Peak", "2024-03-19 16:00", "2024-03-19 19:00", VehicleClass.CAR, LoyaltyTier.NONE),
    ("Early Bird - No Loyalty", "2024-03-18 08:00", "2024-03-18 17:00", VehicleClass.CAR, LoyaltyTier.NONE),
    ("Early Bird - Gold Member", "2024-03-18 08:00", "2024-03-18 17:00", VehicleClass.CAR, LoyaltyTier.GOLD),
    ("Night Owl - No Loyalty", "2024-03-15 20:00", "2024-03-16 07:00", VehicleClass.CAR, LoyaltyTier.NONE),
    ("Night Owl - Platinum Member", "2024-03-15 20:00", "2024-03-16 07:00", VehicleClass.CAR, LoyaltyTier.PLATINUM),
    ("Motorcycle - 4 hours with peak", "2024-03-15 14:00", "2024-03-15 18:00", VehicleClass.MOTORCYCLE, LoyaltyTier.NONE),
    ("Bus - Weekend (no peak)", "2024-03-16 10:00", "2024-03-16 15:00", VehicleClass.BUS, LoyaltyTier.NONE),
]

def demo(engine: FeeEngine, desc: str, entry: str, exit_: str, vehicle: VehicleClass, loyalty: LoyaltyTier):
    session = ParkingSession(datetime.strptime(entry, FMT), datetime.strptime(exit_, FMT), vehicle, loyalty)
    result = engine.calculate_with_details(session)
    print(f"{desc}\n  {entry} -> {exit_} ({vehicle.value}, {loyalty.value})\n  Fee: {result.selected_fee} ({result.selected_rule})")

if __name__ == "__main__":
    print("=== Parking Fee Calculator ===")
    print("Pricing policies:")
    print("1. Standard Hourly with Peak Hour Surcharge (7-10 AM, 4-7 PM weekdays)")
    print("2. Early Bird Special ($15, 6-9 AM entry, 3:30-7 PM exit, max 15 hours)")
    print("3. Night Owl Special ($8, 6 PM-midnight entry, 5-10 AM exit next day, max 18 hours)")
    print("   * Early Bird & Night Owl support loyalty discounts\n")
    engine = FeeEngine.with_standard_rules()
    for scenario in SCENARIOS:
        demo(engine, *scenario)
