from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, time
import pytest

from parking.models import Money, ClockRange, ParkingSession
from parking.rules import FlatWindowRule, ProgressiveHourlyRule, early_bird, night_owl
from parking.services import FeeEngine, RateEvaluation, STANDARD_RULES
from core.enums import VehicleClass, LoyaltyTier, DayRelation
from core.exceptions import ConfigurationError, InvalidArgument, InvalidInput, NoApplicableRule

STANDARD = "Standard Hourly Rate with Peak Hour Surcharge"
EARLY_BIRD = "Early Bird Special"
NIGHT_OWL = "Night Owl Special"

def session_for(entry, exit_time, vehicle=VehicleClass.CAR, tier=LoyaltyTier.NONE):
    return ParkingSession(entry, exit_time, vehicle, tier)

def all_day_rule(name, base):
    window = ClockRange(time(0, 0), time(23, 59, 59))
    return FlatWindowRule(name, Money(base), window, window, 24, DayRelation.SAME_DAY)


@pytest.mark.parametrize("entry, exit_time, vehicle, tier, fee, rule_name", [
    # Friday, off-peak
    (datetime(2024, 3, 15, 10, 0), datetime(2024, 3, 15, 15, 0), VehicleClass.CAR, LoyaltyTier.NONE, "14.00", STANDARD),
    # Monday commuter, Early Bird beats 27.00
    (datetime(2024, 3, 18, 8, 0), datetime(2024, 3, 18, 17, 0), VehicleClass.CAR, LoyaltyTier.NONE, "15.00", EARLY_BIRD),
    (datetime(2024, 3, 18, 8, 0), datetime(2024, 3, 18, 17, 0), VehicleClass.CAR, LoyaltyTier.GOLD, "12.00", EARLY_BIRD),
    (datetime(2024, 3, 18, 8, 0), datetime(2024, 3, 18, 17, 0), VehicleClass.BUS, LoyaltyTier.NONE, "30.00", EARLY_BIRD),
    (datetime(2024, 3, 18, 7, 30), datetime(2024, 3, 18, 17, 30), VehicleClass.CAR, LoyaltyTier.NONE, "15.00", EARLY_BIRD),
    # exit one minute past the Early Bird window
    (datetime(2024, 3, 18, 8, 0), datetime(2024, 3, 18, 19, 1), VehicleClass.CAR, LoyaltyTier.NONE, "35.00", STANDARD),
    # Friday night to Saturday morning
    (datetime(2024, 3, 15, 20, 0), datetime(2024, 3, 16, 7, 0), VehicleClass.CAR, LoyaltyTier.NONE, "8.00", NIGHT_OWL),
    (datetime(2024, 3, 15, 20, 0), datetime(2024, 3, 16, 7, 0), VehicleClass.CAR, LoyaltyTier.PLATINUM, "5.60", NIGHT_OWL),
    (datetime(2024, 3, 18, 20, 0), datetime(2024, 3, 19, 8, 0), VehicleClass.CAR, LoyaltyTier.NONE, "8.00", NIGHT_OWL),
    (datetime(2024, 3, 18, 8, 0), datetime(2024, 3, 18, 10, 0), VehicleClass.CAR, LoyaltyTier.NONE, "12.00", STANDARD),
    (datetime(2024, 3, 16, 14, 0), datetime(2024, 3, 16, 14, 30), VehicleClass.MOTORCYCLE, LoyaltyTier.NONE, "4.00", STANDARD),
    (datetime(2024, 3, 16, 14, 0), datetime(2024, 3, 16, 18, 0), VehicleClass.CAR, LoyaltyTier.NONE, "12.00", STANDARD),
    (datetime(2024, 3, 20, 15, 0), datetime(2024, 3, 20, 15, 15), VehicleClass.CAR, LoyaltyTier.NONE, "5.00", STANDARD),
    (datetime(2024, 3, 16, 9, 0), datetime(2024, 3, 17, 21, 0), VehicleClass.CAR, LoyaltyTier.NONE, "76.00", STANDARD),
    (datetime(2024, 3, 15, 22, 0), datetime(2024, 3, 17, 14, 0), VehicleClass.CAR, LoyaltyTier.NONE, "84.00", STANDARD),
    (datetime(2024, 3, 18, 23, 30), datetime(2024, 3, 19, 0, 30), VehicleClass.CAR, LoyaltyTier.NONE, "5.00", STANDARD),
    (datetime(2024, 3, 18, 12, 0), datetime(2024, 3, 18, 12, 0), VehicleClass.CAR, LoyaltyTier.NONE, "5.00", STANDARD),
    (datetime(2024, 3, 18, 11, 0), datetime(2024, 3, 18, 13, 1), VehicleClass.CAR, LoyaltyTier.NONE, "10.00", STANDARD),
])
def test_cheapest_applicable_rule_wins(engine, entry, exit_time, vehicle, tier, fee, rule_name):
    result = engine.calculate_with_details(session_for(entry, exit_time, vehicle, tier))
    assert result.selected_fee == Money(fee)
    assert result.selected_rule == rule_name

def test_calculate_returns_selected_fee(engine):
    s = session_for(datetime(2024, 3, 18, 8, 0), datetime(2024, 3, 18, 17, 0))
    assert engine.calculate(s) == Money("15.00")
    assert engine.calculate(s) == engine.calculate_with_details(s).selected_fee

def test_details_list_every_rule_in_order(engine):
    s = session_for(datetime(2024, 3, 16, 8, 0), datetime(2024, 3, 16, 17, 0))
    result = engine.calculate_with_details(s)
    assert result.evaluations == (
        RateEvaluation(STANDARD, Money("22.00")),
        RateEvaluation(EARLY_BIRD, Money("15.00")),
        RateEvaluation(NIGHT_OWL, None),
    )
    assert [e.is_applicable for e in result.evaluations] == [True, True, False]
    assert result.selected_fee == min(e.fee for e in result.evaluations if e.is_applicable)

def test_details_when_only_standard_applies(engine):
    s = session_for(datetime(2024, 3, 18, 10, 0), datetime(2024, 3, 18, 13, 0))
    result = engine.calculate_with_details(s)
    applicable = [e for e in result.evaluations if e.is_applicable]
    assert applicable == [RateEvaluation(STANDARD, Money("10.00"))]
    assert result.selected_rule == STANDARD

def test_tie_goes_to_first_configured_rule():
    s = session_for(datetime(2024, 3, 18, 10, 0), datetime(2024, 3, 18, 12, 0))
    a, b = all_day_rule("A", "9.00"), all_day_rule("B", "9.00")
    assert FeeEngine([a, b]).calculate_with_details(s).selected_rule == "A"
    assert FeeEngine([b, a]).calculate_with_details(s).selected_rule == "B"

def test_no_applicable_rule():
    engine = FeeEngine([early_bird()])
    s = session_for(datetime(2024, 3, 15, 10, 0), datetime(2024, 3, 15, 15, 0))
    with pytest.raises(NoApplicableRule):
        engine.calculate(s)
    assert engine.evaluate(s) == (RateEvaluation(EARLY_BIRD, None),)

def test_engine_needs_rules():
    with pytest.raises(ConfigurationError) as exc:
        FeeEngine([])
    assert isinstance(exc.value, InvalidArgument)
    with pytest.raises(InvalidInput):
        FeeEngine(None)
    with pytest.raises(ConfigurationError):
        FeeEngine([ProgressiveHourlyRule(), "night_owl"])

def test_engine_rejects_missing_session(engine):
    with pytest.raises(InvalidInput):
        engine.calculate(None)
    with pytest.raises(InvalidInput):
        engine.calculate_with_details("2024-03-18T08:00")

def test_engine_copies_rule_list():
    rules = [ProgressiveHourlyRule()]
    engine = FeeEngine(rules)
    rules.append(night_owl())
    assert engine.rule_names == [STANDARD]
    assert isinstance(engine.rules, tuple)

def test_standard_and_named_construction():
    assert FeeEngine.with_standard_rules().rule_names == [STANDARD, EARLY_BIRD, NIGHT_OWL]
    assert STANDARD_RULES == ("standard", "early_bird", "night_owl")
    assert FeeEngine.from_names(["night_owl", "standard"]).rule_names == [NIGHT_OWL, STANDARD]

def test_from_names_rejects_unknown_or_empty():
    with pytest.raises(ConfigurationError):
        FeeEngine.from_names(["standard", "weekend_saver"])
    with pytest.raises(ConfigurationError):
        FeeEngine.from_names([])

def test_engine_is_shareable_across_threads(engine):
    sessions = [
        session_for(datetime(2024, 3, 18, 8, 0), datetime(2024, 3, 18, 17, 0)),
        session_for(datetime(2024, 3, 15, 20, 0), datetime(2024, 3, 16, 7, 0)),
        session_for(datetime(2024, 3, 15, 10, 0), datetime(2024, 3, 15, 15, 0)),
    ] * 20
    expected = [engine.calculate(s) for s in sessions]
    with ThreadPoolExecutor(max_workers=8) as pool:
        assert list(pool.map(engine.calculate, sessions)) == expected
