# routers.py
import logging
from functools import lru_cache
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from core.config import settings
from core.exceptions import InvalidInput, InvalidArgument, NoApplicableRule
from .models import ParkingSession
from .schemas import FeeQuoteRequest, FeeQuoteRead, FeeQuoteDetailRead, RateEvaluationRead, RateRuleRead
from .services import FeeEngine, CalculationResult

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Fees"])

@lru_cache
def get_engine() -> FeeEngine:
    return FeeEngine.from_names(settings.enabled_rules)

def run_quote(engine: FeeEngine, request: FeeQuoteRequest) -> CalculationResult:
    try:
        session = ParkingSession(
            entry_time=request.entry_time,
            exit_time=request.exit_time,
            vehicle_class=request.vehicle_class,
            loyalty_tier=request.loyalty_tier,
        )
        return engine.calculate_with_details(session)
    except (InvalidInput, InvalidArgument) as e:
        logger.info("fee quote rejected: %s", e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NoApplicableRule as e:
        logger.info("no rate rule applies: %s", e)
        raise HTTPException(status_code=422, detail="no rate rule applies")
    except Exception:
        logger.exception("fee quote failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="internal error")

@router.get("/fees/rules", response_model=List[RateRuleRead])
def list_rules(engine: FeeEngine = Depends(get_engine)):
    return [RateRuleRead(name=r.name, kind=type(r).__name__) for r in engine.rules]

@router.post("/fees/quote", response_model=FeeQuoteRead)
def quote_fee(request: FeeQuoteRequest, engine: FeeEngine = Depends(get_engine)):
    result = run_quote(engine, request)
    return FeeQuoteRead(fee=result.selected_fee.amount, rule_name=result.selected_rule)

@router.post("/fees/quote/details", response_model=FeeQuoteDetailRead)
def quote_fee_details(request: FeeQuoteRequest, engine: FeeEngine = Depends(get_engine)):
    result = run_quote(engine, request)
    evaluations = [
        RateEvaluationRead(
            rule_name=e.rule_name,
            fee=e.fee.amount if e.is_applicable else None,
            applicable=e.is_applicable,
        )
        for e in result.evaluations
    ]
    return FeeQuoteDetailRead(fee=result.selected_fee.amount, rule_name=result.selected_rule, evaluations=evaluations)
