"""Exchange rate API"""

from typing import Any

from fastapi import APIRouter, Depends

from procurement.schemas.rates import RatesResponse
from procurement.services.rates import RateProvider, get_rate_provider

router = APIRouter()


@router.get("/", response_model=RatesResponse)
async def get_rates(*, rate_provider: RateProvider = Depends(get_rate_provider)) -> Any:
    """Current USD/CNY rates; live is false when the defaults were used"""
    quote = await rate_provider.get_rates()
    return RatesResponse(USD=float(quote.usd), CNY=float(quote.cny), live=quote.is_live)
