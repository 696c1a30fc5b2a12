from fastapi import APIRouter, Query
from pydantic import BaseModel
from typing import List, Optional

from travelbudget.services.currency.currency_service import (
    convert_currency, currency_from_destination, format_currency, format_currency_with_usd,
    get_currency_symbol, get_supported_currencies, is_currency_supported,
)

router = APIRouter(prefix="/currency", tags=["Currency"])


class ConversionResponse(BaseModel):
    amount: float
    from_currency: str
    to_currency: str
    converted: float
    supported: bool
    formatted: str


class FormattedAmount(BaseModel):
    amount: float
    currency: str
    formatted: str
    with_usd: str


@router.get("/convert", response_model=ConversionResponse)
async def convert(
    amount: float,
    from_currency: str = Query("USD", alias="from"),
    to_currency: str = Query("USD", alias="to"),
):
    converted = convert_currency(amount, from_currency, to_currency)
    return ConversionResponse(
        amount=amount,
        from_currency=from_currency.upper(),
        to_currency=to_currency.upper(),
        converted=converted,
        supported=is_currency_supported(from_currency) and is_currency_supported(to_currency),
        formatted=format_currency(converted, to_currency),
    )


@router.get("/supported", response_model=List[str])
async def supported_currencies():
    return get_supported_currencies()


@router.get("/format", response_model=FormattedAmount)
async def format_amount(amount: float, currency: str = "USD"):
    return FormattedAmount(
        amount=amount,
        currency=currency.upper(),
        formatted=format_currency(amount, currency),
        with_usd=format_currency_with_usd(amount, currency),
    )


@router.get("/for-destination")
async def currency_for_destination(destination: Optional[str] = None):
    code = currency_from_destination(destination)
    return {"destination": destination, "currency": code, "symbol": get_currency_symbol(code)}
