# services/currency/currency_service.py
from typing import List, Optional

from travelbudget.core.logger import logger
from travelbudget.schemas.trip.trip_schema import DEFAULT_CURRENCY

# Approximate rates relative to USD; no live rate source
EXCHANGE_RATES = {
    "USD": 1.00,
    "EUR": 0.92,
    "GBP": 0.79,
    "JPY": 149.50,
    "CAD": 1.36,
    "AUD": 1.53,
    "CHF": 0.88,
    "CNY": 7.24,
    "INR": 83.12,
    "MXN": 17.15,
    "BRL": 4.97,
    "ZAR": 18.65,
    "SGD": 1.35,
    "NZD": 1.67,
    "HKD": 7.83,
    "KRW": 1320.50,
    "THB": 35.60,
    "MYR": 4.68,
    "PHP": 56.30,
    "IDR": 15678.00,
    "AED": 3.67,
    "SAR": 3.75,
    "TRY": 32.15,
    "RUB": 92.50,
    "PLN": 4.02,
    "SEK": 10.58,
    "NOK": 10.85,
    "DKK": 6.86,
}

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CNY": "¥",
    "CAD": "C$",
    "AUD": "A$",
    "NZD": "NZ$",
    "CHF": "CHF",
    "NGN": "₦",
    "INR": "₹",
    "KRW": "₩",
    "MXN": "$",
    "BRL": "R$",
    "ZAR": "R",
    "AED": "د.إ",
}

COUNTRY_CURRENCIES = {
    # North America
    "United States": "USD",
    "USA": "USD",
    "US": "USD",
    "Canada": "CAD",
    "Mexico": "MXN",
    # Euro area
    "France": "EUR",
    "Germany": "EUR",
    "Italy": "EUR",
    "Spain": "EUR",
    "Netherlands": "EUR",
    "Belgium": "EUR",
    "Austria": "EUR",
    "Portugal": "EUR",
    "Greece": "EUR",
    "Ireland": "EUR",
    "Finland": "EUR",
    # Rest of Europe
    "United Kingdom": "GBP",
    "UK": "GBP",
    "England": "GBP",
    "Scotland": "GBP",
    "Wales": "GBP",
    "Switzerland": "CHF",
    "Norway": "NOK",
    "Sweden": "SEK",
    "Denmark": "DKK",
    "Poland": "PLN",
    "Czech Republic": "CZK",
    "Hungary": "HUF",
    "Romania": "RON",
    # Asia
    "Japan": "JPY",
    "China": "CNY",
    "South Korea": "KRW",
    "India": "INR",
    "Thailand": "THB",
    "Singapore": "SGD",
    "Malaysia": "MYR",
    "Indonesia": "IDR",
    "Philippines": "PHP",
    "Vietnam": "VND",
    "Hong Kong": "HKD",
    "Taiwan": "TWD",
    # Oceania
    "Australia": "AUD",
    "New Zealand": "NZD",
    # Africa
    "Nigeria": "NGN",
    "South Africa": "ZAR",
    "Egypt": "EGP",
    "Kenya": "KES",
    "Ghana": "GHS",
    "Morocco": "MAD",
    # Middle East
    "United Arab Emirates": "AED",
    "UAE": "AED",
    "Saudi Arabia": "SAR",
    "Israel": "ILS",
    "Turkey": "TRY",
    # South America
    "Brazil": "BRL",
    "Argentina": "ARS",
    "Chile": "CLP",
    "Colombia": "COP",
    "Peru": "PEN",
}


def _code(currency: Optional[str]) -> str:
    return (currency or DEFAULT_CURRENCY).strip().upper()


def is_currency_supported(currency: str) -> bool:
    return _code(currency) in EXCHANGE_RATES


def get_supported_currencies() -> List[str]:
    return sorted(EXCHANGE_RATES)


def get_currency_symbol(currency: Optional[str]) -> str:
    code = _code(currency)
    return CURRENCY_SYMBOLS.get(code, code)


def convert_currency(amount: Optional[float], from_currency: str = "USD", to_currency: str = "USD") -> float:
    """
    Convert through USD using the static rate table.

    An unsupported code on either side leaves the amount unchanged.
    """
    if not amount:
        return 0.0

    source = _code(from_currency)
    target = _code(to_currency)
    if source == target:
        return amount

    if source not in EXCHANGE_RATES or target not in EXCHANGE_RATES:
        logger.warning(f"Currency {source} or {target} not supported, keeping original amount")
        return amount

    in_usd = amount / EXCHANGE_RATES[source]
    return in_usd * EXCHANGE_RATES[target]


def format_currency(amount: Optional[float], currency: Optional[str] = "USD", decimals: int = 2) -> str:
    """Render an amount as e.g. "$1,234.50", "-€20.00" or "NOK 15.00"."""
    code = _code(currency)
    symbol = get_currency_symbol(code)
    value = amount or 0.0
    sign = "-" if value < 0 else ""
    digits = f"{abs(value):,.{decimals}f}"
    # Codes without a symbol are spelled out with a separating space
    separator = " " if symbol == code else ""
    return f"{sign}{symbol}{separator}{digits}"


def format_currency_with_usd(amount: Optional[float], currency: Optional[str] = "USD") -> str:
    """Whole-unit amount in its own currency with the USD equivalent, e.g. "£1,000 ($1,266)"."""
    code = _code(currency)
    if not amount:
        return format_currency(0, code)

    original = format_currency(amount, code, decimals=0)
    if code == "USD":
        return original

    usd = convert_currency(amount, code, "USD")
    return f"{original} ({format_currency(usd, 'USD', decimals=0)})"


def currency_from_destination(destination: Optional[str]) -> str:
    """Guess a currency from "City, Country" text, trying the last part first."""
    if not destination:
        return DEFAULT_CURRENCY

    parts = [part.strip() for part in destination.split(",")]
    for part in reversed(parts):
        if part in COUNTRY_CURRENCIES:
            return COUNTRY_CURRENCIES[part]
    return DEFAULT_CURRENCY
