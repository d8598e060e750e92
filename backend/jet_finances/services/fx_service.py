"""
Foreign exchange service for currency conversion.

Rates are fixed. AED is the pivot currency: EUR and USD amounts are
converted through AED using two cross-rates expressed as AED per unit.
"""
from decimal import Decimal
from typing import Optional, Union
import logging

logger = logging.getLogger(__name__)

USD = "USD"
AED = "AED"
EUR = "EUR"
SUPPORTED_CURRENCIES = (USD, AED, EUR)

AED_TO_USD = Decimal("3.6735")  # AED per 1 USD
AED_TO_EUR = Decimal("4.3119")  # AED per 1 EUR

Number = Union[Decimal, int, float, str]


def to_decimal(value: Optional[Number]) -> Decimal:
    """Coerce a stored or user-supplied amount to Decimal (None -> 0)."""
    if value is None or value == "":
        return Decimal(0)
    if isinstance(value, Decimal):
        return value
    # str() keeps floats from dragging binary noise into the Decimal
    return Decimal(str(value))


def convert(amount: Optional[Number], from_currency: Optional[str], to_currency: Optional[str]) -> Decimal:
    """
    Convert amount between USD, AED and EUR.

    Missing amount or currency codes yield 0. Combinations outside the three
    supported currencies are returned unconverted rather than rejected.

    Args:
        amount: Amount in from_currency
        from_currency: Source currency code
        to_currency: Target currency code

    Returns:
        Amount in to_currency (not rounded)
    """
    if not amount or not from_currency or not to_currency:
        return Decimal(0)

    amount = to_decimal(amount)
    source = from_currency.upper()
    target = to_currency.upper()

    if source == target:
        return amount

    if source == EUR:
        amount_aed = amount * AED_TO_EUR
        if target == USD:
            return amount_aed / AED_TO_USD
        if target == AED:
            return amount_aed
        return _unconverted(amount, source, target)

    if target == EUR:
        if source == USD:
            amount_aed = amount * AED_TO_USD
        elif source == AED:
            amount_aed = amount
        else:
            return _unconverted(amount, source, target)
        return amount_aed / AED_TO_EUR

    if source == AED and target == USD:
        return amount / AED_TO_USD
    if source == USD and target == AED:
        return amount * AED_TO_USD

    return _unconverted(amount, source, target)


def _unconverted(amount: Decimal, source: str, target: str) -> Decimal:
    logger.debug(f"No rate for {source} -> {target}; using amount unconverted")
    return amount


def convert_to_usd(amount: Optional[Number], currency: Optional[str]) -> Decimal:
    """Convert amount to USD."""
    return convert(amount, currency, USD)


def convert_to_aed(amount: Optional[Number], currency: Optional[str]) -> Decimal:
    """Convert amount to AED."""
    return convert(amount, currency, AED)
