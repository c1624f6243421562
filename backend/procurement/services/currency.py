"""
Home currency conversion.

Everything of an order is converted with the two rates stored on the
order (ILS per unit of USD / CNY), never with the rate of the day the
money moved.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Union

logger = logging.getLogger(__name__)

Number = Union[Decimal, int, float]

HOME_CURRENCY = "ILS"


class Currency(str, Enum):
    """Currencies with a rate on the order"""
    USD = "USD"
    CNY = "CNY"
    ILS = "ILS"

    @classmethod
    def codes(cls) -> tuple:
        return tuple(c.value for c in cls)


def to_decimal(value: Number) -> Decimal:
    """Decimal(str(x)) so 37.6 stays 37.6 and not 37.60000000000000142..."""
    if isinstance(value, Decimal):
        return value
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


def to_home_currency(amount: Number, currency: str, usd_rate: Number, cny_rate: Number) -> Decimal:
    """
    Convert an amount to ILS.

    USD and CNY use the order's rates, ILS passes through. Any other code
    is converted with the USD rate; it is not an error.
    """
    amount = to_decimal(amount)
    if currency == Currency.USD.value:
        return amount * to_decimal(usd_rate)
    if currency == Currency.CNY.value:
        return amount * to_decimal(cny_rate)
    if currency == HOME_CURRENCY:
        return amount

    logger.debug(f"No rate for currency {currency!r}, converting with the USD rate")
    return amount * to_decimal(usd_rate)


@dataclass(frozen=True)
class ExchangeRates:
    """The fixed rate pair of one order"""
    usd: Decimal
    cny: Decimal

    @classmethod
    def of(cls, usd: Number, cny: Number) -> "ExchangeRates":
        return cls(usd=to_decimal(usd), cny=to_decimal(cny))

    @classmethod
    def from_order(cls, order) -> "ExchangeRates":
        return cls.of(order.usd_rate, order.cny_rate)

    def convert(self, amount: Number, currency: str) -> Decimal:
        return to_home_currency(amount, currency, self.usd, self.cny)


def decimal_fields(data: dict, fields) -> dict:
    """Copy of data with the given numeric fields as Decimal"""
    return {
        key: (to_decimal(value) if key in fields and value is not None else value)
        for key, value in data.items()
    }
