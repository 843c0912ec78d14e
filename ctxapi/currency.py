"""Currency conversion primitives and exchange-rate state types."""

from __future__ import annotations

import asyncio
import math
from contextlib import asynccontextmanager
from dataclasses import dataclass
from decimal import Decimal
from typing import AsyncIterator, Protocol


class InvalidAmountError(ValueError):
    """Raised when a request body is not a finite number."""


class InvalidRateError(ValueError):
    """Raised when an exchange rate is not a finite, positive number."""


def parse_amount(text: str) -> float:
    try:
        value = float(text.strip())
    except ValueError as exc:
        raise InvalidAmountError(f"Invalid amount: {text!r}") from exc
    if not math.isfinite(value):
        raise InvalidAmountError(f"Invalid amount: {text!r}")
    return value


def parse_rate(text: str) -> float:
    try:
        value = float(text.strip())
    except ValueError as exc:
        raise InvalidRateError(f"Invalid exchange rate: {text!r}") from exc
    check_rate(value)
    return value


def check_rate(rate: float) -> None:
    if not math.isfinite(rate) or rate <= 0:
        raise InvalidRateError(f"Exchange rate must be positive, got {rate!r}")


def format_amount(value: float) -> str:
    """Render an amount in positional notation, never with an exponent.

    ``130.0`` renders as ``130``, ``1.3e-07`` as ``0.00000013`` and ``-0.0``
    as ``-0``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == 0 and math.copysign(1.0, value) < 0:
        return "-0"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def usd_to_gbp(amount: float, rate: float) -> float:
    return amount * rate


def gbp_to_usd(amount: float, rate: float) -> float:
    return amount / rate


def usd_to_eur(amount: float, rate: float) -> float:
    return amount * rate


def eur_to_usd(amount: float, rate: float) -> float:
    return amount / rate


@dataclass(frozen=True)
class GBPtoUSD:
    rate: float


@dataclass(frozen=True)
class EURtoUSD:
    rate: float


class HasGBPtoUSD(Protocol):
    def gbp_to_usd_rate(self) -> GBPtoUSD: ...


class HasEURtoUSD(Protocol):
    def eur_to_usd_rate(self) -> EURtoUSD: ...


@dataclass(frozen=True)
class AllExchangeRates:
    """Composite state satisfying both ``HasGBPtoUSD`` and ``HasEURtoUSD``."""

    gbp_to_usd: GBPtoUSD
    eur_to_usd: EURtoUSD

    def gbp_to_usd_rate(self) -> GBPtoUSD:
        return self.gbp_to_usd

    def eur_to_usd_rate(self) -> EURtoUSD:
        return self.eur_to_usd


class RateCell:
    """A mutable exchange rate shared between handlers.

    Reads and writes both take the lock, so a reader waits for an in-flight
    update and always observes a whole value.
    """

    def __init__(self, rate: float) -> None:
        check_rate(rate)
        self._rate = rate
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def lock(self) -> AsyncIterator[RateCell]:
        async with self._lock:
            yield self

    @property
    def value(self) -> float:
        return self._rate

    async def get(self) -> float:
        async with self._lock:
            return self._rate

    async def set(self, rate: float) -> None:
        check_rate(rate)
        async with self._lock:
            self._rate = rate
