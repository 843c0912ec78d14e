"""
Ways of making an exchange rate reachable inside request handlers.

Every factory returns a small FastAPI application exposing ``GET /usd_to_gbp``
and ``GET /gbp_to_usd``. The request body carries the amount as plain text and
the response is the converted amount as plain text.

- closure: the rate is captured by the handler closures.
- shared cell: the handlers capture one ``RateCell`` and can mutate it.
- state: the rate lives on ``app.state`` and reaches handlers via a dependency.
- mutable state: a ``RateCell`` on ``app.state``, updatable over HTTP.
- generic state: handlers ask only for the protocol they need.
- extension: middleware puts the rate into ``request.state`` per request.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional

from fastapi import Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.responses import PlainTextResponse

from . import currency
from .currency import (
    AllExchangeRates,
    EURtoUSD,
    GBPtoUSD,
    HasEURtoUSD,
    HasGBPtoUSD,
    RateCell,
)

logger = logging.getLogger(__name__)

EXTENSION_RATE_KEY = "gbp_to_usd_rate"

Converter = Callable[[float, float], float]


async def read_amount(request: Request) -> float:
    body = (await request.body()).decode("utf-8", errors="replace")
    try:
        return currency.parse_amount(body)
    except currency.InvalidAmountError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


async def read_rate(request: Request) -> float:
    body = (await request.body()).decode("utf-8", errors="replace")
    try:
        return currency.parse_rate(body)
    except currency.InvalidRateError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


def converted(convert: Converter, amount: float, rate: float) -> PlainTextResponse:
    return PlainTextResponse(currency.format_amount(convert(amount, rate)))


def create_closure_app(rate: float) -> FastAPI:
    currency.check_rate(rate)
    app = FastAPI(title="Closure context")

    @app.get("/usd_to_gbp", response_class=PlainTextResponse)
    async def usd_to_gbp(amount: float = Depends(read_amount)) -> PlainTextResponse:
        return converted(currency.usd_to_gbp, amount, rate)

    @app.get("/gbp_to_usd", response_class=PlainTextResponse)
    async def gbp_to_usd(amount: float = Depends(read_amount)) -> PlainTextResponse:
        return converted(currency.gbp_to_usd, amount, rate)

    return app


def create_shared_cell_app(cell: RateCell) -> FastAPI:
    app = FastAPI(title="Shared mutable context")

    @app.get("/usd_to_gbp", response_class=PlainTextResponse)
    async def usd_to_gbp(amount: float = Depends(read_amount)) -> PlainTextResponse:
        async with cell.lock() as guard:
            return converted(currency.usd_to_gbp, amount, guard.value)

    @app.get("/gbp_to_usd", response_class=PlainTextResponse)
    async def gbp_to_usd(amount: float = Depends(read_amount)) -> PlainTextResponse:
        async with cell.lock() as guard:
            return converted(currency.gbp_to_usd, amount, guard.value)

    @app.post("/set_exchange_rate", status_code=status.HTTP_204_NO_CONTENT)
    async def set_exchange_rate(rate: float = Depends(read_rate)) -> Response:
        await cell.set(rate)
        logger.info("Shared exchange rate set to %s", rate)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


def get_state_rate(request: Request) -> float:
    return request.app.state.gbp_to_usd_rate


async def state_usd_to_gbp(
    amount: float = Depends(read_amount),
    rate: float = Depends(get_state_rate),
) -> PlainTextResponse:
    return converted(currency.usd_to_gbp, amount, rate)


async def state_gbp_to_usd(
    amount: float = Depends(read_amount),
    rate: float = Depends(get_state_rate),
) -> PlainTextResponse:
    return converted(currency.gbp_to_usd, amount, rate)


def create_state_app(rate: float) -> FastAPI:
    currency.check_rate(rate)
    app = FastAPI(title="State context")
    app.state.gbp_to_usd_rate = rate
    app.add_api_route("/usd_to_gbp", state_usd_to_gbp, methods=["GET"], response_class=PlainTextResponse)
    app.add_api_route("/gbp_to_usd", state_gbp_to_usd, methods=["GET"], response_class=PlainTextResponse)
    return app


def get_rate_cell(request: Request) -> RateCell:
    return request.app.state.rate_cell


async def mutable_usd_to_gbp(
    amount: float = Depends(read_amount),
    cell: RateCell = Depends(get_rate_cell),
) -> PlainTextResponse:
    return converted(currency.usd_to_gbp, amount, await cell.get())


async def mutable_gbp_to_usd(
    amount: float = Depends(read_amount),
    cell: RateCell = Depends(get_rate_cell),
) -> PlainTextResponse:
    return converted(currency.gbp_to_usd, amount, await cell.get())


async def set_exchange_rate(
    rate: float = Depends(read_rate),
    cell: RateCell = Depends(get_rate_cell),
) -> Response:
    await cell.set(rate)
    logger.info("Exchange rate set to %s", rate)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def create_mutable_state_app(cell: RateCell) -> FastAPI:
    app = FastAPI(title="Mutable state context")
    app.state.rate_cell = cell
    app.add_api_route("/usd_to_gbp", mutable_usd_to_gbp, methods=["GET"], response_class=PlainTextResponse)
    app.add_api_route("/gbp_to_usd", mutable_gbp_to_usd, methods=["GET"], response_class=PlainTextResponse)
    app.add_api_route(
        "/set_exchange_rate",
        set_exchange_rate,
        methods=["POST"],
        status_code=status.HTTP_204_NO_CONTENT,
    )
    return app


# Handlers below only know the protocol they need; any app state providing
# the matching accessor works with them.
def gbp_rate_source(request: Request) -> HasGBPtoUSD:
    return request.app.state.rates


def eur_rate_source(request: Request) -> HasEURtoUSD:
    return request.app.state.rates


async def generic_usd_to_gbp(
    amount: float = Depends(read_amount),
    rates: HasGBPtoUSD = Depends(gbp_rate_source),
) -> PlainTextResponse:
    return converted(currency.usd_to_gbp, amount, rates.gbp_to_usd_rate().rate)


async def generic_gbp_to_usd(
    amount: float = Depends(read_amount),
    rates: HasGBPtoUSD = Depends(gbp_rate_source),
) -> PlainTextResponse:
    return converted(currency.gbp_to_usd, amount, rates.gbp_to_usd_rate().rate)


async def generic_eur_to_usd(
    amount: float = Depends(read_amount),
    rates: HasEURtoUSD = Depends(eur_rate_source),
) -> PlainTextResponse:
    return converted(currency.eur_to_usd, amount, rates.eur_to_usd_rate().rate)


async def generic_usd_to_eur(
    amount: float = Depends(read_amount),
    rates: HasEURtoUSD = Depends(eur_rate_source),
) -> PlainTextResponse:
    return converted(currency.usd_to_eur, amount, rates.eur_to_usd_rate().rate)


def create_generic_state_app(rates: AllExchangeRates) -> FastAPI:
    currency.check_rate(rates.gbp_to_usd.rate)
    currency.check_rate(rates.eur_to_usd.rate)
    app = FastAPI(title="Generic state context")
    app.state.rates = rates
    for path, endpoint in (
        ("/usd_to_gbp", generic_usd_to_gbp),
        ("/gbp_to_usd", generic_gbp_to_usd),
        ("/eur_to_usd", generic_eur_to_usd),
        ("/usd_to_eur", generic_usd_to_eur),
    ):
        app.add_api_route(path, endpoint, methods=["GET"], response_class=PlainTextResponse)
    return app


def extension_rate(request: Request) -> float:
    rate = getattr(request.state, EXTENSION_RATE_KEY, None)
    if rate is None:
        logger.error("Request extension %s is not installed", EXTENSION_RATE_KEY)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Missing request extension: {EXTENSION_RATE_KEY}",
        )
    return rate


async def extension_usd_to_gbp(
    amount: float = Depends(read_amount),
    rate: float = Depends(extension_rate),
) -> PlainTextResponse:
    return converted(currency.usd_to_gbp, amount, rate)


async def extension_gbp_to_usd(
    amount: float = Depends(read_amount),
    rate: float = Depends(extension_rate),
) -> PlainTextResponse:
    return converted(currency.gbp_to_usd, amount, rate)


def create_extension_app(rate: Optional[float]) -> FastAPI:
    """Build the extension demo; ``rate=None`` leaves the extension out."""
    app = FastAPI(title="Extension context")
    app.add_api_route("/usd_to_gbp", extension_usd_to_gbp, methods=["GET"], response_class=PlainTextResponse)
    app.add_api_route("/gbp_to_usd", extension_gbp_to_usd, methods=["GET"], response_class=PlainTextResponse)

    if rate is not None:
        currency.check_rate(rate)

        @app.middleware("http")
        async def install_rate_extension(
            request: Request,
            call_next: Callable[[Request], Awaitable[Response]],
        ) -> Response:
            setattr(request.state, EXTENSION_RATE_KEY, rate)
            return await call_next(request)

    return app
