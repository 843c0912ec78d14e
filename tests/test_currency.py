import math

import pytest

from ctxapi import currency
from ctxapi.currency import AllExchangeRates, EURtoUSD, GBPtoUSD


def test_usd_to_gbp_multiplies_by_rate() -> None:
    assert currency.format_amount(currency.usd_to_gbp(100, 1.3)) == "130"


def test_gbp_to_usd_divides_by_rate() -> None:
    assert currency.format_amount(currency.gbp_to_usd(130, 1.3)) == "100"
    assert currency.format_amount(currency.gbp_to_usd(100, 1.3)) == "76.92307692307692"


def test_eur_directions() -> None:
    assert currency.format_amount(currency.usd_to_eur(100, 1.2)) == "120"
    assert currency.eur_to_usd(120, 1.2) == pytest.approx(100)


@pytest.mark.parametrize("rate", [0.5, 1.2, 1.3, 7.89])
@pytest.mark.parametrize("amount", [0.0, 1.0, 99.99, 12345.678])
def test_round_trip_recovers_amount(rate: float, amount: float) -> None:
    there = currency.usd_to_gbp(amount, rate)
    back = currency.gbp_to_usd(there, rate)
    assert math.isclose(back, amount, rel_tol=1e-12, abs_tol=1e-12)


def test_format_amount_keeps_fraction() -> None:
    assert currency.format_amount(2.5) == "2.5"
    assert currency.format_amount(-3.0) == "-3"


def test_parse_amount_accepts_surrounding_whitespace() -> None:
    assert currency.parse_amount(" 100\n") == 100.0


@pytest.mark.parametrize("text", ["", "abc", "12,5", "inf", "nan"])
def test_parse_amount_rejects_invalid_input(text: str) -> None:
    with pytest.raises(currency.InvalidAmountError):
        currency.parse_amount(text)


@pytest.mark.parametrize("text", ["0", "-1", "x"])
def test_parse_rate_rejects_non_positive_or_invalid(text: str) -> None:
    with pytest.raises(currency.InvalidRateError):
        currency.parse_rate(text)


def test_invalid_amount_is_value_error() -> None:
    assert issubclass(currency.InvalidAmountError, ValueError)
    assert issubclass(currency.InvalidRateError, ValueError)


def test_all_exchange_rates_exposes_both_accessors() -> None:
    rates = AllExchangeRates(gbp_to_usd=GBPtoUSD(1.3), eur_to_usd=EURtoUSD(1.2))
    assert rates.gbp_to_usd_rate() == GBPtoUSD(1.3)
    assert rates.eur_to_usd_rate() == EURtoUSD(1.2)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1.3e-07, "0.00000013"),
        (0.0001, "0.0001"),
        (-2.5e-05, "-0.000025"),
        (1e20, "100000000000000000000"),
        (-0.0, "-0"),
        (0.0, "0"),
    ],
)
def test_format_amount_never_uses_exponent(value: float, expected: str) -> None:
    assert currency.format_amount(value) == expected


def test_format_amount_non_finite() -> None:
    assert currency.format_amount(float("inf")) == "inf"
    assert currency.format_amount(float("-inf")) == "-inf"
    assert currency.format_amount(float("nan")) == "NaN"
