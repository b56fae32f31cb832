from datetime import date, datetime, time

import pytest

from src.models.profile import CurrencyInfo, currency_info_for
from src.utils import colors, dates, formatting
from src.utils.validation import (
    WarningType,
    validate_flight_search,
    validate_hotel_search,
    validate_rental_search,
)


# Dates

def test_api_formats():
    assert dates.to_api_date(date(2025, 1, 5)) == "2025-01-05"
    assert dates.to_api_datetime(datetime(2025, 1, 5, 9, 30)) == "2025-01-05T09:30"
    assert dates.parse_api_date("2025-03-09") == date(2025, 3, 9)


def test_short_date_labels():
    monday = date(2024, 1, 15)
    assert dates.format_short_date(monday) == "Mon 15 Jan"
    assert dates.format_short_date(date(2024, 1, 1)) == "Mon 1 Jan"
    assert dates.format_short_date_with_comma(monday) == "Mon 15, Jan"


def test_travel_date_range():
    out, back = date(2024, 1, 15), date(2024, 1, 20)
    assert dates.format_travel_date_range(out) == "Mon 15 Jan"
    assert dates.format_travel_date_range(out, back, is_one_way=False) == "Mon 15 Jan - Sat 20 Jan"
    assert dates.format_travel_date([], today=out) == "Mon 15 Jan"
    assert dates.format_travel_date([out, back], is_one_way=False) == "Mon 15 Jan - Sat 20 Jan"


def test_combine_date_and_time_drops_seconds():
    combined = dates.combine_date_and_time(date(2024, 5, 1), time(14, 45, 30))
    assert combined == datetime(2024, 5, 1, 14, 45)


def test_clock_helpers():
    assert dates.minutes_to_time(125) == "02:05"
    assert dates.seconds_to_time(3600 * 13 + 60 * 7) == "13:07"
    assert dates.format_epoch_time(1700000000) == "22:13"
    assert dates.number_of_nights(date(2024, 1, 1), date(2024, 1, 1)) == 1
    assert dates.number_of_nights(date(2024, 1, 1), date(2024, 1, 4)) == 3


# Formatting

def test_format_amount_symbol_left():
    inr = CurrencyInfo(code="INR", symbol="₹")
    assert formatting.format_amount(12345.5, inr) == "₹12,345.50"


def test_format_amount_symbol_right_with_space():
    eur = CurrencyInfo(
        code="EUR",
        symbol="€",
        thousands_separator=".",
        decimal_separator=",",
        symbol_on_left=False,
        space_between_amount_and_symbol=True,
    )
    assert formatting.format_amount(12345.5, eur) == "12.345,50 €"


def test_format_amount_without_decimals():
    jpy = CurrencyInfo(code="JPY", symbol="¥", decimal_digits=0)
    assert formatting.format_amount(1500, jpy) == "¥1,500"
    assert formatting.format_amount(-20, jpy) == "¥-20"


def test_format_amount_precision_override():
    inr = CurrencyInfo(code="INR", symbol="₹")
    assert formatting.format_amount(4999.6, inr, decimal_digits=0) == "₹5,000"


def test_currency_info_for_unknown_code_uses_code_as_symbol():
    assert currency_info_for("inr").symbol == "₹"
    assert formatting.format_amount(12.5, currency_info_for("usd")) == "USD 12.50"


def test_duration_and_price_text():
    assert formatting.format_duration(135) == "2h 15m"
    assert formatting.format_duration(120) == "2h"
    assert formatting.format_duration(45) == "45m"
    assert formatting.format_price_value(1234567.9) == "1,234,567"


@pytest.mark.parametrize("code, valid", [("del", True), (" BOM ", True), ("DE", False), ("D3L", False), ("", False)])
def test_airport_codes(code, valid):
    assert formatting.is_valid_airport_code(code) is valid


def test_passenger_helpers():
    assert formatting.passenger_list(2, 1) == ["adult", "adult", "child"]
    assert formatting.passenger_text(1) == "1 Traveller"
    assert formatting.passenger_text(2, 1) == "3 Travellers"
    assert formatting.capitalize_first("economy") == "Economy"


# Colors

def test_hex_to_rgba():
    assert colors.hex_to_rgba("#FF0000") == colors.RGBA(1.0, 0.0, 0.0, 1.0)
    assert colors.hex_to_rgba("00FF0080").alpha == pytest.approx(128 / 255)
    assert colors.hex_to_rgba("  #FF0000\n") == colors.RGBA(1.0, 0.0, 0.0, 1.0)


@pytest.mark.parametrize("value", ["", "#FFF", "zzzzzz", "#1234567", "12-34-56", "#12 34 56", "#FF#0000"])
def test_invalid_hex_is_white(value):
    assert colors.hex_to_rgba(value) == colors.WHITE


def test_rgba_to_hex_and_gradients():
    assert colors.rgba_to_hex(colors.hex_to_rgba("#141738")) == "#141738"
    start, end = colors.gradient("secondary")
    assert colors.rgba_to_hex(start) == "#FE6439"
    assert colors.rgba_to_hex(end) == "#F92E12"
    assert colors.theme_color("missing") == colors.WHITE


# Validation

def test_flight_validation_order():
    assert validate_flight_search("DEL", "BOM", is_connected=False) is WarningType.NO_INTERNET
    assert validate_flight_search("", "BOM") is WarningType.EMPTY_SEARCH
    assert validate_flight_search("DEL", "DEL") is WarningType.SAME_LOCATION
    assert validate_flight_search("DEL", "BOM") is None


def test_rental_validation():
    assert validate_rental_search("") is WarningType.EMPTY_SEARCH
    assert validate_rental_search("DEL") is None
    assert validate_rental_search("DEL", "", is_same_drop_off=False) is WarningType.EMPTY_SEARCH
    assert validate_rental_search("DEL", "DEL", is_same_drop_off=False) is WarningType.SAME_LOCATION


def test_hotel_validation():
    assert validate_hotel_search("DEL", is_connected=False) is WarningType.NO_INTERNET
    assert validate_hotel_search("") is WarningType.EMPTY_SEARCH
    assert validate_hotel_search("DEL") is None
    assert WarningType.SAME_LOCATION.message == "Try different locations"
