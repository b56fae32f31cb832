import re

AIRPORT_CODE_PATTERN = re.compile(r"^[A-Z]{3}$")


def format_amount(amount, currency, decimal_digits=None):
    """Render ``amount`` with the symbol placement and separators of ``currency``.

    ``currency`` is a ``CurrencyInfo``; e.g. 12345.5 in INR becomes "₹12,345.50"
    while EUR configured with the symbol on the right gives "12.345,50 €".
    ``decimal_digits`` overrides the currency's own precision.
    """
    if decimal_digits is None:
        decimal_digits = currency.decimal_digits
    digits = max(0, decimal_digits)
    text = f"{abs(amount):,.{digits}f}"
    whole, _, fraction = text.partition(".")
    whole = whole.replace(",", currency.thousands_separator)
    number = whole if not fraction else f"{whole}{currency.decimal_separator}{fraction}"
    if amount < 0:
        number = f"-{number}"

    space = " " if currency.space_between_amount_and_symbol else ""
    if currency.symbol_on_left:
        return f"{currency.symbol}{space}{number}"
    return f"{number}{space}{currency.symbol}"


def format_price_value(price):
    """Whole-unit price with comma grouping, used for filter labels."""
    return f"{int(price):,}"


def format_duration(minutes):
    hours, mins = divmod(int(minutes), 60)
    if hours and mins:
        return f"{hours}h {mins}m"
    if hours:
        return f"{hours}h"
    return f"{mins}m"


def normalize_airport_code(code):
    return (code or "").strip().upper()


def is_valid_airport_code(code):
    return bool(AIRPORT_CODE_PATTERN.match(normalize_airport_code(code)))


def passenger_list(adults, children=0):
    return ["adult"] * adults + ["child"] * children


def passenger_text(adults, children=0):
    total = adults + children
    return f"{total} Traveller{'s' if total != 1 else ''}"


def capitalize_first(text):
    if not text:
        return text
    return text[0].upper() + text[1:]
