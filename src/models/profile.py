from typing import List, Optional

from pydantic import BaseModel, Field

CURRENCY_NAMES = {
    "USD": "United States Dollar",
    "EUR": "Euro Member Countries",
    "GBP": "United Kingdom Pound",
    "JPY": "Japan Yen",
    "CAD": "Canada Dollar",
    "AUD": "Australia Dollar",
    "CHF": "Switzerland Franc",
    "CNY": "China Yuan Renminbi",
    "INR": "India Rupee",
    "AED": "Dirham",
    "AFN": "Afghan Afghani",
    "ALL": "Albanian Lek",
    "AMD": "Armenian Dram",
    "ANG": "Netherlands Antillean Guilder",
    "AOA": "Angolan Kwanza",
}


def currency_name(code):
    return CURRENCY_NAMES.get(code, f"{code} Currency")


class CurrencyInfo(BaseModel):
    code: str
    symbol: str
    thousands_separator: str = ","
    decimal_separator: str = "."
    symbol_on_left: bool = True
    space_between_amount_and_symbol: bool = False
    decimal_digits: int = 2

    @property
    def display_name(self):
        return currency_name(self.code)


DEFAULT_CURRENCY_INFO = CurrencyInfo(code="INR", symbol="₹")


def currency_info_for(code):
    """Formatting record for a bare currency code when no loaded list has it."""
    if not code or code.upper() == DEFAULT_CURRENCY_INFO.code:
        return DEFAULT_CURRENCY_INFO
    return CurrencyInfo(code=code.upper(), symbol=code.upper(), space_between_amount_and_symbol=True)


class CountryCurrency(CurrencyInfo):
    pass


class CurrencyApiModel(CurrencyInfo):
    def to_currency_info(self):
        return CurrencyInfo(**self.model_dump())


class CurrencyApiResponse(BaseModel):
    count: int = 0
    next: Optional[str] = None
    previous: Optional[str] = None
    results: List[CurrencyApiModel] = Field(default_factory=list)


class CountryInfo(BaseModel):
    country_name: str
    country_code: str
    full_domain_name: str = ""
    currency_code: str
    supported_languages: List[str] = Field(default_factory=list)
    default_domain: str = ""
    currency: str = ""
    abbreviation: str = ""
    symbol: str = ""


class CountryApiModel(BaseModel):
    name: str
    code: str
    currency: CountryCurrency
    flag: str = ""
    domain: str = ""
    supported_languages: Optional[List[str]] = None

    def to_country_info(self):
        return CountryInfo(
            country_name=self.name,
            country_code=self.code,
            full_domain_name=self.domain,
            currency_code=self.currency.code,
            supported_languages=self.supported_languages or [],
            default_domain=self.domain,
            currency=currency_name(self.currency.code),
            abbreviation=self.currency.code,
            symbol=self.currency.symbol,
        )


class CountryApiResponse(BaseModel):
    count: int = 0
    next: Optional[str] = None
    previous: Optional[str] = None
    results: List[CountryApiModel] = Field(default_factory=list)
