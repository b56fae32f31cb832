import logging

from src.clients.profile import CountryClient, CurrencyClient
from src.db.preferences import (
    SELECTED_COUNTRY_KEY,
    SELECTED_CURRENCY_KEY,
    SELECTED_LANGUAGE_KEY,
    PreferenceStore,
)
from src.models.profile import DEFAULT_CURRENCY_INFO, currency_info_for
from src.network.constants import DEFAULT_COUNTRY, DEFAULT_CURRENCY, api_parameters
from src.network.errors import NetworkError
from src.viewmodels.base import ObservableObject

POPULAR_COUNTRY_CODES = ["us", "gb", "ca", "au", "de", "fr", "jp", "in", "br", "mx"]
POPULAR_CURRENCY_CODES = ["USD", "EUR", "GBP", "JPY", "CAD", "AUD", "CHF", "CNY", "INR", "KRW"]

# Get logger
logger = logging.getLogger(__name__)


class CountryManager(ObservableObject):
    published = ("countries", "is_loading", "error_message")

    def __init__(self, client=None, executor=None):
        super().__init__(executor)
        self.client = client or CountryClient()
        self.countries = []
        self.is_loading = False
        self.error_message = None

    def load_countries(self):
        self.is_loading = True
        self.error_message = None
        return self.submit(self._load)

    def _load(self):
        try:
            countries = self.client.fetch_all_countries()
        except NetworkError as e:
            logger.error(f"Failed to load countries: {e.message}")
            self.error_message = f"Failed to load countries: {e.message}"
            self.is_loading = False
            return []
        self.countries = sorted(countries, key=lambda c: c.country_name)
        self.is_loading = False
        return self.countries

    def search_countries(self, query):
        if not query:
            return list(self.countries)
        q = query.lower()
        return [
            c
            for c in self.countries
            if q in c.country_name.lower()
            or q in c.country_code.lower()
            or q in c.currency.lower()
            or q in c.abbreviation.lower()
            or q in " ".join(c.supported_languages).lower()
        ]

    def get_country(self, country_code):
        code = country_code.lower()
        return next((c for c in self.countries if c.country_code.lower() == code), None)

    def get_countries_by_currency(self, currency_code):
        code = currency_code.lower()
        return [c for c in self.countries if c.currency_code.lower() == code]

    def popular_countries(self):
        found = (self.get_country(code) for code in POPULAR_COUNTRY_CODES)
        return [c for c in found if c is not None]


class CurrencyManager(ObservableObject):
    published = ("currencies", "is_loading", "error_message")

    def __init__(self, client=None, executor=None):
        super().__init__(executor)
        self.client = client or CurrencyClient()
        self.currencies = []
        self.is_loading = False
        self.error_message = None

    def load_currencies(self):
        self.is_loading = True
        self.error_message = None
        return self.submit(self._load)

    def _load(self):
        try:
            currencies = self.client.fetch_all_currencies()
        except NetworkError as e:
            logger.error(f"Failed to load currencies: {e.message}")
            self.error_message = f"Failed to load currencies: {e.message}"
            self.is_loading = False
            return []
        self.currencies = sorted(currencies, key=lambda c: c.display_name)
        self.is_loading = False
        return self.currencies

    def search_currencies(self, query):
        if not query:
            return list(self.currencies)
        q = query.lower()
        return [
            c
            for c in self.currencies
            if q in c.code.lower() or q in c.display_name.lower() or q in c.symbol.lower()
        ]

    def get_currency(self, code):
        code = code.lower()
        return next((c for c in self.currencies if c.code.lower() == code), None)

    def currency_info(self, code):
        """Loaded record for ``code``, falling back to a plain code-as-symbol format."""
        return self.get_currency(code) or currency_info_for(code)

    def popular_currencies(self):
        found = (self.get_currency(code) for code in POPULAR_CURRENCY_CODES)
        return [c for c in found if c is not None]


class SettingsManager(ObservableObject):
    """The user's country, currency and language, persisted across runs.

    Only codes are stored; full records are resolved from the loaded
    country and currency lists.
    """

    published = ("selected_country", "selected_currency", "language")

    def __init__(self, store=None, country_manager=None, currency_manager=None, executor=None):
        super().__init__(executor)
        self.store = store or PreferenceStore()
        self.country_manager = country_manager or CountryManager(executor=executor)
        self.currency_manager = currency_manager or CurrencyManager(executor=executor)
        self.selected_country = None
        self.selected_currency = None
        self.language = self.store.get(SELECTED_LANGUAGE_KEY)

    def load_stored_settings(self):
        """Resolve stored codes against the loaded lists, defaulting to India / INR."""
        country_code = self.store.get(SELECTED_COUNTRY_KEY) or DEFAULT_COUNTRY
        currency_code = self.store.get(SELECTED_CURRENCY_KEY) or DEFAULT_CURRENCY
        self.selected_country = self.country_manager.get_country(country_code) or self.country_manager.get_country(
            DEFAULT_COUNTRY
        )
        self.selected_currency = self.currency_manager.get_currency(
            currency_code
        ) or self.currency_manager.get_currency(DEFAULT_CURRENCY)

    def set_selected_country(self, country):
        self.selected_country = country
        self.store.set(SELECTED_COUNTRY_KEY, country.country_code)
        logger.info(f"Selected country {country.country_code}")

    def set_selected_currency(self, currency):
        self.selected_currency = currency
        self.store.set(SELECTED_CURRENCY_KEY, currency.code)
        logger.info(f"Selected currency {currency.code}")

    def set_language(self, language):
        self.language = language
        self.store.set(SELECTED_LANGUAGE_KEY, language)

    @property
    def selected_country_code(self):
        if self.selected_country is not None:
            return self.selected_country.country_code
        return self.store.get(SELECTED_COUNTRY_KEY) or DEFAULT_COUNTRY

    @property
    def selected_country_name(self):
        return self.selected_country.country_name if self.selected_country else "India"

    @property
    def selected_currency_code(self):
        if self.selected_currency is not None:
            return self.selected_currency.code
        return self.store.get(SELECTED_CURRENCY_KEY) or DEFAULT_CURRENCY

    @property
    def selected_currency_symbol(self):
        return self.selected_currency.symbol if self.selected_currency else DEFAULT_CURRENCY_INFO.symbol

    def api_parameters(self):
        return api_parameters(self.store)
