import os
import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

# Base URLs
FLIGHT_BASE_URL = os.getenv("FLIGHT_BASE_URL", "https://staging.plane.lascade.com/api")
HOTEL_BASE_URL = os.getenv("HOTEL_BASE_URL", "https://staging.hotel.lascade.com")
RENTAL_BASE_URL = os.getenv("RENTAL_BASE_URL", "https://staging.car.lascade.com")
ADS_BASE_URL = os.getenv("ADS_BASE_URL", "https://devconnect.hoteldisc.com/api")
USER_BASE_URL = os.getenv("USER_BASE_URL", FLIGHT_BASE_URL)
ADS_BEARER_TOKEN = os.getenv("ADS_BEARER_TOKEN", "")

# Endpoints
AUTOCOMPLETE_ENDPOINT = "/autocomplete"
SEARCH_ENDPOINT = "/search/"
POLL_ENDPOINT = "/poll/"
COUNTRIES_ENDPOINT = "/countries/"
CURRENCIES_ENDPOINT = "/currencies/"
DEEPLINK_ENDPOINT = "/deeplink/"
USER_CREATE_ENDPOINT = "/user/"
USER_SESSION_ENDPOINT = "/user/session/"
ADS_SESSION_ENDPOINT = "/ads/session"
ADS_FLIGHT_LIST_ENDPOINT = "/ads/flight/list"
IMPRESSION_BASE_URL = "https://www.kayak.com"

# Default parameters
DEFAULT_COUNTRY = "IN"
DEFAULT_CURRENCY = "INR"
FALLBACK_LANGUAGE = "en-GB"
APP_CODE = "D1WF"
FALLBACK_USER_ID = "123"
HOTEL_PROVIDER_ID = "0"
RENTAL_PROVIDER_ID = "0"
ADS_COUNTRY_CODE = "us"
ADS_LABEL = "flight.dev"

# Headers
ACCEPT_JSON = "application/json"
CONTENT_TYPE_JSON = "application/json"
ACCEPT_HTML = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
USER_AGENT = "TravelSearchClient/1.0"

# Request configuration
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "30"))
AUTOCOMPLETE_TIMEOUT = 10.0
MINIMUM_SEARCH_LENGTH = 2
SEARCH_DEBOUNCE_DELAY = 0.3
SEARCH_TIMEOUT = 30.0
POLL_PAGE_LIMIT = 30
LOOKUP_PAGE_LIMIT = 100

LANGUAGE_MAP = {
    "en": "en-GB",
    "ar": "ar-SA",
    "de": "de-DE",
    "es": "es-ES",
    "fr": "fr-FR",
    "hi": "hi-IN",
    "it": "it-IT",
    "ja": "ja-JP",
    "ko": "ko-KR",
    "pt": "pt-BR",
    "ru": "ru-RU",
    "zh": "zh-CN",
    "zh-Hans": "zh-CN",
    "th": "th-TH",
    "tr": "tr-TR",
    "vi": "vi-VN",
    "id": "id-ID",
    "ms": "ms-MY",
    "nl": "nl-NL",
    "sv": "sv-SE",
    "da": "da-DK",
    "no": "no-NO",
    "nb": "no-NO",
    "fi": "fi-FI",
    "pl": "pl-PL",
    "cs": "cs-CZ",
    "hu": "hu-HU",
    "ro": "ro-RO",
    "bg": "bg-BG",
    "hr": "hr-HR",
    "sk": "sk-SK",
    "sl": "sl-SI",
    "et": "et-EE",
    "lv": "lv-LV",
    "lt": "lt-LT",
    "el": "el-GR",
    "he": "he-IL",
    "uk": "uk-UA",
    "ca": "ca-ES",
}


def map_language_to_api_format(language):
    """Map an app language code ("de") to the locale the backends expect ("de-DE")."""
    if not language:
        return FALLBACK_LANGUAGE
    if language in LANGUAGE_MAP:
        return LANGUAGE_MAP[language]
    # Already carries a region code
    if "-" in language:
        return language
    logger.warning(f"Unknown language '{language}', falling back to {FALLBACK_LANGUAGE}")
    return FALLBACK_LANGUAGE


@dataclass(frozen=True)
class ApiParameters:
    """Locale and identity values sent with most backend calls."""

    country: str = DEFAULT_COUNTRY
    currency: str = DEFAULT_CURRENCY
    language: str = FALLBACK_LANGUAGE
    user_id: str = FALLBACK_USER_ID


def parse_stored_user_id(value):
    """Numeric backend user id from the store, or None when missing or malformed."""
    if value and value.strip().isdigit():
        return value.strip()
    if value:
        logger.warning(f"Ignoring malformed stored user id {value!r}")
    return None


def current_user_id(store=None):
    """Stored backend user id, or the fallback when none has been created yet."""
    from src.db.preferences import USER_ID_KEY, PreferenceStore

    store = store or PreferenceStore()
    try:
        user_id = store.get(USER_ID_KEY)
    except SQLAlchemyError as e:
        logger.warning(f"Could not read stored user id: {e}")
        user_id = None
    return parse_stored_user_id(user_id) or FALLBACK_USER_ID


def api_parameters(store=None):
    """Country, currency and language the user selected, mapped for the backends."""
    from src.db.preferences import (
        SELECTED_COUNTRY_KEY,
        SELECTED_CURRENCY_KEY,
        SELECTED_LANGUAGE_KEY,
        PreferenceStore,
    )

    store = store or PreferenceStore()
    try:
        country = store.get(SELECTED_COUNTRY_KEY) or DEFAULT_COUNTRY
        currency = store.get(SELECTED_CURRENCY_KEY) or DEFAULT_CURRENCY
        language = store.get(SELECTED_LANGUAGE_KEY)
    except SQLAlchemyError as e:
        logger.warning(f"Could not read stored settings, using defaults: {e}")
        country, currency, language = DEFAULT_COUNTRY, DEFAULT_CURRENCY, None

    return ApiParameters(
        country=country,
        currency=currency,
        language=map_language_to_api_format(language),
        user_id=current_user_id(store),
    )
