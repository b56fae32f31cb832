import re
import logging
from urllib.parse import urlencode

from src.models.hotel import HotelResponse
from src.network.client import network_manager
from src.network.constants import ACCEPT_HTML, DEEPLINK_ENDPOINT, HOTEL_BASE_URL, api_parameters
from src.network.errors import InvalidDeeplinkError, SearchFailedError
from src.utils.deeplink import validate_deeplink

# Get logger
logger = logging.getLogger(__name__)

META_REFRESH_PATTERN = re.compile(
    r"""<meta[^>]*http-equiv=["']refresh["'][^>]*content=["'][^"']*url=([^"'\s]+)""", re.IGNORECASE
)
JS_REDIRECT_PATTERN = re.compile(r"""window\.location(?:\.href)?\s*=\s*["']([^"']+)["']""", re.IGNORECASE)

ERROR_PAGE_PATTERNS = [
    "404 not found",
    "500 internal server error",
    "503 service unavailable",
    "502 bad gateway",
    "504 gateway timeout",
    "access denied",
    "forbidden",
    "server error occurred",
    "page not found",
    "temporarily unavailable",
]
MIN_HTML_LENGTH = 100


def extract_redirect_url(html):
    """Return the target of a meta refresh or ``window.location`` redirect, if any."""
    for pattern in (META_REFRESH_PATTERN, JS_REDIRECT_PATTERN):
        match = pattern.search(html)
        if match:
            return match.group(1)
    return None


def contains_error_page(html):
    lowered = html.lower()
    if any(pattern in lowered for pattern in ERROR_PAGE_PATTERNS):
        logger.debug("Found error page markers in hotel response")
        return True
    if len(html) < MIN_HTML_LENGTH:
        logger.debug(f"Hotel response is unusually short ({len(html)} chars)")
        return True
    return False


class HotelClient:
    """Resolves a hotel search into a partner deep link.

    The deeplink endpoint answers with a redirect or an HTML page. The final
    URL after redirects is preferred; an HTML meta refresh or JavaScript
    redirect inside the page overrides it. Pages that look like error pages
    fail the search.
    """

    def __init__(self, manager=None, base_url=HOTEL_BASE_URL, params_provider=api_parameters):
        self.manager = manager or network_manager
        self.base_url = base_url
        self.params_provider = params_provider

    def search_hotel(self, request):
        params = self.params_provider()
        url = f"{self.base_url}{DEEPLINK_ENDPOINT}{request.provider_id}/"
        query = request.to_params(language=params.language, currency=params.currency)
        logger.info(f"Hotel search in {request.city_name}, {request.country_name} ({request.checkin} to {request.checkout})")

        response = self.manager.send(
            url,
            params=query,
            headers={
                "Accept": ACCEPT_HTML,
                "Accept-Language": params.language,
                "country": params.country,
            },
        )

        final_url = response.url or f"{url}?{urlencode(query)}"
        if not validate_deeplink(final_url):
            logger.error(f"Invalid hotel deeplink generated: {final_url}")
            raise InvalidDeeplinkError()

        html = response.text or ""
        redirect_url = extract_redirect_url(html)
        if redirect_url:
            logger.info(f"Extracted redirect URL from HTML: {redirect_url}")
            final_url = redirect_url

        if contains_error_page(html):
            logger.error("Hotel search returned an error page")
            raise SearchFailedError("Hotel search failed. Please try different dates or location.")

        logger.info(f"Hotel search successful: {final_url}")
        return HotelResponse(
            deeplink=final_url,
            status="success",
            message=f"Hotel search URL generated successfully with language {params.language}",
        )
