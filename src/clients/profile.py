import logging

from src.models.profile import CountryApiResponse, CurrencyApiResponse
from src.network.client import network_manager
from src.network.constants import (
    COUNTRIES_ENDPOINT,
    CURRENCIES_ENDPOINT,
    FLIGHT_BASE_URL,
    LOOKUP_PAGE_LIMIT,
    api_parameters,
)

# Get logger
logger = logging.getLogger(__name__)


class _PagedLookupClient:
    endpoint = ""
    response_model = None
    label = ""

    def __init__(self, manager=None, base_url=FLIGHT_BASE_URL, params_provider=api_parameters):
        self.manager = manager or network_manager
        self.base_url = base_url
        self.params_provider = params_provider

    def fetch_page(self, page=1, limit=LOOKUP_PAGE_LIMIT):
        params = self.params_provider()
        return self.manager.get(
            self.base_url + self.endpoint,
            params={"page": page, "limit": limit, "language": params.language},
            headers={"Accept-Language": params.language, "country": params.country},
            response_model=self.response_model,
        )

    def fetch_all(self, limit=LOOKUP_PAGE_LIMIT):
        """Walk the pages while the server reports more and the last page was full."""
        results = []
        page = 1
        while True:
            response = self.fetch_page(page=page, limit=limit)
            results.extend(response.results)
            logger.info(f"Fetched {self.label} page {page}: {len(response.results)} items")
            if not response.next or len(response.results) < limit:
                break
            page += 1
        logger.info(f"Loaded {len(results)} {self.label} in total")
        return results


class CountryClient(_PagedLookupClient):
    endpoint = COUNTRIES_ENDPOINT
    response_model = CountryApiResponse
    label = "countries"

    def fetch_countries(self, page=1, limit=LOOKUP_PAGE_LIMIT):
        return self.fetch_page(page=page, limit=limit)

    def fetch_all_countries(self):
        return [model.to_country_info() for model in self.fetch_all()]


class CurrencyClient(_PagedLookupClient):
    endpoint = CURRENCIES_ENDPOINT
    response_model = CurrencyApiResponse
    label = "currencies"

    def fetch_currencies(self, page=1, limit=LOOKUP_PAGE_LIMIT):
        return self.fetch_page(page=page, limit=limit)

    def fetch_all_currencies(self):
        return [model.to_currency_info() for model in self.fetch_all()]
