import logging

from src.models.flight import PollRequest, PollResponse, SearchResponse
from src.network.client import network_manager
from src.network.constants import (
    APP_CODE,
    FLIGHT_BASE_URL,
    POLL_ENDPOINT,
    POLL_PAGE_LIMIT,
    SEARCH_ENDPOINT,
    SEARCH_TIMEOUT,
    api_parameters,
)

# Get logger
logger = logging.getLogger(__name__)


class FlightSearchClient:
    def __init__(self, manager=None, base_url=FLIGHT_BASE_URL, params_provider=api_parameters):
        self.manager = manager or network_manager
        self.base_url = base_url
        self.params_provider = params_provider

    def start_search(self, request):
        """Open a search session and return its ``SearchResponse`` (carries ``search_id``)."""
        params = self.params_provider()
        legs = ", ".join(f"{leg.origin}->{leg.destination} {leg.date}" for leg in request.legs)
        logger.info(f"Starting flight search: {legs} ({request.cabin_class}, {request.adults} adults)")

        response = self.manager.post(
            self.base_url + SEARCH_ENDPOINT,
            body=request,
            params={
                "user_id": params.user_id,
                "currency": params.currency,
                "language": params.language,
                "app_code": APP_CODE,
            },
            headers={"country": params.country},
            response_model=SearchResponse,
            timeout=SEARCH_TIMEOUT,
        )
        logger.info(f"Search started with id {response.search_id}")
        return response


class PollClient:
    def __init__(self, manager=None, base_url=FLIGHT_BASE_URL, params_provider=api_parameters):
        self.manager = manager or network_manager
        self.base_url = base_url
        self.params_provider = params_provider

    def _headers(self, params):
        return {"country": params.country, "Accept-Language": params.language}

    def poll_flights(self, search_id, request=None, page=1, limit=POLL_PAGE_LIMIT):
        params = self.params_provider()
        request = request or PollRequest()
        logger.debug(f"Polling {search_id} page={page} limit={limit} filters={request.to_payload()}")

        response = self.manager.post(
            self.base_url + POLL_ENDPOINT,
            body=request.to_payload(),
            params={
                "search_id": search_id,
                "page": page,
                "limit": limit,
                "language": params.language,
                "currency": params.currency,
            },
            headers=self._headers(params),
            response_model=PollResponse,
        )
        logger.info(f"Poll {search_id} page {page}: {len(response.results)} of {response.count} results")
        return response

    def poll_next(self, next_url, request=None):
        """Follow the ``next`` link of a previous poll with the same filters."""
        params = self.params_provider()
        request = request or PollRequest()
        response = self.manager.post(
            next_url,
            body=request.to_payload(),
            headers=self._headers(params),
            response_model=PollResponse,
        )
        logger.info(f"Fetched next page: {len(response.results)} results")
        return response
