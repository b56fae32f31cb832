import logging

from src.models.location import LocationResponse
from src.network.client import network_manager
from src.network.constants import (
    AUTOCOMPLETE_ENDPOINT,
    AUTOCOMPLETE_TIMEOUT,
    FLIGHT_BASE_URL,
    api_parameters,
)

# Get logger
logger = logging.getLogger(__name__)


class LocationClient:
    def __init__(self, manager=None, base_url=FLIGHT_BASE_URL, params_provider=api_parameters):
        self.manager = manager or network_manager
        self.base_url = base_url
        self.params_provider = params_provider

    def search_locations(self, query):
        """Autocomplete airports and cities matching ``query``."""
        params = self.params_provider()
        query = (query or "").strip()
        if not query:
            return LocationResponse(data=[], language=params.language)

        logger.info(f"Searching locations for '{query}' (country={params.country}, language={params.language})")
        response = self.manager.get(
            self.base_url + AUTOCOMPLETE_ENDPOINT,
            params={"search": query, "country": params.country, "language": params.language},
            response_model=LocationResponse,
            timeout=AUTOCOMPLETE_TIMEOUT,
        )
        logger.info(f"Found {len(response.data)} locations for '{query}'")
        return response
