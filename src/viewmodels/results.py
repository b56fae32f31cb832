import logging
import threading

from src.clients.flights import PollClient
from src.models.flight import PollRequest
from src.models.profile import DEFAULT_CURRENCY_INFO
from src.network.errors import NetworkError
from src.utils.formatting import format_amount, format_duration
from src.viewmodels.base import ObservableObject

# Get logger
logger = logging.getLogger(__name__)


class ResultViewModel(ObservableObject):
    """Flight results for one search session: first poll, filtering and paging through ``next``.

    Every new poll or clear bumps a generation counter; a response that
    comes back for an older generation is dropped.
    """

    published = ("flight_results", "poll_response", "is_loading", "is_loading_more", "error_message", "selected_flight")

    def __init__(self, client=None, filters=None, executor=None, currency=None):
        super().__init__(executor)
        self.client = client or PollClient()
        self.filters = filters
        self.currency = currency or DEFAULT_CURRENCY_INFO
        self.search_id = None
        self.current_request = PollRequest()
        self.flight_results = []
        self.poll_response = None
        self.is_loading = False
        self.is_loading_more = False
        self.error_message = None
        self.selected_flight = None
        self._generation = 0
        self._generation_lock = threading.Lock()

    @property
    def has_results(self):
        return bool(self.flight_results)

    @property
    def results_count(self):
        return len(self.flight_results)

    @property
    def has_more_results(self):
        return self.poll_response is not None and self.poll_response.has_next_page

    @property
    def total_results_count(self):
        return self.poll_response.count if self.poll_response else 0

    def _next_generation(self):
        with self._generation_lock:
            self._generation += 1
            return self._generation

    def _is_current(self, generation):
        with self._generation_lock:
            return generation == self._generation

    def poll_flights(self, search_id):
        """First page without filters. Returns a future, or None for an empty ``search_id``."""
        if not search_id:
            self.error_message = "Invalid search ID"
            return None
        generation = self._next_generation()
        self.search_id = search_id
        self.current_request = PollRequest()
        self.is_loading = True
        self.error_message = None
        return self.submit(self._poll, self.current_request, "Failed to fetch flights", generation)

    def apply_filters(self, request=None):
        if not self.search_id:
            return None
        if request is None:
            request = self.filters.build_poll_request() if self.filters else PollRequest()
        generation = self._next_generation()
        self.current_request = request
        self.is_loading = True
        self.error_message = None
        return self.submit(self._poll, request, "Failed to apply filters", generation)

    def _poll(self, request, failure_prefix, generation):
        try:
            response = self.client.poll_flights(self.search_id, request)
        except NetworkError as e:
            logger.error(f"{failure_prefix}: {e.message}")
            if not self._is_current(generation):
                return None
            self.is_loading = False
            self.error_message = f"{failure_prefix}: {e.message}"
            if not request.has_filters():
                self.flight_results = []
            return None

        if not self._is_current(generation):
            logger.info(f"Dropping stale poll response for {self.search_id}")
            return None

        self.poll_response = response
        self.flight_results = list(response.results)
        self.is_loading = False

        if self.filters is not None:
            self.filters.update_available_airlines(response.airlines)
            if response.min_price is not None and response.max_price is not None:
                self.filters.update_price_range_from_api(response.min_price, response.max_price)
        return response

    def load_more(self):
        """Append the next page, if the last response advertised one."""
        if not self.has_more_results or self.is_loading_more:
            return None
        with self._generation_lock:
            generation = self._generation
        self.is_loading_more = True
        return self.submit(self._load_next, self.poll_response.next, generation)

    def _load_next(self, next_url, generation):
        try:
            response = self.client.poll_next(next_url, self.current_request)
        except NetworkError as e:
            logger.error(f"Failed to load more flights: {e.message}")
            self.is_loading_more = False
            if self._is_current(generation):
                self.error_message = f"Failed to load more flights: {e.message}"
            return None

        self.is_loading_more = False
        if not self._is_current(generation):
            logger.info(f"Dropping stale page for {self.search_id}")
            return None

        self.poll_response = response
        self.flight_results = self.flight_results + list(response.results)
        return response

    def select_flight(self, flight):
        self.selected_flight = flight
        logger.info(f"Selected flight {flight.id} ({flight.formatted_duration})")

    def clear_results(self):
        self._next_generation()
        self.poll_response = None
        self.flight_results = []
        self.is_loading = False
        self.error_message = None
        self.selected_flight = None

    def format_price(self, flight):
        return flight.formatted_price(self.currency)

    def price_range_text(self, currency=None):
        if self.poll_response is None or self.poll_response.min_price is None:
            return "N/A"
        currency = currency or self.currency
        low = format_amount(self.poll_response.min_price, currency, decimal_digits=0)
        high = format_amount(self.poll_response.max_price, currency, decimal_digits=0)
        return f"{low} - {high}"

    def duration_range_text(self):
        if self.poll_response is None:
            return "N/A"
        return f"{format_duration(self.poll_response.min_duration)} - {format_duration(self.poll_response.max_duration)}"
