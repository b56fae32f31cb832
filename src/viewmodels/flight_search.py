import logging
from datetime import date, timedelta
from enum import Enum

from src.clients.flights import FlightSearchClient
from src.models.flight import SearchLeg, SearchRequest
from src.network.errors import NetworkError
from src.utils.dates import to_api_date
from src.utils.validation import WarningType, validate_flight_search
from src.viewmodels.base import ObservableObject

# Get logger
logger = logging.getLogger(__name__)


class SearchValidationErrorKind(str, Enum):
    INVALID_ROUTE = "invalid_route"
    INVALID_PASSENGER_COUNT = "invalid_passenger_count"
    SAME_ORIGIN_DESTINATION = "same_origin_destination"
    INVALID_DATES = "invalid_dates"


VALIDATION_MESSAGES = {
    SearchValidationErrorKind.INVALID_ROUTE: "Please select valid departure and destination locations.",
    SearchValidationErrorKind.INVALID_PASSENGER_COUNT: "Please select at least one adult passenger.",
    SearchValidationErrorKind.SAME_ORIGIN_DESTINATION: "Departure and destination cannot be the same.",
    SearchValidationErrorKind.INVALID_DATES: "Please select valid travel dates.",
}


class SearchValidationError(Exception):
    def __init__(self, kind):
        self.kind = kind
        self.message = VALIDATION_MESSAGES[kind]
        super().__init__(self.message)


def validate_search_request(request, travel_date=None, return_date=None, today=None):
    """Raise ``SearchValidationError`` for the first problem found in ``request``."""
    if not request.legs:
        raise SearchValidationError(SearchValidationErrorKind.INVALID_ROUTE)
    if request.adults <= 0:
        raise SearchValidationError(SearchValidationErrorKind.INVALID_PASSENGER_COUNT)
    for leg in request.legs:
        if not leg.origin or not leg.destination:
            raise SearchValidationError(SearchValidationErrorKind.INVALID_ROUTE)
        if leg.origin == leg.destination:
            raise SearchValidationError(SearchValidationErrorKind.SAME_ORIGIN_DESTINATION)

    today = today or date.today()
    if travel_date is not None and travel_date < today:
        raise SearchValidationError(SearchValidationErrorKind.INVALID_DATES)
    if return_date is not None and travel_date is not None and return_date < travel_date:
        raise SearchValidationError(SearchValidationErrorKind.INVALID_DATES)


class FlightSearchViewModel(ObservableObject):
    """Holds the flight search form and starts a search session.

    ``search_flights`` returns a future resolving to the new ``search_id``
    (or None when validation or the request failed; see ``error_message``).
    """

    published = ("search_id", "is_loading", "error_message")

    def __init__(self, client=None, recent_locations=None, user_manager=None, network_monitor=None, executor=None):
        super().__init__(executor)
        self.network_monitor = network_monitor
        self.client = client or FlightSearchClient()
        self.recent_locations = recent_locations
        self.user_manager = user_manager

        self.departure_iata_code = ""
        self.destination_iata_code = ""
        self.origin_location = None
        self.destination_location = None
        self.travel_date = date.today()
        self.return_date = date.today() + timedelta(days=7)
        self.cabin_class = "economy"
        self.adults = 1
        self.children_ages = []
        self.is_round_trip = False

        self.search_id = None
        self.is_loading = False
        self.error_message = None
        self.last_error = None

    def update_search_parameters(
        self,
        origin,
        destination,
        departure_date,
        return_date=None,
        is_round_trip=False,
        adults=1,
        children=None,
        cabin_class="economy",
    ):
        self.departure_iata_code = origin
        self.destination_iata_code = destination
        self.travel_date = departure_date
        if return_date is not None:
            self.return_date = return_date
        self.is_round_trip = is_round_trip
        self.adults = adults
        self.children_ages = list(children or [])
        self.cabin_class = cabin_class

    def select_locations(self, origin, destination):
        """Set the route from picked ``Location`` records."""
        self.origin_location = origin
        self.destination_location = destination
        self.departure_iata_code = origin.iata_code
        self.destination_iata_code = destination.iata_code

    def build_request(self):
        legs = [
            SearchLeg(
                origin=self.departure_iata_code,
                destination=self.destination_iata_code,
                date=to_api_date(self.travel_date),
            )
        ]
        if self.is_round_trip:
            legs.append(
                SearchLeg(
                    origin=self.destination_iata_code,
                    destination=self.departure_iata_code,
                    date=to_api_date(self.return_date),
                )
            )
        return SearchRequest(
            legs=legs,
            cabin_class=self.cabin_class,
            adults=self.adults,
            children_ages=list(self.children_ages),
        )

    def search_flights(self):
        self.is_loading = True
        self.error_message = None
        self.last_error = None
        self.search_id = None
        return self.submit(self._perform_search)

    @property
    def is_connected(self):
        return self.network_monitor is None or self.network_monitor.is_connected

    def _perform_search(self):
        # Location warnings surface below as the matching SearchValidationError kind
        warning = validate_flight_search(self.departure_iata_code, self.destination_iata_code, self.is_connected)
        if warning is WarningType.NO_INTERNET:
            logger.info(f"Flight search blocked: {warning.message}")
            self._fail(warning.message, warning)
            return None

        request = self.build_request()
        try:
            validate_search_request(
                request,
                travel_date=self.travel_date,
                return_date=self.return_date if self.is_round_trip else None,
            )
            response = self.client.start_search(request)
        except SearchValidationError as e:
            logger.info(f"Flight search rejected: {e.message}")
            self._fail(e.message, e)
            return None
        except NetworkError as e:
            logger.error(f"Flight search failed: {e.message}")
            self._fail(f"Search failed: {e.message}", e)
            return None

        self.search_id = response.search_id
        self.is_loading = False

        if self.recent_locations is not None and self.origin_location and self.destination_location:
            self.recent_locations.add_search_pair(self.origin_location, self.destination_location)
        if self.user_manager is not None:
            self.user_manager.track_flight_search()
        return response.search_id

    def _fail(self, message, error=None):
        self.last_error = error
        self.is_loading = False
        self.error_message = message
        self.search_id = None

    def reset_search(self):
        self.is_loading = False
        self.error_message = None
        self.search_id = None
