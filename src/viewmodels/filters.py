import logging
from dataclasses import dataclass
from enum import Enum

from src.models.flight import ArrivalDepartureRange, PollRequest, TimeRange

FULL_DAY_SECONDS = 86400
MAX_DURATION_MINUTES = 1440
MAX_STOPS = 3
DEFAULT_TIME_RANGE = (0, FULL_DAY_SECONDS)
DEFAULT_PRICE_RANGE = (0.0, 10000.0)

# Get logger
logger = logging.getLogger(__name__)


class SortOption(str, Enum):
    BEST = "Best"
    CHEAPEST = "Cheapest"
    QUICKEST = "Quickest"
    EARLIEST = "Earliest"

    @property
    def display_name(self):
        return self.value


# (sort_by, sort_order) sent to the poll endpoint; Best is the server default
SORT_PARAMETERS = {
    SortOption.CHEAPEST: ("price", "asc"),
    SortOption.QUICKEST: ("duration", "asc"),
    SortOption.EARLIEST: ("departure", "asc"),
}


@dataclass
class AirlineOption:
    code: str
    name: str
    logo: str = ""


def _time_range(bounds):
    return TimeRange(min=int(bounds[0]), max=int(bounds[1]))


class FilterViewModel:
    """Sort and filter choices for the result list, turned into a ``PollRequest``.

    Only choices that differ from their defaults reach the request. The
    price filter compares against the range the API reported, so an
    untouched slider sends nothing.
    """

    def __init__(self, is_round_trip=False):
        self.is_round_trip = is_round_trip
        self.available_airlines = []
        self._api_price_range = None
        self.reset_filters()

    def reset_filters(self):
        self.selected_sort_option = SortOption.BEST
        self.departure_time_range = DEFAULT_TIME_RANGE
        self.arrival_time_range = DEFAULT_TIME_RANGE
        self.return_departure_time_range = DEFAULT_TIME_RANGE
        self.return_arrival_time_range = DEFAULT_TIME_RANGE
        self.max_duration = MAX_DURATION_MINUTES
        self.max_stops = MAX_STOPS
        self.selected_airlines = set()
        self.excluded_airlines = set()
        self.price_range = self._api_price_range or DEFAULT_PRICE_RANGE

    def clear_filters(self):
        self.reset_filters()

    # Airlines

    def update_available_airlines(self, airlines):
        self.available_airlines = [
            AirlineOption(code=a.airline_iata, name=a.airline_name, logo=a.airline_logo) for a in airlines
        ]

    def sorted_airlines(self):
        """Selected airlines first, each group alphabetical."""
        return sorted(self.available_airlines, key=lambda a: (a.code not in self.selected_airlines, a.name))

    def toggle_airline_selection(self, code):
        if code in self.selected_airlines:
            self.selected_airlines.discard(code)
        else:
            self.selected_airlines.add(code)

    def select_all_airlines(self):
        self.selected_airlines = {a.code for a in self.available_airlines}

    def clear_all_airlines(self):
        self.selected_airlines = set()

    # Price

    def update_price_range_from_api(self, min_price, max_price):
        untouched = self.price_range == (self._api_price_range or DEFAULT_PRICE_RANGE)
        self._api_price_range = (float(min_price), float(max_price))
        if untouched:
            self.price_range = self._api_price_range

    def _price_modified(self):
        return self._api_price_range is not None and tuple(self.price_range) != self._api_price_range

    # Request

    def _outbound_modified(self):
        return self.departure_time_range != DEFAULT_TIME_RANGE or self.arrival_time_range != DEFAULT_TIME_RANGE

    def _return_modified(self):
        return (
            self.return_departure_time_range != DEFAULT_TIME_RANGE
            or self.return_arrival_time_range != DEFAULT_TIME_RANGE
        )

    def build_poll_request(self):
        request = PollRequest()

        if self.selected_sort_option in SORT_PARAMETERS:
            request.sort_by, request.sort_order = SORT_PARAMETERS[self.selected_sort_option]

        if self.max_duration < MAX_DURATION_MINUTES:
            request.duration_max = int(self.max_duration)

        if self.max_stops < MAX_STOPS:
            request.stop_count_max = self.max_stops

        ranges = []
        if self._outbound_modified():
            ranges.append(
                ArrivalDepartureRange(
                    arrival=_time_range(self.arrival_time_range),
                    departure=_time_range(self.departure_time_range),
                )
            )
        if self.is_round_trip and self._return_modified():
            # The return leg's ranges are positional, so the outbound slot must exist
            if not ranges:
                ranges.append(
                    ArrivalDepartureRange(
                        arrival=_time_range(DEFAULT_TIME_RANGE),
                        departure=_time_range(DEFAULT_TIME_RANGE),
                    )
                )
            ranges.append(
                ArrivalDepartureRange(
                    arrival=_time_range(self.return_arrival_time_range),
                    departure=_time_range(self.return_departure_time_range),
                )
            )
        if ranges:
            request.arrival_departure_ranges = ranges

        if self.selected_airlines:
            request.iata_codes_include = sorted(self.selected_airlines)
        if self.excluded_airlines:
            request.iata_codes_exclude = sorted(self.excluded_airlines)

        if self._price_modified():
            request.price_min = int(self.price_range[0])
            request.price_max = int(self.price_range[1])

        logger.debug(f"Built poll request: {request.to_payload()}")
        return request

    def has_active_filters(self):
        return (
            self.selected_sort_option != SortOption.BEST
            or self._outbound_modified()
            or (self.is_round_trip and self._return_modified())
            or self.max_duration < MAX_DURATION_MINUTES
            or bool(self.selected_airlines)
            or bool(self.excluded_airlines)
            or self.max_stops < MAX_STOPS
            or self._price_modified()
        )
