from datetime import date, timedelta

import pytest

from src.models.flight import Airline, FlightResult, PollRequest, PollResponse, SearchLeg, SearchRequest, SearchResponse
from src.network.errors import ServerError
from src.utils.validation import WarningType
from src.viewmodels.filters import FilterViewModel, SortOption
from src.viewmodels.flight_search import (
    FlightSearchViewModel,
    SearchValidationError,
    SearchValidationErrorKind,
    validate_search_request,
)
from src.viewmodels.recent_locations import RecentLocationsManager
from src.viewmodels.results import ResultViewModel

TOMORROW = date.today() + timedelta(days=1)


class FakeSearchClient:
    def __init__(self, error=None):
        self.requests = []
        self.error = error

    def start_search(self, request):
        self.requests.append(request)
        if self.error:
            raise self.error
        return SearchResponse(search_id="search-1")


class FakeMonitor:
    def __init__(self, is_connected=True):
        self.is_connected = is_connected


class FakeUserManager:
    def __init__(self):
        self.flight_searches = 0

    def track_flight_search(self):
        self.flight_searches += 1


def _result(result_id, price=5000):
    return FlightResult(id=result_id, total_duration=120, min_price=price, max_price=price)


class FakePollClient:
    def __init__(self, pages=None, error=None):
        self.pages = pages or {}
        self.error = error
        self.polls = []
        self.next_calls = []

    def poll_flights(self, search_id, request=None, page=1, limit=30):
        self.polls.append((search_id, request))
        if self.error:
            raise self.error
        return self.pages["first"]

    def poll_next(self, next_url, request=None):
        self.next_calls.append((next_url, request))
        if self.error:
            raise self.error
        return self.pages[next_url]


# Validation

def _request(origin="DEL", destination="BOM", adults=1):
    return SearchRequest(legs=[SearchLeg(origin=origin, destination=destination, date="2025-01-01")], adults=adults)


@pytest.mark.parametrize(
    "request_, kwargs, kind",
    [
        (SearchRequest(legs=[]), {}, SearchValidationErrorKind.INVALID_ROUTE),
        (_request(origin=""), {}, SearchValidationErrorKind.INVALID_ROUTE),
        (_request(adults=0), {}, SearchValidationErrorKind.INVALID_PASSENGER_COUNT),
        (_request(destination="DEL"), {}, SearchValidationErrorKind.SAME_ORIGIN_DESTINATION),
        (_request(), {"travel_date": date(2024, 1, 1), "today": date(2024, 1, 2)}, SearchValidationErrorKind.INVALID_DATES),
        (
            _request(),
            {"travel_date": date(2024, 1, 5), "return_date": date(2024, 1, 4), "today": date(2024, 1, 1)},
            SearchValidationErrorKind.INVALID_DATES,
        ),
    ],
)
def test_validate_search_request(request_, kwargs, kind):
    with pytest.raises(SearchValidationError) as excinfo:
        validate_search_request(request_, **kwargs)
    assert excinfo.value.kind is kind


# Search

def test_round_trip_request_has_return_leg(executor):
    vm = FlightSearchViewModel(client=FakeSearchClient(), executor=executor)
    vm.update_search_parameters(
        "DEL", "BOM", date(2025, 3, 1), return_date=date(2025, 3, 8), is_round_trip=True, adults=2, children=[5]
    )

    request = vm.build_request()

    assert [(leg.origin, leg.destination, leg.date) for leg in request.legs] == [
        ("DEL", "BOM", "2025-03-01"),
        ("BOM", "DEL", "2025-03-08"),
    ]
    assert request.children_ages == [5]


def test_successful_search_records_route_and_tracks(executor, session_factory, delhi, mumbai):
    client = FakeSearchClient()
    recents = RecentLocationsManager(session_factory, executor=executor)
    users = FakeUserManager()
    vm = FlightSearchViewModel(client=client, recent_locations=recents, user_manager=users, executor=executor)
    vm.select_locations(delhi, mumbai)
    vm.travel_date = TOMORROW

    assert vm.search_flights().result() == "search-1"
    assert vm.search_id == "search-1"
    assert vm.is_loading is False
    assert users.flight_searches == 1
    origin, destination = recents.get_last_search_locations()
    assert (origin.iata_code, destination.iata_code) == ("DEL", "BOM")


def test_invalid_search_does_not_call_backend(executor):
    client = FakeSearchClient()
    vm = FlightSearchViewModel(client=client, executor=executor)
    vm.update_search_parameters("DEL", "DEL", TOMORROW)

    assert vm.search_flights().result() is None
    assert client.requests == []
    assert vm.error_message == "Departure and destination cannot be the same."
    assert vm.last_error.kind is SearchValidationErrorKind.SAME_ORIGIN_DESTINATION


def test_search_blocked_without_connection(executor):
    client = FakeSearchClient()
    vm = FlightSearchViewModel(client=client, network_monitor=FakeMonitor(False), executor=executor)
    vm.update_search_parameters("DEL", "BOM", TOMORROW)

    assert vm.is_connected is False
    assert vm.search_flights().result() is None
    assert client.requests == []
    assert vm.error_message == "No Internet connection. Try reconnecting"
    assert vm.last_error is WarningType.NO_INTERNET


def test_past_departure_does_not_call_backend(executor):
    client = FakeSearchClient()
    vm = FlightSearchViewModel(client=client, network_monitor=FakeMonitor(True), executor=executor)
    vm.update_search_parameters("DEL", "BOM", date.today() - timedelta(days=1))

    assert vm.search_flights().result() is None
    assert client.requests == []
    assert vm.error_message == "Please select valid travel dates."
    assert isinstance(vm.last_error, SearchValidationError)


def test_backend_failure_sets_message(executor):
    vm = FlightSearchViewModel(client=FakeSearchClient(error=ServerError(503)), executor=executor)
    vm.update_search_parameters("DEL", "BOM", TOMORROW)

    assert vm.search_flights().result() is None
    assert vm.error_message == "Search failed: Server error with code: 503"
    assert vm.search_id is None
    assert vm.is_loading is False


def test_reset_search(executor):
    vm = FlightSearchViewModel(client=FakeSearchClient(), executor=executor)
    vm.update_search_parameters("DEL", "BOM", TOMORROW)
    vm.search_flights().result()

    vm.reset_search()

    assert vm.search_id is None
    assert vm.error_message is None


# Results

def _pages():
    return {
        "first": PollResponse(
            count=3,
            next="https://flights.test/api/poll/?page=2",
            airlines=[Airline(airline_name="IndiGo", airline_iata="6E")],
            min_price=3000,
            max_price=9000,
            min_duration=90,
            max_duration=300,
            results=[_result("a"), _result("b")],
        ),
        "https://flights.test/api/poll/?page=2": PollResponse(count=3, results=[_result("c")]),
    }


def test_poll_populates_results_and_filters(executor):
    filters = FilterViewModel()
    vm = ResultViewModel(client=FakePollClient(_pages()), filters=filters, executor=executor)

    vm.poll_flights("search-1").result()

    assert [r.id for r in vm.flight_results] == ["a", "b"]
    assert vm.has_more_results
    assert vm.total_results_count == 3
    assert [a.code for a in filters.available_airlines] == ["6E"]
    assert filters.price_range == (3000.0, 9000.0)
    assert vm.price_range_text() == "₹3,000 - ₹9,000"
    assert vm.duration_range_text() == "1h 30m - 5h"


def test_poll_requires_search_id(executor):
    vm = ResultViewModel(client=FakePollClient(_pages()), executor=executor)

    assert vm.poll_flights("") is None
    assert vm.error_message == "Invalid search ID"


def test_load_more_appends_next_page_with_current_filters(executor):
    client = FakePollClient(_pages())
    filters = FilterViewModel()
    vm = ResultViewModel(client=client, filters=filters, executor=executor)
    vm.poll_flights("search-1").result()
    filters.selected_sort_option = SortOption.CHEAPEST
    vm.current_request = filters.build_poll_request()

    vm.load_more().result()

    assert [r.id for r in vm.flight_results] == ["a", "b", "c"]
    assert not vm.has_more_results
    assert vm.load_more() is None
    assert client.next_calls[0][1].sort_by == "price"


def test_apply_filters_uses_filter_view_model(executor):
    client = FakePollClient(_pages())
    filters = FilterViewModel()
    vm = ResultViewModel(client=client, filters=filters, executor=executor)
    vm.poll_flights("search-1").result()
    filters.max_stops = 0

    vm.apply_filters().result()

    _, request = client.polls[-1]
    assert request.stop_count_max == 0


def test_failed_filtered_poll_keeps_previous_results(executor):
    client = FakePollClient(_pages())
    vm = ResultViewModel(client=client, executor=executor)
    vm.poll_flights("search-1").result()

    client.error = ServerError(500)
    vm.apply_filters(PollRequest(stop_count_max=0)).result()

    assert vm.error_message == "Failed to apply filters: Server error with code: 500"
    assert [r.id for r in vm.flight_results] == ["a", "b"]


def test_failed_unfiltered_poll_clears_results(executor):
    vm = ResultViewModel(client=FakePollClient(error=ServerError(502)), executor=executor)

    vm.poll_flights("search-1").result()

    assert vm.flight_results == []
    assert vm.error_message.startswith("Failed to fetch flights")


class OverlappingPollClient:
    """Lets a test act on the view-model while the first poll is still in flight."""

    def __init__(self, during_first_poll):
        self.during_first_poll = during_first_poll
        self.calls = 0

    def poll_flights(self, search_id, request=None, page=1, limit=30):
        self.calls += 1
        if self.calls == 1:
            self.during_first_poll()
            return PollResponse(count=2, results=[_result("a"), _result("b")])
        return PollResponse(count=1, results=[_result("direct")])


def test_older_poll_does_not_overwrite_filtered_results(executor):
    vm = None

    def apply_filters():
        vm.apply_filters(PollRequest(stop_count_max=0))

    vm = ResultViewModel(client=OverlappingPollClient(apply_filters), executor=executor)

    assert vm.poll_flights("search-1").result() is None
    assert [r.id for r in vm.flight_results] == ["direct"]
    assert vm.total_results_count == 1
    assert vm.is_loading is False


def test_poll_answer_after_clear_is_dropped(executor):
    vm = None

    def clear():
        vm.clear_results()

    vm = ResultViewModel(client=OverlappingPollClient(clear), executor=executor)

    assert vm.poll_flights("search-1").result() is None
    assert vm.flight_results == []
    assert vm.poll_response is None
