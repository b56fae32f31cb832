from src.db.preferences import (
    ACCESS_TOKEN_KEY,
    DEVICE_ID_KEY,
    SELECTED_COUNTRY_KEY,
    SELECTED_LANGUAGE_KEY,
    USER_CREATED_KEY,
    USER_ID_KEY,
)
from src.models.profile import CountryInfo, CurrencyInfo
from src.models.user import (
    AuthResponse,
    SessionCreationResponse,
    User,
    UserCreationResponse,
    UserEventType,
    UserVertical,
)
from src.network.constants import api_parameters
from src.network.errors import ConnectionFailedError
from src.viewmodels.auth import AuthenticationManager
from src.viewmodels.recent_locations import MAX_RECENT_LOCATIONS, MAX_RECENT_SEARCH_PAIRS, RecentLocationsManager
from src.viewmodels.settings import CountryManager, CurrencyManager, SettingsManager
from src.viewmodels.user import UserManager
from tests.conftest import make_location


# Preference store

def test_preference_store_round_trip(store):
    assert store.get("missing", "fallback") == "fallback"

    store.set("theme", "dark")
    store.set("theme", "light")
    assert store.get("theme") == "light"

    store.delete("theme")
    assert store.get("theme") is None


def test_preference_store_json(store):
    store.set_json("blob", {"a": [1, 2]})
    assert store.get_json("blob") == {"a": [1, 2]}

    store.set("broken", "{not json")
    assert store.get_json("broken", default={}) == {}


def test_api_parameters_reads_stored_selection(store):
    assert api_parameters(store).country == "IN"
    assert api_parameters(store).user_id == "123"

    store.set(SELECTED_COUNTRY_KEY, "DE")
    store.set(SELECTED_LANGUAGE_KEY, "de")
    store.set(USER_ID_KEY, "77")
    params = api_parameters(store)

    assert params.country == "DE"
    assert params.language == "de-DE"
    assert params.user_id == "77"


def test_malformed_stored_user_id_falls_back(store):
    store.set(USER_ID_KEY, "abc-123")

    assert api_parameters(store).user_id == "123"


# Recent locations

def test_recent_locations_move_to_front_and_count(session_factory, executor, delhi, mumbai):
    recents = RecentLocationsManager(session_factory, executor=executor)

    recents.add_location(delhi)
    recents.add_location(mumbai)
    recents.add_location(delhi)

    assert [r.iata_code for r in recents.recent_locations] == ["DEL", "BOM"]
    assert recents.search_count("DEL") == 2
    assert recents.search_count("XXX") == 0
    assert recents.popular_locations(limit=1)[0].iata_code == "DEL"


def test_recent_locations_are_capped(session_factory, executor):
    recents = RecentLocationsManager(session_factory, executor=executor)

    for i in range(MAX_RECENT_LOCATIONS + 3):
        recents.add_location(make_location(f"A{i:02d}"))

    assert len(recents.recent_locations) == MAX_RECENT_LOCATIONS
    assert recents.recent_locations[0].iata_code == f"A{MAX_RECENT_LOCATIONS + 2:02d}"


def test_search_pairs_are_capped_and_persisted(session_factory, executor, delhi):
    recents = RecentLocationsManager(session_factory, executor=executor)

    for i in range(MAX_RECENT_SEARCH_PAIRS + 2):
        recents.add_search_pair(delhi, make_location(f"B{i:02d}"))
    recents.add_search_pair(delhi, make_location("B03"))

    reloaded = RecentLocationsManager(session_factory, executor=executor)
    pairs = reloaded.recent_search_pairs
    assert len(pairs) == MAX_RECENT_SEARCH_PAIRS
    assert pairs[0].destination.iata_code == "B03"
    assert pairs[0].search_count == 2
    assert reloaded.recent_locations[0].iata_code == "B03"
    origin, destination = reloaded.get_last_search_locations()
    assert (origin.iata_code, destination.iata_code) == ("DEL", "B03")
    assert destination.to_location().iata_code == "B03"


def test_remove_location_drops_its_pairs(session_factory, executor, delhi, mumbai):
    recents = RecentLocationsManager(session_factory, executor=executor)
    recents.add_search_pair(delhi, mumbai)

    assert recents.remove_location("BOM") is True
    assert recents.remove_location("BOM") is False
    assert [r.iata_code for r in recents.recent_locations] == ["DEL"]
    assert recents.recent_search_pairs == []
    assert recents.get_last_search_locations() == (None, None)


def test_clear_recent_locations(session_factory, executor, delhi, mumbai):
    recents = RecentLocationsManager(session_factory, executor=executor)
    recents.add_search_pair(delhi, mumbai)

    recents.clear()

    assert RecentLocationsManager(session_factory, executor=executor).recent_locations == []


# Settings

class FakeCountryClient:
    def __init__(self, error=None):
        self.error = error

    def fetch_all_countries(self):
        if self.error:
            raise self.error
        return [
            CountryInfo(country_name="India", country_code="IN", currency_code="INR", symbol="₹", currency="India Rupee"),
            CountryInfo(country_name="Germany", country_code="DE", currency_code="EUR", symbol="€", currency="Euro Member Countries"),
            CountryInfo(country_name="France", country_code="FR", currency_code="EUR", symbol="€", currency="Euro Member Countries"),
        ]


class FakeCurrencyClient:
    def fetch_all_currencies(self):
        return [CurrencyInfo(code="INR", symbol="₹"), CurrencyInfo(code="EUR", symbol="€")]


def _settings(store, executor):
    countries = CountryManager(FakeCountryClient(), executor=executor)
    currencies = CurrencyManager(FakeCurrencyClient(), executor=executor)
    countries.load_countries().result()
    currencies.load_currencies().result()
    return SettingsManager(store, countries, currencies, executor=executor)


def test_country_and_currency_lookup(store, executor):
    settings = _settings(store, executor)
    countries = settings.country_manager

    assert [c.country_code for c in countries.countries] == ["FR", "DE", "IN"]
    assert [c.country_code for c in countries.search_countries("euro")] == ["FR", "DE"]
    assert [c.country_code for c in countries.get_countries_by_currency("eur")] == ["FR", "DE"]
    assert countries.get_country("in").country_name == "India"
    assert [c.country_code for c in countries.popular_countries()] == ["DE", "FR", "IN"]
    assert [c.code for c in settings.currency_manager.search_currencies("rupee")] == ["INR"]
    assert settings.currency_manager.currency_info("eur").symbol == "€"
    assert settings.currency_manager.currency_info("GBP").symbol == "GBP"


def test_country_load_failure(executor):
    countries = CountryManager(FakeCountryClient(error=ConnectionFailedError()), executor=executor)

    assert countries.load_countries().result() == []
    assert countries.error_message == "Failed to load countries: Network connection failed"


def test_settings_default_to_india(store, executor):
    settings = _settings(store, executor)
    settings.load_stored_settings()

    assert settings.selected_country_name == "India"
    assert settings.selected_currency_symbol == "₹"
    assert settings.selected_currency_code == "INR"


def test_settings_persist_codes(store, executor):
    settings = _settings(store, executor)
    settings.load_stored_settings()
    settings.set_selected_country(settings.country_manager.get_country("DE"))
    settings.set_selected_currency(settings.currency_manager.get_currency("EUR"))
    settings.set_language("fr")

    reloaded = _settings(store, executor)
    reloaded.load_stored_settings()

    assert reloaded.selected_country_code == "DE"
    assert reloaded.selected_currency_symbol == "€"
    assert reloaded.language == "fr"
    assert reloaded.api_parameters().language == "fr-FR"


# Users

class FakeUserClient:
    def __init__(self, error=None):
        self.error = error
        self.users = []
        self.sessions = []

    def create_user(self, request):
        if self.error:
            raise self.error
        self.users.append(request)
        return UserCreationResponse(user_id=42)

    def create_session(self, request):
        self.sessions.append(request)
        return SessionCreationResponse(user_session_id=len(self.sessions))


def test_first_launch_creates_user_and_session(store, executor):
    client = FakeUserClient()
    users = UserManager(client, store, country_code_provider=lambda: "DE", executor=executor)

    assert users.initialize_user().result() == 42
    assert users.is_valid_user
    assert users.install_date is not None
    assert store.get(USER_ID_KEY) == "42"
    assert [s.tag for s in client.sessions] == ["app_launch"]
    assert client.sessions[0].country_code == "DE"
    assert len(client.users[0].pseudo_id) == 21


def test_later_launch_only_opens_session(store, executor):
    client = FakeUserClient()
    UserManager(client, store, executor=executor).initialize_user().result()

    users = UserManager(client, store, executor=executor)
    users.initialize_user().result()
    users.track_hotel_search().result()

    assert len(client.users) == 1
    assert [s.tag for s in client.sessions] == ["app_launch", "app_launch", "hotel_search"]
    assert client.sessions[-1].vertical == "hotel"
    assert users.current_session_id == 3


def test_session_carries_attribution(store, executor):
    client = FakeUserClient()
    users = UserManager(client, store, executor=executor)
    users.initialize_user().result()

    users.create_session(UserEventType.FLIGHT_SEARCH, UserVertical.FLIGHT, additional_data={"gclid": "g1"}).result()

    assert client.sessions[-1].gclid == "g1"
    assert client.sessions[-1].tag == "flight_search"


def test_tracking_without_user_is_skipped(store, executor):
    users = UserManager(FakeUserClient(error=ConnectionFailedError()), store, executor=executor)

    assert users.initialize_user().result() is None
    assert users.track_flight_search() is None


def test_clear_user_data_keeps_device_ids(store, executor):
    users = UserManager(FakeUserClient(), store, executor=executor)
    users.initialize_user().result()
    device_id = store.get(DEVICE_ID_KEY)

    users.clear_user_data()

    assert not users.is_valid_user
    assert store.get(USER_ID_KEY) is None
    assert store.get(DEVICE_ID_KEY) == device_id


# Authentication

def _auth_response():
    return AuthResponse(
        user=User(id="u1", email="traveller@example.com", name="Traveller"),
        access_token="token-1",
        expires_in=3600,
    )


def test_sign_in_persists_user(store, executor):
    auth = AuthenticationManager(store, executor=executor)
    auth.complete_sign_in(_auth_response())

    restored = AuthenticationManager(store, executor=executor)

    assert restored.is_authenticated
    assert restored.current_user.email == "traveller@example.com"
    assert restored.access_token == "token-1"


def test_sign_out_and_delete(store, executor):
    auth = AuthenticationManager(store, executor=executor)
    assert auth.delete_account() is False

    auth.complete_sign_in(_auth_response())
    auth.sign_out()
    assert not auth.is_authenticated
    assert store.get(ACCESS_TOKEN_KEY) is None

    auth.complete_sign_in(_auth_response())
    assert auth.delete_account() is True
    assert AuthenticationManager(store, executor=executor).current_user is None


def test_malformed_stored_user_id_recreates_user(store, executor):
    store.set(USER_ID_KEY, "not-a-number")
    store.set(USER_CREATED_KEY, "true")
    client = FakeUserClient()

    users = UserManager(client, store, executor=executor)

    assert users.user_id is None
    assert not users.is_valid_user
    assert users.initialize_user().result() == 42
    assert store.get(USER_ID_KEY) == "42"
    assert len(client.users) == 1
