from fastapi import FastAPI, HTTPException, Depends
import logging
from datetime import date, time
from functools import lru_cache
from typing import Optional, List

from pydantic import BaseModel, Field

from src.clients.ads import AdsClient
from src.clients.flights import FlightSearchClient, PollClient
from src.clients.hotel import HotelClient
from src.clients.location import LocationClient
from src.clients.rental import RentalClient
from src.models.user import AuthResponse
from src.network.constants import api_parameters
from src.network.errors import NetworkError
from src.network.reachability import NetworkMonitor
from src.utils.colors import GRADIENTS, THEME, gradient, rgba_to_hex, theme_color
from src.utils.deeplink import clean, to_safe_url, validate_deeplink
from src.utils.validation import WarningType
from src.viewmodels.ads import AdsViewModel
from src.viewmodels.auth import AuthenticationManager
from src.viewmodels.filters import FilterViewModel, SortOption
from src.viewmodels.flight_search import FlightSearchViewModel, SearchValidationError
from src.viewmodels.hotel_search import HotelSearchViewModel
from src.viewmodels.recent_locations import RecentLocationsManager
from src.viewmodels.rental_search import RentalSearchViewModel
from src.viewmodels.settings import CountryManager, CurrencyManager

# Configure logging - Adjust format to remove INFO/WARNING prefixes
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(message)s",
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Travel Search API",
    description="Local facade over the flight, hotel and car rental search backends",
    version="1.0.0"
)

# Request bodies

class FlightSearchBody(BaseModel):
    origin: str
    destination: str
    departure_date: date
    return_date: Optional[date] = None
    adults: int = 1
    children_ages: List[int] = Field(default_factory=list)
    cabin_class: str = "economy"


class HotelSearchBody(BaseModel):
    city_code: str
    city_name: str
    country_name: str
    checkin: date
    checkout: date
    rooms: int = 1
    adults: int = 2
    children: int = 0


class RentalSearchBody(BaseModel):
    pick_up: str
    drop_off: Optional[str] = None
    pick_up_date: date
    pick_up_time: time = time(9, 0)
    drop_off_date: date
    drop_off_time: time = time(10, 0)


class DeeplinkBody(BaseModel):
    url: str

# Dependencies

def get_params_provider():
    return api_parameters

@lru_cache()
def get_location_client():
    return LocationClient()

@lru_cache()
def get_flight_search_client():
    return FlightSearchClient()

@lru_cache()
def get_poll_client():
    return PollClient()

@lru_cache()
def get_hotel_client():
    return HotelClient()

@lru_cache()
def get_rental_client():
    return RentalClient()

@lru_cache()
def get_ads_client():
    return AdsClient()

@lru_cache()
def get_country_manager():
    return CountryManager()

@lru_cache()
def get_currency_manager():
    return CurrencyManager()

@lru_cache()
def get_recent_locations():
    return RecentLocationsManager()

@lru_cache()
def get_auth_manager():
    return AuthenticationManager()

@lru_cache()
def get_network_monitor():
    monitor = NetworkMonitor()
    monitor.start()
    return monitor

def _rejection_status(error):
    if error is WarningType.NO_INTERNET:
        return 503
    if isinstance(error, (WarningType, SearchValidationError)):
        return 422
    return 502


@app.get("/")
def read_root():
    return {"message": "Welcome to the Travel Search API"}

@app.get("/locations")
def search_locations(query: str, client: LocationClient = Depends(get_location_client)):
    try:
        response = client.search_locations(query)
        return {"language": response.language, "data": [loc.model_dump() for loc in response.data]}
    except NetworkError as e:
        logger.error(f"Error searching locations for '{query}': {e.message}")
        raise HTTPException(status_code=502, detail=e.message)

@app.post("/flights/search")
def search_flights(
    body: FlightSearchBody,
    client: FlightSearchClient = Depends(get_flight_search_client),
    recent: RecentLocationsManager = Depends(get_recent_locations),
    monitor: NetworkMonitor = Depends(get_network_monitor),
):
    vm = FlightSearchViewModel(client=client, recent_locations=recent, network_monitor=monitor)
    vm.update_search_parameters(
        origin=body.origin.upper(),
        destination=body.destination.upper(),
        departure_date=body.departure_date,
        return_date=body.return_date,
        is_round_trip=body.return_date is not None,
        adults=body.adults,
        children=body.children_ages,
        cabin_class=body.cabin_class,
    )
    search_id = vm.search_flights().result()
    if search_id is None:
        raise HTTPException(status_code=_rejection_status(vm.last_error), detail=vm.error_message)
    return {"search_id": search_id}

def _result_deeplink(result):
    if not result.providers or not result.providers[0].best_deeplink:
        return None
    return to_safe_url(result.providers[0].best_deeplink)

@app.get("/flights/{search_id}/results")
def get_flight_results(
    search_id: str,
    page: int = 1,
    limit: int = 30,
    sort: Optional[SortOption] = None,
    max_stops: Optional[int] = None,
    max_duration: Optional[int] = None,
    airlines: Optional[str] = None,
    round_trip: bool = False,
    client: PollClient = Depends(get_poll_client),
    params_provider=Depends(get_params_provider),
    currencies: CurrencyManager = Depends(get_currency_manager),
):
    filters = FilterViewModel(is_round_trip=round_trip)
    if sort is not None:
        filters.selected_sort_option = sort
    if max_stops is not None:
        filters.max_stops = max_stops
    if max_duration is not None:
        filters.max_duration = max_duration
    if airlines:
        filters.selected_airlines = {code.strip().upper() for code in airlines.split(",") if code.strip()}

    try:
        response = client.poll_flights(search_id, filters.build_poll_request(), page=page, limit=limit)
    except NetworkError as e:
        logger.error(f"Error polling results for {search_id}: {e.message}")
        raise HTTPException(status_code=502, detail=e.message)

    currency = currencies.currency_info(params_provider().currency)
    return {
        "count": response.count,
        "next": response.next,
        "min_price": response.min_price,
        "max_price": response.max_price,
        "results": [
            {
                "id": result.id,
                "price": result.min_price,
                "formatted_price": result.formatted_price(currency),
                "duration": result.formatted_duration,
                "legs": [
                    {
                        "origin": leg.origin_code,
                        "destination": leg.destination_code,
                        "departure": leg.formatted_departure_time,
                        "arrival": leg.formatted_arrival_time,
                        "stops": leg.stops_text,
                    }
                    for leg in result.legs
                ],
                "deeplink": _result_deeplink(result),
            }
            for result in response.results
        ],
    }

def _run_deeplink_search(vm, label):
    future = vm.search()
    if future is None:
        status = 503 if vm.warning is WarningType.NO_INTERNET else 422
        raise HTTPException(status_code=status, detail=vm.error_message)
    deeplink = future.result()
    if deeplink is None:
        logger.error(f"{label} search failed: {vm.error_message}")
        raise HTTPException(status_code=504 if vm.has_timed_out else 502, detail=vm.error_message)
    return {"deeplink": deeplink}

@app.post("/hotels/search")
def search_hotels(
    body: HotelSearchBody,
    client: HotelClient = Depends(get_hotel_client),
    params_provider=Depends(get_params_provider),
    monitor: NetworkMonitor = Depends(get_network_monitor),
):
    vm = HotelSearchViewModel(client=client, params_provider=params_provider, network_monitor=monitor)
    vm.city_code = body.city_code
    vm.city_name = body.city_name
    vm.country_name = body.country_name
    vm.checkin_date = body.checkin
    vm.checkout_date = body.checkout
    vm.rooms = body.rooms
    vm.adults = body.adults
    vm.children = body.children
    return _run_deeplink_search(vm, "Hotel")

@app.post("/rentals/search")
def search_rentals(
    body: RentalSearchBody,
    client: RentalClient = Depends(get_rental_client),
    params_provider=Depends(get_params_provider),
    monitor: NetworkMonitor = Depends(get_network_monitor),
):
    vm = RentalSearchViewModel(client=client, params_provider=params_provider, network_monitor=monitor)
    vm.pick_up_iata_code = body.pick_up.upper()
    vm.is_same_drop_off = not body.drop_off
    vm.drop_off_iata_code = (body.drop_off or "").upper()
    vm.pick_up_date = body.pick_up_date
    vm.pick_up_time = body.pick_up_time
    vm.drop_off_date = body.drop_off_date
    vm.drop_off_time = body.drop_off_time
    return _run_deeplink_search(vm, "Rental")

@app.get("/ads/flights")
def get_flight_ads(
    origin: str,
    destination: str,
    date: str,
    cabin_class: str = "economy",
    client: AdsClient = Depends(get_ads_client),
):
    vm = AdsViewModel(client=client)
    ads = vm.search_flight_ads(origin.upper(), destination.upper(), date, cabin_class=cabin_class).result()
    if vm.ads_error_message:
        raise HTTPException(status_code=502, detail=vm.ads_error_message)
    return [ad.model_dump() for ad in ads]

@app.get("/countries")
def get_countries(query: Optional[str] = None, manager: CountryManager = Depends(get_country_manager)):
    if not manager.countries:
        manager.load_countries().result()
    if manager.error_message and not manager.countries:
        raise HTTPException(status_code=502, detail=manager.error_message)
    return [country.model_dump() for country in manager.search_countries(query or "")]

@app.get("/currencies")
def get_currencies(query: Optional[str] = None, manager: CurrencyManager = Depends(get_currency_manager)):
    if not manager.currencies:
        manager.load_currencies().result()
    if manager.error_message and not manager.currencies:
        raise HTTPException(status_code=502, detail=manager.error_message)
    return [
        {**currency.model_dump(), "display_name": currency.display_name}
        for currency in manager.search_currencies(query or "")
    ]

@app.get("/recent-locations")
def get_recent_locations_list(recent: RecentLocationsManager = Depends(get_recent_locations)):
    try:
        return {
            "locations": [loc.model_dump(mode="json") for loc in recent.recent_locations],
            "search_pairs": [pair.model_dump(mode="json") for pair in recent.recent_search_pairs],
        }
    except Exception as e:
        logger.error(f"Error retrieving recent locations: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

@app.delete("/recent-locations")
def clear_recent_locations(recent: RecentLocationsManager = Depends(get_recent_locations)):
    try:
        recent.clear()
        return {"status": "cleared"}
    except Exception as e:
        logger.error(f"Error clearing recent locations: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

@app.delete("/recent-locations/{iata_code}")
def remove_recent_location(iata_code: str, recent: RecentLocationsManager = Depends(get_recent_locations)):
    try:
        if not recent.remove_location(iata_code.upper()):
            raise HTTPException(status_code=404, detail="Recent location not found")
        return {"status": "removed", "iata_code": iata_code.upper()}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error removing recent location {iata_code}: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

@app.post("/deeplinks/sanitize")
def sanitize_deeplink(body: DeeplinkBody):
    cleaned = clean(body.url)
    return {"cleaned": cleaned, "url": to_safe_url(body.url), "valid": validate_deeplink(cleaned)}

@app.get("/theme")
def get_theme():
    return {
        "colors": {name: rgba_to_hex(theme_color(name)) for name in THEME},
        "gradients": {name: [rgba_to_hex(color) for color in gradient(name)] for name in GRADIENTS},
    }

@app.post("/auth/sign-in")
def sign_in(body: AuthResponse, auth: AuthenticationManager = Depends(get_auth_manager)):
    user = auth.complete_sign_in(body)
    return user.model_dump(mode="json", by_alias=True)

@app.get("/auth/me")
def get_current_user(auth: AuthenticationManager = Depends(get_auth_manager)):
    if not auth.is_authenticated:
        raise HTTPException(status_code=401, detail="Not signed in")
    return auth.current_user.model_dump(mode="json", by_alias=True)

@app.post("/auth/sign-out")
def sign_out(auth: AuthenticationManager = Depends(get_auth_manager)):
    auth.sign_out()
    return {"status": "signed_out"}

@app.delete("/auth/account")
def delete_account(auth: AuthenticationManager = Depends(get_auth_manager)):
    if not auth.delete_account():
        raise HTTPException(status_code=404, detail="No signed-in account")
    return {"status": "deleted"}
