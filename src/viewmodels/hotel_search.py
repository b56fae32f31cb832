from datetime import date, timedelta

from src.clients.hotel import HotelClient
from src.models.hotel import HotelRequest, HotelSearchParameters
from src.network.constants import api_parameters
from src.utils.dates import to_api_date
from src.utils.validation import WarningType, validate_hotel_search
from src.viewmodels.deeplink_search import DeeplinkSearchViewModel


class HotelSearchViewModel(DeeplinkSearchViewModel):
    noun = "hotel"

    def __init__(self, client=None, params_provider=api_parameters, user_manager=None, executor=None, **kwargs):
        super().__init__(executor=executor, **kwargs)
        self.client = client or HotelClient()
        self.params_provider = params_provider
        self.user_manager = user_manager
        self.city_code = ""
        self._city_name = ""
        self._country_name = ""
        self.checkin_date = date.today()
        self.checkout_date = date.today() + timedelta(days=1)
        self.rooms = 1
        self.adults = 2
        self.children = 0

    # Changing the destination invalidates the previous result

    @property
    def city_name(self):
        return self._city_name

    @city_name.setter
    def city_name(self, value):
        if self._city_name and value != self._city_name:
            self.reset_search_state()
        self._city_name = value

    @property
    def country_name(self):
        return self._country_name

    @country_name.setter
    def country_name(self, value):
        if self._country_name and value != self._country_name:
            self.reset_search_state()
        self._country_name = value

    def validation_error(self):
        self.warning = validate_hotel_search(self.city_code, self.is_connected)
        if self.warning is WarningType.NO_INTERNET:
            return self.warning.message
        if self.warning is WarningType.EMPTY_SEARCH:
            return "Please select hotel location."
        if not self.checkin_date < self.checkout_date:
            return "Check-out date must be after check-in date."
        return None

    def build_request(self):
        params = self.params_provider()
        return HotelRequest(
            country=params.country,
            user_id=params.user_id,
            city_name=self.city_name,
            country_name=self.country_name,
            checkin=to_api_date(self.checkin_date),
            checkout=to_api_date(self.checkout_date),
            rooms=self.rooms,
            adults=self.adults,
            children=self.children if self.children > 0 else None,
        )

    def perform_request(self):
        return self.client.search_hotel(self.build_request())

    def on_success(self):
        if self.user_manager is not None:
            self.user_manager.track_hotel_search()

    def search_hotels(self):
        return self.search()

    def search_parameters(self):
        return HotelSearchParameters(
            city_code=self.city_code,
            city_name=self.city_name,
            checkin_date=self.checkin_date,
            checkout_date=self.checkout_date,
            rooms=self.rooms,
            adults=self.adults,
            children=self.children,
        )
