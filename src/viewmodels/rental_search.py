from datetime import date, time, timedelta

from src.clients.rental import RentalClient
from src.models.rental import RentalRequest, RentalSearchParameters
from src.network.constants import api_parameters
from src.utils.dates import combine_date_and_time, to_api_datetime
from src.utils.validation import WarningType, validate_rental_search
from src.viewmodels.deeplink_search import DeeplinkSearchViewModel

MINIMUM_RENTAL_DURATION = timedelta(hours=1)


class RentalSearchViewModel(DeeplinkSearchViewModel):
    noun = "car rental"

    def __init__(self, client=None, params_provider=api_parameters, user_manager=None, executor=None, **kwargs):
        super().__init__(executor=executor, **kwargs)
        self.client = client or RentalClient()
        self.params_provider = params_provider
        self.user_manager = user_manager
        self.pick_up_iata_code = ""
        self.drop_off_iata_code = ""
        self.pick_up_date = date.today()
        self.pick_up_time = time(9, 0)
        self.drop_off_date = date.today() + timedelta(days=2)
        self.drop_off_time = time(10, 0)
        self.is_same_drop_off = True

    @property
    def pick_up_datetime(self):
        return combine_date_and_time(self.pick_up_date, self.pick_up_time)

    @property
    def drop_off_datetime(self):
        return combine_date_and_time(self.drop_off_date, self.drop_off_time)

    def validation_error(self):
        self.warning = validate_rental_search(
            self.pick_up_iata_code, self.drop_off_iata_code, self.is_same_drop_off, self.is_connected
        )
        if self.warning is WarningType.EMPTY_SEARCH:
            if not self.pick_up_iata_code:
                return "Please select pick-up location."
            return "Please select drop-off location."
        if self.warning is not None:
            return self.warning.message
        if self.drop_off_datetime - self.pick_up_datetime < MINIMUM_RENTAL_DURATION:
            return (
                "Drop-off must be at least one hour after pick-up. "
                "Please adjust the dates and/or times for your search."
            )
        return None

    def build_request(self):
        params = self.params_provider()
        return RentalRequest(
            country_code=params.country,
            pick_up=self.pick_up_iata_code,
            drop_off=None if self.is_same_drop_off else self.drop_off_iata_code,
            pick_up_date=to_api_datetime(self.pick_up_datetime),
            drop_off_date=to_api_datetime(self.drop_off_datetime),
            currency_code=params.currency,
            language_code=params.language,
            user_id=params.user_id,
        )

    def perform_request(self):
        return self.client.search_rental(self.build_request())

    def on_success(self):
        if self.user_manager is not None:
            self.user_manager.track_rental_search()

    def search_rentals(self):
        return self.search()

    def search_parameters(self, pick_up_name="", drop_off_name=None):
        return RentalSearchParameters(
            pick_up_location_code=self.pick_up_iata_code,
            drop_off_location_code=None if self.is_same_drop_off else self.drop_off_iata_code,
            pick_up_location_name=pick_up_name,
            drop_off_location_name=drop_off_name,
            is_same_drop_off=self.is_same_drop_off,
            pick_up_date=self.pick_up_date,
            pick_up_time=self.pick_up_time,
            drop_off_date=self.drop_off_date,
            drop_off_time=self.drop_off_time,
        )
