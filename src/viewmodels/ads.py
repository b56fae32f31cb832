import logging

from src.clients.ads import AdsClient
from src.models.ads import FlightLegModelAds, FlightSearchRequestAds
from src.network.constants import ADS_COUNTRY_CODE
from src.network.errors import NetworkError
from src.viewmodels.base import ObservableObject

# Get logger
logger = logging.getLogger(__name__)


class AdsViewModel(ObservableObject):
    published = ("ads", "is_loading_ads", "ads_error_message")

    def __init__(self, client=None, executor=None):
        super().__init__(executor)
        self.client = client or AdsClient()
        self.ads = []
        self.is_loading_ads = False
        self.ads_error_message = None

    def search_flight_ads(
        self,
        origin_airport,
        destination_airport,
        date,
        cabin_class="economy",
        passengers=None,
        country_code=ADS_COUNTRY_CODE,
    ):
        """Open an ads session and fetch inline ads for one flight leg. Returns a future of the ad list."""
        self.is_loading_ads = True
        self.ads_error_message = None
        self.ads = []
        request = FlightSearchRequestAds(
            cabin_class=cabin_class,
            legs=[FlightLegModelAds(date=date, destination_airport=destination_airport, origin_airport=origin_airport)],
            passengers=list(passengers or ["adult"]),
        )
        return self.submit(self._load_ads, request, country_code)

    def _load_ads(self, request, country_code):
        try:
            sid = self.client.create_session(country_code=country_code)
            ads = self.client.fetch_ads(sid, request, country_code=country_code)
        except NetworkError as e:
            logger.error(f"Loading ads failed: {e.message}")
            self.ads_error_message = e.message
            self.is_loading_ads = False
            return []

        self.ads = ads
        self.is_loading_ads = False
        return ads

    def track_impression(self, ad):
        return self.client.track_impression(ad.impression_url)
