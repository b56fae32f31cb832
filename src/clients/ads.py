import logging
import concurrent.futures

from src.models.ads import AdsResponseWrapper, SessionResponse
from src.network.client import network_manager
from src.network.constants import (
    ADS_BASE_URL,
    ADS_BEARER_TOKEN,
    ADS_COUNTRY_CODE,
    ADS_FLIGHT_LIST_ENDPOINT,
    ADS_LABEL,
    ADS_SESSION_ENDPOINT,
    IMPRESSION_BASE_URL,
    USER_AGENT,
)
from src.network.errors import NetworkError

# Get logger
logger = logging.getLogger(__name__)


def full_impression_url(impression_url):
    if impression_url.startswith("/"):
        return IMPRESSION_BASE_URL + impression_url
    return impression_url


class AdsClient:
    def __init__(self, manager=None, base_url=ADS_BASE_URL, token=ADS_BEARER_TOKEN, executor=None):
        self.manager = manager or network_manager
        self.base_url = base_url
        self.token = token
        self.executor = executor or concurrent.futures.ThreadPoolExecutor(max_workers=2)

    def _headers(self):
        return {"Authorization": f"Bearer {self.token}", "User-Agent": USER_AGENT}

    def create_session(self, country_code=ADS_COUNTRY_CODE, label=ADS_LABEL):
        response = self.manager.get(
            self.base_url + ADS_SESSION_ENDPOINT,
            params={"countryCode": country_code, "label": label},
            headers=self._headers(),
            response_model=SessionResponse,
        )
        logger.info(f"Ads session created: {response.sid}")
        return response.sid

    def fetch_ads(self, sid, search_request, country_code=ADS_COUNTRY_CODE):
        wrapper = self.manager.post(
            self.base_url + ADS_FLIGHT_LIST_ENDPOINT,
            body=search_request,
            params={"countryCode": country_code, "_sid_": sid},
            headers=self._headers(),
            response_model=AdsResponseWrapper,
        )
        logger.info(f"Fetched {len(wrapper.inline_items)} ads")
        return wrapper.inline_items

    def _fire_impression(self, url):
        try:
            self.manager.send(url, headers={"User-Agent": USER_AGENT})
            logger.debug(f"Impression tracked: {url}")
        except NetworkError as e:
            logger.debug(f"Impression tracking failed for {url}: {e.message}")

    def track_impression(self, impression_url):
        """Fire-and-forget GET of the ad's impression pixel. Returns the future, or None for empty URLs."""
        if not impression_url:
            return None
        return self.executor.submit(self._fire_impression, full_impression_url(impression_url))
