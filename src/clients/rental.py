import logging

from src.models.rental import RentalResponse
from src.network.client import network_manager
from src.network.constants import DEEPLINK_ENDPOINT, RENTAL_BASE_URL

# Get logger
logger = logging.getLogger(__name__)


class RentalClient:
    def __init__(self, manager=None, base_url=RENTAL_BASE_URL):
        self.manager = manager or network_manager
        self.base_url = base_url

    def search_rental(self, request):
        url = f"{self.base_url}{DEEPLINK_ENDPOINT}{request.provider_id}/"
        route = request.pick_up if not request.drop_off else f"{request.pick_up} -> {request.drop_off}"
        logger.info(f"Rental search {route} ({request.pick_up_date} to {request.drop_off_date})")

        response = self.manager.get(url, params=request.to_params(), response_model=RentalResponse)
        logger.info(f"Rental search returned deeplink {response.deeplink}")
        return response
