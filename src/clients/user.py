import logging

from src.models.user import SessionCreationResponse, UserCreationResponse
from src.network.client import network_manager
from src.network.constants import USER_BASE_URL, USER_CREATE_ENDPOINT, USER_SESSION_ENDPOINT

# Get logger
logger = logging.getLogger(__name__)


class UserClient:
    def __init__(self, manager=None, base_url=USER_BASE_URL):
        self.manager = manager or network_manager
        self.base_url = base_url

    def create_user(self, request):
        response = self.manager.post(
            self.base_url + USER_CREATE_ENDPOINT, body=request, response_model=UserCreationResponse
        )
        logger.info(f"Created user {response.user_id}")
        return response

    def create_session(self, request):
        response = self.manager.post(
            self.base_url + USER_SESSION_ENDPOINT, body=request, response_model=SessionCreationResponse
        )
        logger.info(f"Created session {response.user_session_id} for user {request.user_id}")
        return response
