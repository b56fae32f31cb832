import random
import string
import uuid
import logging
from datetime import datetime

from src.clients.user import UserClient
from src.db.preferences import (
    DEVICE_ID_KEY,
    INSTALL_DATE_KEY,
    PSEUDO_ID_KEY,
    USER_CREATED_KEY,
    USER_ID_KEY,
    VENDOR_ID_KEY,
    PreferenceStore,
)
from src.models.user import SessionCreationRequest, UserCreationRequest, UserEventType, UserVertical
from src.network.constants import DEFAULT_COUNTRY, parse_stored_user_id
from src.network.errors import NetworkError
from src.viewmodels.base import ObservableObject

# Marketing attribution fields that may accompany a session
ATTRIBUTION_KEYS = [
    "ad_id",
    "adgroup_id",
    "campaign_id",
    "campaign_group_id",
    "account_id",
    "ad_objective_name",
    "gclid",
    "fbclid",
    "msclkid",
]

# Get logger
logger = logging.getLogger(__name__)


def generate_device_id():
    return f"{random.randint(1000000, 9999999)}{random.randint(1000000, 9999999)}{random.randint(100000, 999999)}"


def generate_pseudo_id():
    alphabet = string.ascii_lowercase + string.digits
    return "".join(random.choice(alphabet) for _ in range(21))


class UserManager(ObservableObject):
    """Backend user identity: created once per install, then one session per tracked event."""

    published = ("user_id", "current_session_id", "is_user_created")

    def __init__(self, client=None, store=None, country_code_provider=None, executor=None):
        super().__init__(executor)
        self.client = client or UserClient()
        self.store = store or PreferenceStore()
        self.country_code_provider = country_code_provider or (lambda: DEFAULT_COUNTRY)
        self.current_session_id = None
        stored_id = parse_stored_user_id(self.store.get(USER_ID_KEY))
        self.user_id = int(stored_id) if stored_id else None
        self.is_user_created = self.store.get(USER_CREATED_KEY) == "true"

    @property
    def is_valid_user(self):
        return self.is_user_created and self.user_id is not None

    @property
    def install_date(self):
        value = self.store.get(INSTALL_DATE_KEY)
        return datetime.fromisoformat(value) if value else None

    def initialize_user(self):
        """Create the user on first launch, otherwise open an app-launch session. Returns a future."""
        if self.is_valid_user:
            return self.submit(self._create_session, UserEventType.APP_LAUNCH, UserVertical.GENERAL, None, None)
        return self.submit(self._create_user)

    def _get_or_create(self, key, factory):
        value = self.store.get(key)
        if not value:
            value = factory()
            self.store.set(key, value)
        return value

    def _create_user(self):
        request = UserCreationRequest(
            device_id=self._get_or_create(DEVICE_ID_KEY, generate_device_id),
            vendor_id=self._get_or_create(VENDOR_ID_KEY, lambda: str(uuid.uuid4()).upper()),
            pseudo_id=self._get_or_create(PSEUDO_ID_KEY, generate_pseudo_id),
        )
        try:
            response = self.client.create_user(request)
        except NetworkError as e:
            logger.error(f"User creation failed: {e.message}")
            return None

        self.user_id = response.user_id
        self.is_user_created = True
        self.store.set(USER_ID_KEY, str(response.user_id))
        self.store.set(USER_CREATED_KEY, "true")
        self.store.set(INSTALL_DATE_KEY, datetime.now().isoformat())
        logger.info(f"User created with id {response.user_id}")

        self._create_session(UserEventType.APP_LAUNCH, UserVertical.GENERAL, None, None)
        return response.user_id

    def create_session(self, event_type, vertical=UserVertical.GENERAL, tag=None, additional_data=None):
        """Open a tracking session for ``event_type``. Returns a future, or None without a user."""
        if self.user_id is None:
            logger.warning(f"No user id yet, skipping {event_type.value} session")
            return None
        return self.submit(self._create_session, event_type, vertical, tag, additional_data)

    def _create_session(self, event_type, vertical, tag, additional_data):
        extra = {key: (additional_data or {}).get(key) for key in ATTRIBUTION_KEYS}
        request = SessionCreationRequest(
            user_id=self.user_id,
            tag=tag or event_type.value,
            vertical=vertical.value,
            country_code=self.country_code_provider(),
            **extra,
        )
        try:
            response = self.client.create_session(request)
        except NetworkError as e:
            logger.error(f"Session creation failed for {event_type.value}: {e.message}")
            return None
        self.current_session_id = response.user_session_id
        return response.user_session_id

    def track_flight_search(self):
        return self.create_session(UserEventType.FLIGHT_SEARCH, UserVertical.FLIGHT)

    def track_hotel_search(self):
        return self.create_session(UserEventType.HOTEL_SEARCH, UserVertical.HOTEL)

    def track_rental_search(self):
        return self.create_session(UserEventType.RENTAL_SEARCH, UserVertical.RENTAL)

    def clear_user_data(self):
        # Device identifiers survive a reset
        for key in (USER_ID_KEY, USER_CREATED_KEY, INSTALL_DATE_KEY):
            self.store.delete(key)
        self.user_id = None
        self.current_session_id = None
        self.is_user_created = False
