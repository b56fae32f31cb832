import logging

from pydantic import ValidationError

from src.db.preferences import ACCESS_TOKEN_KEY, AUTH_USER_KEY, PreferenceStore
from src.models.user import User
from src.viewmodels.base import ObservableObject

# Get logger
logger = logging.getLogger(__name__)


class AuthenticationManager(ObservableObject):
    """Signed-in user state.

    Identity providers live outside this package; they hand over the
    resulting ``AuthResponse`` and this manager keeps it persisted until
    sign-out or account deletion.
    """

    published = ("current_user", "is_authenticated", "is_loading", "error_message")

    def __init__(self, store=None, executor=None):
        super().__init__(executor)
        self.store = store or PreferenceStore()
        self.current_user = None
        self.is_authenticated = False
        self.is_loading = False
        self.error_message = None
        self.load_stored_user()

    @property
    def access_token(self):
        return self.store.get(ACCESS_TOKEN_KEY)

    def load_stored_user(self):
        data = self.store.get_json(AUTH_USER_KEY)
        if data is None:
            return None
        try:
            user = User.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable stored user: {e}")
            self._clear_stored_user()
            return None
        self.current_user = user
        self.is_authenticated = True
        return user

    def complete_sign_in(self, auth_response):
        """Persist the user and tokens returned by an identity provider."""
        user = auth_response.user
        self.store.set_json(AUTH_USER_KEY, user.model_dump(mode="json", by_alias=True))
        self.store.set(ACCESS_TOKEN_KEY, auth_response.access_token)
        self.current_user = user
        self.is_authenticated = True
        self.error_message = None
        logger.info(f"Signed in {user.email or user.id} via {user.provider.display_name}")
        return user

    def sign_out(self):
        self.is_loading = True
        self._clear_stored_user()
        self.current_user = None
        self.is_authenticated = False
        self.is_loading = False
        logger.info("Signed out")

    def delete_account(self):
        if self.current_user is None:
            return False
        self.is_loading = True
        user_id = self.current_user.id
        self._clear_stored_user()
        self.current_user = None
        self.is_authenticated = False
        self.is_loading = False
        logger.info(f"Deleted local account data for {user_id}")
        return True

    def _clear_stored_user(self):
        self.store.delete(AUTH_USER_KEY)
        self.store.delete(ACCESS_TOKEN_KEY)
