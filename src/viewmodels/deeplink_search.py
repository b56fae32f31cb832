import logging
import threading

from src.network.constants import SEARCH_TIMEOUT
from src.network.errors import (
    ConnectionFailedError,
    InvalidDeeplinkError,
    NetworkError,
    RequestTimeoutError,
    SearchFailedError,
)
from src.utils.deeplink import validate_deeplink
from src.viewmodels.base import ObservableObject

# Get logger
logger = logging.getLogger(__name__)


class DeeplinkSearchViewModel(ObservableObject):
    """Shared flow for searches that resolve to a partner deep link (hotels, car rentals).

    One request per search. A watchdog timer flips ``has_timed_out`` if no
    answer arrives within ``search_timeout`` seconds; an answer arriving
    after that is ignored.
    """

    published = ("deeplink", "is_loading", "error_message", "has_timed_out")
    noun = "search"

    def __init__(self, executor=None, search_timeout=SEARCH_TIMEOUT, network_monitor=None):
        super().__init__(executor)
        self.search_timeout = search_timeout
        self.network_monitor = network_monitor
        # Pre-search warning behind the last rejected search, if any
        self.warning = None
        self.deeplink = None
        self.is_loading = False
        self.error_message = None
        self.has_timed_out = False
        self._timer = None
        self._attempt = 0
        # Attempt whose outcome (answer or timeout) has been claimed
        self._settled_attempt = 0
        self._state_lock = threading.RLock()

    @property
    def is_connected(self):
        return self.network_monitor is None or self.network_monitor.is_connected

    # Overridden by subclasses

    def validation_error(self):
        return None

    def perform_request(self):
        raise NotImplementedError

    def on_success(self):
        pass

    # Flow

    def search(self):
        """Validate and start the search. Returns a future, or None if validation failed."""
        self.warning = None
        message = self.validation_error()
        if message:
            self.error_message = message
            self.is_loading = False
            return None

        with self._state_lock:
            self._attempt += 1
            attempt = self._attempt
        self.is_loading = True
        self.error_message = None
        self.deeplink = None
        self.has_timed_out = False
        self._start_timer(attempt)
        return self.submit(self._run, attempt)

    def _run(self, attempt):
        try:
            response = self.perform_request()
        except NetworkError as e:
            if self._finish(attempt):
                self.deeplink = None
                self.error_message = self.error_message_for(e)
                logger.error(f"{self.noun.capitalize()} search failed: {e.message}")
            return None

        if not self._finish(attempt):
            logger.warning(f"Ignoring {self.noun} result that arrived after the timeout")
            return None

        if not validate_deeplink(response.deeplink):
            self.deeplink = None
            self.error_message = self.error_message_for(InvalidDeeplinkError())
            return None

        self.deeplink = response.deeplink
        self.error_message = None
        self.on_success()
        return response.deeplink

    def _finish(self, attempt):
        """Stop the watchdog; False if this attempt already timed out or was superseded."""
        with self._state_lock:
            if attempt != self._attempt or self._settled_attempt == attempt:
                return False
            self._settled_attempt = attempt
            self._cancel_timer()
        self.is_loading = False
        return True

    def _start_timer(self, attempt):
        with self._state_lock:
            self._cancel_timer()
            self._timer = threading.Timer(self.search_timeout, self._handle_timeout, args=(attempt,))
            self._timer.daemon = True
            self._timer.start()

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _handle_timeout(self, attempt):
        with self._state_lock:
            if attempt != self._attempt or self._settled_attempt == attempt:
                return
            self._settled_attempt = attempt
            self._timer = None
            self.has_timed_out = True
        self.is_loading = False
        self.error_message = self.timeout_message()
        logger.warning(f"{self.noun.capitalize()} search timed out after {self.search_timeout}s")

    def reset_search_state(self):
        with self._state_lock:
            self._attempt += 1
            self._cancel_timer()
        self.deeplink = None
        self.is_loading = False
        self.error_message = None
        self.has_timed_out = False

    # Messages

    def timeout_message(self):
        return f"{self.noun.capitalize()} search timed out. Please try again."

    def error_message_for(self, error):
        if isinstance(error, RequestTimeoutError):
            return self.timeout_message()
        if isinstance(error, ConnectionFailedError):
            return "Network connection issue. Please check your internet and try again."
        if isinstance(error, InvalidDeeplinkError):
            return f"Unable to load {self.noun} search results. Please try again."
        if isinstance(error, SearchFailedError):
            return f"{self.noun.capitalize()} search failed. Please try different dates or location."
        return error.message
