import logging
import threading

from src.clients.location import LocationClient
from src.network.constants import MINIMUM_SEARCH_LENGTH, SEARCH_DEBOUNCE_DELAY
from src.network.errors import NetworkError
from src.viewmodels.base import ObservableObject

# Get logger
logger = logging.getLogger(__name__)


class Debouncer:
    """Runs ``callback`` with the latest arguments once calls stop for ``delay`` seconds."""

    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self._timer = None
        self._pending = None
        self._lock = threading.Lock()

    def call(self, *args):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = args
            self._timer = threading.Timer(self.delay, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def _take_pending(self):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            args, self._pending, self._timer = self._pending, None, None
            return args

    def _fire(self):
        args = self._take_pending()
        if args is not None:
            self.callback(*args)

    def flush(self):
        """Run the pending call now, on the calling thread."""
        self._fire()

    def cancel(self):
        self._take_pending()

    @property
    def is_pending(self):
        with self._lock:
            return self._pending is not None


class LocationSearchViewModel(ObservableObject):
    """Autocomplete for the origin, destination, hotel and pick-up pickers.

    Typing is debounced; a settled term identical to the previous one is not
    searched again. Blank or too-short terms clear the suggestions. A
    response for a term that has since been superseded is dropped.
    """

    published = ("search_text", "suggestions", "is_loading", "error_message")

    def __init__(self, client=None, delay=SEARCH_DEBOUNCE_DELAY, executor=None):
        super().__init__(executor)
        self.client = client or LocationClient()
        self.search_text = ""
        self.suggestions = []
        self.is_loading = False
        self.error_message = None
        self._last_term = None
        self._generation = 0
        self._generation_lock = threading.Lock()
        self._debouncer = Debouncer(delay, self._on_term_settled)

    def update_search_text(self, text):
        self.search_text = text
        self._debouncer.call(text)

    def flush(self):
        self._debouncer.flush()

    def _next_generation(self):
        with self._generation_lock:
            self._generation += 1
            return self._generation

    def _is_current(self, generation):
        with self._generation_lock:
            return generation == self._generation

    def _on_term_settled(self, term):
        if term == self._last_term:
            return
        self._last_term = term
        generation = self._next_generation()

        if not term.strip() or len(term.strip()) < MINIMUM_SEARCH_LENGTH:
            self.suggestions = []
            self.is_loading = False
            return

        self.fetch_autocomplete(term, generation)

    def fetch_autocomplete(self, term, generation=None):
        if generation is None:
            generation = self._next_generation()

        self.is_loading = True
        try:
            response = self.client.search_locations(term)
        except NetworkError as e:
            logger.warning(f"Autocomplete failed for '{term}': {e.message}")
            if self._is_current(generation):
                self.suggestions = []
                self.error_message = e.message
                self.is_loading = False
            return []

        if not self._is_current(generation):
            logger.debug(f"Dropping stale autocomplete results for '{term}'")
            return response.data

        self.suggestions = response.data
        self.error_message = None
        self.is_loading = False
        return response.data

    def clear(self):
        self._debouncer.cancel()
        self._next_generation()
        self._last_term = None
        self.search_text = ""
        self.suggestions = []
        self.is_loading = False
