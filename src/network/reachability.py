import os
import logging
import threading

import requests

REACHABILITY_URL = os.getenv("REACHABILITY_URL", "https://www.google.com/generate_204")
CHECK_TIMEOUT = 5
CHECK_INTERVAL = 10

# Get logger
logger = logging.getLogger(__name__)


class NetworkMonitor:
    """Tracks whether the backends are reachable by requesting a known URL."""

    def __init__(self, check_url=REACHABILITY_URL, interval=CHECK_INTERVAL, session=None):
        self.check_url = check_url
        self.interval = interval
        self.session = session or requests.Session()
        self.is_connected = True
        self._listeners = []
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread = None

    def subscribe(self, callback):
        with self._lock:
            self._listeners.append(callback)

    def check(self):
        try:
            self.session.head(self.check_url, timeout=CHECK_TIMEOUT, allow_redirects=True)
            connected = True
        except requests.RequestException as e:
            logger.debug(f"Reachability check failed: {e}")
            connected = False

        self._update(connected)
        return connected

    def _update(self, connected):
        with self._lock:
            changed = connected != self.is_connected
            self.is_connected = connected
            listeners = list(self._listeners)

        if changed:
            logger.info(f"Network status: {'Connected' if connected else 'Disconnected'}")
            for callback in listeners:
                callback(connected)

    def start(self):
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="network-monitor", daemon=True)
        self._thread.start()

    def _run(self):
        while not self._stop_event.is_set():
            self.check()
            self._stop_event.wait(self.interval)

    def stop(self):
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=self.interval + CHECK_TIMEOUT)
            self._thread = None
