import logging
import threading
import concurrent.futures

# Get logger
logger = logging.getLogger(__name__)

# Shared worker pool for view-model requests
default_executor = concurrent.futures.ThreadPoolExecutor(max_workers=4, thread_name_prefix="viewmodel")


class ObservableObject:
    """Base for state holders whose ``published`` attributes notify subscribers on change.

    Subscribers are called as ``callback(name, value)`` from whichever thread
    made the change.
    """

    published = ()

    def __init__(self, executor=None):
        object.__setattr__(self, "_subscribers", [])
        object.__setattr__(self, "_subscribers_lock", threading.Lock())
        self.executor = executor or default_executor

    def subscribe(self, callback):
        with self._subscribers_lock:
            self._subscribers.append(callback)

        def unsubscribe():
            with self._subscribers_lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def __setattr__(self, name, value):
        if name not in self.published:
            object.__setattr__(self, name, value)
            return

        changed = getattr(self, name, None) != value or not hasattr(self, name)
        object.__setattr__(self, name, value)
        if changed:
            self._notify(name, value)

    def _notify(self, name, value):
        with self._subscribers_lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(name, value)
            except Exception as e:
                logger.error(f"Subscriber failed handling {type(self).__name__}.{name}: {e}")

    def snapshot(self):
        """Current values of all published attributes."""
        return {name: getattr(self, name, None) for name in self.published}

    def submit(self, fn, *args, **kwargs):
        return self.executor.submit(fn, *args, **kwargs)
