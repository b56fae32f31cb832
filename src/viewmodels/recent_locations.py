import logging
import threading

from src.db.database import RecentLocationDB, RecentSearchPairDB, SessionLocal
from src.models.recent import RecentLocation, RecentSearchPair
from src.viewmodels.base import ObservableObject

MAX_RECENT_LOCATIONS = 8
MAX_RECENT_SEARCH_PAIRS = 5

# Get logger
logger = logging.getLogger(__name__)


class RecentLocationsManager(ObservableObject):
    """Most recently used locations and origin/destination pairs, persisted to the database.

    Both lists are kept most-recent-first. Selecting a location again moves
    it to the front and bumps its search count.
    """

    published = ("recent_locations", "recent_search_pairs")

    def __init__(self, session_factory=SessionLocal, executor=None):
        super().__init__(executor)
        self.session_factory = session_factory
        self._lock = threading.RLock()
        self.recent_locations = []
        self.recent_search_pairs = []
        self.load()

    # Persistence

    def load(self):
        db = self.session_factory()
        try:
            location_rows = db.query(RecentLocationDB).order_by(RecentLocationDB.position).all()
            pair_rows = db.query(RecentSearchPairDB).order_by(RecentSearchPairDB.position).all()
            locations = [
                RecentLocation(
                    iata_code=row.iata_code,
                    airport_name=row.airport_name or "",
                    display_name=row.display_name or "",
                    city_name=row.city_name or "",
                    country_name=row.country_name or "",
                    type=row.type or "airport",
                    search_count=row.search_count or 1,
                    last_searched=row.last_searched,
                )
                for row in location_rows
            ]
            pairs = [
                RecentSearchPair(
                    origin=RecentLocation.model_validate(row.origin),
                    destination=RecentLocation.model_validate(row.destination),
                    search_count=row.search_count or 1,
                    search_date=row.search_date,
                )
                for row in pair_rows
            ]
        finally:
            db.close()

        with self._lock:
            self.recent_locations = locations
            self.recent_search_pairs = pairs
        logger.info(f"Loaded {len(locations)} recent locations and {len(pairs)} search pairs")

    def _save(self):
        db = self.session_factory()
        try:
            db.query(RecentLocationDB).delete()
            db.query(RecentSearchPairDB).delete()
            for position, location in enumerate(self.recent_locations):
                db.add(
                    RecentLocationDB(
                        iata_code=location.iata_code,
                        position=position,
                        airport_name=location.airport_name,
                        display_name=location.display_name,
                        city_name=location.city_name,
                        country_name=location.country_name,
                        type=location.type,
                        search_count=location.search_count,
                        last_searched=location.last_searched,
                    )
                )
            for position, pair in enumerate(self.recent_search_pairs):
                db.add(
                    RecentSearchPairDB(
                        position=position,
                        origin_code=pair.origin.iata_code,
                        destination_code=pair.destination.iata_code,
                        origin=pair.origin.model_dump(mode="json"),
                        destination=pair.destination.model_dump(mode="json"),
                        search_count=pair.search_count,
                        search_date=pair.search_date,
                    )
                )
            db.commit()
        except Exception as e:
            logger.error(f"Error saving recent locations: {e}")
            db.rollback()
            raise
        finally:
            db.close()

    # Updates

    def _add_location(self, location):
        existing = next((r for r in self.recent_locations if r.iata_code == location.iata_code), None)
        count = existing.search_count + 1 if existing else 1
        others = [r for r in self.recent_locations if r.iata_code != location.iata_code]
        self.recent_locations = [RecentLocation.from_location(location, search_count=count)] + others[
            : MAX_RECENT_LOCATIONS - 1
        ]

    def add_location(self, location):
        with self._lock:
            self._add_location(location)
            self._save()
        logger.info(f"Added recent location: {location.display_name}")

    def add_search_pair(self, origin, destination):
        with self._lock:
            self._add_location(origin)
            self._add_location(destination)

            def same_route(pair):
                return pair.origin.iata_code == origin.iata_code and pair.destination.iata_code == destination.iata_code

            existing = next((p for p in self.recent_search_pairs if same_route(p)), None)
            count = existing.search_count + 1 if existing else 1
            pair = RecentSearchPair(
                origin=RecentLocation.from_location(origin),
                destination=RecentLocation.from_location(destination),
                search_count=count,
            )
            others = [p for p in self.recent_search_pairs if not same_route(p)]
            self.recent_search_pairs = [pair] + others[: MAX_RECENT_SEARCH_PAIRS - 1]
            self._save()
        logger.info(f"Added search pair: {origin.display_name} -> {destination.display_name}")

    def get_last_search_locations(self):
        """Origin and destination of the latest completed search, for prefilling the form."""
        with self._lock:
            if not self.recent_search_pairs:
                return None, None
            last = self.recent_search_pairs[0]
            return last.origin, last.destination

    def remove_location(self, iata_code):
        """Forget a location and every search pair that used it. Returns whether it was present."""
        with self._lock:
            present = any(r.iata_code == iata_code for r in self.recent_locations)
            self.recent_locations = [r for r in self.recent_locations if r.iata_code != iata_code]
            self.recent_search_pairs = [
                p
                for p in self.recent_search_pairs
                if p.origin.iata_code != iata_code and p.destination.iata_code != iata_code
            ]
            self._save()
        return present

    def clear(self):
        with self._lock:
            self.recent_locations = []
            self.recent_search_pairs = []
            self._save()
        logger.info("Cleared all recent locations and search pairs")

    def popular_locations(self, limit=5):
        with self._lock:
            return sorted(self.recent_locations, key=lambda r: r.search_count, reverse=True)[:limit]

    def search_count(self, iata_code):
        with self._lock:
            match = next((r for r in self.recent_locations if r.iata_code == iata_code), None)
            return match.search_count if match else 0
