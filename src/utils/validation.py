"""Pre-flight checks run before a search is sent."""
from enum import Enum

from src.utils.deeplink import validate_deeplink


class WarningType(str, Enum):
    NO_INTERNET = "no_internet"
    EMPTY_SEARCH = "empty_search"
    SAME_LOCATION = "same_location"

    @property
    def message(self):
        return WARNING_MESSAGES[self]


WARNING_MESSAGES = {
    WarningType.NO_INTERNET: "No Internet connection. Try reconnecting",
    WarningType.EMPTY_SEARCH: "Select location to search flight",
    WarningType.SAME_LOCATION: "Try different locations",
}


def validate_flight_search(origin_code, destination_code, is_connected=True):
    """Return the first ``WarningType`` that blocks the search, or None."""
    if not is_connected:
        return WarningType.NO_INTERNET
    if not origin_code or not destination_code:
        return WarningType.EMPTY_SEARCH
    if origin_code == destination_code:
        return WarningType.SAME_LOCATION
    return None


def validate_rental_search(pick_up_code, drop_off_code="", is_same_drop_off=True, is_connected=True):
    if not is_connected:
        return WarningType.NO_INTERNET
    if not pick_up_code:
        return WarningType.EMPTY_SEARCH
    if not is_same_drop_off and not drop_off_code:
        return WarningType.EMPTY_SEARCH
    if not is_same_drop_off and pick_up_code == drop_off_code:
        return WarningType.SAME_LOCATION
    return None


def validate_hotel_search(location_code, is_connected=True):
    if not is_connected:
        return WarningType.NO_INTERNET
    if not location_code:
        return WarningType.EMPTY_SEARCH
    return None


__all__ = [
    "WarningType",
    "validate_flight_search",
    "validate_rental_search",
    "validate_hotel_search",
    "validate_deeplink",
]
