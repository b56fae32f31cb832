from datetime import date, timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.network.constants import HOTEL_PROVIDER_ID
from src.utils.dates import DISPLAY_DATE_FORMAT, number_of_nights, to_api_date


class HotelRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    country: str
    user_id: str
    city_name: str
    country_name: str
    checkin: str
    checkout: str
    rooms: int = 1
    adults: int = 2
    children: Optional[int] = None
    provider_id: str = Field(default=HOTEL_PROVIDER_ID, alias="id")

    @field_validator("city_name")
    @classmethod
    def lowercase_city(cls, value):
        return value.lower()

    @field_validator("country_name")
    @classmethod
    def uppercase_country(cls, value):
        return value.upper()

    def to_params(self, language, currency):
        params = {
            "country": self.country,
            "user_id": self.user_id,
            "city_name": self.city_name,
            "country_name": self.country_name,
            "checkin": self.checkin,
            "checkout": self.checkout,
            "rooms": self.rooms,
            "adults": self.adults,
            "language": language,
            "currency": currency,
        }
        if self.children is not None and self.children > 0:
            params["children"] = self.children
        return params


class HotelResponse(BaseModel):
    deeplink: str
    status: Optional[str] = None
    message: Optional[str] = None


class HotelSearchParameters(BaseModel):
    city_code: str = ""
    city_name: str = ""
    checkin_date: date = Field(default_factory=date.today)
    checkout_date: date = Field(default_factory=lambda: date.today() + timedelta(days=1))
    rooms: int = 1
    adults: int = 2
    children: int = 0

    @property
    def formatted_checkin_date(self):
        return self.checkin_date.strftime(DISPLAY_DATE_FORMAT)

    @property
    def formatted_checkout_date(self):
        return self.checkout_date.strftime(DISPLAY_DATE_FORMAT)

    @property
    def formatted_date_range(self):
        return f"{self.formatted_checkin_date} - {self.formatted_checkout_date}"

    @property
    def accommodation_display_text(self):
        guests = self.adults + self.children
        guests_text = f"{guests} Guest{'s' if guests > 1 else ''}"
        rooms_text = f"{self.rooms} Room{'s' if self.rooms > 1 else ''}"
        return f"{guests_text}, {rooms_text}"

    @property
    def api_checkin_date(self):
        return to_api_date(self.checkin_date)

    @property
    def api_checkout_date(self):
        return to_api_date(self.checkout_date)

    @property
    def number_of_nights(self):
        return number_of_nights(self.checkin_date, self.checkout_date)
