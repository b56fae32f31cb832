from datetime import date, datetime, time, timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from src.network.constants import APP_CODE, RENTAL_PROVIDER_ID
from src.utils.dates import DISPLAY_DATE_FORMAT, DISPLAY_DATETIME_FORMAT, combine_date_and_time, to_api_datetime


class RentalRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    country_code: str
    app_code: str = APP_CODE
    pick_up: str
    drop_off: Optional[str] = None
    pick_up_date: str  # YYYY-MM-DDTHH:MM
    drop_off_date: str  # YYYY-MM-DDTHH:MM
    currency_code: str
    language_code: str
    user_id: str
    provider_id: str = Field(default=RENTAL_PROVIDER_ID, alias="id")

    def to_params(self):
        params = {
            "country_code": self.country_code,
            "app_code": self.app_code,
            "pick_up": self.pick_up,
            "pick_up_date": self.pick_up_date,
            "drop_off_date": self.drop_off_date,
            "currency_code": self.currency_code,
            "language_code": self.language_code,
            "user_id": self.user_id,
        }
        # Different drop-off only
        if self.drop_off:
            params["drop_off"] = self.drop_off
        return params


class RentalResponse(BaseModel):
    deeplink: str
    status: Optional[str] = None
    message: Optional[str] = None


class RentalSearchParameters(BaseModel):
    pick_up_location_code: str = ""
    drop_off_location_code: Optional[str] = None
    pick_up_location_name: str = ""
    drop_off_location_name: Optional[str] = None
    is_same_drop_off: bool = True
    pick_up_date: date = Field(default_factory=date.today)
    pick_up_time: time = time(9, 0)
    drop_off_date: date = Field(default_factory=lambda: date.today() + timedelta(days=2))
    drop_off_time: time = time(10, 0)

    @property
    def pick_up_datetime(self) -> datetime:
        return combine_date_and_time(self.pick_up_date, self.pick_up_time)

    @property
    def drop_off_datetime(self) -> datetime:
        return combine_date_and_time(self.drop_off_date, self.drop_off_time)

    @property
    def formatted_pick_up_datetime(self):
        return self.pick_up_datetime.strftime(DISPLAY_DATETIME_FORMAT)

    @property
    def formatted_drop_off_datetime(self):
        return self.drop_off_datetime.strftime(DISPLAY_DATETIME_FORMAT)

    @property
    def formatted_date_range(self):
        return f"{self.pick_up_date.strftime(DISPLAY_DATE_FORMAT)} - {self.drop_off_date.strftime(DISPLAY_DATE_FORMAT)}"

    @property
    def route_display_text(self):
        if self.is_same_drop_off:
            return self.pick_up_location_name
        return f"{self.pick_up_location_name} to {self.drop_off_location_name or ''}"

    @property
    def api_pick_up_date(self):
        return to_api_datetime(self.pick_up_datetime)

    @property
    def api_drop_off_date(self):
        return to_api_datetime(self.drop_off_datetime)
