from typing import Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from src.models.profile import DEFAULT_CURRENCY_INFO
from src.utils.dates import format_epoch_time
from src.utils.formatting import format_amount


# Search request / response

class SearchLeg(BaseModel):
    origin: str
    destination: str
    date: str  # YYYY-MM-DD


class SearchRequest(BaseModel):
    legs: List[SearchLeg]
    cabin_class: str = "economy"
    adults: int = 1
    children_ages: List[int] = Field(default_factory=list)


class SearchResponse(BaseModel):
    search_id: str
    language: str = ""
    currency: str = ""
    mode: int = 0


# Poll request

class TimeRange(BaseModel):
    min: int
    max: int


class ArrivalDepartureRange(BaseModel):
    arrival: TimeRange
    departure: TimeRange


class PollRequest(BaseModel):
    """Filters for a poll call. Every field is optional; unset means "no filter"."""

    duration_max: Optional[int] = None
    stop_count_min: Optional[int] = None
    stop_count_max: Optional[int] = None
    arrival_departure_ranges: Optional[List[ArrivalDepartureRange]] = None
    iata_codes_exclude: Optional[List[str]] = None
    iata_codes_include: Optional[List[str]] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None
    agency_exclude: Optional[List[str]] = None
    agency_include: Optional[List[str]] = None
    price_min: Optional[int] = None
    price_max: Optional[int] = None

    def has_filters(self):
        return bool(self.to_payload())

    def to_payload(self):
        """Body for the poll endpoint: only what the user actually selected."""
        payload = {}
        if self.duration_max is not None:
            payload["duration_max"] = self.duration_max
        if self.stop_count_min is not None:
            payload["stop_count_min"] = self.stop_count_min
        if self.stop_count_max is not None:
            payload["stop_count_max"] = self.stop_count_max
        if self.arrival_departure_ranges:
            payload["arrival_departure_ranges"] = [r.model_dump() for r in self.arrival_departure_ranges]
        for key in ("iata_codes_include", "iata_codes_exclude", "agency_include", "agency_exclude"):
            values = getattr(self, key)
            if values:
                payload[key] = list(values)
        if self.sort_by is not None:
            payload["sort_by"] = self.sort_by
        if self.sort_order is not None:
            payload["sort_order"] = self.sort_order
        if self.price_min is not None:
            payload["price_min"] = self.price_min
        if self.price_max is not None:
            payload["price_max"] = self.price_max
        return payload


# Poll response

class Airline(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    airline_name: str = Field(alias="airlineName")
    airline_iata: str = Field(alias="airlineIata")
    airline_logo: str = Field(default="", alias="airlineLogo")


class Agency(BaseModel):
    code: str
    name: str
    image: str = ""


class FlightSummary(BaseModel):
    price: float
    duration: int


class SplitProvider(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    image_url: str = Field(default="", alias="imageURL")
    price: float
    deeplink: str
    rating: Optional[float] = None
    rating_count: Optional[int] = Field(default=None, alias="ratingCount")
    fare_family: Optional[Union[Dict[str, str], str]] = Field(default=None, alias="fareFamily")


class Provider(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_split: bool = Field(default=False, alias="isSplit")
    transfer_type: Optional[str] = Field(default=None, alias="transferType")
    price: float
    split_providers: List[SplitProvider] = Field(default_factory=list, alias="splitProviders")

    @property
    def best_deeplink(self):
        if not self.split_providers:
            return None
        return self.split_providers[0].deeplink


class FlightSegment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    arrive_time_airport: int = Field(alias="arriveTimeAirport")
    departure_time_airport: int = Field(alias="departureTimeAirport")
    duration: int
    flight_number: str = Field(alias="flightNumber")
    airline_name: str = Field(alias="airlineName")
    airline_iata: str = Field(alias="airlineIata")
    airline_logo: str = Field(default="", alias="airlineLogo")
    origin_code: str = Field(alias="originCode")
    origin: str
    destination_code: str = Field(alias="destinationCode")
    destination: str
    arrival_day_difference: int = 0
    wifi: bool = False
    cabin_class: Optional[str] = Field(default=None, alias="cabinClass")
    aircraft: Optional[str] = None


class FlightLeg(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    arrive_time_airport: int = Field(alias="arriveTimeAirport")
    departure_time_airport: int = Field(alias="departureTimeAirport")
    duration: int
    origin: str
    origin_code: str = Field(alias="originCode")
    destination: str
    destination_code: str = Field(alias="destinationCode")
    stop_count: int = Field(
        default=0,
        alias="stopCount",
        validation_alias=AliasChoices("stopCount", "stop_count"),
    )
    segments: List[FlightSegment] = Field(default_factory=list)

    @property
    def formatted_departure_time(self):
        return format_epoch_time(self.departure_time_airport)

    @property
    def formatted_arrival_time(self):
        return format_epoch_time(self.arrive_time_airport)

    @property
    def stops_text(self):
        if self.stop_count == 0:
            return "Non-stop"
        if self.stop_count == 1:
            return "1 Stop"
        return f"{self.stop_count} Stops"


class FlightResult(BaseModel):
    id: str
    total_duration: int
    min_price: float
    max_price: float
    legs: List[FlightLeg] = Field(default_factory=list)
    providers: List[Provider] = Field(default_factory=list)
    is_best: bool = False
    is_cheapest: bool = False
    is_fastest: bool = False

    @property
    def formatted_duration(self):
        return f"{self.total_duration // 60}h {self.total_duration % 60}m"

    def formatted_price(self, currency=None):
        return format_amount(self.min_price, currency or DEFAULT_CURRENCY_INFO, decimal_digits=0)


class PollResponse(BaseModel):
    count: int = 0
    next: Optional[str] = None
    previous: Optional[str] = None
    cache: bool = False
    passenger_count: int = 1
    airlines: List[Airline] = Field(default_factory=list)
    agencies: List[Agency] = Field(default_factory=list)
    min_duration: int = 0
    max_duration: int = 0
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    cheapest_flight: Optional[FlightSummary] = None
    best_flight: Optional[FlightSummary] = None
    fastest_flight: Optional[FlightSummary] = None
    results: List[FlightResult] = Field(default_factory=list)

    @property
    def has_next_page(self):
        return self.next is not None
