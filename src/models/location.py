from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LocationType(str, Enum):
    CITY = "city"
    AIRPORT = "airport"


class Coordinates(BaseModel):
    latitude: str
    longitude: str


class Location(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    iata_code: str = Field(alias="iataCode")
    airport_name: str = Field(default="", alias="airportName")
    type: str = LocationType.AIRPORT.value
    display_name: str = Field(alias="displayName")
    city_name: str = Field(default="", alias="cityName")
    country_name: str = Field(default="", alias="countryName")
    country_code: str = Field(default="", alias="countryCode")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    coordinates: Coordinates = Field(default_factory=lambda: Coordinates(latitude="0", longitude="0"))

    @property
    def is_city(self):
        return self.type == LocationType.CITY.value


class LocationResponse(BaseModel):
    data: List[Location] = Field(default_factory=list)
    language: str = ""
