from datetime import datetime

from pydantic import BaseModel, Field

from src.models.location import Coordinates, Location


class RecentLocation(BaseModel):
    iata_code: str
    airport_name: str = ""
    display_name: str = ""
    city_name: str = ""
    country_name: str = ""
    type: str = "airport"
    search_count: int = 1
    last_searched: datetime = Field(default_factory=datetime.now)

    @classmethod
    def from_location(cls, location, search_count=1):
        return cls(
            iata_code=location.iata_code,
            airport_name=location.airport_name,
            display_name=location.display_name,
            city_name=location.city_name,
            country_name=location.country_name,
            type=location.type,
            search_count=search_count,
        )

    def to_location(self):
        # Country code, image and coordinates are not kept for recents
        return Location(
            iata_code=self.iata_code,
            airport_name=self.airport_name,
            type=self.type,
            display_name=self.display_name,
            city_name=self.city_name,
            country_name=self.country_name,
            country_code="",
            image_url="",
            coordinates=Coordinates(latitude="0", longitude="0"),
        )


class RecentSearchPair(BaseModel):
    origin: RecentLocation
    destination: RecentLocation
    search_count: int = 1
    search_date: datetime = Field(default_factory=datetime.now)
