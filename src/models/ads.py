from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SessionResponse(BaseModel):
    sid: str


class AdResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rank: int
    background_image_url: str = Field(default="", alias="backgroundImageUrl")
    impression_url: str = Field(default="", alias="impressionUrl")
    booking_button_text: str = Field(default="", alias="bookingButtonText")
    product_type: str = Field(default="", alias="productType")
    headline: str
    site: str = ""
    company_name: str = Field(default="", alias="companyName")
    logo_url: str = Field(default="", alias="logoUrl")
    track_url: Optional[str] = Field(default=None, alias="trackUrl")
    deep_link: str = Field(alias="deepLink")
    description: str = ""


class AdsResponseWrapper(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    inline_items: List[AdResponse] = Field(default_factory=list, alias="inlineItems")


class FlightLegModelAds(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str
    destination_airport: str = Field(alias="destinationAirport")
    origin_airport: str = Field(alias="originAirport")


class FlightSearchRequestAds(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cabin_class: str = Field(default="economy", alias="cabinClass")
    legs: List[FlightLegModelAds]
    passengers: List[str] = Field(default_factory=lambda: ["adult"])
