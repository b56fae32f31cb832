from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AuthProvider(str, Enum):
    GOOGLE = "google"
    FACEBOOK = "facebook"
    APPLE = "apple"
    EMAIL = "email"

    @property
    def display_name(self):
        return self.value.capitalize()


class User(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: str = ""
    name: str = "User"
    profile_image_url: Optional[str] = Field(default=None, alias="profileImageURL")
    provider: AuthProvider = AuthProvider.EMAIL
    created_at: datetime = Field(default_factory=datetime.now, alias="createdAt")
    last_login_at: datetime = Field(default_factory=datetime.now, alias="lastLoginAt")


class AuthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user: User
    access_token: str = Field(alias="accessToken")
    refresh_token: Optional[str] = Field(default=None, alias="refreshToken")
    expires_in: float = Field(alias="expiresIn")


class UserEventType(str, Enum):
    APP_LAUNCH = "app_launch"
    FLIGHT_SEARCH = "flight_search"
    HOTEL_SEARCH = "hotel_search"
    RENTAL_SEARCH = "rental_search"


class UserVertical(str, Enum):
    GENERAL = "general"
    FLIGHT = "flight"
    HOTEL = "hotel"
    RENTAL = "rental"


class UserCreationRequest(BaseModel):
    device_id: str
    device_id_type: str = "idfa"
    app: str = "d1_ios_sflight"
    vendor_id: str
    pseudo_id: str
    email: Optional[str] = None
    acquired_route: str = "organic"
    referrer_url: Optional[str] = None


class UserCreationResponse(BaseModel):
    user_id: int


class SessionCreationRequest(BaseModel):
    user_id: int
    type: str = "api"
    tag: str
    route: str = "organic"
    vertical: str = UserVertical.GENERAL.value
    country_code: str
    ad_id: Optional[str] = None
    adgroup_id: Optional[str] = None
    campaign_id: Optional[str] = None
    campaign_group_id: Optional[str] = None
    account_id: Optional[str] = None
    ad_objective_name: Optional[str] = None
    gclid: Optional[str] = None
    fbclid: Optional[str] = None
    msclkid: Optional[str] = None


class SessionCreationResponse(BaseModel):
    user_session_id: int
