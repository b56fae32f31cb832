import os

# Keep the default engine off the working directory
os.environ.setdefault("DB_URL", "sqlite://")

import concurrent.futures

import pytest
import requests
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.db.database import create_tables
from src.db.preferences import PreferenceStore
from src.models.location import Location
from src.network.client import NetworkManager
from src.network.constants import ApiParameters

FLIGHT_URL = "https://flights.test/api"
HOTEL_URL = "https://hotels.test"
RENTAL_URL = "https://cars.test"
ADS_URL = "https://ads.test/api"


class ImmediateExecutor(concurrent.futures.Executor):
    """Runs submitted work on the calling thread so view-model tests stay deterministic."""

    def submit(self, fn, *args, **kwargs):
        future = concurrent.futures.Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except BaseException as e:
            future.set_exception(e)
        return future


@pytest.fixture
def executor():
    return ImmediateExecutor()


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    create_tables(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    return PreferenceStore(session_factory)


@pytest.fixture
def api_params():
    return ApiParameters(country="IN", currency="INR", language="en-GB", user_id="42")


@pytest.fixture
def params_provider(api_params):
    return lambda: api_params


@pytest.fixture
def manager():
    return NetworkManager(session=requests.Session(), timeout=5)


def make_location(code, name=None, type="airport"):
    return Location(
        iata_code=code,
        airport_name=f"{name or code} Airport",
        type=type,
        display_name=name or code,
        city_name=name or code,
        country_name="India",
        country_code="IN",
    )


@pytest.fixture
def delhi():
    return make_location("DEL", "Delhi")


@pytest.fixture
def mumbai():
    return make_location("BOM", "Mumbai")
