import json

import pytest
import requests
import responses
from pydantic import BaseModel

from src.network.client import HTTPMethod, is_http_url
from src.network.errors import (
    ClientError,
    ConnectionFailedError,
    DecodingError,
    InvalidURLError,
    NoDataError,
    RequestTimeoutError,
    ServerError,
)

URL = "https://api.test/items"


class Item(BaseModel):
    id: int
    name: str


@pytest.mark.parametrize("url", ["", "not a url", "ftp://host/file", "https://", None])
def test_invalid_urls_are_rejected_before_sending(manager, url):
    assert not is_http_url(url)
    with pytest.raises(InvalidURLError):
        manager.request(url)


@responses.activate
def test_decodes_json_into_model(manager):
    responses.add(responses.GET, URL, json={"id": 1, "name": "first"}, status=200)

    item = manager.get(URL, params={"q": "x"}, response_model=Item)

    assert item == Item(id=1, name="first")
    assert responses.calls[0].request.url == URL + "?q=x"
    assert responses.calls[0].request.headers["Accept"] == "application/json"


@responses.activate
def test_returns_raw_json_without_model(manager):
    responses.add(responses.GET, URL, json=[1, 2, 3])
    assert manager.get(URL) == [1, 2, 3]


@responses.activate
def test_client_error_carries_status_code(manager):
    responses.add(responses.GET, URL, json={"detail": "nope"}, status=404)

    with pytest.raises(ClientError) as excinfo:
        manager.get(URL, response_model=Item)

    assert excinfo.value.status_code == 404


@responses.activate
def test_server_error_message(manager):
    responses.add(responses.GET, URL, body="boom", status=503)

    with pytest.raises(ServerError) as excinfo:
        manager.get(URL, response_model=Item)

    assert excinfo.value.status_code == 503
    assert excinfo.value.message == "Server error with code: 503"


@responses.activate
def test_empty_body_with_model_is_no_data(manager):
    responses.add(responses.GET, URL, body=b"", status=200)
    with pytest.raises(NoDataError):
        manager.get(URL, response_model=Item)


@responses.activate
def test_non_json_body_is_decoding_error(manager):
    responses.add(responses.GET, URL, body="<html></html>", status=200)
    with pytest.raises(DecodingError):
        manager.get(URL, response_model=Item)


@responses.activate
def test_schema_mismatch_is_decoding_error(manager):
    responses.add(responses.GET, URL, json={"id": "not-a-number"}, status=200)
    with pytest.raises(DecodingError):
        manager.get(URL, response_model=Item)


@responses.activate
def test_timeout_maps_to_request_timeout(manager):
    responses.add(responses.GET, URL, body=requests.exceptions.Timeout("slow"))
    with pytest.raises(RequestTimeoutError):
        manager.get(URL)


@responses.activate
def test_transport_failure_maps_to_connection_failed(manager):
    responses.add(responses.GET, URL, body=requests.exceptions.ConnectionError("refused"))
    with pytest.raises(ConnectionFailedError) as excinfo:
        manager.get(URL)
    assert "refused" in excinfo.value.message


@responses.activate
def test_post_encodes_models_by_alias_and_drops_nones(manager):
    class Body(BaseModel):
        cabin: str
        note: str = None

    responses.add(responses.POST, URL, json={"id": 2, "name": "second"})

    manager.post(URL, body=Body(cabin="economy"), response_model=Item)

    sent = json.loads(responses.calls[0].request.body)
    assert sent == {"cabin": "economy"}
    assert responses.calls[0].request.method == HTTPMethod.POST.value


@responses.activate
def test_single_attempt_per_request(manager):
    responses.add(responses.GET, URL, status=500)
    with pytest.raises(ServerError):
        manager.get(URL)
    assert len(responses.calls) == 1
