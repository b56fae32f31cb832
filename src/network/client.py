import json
import logging
from enum import Enum
from urllib.parse import urlparse

import requests
from pydantic import BaseModel, ValidationError

from src.network.constants import ACCEPT_JSON, CONTENT_TYPE_JSON, REQUEST_TIMEOUT
from src.network.errors import (
    ClientError,
    ConnectionFailedError,
    DecodingError,
    EncodingError,
    InvalidResponseError,
    InvalidURLError,
    NoDataError,
    RequestTimeoutError,
    ServerError,
)

# Get logger
logger = logging.getLogger(__name__)


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


def is_http_url(url):
    if not url or not isinstance(url, str):
        return False
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class NetworkManager:
    """Performs a single JSON request and decodes the body into a pydantic model.

    Exactly one attempt is made per call. Transport failures, non-2xx
    statuses and undecodable bodies are all reported as ``NetworkError``
    subclasses so callers only have to handle one family of exceptions.
    """

    def __init__(self, session=None, timeout=REQUEST_TIMEOUT):
        self.session = session or requests.Session()
        self.timeout = timeout

    def default_headers(self):
        return {
            "Accept": ACCEPT_JSON,
            "Content-Type": CONTENT_TYPE_JSON,
        }

    def send(
        self, url, method=HTTPMethod.GET, headers=None, params=None, body=None, allow_redirects=True, timeout=None
    ):
        """Send the request and return the raw ``requests.Response`` after the status check."""
        if not is_http_url(url):
            raise InvalidURLError()

        merged_headers = self.default_headers()
        if headers:
            merged_headers.update(headers)

        payload = None
        if body is not None:
            try:
                if isinstance(body, BaseModel):
                    payload = body.model_dump_json(by_alias=True, exclude_none=True)
                elif isinstance(body, (bytes, str)):
                    payload = body
                else:
                    payload = json.dumps(body)
            except (TypeError, ValueError) as e:
                raise EncodingError() from e

        timeout = timeout or self.timeout
        method_value = method.value if isinstance(method, HTTPMethod) else str(method).upper()
        logger.debug(f"{method_value} {url} params={params}")

        try:
            response = self.session.request(
                method_value,
                url,
                headers=merged_headers,
                params=params,
                data=payload,
                timeout=timeout,
                allow_redirects=allow_redirects,
            )
        except requests.exceptions.Timeout as e:
            logger.warning(f"Request to {url} timed out after {timeout}s")
            raise RequestTimeoutError() from e
        except requests.exceptions.InvalidURL as e:
            raise InvalidURLError() from e
        except requests.exceptions.RequestException as e:
            logger.warning(f"Network error for {url}: {e}")
            raise ConnectionFailedError(str(e)) from e

        if response is None or not hasattr(response, "status_code"):
            raise InvalidResponseError()

        status = response.status_code
        if not 200 <= status <= 299:
            logger.error(f"HTTP {status} from {url}: {response.text[:500]}")
            if 400 <= status < 500:
                raise ClientError(status)
            raise ServerError(status)

        return response

    def request(
        self, url, method=HTTPMethod.GET, headers=None, params=None, body=None, response_model=None, timeout=None
    ):
        response = self.send(url, method=method, headers=headers, params=params, body=body, timeout=timeout)

        if not response.content:
            if response_model is not None:
                raise NoDataError()
            return None

        try:
            data = response.json()
        except ValueError as e:
            raise DecodingError(str(e)) from e

        if response_model is None:
            return data

        try:
            return response_model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Validation error decoding {response_model.__name__}: {e.errors()}")
            raise DecodingError(str(e)) from e

    def get(self, url, headers=None, params=None, response_model=None, timeout=None):
        return self.request(
            url, method=HTTPMethod.GET, headers=headers, params=params, response_model=response_model, timeout=timeout
        )

    def post(self, url, body=None, headers=None, params=None, response_model=None, timeout=None):
        return self.request(
            url,
            method=HTTPMethod.POST,
            headers=headers,
            params=params,
            body=body,
            response_model=response_model,
            timeout=timeout,
        )


network_manager = NetworkManager()
