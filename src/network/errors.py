"""Errors raised by the HTTP layer and shown to users as plain strings."""


class NetworkError(Exception):
    message = "An unknown error occurred"

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidURLError(NetworkError):
    message = "Invalid URL"


class InvalidResponseError(NetworkError):
    message = "Invalid response"


class NoDataError(NetworkError):
    message = "No data received"


class EncodingError(NetworkError):
    message = "Failed to encode request"


class DecodingError(NetworkError):
    def __init__(self, detail=""):
        self.detail = detail
        super().__init__(f"Failed to decode response: {detail}" if detail else "Failed to decode response")


class HTTPStatusError(NetworkError):
    def __init__(self, status_code, message):
        self.status_code = status_code
        super().__init__(message)


class ServerError(HTTPStatusError):
    def __init__(self, status_code):
        super().__init__(status_code, f"Server error with code: {status_code}")


class ClientError(HTTPStatusError):
    def __init__(self, status_code):
        super().__init__(
            status_code,
            f"Request error (code: {status_code}). Please check your search parameters.",
        )


class RequestTimeoutError(NetworkError):
    message = "The request timed out. Please try again."


class ConnectionFailedError(NetworkError):
    def __init__(self, detail=""):
        self.detail = detail
        super().__init__(f"Network error: {detail}" if detail else "Network connection failed")


class InvalidDeeplinkError(NetworkError):
    message = "Invalid search result. Please try again."


class SearchFailedError(NetworkError):
    message = "Search failed. Please try different dates or location."
