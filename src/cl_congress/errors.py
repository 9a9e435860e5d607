"""Exceptions raised by the web service client and XML parser."""


class CongressError(Exception):
    """Base class for every error this package raises."""


class CamaraAPIError(CongressError):
    """A web service request failed after all retries."""

    def __init__(
        self,
        url: str,
        error_type: str,
        message: str,
        status_code: int | None = None,
    ):
        self.url = url
        self.error_type = error_type  # permanent, transient, timeout, connection
        self.status_code = status_code
        self.message = message
        super().__init__(f"{error_type} error fetching {url}: {message}")


class XMLParseError(CongressError):
    """A response body was not the XML document the endpoint should return."""
