from __future__ import annotations


class QuoteServiceError(RuntimeError):
    """Base class for failures talking to the remote quote service."""


class QuoteTransportError(QuoteServiceError):
    """Connection failure or other request error during the GET."""


class QuoteTimeoutError(QuoteTransportError):
    pass


class QuoteHTTPStatusError(QuoteTransportError):
    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"QUOTE_HTTP_STATUS status={status_code} url={url}")
        self.status_code = status_code
        self.url = url


class QuoteReadError(QuoteServiceError):
    """Response arrived but its body could not be read."""
