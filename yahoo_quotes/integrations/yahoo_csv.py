from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import urlencode, urlsplit, urlunsplit

import requests
from urllib3.exceptions import ReadTimeoutError

from yahoo_quotes.config.settings import DEFAULT_BASE_URL, Settings
from yahoo_quotes.errors import (
    QuoteHTTPStatusError,
    QuoteReadError,
    QuoteTimeoutError,
    QuoteTransportError,
)
from yahoo_quotes.integrations.quote_parser import FORMAT_CODE, parse_quotes
from yahoo_quotes.schemas.quote import Quote

logger = logging.getLogger(__name__)

# small reads so the fetch deadline is checked between socket reads
READ_CHUNK_SIZE = 1


class YahooQuoteClient:
    """Yahoo Finance CSV quote client: one GET per batch of symbols."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[Any] = None,
        timeout: float = 5.0,
    ) -> None:
        self.base_url = base_url
        self.session = session or requests
        self.timeout = timeout

    @classmethod
    def from_settings(
        cls, settings: Settings, session: Optional[Any] = None
    ) -> "YahooQuoteClient":
        return cls(
            base_url=settings.YAHOO_QUOTES_BASE_URL,
            session=session,
            timeout=settings.YAHOO_QUOTES_TIMEOUT_SEC,
        )

    @staticmethod
    def build_parameters(symbols: Sequence[str]) -> Dict[str, str]:
        return {"s": "+".join(symbols), "f": FORMAT_CODE}

    def build_request_url(self, symbols: Sequence[str]) -> str:
        parts = urlsplit(self.base_url)
        # "+" separates symbols on the wire and must not become %2B
        query = urlencode(self.build_parameters(symbols), safe="+")
        if parts.query:
            query = f"{parts.query}&{query}"
        return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))

    @staticmethod
    def _is_read_timeout(exc: Exception) -> bool:
        if isinstance(exc, requests.exceptions.Timeout):
            return True
        # streamed reads surface socket timeouts as ConnectionError(ReadTimeoutError)
        return isinstance(exc, requests.exceptions.ConnectionError) and any(
            isinstance(arg, ReadTimeoutError) for arg in exc.args
        )

    def _read_body(self, response: Any, url: str, deadline: float) -> str:
        chunks: List[bytes] = []
        try:
            for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE):
                chunks.append(chunk)
                if time.monotonic() > deadline:
                    logger.warning("[QUOTE][read_deadline] url=%s timeout=%s", url, self.timeout)
                    raise QuoteTimeoutError(f"QUOTE_TIMEOUT url={url}")
            return b"".join(chunks).decode(response.encoding or "utf-8", errors="replace")
        except requests.exceptions.RequestException as exc:
            if self._is_read_timeout(exc):
                logger.warning("[QUOTE][read_timeout] url=%s timeout=%s", url, self.timeout)
                raise QuoteTimeoutError(f"QUOTE_TIMEOUT url={url}") from exc
            logger.warning("[QUOTE][read_error] url=%s error=%s", url, exc)
            raise QuoteReadError(f"QUOTE_READ url={url}") from exc
        except LookupError as exc:
            logger.warning("[QUOTE][read_error] url=%s error=%s", url, exc)
            raise QuoteReadError(f"QUOTE_READ url={url}") from exc

    def _get_body(self, url: str) -> str:
        deadline = time.monotonic() + self.timeout
        try:
            response = self.session.get(url, timeout=self.timeout, stream=True)
        except requests.exceptions.Timeout as exc:
            logger.warning("[QUOTE][fetch_timeout] url=%s timeout=%s", url, self.timeout)
            raise QuoteTimeoutError(f"QUOTE_TIMEOUT url={url}") from exc
        except requests.exceptions.RequestException as exc:
            logger.warning("[QUOTE][fetch_error] url=%s error=%s", url, exc)
            raise QuoteTransportError(f"QUOTE_TRANSPORT url={url}") from exc

        try:
            status_code = response.status_code
            if not 200 <= status_code < 300:
                logger.warning("[QUOTE][fetch_status] url=%s status=%s", url, status_code)
                raise QuoteHTTPStatusError(status_code, url)
            return self._read_body(response, url, deadline)
        finally:
            response.close()

    def get_quotes(self, symbols: Sequence[str]) -> List[Quote]:
        url = self.build_request_url(symbols)
        logger.debug("[QUOTE][fetch_start] url=%s", url)

        quotes = parse_quotes(self._get_body(url))

        logger.info(
            "[QUOTE][fetch_done] requested=%d rows=%d", len(symbols), len(quotes)
        )
        return quotes
