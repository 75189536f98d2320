from __future__ import annotations

import time
from typing import Any, Mapping, Optional, Protocol, Sequence


QueryParams = Sequence[tuple[str, str]]


class ClockPort(Protocol):
    """Port for reading wall-clock time in seconds since the epoch."""

    def now(self) -> float:
        ...


class TokenProviderPort(Protocol):
    """Port for obtaining a bearer token for the remote API."""

    def get_access_token(self) -> str:
        """Return a token valid for at least the next 60 seconds.

        Raises:
            AuthConfigurationError: If credentials are not configured
            AuthExchangeError: If the token exchange is rejected
        """
        ...


class AikidoApiPort(Protocol):
    """Port for authenticated calls against the public API."""

    def request(
        self,
        endpoint: str,
        *,
        method: str = "GET",
        params: Optional[QueryParams] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """Issue a request and return the parsed JSON body.

        Args:
            endpoint: Path below the public API root, e.g. "/issues/42"
            method: HTTP method
            params: Query parameters as (key, value) pairs; keys may repeat
            headers: Extra headers (never replace Authorization)

        Raises:
            ApiRequestError: On any non-2xx response
        """
        ...


class LoggerPort(Protocol):
    """Port for structured logging.

    Event-style messages with structured fields passed as keyword arguments.
    """

    def debug(self, message: str, **fields: Any) -> None:
        ...

    def info(self, message: str, **fields: Any) -> None:
        ...

    def warning(self, message: str, **fields: Any) -> None:
        ...

    def error(self, message: str, exc_info: bool = False, **fields: Any) -> None:
        ...

    def exception(self, message: str, **fields: Any) -> None:
        ...


class SystemClock:
    def now(self) -> float:
        return time.time()
