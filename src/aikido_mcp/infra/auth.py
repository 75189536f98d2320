from __future__ import annotations

from typing import Optional

import httpx

from ..core.domain.exceptions import ApiConnectionError, AuthConfigurationError, AuthExchangeError
from ..core.domain.models import Token
from ..core.ports import ClockPort, LoggerPort


TOKEN_PATH = "/oauth/token"
EXPIRY_SKEW_SECONDS = 60.0


class TokenManager:
    """Client-credentials token cache for the Aikido API.

    The token is exchanged lazily on first use and again once it is within
    60 seconds of expiry. There is no lock: two overlapping refreshes only
    cost one extra exchange.
    """

    def __init__(
        self,
        *,
        base_url: str,
        client_id: Optional[str],
        client_secret: Optional[str],
        http: httpx.Client,
        clock: ClockPort,
        logger: LoggerPort,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client_id = client_id
        self._client_secret = client_secret
        self._http = http
        self._clock = clock
        self._logger = logger
        self._token: Token | None = None

    @property
    def cached_token(self) -> Token | None:
        return self._token

    def get_access_token(self) -> str:
        now = self._clock.now()
        if self._token is not None and self._token.is_usable(now, EXPIRY_SKEW_SECONDS):
            self._logger.debug("token_cache_hit", expires_at=self._token.expires_at)
            return self._token.access_token

        if not self._client_id or not self._client_secret:
            raise AuthConfigurationError()

        self._token = self._exchange()
        return self._token.access_token

    def _exchange(self) -> Token:
        url = f"{self._base_url}{TOKEN_PATH}"
        self._logger.info("token_exchange", type="token_exchange", url=url)

        try:
            response = self._http.post(
                url,
                auth=httpx.BasicAuth(self._client_id or "", self._client_secret or ""),
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                json={"grant_type": "client_credentials"},
            )
        except httpx.TransportError as e:
            raise ApiConnectionError(url, str(e) or type(e).__name__) from e

        if not response.is_success:
            self._logger.error(
                "token_exchange_failed",
                type="token_exchange_failed",
                status_code=response.status_code,
            )
            raise AuthExchangeError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict) or "access_token" not in data or "expires_in" not in data:
            raise AuthExchangeError(response.status_code, response.text)

        try:
            expires_in = float(data["expires_in"])
        except (TypeError, ValueError) as e:
            raise AuthExchangeError(response.status_code, response.text) from e

        self._logger.info("token_exchanged", type="token_exchanged", expires_in=expires_in)
        return Token(access_token=data["access_token"], expires_at=self._clock.now() + expires_in)
