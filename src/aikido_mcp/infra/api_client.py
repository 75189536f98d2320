from __future__ import annotations

from typing import Any, Mapping, Optional

import httpx

from ..core.domain.exceptions import ApiConnectionError, ApiRequestError, ApiResponseError
from ..core.ports import LoggerPort, QueryParams, TokenProviderPort


PUBLIC_API_PREFIX = "/public/v1"


class AikidoApiClient:
    """Authenticated JSON client for the Aikido public API.

    No retries and no timeout beyond the httpx default: every call belongs to a
    single tool invocation and a failure is reported to the caller right away.
    """

    def __init__(
        self,
        *,
        base_url: str,
        tokens: TokenProviderPort,
        http: httpx.Client,
        logger: LoggerPort,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._tokens = tokens
        self._http = http
        self._logger = logger

    def request(
        self,
        endpoint: str,
        *,
        method: str = "GET",
        params: Optional[QueryParams] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        token = self._tokens.get_access_token()
        url = f"{self._base_url}{PUBLIC_API_PREFIX}{endpoint}"

        merged = {"Accept": "application/json"}
        merged.update(headers or {})
        # Caller headers never replace the bearer credential
        for key in [k for k in merged if k.lower() == "authorization"]:
            del merged[key]
        merged["Authorization"] = f"Bearer {token}"

        self._logger.debug("api_request", method=method, endpoint=endpoint, params=list(params or []))
        try:
            response = self._http.request(method, url, params=list(params or []), headers=merged)
        except httpx.TransportError as e:
            raise ApiConnectionError(url, str(e) or type(e).__name__) from e

        if not response.is_success:
            self._logger.warning(
                "api_error",
                type="api_error",
                method=method,
                endpoint=endpoint,
                status_code=response.status_code,
            )
            raise ApiRequestError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise ApiResponseError(endpoint, "body is not valid JSON") from e
