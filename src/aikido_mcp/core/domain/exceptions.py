"""Domain exceptions for aikido_mcp."""

from __future__ import annotations


class AikidoError(Exception):
    """Base class for every error raised while serving a tool call."""


class AuthConfigurationError(AikidoError):
    """Raised when the client id or client secret is not configured.

    Detected before any network call is attempted.
    """

    def __init__(self, message: str | None = None) -> None:
        if message is None:
            message = (
                "Missing Aikido credentials: set AIKIDO_CLIENT_ID and AIKIDO_API_KEY "
                "(or AIKIDO_MCP_CREDENTIALS__CLIENT_ID / AIKIDO_MCP_CREDENTIALS__CLIENT_SECRET)"
            )
        super().__init__(message)


class AuthExchangeError(AikidoError):
    """Raised when the client-credentials exchange returns a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Failed to get access token: {status_code} - {body}")


class ApiRequestError(AikidoError):
    """Raised when an API call returns a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Aikido API error: {status_code} - {body}")


class ApiConnectionError(AikidoError):
    """Raised when the transport fails before any HTTP status is received."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Could not reach Aikido API ({url}): {reason}")


class ApiResponseError(AikidoError):
    """Raised when a response body does not match the expected record shape."""

    def __init__(self, endpoint: str, detail: str) -> None:
        self.endpoint = endpoint
        self.detail = detail
        super().__init__(f"Unexpected response from {endpoint}: {detail}")


class UnknownToolError(AikidoError):
    """Raised when a tool name is not present in the catalog."""

    def __init__(self, tool: str) -> None:
        self.tool = tool
        super().__init__(f"Unknown tool: {tool}")


class ToolArgumentError(AikidoError):
    """Raised when tool arguments fail validation."""

    def __init__(self, tool: str, detail: str) -> None:
        self.tool = tool
        self.detail = detail
        super().__init__(f"Invalid arguments for {tool}: {detail}")
