from __future__ import annotations

import logging
from fastmcp.server.middleware import Middleware, MiddlewareContext
from aikido_mcp.shared.to_jsonable import to_jsonable

logger = logging.getLogger(__name__)


class WiretapLoggingMiddleware(Middleware):
    async def on_message(self, ctx: MiddlewareContext, call_next):
        # Payloads are only converted when DEBUG is on
        if logger.isEnabledFor(logging.DEBUG):
            # 'message' is reserved by logging, hence mcp_message
            logger.debug("mcp_request", extra={
                "type": "request",
                "method": ctx.method,
                "mcp_message": to_jsonable(ctx.message),
            })
        result = await call_next(ctx)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("mcp_response", extra={
                "type": "response",
                "method": ctx.method,
                "mcp_result": to_jsonable(result),
            })
        return result
