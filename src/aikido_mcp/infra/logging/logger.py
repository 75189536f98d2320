from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from dependency_injector.resources import Resource

from .handlers import build_json_file_handler, build_human_console_handler


class AppLogger(Resource):
    """Structured logger for the MCP server.

    Event-style messages (``token_exchanged``, ``tool_call``) with structured
    fields passed as keyword arguments. Output goes to an optional JSON lines
    file and an optional human-readable stderr stream.
    """

    def init(
        self,
        *,
        log_file: Path | None = None,
        logger_name: str = "aikido_mcp",
        console_output: bool = False,
        level: str = "INFO",
    ) -> "AppLogger":
        """Initialize logger handlers.

        Args:
            log_file: JSONL file to append to (None disables file output)
            logger_name: Logger name
            console_output: Whether to log to stderr
            level: Logging level (DEBUG, INFO, WARNING, ERROR)

        Returns:
            Self for dependency_injector Resource pattern
        """
        numeric_level = getattr(logging, level.upper())

        self._logger = logging.getLogger(logger_name)
        self._logger.setLevel(numeric_level)
        self._logger.propagate = False

        self._logger.handlers.clear()
        self._handlers: list[logging.Handler] = []

        if log_file is not None:
            file_handler = build_json_file_handler(log_file, level=numeric_level)
            self._logger.addHandler(file_handler)
            self._handlers.append(file_handler)

        if console_output:
            console_handler = build_human_console_handler(level=numeric_level)
            self._logger.addHandler(console_handler)
            self._handlers.append(console_handler)

        return self

    def shutdown(self, resource: "AppLogger") -> None:
        """Flush and close all handlers."""
        for handler in self._handlers:
            handler.flush()
            handler.close()

        self._logger.handlers.clear()

    def debug(self, message: str, **fields: Any) -> None:
        self._logger.debug(message, extra=fields or None)

    def info(self, message: str, **fields: Any) -> None:
        self._logger.info(message, extra=fields or None)

    def warning(self, message: str, **fields: Any) -> None:
        self._logger.warning(message, extra=fields or None)

    def error(self, message: str, exc_info: bool = False, **fields: Any) -> None:
        self._logger.error(message, extra=fields or None, exc_info=exc_info)

    def exception(self, message: str, **fields: Any) -> None:
        """Log at ERROR level with the active exception's traceback."""
        self._logger.exception(message, extra=fields or None)
