from .app.main import call_tool, list_tools, serve

__all__ = [
    "call_tool",
    "list_tools",
    "serve",
]

# stdlib logging defaults: attach NullHandler to prevent 'No handler' warnings
import logging
_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())
