"""Error kinds and graceful-degradation helpers for Recipe Finder service.

Error kinds map to HTTP outcomes in src/api/routes.py:
- InvalidPayloadError: 400 with a specific message
- UpstreamError, ParseError: 500 with a generic per-endpoint message
- ImageProviderError: never leaves the image provider (fallback URL is used)
"""

from src.utils.logger import logger


class RecipeServiceError(Exception):
    """Base class for all service errors."""


class InvalidPayloadError(RecipeServiceError):
    """A required request field is missing or empty."""


class UpstreamError(RecipeServiceError):
    """The LLM endpoint failed: non-2xx status, network error or timeout.

    The message carries the raw upstream body for logging; it is never returned to clients.
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class ParseError(RecipeServiceError):
    """The LLM response text could not be parsed as JSON."""


class ImageProviderError(RecipeServiceError):
    """The stock-photo lookup failed or returned an unusable body."""


def _log_error(operation_name: str, exception: Exception, log_level: str = "warning") -> None:
    """Log error with appropriate level."""
    msg = f"{operation_name}: {exception}"
    if log_level == "debug":
        logger.debug(msg)
    elif log_level == "error":
        logger.error(msg)
    else:
        logger.warning(msg)


async def safe_execute_async(
    coro,
    operation_name: str,
    log_level: str = "warning",
    default_return=None,
    reraise: bool = False,
):
    """Safely execute async operation with consistent error logging.

    Used for optional operations that should degrade gracefully, such as the
    stock-photo lookup that falls back to a generated image URL.

    Args:
        coro: Awaitable coroutine to execute.
        operation_name: Description for logging (e.g., "Stock photo search").
        log_level: Logging level ("debug", "warning", "error"). Default: "warning".
        default_return: Value to return on exception. Default: None.
        reraise: If True, re-raise exception after logging. Default: False.

    Returns:
        Result of coroutine if successful, default_return on exception if reraise=False.

    Raises:
        Exception: Original exception if reraise=True.
    """
    try:
        return await coro
    except Exception as e:
        _log_error(operation_name, e, log_level)
        if reraise:
            raise
        return default_return
