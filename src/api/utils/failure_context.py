from collections.abc import Awaitable, Callable
import functools
import logging
from typing import ParamSpec, TypeVar

from core.exceptions import BlogException, ServerError, map_exception_to_http

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


def failure_context(context: str, *, log_failure: bool = False):
    """Decorator for request handlers reporting unexpected failures as ServerError.

    Client errors (a BlogException mapped below 500, such as NotFoundError)
    pass through untouched. Anything else is re-raised as
    ServerError whose message is ``"<context>: <original message>"``.

    Args:
        context: Short static prefix for the failure message
        log_failure: Log the failure with its traceback before re-raising
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                if isinstance(e, BlogException) and map_exception_to_http(e).status_code < 500:
                    raise
                if log_failure:
                    logger.exception("%s: %s", context, e)
                raise ServerError(message=f"{context}: {e}") from e

        return wrapper

    return decorator


__all__ = ["failure_context"]
