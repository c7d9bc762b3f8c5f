"""FastAPI dependencies for the application."""

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from lingonotes.config import get_settings
from lingonotes.exceptions import AIFeaturesDisabledError

F = TypeVar("F", bound=Callable[..., Any])


def require_ai_enabled(func: F) -> F:
    """
    Decorator that requires AI to be enabled for the endpoint.

    Returns HTTP 410 Gone if no AI provider is configured.

    Usage:
        @router.post("/endpoint")
        @require_ai_enabled
        async def my_endpoint():
            ...
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
        if not get_settings().ai_enabled:
            raise AIFeaturesDisabledError
        return await func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
