"""Logfire tracing for the analysis service.

Spans are only exported when Logfire is enabled in settings; otherwise
they are recorded locally and dropped.
"""

import asyncio
import functools
from typing import Any, Callable, Dict, Optional, TypeVar

import logfire
from structlog import get_logger

from ..config import Settings

logger = get_logger()

T = TypeVar("T")


def configure_logfire(settings: Settings, app_instance: Optional[Any] = None) -> None:
    """Configure Logfire from application settings.

    Args:
        settings: Application settings
        app_instance: Optional FastAPI app to instrument
    """
    logfire.configure(
        send_to_logfire=settings.logfire_enabled,
        token=settings.logfire_token,
        service_name=settings.logfire_service_name,
        environment=settings.environment,
        console=False,
    )

    if settings.logfire_enabled and app_instance is not None:
        logfire.instrument_fastapi(app_instance)

    logger.info(
        "Logfire configured",
        service_name=settings.logfire_service_name,
        export_enabled=settings.logfire_enabled,
    )


def traced(
    name: Optional[str] = None,
    capture_args: bool = True,
    **extra_attributes: Any,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator to wrap a function call in a Logfire span.

    Args:
        name: Optional span name (defaults to module.function)
        capture_args: Whether to record a short repr of the arguments
        **extra_attributes: Additional attributes to add to the span

    Returns:
        Decorated function
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        span_name = name or f"{func.__module__}.{func.__name__}"

        def span_attributes(args: tuple, kwargs: Dict[str, Any]) -> Dict[str, Any]:
            attributes = {"function": func.__name__, **extra_attributes}
            if capture_args:
                # Skip self, which is noise in every method span
                attributes["args"] = _safe_repr(args[1:] if args else args)
                attributes["kwargs"] = {k: _safe_repr(v) for k, v in kwargs.items()}
            return attributes

        if asyncio.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> T:
                with logfire.span(
                    span_name, **span_attributes(args, kwargs)
                ) as span:
                    try:
                        return await func(*args, **kwargs)
                    except Exception as e:
                        span.set_attribute("error", True)
                        span.set_attribute("error_type", type(e).__name__)
                        raise

            return async_wrapper

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> T:
            with logfire.span(
                span_name, **span_attributes(args, kwargs)
            ) as span:
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    span.set_attribute("error", True)
                    span.set_attribute("error_type", type(e).__name__)
                    raise

        return sync_wrapper

    return decorator


def _safe_repr(obj: Any, max_length: int = 200) -> str:
    """Truncated repr for span attributes."""
    repr_str = repr(obj)
    if len(repr_str) > max_length:
        return repr_str[:max_length] + "..."
    return repr_str
