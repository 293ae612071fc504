import time
import asyncio
from functools import wraps
from typing import Any, Callable, Dict, Optional
from utils.logging import get_logger

def _log_finished(logger, service_name: str, duration: float, result: Any,
                  summarize: Optional[Callable[[Any], Dict[str, Any]]]):
    context = {"duration_seconds": duration}
    if summarize is not None:
        context.update(summarize(result))
    logger.info(f"Finished service: {service_name}. Duration: {duration:.3f} seconds",
                extra={"context": context})

def time_it(service_name: str, summarize: Optional[Callable[[Any], Dict[str, Any]]] = None):
    """
    A decorator to log the execution time of a function.
    Works with both sync and async functions.

    Args:
        service_name: Logger name and label used in the log messages
        summarize: Optional callable turning the function's result into
            extra context fields for the "Finished service" record
    """
    def decorator(func):
        if asyncio.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                logger = get_logger(service_name)
                start_time = time.perf_counter()
                logger.info(f"Starting service: {service_name}")

                result = await func(*args, **kwargs)

                _log_finished(logger, service_name, time.perf_counter() - start_time, result, summarize)
                return result
            return async_wrapper
        else:
            @wraps(func)
            def sync_wrapper(*args, **kwargs):
                logger = get_logger(service_name)
                start_time = time.perf_counter()
                logger.info(f"Starting service: {service_name}")

                result = func(*args, **kwargs)

                _log_finished(logger, service_name, time.perf_counter() - start_time, result, summarize)
                return result
            return sync_wrapper
    return decorator
