"""
Base service class for Based Dropouts services.

This module provides a base class with common functionality for fallback
handling, logging and timing.
"""

import logging
import time
from typing import Any, Awaitable, Optional, Tuple, Type, TypeVar

from based_dropouts.logging_config import log_with_context

T = TypeVar('T')


class BaseService:
    """
    Base service class with common functionality.

    This class provides:
    - Fallback values for failed operations
    - Contextual logging
    - Timing of operations
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the base service.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    async def execute_with_fallback(
        self,
        coro: Awaitable[T],
        fallback_value: T,
        error_message: str = "Operation failed",
        exceptions: Tuple[Type[BaseException], ...] = (Exception,),
    ) -> T:
        """
        Await a coroutine, substituting a fallback value if it fails.

        Args:
            coro: The coroutine to await
            fallback_value: Value returned when the coroutine raises
            error_message: Message logged with the error
            exceptions: Exception types that trigger the fallback; others propagate

        Returns:
            The coroutine's result or the fallback value
        """
        try:
            return await coro
        except exceptions as e:
            self.logger.warning(f"{error_message}: {str(e)}")
            return fallback_value

    def log_with_context(self, level: str, message: str, **context: Any) -> None:
        """
        Log a message with key/value context.

        Args:
            level: Log level name
            message: Log message
            **context: Context appended to the message
        """
        log_with_context(self.logger, level, message, **context)

    def log_timing(self, operation_name: str) -> "TimingContextManager":
        """
        Create a context manager to log timing information.

        Args:
            operation_name: Name of the operation

        Returns:
            Timing context manager
        """
        return TimingContextManager(operation_name, self.logger)


class TimingContextManager:
    """Context manager to log timing information."""

    def __init__(self, operation_name: str, logger: logging.Logger):
        self.operation_name = operation_name
        self.logger = logger
        self.start_time = 0.0

    async def __aenter__(self) -> "TimingContextManager":
        self.start_time = time.perf_counter()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        elapsed = time.perf_counter() - self.start_time
        if exc_val is not None:
            self.logger.error(
                f"{self.operation_name} failed after {elapsed:.2f}s: {str(exc_val)}"
            )
        else:
            self.logger.debug(f"{self.operation_name} completed in {elapsed:.2f}s")
