"""Unit tests for BaseService.

This module tests the base service functionality.
"""

import pytest
from unittest.mock import MagicMock

from based_dropouts.services.base_service import BaseService
from based_dropouts.utils.errors import NetworkFailureError


class TestBaseService:
    """Test suite for BaseService."""

    @pytest.fixture
    def base_service(self):
        """Create a BaseService instance for testing."""
        return BaseService()

    @pytest.mark.asyncio
    async def test_execute_with_fallback_success(self, base_service):
        """Test execute_with_fallback when the coroutine succeeds."""
        # Setup
        async def success_coro():
            return "success"

        # Execute
        result = await base_service.execute_with_fallback(
            success_coro(),
            fallback_value="fallback"
        )

        # Verify
        assert result == "success"

    @pytest.mark.asyncio
    async def test_execute_with_fallback_failure(self, base_service):
        """Test execute_with_fallback when the coroutine fails."""
        # Setup
        async def fail_coro():
            raise NetworkFailureError("Test error")

        base_service.logger = MagicMock()

        # Execute
        result = await base_service.execute_with_fallback(
            fail_coro(),
            fallback_value="fallback",
            error_message="Operation failed",
            exceptions=(NetworkFailureError,),
        )

        # Verify
        assert result == "fallback"
        base_service.logger.warning.assert_called_once()
        args, _ = base_service.logger.warning.call_args
        assert args[0].startswith("Operation failed: [NETWORK_FAILURE] Test error")

    @pytest.mark.asyncio
    async def test_execute_with_fallback_propagates_other_errors(self, base_service):
        """Test that exceptions outside the given types propagate."""
        # Setup
        async def fail_coro():
            raise ValueError("Test error")

        # Execute & Verify
        with pytest.raises(ValueError):
            await base_service.execute_with_fallback(
                fail_coro(),
                fallback_value="fallback",
                exceptions=(NetworkFailureError,),
            )

    def test_log_with_context(self, base_service):
        """Test logging with context."""
        # Setup
        base_service.logger = MagicMock()

        # Execute
        base_service.log_with_context("info", "Test message", key1="value1", key2=2)

        # Verify
        base_service.logger.info.assert_called_once()
        args, _ = base_service.logger.info.call_args
        assert args[0] == "Test message (key1='value1', key2=2)"

    @pytest.mark.asyncio
    async def test_log_timing_success(self, base_service):
        """Test timing a successful operation."""
        base_service.logger = MagicMock()

        async with base_service.log_timing("Test operation"):
            pass

        base_service.logger.debug.assert_called_once()
        args, _ = base_service.logger.debug.call_args
        assert args[0].startswith("Test operation completed in")

    @pytest.mark.asyncio
    async def test_log_timing_failure(self, base_service):
        """Test timing an operation that raises."""
        base_service.logger = MagicMock()

        with pytest.raises(RuntimeError):
            async with base_service.log_timing("Test operation"):
                raise RuntimeError("boom")

        base_service.logger.error.assert_called_once()
        args, _ = base_service.logger.error.call_args
        assert "Test operation failed after" in args[0]
        assert "boom" in args[0]
