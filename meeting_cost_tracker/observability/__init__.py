"""Structured logging package."""

from meeting_cost_tracker.observability.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
