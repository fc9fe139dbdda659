"""Logging utilities used across intentpy."""
from .intent_logger import IntentLogger, LOGGER_NAME

__all__ = ["IntentLogger", "LOGGER_NAME"]
