"""Service layer binding athlete configuration to the analyzers."""

from .base import BaseService
from .analytics import TrainingAnalyticsService

__all__ = [
    "BaseService",
    "TrainingAnalyticsService",
]
