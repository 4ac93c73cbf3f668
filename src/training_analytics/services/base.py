"""
Base service classes.

Services bind read-only configuration to the pure analytics functions.
They never cache results; callers that want memoization wrap the calls
themselves.
"""

from abc import ABC
from typing import Optional
import logging

from ..config import AnalyticsSettings, get_settings


class BaseService(ABC):
    """
    Abstract base class for all services.

    Provides common functionality:
    - Logging setup
    - Settings resolution
    """

    def __init__(
        self,
        settings: Optional[AnalyticsSettings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    @property
    def logger(self) -> logging.Logger:
        """Get the logger instance."""
        return self._logger

    @property
    def settings(self) -> AnalyticsSettings:
        """Get the settings instance."""
        return self._settings
