"""
Common constants for the GOAP planner.

This package provides the default values shared by the planner components.
"""

from common.constants import *

__all__ = [
    # Search
    "DEFAULT_MAX_ITERATIONS",
    # Costs
    "DEFAULT_ACTION_COST",
    "DEFAULT_GOAL_COST",
    # Logging
    "LOG_DIR_NAME",
    "DEFAULT_CONFIG_FILENAME",
    "ERROR_LOG_FILENAME",
    "PERFORMANCE_LOG_FILENAME",
    "PERFORMANCE_LOGGER_NAME",
    "CONSOLE_LOG_LEVEL",
    "FILE_LOG_LEVEL",
]
