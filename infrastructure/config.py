"""
infrastructure/config.py

Planner configuration.

Defaults come from common/constants.py and can be overridden from a YAML
file:

    planner:
      max_iterations: 250
    logging:
      level: DEBUG
      log_file: logs/goap.log
      performance_logging: true

Usage:
    from infrastructure.config import load_planner_config

    config = load_planner_config("goap.yaml")
    planner = BackwardPlanner.from_config(config)
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from common.constants import CONSOLE_LOG_LEVEL, DEFAULT_MAX_ITERATIONS
from component_15_logging_config import get_logger, setup_logging
from goap_exceptions import InvalidConfigError, wrap_exception

logger = get_logger(__name__)


@dataclass
class PlannerConfig:
    """
    Configuration for the planner and its logging.

    Attributes:
        max_iterations: Iteration budget of the backward search
        log_level: Console log level
        log_file: Main log file (None disables file logging)
        enable_performance_logging: Write planning timings to a file
    """

    max_iterations: int = DEFAULT_MAX_ITERATIONS
    log_level: int = CONSOLE_LOG_LEVEL
    log_file: Optional[Path] = None
    enable_performance_logging: bool = False

    def __post_init__(self):
        if isinstance(self.max_iterations, bool) or not isinstance(
            self.max_iterations, int
        ):
            raise InvalidConfigError(
                "max_iterations must be an integer",
                context={"max_iterations": self.max_iterations},
            )
        if self.max_iterations <= 0:
            raise InvalidConfigError(
                f"max_iterations must be positive, got {self.max_iterations}",
                context={"max_iterations": self.max_iterations},
            )
        if self.log_file is not None:
            self.log_file = Path(self.log_file)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlannerConfig":
        """Build a config from the parsed YAML mapping."""
        planner_section = data.get("planner") or {}
        logging_section = data.get("logging") or {}
        if not isinstance(planner_section, dict) or not isinstance(
            logging_section, dict
        ):
            raise InvalidConfigError("'planner' and 'logging' must be mappings")

        kwargs: Dict[str, Any] = {}
        if "max_iterations" in planner_section:
            kwargs["max_iterations"] = planner_section["max_iterations"]
        if "level" in logging_section:
            kwargs["log_level"] = _parse_level(logging_section["level"])
        if "log_file" in logging_section:
            kwargs["log_file"] = logging_section["log_file"]
        if "performance_logging" in logging_section:
            kwargs["enable_performance_logging"] = bool(
                logging_section["performance_logging"]
            )
        return cls(**kwargs)


def _parse_level(level: Any) -> int:
    if isinstance(level, int) and not isinstance(level, bool):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise InvalidConfigError(f"Unknown log level: {level}", context={"level": level})
    return resolved


def load_planner_config(config_path: Union[str, Path]) -> PlannerConfig:
    """
    Load configuration from a YAML file.

    A missing file yields the defaults (with a warning).

    Raises:
        InvalidConfigError: If the file is not valid YAML or holds invalid values
    """
    config_file = Path(config_path)
    if not config_file.exists():
        logger.warning(f"Config file not found: {config_path}, using defaults")
        return PlannerConfig()

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise wrap_exception(
            e, InvalidConfigError, "Malformed YAML config", path=str(config_file)
        ) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidConfigError(
            "Config root must be a mapping", context={"path": str(config_file)}
        )

    config = PlannerConfig.from_dict(data)
    logger.info(
        f"[OK] Configuration loaded from {config_path}",
        extra={"max_iterations": config.max_iterations},
    )
    return config


def apply_logging_config(config: PlannerConfig) -> None:
    """(Re)configure logging from config."""
    setup_logging(
        console_level=config.log_level,
        log_file=config.log_file,
        enable_performance_logging=config.enable_performance_logging,
    )
