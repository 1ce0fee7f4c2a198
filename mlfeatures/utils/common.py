"""
Configuration, filesystem and logging helpers.

This module centralizes common functionality used across the project:

- loading the feature configuration (config/features.yaml)
- ensuring directories exist before writing files
- constructing loggers that respect the config "logging" section

The transformer factory, persistence helpers and scripts rely on these
utilities.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Iterable, Optional

import yaml


DEFAULT_FEATURE_CONFIG_PATH = "config/features.yaml"

# "regex_tokenizer" and "idf" are optional: the text pipeline skips them when absent.
REQUIRED_SECTIONS = (
    "tokenizer",
    "hashing_tf",
    "binarizer",
    "polynomial_expansion",
)


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------


def load_yaml(path: str) -> Dict[str, Any]:
    """
    Load a YAML file and return it as a dictionary.

    Parameters
    ----------
    path : str
        Path to the YAML file.

    Returns
    -------
    Dict[str, Any]
        Parsed YAML content.

    Raises
    ------
    FileNotFoundError
        If the YAML file does not exist.
    ValueError
        If the YAML file is empty or not a mapping.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)

    if cfg is None:
        raise ValueError(f"Config file is empty or invalid: {path}")
    if not isinstance(cfg, dict):
        raise ValueError(f"Config file must contain a mapping at top level: {path}")

    return cfg


def load_feature_config(
    config_path: str = DEFAULT_FEATURE_CONFIG_PATH,
    required_sections: Iterable[str] = REQUIRED_SECTIONS,
) -> Dict[str, Any]:
    """
    Load and return the feature configuration dictionary.

    Parameters
    ----------
    config_path : str
        Path to the feature YAML configuration file.
    required_sections : Iterable[str]
        Sections that must be present.

    Returns
    -------
    Dict[str, Any]
        Parsed configuration with one section per transformer plus the
        optional "logging" and "paths" sections.

    Raises
    ------
    KeyError
        If a required section is missing.
    """
    cfg = load_yaml(config_path)

    for section in required_sections:
        if section not in cfg:
            raise KeyError(
                f'Missing "{section}" section in feature config: {config_path}'
            )

    return cfg


# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------


def ensure_dir_exists(path: str) -> None:
    """
    Ensure that a directory exists (create it if necessary).

    Parameters
    ----------
    path : str
        Directory path.
    """
    if path and not os.path.exists(path):
        os.makedirs(path, exist_ok=True)


# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------


_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_LOGS_DIR = "logs"
DEFAULT_LOGGING: Dict[str, Any] = {
    "level": "INFO",
    "to_file": False,
    "file_prefix": "features",
}


def _parse_log_level(level: Any) -> int:
    """Level name or number to a logging constant; unknown names give INFO."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level or "INFO").upper())
    return value if isinstance(value, int) else logging.INFO


def logging_settings(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """The config "logging" section laid over `DEFAULT_LOGGING`."""
    settings = dict(DEFAULT_LOGGING)
    settings.update((config or {}).get("logging") or {})
    return settings


def log_file_path(config: Optional[Dict[str, Any]], suffix: Optional[str] = None) -> str:
    """
    Path of the log file: `<paths.logs_dir>/<file_prefix>[_<suffix>].log`.
    """
    logs_dir = ((config or {}).get("paths") or {}).get("logs_dir", DEFAULT_LOGS_DIR)
    stem = str(logging_settings(config)["file_prefix"])
    if suffix:
        stem = f"{stem}_{suffix}"
    return os.path.join(logs_dir, f"{stem}.log")


def _make_handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def get_logger(
    name: str,
    config: Optional[Dict[str, Any]] = None,
    log_file_suffix: Optional[str] = None,
) -> logging.Logger:
    """
    Return a logger with a console handler, plus a file handler when
    `logging.to_file` is set.

    Parameters
    ----------
    name : str
        Logger name.
    config : Optional[Dict[str, Any]]
        Feature configuration. Missing "logging" keys take their value
        from `DEFAULT_LOGGING`.
    log_file_suffix : Optional[str]
        Appended to the log file name (e.g., "examples").

    Returns
    -------
    logging.Logger
        Configured logger. Loggers that already have handlers are
        returned as they are.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    settings = logging_settings(config)
    level = _parse_log_level(settings["level"])
    logger.setLevel(level)
    logger.addHandler(_make_handler(logging.StreamHandler(), level))

    if bool(settings["to_file"]):
        path = log_file_path(config, log_file_suffix)
        ensure_dir_exists(os.path.dirname(path))
        logger.addHandler(_make_handler(logging.FileHandler(path, encoding="utf-8"), level))

    logger.propagate = False
    return logger
