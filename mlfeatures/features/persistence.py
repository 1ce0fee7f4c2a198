"""
Persistence helpers for transformers and pipelines.

Fitted objects (an `IDF`, or a whole scikit-learn Pipeline built from the
transformers in this package) are written with joblib under the
artifacts directory configured in config/features.yaml ("paths" section).
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import joblib

from mlfeatures.utils.common import ensure_dir_exists


DEFAULT_ARTIFACTS_DIR = "artifacts"
DEFAULT_PIPELINE_FILENAME = "feature_pipeline.joblib"

logger = logging.getLogger(__name__)


def resolve_artifacts_dir(
    artifacts_dir: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Pick the artifacts directory: the explicit argument, else
    config["paths"]["artifacts_dir"], else DEFAULT_ARTIFACTS_DIR.
    """
    if artifacts_dir:
        return artifacts_dir
    paths_cfg = (config or {}).get("paths", {}) or {}
    return str(paths_cfg.get("artifacts_dir", DEFAULT_ARTIFACTS_DIR))


def save_transformer(
    transformer: Any,
    artifacts_dir: Optional[str] = None,
    filename: str = DEFAULT_PIPELINE_FILENAME,
    config: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Persist a transformer (or pipeline) to disk.

    Parameters
    ----------
    transformer : Any
        Object to save.
    artifacts_dir : Optional[str]
        Target directory; created if missing.
    filename : str
        File name inside the directory.
    config : Optional[Dict[str, Any]]
        Feature configuration used to resolve the directory when
        `artifacts_dir` is None.

    Returns
    -------
    str
        Path of the written file.
    """
    directory = resolve_artifacts_dir(artifacts_dir, config)
    ensure_dir_exists(directory)
    path = os.path.join(directory, filename)
    joblib.dump(transformer, path)
    logger.debug("Saved %s to %s", type(transformer).__name__, path)
    return path


def load_transformer(
    artifacts_dir: Optional[str] = None,
    filename: str = DEFAULT_PIPELINE_FILENAME,
    config: Optional[Dict[str, Any]] = None,
) -> Any:
    """
    Load a previously saved transformer (or pipeline) from disk.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    """
    directory = resolve_artifacts_dir(artifacts_dir, config)
    path = os.path.join(directory, filename)
    if not os.path.exists(path):
        raise FileNotFoundError(f"Saved transformer not found at: {path}")

    return joblib.load(path)
