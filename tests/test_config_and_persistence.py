"""
Tests for the config-driven builders, persistence and logging helpers.

These tests validate that:

- config/features.yaml loads and contains the transformer sections
- missing files, empty files and missing sections are reported
- every configured transformer can be built, and the text pipeline runs
- fitted pipelines round-trip through joblib
- get_logger honors the logging section and falls back to defaults
- the run_feature_examples script runs end to end
"""

from __future__ import annotations

import logging
import os
import sys

import pytest
import yaml

from mlfeatures.data.samples import sentence_frame
from mlfeatures.features import IDF, Binarizer, HashingTF, RegexTokenizer, Tokenizer
from mlfeatures.features.factory import (
    TRANSFORMER_BUILDERS,
    build_text_pipeline,
    build_transformer,
)
from mlfeatures.features.persistence import (
    DEFAULT_PIPELINE_FILENAME,
    load_transformer,
    save_transformer,
)
from mlfeatures.utils.common import (
    DEFAULT_LOGGING,
    get_logger,
    load_feature_config,
    log_file_path,
)
from scripts import run_feature_examples


REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
FEATURE_CONFIG_PATH = os.path.join(REPO_ROOT, "config", "features.yaml")


def _write_yaml(path, data) -> str:
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f)
    return str(path)


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------


def test_load_feature_config_has_required_sections():
    cfg = load_feature_config(FEATURE_CONFIG_PATH)

    for section in ("tokenizer", "hashing_tf", "binarizer", "polynomial_expansion"):
        assert section in cfg
    assert cfg["hashing_tf"]["num_features"] == 262144


def test_load_feature_config_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_feature_config(str(tmp_path / "missing.yaml"))

    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        load_feature_config(str(empty))

    partial = _write_yaml(tmp_path / "partial.yaml", {"tokenizer": {}})
    with pytest.raises(KeyError, match="hashing_tf"):
        load_feature_config(partial)


def test_regex_tokenizer_and_idf_sections_are_optional(tmp_path):
    with open(FEATURE_CONFIG_PATH, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    del data["regex_tokenizer"]
    del data["idf"]

    cfg = load_feature_config(_write_yaml(tmp_path / "minimal.yaml", data))
    pipeline = build_text_pipeline(cfg)

    assert [name for name, _ in pipeline.steps] == ["tokenizer", "hashing_tf"]
    out = pipeline.fit_transform(sentence_frame())
    assert "raw_features" in out.columns
    assert "features" not in out.columns


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def test_build_every_transformer_from_repo_config():
    cfg = load_feature_config(FEATURE_CONFIG_PATH)

    built = {name: build_transformer(name, cfg) for name in TRANSFORMER_BUILDERS}

    assert isinstance(built["tokenizer"], Tokenizer)
    assert isinstance(built["regex_tokenizer"], RegexTokenizer)
    assert isinstance(built["hashing_tf"], HashingTF)
    assert isinstance(built["idf"], IDF)
    assert isinstance(built["binarizer"], Binarizer)
    assert built["binarizer"].threshold == 0.5
    assert built["polynomial_expansion"].degree == 3


def test_build_transformer_unknown_name():
    with pytest.raises(KeyError):
        build_transformer("word2vec", {})


def test_build_text_pipeline_respects_flags():
    cfg = {
        "tokenizer": {"input_col": "sentence", "output_col": "words"},
        "regex_tokenizer": {"enabled": True, "pattern": "\\W+"},
        "hashing_tf": {"input_col": "words", "output_col": "tf", "num_features": 16},
        "idf": {"enabled": False},
    }

    pipeline = build_text_pipeline(cfg)

    assert [name for name, _ in pipeline.steps] == ["tokenizer", "hashing_tf"]
    assert isinstance(pipeline.named_steps["tokenizer"], RegexTokenizer)

    out = pipeline.fit_transform(sentence_frame())
    assert all(v.size == 16 for v in out["tf"])


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


def test_save_and_load_fitted_pipeline(tmp_path):
    cfg = load_feature_config(FEATURE_CONFIG_PATH)
    pipeline = build_text_pipeline(cfg)
    expected = pipeline.fit_transform(sentence_frame())

    artifacts = tmp_path / "artifacts"
    path = save_transformer(pipeline, artifacts_dir=str(artifacts), filename="text.joblib")
    assert os.path.exists(path)

    loaded = load_transformer(artifacts_dir=str(artifacts), filename="text.joblib")
    result = loaded.transform(sentence_frame())

    assert list(result["features"]) == list(expected["features"])


def test_save_uses_configured_artifacts_dir(tmp_path):
    cfg = {"paths": {"artifacts_dir": str(tmp_path / "from_config")}}

    path = save_transformer(Tokenizer(input_col="s"), config=cfg, filename="tok.joblib")

    assert path == os.path.join(str(tmp_path / "from_config"), "tok.joblib")
    assert isinstance(load_transformer(config=cfg, filename="tok.joblib"), Tokenizer)


def test_load_missing_transformer(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_transformer(artifacts_dir=str(tmp_path), filename="nope.joblib")


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def test_get_logger_writes_file_when_enabled(tmp_path):
    cfg = {
        "logging": {"level": "DEBUG", "to_file": True, "file_prefix": "feat"},
        "paths": {"logs_dir": str(tmp_path / "logs")},
    }

    logger = get_logger("test_features_file_logger", cfg, log_file_suffix="unit")
    logger.debug("hello")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert os.path.exists(tmp_path / "logs" / "feat_unit.log")
    # a second call reuses the configured handlers
    assert get_logger("test_features_file_logger", cfg) is logger
    assert len(logger.handlers) == 2

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_get_logger_defaults_without_logging_section():
    logger = get_logger("test_features_default_logger", {})

    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert logger.propagate is False

    logger.removeHandler(logger.handlers[0])


def test_log_file_path_merges_defaults():
    cfg = {"logging": {"level": "WARNING"}, "paths": {"logs_dir": "out"}}

    assert log_file_path(cfg) == os.path.join("out", f"{DEFAULT_LOGGING['file_prefix']}.log")
    assert log_file_path({}, "guide") == os.path.join("logs", "features_guide.log")


# ---------------------------------------------------------------------------
# run_feature_examples script
# ---------------------------------------------------------------------------


def test_run_feature_examples_saves_pipeline(tmp_path, monkeypatch):
    with open(FEATURE_CONFIG_PATH, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    artifacts = tmp_path / "artifacts"
    data["paths"]["artifacts_dir"] = str(artifacts)
    config_path = _write_yaml(tmp_path / "features.yaml", data)

    monkeypatch.setattr(
        sys, "argv", ["run_feature_examples.py", "--config", config_path, "--save"]
    )
    run_feature_examples.main()

    saved = artifacts / DEFAULT_PIPELINE_FILENAME
    assert saved.exists()
    pipeline = load_transformer(artifacts_dir=str(artifacts))
    assert [name for name, _ in pipeline.steps] == ["tokenizer", "hashing_tf", "idf"]
    assert "features" in pipeline.transform(sentence_frame()).columns
