"""
Transformer builders driven by config/features.yaml.

Each section of the feature config holds the parameters of one
transformer:

    tokenizer:            input_col, output_col
    regex_tokenizer:      input_col, output_col, pattern, gaps,
                          min_token_length, to_lowercase
    hashing_tf:           input_col, output_col, num_features, binary
    idf:                  enabled, input_col, output_col, min_doc_freq
    binarizer:            input_col, output_col, threshold
    polynomial_expansion: input_col, output_col, degree

Parameters can be tuned without modifying code.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from sklearn.pipeline import Pipeline

from mlfeatures.features.binarizer import Binarizer
from mlfeatures.features.hashing_tf import DEFAULT_NUM_FEATURES, HashingTF
from mlfeatures.features.idf import IDF
from mlfeatures.features.polynomial_expansion import PolynomialExpansion
from mlfeatures.features.tokenizer import RegexTokenizer, Tokenizer


logger = logging.getLogger(__name__)


def _section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    if name not in cfg:
        raise KeyError(f'Missing "{name}" section in feature config.')
    return cfg[name] or {}


def build_tokenizer(cfg: Dict[str, Any]) -> Tokenizer:
    scfg = _section(cfg, "tokenizer")
    return Tokenizer(
        input_col=str(scfg.get("input_col", "sentence")),
        output_col=str(scfg.get("output_col", "words")),
    )


def build_regex_tokenizer(cfg: Dict[str, Any]) -> RegexTokenizer:
    scfg = _section(cfg, "regex_tokenizer")
    return RegexTokenizer(
        input_col=str(scfg.get("input_col", "sentence")),
        output_col=str(scfg.get("output_col", "words")),
        pattern=str(scfg.get("pattern", r"\s+")),
        gaps=bool(scfg.get("gaps", True)),
        min_token_length=int(scfg.get("min_token_length", 1)),
        to_lowercase=bool(scfg.get("to_lowercase", True)),
    )


def build_hashing_tf(cfg: Dict[str, Any]) -> HashingTF:
    scfg = _section(cfg, "hashing_tf")
    return HashingTF(
        input_col=str(scfg.get("input_col", "words")),
        output_col=str(scfg.get("output_col", "raw_features")),
        num_features=int(scfg.get("num_features", DEFAULT_NUM_FEATURES)),
        binary=bool(scfg.get("binary", False)),
    )


def build_idf(cfg: Dict[str, Any]) -> IDF:
    scfg = _section(cfg, "idf")
    return IDF(
        input_col=str(scfg.get("input_col", "raw_features")),
        output_col=str(scfg.get("output_col", "features")),
        min_doc_freq=int(scfg.get("min_doc_freq", 0)),
    )


def build_binarizer(cfg: Dict[str, Any]) -> Binarizer:
    scfg = _section(cfg, "binarizer")
    return Binarizer(
        input_col=str(scfg.get("input_col", "feature")),
        output_col=str(scfg.get("output_col", "binarized_feature")),
        threshold=float(scfg.get("threshold", 0.0)),
    )


def build_polynomial_expansion(cfg: Dict[str, Any]) -> PolynomialExpansion:
    scfg = _section(cfg, "polynomial_expansion")
    return PolynomialExpansion(
        input_col=str(scfg.get("input_col", "features")),
        output_col=str(scfg.get("output_col", "poly_features")),
        degree=int(scfg.get("degree", 2)),
    )


TRANSFORMER_BUILDERS: Dict[str, Callable[[Dict[str, Any]], Any]] = {
    "tokenizer": build_tokenizer,
    "regex_tokenizer": build_regex_tokenizer,
    "hashing_tf": build_hashing_tf,
    "idf": build_idf,
    "binarizer": build_binarizer,
    "polynomial_expansion": build_polynomial_expansion,
}


def build_transformer(name: str, cfg: Dict[str, Any]) -> Any:
    """
    Build the transformer registered under `name` from the config.

    Raises
    ------
    KeyError
        If `name` is unknown or its config section is missing.
    """
    if name not in TRANSFORMER_BUILDERS:
        raise KeyError(
            f"Unknown transformer '{name}'. Available: {sorted(TRANSFORMER_BUILDERS)}"
        )
    return TRANSFORMER_BUILDERS[name](cfg)


def build_text_pipeline(cfg: Dict[str, Any]) -> Pipeline:
    """
    Build the Tokenizer -> HashingTF (-> IDF) pipeline.

    A "regex_tokenizer" section with `enabled: true` replaces the plain
    tokenizer; an "idf" section with `enabled: true` appends IDF.
    """
    regex_cfg = cfg.get("regex_tokenizer", {}) or {}
    if bool(regex_cfg.get("enabled", False)):
        steps = [("tokenizer", build_regex_tokenizer(cfg))]
    else:
        steps = [("tokenizer", build_tokenizer(cfg))]

    steps.append(("hashing_tf", build_hashing_tf(cfg)))

    idf_cfg = cfg.get("idf", {}) or {}
    if bool(idf_cfg.get("enabled", False)):
        steps.append(("idf", build_idf(cfg)))

    logger.debug("Text pipeline steps: %s", [name for name, _ in steps])
    return Pipeline(steps)
