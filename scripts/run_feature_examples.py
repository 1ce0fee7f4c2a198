"""
Run the user guide's feature examples end to end.

This script builds every transformer from config/features.yaml and
applies it to the example frames from `mlfeatures.data.samples`:

- Tokenizer -> HashingTF (-> IDF) on labeled sentences
- Binarizer on continuous values
- PolynomialExpansion on dense and sparse vectors

The resulting frames are logged, and the fitted text pipeline can be
saved under the configured artifacts directory.

Usage (from project root):

    python -m scripts.run_feature_examples
    # or
    python scripts/run_feature_examples.py --save
"""

from __future__ import annotations

import argparse

from mlfeatures.data.samples import continuous_frame, sentence_frame, vector_frame
from mlfeatures.features.factory import build_text_pipeline, build_transformer
from mlfeatures.features.persistence import save_transformer
from mlfeatures.utils.common import (
    DEFAULT_FEATURE_CONFIG_PATH,
    get_logger,
    load_feature_config,
)


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments for the feature examples run."""
    parser = argparse.ArgumentParser(
        description="Run the feature extraction and transformation examples."
    )
    parser.add_argument(
        "--config",
        type=str,
        default=DEFAULT_FEATURE_CONFIG_PATH,
        help=f"Path to feature config YAML (default: {DEFAULT_FEATURE_CONFIG_PATH}).",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Persist the fitted text pipeline under paths.artifacts_dir.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    cfg = load_feature_config(args.config)
    logger = get_logger(name="run_feature_examples", config=cfg, log_file_suffix="examples")

    logger.info("=" * 80)
    logger.info("Running feature examples with config=%s", args.config)

    pipeline = build_text_pipeline(cfg)
    text_features = pipeline.fit_transform(sentence_frame())
    logger.info("Text pipeline steps: %s", [name for name, _ in pipeline.steps])
    logger.info("\n%s", text_features)

    binarized = build_transformer("binarizer", cfg).transform(continuous_frame())
    logger.info("Binarizer output:\n%s", binarized)

    expanded = build_transformer("polynomial_expansion", cfg).transform(vector_frame())
    logger.info("PolynomialExpansion output:\n%s", expanded)

    if args.save:
        path = save_transformer(pipeline, config=cfg)
        logger.info("Saved fitted text pipeline to %s", path)

    logger.info("Feature examples completed.")


if __name__ == "__main__":
    main()
