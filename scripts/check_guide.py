"""
Run the editorial checks on the feature user guide.

Checks front-matter, the table-of-contents placeholder, in-page and
relative links, the Python code samples, and that every section has a
sample in each language binding. Exits with status 1 if any
check fails.

Usage (from project root):

    python -m scripts.check_guide
    python scripts/check_guide.py --execute
"""

from __future__ import annotations

import argparse
import sys

from mlfeatures.guide.checks import run_all_checks
from mlfeatures.utils.common import DEFAULT_FEATURE_CONFIG_PATH, get_logger, load_yaml


DEFAULT_GUIDE_PATH = "docs/ml-features.md"


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments for the guide checks."""
    parser = argparse.ArgumentParser(description="Check the feature user guide page.")
    parser.add_argument(
        "--page",
        type=str,
        default=None,
        help=f"Guide page to check (default: paths.guide_page or {DEFAULT_GUIDE_PATH}).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=DEFAULT_FEATURE_CONFIG_PATH,
        help=f"Path to feature config YAML (default: {DEFAULT_FEATURE_CONFIG_PATH}).",
    )
    parser.add_argument(
        "--execute",
        action="store_true",
        help="Execute the Python samples instead of only compiling them.",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    cfg = load_yaml(args.config)
    logger = get_logger(name="check_guide", config=cfg, log_file_suffix="guide")

    page = args.page or (cfg.get("paths", {}) or {}).get("guide_page", DEFAULT_GUIDE_PATH)
    logger.info("Checking guide page %s (execute=%s)", page, args.execute)

    results = run_all_checks(page, execute=args.execute)
    for result in results:
        if result.passed:
            logger.info("[PASS] %s", result.name)
        else:
            logger.error("[FAIL] %s", result.name)
            for message in result.messages:
                logger.error("    %s", message)

    failed = [r.name for r in results if not r.passed]
    if failed:
        logger.error("%d check(s) failed: %s", len(failed), ", ".join(failed))
        return 1

    logger.info("All guide checks passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
