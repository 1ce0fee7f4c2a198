"""
Top-level package for the feature extraction and transformation toolkit.

This package contains modules for:
- sparse and dense vector helpers
- feature extractors (HashingTF, IDF) and transformers (Tokenizer,
  RegexTokenizer, Binarizer, PolynomialExpansion)
- configuration, persistence and logging helpers
- the user guide page and its editorial checks

All transformers operate on pandas DataFrames and can be chained in a
scikit-learn Pipeline.
"""

__version__ = "0.1.0"
