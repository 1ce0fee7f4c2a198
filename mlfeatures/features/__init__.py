"""
Feature extraction and transformation utilities.

This subpackage includes:
- Tokenizer and RegexTokenizer for splitting text into terms
- HashingTF for hashed term-frequency vectors, and IDF for rescaling them
- Binarizer for thresholding numerical features
- PolynomialExpansion for polynomial feature expansion
- config-driven builders and joblib persistence helpers.
"""

from mlfeatures.features.binarizer import Binarizer
from mlfeatures.features.hashing_tf import HashingTF
from mlfeatures.features.idf import IDF
from mlfeatures.features.polynomial_expansion import PolynomialExpansion
from mlfeatures.features.tokenizer import RegexTokenizer, Tokenizer

__all__ = [
    "Binarizer",
    "HashingTF",
    "IDF",
    "PolynomialExpansion",
    "RegexTokenizer",
    "Tokenizer",
]
