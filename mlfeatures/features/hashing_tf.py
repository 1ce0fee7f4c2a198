"""
Term frequency extraction with the hashing trick.

`HashingTF` maps every term of a token list to a bucket index with the
32-bit MurmurHash3 function (seed 42), taken modulo the number of
features. The output for each row is a `SparseVector` whose entries are
the term counts per bucket. Distinct terms that land in the same bucket
share one count, which is the price paid for a fixed vector size and no
vocabulary to store.

A larger `num_features` lowers the collision rate; a power of two spreads
terms evenly over the buckets.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd
from scipy.sparse import csr_matrix
from sklearn.utils import murmurhash3_32

from mlfeatures.features.base import ColumnTransformerBase
from mlfeatures.linalg import SparseVector, stack_vectors


HASH_SEED = 42
DEFAULT_NUM_FEATURES = 1 << 18

_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1


def murmur3_hash(term: Any, seed: int = HASH_SEED) -> int:
    """
    Signed 32-bit MurmurHash3 of a term.

    Strings are hashed as their UTF-8 bytes, bytes as-is and integers in
    the int32 range as 32-bit integers. Anything else is hashed through
    its string form.
    """
    if isinstance(term, (bytes, str)):
        return int(murmurhash3_32(term, seed=seed))
    if isinstance(term, (int, np.integer)) and _INT32_MIN <= int(term) <= _INT32_MAX:
        return int(murmurhash3_32(int(term), seed=seed))
    return int(murmurhash3_32(str(term), seed=seed))


class HashingTF(ColumnTransformerBase):
    """
    Map a column of term lists to hashed term-frequency vectors.

    Parameters
    ----------
    input_col : str
        Column holding lists of terms (e.g. the output of `Tokenizer`).
    output_col : str
        Column receiving one `SparseVector` per row.
    num_features : int
        Number of hash buckets, i.e. the output vector size. Must be >= 1.
    binary : bool
        If True, every non-zero count is set to 1.0. Useful for discrete
        probabilistic models of presence rather than counts.
    """

    def __init__(
        self,
        input_col: Optional[str] = None,
        output_col: Optional[str] = None,
        num_features: int = DEFAULT_NUM_FEATURES,
        binary: bool = False,
    ):
        self.input_col = input_col
        self.output_col = output_col
        self.num_features = num_features
        self.binary = binary

    def _check_params(self) -> int:
        num_features = int(self.num_features)
        if num_features < 1:
            raise ValueError(f"num_features must be >= 1, got {self.num_features}.")
        return num_features

    def index_of(self, term: Any) -> int:
        """Return the bucket index of a single term."""
        return murmur3_hash(term) % self._check_params()

    def hash_terms(self, terms: Iterable[Any]) -> SparseVector:
        """Hash one document (an iterable of terms) into a TF vector."""
        num_features = self._check_params()
        if isinstance(terms, (str, bytes)) or not isinstance(terms, Iterable):
            raise ValueError(
                f"Column '{self.input_col}' must contain lists of terms, "
                f"got {type(terms).__name__} ({terms!r})."
            )

        counts: Dict[int, float] = {}
        for term in terms:
            idx = murmur3_hash(term) % num_features
            if self.binary:
                counts[idx] = 1.0
            else:
                counts[idx] = counts.get(idx, 0.0) + 1.0

        return SparseVector.from_dict(num_features, counts)

    def _transform_cell(self, value: Any) -> SparseVector:
        return self.hash_terms(value)

    def transform_matrix(self, X: pd.DataFrame) -> csr_matrix:
        """
        Hash `input_col` directly into a CSR matrix of shape
        (n_rows, num_features), ready for scikit-learn estimators.
        """
        self._check_frame(X, self.input_col)
        return stack_vectors(
            (self.hash_terms(terms) for terms in X[self.input_col]),
            size=self._check_params(),
        )
