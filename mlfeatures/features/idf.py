"""
Inverse document frequency rescaling of term-frequency vectors.

`IDF` is an estimator: `fit` counts, for every feature index, the number
of documents in which it is positive, and derives

    idf(t) = log((m + 1) / (df(t) + 1))

where m is the number of documents. `transform` multiplies each TF vector
element-wise by the idf vector, so terms present in many documents are
down-weighted. Sparse inputs stay sparse.
"""

from __future__ import annotations

from typing import Any, Optional

import numpy as np
import pandas as pd
from sklearn.utils.validation import check_is_fitted

from mlfeatures.features.base import ColumnTransformerBase
from mlfeatures.linalg import SparseVector, as_array, stack_vectors


class IDF(ColumnTransformerBase):
    """
    Compute IDF weights from a column of TF vectors and rescale them.

    Parameters
    ----------
    input_col : str
        Column of dense or sparse term-frequency vectors.
    output_col : str
        Column receiving the rescaled vectors.
    min_doc_freq : int
        Indices appearing in fewer documents than this get an idf of 0.

    Attributes
    ----------
    idf_ : np.ndarray
        IDF weight per feature index.
    doc_freq_ : np.ndarray
        Number of documents in which each index is positive.
    num_docs_ : int
        Number of documents seen in fit.
    """

    def __init__(
        self,
        input_col: Optional[str] = None,
        output_col: Optional[str] = None,
        min_doc_freq: int = 0,
    ):
        self.input_col = input_col
        self.output_col = output_col
        self.min_doc_freq = min_doc_freq

    def fit(self, X: pd.DataFrame, y: Any = None) -> "IDF":
        self._check_frame(X, self.input_col)
        if len(X) == 0:
            raise ValueError("IDF requires at least one document to fit.")

        matrix = stack_vectors(X[self.input_col])
        num_docs = matrix.shape[0]
        doc_freq = np.asarray((matrix > 0).sum(axis=0)).ravel().astype(np.int64)

        idf = np.log((num_docs + 1.0) / (doc_freq + 1.0))
        idf[doc_freq < int(self.min_doc_freq)] = 0.0

        self.idf_ = idf
        self.doc_freq_ = doc_freq
        self.num_docs_ = num_docs
        return self

    def _transform_cell(self, value: Any) -> Any:
        if isinstance(value, SparseVector):
            if value.size != self.idf_.shape[0]:
                raise ValueError(
                    f"Vector size {value.size} does not match fitted size {self.idf_.shape[0]}."
                )
            return SparseVector(value.size, value.indices, value.values * self.idf_[value.indices])

        arr = as_array(value)
        if arr.shape[0] != self.idf_.shape[0]:
            raise ValueError(
                f"Vector size {arr.shape[0]} does not match fitted size {self.idf_.shape[0]}."
            )
        return arr * self.idf_

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        check_is_fitted(self, "idf_")
        return super().transform(X)
