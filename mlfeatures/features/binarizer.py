"""
Thresholding of numerical features to binary 0/1 values.

Values strictly greater than the threshold become 1.0, all others 0.0.
Works on scalar columns and on vector columns (dense or sparse). Several
columns can be binarized in one pass with `input_cols`, `output_cols`
and `thresholds`.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from mlfeatures.features.base import ColumnTransformerBase
from mlfeatures.linalg import SparseVector, as_array, is_vector


def binarize_value(value: Any, threshold: float) -> Any:
    """
    Binarize a scalar or a vector against `threshold`.

    Sparse vectors keep their sparsity when `threshold >= 0`, since
    implicit zeros can never exceed it. With a negative threshold every
    implicit zero turns into 1.0 and a dense array is returned.
    """
    if isinstance(value, SparseVector):
        if threshold >= 0:
            mask = value.values > threshold
            return SparseVector(value.size, value.indices[mask], np.ones(int(mask.sum())))
        return (value.to_array() > threshold).astype(np.float64)
    if is_vector(value):
        return (as_array(value) > threshold).astype(np.float64)
    return 1.0 if float(value) > threshold else 0.0


class Binarizer(ColumnTransformerBase):
    """
    Map numerical features to {0.0, 1.0} by a threshold.

    Parameters
    ----------
    input_col, output_col : str
        Single-column mode.
    threshold : float
        Values > threshold map to 1.0. Also the default threshold for
        every column in multi-column mode.
    input_cols, output_cols : Sequence[str]
        Multi-column mode. Must have the same length.
    thresholds : Sequence[float]
        Per-column thresholds in multi-column mode.
    """

    def __init__(
        self,
        input_col: Optional[str] = None,
        output_col: Optional[str] = None,
        threshold: float = 0.0,
        input_cols: Optional[Sequence[str]] = None,
        output_cols: Optional[Sequence[str]] = None,
        thresholds: Optional[Sequence[float]] = None,
    ):
        self.input_col = input_col
        self.output_col = output_col
        self.threshold = threshold
        self.input_cols = input_cols
        self.output_cols = output_cols
        self.thresholds = thresholds

    def _column_plan(self) -> List[Tuple[str, str, float]]:
        """Resolve (input, output, threshold) triples for either mode."""
        if self.input_cols is not None:
            if self.input_col is not None:
                raise ValueError("Set either input_col or input_cols, not both.")
            if self.output_cols is None or len(self.output_cols) != len(self.input_cols):
                raise ValueError(
                    "output_cols must be set and have the same length as input_cols."
                )
            if self.thresholds is None:
                thresholds = [float(self.threshold)] * len(self.input_cols)
            elif len(self.thresholds) != len(self.input_cols):
                raise ValueError(
                    f"thresholds has {len(self.thresholds)} entries but "
                    f"input_cols has {len(self.input_cols)}."
                )
            else:
                thresholds = [float(t) for t in self.thresholds]
            return list(zip(self.input_cols, self.output_cols, thresholds))

        if self.thresholds is not None or self.output_cols is not None:
            raise ValueError("thresholds and output_cols require input_cols.")
        return [(self.input_col, self._output_name(), float(self.threshold))]

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        out = X
        for input_col, output_col, threshold in self._column_plan():
            self._check_frame(X, input_col)
            column = X[input_col]
            if pd.api.types.is_numeric_dtype(column.dtype):
                out = out.copy()
                out[output_col] = (column.astype(np.float64) > threshold).astype(np.float64)
            else:
                out = self._with_column(
                    out,
                    [binarize_value(v, threshold) for v in column],
                    name=output_col,
                )
        return out
