"""
Common base class for DataFrame column transformers.

Every transformer in this package reads one column of a pandas DataFrame
and writes its result to another column of a copy of that frame. The
input frame is never modified. Subclasses implement `_transform_cell`
(per-row logic) or override `transform` for column-wise logic.

The classes derive from scikit-learn's BaseEstimator and TransformerMixin,
so they support get_params/set_params, clone and chaining inside
sklearn.pipeline.Pipeline.
"""

from __future__ import annotations

from typing import Any, List, Optional

import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin

from mlfeatures.linalg import vector_series


class ColumnTransformerBase(BaseEstimator, TransformerMixin):
    """
    Base class for transformers mapping `input_col` to `output_col`.

    Subclasses must store `input_col` and `output_col` as attributes of
    the same name (scikit-learn reads parameters from __init__).
    """

    input_col: Optional[str]
    output_col: Optional[str]

    def fit(self, X: pd.DataFrame, y: Any = None) -> "ColumnTransformerBase":
        """Stateless transformers have nothing to learn."""
        return self

    def _check_frame(self, X: Any, column: Optional[str]) -> None:
        if not isinstance(X, pd.DataFrame):
            raise TypeError(
                f"{type(self).__name__} expects a pandas DataFrame, got {type(X).__name__}."
            )
        if not column:
            raise ValueError(f"{type(self).__name__}: input column is not set.")
        if column not in X.columns:
            raise ValueError(
                f"{type(self).__name__}: column '{column}' not found. "
                f"Available columns: {list(X.columns)}"
            )

    def _output_name(self) -> str:
        if self.output_col:
            return self.output_col
        return f"{self.input_col}_{type(self).__name__.lower()}"

    def _transform_cell(self, value: Any) -> Any:
        raise NotImplementedError

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        """
        Apply the transformation to every row of `input_col`.

        Parameters
        ----------
        X : pd.DataFrame
            Input frame containing `input_col`.

        Returns
        -------
        pd.DataFrame
            Copy of `X` with `output_col` added (or replaced).
        """
        self._check_frame(X, self.input_col)
        return self._with_column(X, [self._transform_cell(v) for v in X[self.input_col]])

    def _with_column(
        self,
        X: pd.DataFrame,
        values: List[Any],
        name: Optional[str] = None,
    ) -> pd.DataFrame:
        out = X.copy()
        out[name or self._output_name()] = vector_series(values, index=X.index)
        return out
