"""
Polynomial expansion of feature vectors.

Expands an n-dimensional vector into every monomial of total degree 1 to
`degree` over its components. The constant term is left out, so the
output length is C(n + degree, degree) - 1.

Monomials are ordered recursively over the last component. For (x, y)
and degree 2 the result is

    [x, x*x, y, x*y, y*y]

i.e. all terms without y first (x, x^2), then terms with y^1 (y, xy),
then y^2.
"""

from __future__ import annotations

from math import comb
from typing import Any, Optional

import numpy as np

from mlfeatures.features.base import ColumnTransformerBase
from mlfeatures.linalg import SparseVector, as_array


def poly_size(num_features: int, degree: int) -> int:
    """Number of monomials of degree <= `degree`, constant term included."""
    return comb(num_features + degree, degree)


def _expand_into(
    values: np.ndarray,
    last_idx: int,
    degree: int,
    multiplier: float,
    out: np.ndarray,
    cur_idx: int,
) -> int:
    """
    Write the monomials over values[:last_idx + 1] of degree <= `degree`,
    each scaled by `multiplier`, starting at out[cur_idx]. Index -1 stands
    for the constant term and is not written. Returns the next free index.
    """
    if multiplier == 0.0:
        # the whole block stays zero
        pass
    elif degree == 0 or last_idx < 0:
        if cur_idx >= 0:
            out[cur_idx] = multiplier
    else:
        v = values[last_idx]
        alpha = multiplier
        cur_start = cur_idx
        i = 0
        while i <= degree and alpha != 0.0:
            cur_start = _expand_into(values, last_idx - 1, degree - i, alpha, out, cur_start)
            i += 1
            alpha *= v
    return cur_idx + poly_size(last_idx + 1, degree)


def expand_polynomial(vector: Any, degree: int = 2) -> Any:
    """
    Expand a single vector.

    Dense input (array or sequence) gives a dense numpy array; a
    `SparseVector` gives a `SparseVector` holding the non-zero monomials.

    Raises
    ------
    ValueError
        If degree < 1.
    """
    degree = int(degree)
    if degree < 1:
        raise ValueError(f"degree must be >= 1, got {degree}.")

    values = as_array(vector)
    n = values.shape[0]
    out = np.zeros(poly_size(n, degree) - 1, dtype=np.float64)
    _expand_into(values, n - 1, degree, 1.0, out, -1)

    if isinstance(vector, SparseVector):
        nz = np.flatnonzero(out)
        return SparseVector(out.shape[0], nz, out[nz])
    return out


class PolynomialExpansion(ColumnTransformerBase):
    """
    Expand a vector column into its polynomial features.

    Parameters
    ----------
    input_col : str
        Column of dense or sparse vectors.
    output_col : str
        Column receiving the expanded vectors.
    degree : int
        Maximum total degree of the monomials, >= 1.
    """

    def __init__(
        self,
        input_col: Optional[str] = None,
        output_col: Optional[str] = None,
        degree: int = 2,
    ):
        self.input_col = input_col
        self.output_col = output_col
        self.degree = degree

    def expand(self, vector: Any) -> Any:
        return expand_polynomial(vector, self.degree)

    def _transform_cell(self, value: Any) -> Any:
        return self.expand(value)

    def transform(self, X):
        if int(self.degree) < 1:
            raise ValueError(f"degree must be >= 1, got {self.degree}.")
        return super().transform(X)
