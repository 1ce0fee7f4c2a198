"""
Vector helpers shared by the feature transformers.

Dense vectors are plain one-dimensional numpy arrays. Sparse vectors are
represented by `SparseVector`, a small immutable value holding the vector
size and the sorted (index, value) pairs of its stored entries.

A DataFrame column of vectors can be turned into a scipy CSR matrix with
`stack_vectors`, which is the format scikit-learn estimators consume.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Sequence

import numpy as np
import pandas as pd
from scipy.sparse import csr_matrix


class SparseVector:
    """
    Sparse vector of fixed size.

    Parameters
    ----------
    size : int
        Length of the vector.
    indices : Sequence[int]
        Positions of the stored entries. They are sorted on construction
        and must be unique and lie in [0, size).
    values : Sequence[float]
        Values of the stored entries, aligned with `indices`.
    """

    def __init__(
        self,
        size: int,
        indices: Sequence[int],
        values: Sequence[float],
    ) -> None:
        size = int(size)
        if size < 0:
            raise ValueError(f"Vector size must be non-negative, got {size}.")

        idx = np.asarray(indices, dtype=np.int64).ravel()
        vals = np.asarray(values, dtype=np.float64).ravel()
        if idx.shape[0] != vals.shape[0]:
            raise ValueError(
                f"Indices and values must have the same length "
                f"({idx.shape[0]} != {vals.shape[0]})."
            )

        order = np.argsort(idx, kind="stable")
        idx = idx[order]
        vals = vals[order]

        if idx.size:
            if idx[0] < 0 or idx[-1] >= size:
                raise ValueError(
                    f"Indices must lie in [0, {size}), got range "
                    f"[{idx[0]}, {idx[-1]}]."
                )
            if np.any(np.diff(idx) == 0):
                raise ValueError("Indices of a SparseVector must be unique.")

        idx.setflags(write=False)
        vals.setflags(write=False)
        self._size = size
        self._indices = idx
        self._values = vals

    @classmethod
    def from_dict(cls, size: int, mapping: Dict[int, float]) -> "SparseVector":
        """Build a sparse vector from an {index: value} mapping."""
        if not mapping:
            return cls(size, [], [])
        items = sorted(mapping.items())
        return cls(size, [i for i, _ in items], [v for _, v in items])

    @property
    def size(self) -> int:
        return self._size

    @property
    def indices(self) -> np.ndarray:
        return self._indices

    @property
    def values(self) -> np.ndarray:
        return self._values

    @property
    def nnz(self) -> int:
        """Number of stored entries."""
        return int(self._indices.shape[0])

    def to_array(self) -> np.ndarray:
        arr = np.zeros(self._size, dtype=np.float64)
        arr[self._indices] = self._values
        return arr

    # No __len__/__getitem__: pandas and numpy would treat the vector as a
    # sequence and unpack it when it is stored in a DataFrame cell.

    def get(self, index: int) -> float:
        """Value at `index` (0.0 for entries not stored)."""
        index = int(index)
        if index < 0:
            index += self._size
        if not 0 <= index < self._size:
            raise IndexError(f"Index {index} out of range for size {self._size}.")
        pos = np.searchsorted(self._indices, index)
        if pos < self.nnz and self._indices[pos] == index:
            return float(self._values[pos])
        return 0.0

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SparseVector):
            return NotImplemented
        return (
            self._size == other._size
            and np.array_equal(self._indices, other._indices)
            and np.array_equal(self._values, other._values)
        )

    def __hash__(self) -> int:
        return hash((self._size, self._indices.tobytes(), self._values.tobytes()))

    def __repr__(self) -> str:
        idx = ",".join(str(int(i)) for i in self._indices)
        vals = ",".join(repr(float(v)) for v in self._values)
        return f"({self._size},[{idx}],[{vals}])"


def vector_series(vectors: Iterable[Any], index: Any = None) -> pd.Series:
    """
    Build an object Series holding one vector (or list) per cell.

    Cells are filled one by one so that equal-length arrays or lists are
    not broadcast into a two-dimensional array.
    """
    items = list(vectors)
    cells = np.empty(len(items), dtype=object)
    for i, item in enumerate(items):
        cells[i] = item
    return pd.Series(cells, index=index)


def is_vector(value: Any) -> bool:
    """Return True if `value` looks like a dense or sparse vector."""
    return isinstance(value, (SparseVector, np.ndarray, list, tuple))


def as_array(vector: Any) -> np.ndarray:
    """
    Convert a dense vector, sparse vector or sequence into a float64
    numpy array.
    """
    if isinstance(vector, SparseVector):
        return vector.to_array()
    arr = np.asarray(vector, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"Expected a one-dimensional vector, got shape {arr.shape}.")
    return arr


def stack_vectors(
    vectors: Iterable[Any],
    size: Optional[int] = None,
) -> csr_matrix:
    """
    Stack a sequence of vectors into a CSR matrix, one row per vector.

    Parameters
    ----------
    vectors : Iterable[Any]
        Dense or sparse vectors, all of the same size.
    size : Optional[int]
        Expected vector size. Required when `vectors` is empty.

    Returns
    -------
    csr_matrix
        Matrix of shape (n_vectors, size).

    Raises
    ------
    ValueError
        If vector sizes disagree, or if no vectors and no size are given.
    """
    indptr = [0]
    indices = []
    data = []

    for row, vector in enumerate(vectors):
        if isinstance(vector, SparseVector):
            vec_size = vector.size
            idx, vals = vector.indices, vector.values
        else:
            arr = as_array(vector)
            vec_size = arr.shape[0]
            idx = np.flatnonzero(arr)
            vals = arr[idx]

        if size is None:
            size = vec_size
        elif vec_size != size:
            raise ValueError(
                f"Vector at row {row} has size {vec_size}, expected {size}."
            )

        indices.append(idx)
        data.append(vals)
        indptr.append(indptr[-1] + len(idx))

    if size is None:
        raise ValueError("Cannot stack an empty sequence of vectors without a size.")

    n_rows = len(indptr) - 1
    if n_rows == 0:
        return csr_matrix((0, size), dtype=np.float64)

    return csr_matrix(
        (np.concatenate(data), np.concatenate(indices), np.asarray(indptr)),
        shape=(n_rows, size),
        dtype=np.float64,
    )
