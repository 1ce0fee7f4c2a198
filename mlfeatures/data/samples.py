"""
Small example DataFrames matching the inputs used in the user guide.

- `sentence_frame`: labeled sentences for Tokenizer / HashingTF / IDF
- `continuous_frame`: continuous values for Binarizer
- `vector_frame`: dense and sparse vectors for PolynomialExpansion
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from mlfeatures.linalg import SparseVector, vector_series


def sentence_frame() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "label": [0, 0, 1],
            "sentence": [
                "Hi I heard about Spark",
                "I wish Java could use case classes",
                "Logistic regression models are neat",
            ],
        }
    )


def continuous_frame() -> pd.DataFrame:
    return pd.DataFrame({"label": [0, 1, 2], "feature": [0.1, 0.8, 0.2]})


def vector_frame() -> pd.DataFrame:
    """Vectors of size 3: a dense one with a negative entry, a zero one
    and a sparse one."""
    vectors = vector_series(
        [
            np.array([2.0, 1.0, -1.0]),
            np.array([0.0, 0.0, 0.0]),
            SparseVector(3, [0, 2], [3.0, -1.0]),
        ]
    )
    return pd.DataFrame({"features": vectors})
