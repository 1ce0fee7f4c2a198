"""
Tests for HashingTF and IDF.

These tests validate that:

- terms are hashed with MurmurHash3 (seed 42) into [0, num_features)
- repeated terms are counted, and `binary` caps counts at 1
- colliding terms share a bucket
- IDF weights follow log((m + 1) / (df + 1)) and honor min_doc_freq
- Tokenizer -> HashingTF -> IDF chains in a scikit-learn Pipeline
"""

from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest
from sklearn.exceptions import NotFittedError
from sklearn.pipeline import Pipeline
from sklearn.utils import murmurhash3_32

from mlfeatures.data.samples import sentence_frame
from mlfeatures.features import IDF, HashingTF, Tokenizer
from mlfeatures.features.hashing_tf import DEFAULT_NUM_FEATURES, murmur3_hash
from mlfeatures.linalg import SparseVector, vector_series


# ---------------------------------------------------------------------------
# HashingTF
# ---------------------------------------------------------------------------


def test_index_matches_murmur3_with_seed_42():
    tf = HashingTF(num_features=1000)

    for term in ["a", "spark", "héllo", ""]:
        expected = murmurhash3_32(term, seed=42) % 1000
        assert tf.index_of(term) == expected
        assert 0 <= tf.index_of(term) < 1000


def test_murmur3_hash_integers_and_other_values():
    assert murmur3_hash(7) == murmurhash3_32(7, seed=42)
    assert murmur3_hash(np.int64(7)) == murmurhash3_32(7, seed=42)
    assert murmur3_hash(2**40) == murmurhash3_32(str(2**40), seed=42)
    assert murmur3_hash(1.5) == murmurhash3_32("1.5", seed=42)


def test_term_counts_and_binary():
    terms = ["a", "b", "a", "c", "a"]

    counts = HashingTF(num_features=1 << 20).hash_terms(terms)
    binary = HashingTF(num_features=1 << 20, binary=True).hash_terms(terms)

    assert isinstance(counts, SparseVector)
    assert counts.size == 1 << 20
    assert sorted(counts.values.tolist()) == [1.0, 1.0, 3.0]
    assert counts.get(murmur3_hash("a") % (1 << 20)) == 3.0
    assert binary.values.tolist() == [1.0, 1.0, 1.0]


def test_collisions_share_a_bucket():
    vec = HashingTF(num_features=1).hash_terms(["x", "y", "z"])

    assert vec == SparseVector(1, [0], [3.0])


def test_transform_adds_vector_column():
    frame = pd.DataFrame({"words": [["a", "b"], [], ["b", "b"]]})
    tf = HashingTF(input_col="words", output_col="tf", num_features=32)

    out = tf.transform(frame)

    assert [v.size for v in out["tf"]] == [32, 32, 32]
    assert out["tf"][1].nnz == 0
    assert out["tf"][2].values.tolist() == [2.0]
    assert tf.get_params()["num_features"] == 32


def test_transform_matrix_shape():
    frame = pd.DataFrame({"words": [["a", "b"], ["c"]]})

    matrix = HashingTF(input_col="words", num_features=64).transform_matrix(frame)

    assert matrix.shape == (2, 64)
    assert matrix.sum() == 3.0


def test_default_num_features_and_invalid_params():
    assert HashingTF().num_features == DEFAULT_NUM_FEATURES == 262144

    with pytest.raises(ValueError):
        HashingTF(num_features=0).index_of("a")

    frame = pd.DataFrame({"words": ["not a list"]})
    with pytest.raises(ValueError):
        HashingTF(input_col="words", output_col="tf").transform(frame)


# ---------------------------------------------------------------------------
# IDF
# ---------------------------------------------------------------------------


def _tf_frame() -> pd.DataFrame:
    vectors = [
        SparseVector(4, [0, 1], [1.0, 2.0]),
        SparseVector(4, [0, 2], [1.0, 1.0]),
        SparseVector(4, [0], [3.0]),
    ]
    return pd.DataFrame({"tf": vector_series(vectors)})


def test_idf_weights_and_transform():
    idf = IDF(input_col="tf", output_col="tfidf").fit(_tf_frame())

    m = 3
    expected = np.array(
        [
            math.log((m + 1) / (3 + 1)),
            math.log((m + 1) / (1 + 1)),
            math.log((m + 1) / (1 + 1)),
            math.log((m + 1) / (0 + 1)),
        ]
    )
    np.testing.assert_allclose(idf.idf_, expected)
    assert idf.doc_freq_.tolist() == [3, 1, 1, 0]
    assert idf.num_docs_ == 3

    out = idf.transform(_tf_frame())
    first = out["tfidf"][0]
    assert isinstance(first, SparseVector)
    assert first.indices.tolist() == [0, 1]
    np.testing.assert_allclose(first.values, [0.0, 2.0 * expected[1]])


def test_idf_min_doc_freq_and_dense_input():
    idf = IDF(input_col="tf", output_col="tfidf", min_doc_freq=2).fit(_tf_frame())

    assert idf.idf_[1] == 0.0
    assert idf.idf_[2] == 0.0

    dense = pd.DataFrame({"tf": vector_series([np.array([1.0, 1.0, 1.0, 1.0])])})
    out = IDF(input_col="tf", output_col="tfidf").fit(_tf_frame()).transform(dense)
    np.testing.assert_allclose(out["tfidf"][0], IDF(input_col="tf").fit(_tf_frame()).idf_)


def test_idf_requires_fit():
    with pytest.raises(NotFittedError):
        IDF(input_col="tf", output_col="tfidf").transform(_tf_frame())


def test_text_pipeline_end_to_end():
    pipeline = Pipeline(
        [
            ("tokenizer", Tokenizer(input_col="sentence", output_col="words")),
            ("tf", HashingTF(input_col="words", output_col="raw", num_features=20)),
            ("idf", IDF(input_col="raw", output_col="features")),
        ]
    )

    out = pipeline.fit_transform(sentence_frame())

    assert list(out.columns) == ["label", "sentence", "words", "raw", "features"]
    assert out["words"][0] == ["hi", "i", "heard", "about", "spark"]
    # "i" appears in two of three sentences
    i_index = pipeline.named_steps["tf"].index_of("i")
    assert out["raw"][0].get(i_index) >= 1.0
    assert all(v.size == 20 for v in out["features"])
