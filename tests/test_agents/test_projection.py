"""
Unit tests for Feature Matrix Projector.
"""

import numpy as np
import pytest

from reviewlens.agents.projection import (
    FeatureDimensionError,
    FeatureProjector,
    check_feature_dimensions,
)
from reviewlens.agents.vocabulary import Vocabulary


@pytest.fixture
def vocabulary():
    return Vocabulary(terms=("good", "food", "service"))


def test_term_counts(vocabulary):
    """Test cells hold raw term counts in vocabulary column order."""
    matrix = FeatureProjector(vocabulary).transform(["good good food", "service food"])

    assert matrix.toarray().tolist() == [[2, 1, 0], [0, 1, 1]]


def test_column_order_follows_vocabulary():
    """Test columns follow vocabulary order, not alphabetical order."""
    vocabulary = Vocabulary(terms=("zebra", "apple"))

    matrix = FeatureProjector(vocabulary).transform(["apple zebra zebra"])

    assert matrix.toarray().tolist() == [[2, 1]]


@pytest.mark.parametrize("document", [
    "good food",
    "",  # Zero matching terms
    "biryani paneer tikka",  # Only out-of-vocabulary terms
])
def test_shape_invariant(vocabulary, document):
    """Test every projected row has exactly len(vocabulary) columns."""
    matrix = FeatureProjector(vocabulary).transform([document])

    assert matrix.shape == (1, len(vocabulary))


def test_out_of_vocabulary_is_zero(vocabulary):
    """Test unseen terms do not add columns and leave an all-zero row."""
    matrix = FeatureProjector(vocabulary).transform(["biryani paneer tikka", ""])

    assert matrix.shape == (2, 3)
    assert matrix.sum() == 0


def test_empty_vocabulary():
    """Test an empty vocabulary projects to zero-width rows."""
    matrix = FeatureProjector(Vocabulary()).transform(["good food", "bad"])

    assert matrix.shape == (2, 0)


def test_empty_corpus(vocabulary):
    matrix = FeatureProjector(vocabulary).transform([])

    assert matrix.shape == (0, 3)


def test_check_dimensions_passes(vocabulary):
    check_feature_dimensions(np.zeros((4, 3)), vocabulary)


def test_check_dimensions_mismatch(vocabulary):
    """Test a matrix with the wrong column count fails with a clear message."""
    with pytest.raises(FeatureDimensionError, match="expected 3 columns from vocabulary, got 5") as excinfo:
        check_feature_dimensions(np.zeros((2, 5)), vocabulary, "inference")

    assert excinfo.value.expected == 3
    assert excinfo.value.actual == 5
    assert isinstance(excinfo.value, ValueError)


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
