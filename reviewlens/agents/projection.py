"""
Feature Matrix Projector.

Projects cleaned documents onto a fixed Vocabulary as term-count rows.
Every matrix projected against the same Vocabulary has the same columns
in the same order, whatever the documents contain.
"""

import logging
from typing import Sequence

import numpy as np
from scipy import sparse
from sklearn.feature_extraction.text import CountVectorizer

from reviewlens.agents.vocabulary import Vocabulary

logger = logging.getLogger(__name__)


class FeatureDimensionError(ValueError):
    """Feature matrix does not match the vocabulary it is used with."""

    def __init__(self, expected: int, actual: int, context: str = ""):
        self.expected = expected
        self.actual = actual
        where = f" ({context})" if context else ""
        super().__init__(
            f"Feature dimension mismatch{where}: expected {expected} columns "
            f"from vocabulary, got {actual}"
        )


def check_feature_dimensions(matrix, vocabulary: Vocabulary, context: str = "") -> None:
    """
    Fail fast when a matrix was not produced against this vocabulary.

    Raises:
        FeatureDimensionError: If the column count differs from len(vocabulary)
    """
    if matrix.ndim != 2:
        raise FeatureDimensionError(len(vocabulary), -1, context or f"expected 2-D input, got {matrix.ndim}-D")
    if matrix.shape[1] != len(vocabulary):
        raise FeatureDimensionError(len(vocabulary), matrix.shape[1], context)


class FeatureProjector:
    """
    Bag-of-words projection against a fixed vocabulary.

    Terms outside the vocabulary are ignored; vocabulary terms missing from
    a document count as zero.
    """

    def __init__(self, vocabulary: Vocabulary):
        """
        Initialize projector.

        Args:
            vocabulary: Vocabulary defining the columns
        """
        self.vocabulary = vocabulary

        # Input is already cleaned: split on whitespace, no further lowercasing
        self._vectorizer = None
        if len(vocabulary):
            self._vectorizer = CountVectorizer(
                vocabulary=vocabulary.index,
                tokenizer=str.split,
                token_pattern=None,
                lowercase=False
            )

    def transform(self, corpus: Sequence[str]) -> sparse.csr_matrix:
        """
        Project documents to a term-count matrix.

        Args:
            corpus: Cleaned texts

        Returns:
            CSR matrix of shape (len(corpus), len(vocabulary))
        """
        corpus = list(corpus)

        if self._vectorizer is None:
            logger.warning("Projecting against an empty vocabulary, features are zero-width")
            return sparse.csr_matrix((len(corpus), 0), dtype=np.int64)

        matrix = self._vectorizer.transform(corpus).tocsr()
        check_feature_dimensions(matrix, self.vocabulary, "projection")

        logger.debug(f"Projected {matrix.shape[0]} documents onto {matrix.shape[1]} terms")
        return matrix
