"""
Vocabulary Builder.

Selects the fixed, ordered term list that defines a classifier's
feature space. Built from the training partition only.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Tuple

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Vocabulary:
    """
    Ordered, deduplicated term list.
    Column i of every projected feature matrix counts terms[i].
    """
    terms: Tuple[str, ...] = ()
    threshold: float = 0.0
    inclusive: bool = True
    document_count: int = 0
    _index: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if len(set(self.terms)) != len(self.terms):
            raise ValueError("Vocabulary terms must be unique")
        object.__setattr__(self, "terms", tuple(self.terms))
        object.__setattr__(self, "_index", {term: i for i, term in enumerate(self.terms)})

    def __len__(self) -> int:
        return len(self.terms)

    def __contains__(self, term) -> bool:
        return term in self._index

    @property
    def index(self) -> Dict[str, int]:
        """Term -> column position."""
        return dict(self._index)

    @classmethod
    def from_dict(cls, data: dict) -> "Vocabulary":
        """Create Vocabulary from JSON dict."""
        return cls(
            terms=tuple(data.get("terms", [])),
            threshold=data.get("threshold", 0.0),
            inclusive=data.get("inclusive", True),
            document_count=data.get("document_count", 0)
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "terms": list(self.terms),
            "threshold": self.threshold,
            "inclusive": self.inclusive,
            "document_count": self.document_count
        }


class VocabularyBuilder:
    """
    Builds a Vocabulary by pruning sparse terms.

    A term survives when the fraction of documents containing it reaches
    the threshold. With inclusive=True the comparison is >=, otherwise >.
    Survivors are ordered by descending total count, ties by first
    appearance in the corpus.
    """

    def __init__(self, threshold: float = 0.01, inclusive: bool = True):
        """
        Initialize builder.

        Args:
            threshold: Minimum document fraction a term must appear in (0-1)
            inclusive: Keep terms sitting exactly on the threshold

        Raises:
            ValueError: If threshold is outside [0, 1]
        """
        if not (0.0 <= threshold <= 1.0):
            raise ValueError(f"Invalid threshold: {threshold}. Must be between 0 and 1")

        self.threshold = threshold
        self.inclusive = inclusive

    def build(self, corpus: Iterable[str]) -> Vocabulary:
        """
        Build a vocabulary from cleaned documents.

        Args:
            corpus: Cleaned texts (whitespace-delimited tokens)

        Returns:
            Vocabulary; empty if the corpus has no tokens
        """
        documents = list(corpus)
        n_documents = len(documents)

        if not any(document.split() for document in documents):
            logger.warning(f"No tokens in {n_documents} documents, returning empty vocabulary")
            return Vocabulary(threshold=self.threshold, inclusive=self.inclusive, document_count=n_documents)

        vectorizer = CountVectorizer(tokenizer=str.split, token_pattern=None, lowercase=False)
        matrix = vectorizer.fit_transform(documents)

        document_frequency = np.asarray((matrix > 0).sum(axis=0)).ravel()
        total_frequency = np.asarray(matrix.sum(axis=0)).ravel()
        fraction = document_frequency / n_documents
        keep = fraction >= self.threshold if self.inclusive else fraction > self.threshold

        column = vectorizer.vocabulary_
        first_seen = {
            term: i for i, term in enumerate(dict.fromkeys(
                token for document in documents for token in document.split()
            ))
        }
        kept = [str(term) for term in vectorizer.get_feature_names_out()[keep]]
        kept.sort(key=lambda term: (-total_frequency[column[term]], first_seen[term]))

        logger.info(
            f"Built vocabulary of {len(kept)} terms from {n_documents} documents "
            f"({len(column) - len(kept)} sparse terms pruned)"
        )

        return Vocabulary(
            terms=tuple(kept),
            threshold=self.threshold,
            inclusive=self.inclusive,
            document_count=n_documents
        )
