"""
Label Propagation Agent.

Fills the labels the keyword rules could not assign with classifier
predictions. Weak labels are never overwritten.
"""

import logging
from typing import List

from reviewlens.agents.classification import TrainedClassifier
from reviewlens.models.annotated import AnnotatedReview
from reviewlens.models.labels import LabelSource

logger = logging.getLogger(__name__)

DIMENSIONS = ("sentiment", "aspect")


class LabelPropagator:
    """
    Back-fills one label dimension with machine predictions.
    """

    def __init__(self, dimension: str):
        """
        Initialize propagator.

        Args:
            dimension: "sentiment" or "aspect"
        """
        if dimension not in DIMENSIONS:
            raise ValueError(f"Invalid dimension: {dimension}. Must be one of {DIMENSIONS}")
        self.dimension = dimension

    def propagate(self, reviews: List[AnnotatedReview], model: TrainedClassifier) -> List[AnnotatedReview]:
        """
        Predict labels for every review still unlabeled in this dimension.

        Args:
            reviews: Current snapshot
            model: Classifier trained for this dimension

        Returns:
            New snapshot where every review is labeled; predictions carry source MACHINE
        """
        pending = [i for i, review in enumerate(reviews) if review.is_unlabeled(self.dimension)]

        if not pending:
            logger.info(f"No unlabeled {self.dimension} reviews, nothing to propagate")
            return list(reviews)

        predictions = model.predict([reviews[i].clean_text for i in pending])

        propagated = list(reviews)
        for i, label in zip(pending, predictions):
            propagated[i] = reviews[i].with_label(self.dimension, label, LabelSource.MACHINE)

        logger.info(
            f"Propagated {self.dimension} labels to {len(pending)}/{len(reviews)} reviews"
        )
        return propagated
