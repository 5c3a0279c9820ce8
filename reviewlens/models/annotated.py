"""
Annotated review data model.

A review plus its cleaned text and its labels in both dimensions.
Each pipeline stage returns new AnnotatedReview snapshots.
"""

from dataclasses import dataclass, replace

from reviewlens.models.labels import AspectLabel, LabelSource, SentimentLabel
from reviewlens.models.review import Review


@dataclass(frozen=True)
class AnnotatedReview:
    """
    Review annotated by the pipeline.

    Per dimension a label moves from UNLABELED to either WEAK (keyword rule)
    or MACHINE (classifier); a weak label is never overwritten.
    """
    review: Review
    clean_text: str = ""
    sentiment: SentimentLabel = SentimentLabel.UNLABELED
    sentiment_source: LabelSource = LabelSource.NONE
    aspect: AspectLabel = AspectLabel.UNLABELED
    aspect_source: LabelSource = LabelSource.NONE

    def label(self, dimension: str):
        """Current label for "sentiment" or "aspect"."""
        return getattr(self, dimension)

    def source(self, dimension: str) -> LabelSource:
        return getattr(self, f"{dimension}_source")

    def is_unlabeled(self, dimension: str) -> bool:
        return self.label(dimension).name == "UNLABELED"

    def with_label(self, dimension: str, label, source: LabelSource) -> "AnnotatedReview":
        """
        Return a copy carrying a new label for one dimension.

        Raises:
            ValueError: If the dimension already holds a weak label, or if the
                new label is UNLABELED
        """
        if self.source(dimension) == LabelSource.WEAK:
            raise ValueError(
                f"Review {self.review.review_id} already has a weak {dimension} label "
                f"({self.label(dimension).value}); weak labels are final"
            )
        if label.name == "UNLABELED":
            raise ValueError(f"Cannot assign UNLABELED to review {self.review.review_id}")

        return replace(self, **{dimension: label, f"{dimension}_source": source})
