"""
Review data model.

Represents one restaurant review as ingested from the source CSV.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Review:
    """
    Raw restaurant review.
    Immutable once ingested; labels live on AnnotatedReview.
    """
    review_id: str  # Source row position
    restaurant: str
    reviewer: str
    text: str  # Free-text review body
    rating: float  # 1-5 star rating
    time: datetime

    def __post_init__(self):
        # Validate rating
        if not (1 <= self.rating <= 5):
            raise ValueError(f"Invalid rating: {self.rating}. Must be 1-5")

    @property
    def hour(self) -> int:
        return self.time.hour

    @property
    def weekday(self) -> str:
        return self.time.strftime("%A")

    @property
    def satisfaction_level(self) -> str:
        """Bucket the star rating: <=2 Bad, 3 Moderate, 4 Good, 5 Excellent."""
        if self.rating <= 2:
            return "Bad"
        if self.rating <= 3:
            return "Moderate"
        if self.rating <= 4:
            return "Good"
        return "Excellent"
