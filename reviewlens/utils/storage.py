"""
Storage utility.

File I/O for annotated reviews, evaluation reports and summary tables.
"""

import json
import os
import logging
from datetime import datetime
from typing import Dict, List, Optional

import pandas as pd

from reviewlens.models.annotated import AnnotatedReview
from reviewlens.models.labels import AspectLabel, LabelSource, SentimentLabel
from reviewlens.models.review import Review
import config.settings as settings

logger = logging.getLogger(__name__)


ANNOTATED_COLUMNS = [
    "ReviewId", "Restaurant", "Reviewer", "Review", "Rating", "Time",
    "Hour", "Weekday", "SatisfactionLevel", "CleanReview",
    "Sentiments", "Sentiments_Source",
    "Sentiment_Description", "Sentiment_Description_Source"
]


class StorageManager:
    """
    Manages all file output of a pipeline run.

    Handles:
    - Annotated reviews (output/<name>.csv)
    - Evaluation reports (output/reports/<name>.json)
    - Summary tables (output/summaries/<name>.csv)
    """

    def __init__(self, output_root: str):
        """
        Initialize storage manager.

        Args:
            output_root: Root output directory
        """
        self.output_root = output_root
        self.reports_dir = os.path.join(output_root, "reports")
        self.summaries_dir = os.path.join(output_root, "summaries")

        # Create directories if they don't exist
        os.makedirs(self.reports_dir, exist_ok=True)
        os.makedirs(self.summaries_dir, exist_ok=True)

        logger.info(f"Initialized StorageManager with output_root={output_root}")

    def save_annotated(self, reviews: List[AnnotatedReview], name: str) -> str:
        """
        Save annotated reviews as CSV.

        Args:
            reviews: Annotated snapshot
            name: File stem

        Returns:
            Path to the written file
        """
        filepath = os.path.join(self.output_root, f"{name}.csv")
        df = pd.DataFrame([_to_row(r) for r in reviews], columns=ANNOTATED_COLUMNS)

        try:
            df.to_csv(filepath, index=False)
            logger.info(f"Saved {len(reviews)} annotated reviews to {filepath}")
        except Exception as e:
            logger.error(f"Failed to save annotated reviews to {filepath}: {e}")
            raise

        return filepath

    def load_annotated(self, filepath: str) -> List[AnnotatedReview]:
        """
        Load annotated reviews written by save_annotated.

        Args:
            filepath: CSV path

        Returns:
            Annotated snapshot with labels and provenance restored

        Raises:
            FileNotFoundError: If the file does not exist
        """
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"Annotated file not found: {filepath}")

        # Keep ids, names and text as written; an empty CleanReview is "", not NaN
        df = pd.read_csv(
            filepath,
            dtype={"ReviewId": str, "Restaurant": str, "Reviewer": str, "Review": str, "CleanReview": str},
            keep_default_na=False
        )

        reviews = [_from_row(row) for row in df.to_dict(orient="records")]
        logger.debug(f"Loaded {len(reviews)} annotated reviews from {filepath}")
        return reviews

    def save_report(self, data: Dict, name: str) -> str:
        """
        Save an evaluation report as JSON.

        Returns:
            Path to the written file
        """
        filepath = os.path.join(self.reports_dir, f"{name}.json")

        try:
            with open(filepath, 'w') as f:
                json.dump(data, f, indent=2)
            logger.info(f"Saved report to {filepath}")
        except Exception as e:
            logger.error(f"Failed to save report {name}: {e}")
            raise

        return filepath

    def load_report(self, name: str) -> Optional[Dict]:
        """
        Load a report written by save_report.

        Returns:
            Report dict, or None if it doesn't exist
        """
        filepath = os.path.join(self.reports_dir, f"{name}.json")

        if not os.path.exists(filepath):
            logger.debug(f"No report found for {name}")
            return None

        with open(filepath, 'r') as f:
            return json.load(f)

    def save_table(self, df: pd.DataFrame, name: str, index: bool = True) -> str:
        """
        Save a summary table as CSV.

        Returns:
            Path to the written file
        """
        filepath = os.path.join(self.summaries_dir, f"{name}.csv")
        df.to_csv(filepath, index=index)
        logger.info(f"Saved summary table to {filepath}")
        return filepath


def _to_row(annotated: AnnotatedReview) -> Dict:
    review = annotated.review
    return {
        "ReviewId": review.review_id,
        "Restaurant": review.restaurant,
        "Reviewer": review.reviewer,
        "Review": review.text,
        "Rating": review.rating,
        "Time": review.time.strftime(settings.TIME_FORMAT),
        "Hour": review.hour,
        "Weekday": review.weekday,
        "SatisfactionLevel": review.satisfaction_level,
        "CleanReview": annotated.clean_text,
        "Sentiments": annotated.sentiment.value,
        "Sentiments_Source": annotated.sentiment_source.value,
        "Sentiment_Description": annotated.aspect.value,
        "Sentiment_Description_Source": annotated.aspect_source.value
    }


def _from_row(row: Dict) -> AnnotatedReview:
    review = Review(
        review_id=str(row["ReviewId"]),
        restaurant=row["Restaurant"],
        reviewer=row["Reviewer"],
        text=row["Review"],
        rating=float(row["Rating"]),
        time=datetime.strptime(row["Time"], settings.TIME_FORMAT)
    )
    return AnnotatedReview(
        review=review,
        clean_text=row["CleanReview"],
        sentiment=SentimentLabel(row["Sentiments"]),
        sentiment_source=LabelSource(row["Sentiments_Source"]),
        aspect=AspectLabel(row["Sentiment_Description"]),
        aspect_source=LabelSource(row["Sentiment_Description_Source"])
    )
