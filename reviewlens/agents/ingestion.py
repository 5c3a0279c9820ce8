"""
Ingestion Agent.

Loads restaurant reviews from a CSV export and drops rows that cannot
be used. The load is all-or-nothing: a missing file or missing column
aborts the run.
"""

import logging
import os
from typing import List

import pandas as pd

from reviewlens.models.review import Review
import config.settings as settings

logger = logging.getLogger(__name__)


REQUIRED_COLUMNS = ["Restaurant", "Reviewer", "Review", "Rating", "Time"]
DROPPED_COLUMNS = ["Pictures"]


class IngestionAgent:
    """
    Reads the review table into Review objects.

    Row handling:
    - Extraneous columns (Pictures, numeric-named index columns) are dropped
    - Rows missing any required field are dropped, not imputed
    - Ratings that are not numbers in 1-5 (e.g. "Like") are dropped
    - Times that do not parse as month/day/year hour:minute are dropped
    """

    def __init__(self, time_format: str = settings.TIME_FORMAT):
        """
        Initialize ingestion agent.

        Args:
            time_format: strptime format of the Time column
        """
        self.time_format = time_format

    def load(self, path: str) -> List[Review]:
        """
        Load reviews from a CSV file.

        Args:
            path: Path to the review CSV

        Returns:
            List of valid Review objects

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If required columns are missing
        """
        if not os.path.exists(path):
            raise FileNotFoundError(f"Review file not found: {path}")

        df = pd.read_csv(path)
        logger.info(f"Read {len(df)} rows from {path}")

        return self.from_frame(df)

    def from_frame(self, df: pd.DataFrame) -> List[Review]:
        """
        Convert a raw review table into Review objects.

        Args:
            df: Raw table with at least REQUIRED_COLUMNS

        Returns:
            List of valid Review objects, ids taken from the row positions
        """
        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise ValueError(f"Review table is missing required columns: {missing}")

        df = df.drop(columns=self._extraneous_columns(df))
        df = df.reset_index(drop=True)
        total = len(df)

        # Missing fields
        df = df.dropna(subset=REQUIRED_COLUMNS)
        df = df[df["Review"].astype(str).str.strip() != ""]
        dropped_missing = total - len(df)

        # Ratings
        ratings = pd.to_numeric(df["Rating"], errors="coerce")
        valid_rating = ratings.between(1, 5)
        dropped_rating = int((~valid_rating).sum())
        df = df[valid_rating].assign(Rating=ratings[valid_rating])

        # Times
        times = pd.to_datetime(df["Time"], format=self.time_format, errors="coerce")
        valid_time = times.notna()
        dropped_time = int((~valid_time).sum())
        df = df[valid_time].assign(Time=times[valid_time])

        if len(df) < total:
            logger.warning(
                f"Dropped {total - len(df)} of {total} rows "
                f"(missing fields: {dropped_missing}, bad rating: {dropped_rating}, "
                f"bad time: {dropped_time})"
            )

        reviews = [
            Review(
                review_id=str(idx),
                restaurant=str(row.Restaurant),
                reviewer=str(row.Reviewer),
                text=str(row.Review),
                rating=float(row.Rating),
                time=row.Time.to_pydatetime()
            )
            for idx, row in zip(df.index, df.itertuples(index=False))
        ]

        logger.info(f"Ingested {len(reviews)} reviews")
        return reviews

    def _extraneous_columns(self, df: pd.DataFrame) -> List[str]:
        extraneous = [col for col in df.columns if col in DROPPED_COLUMNS or _is_numeric_name(col)]
        if extraneous:
            logger.debug(f"Dropping extraneous columns: {extraneous}")
        return extraneous


def _is_numeric_name(column) -> bool:
    return str(column).strip().isdigit() or str(column).startswith("Unnamed:")
