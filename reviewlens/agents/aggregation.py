"""
Label Summarizer.

Aggregates a labeled snapshot into count tables: label distribution by
provenance, rating agreement, and per-restaurant summaries.
"""

import logging
from typing import Dict, List

import pandas as pd

from reviewlens.models.annotated import AnnotatedReview
from reviewlens.utils.storage import StorageManager

logger = logging.getLogger(__name__)


SATISFACTION_ORDER = ["Bad", "Moderate", "Good", "Excellent"]


class LabelSummarizer:
    """
    Builds summary tables from annotated reviews.
    """

    def to_frame(self, reviews: List[AnnotatedReview]) -> pd.DataFrame:
        """Flatten a snapshot into one row per review."""
        rows = [
            {
                "Restaurant": r.review.restaurant,
                "Rating": r.review.rating,
                "SatisfactionLevel": r.review.satisfaction_level,
                "Sentiments": r.sentiment.value,
                "Sentiments_Source": r.sentiment_source.value,
                "Sentiment_Description": r.aspect.value,
                "Sentiment_Description_Source": r.aspect_source.value
            }
            for r in reviews
        ]
        return pd.DataFrame(
            rows,
            columns=[
                "Restaurant", "Rating", "SatisfactionLevel", "Sentiments",
                "Sentiments_Source", "Sentiment_Description", "Sentiment_Description_Source"
            ]
        )

    def label_counts(self, reviews: List[AnnotatedReview], dimension: str = "sentiment") -> pd.DataFrame:
        """
        Count labels by provenance for one dimension.

        Args:
            reviews: Annotated snapshot
            dimension: "sentiment" or "aspect"

        Returns:
            DataFrame indexed by label with one column per source plus Total,
            sorted by Total (descending)
        """
        column = "Sentiments" if dimension == "sentiment" else "Sentiment_Description"
        df = self.to_frame(reviews)

        if df.empty:
            return pd.DataFrame(columns=["Total"])

        table = pd.crosstab(df[column], df[f"{column}_Source"])
        table["Total"] = table.sum(axis=1)
        table = table.sort_values("Total", ascending=False)
        table.index.name = column
        table.columns.name = None

        logger.info(f"Counted {len(table)} distinct {dimension} labels across {len(df)} reviews")
        return table

    def satisfaction_crosstab(self, reviews: List[AnnotatedReview]) -> pd.DataFrame:
        """
        Cross-tabulate rating buckets against sentiment labels.

        Returns:
            DataFrame, rows SatisfactionLevel (Bad..Excellent), columns Sentiments
        """
        df = self.to_frame(reviews)
        if df.empty:
            return pd.DataFrame()

        table = pd.crosstab(df["SatisfactionLevel"], df["Sentiments"])
        order = [level for level in SATISFACTION_ORDER if level in table.index]
        table = table.reindex(order)
        table.columns.name = None
        return table

    def restaurant_summary(self, reviews: List[AnnotatedReview]) -> pd.DataFrame:
        """
        Per-restaurant review count, mean rating, positive share and top aspect.

        Returns:
            DataFrame indexed by Restaurant, sorted by review count (descending)
        """
        df = self.to_frame(reviews)
        if df.empty:
            return pd.DataFrame(columns=["Reviews", "MeanRating", "PositiveShare", "TopAspect"])

        grouped = df.groupby("Restaurant")
        summary = pd.DataFrame({
            "Reviews": grouped.size(),
            "MeanRating": grouped["Rating"].mean().round(2),
            "PositiveShare": grouped["Sentiments"].apply(
                lambda s: round(float((s == "Positive Review").mean()), 3)
            ),
            "TopAspect": grouped["Sentiment_Description"].agg(lambda s: s.value_counts().idxmax())
        })

        return summary.sort_values("Reviews", ascending=False, kind="stable")

    def write_summaries(self, reviews: List[AnnotatedReview], storage: StorageManager) -> Dict[str, str]:
        """
        Build every summary table and save it.

        Returns:
            Table name -> written path
        """
        tables = {
            "sentiment_counts": self.label_counts(reviews, "sentiment"),
            "aspect_counts": self.label_counts(reviews, "aspect"),
            "satisfaction_vs_sentiment": self.satisfaction_crosstab(reviews),
            "restaurant_summary": self.restaurant_summary(reviews)
        }

        paths = {name: storage.save_table(table, name) for name, table in tables.items()}
        logger.info(f"Wrote {len(paths)} summary tables")
        return paths
