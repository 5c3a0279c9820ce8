"""
Pipeline Orchestrator.

Runs the labeling stages in order, passing each stage's snapshot to the next.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from reviewlens.agents.aggregation import LabelSummarizer
from reviewlens.agents.classification import ClassifierTrainer, TrainingResult
from reviewlens.agents.ingestion import IngestionAgent
from reviewlens.agents.normalization import TextNormalizer
from reviewlens.agents.propagation import LabelPropagator
from reviewlens.agents.vocabulary import VocabularyBuilder
from reviewlens.agents.weak_labeling import AspectWeakLabeler, WeakLabeler
from reviewlens.models.annotated import AnnotatedReview
from reviewlens.models.labels import AspectLabel, SentimentLabel
from reviewlens.models.review import Review
from reviewlens.utils.storage import StorageManager
import config.settings as settings

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Final snapshot, both trained models and every written file."""
    reviews: List[AnnotatedReview]
    sentiment: TrainingResult
    aspect: TrainingResult
    sentiment_snapshot: List[AnnotatedReview] = field(default_factory=list)  # After the sentiment pass
    outputs: Dict[str, str] = field(default_factory=dict)


class PipelineOrchestrator:
    """
    Orchestrates the batch labeling pipeline.

    Coordinates:
    1. Ingestion → 2. Normalization → 3. Weak sentiment labels
    → 4. Sentiment classifier → 5. Sentiment propagation
    → 6. Weak aspect labels → 7. Aspect classifier → 8. Aspect propagation

    After labeling: export, reports and summaries
    """

    def __init__(
        self,
        output_root: str,
        threshold: float = settings.SPARSITY_THRESHOLD,
        inclusive: bool = settings.THRESHOLD_INCLUSIVE,
        test_size: float = settings.TEST_SIZE,
        cv_folds: int = settings.CV_FOLDS,
        C: float = settings.SVM_C,
        random_state: int = settings.RANDOM_STATE,
        sentiment_labeler: Optional[WeakLabeler] = None,
        aspect_labeler: Optional[AspectWeakLabeler] = None
    ):
        """
        Initialize pipeline orchestrator.

        Args:
            output_root: Directory for all output files
            threshold: Vocabulary sparsity threshold
            inclusive: Keep terms exactly on the threshold
            test_size: Held-out fraction for evaluation
            cv_folds: Cross-validation folds
            C: SVM regularization strength
            random_state: Seed for splits and folds
            sentiment_labeler: Keyword labeler for the coarse pass
            aspect_labeler: Keyword labeler for the fine pass
        """
        logger.info("Initializing pipeline components...")

        self.storage = StorageManager(output_root)
        self.ingestion_agent = IngestionAgent(time_format=settings.TIME_FORMAT)
        self.normalizer = TextNormalizer()

        self.sentiment_labeler = sentiment_labeler or WeakLabeler()
        self.aspect_labeler = aspect_labeler or AspectWeakLabeler()

        trainer_options = dict(
            test_size=test_size,
            cv_folds=cv_folds,
            C=C,
            random_state=random_state,
            vocabulary_builder=VocabularyBuilder(threshold=threshold, inclusive=inclusive)
        )
        self.sentiment_trainer = ClassifierTrainer(SentimentLabel, **trainer_options)
        self.aspect_trainer = ClassifierTrainer(AspectLabel, **trainer_options)

        self.sentiment_propagator = LabelPropagator("sentiment")
        self.aspect_propagator = LabelPropagator("aspect")
        self.summarizer = LabelSummarizer()

        logger.info("Pipeline initialized successfully")

    def run(self, input_path: str) -> PipelineResult:
        """
        Run the complete pipeline on a review CSV.

        Args:
            input_path: Path to the raw review CSV

        Returns:
            PipelineResult with output paths filled in
        """
        start_time = datetime.now()
        logger.info(f"Starting pipeline for {input_path}")

        # STAGE 1: Ingestion
        reviews = self.ingestion_agent.load(input_path)
        if not reviews:
            raise ValueError(f"No usable reviews in {input_path}")

        # STAGES 2-8: Labeling
        result = self.annotate(reviews)

        # Export
        outputs = {
            "sentiment_snapshot": self.storage.save_annotated(
                result.sentiment_snapshot, settings.SENTIMENT_OUTPUT
            ),
            "labeled": self.storage.save_annotated(result.reviews, settings.FINAL_OUTPUT),
            "sentiment_report": self.storage.save_report(
                self._report_payload(result.sentiment), "sentiment_classifier"
            ),
            "aspect_report": self.storage.save_report(
                self._report_payload(result.aspect), "aspect_classifier"
            )
        }
        outputs.update(self.summarizer.write_summaries(result.reviews, self.storage))
        result.outputs = outputs

        elapsed = (datetime.now() - start_time).total_seconds()
        logger.info(f"Pipeline complete in {elapsed:.1f}s: {len(result.reviews)} reviews labeled")
        return result

    def annotate(self, reviews: List[Review]) -> PipelineResult:
        """
        Label in-memory reviews in both dimensions.

        Args:
            reviews: Ingested reviews

        Returns:
            PipelineResult with the final snapshot and both training results
            (no outputs written)
        """
        # STAGE 2: Normalization
        snapshot = self.normalizer.annotate(reviews)

        # STAGE 3-5: Sentiment
        snapshot = self.sentiment_labeler.apply(snapshot, "sentiment")
        sentiment = self._train(self.sentiment_trainer, snapshot, "sentiment")
        snapshot = self.sentiment_propagator.propagate(snapshot, sentiment.model)
        sentiment_snapshot = snapshot

        # STAGE 6-8: Aspect
        snapshot = self.aspect_labeler.apply(snapshot)
        aspect = self._train(self.aspect_trainer, snapshot, "aspect")
        snapshot = self.aspect_propagator.propagate(snapshot, aspect.model)

        return PipelineResult(
            reviews=snapshot,
            sentiment=sentiment,
            aspect=aspect,
            sentiment_snapshot=sentiment_snapshot
        )

    def _train(self, trainer: ClassifierTrainer, snapshot: List[AnnotatedReview], dimension: str) -> TrainingResult:
        labeled = [r for r in snapshot if not r.is_unlabeled(dimension)]
        logger.info(f"Training {dimension} classifier on {len(labeled)} weak-labeled reviews")

        return trainer.train(
            [r.clean_text for r in labeled],
            [r.label(dimension) for r in labeled]
        )

    def _report_payload(self, result: TrainingResult) -> Dict:
        payload = result.report.to_dict()
        payload["classes"] = [c.value for c in result.model.classes]
        payload["vocabulary"] = result.model.vocabulary.to_dict()
        return payload
