"""
Classifier Trainer and Evaluator.

Trains a linear SVM on weak-labeled reviews and evaluates it on a
held-out partition. The trained model carries the Vocabulary it was fit
against so inference always uses the same feature space.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, Type

import numpy as np
import pandas as pd
from sklearn.dummy import DummyClassifier
from sklearn.metrics import (
    accuracy_score,
    cohen_kappa_score,
    confusion_matrix,
    precision_recall_fscore_support,
)
from sklearn.model_selection import StratifiedKFold, cross_val_score, train_test_split
from sklearn.svm import SVC

from reviewlens.agents.projection import FeatureProjector, check_feature_dimensions
from reviewlens.agents.vocabulary import Vocabulary, VocabularyBuilder
from reviewlens.models.labels import levels

logger = logging.getLogger(__name__)


class TrainingError(ValueError):
    """Labeled data cannot support training."""


@dataclass(frozen=True)
class TrainedClassifier:
    """
    Fitted estimator bound to its vocabulary and label type.
    Read-only after training.
    """
    estimator: object
    vocabulary: Vocabulary
    label_type: Type[Enum]

    @property
    def classes(self) -> List[Enum]:
        return [self.label_type(value) for value in self.estimator.classes_]

    def predict(self, texts: Sequence[str]) -> List[Enum]:
        """
        Predict labels for cleaned texts.

        Args:
            texts: Cleaned texts

        Returns:
            One label per text
        """
        if len(texts) == 0:
            return []
        matrix = FeatureProjector(self.vocabulary).transform(texts)
        return self.predict_matrix(matrix)

    def predict_matrix(self, matrix) -> List[Enum]:
        """
        Predict labels for an already projected matrix.

        Raises:
            FeatureDimensionError: If the matrix was not built against this vocabulary
        """
        check_feature_dimensions(matrix, self.vocabulary, "inference")
        if matrix.shape[0] == 0:
            return []
        return [self.label_type(value) for value in self.estimator.predict(matrix)]


@dataclass
class EvaluationReport:
    """
    Held-out evaluation of a trained classifier.

    per_class has one row per declared label level with precision, recall,
    f1 and support; levels never seen score zero rather than failing.
    """
    labels: List[str]
    confusion: pd.DataFrame  # rows = actual, columns = predicted
    per_class: pd.DataFrame
    accuracy: float
    kappa: float
    cv_scores: List[float] = field(default_factory=list)
    train_size: int = 0
    test_size: int = 0

    @property
    def cv_mean(self) -> Optional[float]:
        return float(np.mean(self.cv_scores)) if self.cv_scores else None

    def summary(self) -> str:
        cv = f", cv accuracy {self.cv_mean:.3f}" if self.cv_scores else ""
        return (
            f"accuracy {self.accuracy:.3f}, kappa {self.kappa:.3f}{cv} "
            f"(train {self.train_size}, test {self.test_size})"
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "labels": self.labels,
            "accuracy": self.accuracy,
            "kappa": self.kappa,
            "cv_scores": self.cv_scores,
            "cv_mean": self.cv_mean,
            "train_size": self.train_size,
            "test_size": self.test_size,
            "confusion_matrix": self.confusion.values.tolist(),
            "per_class": [
                {
                    "label": label,
                    "precision": float(row["precision"]),
                    "recall": float(row["recall"]),
                    "f1": float(row["f1"]),
                    "support": int(row["support"])
                }
                for label, row in self.per_class.iterrows()
            ]
        }


@dataclass
class TrainingResult:
    """Trained model plus its held-out evaluation."""
    model: TrainedClassifier
    report: EvaluationReport


class ClassifierTrainer:
    """
    Split, vectorize, cross-validate, fit and evaluate.

    The vocabulary comes from the training partition only and is reused
    unchanged for the test partition and for later inference.
    """

    def __init__(
        self,
        label_type: Type[Enum],
        test_size: float = 0.2,
        cv_folds: int = 10,
        C: float = 1.0,
        random_state: int = 42,
        vocabulary_builder: Optional[VocabularyBuilder] = None
    ):
        """
        Initialize trainer.

        Args:
            label_type: Label enumeration being learned
            test_size: Held-out fraction (0-1)
            cv_folds: Folds for cross-validation on the training partition
            C: SVM regularization strength
            random_state: Seed for splitting and fold shuffling
            vocabulary_builder: Builder for the feature space (default threshold 0.01)
        """
        if not (0.0 < test_size < 1.0):
            raise ValueError(f"Invalid test_size: {test_size}. Must be between 0 and 1")

        self.label_type = label_type
        self.test_size = test_size
        self.cv_folds = cv_folds
        self.C = C
        self.random_state = random_state
        self.vocabulary_builder = vocabulary_builder or VocabularyBuilder()
        self.levels = levels(label_type)

        logger.info(
            f"Initialized ClassifierTrainer for {label_type.__name__} "
            f"(test_size={test_size}, cv_folds={cv_folds}, C={C})"
        )

    def train(self, texts: Sequence[str], labels: Sequence[Enum]) -> TrainingResult:
        """
        Train on a labeled corpus and evaluate on a held-out split.

        Args:
            texts: Cleaned texts
            labels: One label per text; UNLABELED rows are ignored

        Returns:
            TrainingResult with fitted model and evaluation report

        Raises:
            TrainingError: If fewer than two classes are labeled
        """
        if len(texts) != len(labels):
            raise ValueError(f"Got {len(texts)} texts but {len(labels)} labels")

        pairs = [(t, l) for t, l in zip(texts, labels) if l in self.levels]
        if len(pairs) < 2:
            raise TrainingError(f"Need at least 2 labeled documents, got {len(pairs)}")

        texts = [t for t, _ in pairs]
        labels = [l for _, l in pairs]
        train_texts, test_texts, train_labels, test_labels = self._split(texts, labels)

        model, cv_scores = self.fit(train_texts, train_labels)
        report = self.evaluate(model, test_texts, test_labels)
        report.cv_scores = cv_scores
        report.train_size = len(train_texts)

        logger.info(f"{self.label_type.__name__} classifier: {report.summary()}")
        return TrainingResult(model=model, report=report)

    def fit(self, texts: Sequence[str], labels: Sequence[Enum]) -> Tuple[TrainedClassifier, List[float]]:
        """
        Build the vocabulary, cross-validate and fit on the full partition.

        Args:
            texts: Cleaned training texts
            labels: Training labels

        Returns:
            (TrainedClassifier, cross-validation accuracy per fold)

        Raises:
            TrainingError: If fewer than two classes are present
        """
        class_counts = Counter(labels)
        if len(class_counts) < 2:
            raise TrainingError(
                f"Training partition has {len(class_counts)} class(es) "
                f"{[c.value for c in class_counts]}; need at least 2"
            )

        vocabulary = self.vocabulary_builder.build(texts)
        matrix = FeatureProjector(vocabulary).transform(texts)
        y = np.array([label.value for label in labels])

        if len(vocabulary) == 0:
            logger.warning("Empty vocabulary, falling back to majority-class predictions")
            estimator = DummyClassifier(strategy="most_frequent")
            # DummyClassifier ignores features but still needs one column to fit
            estimator.fit(np.zeros((len(y), 1)), y)
            return TrainedClassifier(_ZeroWidth(estimator), vocabulary, self.label_type), []

        estimator = SVC(kernel="linear", C=self.C)
        cv_scores = self._cross_validate(estimator, matrix, y, class_counts)

        estimator.fit(matrix, y)
        logger.info(
            f"Fitted linear SVM on {matrix.shape[0]} documents x {matrix.shape[1]} terms"
        )
        return TrainedClassifier(estimator, vocabulary, self.label_type), cv_scores

    def evaluate(self, model: TrainedClassifier, texts: Sequence[str], labels: Sequence[Enum]) -> EvaluationReport:
        """
        Score a trained model against labeled texts.

        Args:
            model: Trained classifier
            texts: Cleaned held-out texts
            labels: True labels

        Returns:
            EvaluationReport over the declared label levels
        """
        level_values = [level.value for level in self.levels]
        y_true = [label.value for label in labels]

        if not y_true:
            logger.warning("Empty evaluation partition, reporting zero metrics")
            return EvaluationReport(
                labels=level_values,
                confusion=pd.DataFrame(0, index=level_values, columns=level_values),
                per_class=pd.DataFrame(
                    {"precision": 0.0, "recall": 0.0, "f1": 0.0, "support": 0},
                    index=pd.Index(level_values, name="label")
                ),
                accuracy=0.0,
                kappa=0.0,
                test_size=0
            )

        y_pred = [label.value for label in model.predict(list(texts))]

        matrix = confusion_matrix(y_true, y_pred, labels=level_values)
        precision, recall, f1, support = precision_recall_fscore_support(
            y_true, y_pred, labels=level_values, zero_division=0
        )
        kappa = cohen_kappa_score(y_true, y_pred, labels=level_values)

        per_class = pd.DataFrame(
            {
                "precision": precision,
                "recall": recall,
                "f1": f1,
                "support": support
            },
            index=pd.Index(level_values, name="label")
        )

        return EvaluationReport(
            labels=level_values,
            confusion=pd.DataFrame(matrix, index=level_values, columns=level_values),
            per_class=per_class,
            accuracy=float(accuracy_score(y_true, y_pred)),
            kappa=float(np.nan_to_num(kappa, nan=0.0)),
            test_size=len(y_true)
        )

    def _split(self, texts: List[str], labels: List[Enum]):
        """Stratified split; anchored random split when a class is too small to stratify."""
        try:
            return train_test_split(
                texts, labels,
                test_size=self.test_size,
                random_state=self.random_state,
                stratify=[label.value for label in labels]
            )
        except ValueError as e:
            logger.warning(f"Stratified split not possible ({e}), using a random split")
            return self._anchored_split(texts, labels)

    def _anchored_split(self, texts: List[str], labels: List[Enum]):
        # First document of every class always trains
        anchors = {}
        for i, label in enumerate(labels):
            anchors.setdefault(label, i)
        train_idx = sorted(anchors.values())
        anchored = set(train_idx)
        pool = [i for i in range(len(labels)) if i not in anchored]

        if len(pool) >= 2:
            pool_train, test_idx = train_test_split(
                pool,
                test_size=self.test_size,
                random_state=self.random_state
            )
            train_idx += pool_train
        else:
            test_idx = pool

        return (
            [texts[i] for i in train_idx],
            [texts[i] for i in test_idx],
            [labels[i] for i in train_idx],
            [labels[i] for i in test_idx]
        )

    def _cross_validate(self, estimator, matrix, y: np.ndarray, class_counts: Dict) -> List[float]:
        # Every class must appear in every training fold
        folds = min(self.cv_folds, min(class_counts.values()))
        if folds < 2:
            logger.warning(
                f"Smallest class has {min(class_counts.values())} document(s), "
                "skipping cross-validation"
            )
            return []

        cv = StratifiedKFold(n_splits=folds, shuffle=True, random_state=self.random_state)
        scores = cross_val_score(estimator, matrix, y, cv=cv, scoring="accuracy")

        logger.info(f"{folds}-fold cross-validation accuracy: {scores.mean():.3f} (+/- {scores.std():.3f})")
        return [float(s) for s in scores]


class _ZeroWidth:
    """Adapts a majority-class estimator to zero-column feature matrices."""

    def __init__(self, estimator: DummyClassifier):
        self.estimator = estimator
        self.classes_ = estimator.classes_

    def predict(self, matrix):
        return self.estimator.predict(np.zeros((matrix.shape[0], 1)))
