"""
Configuration settings for ReviewLens.

Centralized configuration for all agents and pipeline parameters.
"""

from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = PROJECT_ROOT / "data"
OUTPUT_ROOT = PROJECT_ROOT / "output"
DEFAULT_INPUT = DATA_ROOT / "Restaurant reviews.csv"

# Ingestion
TIME_FORMAT = "%m/%d/%Y %H:%M"

# Vocabulary Builder
SPARSITY_THRESHOLD = 0.01  # Keep terms present in at least 1% of training documents
THRESHOLD_INCLUSIVE = True  # False: strictly more than the threshold

# Classifier Trainer
TEST_SIZE = 0.2  # Held-out fraction, stratified by label
CV_FOLDS = 10
SVM_C = 1.0  # Linear kernel, no hyper-parameter search
RANDOM_STATE = 42

# Output file stems
SENTIMENT_OUTPUT = "reviews_sentiment"
FINAL_OUTPUT = "reviews_labeled"

# Logging
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "reviewlens.log"
