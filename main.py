"""
ReviewLens - Restaurant Review Labeling

CLI entry point for running the labeling pipeline.
"""

import argparse
import logging
import sys

from reviewlens.orchestrator import PipelineOrchestrator
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="ReviewLens - Weak supervision + SVM labeling of restaurant reviews",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Label the default dataset
  python main.py --input "data/Restaurant reviews.csv"

  # Strict sparsity pruning, 5-fold cross-validation
  python main.py --input reviews.csv --threshold 0.02 \\
                 --exclusive-threshold --cv-folds 5
        """
    )

    parser.add_argument(
        "--input",
        default=str(settings.DEFAULT_INPUT),
        help=f"Review CSV (default: {settings.DEFAULT_INPUT})"
    )

    parser.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Output directory (default: {settings.OUTPUT_ROOT})"
    )

    parser.add_argument(
        "--threshold",
        type=float,
        default=settings.SPARSITY_THRESHOLD,
        help=f"Minimum document fraction for vocabulary terms (default: {settings.SPARSITY_THRESHOLD})"
    )

    parser.add_argument(
        "--exclusive-threshold",
        action="store_true",
        help="Drop terms sitting exactly on the threshold"
    )

    parser.add_argument(
        "--test-size",
        type=float,
        default=settings.TEST_SIZE,
        help=f"Held-out fraction (default: {settings.TEST_SIZE})"
    )

    parser.add_argument(
        "--cv-folds",
        type=int,
        default=settings.CV_FOLDS,
        help=f"Cross-validation folds (default: {settings.CV_FOLDS})"
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=settings.RANDOM_STATE,
        help=f"Random seed (default: {settings.RANDOM_STATE})"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    # Setup logging
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    # Print banner
    print("=" * 60)
    print("ReviewLens - Restaurant Review Labeling")
    print("=" * 60)
    print(f"Input: {args.input}")
    print(f"Output: {args.output_dir}")
    print(f"Threshold: {args.threshold} ({'exclusive' if args.exclusive_threshold else 'inclusive'})")
    print(f"Split: {1 - args.test_size:.0%}/{args.test_size:.0%}, {args.cv_folds}-fold CV")
    print("=" * 60)
    print()

    try:
        logger.info("Initializing ReviewLens pipeline...")
        orchestrator = PipelineOrchestrator(
            output_root=args.output_dir,
            threshold=args.threshold,
            inclusive=not args.exclusive_threshold,
            test_size=args.test_size,
            cv_folds=args.cv_folds,
            random_state=args.seed
        )

        result = orchestrator.run(args.input)

        # Success
        print()
        print("=" * 60)
        print("✅ Pipeline completed successfully!")
        print("=" * 60)
        print(f"Sentiment classifier: {result.sentiment.report.summary()}")
        print(f"Aspect classifier: {result.aspect.report.summary()}")
        print(f"Labeled reviews: {result.outputs['labeled']}")
        print(f"Reports: {orchestrator.storage.reports_dir}")
        print(f"Summaries: {orchestrator.storage.summaries_dir}")
        print("=" * 60)

        logger.info("ReviewLens completed successfully")
        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning("Pipeline interrupted by user")
        print("\n⚠️  Pipeline interrupted")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Pipeline failed: {e}", exc_info=True)
        print(f"\n❌ Pipeline failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)


if __name__ == "__main__":
    main()
