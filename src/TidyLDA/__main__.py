"""Command-line entry point: ``python -m TidyLDA SOURCE --gamma-threshold 0.05``."""

import argparse
import sys
from pathlib import Path

from TidyLDA.data_io import DataReader, nltk_stop_words, read_stop_words
from TidyLDA.logging_config import get_logger, setup_logging
from TidyLDA.pipeline import chart_tables, export_tables, run_pipeline
from TopicModeler.models import PipelineConfig

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="TidyLDA",
        description="Word frequencies and LDA topics for a corpus of reviews.",
    )
    parser.add_argument(
        "source", type=Path, help="directory of .txt files, or a .json/.csv/.zip file"
    )
    stop = parser.add_mutually_exclusive_group(required=True)
    stop.add_argument("--stop-words", type=Path, help="file with one stop word per line")
    stop.add_argument(
        "--nltk-stop-words",
        metavar="LANGUAGE",
        help="use the NLTK stop-word list for LANGUAGE",
    )
    parser.add_argument("--config", type=Path, help="JSON file with pipeline settings")
    parser.add_argument("--gamma-threshold", type=float)
    parser.add_argument("--vocabulary-threshold", type=int)
    parser.add_argument("--top-n", type=int)
    parser.add_argument("--max-topics-per-document", type=int)
    parser.add_argument("--num-topics", type=int)
    parser.add_argument("--method", choices=["batch", "online"])
    parser.add_argument("--seed", type=int)
    parser.add_argument("--out-dir", type=Path, default=Path("output"))
    parser.add_argument("--plots", action="store_true", help="also save PNG charts")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-file")
    return parser


def load_config(args: argparse.Namespace) -> PipelineConfig:
    """Merge the optional JSON config file with command-line overrides.

    Validation runs once on the merged settings, so a required value such as
    ``gamma_threshold`` may come from either source.
    """
    settings: dict = {}
    if args.config is not None:
        settings = PipelineConfig.read_settings(args.config)

    overrides = {
        "gamma_threshold": args.gamma_threshold,
        "vocabulary_threshold": args.vocabulary_threshold,
        "top_n": args.top_n,
        "max_topics_per_document": args.max_topics_per_document,
    }
    settings.update({k: v for k, v in overrides.items() if v is not None})

    lda_overrides = {"num_topics": args.num_topics, "method": args.method, "seed": args.seed}
    lda = settings.setdefault("lda", {})
    lda.update({k: v for k, v in lda_overrides.items() if v is not None})
    return PipelineConfig.model_validate(settings)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(level=args.log_level, log_file=args.log_file)

    config = load_config(args)
    if args.stop_words is not None:
        stop_words = read_stop_words(args.stop_words)
    else:
        stop_words = nltk_stop_words(args.nltk_stop_words)

    documents = DataReader(args.source.parent).read(args.source.resolve())

    try:
        result = run_pipeline(documents, stop_words, config)
    except Exception as e:
        logger.error(f"Pipeline failed with error: {e}")
        raise

    top_words, top_bigrams, topic_terms = chart_tables(result)
    logger.info(f"Top words: {top_words['term'].to_list()}")
    logger.info(f"Top bigrams: {top_bigrams['bigram'].to_list()}")
    logger.info(f"Topic 1 terms: {topic_terms['term'].to_list()}")
    for name, value in result.metrics.items():
        logger.info(f"{name}: {value:.4f}")

    export_tables(result, args.out_dir)
    if args.plots:
        from TidyLDA.plots import save_charts

        save_charts(top_words, top_bigrams, topic_terms, 1, args.out_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
