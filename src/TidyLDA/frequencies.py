import polars as pl

from TidyLDA.logging_config import get_logger

logger = get_logger(__name__)

VOCABULARY_SCHEMA = {
    "term": pl.Utf8,
    "total_count": pl.Int64,
    "document_count": pl.Int64,
}


def word_frequencies(term_counts: pl.DataFrame) -> pl.DataFrame:
    """
    Corpus-wide frequency of every term, in first-seen order.

    ``total_count`` sums the per-document counts; ``document_count`` is the
    number of documents the term appears in.
    """
    return (
        term_counts.group_by("term", maintain_order=True)
        .agg(
            pl.col("count").sum().alias("total_count"),
            pl.len().alias("document_count"),
        )
        .cast(VOCABULARY_SCHEMA)  # type: ignore[arg-type]
    )


def filter_vocabulary(frequencies: pl.DataFrame, threshold: int) -> pl.DataFrame:
    """Keep terms whose ``total_count`` is strictly greater than ``threshold``."""
    vocabulary = frequencies.filter(pl.col("total_count") > threshold)
    logger.info(
        f"Vocabulary: {vocabulary.height}/{frequencies.height} terms "
        f"with total count > {threshold}"
    )
    return vocabulary


def top_frequencies(
    frequencies: pl.DataFrame, count_column: str, n: int = 10
) -> pl.DataFrame:
    """The ``n`` most frequent rows for charting, ties kept in input order."""
    return frequencies.sort(count_column, descending=True, maintain_order=True).head(n)
