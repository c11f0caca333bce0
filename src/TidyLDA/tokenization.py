import typing as t

import polars as pl

from TidyLDA.logging_config import get_logger

logger = get_logger(__name__)

TERM_COUNT_SCHEMA = {"document_id": pl.Utf8, "term": pl.Utf8, "count": pl.Int64}
BIGRAM_SCHEMA = {"bigram": pl.Utf8, "count": pl.Int64}


def _stop_list(stop_words: t.Collection[str]) -> pl.Series:
    """Stop words as a single list value, the form ``is_in`` compares against."""
    return pl.Series("stop_words", sorted(stop_words), dtype=pl.Utf8).implode()


def tokenize(documents: pl.DataFrame) -> pl.DataFrame:
    """
    Explode normalized text into one row per token occurrence.

    Token order within each document is preserved. Documents without any
    token contribute no rows.

    Returns:
        DataFrame with columns ``document_id`` and ``term``
    """
    return (
        documents.select(
            "document_id",
            pl.col("normalized_text").str.extract_all(r"[a-z]+").alias("term"),
        )
        .explode("term")
        .drop_nulls("term")
    )


def count_terms(tokens: pl.DataFrame, stop_words: t.Collection[str]) -> pl.DataFrame:
    """Count (document_id, term) pairs after dropping stop words."""
    counts = (
        tokens.filter(~pl.col("term").is_in(_stop_list(stop_words)))
        .group_by(["document_id", "term"], maintain_order=True)
        .agg(pl.len().alias("count"))
        .cast(TERM_COUNT_SCHEMA)  # type: ignore[arg-type]
    )
    logger.info(
        f"Counted {counts.height} document-term pairs "
        f"({counts['term'].n_unique()} distinct terms)"
    )
    return counts


def bigrams(tokens: pl.DataFrame) -> pl.DataFrame:
    """Adjacent token pairs within each document, before any stop-word filter."""
    return (
        tokens.with_columns(
            pl.col("term").shift(-1).over("document_id").alias("next_term")
        )
        .drop_nulls("next_term")
        .select(
            "document_id",
            pl.concat_str(["term", "next_term"], separator=" ").alias("bigram"),
        )
    )


def bigram_frequencies(
    tokens: pl.DataFrame, stop_words: t.Collection[str]
) -> pl.DataFrame:
    """
    Count bigrams over the corpus, then drop those containing a stop word.

    Counting happens on the unfiltered stream; a bigram is dropped when either
    of its two words is a stop word. Rows are sorted by descending count, ties
    in first-seen order.
    """
    stop_list = _stop_list(stop_words)
    counted = (
        bigrams(tokens)
        .group_by("bigram", maintain_order=True)
        .agg(pl.len().alias("count"))
        .sort("count", descending=True, maintain_order=True)
    )
    filtered = (
        counted.with_columns(
            pl.col("bigram")
            .str.split_exact(" ", 1)
            .struct.rename_fields(["word1", "word2"])
            .alias("words")
        )
        .unnest("words")
        .filter(~pl.col("word1").is_in(stop_list) & ~pl.col("word2").is_in(stop_list))
        .select("bigram", "count")
        .cast(BIGRAM_SCHEMA)  # type: ignore[arg-type]
    )
    logger.info(
        f"Bigrams: {counted.height} distinct, {filtered.height} without stop words"
    )
    return filtered
