"""
Tidy views over fitted topic-model output.

Everything here takes the flat beta/gamma tables produced by
``FittedTopicModel`` and returns new frames; nothing touches the model.
"""

import polars as pl

from TidyLDA.logging_config import get_logger
from TopicModeler.models import TermProbability, Topic

logger = get_logger(__name__)

CLASSIFICATION_SCHEMA = {
    "document_id": pl.Utf8,
    "topic_id": pl.Int64,
    "probability": pl.Float64,
    "rank": pl.Int64,
}


def top_terms(beta: pl.DataFrame, topic_id: int = 1, n: int = 10) -> pl.DataFrame:
    """The ``n`` most probable terms of one topic, most probable first."""
    return (
        beta.filter(pl.col("topic_id") == topic_id)
        .sort("probability", descending=True, maintain_order=True)
        .head(n)
    )


def summarize_topics(beta: pl.DataFrame, n: int = 10) -> list[Topic]:
    """One ``Topic`` per topic id with its ``n`` most probable terms."""
    ranked = beta.sort(
        ["topic_id", "probability"], descending=[False, True], maintain_order=True
    )
    topics = []
    for (topic_id,), rows in ranked.group_by("topic_id", maintain_order=True):
        head = rows.head(n)
        topics.append(
            Topic(
                id=topic_id,
                top_terms=head["term"].to_list(),
                term_probabilities=[
                    TermProbability(term=term, probability=p)
                    for term, p in head.select("term", "probability").iter_rows()
                ],
            )
        )
    return topics


def classify_documents(
    gamma: pl.DataFrame, threshold: float, max_topics: int = 5
) -> pl.DataFrame:
    """
    Rank the dominant topics of each document.

    Rows with probability at or below ``threshold`` are dropped, then each
    document keeps its ``max_topics`` most probable topics. Equal
    probabilities go to the lower topic id. ``rank`` runs 1..N per document
    without gaps.

    Args:
        gamma: Topic-given-document probabilities
        threshold: Minimum probability (exclusive) for a topic to be kept
        max_topics: Maximum number of topics kept per document

    Returns:
        DataFrame with ``document_id``, ``topic_id``, ``probability``, ``rank``,
        documents in gamma order and ranks ascending within each document
    """
    ranked = (
        gamma.with_row_index("_row")
        .filter(pl.col("probability") > threshold)
        .sort(["probability", "topic_id"], descending=[True, False])
        .with_columns(
            pl.int_range(1, pl.len() + 1).over("document_id").alias("rank"),
            pl.col("_row").min().over("document_id").alias("_doc_row"),
        )
        .filter(pl.col("rank") <= max_topics)
        .sort(["_doc_row", "rank"])
        .select(list(CLASSIFICATION_SCHEMA))
        .cast(CLASSIFICATION_SCHEMA)  # type: ignore[arg-type]
    )
    logger.info(
        f"Classified {ranked['document_id'].n_unique()} documents into "
        f"{ranked.height} topic assignments (probability > {threshold})"
    )
    return ranked


def join_text(classifications: pl.DataFrame, documents: pl.DataFrame) -> pl.DataFrame:
    """
    Left-join classifications back to the original review text.

    Classifications whose document is missing from ``documents`` keep a null
    ``raw_text``; both kinds of mismatch are logged as warnings.
    """
    joined = (
        classifications.with_row_index("_row")
        .join(
            documents.select("document_id", "raw_text"),
            on="document_id",
            how="left",
        )
        .sort("_row")
        .select("document_id", "topic_id", "probability", "raw_text", "rank")
    )

    orphaned = joined.filter(pl.col("raw_text").is_null())["document_id"].n_unique()
    if orphaned:
        logger.warning(f"{orphaned} classified documents have no source text")
    unclassified = documents.join(classifications, on="document_id", how="anti").height
    if unclassified:
        logger.warning(
            f"{unclassified} documents have no topic above the probability threshold"
        )
    return joined
