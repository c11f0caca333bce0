import typing as t
from pathlib import Path

import polars as pl

from TidyLDA.data_io import load_documents
from TidyLDA.frequencies import (
    filter_vocabulary,
    top_frequencies,
    word_frequencies,
)
from TidyLDA.lda import LDATopicModeler
from TidyLDA.logging_config import get_logger
from TidyLDA.matrix import build_document_term_matrix
from TidyLDA.preprocessing import normalize_documents
from TidyLDA.reshape import (
    classify_documents,
    join_text,
    summarize_topics,
    top_terms,
)
from TidyLDA.tokenization import bigram_frequencies, count_terms, tokenize
from TopicModeler.base_topic_modeler import BaseTopicModeler
from TopicModeler.models import PipelineConfig, TopicModelResult

logger = get_logger(__name__)


def run_pipeline(
    documents: t.Mapping[str, str],
    stop_words: t.Collection[str],
    config: PipelineConfig,
    modeler: BaseTopicModeler | None = None,
) -> TopicModelResult:
    """
    Run the review pipeline from raw documents to ranked topic assignments.

    The function keeps no state between calls: identical inputs and seed give
    identical matrices and classifications.

    Args:
        documents: Mapping of document id to raw text
        stop_words: Words excluded from unigram counts and from bigrams
        config: Pipeline knobs; ``config.gamma_threshold`` is required
        modeler: Topic-model engine, scikit-learn LDA built from ``config.lda``
            when omitted

    Raises:
        NoInputDocumentsError: If ``documents`` is empty
        EmptyVocabularyError: If no term passes ``config.vocabulary_threshold``
        TopicModelFitError: If the engine fails to fit
    """
    logger.info("=" * 60)
    logger.info("Starting TidyLDA Pipeline")
    logger.info("=" * 60)

    # Step 1: Load
    docs = load_documents(documents)

    # Step 2: Normalize
    docs = normalize_documents(docs)

    # Step 3: Tokenize and aggregate
    tokens = tokenize(docs)
    term_counts = count_terms(tokens, stop_words)
    frequencies = word_frequencies(term_counts)
    bigrams = bigram_frequencies(tokens, stop_words)

    # Step 4: Document-term matrix
    vocabulary = filter_vocabulary(frequencies, config.vocabulary_threshold)
    dtm = build_document_term_matrix(
        term_counts, vocabulary, config.vocabulary_threshold
    )

    # Step 5: Topic model
    modeler = modeler or LDATopicModeler(config.lda)
    fitted = modeler.fit(dtm)
    beta = fitted.extract_beta()
    gamma = fitted.extract_gamma()
    classifications = classify_documents(
        gamma, config.gamma_threshold, config.max_topics_per_document
    )
    review_topics = join_text(classifications, docs)

    logger.info("TidyLDA Pipeline Complete!")
    return TopicModelResult(
        config=config,
        documents=docs,
        term_counts=term_counts,
        word_frequencies=frequencies,
        bigram_frequencies=bigrams,
        vocabulary=vocabulary,
        dtm=dtm,
        beta=beta,
        gamma=gamma,
        classifications=classifications,
        review_topics=review_topics,
        topics=summarize_topics(beta, config.top_n),
        metrics=fitted.metrics(),
    )


def chart_tables(
    result: TopicModelResult, topic_id: int = 1
) -> tuple[pl.DataFrame, pl.DataFrame, pl.DataFrame]:
    """Top words, top bigrams and top terms of ``topic_id``, ``top_n`` rows each."""
    n = result.config.top_n
    return (
        top_frequencies(result.vocabulary, "total_count", n),
        top_frequencies(result.bigram_frequencies, "count", n),
        top_terms(result.beta, topic_id, n),
    )


def export_tables(result: TopicModelResult, out_dir: str | Path) -> list[Path]:
    """Write the report tables as CSV files under ``out_dir``."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    tables = {
        "word_frequency.csv": result.vocabulary,
        "bigram_frequency.csv": result.bigram_frequencies,
        "topic_terms.csv": result.beta.sort(
            ["topic_id", "probability"], descending=[False, True]
        ),
        "review_topics.csv": result.review_topics,
    }
    written = []
    for name, frame in tables.items():
        path = out_dir / name
        frame.write_csv(path)
        written.append(path)
        logger.info(f"Wrote {frame.height} rows to {path}")
    return written
