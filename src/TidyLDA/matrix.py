import numpy as np
import polars as pl
from scipy import sparse

from TidyLDA.errors import EmptyVocabularyError
from TidyLDA.logging_config import get_logger
from TopicModeler.models import DocumentTermMatrix

logger = get_logger(__name__)


def restrict_to_vocabulary(
    term_counts: pl.DataFrame, vocabulary: pl.DataFrame
) -> pl.DataFrame:
    """Inner-join term counts to the vocabulary, keeping the count order."""
    return (
        term_counts.with_row_index("_row")
        .join(vocabulary.select("term"), on="term", how="inner")
        .sort("_row")
        .drop("_row")
    )


def build_document_term_matrix(
    term_counts: pl.DataFrame, vocabulary: pl.DataFrame, threshold: int
) -> DocumentTermMatrix:
    """
    Build the sparse document-term count matrix.

    Rows are the documents that keep at least one vocabulary term, in
    first-seen order; columns follow the vocabulary order.

    Args:
        term_counts: Per-document term counts
        vocabulary: Filtered vocabulary (terms with total count > threshold)
        threshold: The threshold used to build ``vocabulary``, for error reporting

    Raises:
        EmptyVocabularyError: If no term survived the frequency filter
    """
    if vocabulary.height == 0:
        raise EmptyVocabularyError(threshold)

    counts = restrict_to_vocabulary(term_counts, vocabulary)
    document_ids = counts["document_id"].unique(maintain_order=True).to_list()
    terms = vocabulary["term"].to_list()

    row_index = pl.DataFrame(
        {"document_id": document_ids}, schema={"document_id": pl.Utf8}
    ).with_row_index("row")
    col_index = pl.DataFrame({"term": terms}, schema={"term": pl.Utf8}).with_row_index(
        "col"
    )
    cells = counts.join(row_index, on="document_id").join(col_index, on="term")

    matrix = sparse.coo_matrix(
        (
            cells["count"].to_numpy().astype(np.int64),
            (cells["row"].to_numpy(), cells["col"].to_numpy()),
        ),
        shape=(len(document_ids), len(terms)),
    ).tocsr()

    logger.info(
        f"Document-term matrix: {matrix.shape[0]} documents x {matrix.shape[1]} terms, "
        f"{matrix.nnz} nonzero cells"
    )
    return DocumentTermMatrix(matrix=matrix, document_ids=document_ids, terms=terms)
