import polars as pl

from TidyLDA.logging_config import get_logger

logger = get_logger(__name__)

_ASCII_LOWER = frozenset("abcdefghijklmnopqrstuvwxyz")


def _fold(ch: str) -> str:
    lowered = ch.lower()
    return lowered if lowered in _ASCII_LOWER else " "


def normalize_text(text: str) -> str:
    """Lower-case ``text`` and turn every character outside [a-z] into a space.

    Characters are mapped one for one, so the result has the same length as
    the input.
    """
    return "".join(map(_fold, text))


def normalize_documents(documents: pl.DataFrame) -> pl.DataFrame:
    """Add a ``normalized_text`` column to the document table."""
    logger.info(f"Normalizing {documents.height} documents...")
    return documents.with_columns(
        pl.col("raw_text")
        .map_elements(normalize_text, return_dtype=pl.Utf8)
        .alias("normalized_text")
    )
