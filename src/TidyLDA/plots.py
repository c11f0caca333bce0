from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import polars as pl  # noqa: E402

from TidyLDA.logging_config import get_logger  # noqa: E402

logger = get_logger(__name__)


def horizontal_bar_chart(
    frame: pl.DataFrame,
    label_column: str,
    value_column: str,
    title: str,
    color: str,
    out_path: str | Path,
) -> Path:
    """Save a horizontal bar chart with the largest value on top."""
    out_path = Path(out_path)
    ordered = frame.sort(value_column, maintain_order=True)

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.barh(ordered[label_column].to_list(), ordered[value_column].to_list(), color=color)
    ax.set_title(title)
    ax.set_xlabel(value_column)
    fig.tight_layout()
    fig.savefig(out_path)
    plt.close(fig)

    logger.info(f"Saved chart {out_path}")
    return out_path


def topic_term_chart(
    terms: pl.DataFrame, topic_id: int, out_path: str | Path
) -> Path:
    """Vertical bar chart of one topic's most probable terms."""
    out_path = Path(out_path)

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.bar(terms["term"].to_list(), terms["probability"].to_list(), color="blue")
    ax.set_title(f"Topic {topic_id}")
    ax.set_ylabel("beta")
    ax.tick_params(axis="x", labelrotation=30, labelsize=15)
    fig.tight_layout()
    fig.savefig(out_path)
    plt.close(fig)

    logger.info(f"Saved chart {out_path}")
    return out_path


def save_charts(
    top_words: pl.DataFrame,
    top_bigrams: pl.DataFrame,
    topic_terms: pl.DataFrame,
    topic_id: int,
    out_dir: str | Path,
) -> list[Path]:
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    return [
        horizontal_bar_chart(
            top_words,
            "term",
            "total_count",
            "Word Frequency in Movie Reviews",
            "red",
            out_dir / "word_frequency.png",
        ),
        horizontal_bar_chart(
            top_bigrams,
            "bigram",
            "count",
            "Bi-gram Frequency in Movie Reviews",
            "darkgreen",
            out_dir / "bigram_frequency.png",
        ),
        topic_term_chart(topic_terms, topic_id, out_dir / f"topic_{topic_id}_terms.png"),
    ]
