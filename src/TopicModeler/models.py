import json
import typing as t
from datetime import UTC, datetime
from pathlib import Path

import polars as pl
import pydantic
from scipy import sparse


class TermProbability(pydantic.BaseModel):
    term: str
    probability: float


class Topic(pydantic.BaseModel):
    id: int
    "The 1-based topic identifier"
    top_terms: list[str] = pydantic.Field(default_factory=list)
    term_probabilities: list[TermProbability] = pydantic.Field(default_factory=list)


class DocumentTermMatrix(t.NamedTuple):
    """Sparse counts with documents as rows and vocabulary terms as columns."""

    matrix: sparse.csr_matrix
    document_ids: list[str]
    terms: list[str]

    @property
    def shape(self) -> tuple[int, int]:
        return self.matrix.shape  # type: ignore[return-value]


# -----------------------------
# Configuration
# -----------------------------


class TopicModelConfig(pydantic.BaseModel):
    algorithm: str  # e.g. "LDA"
    num_topics: int = pydantic.Field(default=20, ge=1)


class LDAConfig(TopicModelConfig):
    algorithm: str = "LDA"
    method: t.Literal["batch", "online"] = "batch"
    seed: int = 1234
    max_iter: int = pydantic.Field(default=50, ge=1)
    doc_topic_prior: float | None = pydantic.Field(default=None, gt=0)
    topic_word_prior: float | None = pydantic.Field(default=None, gt=0)


class PipelineConfig(pydantic.BaseModel):
    """Every knob of the review pipeline.

    ``gamma_threshold`` has no default: workflows built on this pipeline have
    used both 0.05 and 0.3, so callers must choose one explicitly.
    """

    gamma_threshold: float = pydantic.Field(ge=0.0, lt=1.0)
    vocabulary_threshold: int = pydantic.Field(default=20, ge=0)
    top_n: int = pydantic.Field(default=10, ge=1)
    max_topics_per_document: int = pydantic.Field(default=5, ge=1)
    lda: LDAConfig = pydantic.Field(default_factory=LDAConfig)

    @staticmethod
    def read_settings(path: str | Path) -> dict[str, t.Any]:
        """Raw settings from a JSON file, not yet validated."""
        with open(path, "r", encoding="utf-8") as f:
            settings = json.load(f)
        if not isinstance(settings, dict):
            raise ValueError(f"{path} must contain a JSON object of settings")
        return settings

    @classmethod
    def from_file(cls, path: str | Path) -> "PipelineConfig":
        return cls.model_validate(cls.read_settings(path))


# -----------------------------
# Pipeline Run / Results
# -----------------------------


class TopicModelResult(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(arbitrary_types_allowed=True)

    config: PipelineConfig
    documents: pl.DataFrame
    term_counts: pl.DataFrame
    word_frequencies: pl.DataFrame
    bigram_frequencies: pl.DataFrame
    vocabulary: pl.DataFrame
    dtm: DocumentTermMatrix
    beta: pl.DataFrame
    gamma: pl.DataFrame
    classifications: pl.DataFrame
    review_topics: pl.DataFrame
    topics: list[Topic]
    metrics: dict[str, float] = pydantic.Field(default_factory=dict)
    created_at: datetime = pydantic.Field(default_factory=lambda: datetime.now(UTC))
