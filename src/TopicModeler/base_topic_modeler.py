from abc import ABC, abstractmethod

import polars as pl

from TopicModeler.models import DocumentTermMatrix, TopicModelConfig

BETA_SCHEMA = {"topic_id": pl.Int64, "term": pl.Utf8, "probability": pl.Float64}
GAMMA_SCHEMA = {"document_id": pl.Utf8, "topic_id": pl.Int64, "probability": pl.Float64}


class FittedTopicModel(ABC):
    """A fitted model reduced to flat probability tables.

    Whatever the engine keeps internally, callers only see ``BETA_SCHEMA`` and
    ``GAMMA_SCHEMA`` frames with 1-based topic ids.
    """

    @abstractmethod
    def extract_beta(self) -> pl.DataFrame:
        """Term-given-topic probabilities, one row per nonzero (topic, term)."""

    @abstractmethod
    def extract_gamma(self) -> pl.DataFrame:
        """Topic-given-document probabilities, one row per (document, topic)."""

    def metrics(self) -> dict[str, float]:
        return {}


class BaseTopicModeler(ABC):
    def __init__(self, model_config: TopicModelConfig):
        self._config = model_config

    @property
    def config(self) -> TopicModelConfig:
        return self._config

    @abstractmethod
    def fit(self, dtm: DocumentTermMatrix) -> FittedTopicModel:
        pass
