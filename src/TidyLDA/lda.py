import typing as t

import numpy as np
import polars as pl
from sklearn.decomposition import LatentDirichletAllocation

from TidyLDA.errors import TopicModelFitError
from TidyLDA.logging_config import get_logger
from TopicModeler.base_topic_modeler import (
    BETA_SCHEMA,
    GAMMA_SCHEMA,
    BaseTopicModeler,
    FittedTopicModel,
)
from TopicModeler.models import DocumentTermMatrix, LDAConfig

logger = get_logger(__name__)


def _normalize_rows(weights: np.ndarray) -> np.ndarray:
    totals = weights.sum(axis=1, keepdims=True)
    totals[totals == 0] = 1.0
    return weights / totals


class FittedLDAModel(FittedTopicModel):
    """A fitted scikit-learn LDA estimator together with the matrix it saw."""

    def __init__(
        self,
        estimator: LatentDirichletAllocation,
        dtm: DocumentTermMatrix,
        doc_topic: np.ndarray,
    ):
        self.estimator = estimator
        self.dtm = dtm
        self._doc_topic = _normalize_rows(doc_topic)

    @property
    def num_topics(self) -> int:
        return self.estimator.n_components

    def extract_beta(self) -> pl.DataFrame:
        topic_term = _normalize_rows(self.estimator.components_)
        k, n_terms = topic_term.shape
        beta = pl.DataFrame(
            {
                "topic_id": np.repeat(np.arange(1, k + 1), n_terms),
                "term": self.dtm.terms * k,
                "probability": topic_term.ravel(),
            },
            schema=BETA_SCHEMA,
        )
        return beta.filter(pl.col("probability") > 0)

    def extract_gamma(self) -> pl.DataFrame:
        n_docs, k = self._doc_topic.shape
        return pl.DataFrame(
            {
                "document_id": [d for d in self.dtm.document_ids for _ in range(k)],
                "topic_id": np.tile(np.arange(1, k + 1), n_docs),
                "probability": self._doc_topic.ravel(),
            },
            schema=GAMMA_SCHEMA,
        )

    def metrics(self) -> dict[str, float]:
        return {
            "log_likelihood": float(self.estimator.score(self.dtm.matrix)),
            "perplexity": float(self.estimator.perplexity(self.dtm.matrix)),
        }


class LDATopicModeler(BaseTopicModeler):
    """Fits scikit-learn's variational LDA on a document-term matrix."""

    def __init__(self, model_config: LDAConfig | None = None):
        super().__init__(model_config or LDAConfig())

    @property
    def config(self) -> LDAConfig:
        return t.cast(LDAConfig, self._config)

    def build_estimator(self) -> LatentDirichletAllocation:
        cfg = self.config
        return LatentDirichletAllocation(
            n_components=cfg.num_topics,
            learning_method=cfg.method,
            max_iter=cfg.max_iter,
            doc_topic_prior=cfg.doc_topic_prior,
            topic_word_prior=cfg.topic_word_prior,
            random_state=cfg.seed,
        )

    def fit(self, dtm: DocumentTermMatrix) -> FittedLDAModel:
        cfg = self.config
        logger.info(
            f"Fitting LDA: k={cfg.num_topics}, method={cfg.method}, "
            f"seed={cfg.seed}, max_iter={cfg.max_iter} on {dtm.shape} matrix"
        )
        estimator = self.build_estimator()
        try:
            doc_topic = estimator.fit_transform(dtm.matrix)
        except Exception as e:
            raise TopicModelFitError(f"LDA fit failed: {e}") from e
        logger.info(f"LDA fit finished after {estimator.n_iter_} iterations")
        return FittedLDAModel(estimator, dtm, doc_topic)
