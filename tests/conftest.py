import logging

import pytest

from TopicModeler.models import LDAConfig, PipelineConfig

STOP_WORDS = {"the", "was", "and", "a", "of", "is", "it", "this", "to", "i"}


@pytest.fixture
def stop_words() -> set[str]:
    return set(STOP_WORDS)


@pytest.fixture
def scenario_documents() -> dict[str, str]:
    return {
        "docA": "The movie was great and funny",
        "docB": "The movie was bad and boring",
    }


@pytest.fixture
def review_corpus() -> dict[str, str]:
    """Small corpus with two obvious themes and one empty review."""
    comedy = [
        "A funny comedy, the jokes were hilarious and the cast was funny!",
        "Hilarious jokes; this comedy is funny. Great cast, great laughs.",
        "The laughs never stop: funny jokes, a hilarious cast, pure comedy.",
        "Funny, funny comedy. The cast delivers jokes and laughs.",
        "I laughed at every joke. Hilarious comedy with a funny cast.",
        "Comedy gold: jokes, laughs and a hilarious, funny script.",
    ]
    horror = [
        "A scary horror film, the monster was terrifying and dark.",
        "Terrifying monster, dark scenes: this horror is scary.",
        "The horror never stops: a scary monster in dark woods, terrifying.",
        "Scary, scary horror. The monster is dark and terrifying.",
        "I screamed at the monster. Terrifying horror with scary scenes.",
        "Horror classic: a dark, scary, terrifying monster movie.",
    ]
    corpus = {f"comedy_{i}": text for i, text in enumerate(comedy)}
    corpus.update({f"horror_{i}": text for i, text in enumerate(horror)})
    corpus["empty_review"] = "1234 !!! ..."
    return corpus


@pytest.fixture
def pipeline_config() -> PipelineConfig:
    return PipelineConfig(
        gamma_threshold=0.05,
        vocabulary_threshold=2,
        top_n=5,
        max_topics_per_document=2,
        lda=LDAConfig(num_topics=3, max_iter=20, seed=1234),
    )


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo any ``setup_logging`` call made by a test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
