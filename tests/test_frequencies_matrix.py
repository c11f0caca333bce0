import polars as pl
import pytest

from TidyLDA.data_io import load_documents
from TidyLDA.errors import EmptyVocabularyError
from TidyLDA.frequencies import filter_vocabulary, top_frequencies, word_frequencies
from TidyLDA.matrix import build_document_term_matrix
from TidyLDA.preprocessing import normalize_documents
from TidyLDA.tokenization import count_terms, tokenize


def _term_counts(documents: dict[str, str], stop_words) -> pl.DataFrame:
    return count_terms(tokenize(normalize_documents(load_documents(documents))), stop_words)


def test_global_frequency_scenario(scenario_documents):
    freq = word_frequencies(_term_counts(scenario_documents, {"the", "was", "and"}))
    movie = freq.filter(pl.col("term") == "movie")

    assert movie["total_count"][0] == 2
    assert movie["document_count"][0] == 2
    assert freq["term"].to_list() == ["movie", "great", "funny", "bad", "boring"]


def test_total_count_sums_per_document_counts():
    counts = _term_counts({"a": "plot plot plot twist", "b": "plot twist"}, set())
    freq = word_frequencies(counts)

    assert dict(zip(freq["term"], freq["total_count"])) == {"plot": 4, "twist": 2}
    assert dict(zip(freq["term"], freq["document_count"])) == {"plot": 2, "twist": 2}


def test_filter_vocabulary_is_strict(review_corpus, stop_words):
    freq = word_frequencies(_term_counts(review_corpus, stop_words))
    threshold = 3
    vocabulary = filter_vocabulary(freq, threshold)
    kept = set(vocabulary["term"])

    for term, total in freq.select("term", "total_count").iter_rows():
        assert (term in kept) == (total > threshold)


def test_top_frequencies_breaks_ties_in_input_order():
    freq = pl.DataFrame(
        {"term": ["b", "a", "c", "d"], "total_count": [2, 5, 2, 2]}
    )
    top = top_frequencies(freq, "total_count", n=3)
    assert top["term"].to_list() == ["a", "b", "c"]


def test_matrix_only_holds_vocabulary_terms(review_corpus, stop_words):
    counts = _term_counts(review_corpus, stop_words)
    vocabulary = filter_vocabulary(word_frequencies(counts), 3)
    dtm = build_document_term_matrix(counts, vocabulary, 3)

    assert dtm.terms == vocabulary["term"].to_list()
    assert dtm.shape == (len(dtm.document_ids), len(dtm.terms))
    assert "empty_review" not in dtm.document_ids
    assert dtm.matrix.data.min() > 0

    expected = {
        (doc, term): n
        for doc, term, n in counts.filter(pl.col("term").is_in(dtm.terms)).iter_rows()
    }
    dense = dtm.matrix.toarray()
    for (doc, term), n in expected.items():
        assert dense[dtm.document_ids.index(doc), dtm.terms.index(term)] == n
    assert dtm.matrix.nnz == len(expected)


def test_matrix_column_totals_match_vocabulary(review_corpus, stop_words):
    counts = _term_counts(review_corpus, stop_words)
    vocabulary = filter_vocabulary(word_frequencies(counts), 2)
    dtm = build_document_term_matrix(counts, vocabulary, 2)

    column_totals = dtm.matrix.sum(axis=0).A1.tolist()
    assert column_totals == vocabulary["total_count"].to_list()


def test_empty_vocabulary_is_an_error(scenario_documents):
    counts = _term_counts(scenario_documents, {"the", "was", "and"})
    vocabulary = filter_vocabulary(word_frequencies(counts), 20)

    with pytest.raises(EmptyVocabularyError, match="empty vocabulary after filtering"):
        build_document_term_matrix(counts, vocabulary, 20)
