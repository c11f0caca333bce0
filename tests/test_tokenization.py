import warnings

import polars as pl

from TidyLDA.data_io import load_documents
from TidyLDA.preprocessing import normalize_documents
from TidyLDA.tokenization import bigram_frequencies, bigrams, count_terms, tokenize


def _tokens(documents: dict[str, str]) -> pl.DataFrame:
    return tokenize(normalize_documents(load_documents(documents)))


def _counts_for(counts: pl.DataFrame, document_id: str) -> dict[str, int]:
    rows = counts.filter(pl.col("document_id") == document_id)
    return dict(zip(rows["term"].to_list(), rows["count"].to_list()))


def test_tokenize_preserves_order():
    tokens = _tokens({"d": "The  movie,was great"})
    assert tokens["term"].to_list() == ["the", "movie", "was", "great"]
    assert set(tokens["document_id"]) == {"d"}


def test_unigram_counts_scenario(scenario_documents):
    counts = count_terms(_tokens(scenario_documents), {"the", "was", "and"})

    assert _counts_for(counts, "docA") == {"movie": 1, "great": 1, "funny": 1}
    assert _counts_for(counts, "docB") == {"movie": 1, "bad": 1, "boring": 1}
    assert counts.schema == {
        "document_id": pl.Utf8,
        "term": pl.Utf8,
        "count": pl.Int64,
    }


def test_counts_repeated_terms():
    counts = count_terms(_tokens({"d": "good good bad good"}), set())
    assert _counts_for(counts, "d") == {"good": 3, "bad": 1}


def test_empty_stop_word_set_keeps_everything(scenario_documents):
    counts = count_terms(_tokens(scenario_documents), set())
    assert counts["count"].sum() == 12


def test_bigrams_do_not_cross_documents():
    pairs = bigrams(_tokens({"a": "one two", "b": "three four"}))
    assert pairs["bigram"].to_list() == ["one two", "three four"]


def test_bigram_stop_words_filter_both_sides():
    tokens = _tokens({"d": "the movie was great"})

    assert bigrams(tokens)["bigram"].to_list() == [
        "the movie",
        "movie was",
        "was great",
    ]
    assert bigram_frequencies(tokens, {"the", "was"}).height == 0


def test_bigram_frequencies_sorted_by_count():
    tokens = _tokens(
        {
            "a": "special effects were special effects",
            "b": "great acting and special effects",
        }
    )
    freq = bigram_frequencies(tokens, {"and", "were"})

    assert freq.row(0) == ("special effects", 3)
    assert "effects were" not in freq["bigram"].to_list()
    assert freq["count"].to_list() == sorted(freq["count"].to_list(), reverse=True)


def test_short_and_empty_documents_produce_no_rows():
    tokens = _tokens({"one": "Wow", "none": "!!! 42"})

    assert bigrams(tokens).height == 0
    assert tokens.filter(pl.col("document_id") == "none").height == 0
    counts = count_terms(tokens, set())
    assert counts["document_id"].to_list() == ["one"]


def test_stop_word_filters_raise_no_deprecation_warnings(scenario_documents):
    tokens = _tokens(scenario_documents)
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        counts = count_terms(tokens, {"the", "was", "and"})
        freq = bigram_frequencies(tokens, {"the", "was", "and"})
        unfiltered = count_terms(tokens, set())

    assert counts.height == 6
    assert freq["bigram"].to_list() == []
    assert unfiltered.height == 12
