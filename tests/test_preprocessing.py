import re

import polars as pl
import pytest

from TidyLDA.data_io import load_documents
from TidyLDA.preprocessing import normalize_documents, normalize_text


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("The Movie!", "the movie "),
        ("", ""),
        ("1999: A+ film", " " * 6 + "a  film"),
        ("don't", "don t"),
        ("Café naïve", "caf  na ve"),
    ],
)
def test_normalize_text(raw, expected):
    assert normalize_text(raw) == expected


def test_normalize_text_keeps_length_and_alphabet():
    samples = ["İstanbul ß ǅ K", "tab\tand\nnewline", "ÀÉÎÕÜ 42", "😀 emoji"]
    for raw in samples:
        normalized = normalize_text(raw)
        assert len(normalized) == len(raw)
        assert re.fullmatch(r"[a-z ]*", normalized)


def test_normalize_documents_adds_column(scenario_documents):
    docs = normalize_documents(load_documents(scenario_documents))

    assert docs.columns == ["document_id", "raw_text", "normalized_text"]
    assert docs["raw_text"].to_list() == list(scenario_documents.values())
    assert docs.filter(pl.col("document_id") == "docA")["normalized_text"][0] == (
        "the movie was great and funny"
    )
