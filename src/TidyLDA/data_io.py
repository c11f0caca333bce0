import json
import typing as t
import zipfile
from pathlib import Path

import nltk
import polars as pl

from TidyLDA.errors import InvalidDocumentError, NoInputDocumentsError
from TidyLDA.logging_config import get_logger

logger = get_logger(__name__)

DOCUMENT_SCHEMA = {"document_id": pl.Utf8, "raw_text": pl.Utf8}


def load_documents(documents: t.Mapping[str, str]) -> pl.DataFrame:
    """
    Turn a mapping of document name to text into the document table.

    Args:
        documents: Mapping from unique document id to raw text, in corpus order

    Returns:
        DataFrame with columns ``document_id`` and ``raw_text``

    Raises:
        NoInputDocumentsError: If the mapping is empty
        InvalidDocumentError: If an id or text is not a string
    """
    if not documents:
        raise NoInputDocumentsError()

    for document_id, text in documents.items():
        if not isinstance(document_id, str):
            raise InvalidDocumentError(
                f"document id must be a string, got {type(document_id).__name__}"
            )
        if not isinstance(text, str):
            raise InvalidDocumentError(
                f"document {document_id!r} has non-string text ({type(text).__name__})"
            )

    logger.info(f"Loaded {len(documents)} documents")
    return pl.DataFrame(
        {"document_id": list(documents.keys()), "raw_text": list(documents.values())},
        schema=DOCUMENT_SCHEMA,
    )


def read_stop_words(file_path: str | Path) -> set[str]:
    """Read one stop word per line; blank lines and ``#`` comments are skipped."""
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"File {file_path} not found")

    with open(file_path, "r", encoding="utf-8") as f:
        words = {line.strip().lower() for line in f}
    return {w for w in words if w and not w.startswith("#")}


def nltk_stop_words(language: str = "english") -> set[str]:
    """Stop words from the NLTK corpus, downloaded on first use."""
    nltk.download("stopwords", quiet=True)
    from nltk.corpus import stopwords

    return set(stopwords.words(language))


class DataReader:
    """Reads named documents from disk into a name -> text mapping."""

    def __init__(self, data_dir: str | Path = "data"):
        """
        Initialize the DataReader with a data directory.

        Args:
            data_dir: Directory that relative file names are resolved against
        """
        self.data_dir = Path(data_dir)
        if not self.data_dir.exists():
            raise ValueError(f"Data directory {data_dir} does not exist")

    def _resolve(self, file_path: str | Path) -> Path:
        file_path = Path(file_path)
        if not file_path.is_absolute():
            file_path = self.data_dir / file_path
        if not file_path.exists():
            raise FileNotFoundError(f"File {file_path} not found")
        return file_path

    def read_txt_directory(self, pattern: str = "*.txt") -> dict[str, str]:
        """
        Read every matching file in the data directory as one document.

        Returns:
            Mapping of file stem to file contents, sorted by file name
        """
        documents = {}
        for txt_file in sorted(self.data_dir.glob(pattern)):
            with open(txt_file, "r", encoding="utf-8") as f:
                documents[txt_file.stem] = f.read()
        logger.info(f"Read {len(documents)} documents from {self.data_dir}")
        return documents

    def read_json(self, filename: str | Path) -> dict[str, str]:
        """Read a JSON object whose keys are document ids and values are texts."""
        file_path = self._resolve(filename)
        with open(file_path, "r", encoding="utf-8") as f:
            content = json.load(f)
        if not isinstance(content, dict):
            raise InvalidDocumentError(
                f"{file_path} must contain a JSON object of id -> text"
            )
        return content

    def read_csv(
        self,
        filename: str | Path,
        id_column: str = "document_id",
        text_column: str = "raw_text",
    ) -> dict[str, str]:
        """Read documents from two columns of a CSV file."""
        file_path = self._resolve(filename)
        df = pl.read_csv(file_path, columns=[id_column, text_column])
        if df[id_column].n_unique() != df.height:
            raise InvalidDocumentError(f"{file_path} has duplicate values in {id_column}")
        return dict(
            zip(
                df[id_column].cast(pl.Utf8).to_list(),
                df[text_column].fill_null("").to_list(),
            )
        )

    def read_zip(self, filename: str | Path, suffix: str = ".txt") -> dict[str, str]:
        """Read every ``suffix`` member of a zip archive as one document."""
        file_path = self._resolve(filename)
        documents = {}
        with zipfile.ZipFile(file_path) as archive:
            for member in sorted(archive.namelist()):
                if member.endswith("/") or not member.endswith(suffix):
                    continue
                document_id = Path(member).stem
                if document_id in documents:
                    raise InvalidDocumentError(
                        f"{file_path} has more than one member named {document_id}"
                    )
                documents[document_id] = archive.read(member).decode("utf-8")
        return documents

    def read(self, source: str | Path) -> dict[str, str]:
        """Dispatch on the source type: directory, .json, .csv or .zip."""
        source = Path(source)
        if not source.is_absolute():
            source = self.data_dir / source
        if source.is_dir():
            return DataReader(source).read_txt_directory()
        readers = {".json": self.read_json, ".csv": self.read_csv, ".zip": self.read_zip}
        reader = readers.get(source.suffix.lower())
        if reader is None:
            raise ValueError(f"Unsupported document source: {source}")
        return reader(source)
