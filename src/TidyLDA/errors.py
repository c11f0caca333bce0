"""Exceptions raised by the TidyLDA pipeline."""


class TidyLDAError(ValueError):
    pass


class NoInputDocumentsError(TidyLDAError):
    def __init__(self, message: str = "no input documents"):
        super().__init__(message)


class InvalidDocumentError(TidyLDAError):
    pass


class EmptyVocabularyError(TidyLDAError):
    def __init__(self, threshold: int):
        self.threshold = threshold
        super().__init__(
            f"empty vocabulary after filtering (no term has total count > {threshold})"
        )


class TopicModelFitError(TidyLDAError):
    """The external topic-model engine failed while fitting."""
