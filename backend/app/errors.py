"""Error types raised by the analysis pipeline."""


class AnalysisError(Exception):
    """Base class; `message` is what the caller sees."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AnalysisError):
    """Required input is missing (client fault)."""


class FetchError(AnalysisError):
    """Page content could not be retrieved."""


class ExtractionError(AnalysisError):
    """Model call failed or its output did not match the listing schema."""
