class AnalyzerError(Exception):
    """Base class for every recoverable analyzer failure."""


class IngestionError(AnalyzerError):
    pass


class EmptyWorkbookError(IngestionError):
    """No sheet of the workbook produced a single row after cleaning."""

    def __init__(self, file_name: str = ""):
        self.file_name = file_name
        super().__init__("No valid data found in the Excel file")


class WorkbookDecodeError(IngestionError):
    pass


class UnsupportedFileError(IngestionError):
    pass


class QueryEvaluationError(AnalyzerError):
    """Unexpected failure while computing an answer for a question."""
