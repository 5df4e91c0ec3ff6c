"""Exception types raised by the pipeline stages."""


class PipelineError(Exception):
    """Base class for failures that stop the pipeline."""


class StorageError(PipelineError):
    """The SQLite store could not be opened or its tables created."""


class FatalIOError(PipelineError):
    """An input file could not be opened or parsed."""


class ReportError(PipelineError):
    """The report query failed or returned a row that could not be decoded."""


class RowSkipped(Exception):
    """A CSV row failed validation and is not inserted."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
