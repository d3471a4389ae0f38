"""Exceptions raised by the import pipeline."""


class ImportPipelineError(Exception):
    """Base class for import pipeline errors."""


class ValidationError(ImportPipelineError, ValueError):
    """Raised when an import is requested with an unusable source or options."""


class SourceReadError(ImportPipelineError):
    """Raised when the record source cannot be opened or read."""


class ErrorCeilingExceeded(ImportPipelineError):
    """Raised when a job accumulates more errors than it is allowed to."""

    def __init__(self, error_count: int, max_errors: int):
        super().__init__(f"Too many validation errors ({error_count} > {max_errors})")
        self.error_count = error_count
        self.max_errors = max_errors


class BatchWriteError(ImportPipelineError):
    """Raised when a bulk insert fails as a whole."""

    def __init__(self, batch_number: int, batch_size: int, cause: BaseException):
        super().__init__(f"Batch {batch_number} failed: {cause}")
        self.batch_number = batch_number
        self.batch_size = batch_size
        self.cause = cause
