"""Import job models."""
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from customer_import_core.models import Customer

# Assumed upper bound on rows per file; the real count is unknown while streaming.
PROGRESS_ROW_ESTIMATE = 100_000
MAX_RUNNING_PERCENTAGE = 99.0


class ImportStatus(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not ImportStatus.PROCESSING


class ImportErrorRecord(BaseModel):
    """A row, batch or job level import error. ``row`` is -1 above row level."""

    row: int
    error: str
    field: str | None = None
    value: Any = None
    raw_data: dict[str, Any] | None = None


class ImportOptions(BaseModel):
    """Per-import tuning knobs."""

    batch_size: int = Field(default=1000, ge=1)
    # Accepted for compatibility; the pipeline always continues past row and batch errors.
    continue_on_error: bool = True
    max_errors: int = Field(default=10_000, ge=0)
    read_chunk_size: int = Field(default=1000, ge=1)
    delimiter: str = Field(default=",", min_length=1, max_length=1)


class CandidateRecord(BaseModel):
    """Outcome of transforming one raw row: a customer or its errors, never both."""

    customer: Customer | None = None
    errors: list[ImportErrorRecord] = Field(default_factory=list)

    @classmethod
    def valid(cls, customer: Customer) -> "CandidateRecord":
        return cls(customer=customer)

    @classmethod
    def invalid(cls, errors: list[ImportErrorRecord]) -> "CandidateRecord":
        if not errors:
            raise ValueError("an invalid record needs at least one error")
        return cls(errors=errors)

    @property
    def is_valid(self) -> bool:
        return self.customer is not None


class ImportJob(BaseModel):
    """Live progress record of one import.

    Only the coordinator task running the job mutates the counters; status
    transitions go through the registry.
    """

    id: str
    status: ImportStatus = ImportStatus.PROCESSING
    total_processed: int = 0
    successful: int = 0
    failed: int = 0
    current_batch: int = 0
    total_batches: int = 0
    percentage: float = 0.0
    errors: list[ImportErrorRecord] = Field(default_factory=list)
    start_time: datetime
    end_time: datetime | None = None
    duration_ms: int | None = None

    def record_processed(self, row_count: int) -> None:
        """Update the processed count and the capped progress estimate."""
        self.total_processed = row_count
        estimate = min(row_count / PROGRESS_ROW_ESTIMATE * 100, MAX_RUNNING_PERCENTAGE)
        self.percentage = max(self.percentage, estimate)

    def add_errors(self, errors: list[ImportErrorRecord]) -> None:
        self.errors.extend(errors)

    def finish(self, batches: int, now: datetime) -> None:
        """Settle batch counters and timing once the job stops running."""
        self.current_batch = batches
        self.total_batches = batches
        if self.status is ImportStatus.COMPLETED:
            self.percentage = 100.0
        self.end_time = now
        self.duration_ms = int((now - self.start_time).total_seconds() * 1000)

    def stats(self, now: datetime) -> dict[str, Any]:
        """Summary without the error list."""
        elapsed_ms = ((self.end_time or now) - self.start_time).total_seconds() * 1000
        remaining = None
        if self.status is ImportStatus.PROCESSING and self.percentage > 0:
            remaining = int(elapsed_ms * (100 - self.percentage) / self.percentage)
        return {
            "import_id": self.id,
            "status": self.status.value,
            "total_processed": self.total_processed,
            "successful": self.successful,
            "failed": self.failed,
            "current_batch": self.current_batch,
            "total_batches": self.total_batches,
            "percentage": self.percentage,
            "error_count": len(self.errors),
            "start_time": self.start_time.isoformat(),
            "duration_ms": self.duration_ms,
            "estimated_time_remaining_ms": remaining,
        }
