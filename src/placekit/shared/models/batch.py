"""Batch processing result models.

Each processed record yields a ``BatchItemResult`` which is either a success
carrying the operation's return value or a failure carrying the error message.
Results are folded into a ``BatchSummary``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class BatchError:
    """A record whose operation raised.

    Attributes:
        item: The record that failed
        error: The error message
        error_type: Class name of the raised exception
    """

    item: Any
    error: str
    error_type: str = "Exception"


@dataclass(frozen=True)
class BatchItemResult:
    """Outcome of applying an operation to one record."""

    identity: Any
    success: bool
    value: Any = None
    error: BatchError | None = None

    @classmethod
    def ok(cls, identity: Any, value: Any) -> BatchItemResult:
        return cls(identity=identity, success=bool(value), value=value)

    @classmethod
    def failed(cls, identity: Any, item: Any, exc: Exception) -> BatchItemResult:
        return cls(
            identity=identity,
            success=False,
            error=BatchError(item=item, error=str(exc), error_type=type(exc).__name__),
        )

    @property
    def is_error(self) -> bool:
        return self.error is not None


@dataclass
class BatchSummary:
    """Aggregate of a batch job.

    Attributes:
        total: Number of records in the collection
        processed: Number of records the operation was applied to
        successful: Number of records whose operation returned a truthy value
        errors: One entry per record whose operation raised
    """

    total: int = 0
    processed: int = 0
    successful: int = 0
    errors: list[BatchError] = field(default_factory=list)

    def add(self, result: BatchItemResult) -> None:
        self.processed += 1
        if result.error is not None:
            self.errors.append(result.error)
        elif result.success:
            self.successful += 1

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "processed": self.processed,
            "successful": self.successful,
            "errors": [{"item": e.item, "error": e.error} for e in self.errors],
        }
