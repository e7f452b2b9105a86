"""Value models shared across placekit."""

from .batch import BatchError, BatchItemResult, BatchSummary
from .geo import GeoPoint

__all__ = ["BatchError", "BatchItemResult", "BatchSummary", "GeoPoint"]
