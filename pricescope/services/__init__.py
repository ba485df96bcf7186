"""Service layer for fanning searches out to marketplace sites."""

from .collector import ResultCollector
from .comparison_service import ComparisonService, SiteWorker, normalize_price
from .outcomes import ResultSet, SiteFailure, SiteOutcome, SiteSuccess

__all__ = [
    "ComparisonService",
    "ResultCollector",
    "ResultSet",
    "SiteFailure",
    "SiteOutcome",
    "SiteSuccess",
    "SiteWorker",
    "normalize_price",
]
